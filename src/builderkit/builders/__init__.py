"""Built-in builders for the sample domain and their registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from builderkit.builders.catalog import (
    BUILTIN_BUILDERS,
    AddressBuilder,
    BondBuilder,
    BusinessProfileBuilder,
    GeoLocationBuilder,
    PersonalProfileBuilder,
    PersonBuilder,
    PortfolioBuilder,
)

if TYPE_CHECKING:
    from builderkit.core.registry import BuilderRegistry


def register_builtin_builders(registry: BuilderRegistry) -> None:
    """Register every built-in builder under its ``type_name``."""
    for builder_cls in BUILTIN_BUILDERS:
        registry.register_builder(builder_cls)


__all__ = [
    "BUILTIN_BUILDERS",
    "AddressBuilder",
    "BondBuilder",
    "BusinessProfileBuilder",
    "GeoLocationBuilder",
    "PersonBuilder",
    "PersonalProfileBuilder",
    "PortfolioBuilder",
    "register_builtin_builders",
]
