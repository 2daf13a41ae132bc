"""Shared pytest fixtures and test helpers for builderkit tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from builderkit.builders import (
    AddressBuilder,
    BondBuilder,
    PersonBuilder,
    register_builtin_builders,
)
from builderkit.config.settings import reset_settings
from builderkit.core.registry import BuilderRegistry, set_default_registry


@pytest.fixture(autouse=True)
def _isolated_process_state(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Keep settings and the default registry from leaking between tests.

    CWD moves to an empty temp dir so config discovery never finds the
    repository's own pyproject.toml.
    """
    for name in (
        "BUILDERKIT_CONFIG",
        "BUILDERKIT_REGISTRY__INCLUDE_BUILTINS",
        "BUILDERKIT_REGISTRY__LOAD_PLUGINS",
        "BUILDERKIT_REGISTRY__ENTRY_POINT_GROUP",
        "BUILDERKIT_LOGGING__VERBOSE",
        "BUILDERKIT_LOGGING__LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    reset_settings()
    previous = set_default_registry(None)
    yield
    set_default_registry(previous)
    reset_settings()


@pytest.fixture
def registry() -> BuilderRegistry:
    """A private registry holding only the built-in builders."""
    reg = BuilderRegistry()
    register_builtin_builders(reg)
    return reg


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def valid_address() -> AddressBuilder:
    """Address builder that passes structural validation."""
    return (
        AddressBuilder.with_defaults()
        .with_street("1 Main St")
        .with_city("Springfield")
        .with_postal_code("12345")
        .with_country("US")
    )


def valid_bond() -> BondBuilder:
    """Bond builder that passes structural validation."""
    return (
        BondBuilder.with_defaults()
        .with_id("B-1")
        .with_isin("US0378331005")
        .with_name("Apple 2030")
        .with_issuer("Apple Inc.")
        .with_face_value(1000.0)
        .with_coupon_rate(0.035)
        .with_purchase_date("2024-01-15")
        .with_maturity_date("2030-01-15")
        .with_purchase_price(980.0)
        .with_current_price(1001.5)
    )


def valid_person() -> PersonBuilder:
    """Person builder that passes structural validation."""
    return (
        PersonBuilder()
        .with_id("P-1")
        .with_name("Ada Lovelace")
        .with_age(36)
        .with_email("ada@example.com")
        .with_created_at("2024-01-01")
        .with_updated_at("2024-02-01")
    )
