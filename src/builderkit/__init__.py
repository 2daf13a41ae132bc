"""builderkit: fluent builders with layered validation for pydantic entities."""

from builderkit.bootstrap import initialize
from builderkit.core import (
    BuildAbortedError,
    Builder,
    BuilderError,
    BuilderRegistry,
    BuildResult,
    CopyPolicy,
    Entity,
    ErrorCollector,
    RegistryLookupError,
    ValidationError,
    append,
    create_builder,
    default_registry,
    derive_builder,
    mapping,
    nested,
    nested_many,
    scalar,
    variant,
)

__version__ = "0.1.0"

__all__ = [
    "BuildAbortedError",
    "BuildResult",
    "Builder",
    "BuilderError",
    "BuilderRegistry",
    "CopyPolicy",
    "Entity",
    "ErrorCollector",
    "RegistryLookupError",
    "ValidationError",
    "__version__",
    "append",
    "create_builder",
    "default_registry",
    "derive_builder",
    "initialize",
    "mapping",
    "nested",
    "nested_many",
    "scalar",
    "variant",
]
