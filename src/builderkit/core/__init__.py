"""Construction-and-validation engine.

This layer depends only on stdlib and pydantic. Configuration, plugins and
the sample domain build on it; it never imports them at module load.
"""

from builderkit.core.builder import Builder
from builderkit.core.derive import derive_builder
from builderkit.core.entity import Entity
from builderkit.core.errors import (
    BuildAbortedError,
    BuilderError,
    ConfigError,
    CustomValidationError,
    NestedValidationError,
    RegistryLookupError,
    StructuralValidationError,
    ValidationError,
)
from builderkit.core.fields import (
    CopyPolicy,
    FieldSpec,
    MutatorKind,
    append,
    mapping,
    nested,
    nested_many,
    scalar,
    variant,
)
from builderkit.core.registry import (
    BuilderRegistry,
    create_builder,
    default_registry,
    set_default_registry,
)
from builderkit.core.result import BuildResult
from builderkit.core.validation import ErrorCollector, Validator, run_pipeline

__all__ = [
    "BuildAbortedError",
    "BuildResult",
    "Builder",
    "BuilderError",
    "BuilderRegistry",
    "ConfigError",
    "CopyPolicy",
    "CustomValidationError",
    "Entity",
    "ErrorCollector",
    "FieldSpec",
    "MutatorKind",
    "NestedValidationError",
    "RegistryLookupError",
    "StructuralValidationError",
    "ValidationError",
    "Validator",
    "append",
    "create_builder",
    "default_registry",
    "derive_builder",
    "mapping",
    "nested",
    "nested_many",
    "run_pipeline",
    "scalar",
    "set_default_registry",
    "variant",
]
