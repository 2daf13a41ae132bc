"""Error taxonomy for builders, validation, and the type registry.

Validation failures are *data*: the validating finalizer returns them inside
a :class:`~builderkit.core.result.BuildResult`. Only strict extraction turns
them into a raised :class:`BuildAbortedError`.

Rendered messages are stable text so callers can match on them:

- custom:      ``custom validation failed: <reason>``
- structural:  ``validation failed: <issue>; <issue>; ...``
- nested:      ``<Field> validation failed: <child message>`` inside the parent
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

CUSTOM_PREFIX = "custom validation failed"
STRUCTURAL_PREFIX = "validation failed"
ISSUE_DELIMITER = "; "


class BuilderError(Exception):
    """Base class for every error raised or returned by builderkit."""


class ConfigError(BuilderError):
    """Configuration could not be loaded."""


class ValidationError(BuilderError):
    """Base class for validation failures returned by the pipeline."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class CustomValidationError(ValidationError):
    """A caller-supplied validator rejected the draft.

    Attributes:
        reason: The validator's message, verbatim.
        index: Position of the validator in registration order.
        validator: Name of the failing callable, when it has one.
    """

    def __init__(self, reason: str, *, index: int = 0, validator: str | None = None) -> None:
        super().__init__(f"{CUSTOM_PREFIX}: {reason}")
        self.reason = reason
        self.index = index
        self.validator = validator


class StructuralValidationError(ValidationError):
    """An entity's intrinsic validator found one or more field-level issues."""

    def __init__(self, entity: str, issues: Sequence[str]) -> None:
        self.entity = entity
        self.issues: tuple[str, ...] = tuple(issues)
        super().__init__(f"{STRUCTURAL_PREFIX}: {ISSUE_DELIMITER.join(self.issues)}")

    @property
    def causes(self) -> tuple[tuple[str, StructuralValidationError], ...]:
        return ()


class NestedValidationError(StructuralValidationError):
    """Structural error whose issues include failures of nested entities.

    The flattened message is identical to a plain structural error; the
    child errors stay reachable through :attr:`causes`.
    """

    def __init__(
        self,
        entity: str,
        issues: Sequence[str],
        causes: Sequence[tuple[str, StructuralValidationError]],
    ) -> None:
        super().__init__(entity, issues)
        self._causes = tuple(causes)

    @property
    def causes(self) -> tuple[tuple[str, StructuralValidationError], ...]:
        return self._causes

    def find(self, label: str) -> StructuralValidationError | None:
        """Return the child error recorded under *label*, if any."""
        for cause_label, child in self._causes:
            if cause_label == label:
                return child
        return None


class RegistryLookupError(BuilderError, KeyError):
    """No builder factory is registered under the requested type name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"no builder registered for type {self.name!r}"


class BuildAbortedError(BuilderError):
    """Strict extraction hit a validation failure.

    Raised by ``extract_or_abort``. Reaching this means the calling code
    assembled an object it believed valid, so it signals a programming
    error rather than bad input.
    """

    def __init__(self, error: ValidationError, value: Any = None) -> None:
        entity = type(value).__name__ if value is not None else "draft"
        super().__init__(f"{entity} {error.message}")
        self.error = error
        self.value = value
