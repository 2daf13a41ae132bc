"""Entity: base class for drafts with an intrinsic structural validator.

Entities are mutable pydantic models. Every field carries a zero-value
default so a builder can start from ``Entity()``, and assignment is not
validated: a draft may be in any state until it is finalized.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from builderkit.core.errors import StructuralValidationError
from builderkit.core.validation import ErrorCollector


class Entity(BaseModel):
    """A record that can be assembled by a builder and validated as a whole.

    Subclasses declare fields with defaults and override
    :meth:`collect_errors` to record every structural issue.
    """

    model_config = ConfigDict(
        validate_assignment=False,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    def collect_errors(self, errors: ErrorCollector) -> None:
        """Record structural issues on *errors*. Base entities have none."""

    def check(self) -> StructuralValidationError | None:
        """Run the structural validator, aggregating every issue found."""
        errors = ErrorCollector(type(self).__name__)
        self.collect_errors(errors)
        return errors.error()
