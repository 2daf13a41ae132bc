"""Validation pipeline and the structural error collector.

Two phases, deliberately asymmetric:

1. Custom validators run in registration order. The first failure stops
   the pipeline; later validators and the structural check never run.
2. The draft's structural validator (``check()``) runs only when every
   custom validator passed. It collects *every* independent issue and
   returns them as one error.

Nested entities are validated by recursion: the child's flattened message
is folded into the parent's issue list and the child error is kept as a
structured cause.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from datetime import date
from typing import Any

from builderkit.core.errors import (
    CustomValidationError,
    NestedValidationError,
    StructuralValidationError,
)
from builderkit.core.result import BuildResult

logger = logging.getLogger(__name__)

type ValidatorOutcome = str | BaseException | bool | None
type Validator[T] = Callable[[T], ValidatorOutcome]

DATE_FORMAT_HINT = "YYYY-MM-DD"
_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def run_pipeline[T](draft: T, validators: Sequence[Validator[T]]) -> BuildResult[T]:
    """Validate *draft* with *validators*, then with its own structural check.

    Returns:
        A :class:`BuildResult` that always carries *draft*, plus either
        None, the first :class:`CustomValidationError`, or the aggregated
        :class:`StructuralValidationError`.
    """
    for index, validator in enumerate(validators):
        reason = failure_reason(validator(draft))
        if reason is None:
            continue
        name = getattr(validator, "__name__", None)
        logger.debug(
            "Custom validator %s rejected %s: %s",
            name or f"#{index}",
            type(draft).__name__,
            reason,
        )
        error = CustomValidationError(reason, index=index, validator=name)
        return BuildResult(draft, error)

    structural = structural_check(draft)
    if structural is not None:
        logger.debug(
            "Structural validation failed for %s with %d issue(s)",
            structural.entity,
            len(structural.issues),
        )
    return BuildResult(draft, structural)


def failure_reason(outcome: ValidatorOutcome) -> str | None:
    """Normalize a validator's return value to a failure message.

    ``None`` and ``True`` pass. A string or exception instance fails with
    its text; ``False`` fails with a generic message. A blank string or an
    exception without text still fails, but with a generic message so the
    error never reads as empty.
    """
    if outcome is None or outcome is True:
        return None
    if outcome is False:
        return "validator returned False"
    if isinstance(outcome, (str, BaseException)):
        text = str(outcome)
        return text if text.strip() else "validator failed without a message"
    msg = f"Validator returned unsupported value {outcome!r}"
    raise TypeError(msg)


def is_number(value: Any) -> bool:
    """True for ints and floats. ``bool`` is excluded even though it subclasses int."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def structural_check(draft: Any) -> StructuralValidationError | None:
    """Run the draft's intrinsic validator, if it has one."""
    check = getattr(draft, "check", None)
    if not callable(check):
        return None
    return check()


# ---------------------------------------------------------------------------
# Structural error collector
# ---------------------------------------------------------------------------


class ErrorCollector:
    """Accumulates field-level issues for one entity.

    Each helper records an issue and keeps going, so a single pass over an
    entity reports everything that is wrong with it. Labels are the
    user-facing field names used in messages (``"MaturityDate"``).
    """

    def __init__(self, entity: str) -> None:
        self.entity = entity
        self._issues: list[str] = []
        self._causes: list[tuple[str, StructuralValidationError]] = []

    @property
    def issues(self) -> list[str]:
        return list(self._issues)

    @property
    def ok(self) -> bool:
        return not self._issues

    def add(self, message: str) -> None:
        self._issues.append(message)

    def require(self, label: str, value: Any, *, message: str = "cannot be empty") -> bool:
        """Record an issue when *value* is missing. Returns True if present."""
        if value is None or (isinstance(value, str) and not value.strip()):
            self.add(f"{label} {message}")
            return False
        if isinstance(value, (list, dict, set, tuple)) and not value:
            self.add(f"{label} {message}")
            return False
        return True

    # Drafts are never validated on assignment, so every helper below may
    # see a value of the wrong type and must report it instead of raising.

    def number(self, label: str, value: Any) -> bool:
        """Record an issue unless *value* is an int or float (bools excluded)."""
        if is_number(value):
            return True
        self.add(f"{label} must be a number")
        return False

    def in_range(self, label: str, value: float | None, low: float, high: float) -> None:
        if value is None or not self.number(label, value):
            return
        if value < low or value > high:
            self.add(f"{label} must be between {low} and {high}")

    def positive(self, label: str, value: float | None) -> None:
        if value is None:
            self.add(f"{label} must be greater than 0")
        elif self.number(label, value) and value <= 0:
            self.add(f"{label} must be greater than 0")

    def non_negative(self, label: str, value: float | None) -> None:
        if value is None or not self.number(label, value):
            return
        if value < 0:
            self.add(f"{label} cannot be negative")

    def at_most(self, label: str, value: float | None, high: float) -> None:
        if value is None or not self.number(label, value):
            return
        if value > high:
            self.add(f"{label} cannot be greater than {high}")

    def text_length(
        self,
        label: str,
        value: str | None,
        *,
        minimum: int = 0,
        maximum: int | None = None,
    ) -> None:
        """Check the length of an optional text value; the minimum ignores padding."""
        if value is None:
            return
        if not isinstance(value, str):
            self.add(f"{label} must be text")
            return
        if len(value.strip()) < minimum:
            self.add(f"{label} must be at least {minimum} characters long")
        elif maximum is not None and len(value) > maximum:
            self.add(f"{label} cannot exceed {maximum} characters")

    def one_of(
        self,
        label: str,
        value: str | None,
        choices: Iterable[str],
        *,
        optional: bool = False,
        case_sensitive: bool = True,
    ) -> None:
        """Record an issue unless *value* is one of *choices*.

        With *optional*, an empty value is accepted.
        """
        allowed = list(choices)
        if not value:
            if not optional:
                self.add(f"{label} must be one of: {', '.join(allowed)}")
            return
        if not isinstance(value, str):
            found = False
        elif case_sensitive:
            found = value in allowed
        else:
            found = value.lower() in {c.lower() for c in allowed}
        if not found:
            self.add(f"{label} must be one of: {', '.join(allowed)}")

    def matches(
        self,
        label: str,
        value: str | None,
        pattern: re.Pattern[str],
        *,
        message: str = "format is invalid",
    ) -> None:
        """Record an issue when a non-empty *value* does not match *pattern*."""
        if not value:
            return
        if not isinstance(value, str) or not pattern.fullmatch(value):
            self.add(f"{label} {message}")

    def iso_date(self, label: str, value: str | None) -> date | None:
        """Parse an optional ISO calendar date string, recording a format issue.

        Only ``YYYY-MM-DD`` text is accepted; ``date`` objects are not.
        """
        if value is None or value == "":
            return None
        if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
            self.add(f"{label} must be in the format {DATE_FORMAT_HINT}")
            return None
        try:
            return date.fromisoformat(value)
        except ValueError:
            self.add(f"{label} must be in the format {DATE_FORMAT_HINT}")
            return None

    def not_before(
        self,
        later_label: str,
        later: date | None,
        earlier_label: str,
        earlier: date | None,
    ) -> None:
        """Record an ordering issue when *later* precedes *earlier*."""
        if later is None or earlier is None:
            return
        if later < earlier:
            self.add(f"{later_label} cannot be before {earlier_label}")

    def nested(self, label: str, child: Any) -> None:
        """Recurse into a nested entity and fold its failure into this one."""
        if child is None:
            return
        error = structural_check(child)
        if error is None:
            return
        self.add(f"{label} validation failed: {error.message}")
        self._causes.append((label, error))

    def each_nested(self, label: str, children: Iterable[Any] | None) -> None:
        for index, child in enumerate(children or ()):
            self.nested(f"{label}[{index}]", child)

    def variant(self, label: str, value: Any, allowed: Sequence[type]) -> None:
        """Check a tagged-union field holds an allowed variant, then recurse."""
        if value is None:
            return
        if not isinstance(value, tuple(allowed)):
            names = ", ".join(t.__name__ for t in allowed)
            self.add(f"{label} must be one of: {names}; got {type(value).__name__}")
            return
        self.nested(label, value)

    def error(self) -> StructuralValidationError | None:
        """Return the aggregated error, or None if nothing was recorded."""
        if not self._issues:
            return None
        if self._causes:
            return NestedValidationError(self.entity, self._issues, self._causes)
        return StructuralValidationError(self.entity, self._issues)
