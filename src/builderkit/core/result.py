"""BuildResult: the value returned by the validating finalizer.

INVARIANT: The draft is always present, valid or not. Callers that want
to inspect a partially valid object can always get it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from builderkit.core.errors import BuildAbortedError, ValidationError


@dataclass(frozen=True)
class BuildResult[T]:
    """Outcome of running the validation pipeline over a draft.

    Attributes:
        value: The draft that was validated (the builder's own object).
        error: The first custom failure or the aggregated structural
            failure, or None when the draft is valid.

    Unpacks as a pair::

        bond, err = builder.extract_validated()
    """

    value: T
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self) -> Iterator[Any]:
        yield self.value
        yield self.error

    def unwrap(self, on_abort: Callable[[ValidationError], Any] | None = None) -> T:
        """Return the value, or abort if validation failed.

        *on_abort* is called with the error before :class:`BuildAbortedError`
        is raised, so hosts can record or escalate the failure. Control never
        returns normally with an invalid value.
        """
        if self.error is None:
            return self.value
        if on_abort is not None:
            on_abort(self.error)
        raise BuildAbortedError(self.error, self.value)
