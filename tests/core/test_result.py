"""Tests for BuildResult and the error taxonomy."""

from __future__ import annotations

import pytest

from builderkit.core.errors import (
    BuildAbortedError,
    BuilderError,
    ConfigError,
    CustomValidationError,
    StructuralValidationError,
    ValidationError,
)
from builderkit.core.result import BuildResult


class TestBuildResult:
    def test_ok(self) -> None:
        result = BuildResult("value")
        assert result.ok
        assert result.unwrap() == "value"

    def test_unpacks_as_pair(self) -> None:
        error = CustomValidationError("nope")
        value, err = BuildResult("value", error)
        assert value == "value"
        assert err is error

    def test_unwrap_aborts(self) -> None:
        error = StructuralValidationError("Thing", ["A cannot be empty"])
        result = BuildResult({"draft": True}, error)
        with pytest.raises(BuildAbortedError) as exc_info:
            result.unwrap()
        aborted = exc_info.value
        assert aborted.error is error
        assert aborted.value == {"draft": True}
        assert str(aborted) == "dict validation failed: A cannot be empty"

    def test_unwrap_callback_receives_error(self) -> None:
        error = CustomValidationError("nope")
        seen: list[ValidationError] = []
        with pytest.raises(BuildAbortedError):
            BuildResult(1, error).unwrap(seen.append)
        assert seen == [error]

    def test_callback_may_escalate(self) -> None:
        class Escalated(Exception):
            pass

        def escalate(err: ValidationError) -> None:
            raise Escalated(err.message)

        with pytest.raises(Escalated, match="custom validation failed: nope"):
            BuildResult(1, CustomValidationError("nope")).unwrap(escalate)

    def test_frozen(self) -> None:
        result = BuildResult(1)
        with pytest.raises(Exception):
            result.value = 2  # type: ignore[misc]


class TestErrors:
    def test_hierarchy(self) -> None:
        for cls in (ConfigError, ValidationError, BuildAbortedError):
            assert issubclass(cls, BuilderError)
        assert issubclass(CustomValidationError, ValidationError)
        assert issubclass(StructuralValidationError, ValidationError)

    def test_messages_are_str(self) -> None:
        assert str(CustomValidationError("x")) == "custom validation failed: x"
        assert str(StructuralValidationError("T", ["a", "b"])) == "validation failed: a; b"

    def test_abort_without_value_names_draft(self) -> None:
        aborted = BuildAbortedError(CustomValidationError("x"))
        assert str(aborted) == "draft custom validation failed: x"
