"""Tests for Builder: generated mutators, drafts, and finalizers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest
from pydantic import Field

from builderkit.core.builder import Builder
from builderkit.core.entity import Entity
from builderkit.core.errors import BuildAbortedError, StructuralValidationError
from builderkit.core.fields import MutatorKind, append, mapping, scalar
from builderkit.core.validation import ErrorCollector


class Widget(Entity):
    name: str = ""
    size: int = 0
    parts: list[str] | None = Field(default_factory=list)
    labels: dict[str, str] | None = Field(default_factory=dict)

    def collect_errors(self, errors: ErrorCollector) -> None:
        errors.require("Name", self.name)
        errors.positive("Size", self.size)


class WidgetBuilder(Builder[Widget]):
    entity = Widget
    fields = (
        scalar("name"),
        scalar("size"),
        append("parts", method="with_part"),
        mapping("labels", method="with_label"),
    )

    def apply_defaults(self) -> None:
        self._draft.size = 1


@dataclass
class Point:
    x: int = 0
    y: int = 0
    tags: list[str] = field(default_factory=list)


class PointBuilder(Builder[Point]):
    entity = Point
    fields = (scalar("x"), scalar("y"), append("tags", method="with_tag"))


class TestMutators:
    def test_generated_methods_exist(self) -> None:
        for method in ("with_name", "with_size", "with_part", "with_label"):
            assert callable(getattr(WidgetBuilder, method))

    def test_mutators_return_same_builder(self) -> None:
        builder = WidgetBuilder()
        assert builder.with_name("gear") is builder
        assert builder.with_part("cog") is builder
        assert builder.with_label("color", "red") is builder

    def test_scalar_overwrites(self) -> None:
        widget = WidgetBuilder().with_name("a").with_name("b").extract()
        assert widget.name == "b"

    def test_append_preserves_order(self) -> None:
        widget = WidgetBuilder().with_part("x").with_part("y").with_part("z").extract()
        assert widget.parts == ["x", "y", "z"]

    def test_append_initializes_missing_list(self) -> None:
        builder = WidgetBuilder()
        builder.extract().parts = None
        builder.with_part("only")
        assert builder.extract().parts == ["only"]

    def test_mapping_inserts_and_overwrites(self) -> None:
        widget = (
            WidgetBuilder()
            .with_label("color", "red")
            .with_label("shape", "round")
            .with_label("color", "blue")
            .extract()
        )
        assert widget.labels == {"color": "blue", "shape": "round"}

    def test_mapping_initializes_missing_dict(self) -> None:
        builder = WidgetBuilder()
        builder.extract().labels = None
        builder.with_label("k", "v")
        assert builder.extract().labels == {"k": "v"}

    def test_mutators_accept_invalid_values(self) -> None:
        """Mutators never validate; bad values only surface at finalization."""
        builder = WidgetBuilder().with_size(-5).with_name("")
        assert builder.extract().size == -5

    def test_generated_method_metadata(self) -> None:
        assert WidgetBuilder.with_part.__name__ == "with_part"
        assert "parts" in (WidgetBuilder.with_part.__doc__ or "")

    def test_hand_written_mutator_wins(self) -> None:
        class ShoutingBuilder(Builder[Widget]):
            entity = Widget
            fields = (scalar("name"),)

            def with_name(self, value: str) -> ShoutingBuilder:
                self._draft.name = value.upper()
                return self

        assert ShoutingBuilder().with_name("quiet").extract().name == "QUIET"


class TestDeclarations:
    def test_declared_fields(self) -> None:
        declared = WidgetBuilder.declared_fields()
        assert set(declared) == {"name", "size", "parts", "labels"}
        assert declared["parts"].kind is MutatorKind.APPEND
        assert declared["parts"].method_name == "with_part"

    def test_declarations_are_inherited(self) -> None:
        class SizedWidgetBuilder(WidgetBuilder):
            fields = (scalar("size", method="sized"),)

        builder = SizedWidgetBuilder().with_name("gear").sized(3)
        assert builder.extract().size == 3
        assert set(SizedWidgetBuilder.declared_fields()) == {"name", "size", "parts", "labels"}
        assert set(WidgetBuilder.declared_fields()) == {"name", "size", "parts", "labels"}
        assert WidgetBuilder.declared_fields()["size"].method_name == "with_size"

    def test_type_name_defaults_to_entity_name(self) -> None:
        assert WidgetBuilder.type_name == "Widget"

    def test_explicit_type_name(self) -> None:
        class AliasBuilder(Builder[Widget]):
            entity = Widget
            type_name = "Gizmo"

        assert AliasBuilder.type_name == "Gizmo"

    def test_reserved_method_name_rejected(self) -> None:
        with pytest.raises(TypeError, match="reserved"):

            class BadBuilder(Builder[Widget]):
                entity = Widget
                fields = (scalar("name", method="extract"),)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(TypeError, match="no field 'colour'"):

            class BadBuilder(Builder[Widget]):
                entity = Widget
                fields = (scalar("colour"),)

    def test_fields_without_entity_rejected(self) -> None:
        with pytest.raises(TypeError, match="no entity type"):

            class BadBuilder(Builder[Any]):
                fields = (scalar("name"),)

    def test_new_draft_without_entity(self) -> None:
        with pytest.raises(TypeError, match="does not declare an entity"):
            Builder()


class TestDrafts:
    def test_starts_from_zero_values(self) -> None:
        widget = WidgetBuilder().extract()
        assert widget == Widget()

    def test_extract_returns_the_same_draft(self) -> None:
        builder = WidgetBuilder()
        first = builder.extract()
        builder.with_name("later")
        assert builder.extract() is first
        assert first.name == "later"

    def test_existing_draft(self) -> None:
        draft = Widget(name="seed", size=2)
        builder = WidgetBuilder(draft)
        assert builder.extract() is draft

    def test_with_defaults(self) -> None:
        assert WidgetBuilder.with_defaults().extract().size == 1
        assert WidgetBuilder().extract().size == 0

    def test_dataclass_drafts(self) -> None:
        point = PointBuilder().with_x(1).with_y(2).with_tag("origin").extract()
        assert point == Point(1, 2, ["origin"])

    def test_repr_names_builder(self) -> None:
        assert repr(PointBuilder()).startswith("PointBuilder(")


class TestFinalizers:
    def test_extract_validated_ok(self) -> None:
        builder = WidgetBuilder().with_name("gear").with_size(2)
        result = builder.extract_validated()
        assert result.ok
        assert result.value is builder.extract()

    def test_extract_validated_returns_draft_on_failure(self) -> None:
        builder = WidgetBuilder()
        widget, err = builder.extract_validated()
        assert widget is builder.extract()
        assert isinstance(err, StructuralValidationError)

    def test_draft_without_check_is_valid(self) -> None:
        assert PointBuilder().extract_validated().ok

    def test_extract_or_abort_returns_valid_value(self) -> None:
        widget = WidgetBuilder().with_name("gear").with_size(2).extract_or_abort()
        assert widget.name == "gear"

    def test_extract_or_abort_raises(self) -> None:
        with pytest.raises(BuildAbortedError) as exc_info:
            WidgetBuilder().extract_or_abort()
        assert str(exc_info.value) == (
            "Widget validation failed: Name cannot be empty; Size must be greater than 0"
        )

    def test_extract_or_abort_calls_callback_first(self) -> None:
        seen: list[str] = []
        with pytest.raises(BuildAbortedError):
            WidgetBuilder().extract_or_abort(lambda err: seen.append(err.message))
        assert seen == ["validation failed: Name cannot be empty; Size must be greater than 0"]
