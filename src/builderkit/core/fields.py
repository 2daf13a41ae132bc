"""Field declarations: the fluent mutator protocol and per-field copy policy.

A builder declares its fields once::

    class AddressBuilder(Builder[Address]):
        entity = Address
        fields = (
            scalar("street"),
            nested("coordinates"),
        )

and gets one chainable ``with_<name>`` method per declaration. Mutators
never validate and never raise for domain reasons; failures surface only
when the builder is finalized.

Each declaration also fixes how :meth:`Builder.clone` copies the field
(:class:`CopyPolicy`), so no field is aliased between a builder and its
clone unless it was declared ``SHARED``.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class MutatorKind(StrEnum):
    """Shape of the generated mutator."""

    SCALAR = "scalar"
    APPEND = "append"
    MAPPING = "mapping"
    NESTED = "nested"
    NESTED_MANY = "nested_many"
    VARIANT = "variant"


class CopyPolicy(StrEnum):
    """How a field is copied when a builder is cloned."""

    VALUE = "value"
    DEEP = "deep"
    SHARED = "shared"


_DEFAULT_POLICY: dict[MutatorKind, CopyPolicy] = {
    MutatorKind.SCALAR: CopyPolicy.VALUE,
    MutatorKind.APPEND: CopyPolicy.VALUE,
    MutatorKind.MAPPING: CopyPolicy.VALUE,
    MutatorKind.NESTED: CopyPolicy.DEEP,
    MutatorKind.NESTED_MANY: CopyPolicy.DEEP,
    MutatorKind.VARIANT: CopyPolicy.DEEP,
}


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of one draft field on a builder.

    Attributes:
        name: Attribute name on the draft.
        kind: Which mutator shape to generate.
        method: Mutator method name; defaults to ``with_<name>``.
        policy: Clone copy policy; defaults per *kind*.
        by_reference: For nested kinds, store the sub-builder's draft
            object itself instead of a deep copy.
        accepts: For variants, the entity types the field may hold.
    """

    name: str
    kind: MutatorKind
    method: str = ""
    policy: CopyPolicy | None = None
    by_reference: bool = False
    accepts: tuple[type, ...] = ()

    @property
    def method_name(self) -> str:
        return self.method or f"with_{self.name}"

    @property
    def copy_policy(self) -> CopyPolicy:
        return self.policy or _DEFAULT_POLICY[self.kind]

    @property
    def is_nested(self) -> bool:
        return self.kind in (MutatorKind.NESTED, MutatorKind.NESTED_MANY, MutatorKind.VARIANT)


# ---------------------------------------------------------------------------
# Declaration helpers
# ---------------------------------------------------------------------------


def scalar(name: str, *, method: str = "", policy: CopyPolicy | None = None) -> FieldSpec:
    """Overwrite the field unconditionally."""
    return FieldSpec(name, MutatorKind.SCALAR, method=method, policy=policy)


def append(name: str, *, method: str = "", policy: CopyPolicy | None = None) -> FieldSpec:
    """Append one element to a list field, creating the list if needed."""
    return FieldSpec(name, MutatorKind.APPEND, method=method, policy=policy)


def mapping(name: str, *, method: str = "", policy: CopyPolicy | None = None) -> FieldSpec:
    """Insert or overwrite one key of a dict field, creating the dict if needed."""
    return FieldSpec(name, MutatorKind.MAPPING, method=method, policy=policy)


def nested(
    name: str,
    *,
    by_reference: bool = False,
    method: str = "",
    policy: CopyPolicy | None = None,
) -> FieldSpec:
    """Embed a materialized sub-builder (or a literal entity) into the field."""
    return FieldSpec(
        name,
        MutatorKind.NESTED,
        method=method,
        policy=policy,
        by_reference=by_reference,
    )


def nested_many(
    name: str,
    *,
    by_reference: bool = False,
    method: str = "",
    policy: CopyPolicy | None = None,
) -> FieldSpec:
    """Append a materialized sub-builder (or a literal entity) to a list field."""
    return FieldSpec(
        name,
        MutatorKind.NESTED_MANY,
        method=method,
        policy=policy,
        by_reference=by_reference,
    )


def variant(
    name: str,
    *accepts: type,
    by_reference: bool = False,
    method: str = "",
    policy: CopyPolicy | None = None,
) -> FieldSpec:
    """Embed one of several unrelated entity types into a tagged-union field.

    The mutator accepts anything; membership in *accepts* is checked by the
    owning entity's structural validator.
    """
    return FieldSpec(
        name,
        MutatorKind.VARIANT,
        method=method,
        policy=policy,
        by_reference=by_reference,
        accepts=tuple(accepts),
    )


# ---------------------------------------------------------------------------
# Copy and materialization
# ---------------------------------------------------------------------------


def copy_value(value: Any, policy: CopyPolicy) -> Any:
    """Copy *value* according to *policy*."""
    if policy is CopyPolicy.SHARED:
        return value
    if policy is CopyPolicy.DEEP:
        return copy.deepcopy(value)
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, set):
        return set(value)
    return value


def materialize(value: Any, *, by_reference: bool) -> Any:
    """Turn a sub-builder or literal into the object to embed.

    Sub-builders are extracted without validation. Unless *by_reference*,
    the result is a deep copy owned by the parent draft.
    """
    extract = getattr(value, "extract", None)
    if callable(extract):
        value = extract()
    if by_reference or value is None:
        return value
    return copy.deepcopy(value)


# ---------------------------------------------------------------------------
# Mutator generation
# ---------------------------------------------------------------------------


def make_mutator(spec: FieldSpec) -> Callable[..., Any]:
    """Build the chainable method for *spec*."""
    attr = spec.name

    if spec.kind is MutatorKind.SCALAR:

        def mutator(self: Any, value: Any) -> Any:
            setattr(self.extract(), attr, value)
            return self

        doc = f"Set ``{attr}``."

    elif spec.kind is MutatorKind.APPEND:

        def mutator(self: Any, value: Any) -> Any:
            _sequence(self.extract(), attr).append(value)
            return self

        doc = f"Append one element to ``{attr}``."

    elif spec.kind is MutatorKind.MAPPING:

        def mutator(self: Any, key: Any, value: Any) -> Any:
            _mapping(self.extract(), attr)[key] = value
            return self

        doc = f"Set one key of ``{attr}``."

    elif spec.kind is MutatorKind.NESTED_MANY:

        def mutator(self: Any, value: Any) -> Any:
            embedded = materialize(value, by_reference=spec.by_reference)
            _sequence(self.extract(), attr).append(embedded)
            return self

        doc = f"Append a built entity to ``{attr}``."

    else:

        def mutator(self: Any, value: Any) -> Any:
            embedded = materialize(value, by_reference=spec.by_reference)
            setattr(self.extract(), attr, embedded)
            return self

        doc = f"Set ``{attr}`` from a builder or entity."

    mutator.__name__ = spec.method_name
    mutator.__qualname__ = spec.method_name
    mutator.__doc__ = doc
    return mutator


def _sequence(draft: Any, attr: str) -> list[Any]:
    seq = getattr(draft, attr, None)
    if seq is None:
        seq = []
        setattr(draft, attr, seq)
    return seq


def _mapping(draft: Any, attr: str) -> dict[Any, Any]:
    mapping_ = getattr(draft, attr, None)
    if mapping_ is None:
        mapping_ = {}
        setattr(draft, attr, mapping_)
    return mapping_
