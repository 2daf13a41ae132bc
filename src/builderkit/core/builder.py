"""Builder: owns one mutable draft plus the custom validators to run on it.

Usage::

    bond = (
        BondBuilder()
        .with_isin("US0378331005")
        .with_maturity_date("2030-01-15")
        .with_validator(lambda b: None if b.quantity < 1000 else "too many")
        .extract_or_abort()
    )

INVARIANT: A builder holds exactly one draft. Mutators write into that draft
in place and return the builder itself; only :meth:`Builder.clone` produces
a second, independent draft.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Callable, Iterator
from typing import Any, ClassVar, Self

from pydantic import BaseModel

from builderkit.core.errors import ValidationError
from builderkit.core.fields import CopyPolicy, FieldSpec, copy_value, make_mutator
from builderkit.core.result import BuildResult
from builderkit.core.validation import Validator, run_pipeline

_RESERVED_METHODS = frozenset(
    {
        "extract",
        "extract_validated",
        "extract_or_abort",
        "clone",
        "with_validator",
        "with_defaults",
        "apply_defaults",
        "new_draft",
    }
)


class Builder[T]:
    """Base class for every builder.

    Subclasses set :attr:`entity` (the draft type, constructible with no
    arguments) and :attr:`fields` (the field declarations). One mutator
    method is generated per declaration unless the subclass defines a
    method of the same name itself.

    Attributes:
        entity: Draft type; ``entity()`` must return an all-default draft.
        fields: Field declarations for this class. Declarations of base
            builders are inherited.
        type_name: Registry name; defaults to ``entity.__name__``.
    """

    entity: ClassVar[type[Any]]
    fields: ClassVar[tuple[FieldSpec, ...]] = ()
    type_name: ClassVar[str] = ""
    _field_map: ClassVar[dict[str, FieldSpec]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        entity = getattr(cls, "entity", None)
        if "type_name" not in cls.__dict__ and entity is not None:
            cls.type_name = entity.__name__

        field_map = dict(cls._field_map)
        for spec in cls.__dict__.get("fields", ()):
            _check_declaration(cls, entity, spec)
            field_map[spec.name] = spec
            if spec.method_name not in cls.__dict__:
                setattr(cls, spec.method_name, make_mutator(spec))
        cls._field_map = field_map

    def __init__(self, draft: T | None = None) -> None:
        self._draft: T = draft if draft is not None else self.new_draft()
        self._validators: list[Validator[T]] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._draft!r})"

    @classmethod
    def new_draft(cls) -> T:
        """Return a fresh draft with every field at its zero value."""
        entity = getattr(cls, "entity", None)
        if entity is None:
            msg = f"{cls.__name__} does not declare an entity type"
            raise TypeError(msg)
        return entity()

    @classmethod
    def with_defaults(cls) -> Self:
        """Return an empty builder with :meth:`apply_defaults` applied."""
        builder = cls()
        builder.apply_defaults()
        return builder

    @classmethod
    def declared_fields(cls) -> dict[str, FieldSpec]:
        """Field declarations by draft attribute name, including inherited ones."""
        return dict(cls._field_map)

    def apply_defaults(self) -> None:
        """Fill sensible defaults into the draft. Override per builder."""

    @property
    def validators(self) -> tuple[Validator[T], ...]:
        return tuple(self._validators)

    # --- Fluent protocol -------------------------------------------------

    def with_validator(self, validator: Validator[T]) -> Self:
        """Append a custom validator; validators run in registration order."""
        self._validators.append(validator)
        return self

    # --- Finalizers ------------------------------------------------------

    def extract(self) -> T:
        """Return the draft itself, without any validation."""
        return self._draft

    def extract_validated(self) -> BuildResult[T]:
        """Run custom validators, then the structural validator.

        The draft is always returned inside the result, valid or not.
        """
        return run_pipeline(self._draft, self._validators)

    def extract_or_abort(
        self,
        on_abort: Callable[[ValidationError], Any] | None = None,
    ) -> T:
        """Return the validated draft or raise :class:`BuildAbortedError`.

        Only for call sites where an invalid object is a programming error.
        Never use it to validate external input.
        """
        return self.extract_validated().unwrap(on_abort)

    # --- Cloning ---------------------------------------------------------

    def clone(self) -> Self:
        """Return an independent builder seeded with an equal draft.

        Fields are copied per their declared :class:`CopyPolicy`; fields
        without a declaration are deep-copied. The validator list is a new
        list holding the same callables.
        """
        source = self._draft
        draft = _shallow_copy(source)
        for name in _draft_field_names(source):
            spec = self._field_map.get(name)
            policy = spec.copy_policy if spec is not None else CopyPolicy.DEEP
            setattr(draft, name, copy_value(getattr(source, name), policy))

        twin = copy.copy(self)
        twin._draft = draft
        twin._validators = list(self._validators)
        return twin


def _check_declaration(cls: type, entity: type | None, spec: FieldSpec) -> None:
    if spec.method_name in _RESERVED_METHODS:
        msg = f"{cls.__name__}: mutator name {spec.method_name!r} is reserved"
        raise TypeError(msg)
    if entity is None:
        msg = f"{cls.__name__} declares fields but no entity type"
        raise TypeError(msg)
    known = _declared_names(entity)
    if known is not None and spec.name not in known:
        msg = f"{cls.__name__}: {entity.__name__} has no field {spec.name!r}"
        raise TypeError(msg)


def _declared_names(entity: type) -> set[str] | None:
    if isinstance(entity, type) and issubclass(entity, BaseModel):
        return set(entity.model_fields)
    if dataclasses.is_dataclass(entity):
        return {f.name for f in dataclasses.fields(entity)}
    return None


def _draft_field_names(draft: Any) -> Iterator[str]:
    if isinstance(draft, BaseModel):
        yield from type(draft).model_fields
    elif dataclasses.is_dataclass(draft):
        yield from (f.name for f in dataclasses.fields(draft))
    else:
        yield from list(vars(draft))


def _shallow_copy(draft: Any) -> Any:
    if isinstance(draft, BaseModel):
        return draft.model_copy()
    return copy.copy(draft)
