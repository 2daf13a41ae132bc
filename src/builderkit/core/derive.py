"""Derive a builder class from an entity's field annotations.

Replaces hand-written (or generated) per-entity builder boilerplate:
field shapes are read from the pydantic model once, when the builder class
is created, and turned into the same declarations a hand-written builder
would use.

=====================================  ===============
Annotation                             Declaration
=====================================  ===============
``Entity`` / ``Entity | None``         ``nested``
``list[Entity]``                       ``nested_many``
``A | B`` with A, B entities           ``variant``
``list[...]``                          ``append``
``dict[..., ...]``                     ``mapping``
anything else                          ``scalar``
=====================================  ===============
"""

from __future__ import annotations

import types
from collections.abc import Mapping
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel

from builderkit.core.builder import Builder
from builderkit.core.fields import (
    FieldSpec,
    append,
    mapping,
    nested,
    nested_many,
    scalar,
    variant,
)

_NONE_TYPE = type(None)


def derive_builder(
    entity_cls: type[BaseModel],
    *,
    name: str | None = None,
    type_name: str | None = None,
    overrides: Mapping[str, FieldSpec] | None = None,
) -> type[Builder[Any]]:
    """Create a :class:`Builder` subclass for *entity_cls*.

    Args:
        entity_cls: A pydantic model whose fields all have defaults.
        name: Class name of the builder; defaults to ``<Entity>Builder``.
        type_name: Registry name; defaults to the entity class name.
        overrides: Declarations to use instead of the inferred ones, keyed
            by field name (e.g. to mark a field ``SHARED``).

    Raises:
        TypeError: If *entity_cls* is not a pydantic model.
        ValueError: If *overrides* names a field the entity does not have.
    """
    if not (isinstance(entity_cls, type) and issubclass(entity_cls, BaseModel)):
        msg = f"Cannot derive a builder for {entity_cls!r}: not a pydantic model"
        raise TypeError(msg)

    pending = dict(overrides or {})
    specs: list[FieldSpec] = []
    for field_name, info in entity_cls.model_fields.items():
        spec = pending.pop(field_name, None)
        specs.append(spec if spec is not None else infer_field(field_name, info.annotation))
    if pending:
        msg = f"{entity_cls.__name__} has no fields named {sorted(pending)}"
        raise ValueError(msg)

    namespace: dict[str, Any] = {
        "__module__": entity_cls.__module__,
        "__doc__": f"Builder for :class:`{entity_cls.__name__}` derived from its fields.",
        "entity": entity_cls,
        "fields": tuple(specs),
    }
    if type_name:
        namespace["type_name"] = type_name
    return types.new_class(
        name or f"{entity_cls.__name__}Builder",
        (Builder,),
        exec_body=lambda ns: ns.update(namespace),
    )


def infer_field(name: str, annotation: Any) -> FieldSpec:
    """Choose the declaration for one field from its annotation."""
    annotation = _unwrap(annotation)
    if _is_entity(annotation):
        return nested(name)

    origin = get_origin(annotation)
    if origin is list:
        args = get_args(annotation)
        if args and _is_entity(_unwrap(args[0])):
            return nested_many(name)
        return append(name)
    if origin is dict:
        return mapping(name)

    members = _union_members(annotation)
    if members and all(_is_entity(m) for m in members):
        return variant(name, *members)
    return scalar(name)


def _unwrap(annotation: Any) -> Any:
    """Strip ``Annotated`` wrappers and a single ``| None``."""
    while True:
        if get_origin(annotation) is Annotated:
            annotation = get_args(annotation)[0]
            continue
        args = _union_args(annotation)
        if args is not None:
            non_none = [a for a in args if a is not _NONE_TYPE]
            if len(non_none) == 1 and len(non_none) != len(args):
                annotation = non_none[0]
                continue
        return annotation


def _union_args(annotation: Any) -> tuple[Any, ...] | None:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return get_args(annotation)
    return None


def _union_members(annotation: Any) -> list[Any]:
    args = _union_args(annotation)
    if args is None:
        return []
    return [_unwrap(a) for a in args if a is not _NONE_TYPE]


def _is_entity(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)
