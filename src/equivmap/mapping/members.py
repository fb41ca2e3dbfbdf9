"""Member introspection for the kinds of classes the mapper understands.

Supported shapes:
- dataclasses
- pydantic models
- SQLAlchemy mapped classes (``Mapped[...]`` annotations are unwrapped)
- plain classes with annotations
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import MutableSequence, MutableSet, Sequence
from collections.abc import Set as AbstractSet
from functools import cache
from typing import Any, get_args, get_origin

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import ColumnProperty, Mapped, Mapper, RelationshipProperty

log = logging.getLogger(__name__)

_COLLECTION_ORIGINS: tuple[type, ...] = (
    list,
    set,
    frozenset,
    tuple,
    Sequence,
    MutableSequence,
    AbstractSet,
    MutableSet,
)


def _is_pydantic_model(cls: object) -> bool:
    return isinstance(cls, type) and issubclass(cls, BaseModel)


def _sqlalchemy_mapper(cls: object) -> Mapper[Any] | None:
    if not isinstance(cls, type):
        return None
    mapper = sa_inspect(cls, raiseerr=False)
    return mapper if isinstance(mapper, Mapper) else None


@cache
def member_names(cls: type) -> tuple[str, ...]:
    """Return the mappable member names of ``cls`` in declaration order."""

    if _is_pydantic_model(cls):
        return tuple(cls.model_fields)
    if dataclasses.is_dataclass(cls):
        return tuple(field.name for field in dataclasses.fields(cls))
    mapper = _sqlalchemy_mapper(cls)
    if mapper is not None:
        return tuple(prop.key for prop in mapper.attrs)
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        for name in inspect.get_annotations(klass):
            if not name.startswith("_") and name not in names:
                names.append(name)
    return tuple(names)


@cache
def member_type(cls: type, name: str) -> Any:
    """Return the declared value type of ``cls.name`` or ``None`` when unknown."""

    if _is_pydantic_model(cls):
        field = cls.model_fields.get(name)
        return None if field is None else field.annotation

    annotation = _annotation(cls, name)
    if annotation is not None:
        return _unwrap_mapped(annotation)

    mapper = _sqlalchemy_mapper(cls)
    if mapper is not None:
        return _sqlalchemy_member_type(mapper, name)
    return None


def _annotation(cls: type, name: str) -> Any:
    for klass in cls.__mro__:
        raw = inspect.get_annotations(klass)
        if name not in raw:
            continue
        try:
            return inspect.get_annotations(klass, eval_str=True)[name]
        except (NameError, SyntaxError, TypeError) as exc:
            log.debug("Could not evaluate annotation %s.%s: %s", klass.__qualname__, name, exc)
            return None
    return None


def _unwrap_mapped(annotation: Any) -> Any:
    if get_origin(annotation) is Mapped:
        (inner,) = get_args(annotation)
        return inner
    return annotation


def _sqlalchemy_member_type(mapper: Mapper[Any], name: str) -> Any:
    prop = mapper.attrs.get(name)
    if isinstance(prop, ColumnProperty):
        try:
            return prop.columns[0].type.python_type
        except NotImplementedError:
            return None
    if isinstance(prop, RelationshipProperty):
        target = prop.mapper.class_
        if not prop.uselist:
            return target
        if prop.collection_class is set:
            return set[target]
        return list[target]
    return None


def is_collection_type(annotation: Any) -> bool:
    """True for ``list[...]``, ``set[...]`` and friends (strings excluded)."""

    origin = get_origin(annotation) or annotation
    if not isinstance(origin, type) or issubclass(origin, (str, bytes)):
        return False
    return issubclass(origin, _COLLECTION_ORIGINS)


def collection_origin(annotation: Any) -> type | None:
    origin = get_origin(annotation) or annotation
    return origin if isinstance(origin, type) and is_collection_type(origin) else None


def collection_element_type(annotation: Any) -> Any:
    """Element type of a parameterised collection, ``None`` when unparameterised."""

    if not is_collection_type(annotation):
        return None
    args = get_args(annotation)
    if not args:
        return None
    if get_origin(annotation) is tuple and (len(args) != 2 or args[1] is not Ellipsis):  # noqa: PLR2004
        return None
    return args[0]
