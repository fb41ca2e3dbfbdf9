"""Insert-or-update a mapped source object against a SQLAlchemy session."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, select

from equivmap.equivalence import (
    MemberEquivalence,
    MissingEquivalenceError,
    SynthesizedEquivalence,
    default_registry,
)
from equivmap.mapping import TypePair

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from sqlalchemy.sql import ColumnElement

    from equivmap.equivalence import EquivalenceFunction, EquivalenceRegistry
    from equivmap.mapping import Mapper

log = logging.getLogger(__name__)


def equivalence_criteria(
    equivalence: EquivalenceFunction,
    source: object,
    destination_type: type,
) -> list[ColumnElement[bool]] | None:
    """Translate ``equivalence`` into SQL criteria, ``None`` if it is opaque."""

    if isinstance(equivalence, SynthesizedEquivalence):
        return [
            getattr(destination_type, pm.destination_member) == pm.read_source(source)
            for pm in equivalence.property_maps
        ]
    if isinstance(equivalence, MemberEquivalence) and isinstance(
        equivalence.destination_member, str
    ):
        value = equivalence.source_value(source)
        return [getattr(destination_type, equivalence.destination_member) == value]
    return None


def find_equivalent[T](
    session: Session,
    equivalence: EquivalenceFunction,
    source: object,
    destination_type: type[T],
) -> T | None:
    criteria = equivalence_criteria(equivalence, source, destination_type)
    if criteria is not None:
        stmt = select(destination_type).where(and_(*criteria))
        return session.execute(stmt).scalars().first()

    # opaque predicate: compare against every stored row
    for candidate in session.execute(select(destination_type)).scalars():
        if equivalence.evaluate(source, candidate):
            return candidate
    return None


def persist_equivalent[T](
    session: Session,
    mapper: Mapper,
    source: object,
    destination_type: type[T],
    *,
    source_type: Any = None,
    registry: EquivalenceRegistry | None = None,
) -> T:
    """Update the stored entity equivalent to ``source`` or add a new one.

    Raises ``MissingEquivalenceError`` when the pair has no equivalence.
    """

    registry = registry or default_registry
    source_type = type(source) if source_type is None else source_type
    equivalence = registry.resolve_types(mapper.configuration, source_type, destination_type)
    if equivalence is None:
        raise MissingEquivalenceError(TypePair(source_type, destination_type))

    existing = find_equivalent(session, equivalence, source, destination_type)
    if existing is None:
        created = mapper.map(source, destination_type, source_type=source_type)
        session.add(created)
        log.debug("Added new %s", destination_type.__qualname__)
        return created

    mapper.map(source, destination_type, existing, source_type=source_type)
    log.debug("Updated existing %s", destination_type.__qualname__)
    return existing
