"""Match destination elements to source elements and reconcile the collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from equivmap.equivalence import EquivalenceFunction

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ElementMatches:
    """Outcome of pairing source and destination elements."""

    matched: list[tuple[Any, Any]] = field(default_factory=list[tuple[Any, Any]])
    unmatched_source: list[Any] = field(default_factory=list[Any])
    unmatched_destination: list[Any] = field(default_factory=list[Any])


@dataclass(slots=True)
class ReconciliationResult:
    added: list[Any] = field(default_factory=list[Any])
    updated: list[Any] = field(default_factory=list[Any])
    removed: list[Any] = field(default_factory=list[Any])

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def match_elements(
    source: Iterable[Any],
    destination: Iterable[Any],
    equivalence: EquivalenceFunction,
) -> ElementMatches:
    """Pair each source element with the first equivalent unmatched destination element.

    Source elements are visited in order and destination candidates in their
    original order. A destination element pairs with at most one source element,
    so later duplicates of an entity in the source are treated as new.
    """

    matches = ElementMatches(unmatched_destination=list(destination))
    for source_item in source:
        for index, destination_item in enumerate(matches.unmatched_destination):
            if equivalence.evaluate(source_item, destination_item):
                matches.matched.append((source_item, destination_item))
                del matches.unmatched_destination[index]
                break
        else:
            matches.unmatched_source.append(source_item)
    return matches


def reconcile_collection(
    source: Iterable[Any],
    destination: Iterable[Any],
    equivalence: EquivalenceFunction,
    *,
    map_new: Callable[[Any], Any],
    update_existing: Callable[[Any, Any], object],
    add: Callable[[Any], object],
    remove: Callable[[list[Any]], object],
    remove_unmatched: bool = True,
) -> ReconciliationResult:
    """Bring ``destination`` in line with ``source`` without replacing matched objects.

    Order of effects: unmatched destination elements are removed, matched
    elements are updated in place, then unmatched source elements are mapped
    fresh and added.
    """

    matches = match_elements(source, destination, equivalence)
    result = ReconciliationResult()

    if remove_unmatched and matches.unmatched_destination:
        remove(matches.unmatched_destination)
        result.removed.extend(matches.unmatched_destination)

    for source_item, destination_item in matches.matched:
        update_existing(source_item, destination_item)
        result.updated.append(destination_item)

    for source_item in matches.unmatched_source:
        created = map_new(source_item)
        add(created)
        result.added.append(created)

    log.debug(
        "Reconciled %s: %d added, %d updated, %d removed",
        equivalence.types,
        len(result.added),
        len(result.updated),
        len(result.removed),
    )
    return result
