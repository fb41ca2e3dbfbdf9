"""Collection strategies that reconcile by equivalence instead of replacing.

Both strategies decline unless a destination collection of their kind was
supplied and an equivalence resolves for the element types; the request then
falls through to the baseline ``ReplaceCollectionMapper``.

Without a parameterised source type the element type is taken from the
source items. That only works when every item has the same runtime type;
mixed sources decline.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Collection, MutableSequence, MutableSet
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from equivmap.config import CollectionSettings
from equivmap.mapping import MappingError, collection_element_type, is_collection_type

from .reconcile import reconcile_collection

if TYPE_CHECKING:
    from equivmap.equivalence import EquivalenceFunction, EquivalenceRegistry
    from equivmap.mapping import Mapper, MapRequest

log = logging.getLogger(__name__)


def _source_element_type(request: MapRequest) -> Any:
    element_type = request.source_element_type
    if element_type is not None:
        return element_type
    item_types = {type(item) for item in request.source}
    if len(item_types) == 1:
        return item_types.pop()
    if item_types:
        log.debug(
            "Source items of %d different types; declining equivalence reconciliation",
            len(item_types),
        )
    return None


@dataclass(slots=True)
class _EquivalentCollectionMapper(ABC):
    registry: EquivalenceRegistry
    settings: CollectionSettings = CollectionSettings()

    collection_kind: ClassVar[type]

    def is_match(self, request: MapRequest, mapper: Mapper) -> bool:
        if not isinstance(request.destination, self.collection_kind):
            return False
        if not is_collection_type(request.destination_type):
            return False
        if isinstance(request.source, (str, bytes)) or not isinstance(request.source, Collection):
            return False
        return self.equivalence_for(request, mapper) is not None

    def equivalence_for(self, request: MapRequest, mapper: Mapper) -> EquivalenceFunction | None:
        destination_element_type = collection_element_type(request.destination_type)
        source_element_type = _source_element_type(request)
        if destination_element_type is None or source_element_type is None:
            return None
        return self.registry.resolve_types(
            mapper.configuration, source_element_type, destination_element_type
        )

    def map(self, request: MapRequest, mapper: Mapper) -> Any:
        equivalence = self.equivalence_for(request, mapper)
        if equivalence is None:
            raise MappingError(f"No equivalence for elements of {request.destination_type!r}")
        source_element_type = _source_element_type(request)
        destination_element_type = collection_element_type(request.destination_type)
        destination = request.destination

        reconcile_collection(
            list(request.source),
            list(destination),
            equivalence,
            map_new=lambda item: mapper.map(
                item, destination_element_type, source_type=source_element_type
            ),
            update_existing=lambda item, existing: mapper.map(
                item, destination_element_type, existing, source_type=source_element_type
            ),
            add=lambda item: self._add(destination, item),
            remove=lambda items: self._remove(destination, items),
            remove_unmatched=self.settings.remove_unmatched,
        )
        return destination

    @abstractmethod
    def _add(self, destination: Any, item: Any) -> None:
        """Add a freshly mapped element."""
        ...

    @abstractmethod
    def _remove(self, destination: Any, items: list[Any]) -> None:
        """Remove the unmatched destination elements."""
        ...


@dataclass(slots=True)
class EquivalentListMapper(_EquivalentCollectionMapper):
    """Reconcile mutable sequences; added elements are appended."""

    collection_kind: ClassVar[type] = MutableSequence

    def _add(self, destination: MutableSequence[Any], item: Any) -> None:
        destination.append(item)

    def _remove(self, destination: MutableSequence[Any], items: list[Any]) -> None:
        # One position per item. Matching takes the earliest copy of an instance,
        # so the unmatched copies are the trailing ones.
        for item in items:
            for index in reversed(range(len(destination))):
                if destination[index] is item:
                    del destination[index]
                    break


@dataclass(slots=True)
class EquivalentSetMapper(_EquivalentCollectionMapper):
    """Reconcile mutable sets."""

    collection_kind: ClassVar[type] = MutableSet

    def _add(self, destination: MutableSet[Any], item: Any) -> None:
        destination.add(item)

    def _remove(self, destination: MutableSet[Any], items: list[Any]) -> None:
        for item in items:
            destination.discard(item)
