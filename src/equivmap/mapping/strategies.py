"""Mapping strategies tried in order by the mapper.

The first strategy whose ``is_match`` accepts a request handles it. Extensions
add their own strategies by inserting into a builder's ``MapperList``.
"""

from __future__ import annotations

from collections.abc import Iterable, MutableSequence, MutableSet
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, overload, runtime_checkable

from .members import collection_element_type, collection_origin, is_collection_type

if TYPE_CHECKING:
    from .mapper import Mapper


@dataclass(frozen=True, slots=True)
class MapRequest:
    """One value to map, with the declared types on both sides."""

    source: Any
    destination: Any
    source_type: Any
    destination_type: Any

    @property
    def source_element_type(self) -> Any:
        return collection_element_type(self.source_type)

    @property
    def destination_element_type(self) -> Any:
        return collection_element_type(self.destination_type)


@runtime_checkable
class ObjectMapper(Protocol):
    """Strategy turning a source value into a destination value."""

    def is_match(self, request: MapRequest, mapper: Mapper) -> bool: ...

    def map(self, request: MapRequest, mapper: Mapper) -> Any: ...


class MapperList(MutableSequence[ObjectMapper]):
    """Ordered strategy list with lookup by strategy kind."""

    def __init__(self, mappers: Iterable[ObjectMapper] = ()) -> None:
        self._mappers: list[ObjectMapper] = list(mappers)

    @overload
    def __getitem__(self, index: int) -> ObjectMapper: ...
    @overload
    def __getitem__(self, index: slice) -> MutableSequence[ObjectMapper]: ...
    def __getitem__(self, index: int | slice) -> ObjectMapper | MutableSequence[ObjectMapper]:
        if isinstance(index, slice):
            return MapperList(self._mappers[index])
        return self._mappers[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        self._mappers[index] = value

    def __delitem__(self, index: int | slice) -> None:
        del self._mappers[index]

    def __len__(self) -> int:
        return len(self._mappers)

    def insert(self, index: int, value: ObjectMapper) -> None:
        self._mappers.insert(index, value)

    def find_first[TMapper: ObjectMapper](self, kind: type[TMapper]) -> TMapper | None:
        for mapper in self._mappers:
            if isinstance(mapper, kind):
                return mapper
        return None

    def insert_before(self, kind: type[ObjectMapper], *mappers: ObjectMapper) -> None:
        """Insert ``mappers`` (in the given order) before the first ``kind`` strategy.

        Falls back to the start of the list when no such strategy is present.
        """

        target = self.find_first(kind)
        index = 0 if target is None else self._mappers.index(target)
        for mapper in reversed(mappers):
            self._mappers.insert(index, mapper)

    def __repr__(self) -> str:
        return f"MapperList({self._mappers!r})"


def _is_instance(value: object, annotation: Any) -> bool:
    if annotation is Any or annotation is object:
        return True
    try:
        return isinstance(value, annotation)
    except TypeError:
        return True


class AssignableMapper:
    """Pass values through when no type map applies and the value already fits."""

    def is_match(self, request: MapRequest, mapper: Mapper) -> bool:
        if is_collection_type(request.destination_type):
            return False
        if mapper.configuration.find_type_map(request.source_type, request.destination_type):
            return False
        return _is_instance(request.source, request.destination_type)

    def map(self, request: MapRequest, mapper: Mapper) -> Any:
        return request.source


class ReplaceCollectionMapper:
    """Baseline collection strategy: map every element fresh and replace the contents."""

    def is_match(self, request: MapRequest, mapper: Mapper) -> bool:
        return (
            is_collection_type(request.destination_type)
            and isinstance(request.source, Iterable)
            and not isinstance(request.source, (str, bytes))
        )

    def map(self, request: MapRequest, mapper: Mapper) -> Any:
        element_type = request.destination_element_type
        source_element_type = request.source_element_type
        mapped = [
            mapper.map(item, element_type, source_type=source_element_type)
            for item in request.source
        ]
        destination = request.destination
        if isinstance(destination, MutableSequence):
            destination.clear()
            destination.extend(mapped)
            return destination
        if isinstance(destination, MutableSet):
            destination.clear()
            for item in mapped:
                destination.add(item)
            return destination
        origin = collection_origin(request.destination_type)
        if origin is None or not issubclass(origin, (list, set, frozenset, tuple)):
            origin = list
        return origin(mapped)


class TypeMapMapper:
    """Map objects through their declared property maps.

    Without a destination a new instance is created from keyword arguments;
    otherwise the destination is updated in place.
    """

    def is_match(self, request: MapRequest, mapper: Mapper) -> bool:
        configuration = mapper.configuration
        return configuration.find_type_map(request.source_type, request.destination_type) is not None

    def map(self, request: MapRequest, mapper: Mapper) -> Any:
        type_map = mapper.configuration.resolve_type_map(
            request.source_type, request.destination_type
        )
        source = request.source
        destination = request.destination
        if destination is None:
            values = {
                pm.destination_member: mapper.map(
                    pm.read_source(source),
                    pm.destination_type,
                    source_type=pm.source_type,
                )
                for pm in type_map.active_property_maps
            }
            return type_map.destination_type(**values)

        for pm in type_map.active_property_maps:
            current = pm.read_destination(destination)
            value = mapper.map(
                pm.read_source(source),
                pm.destination_type,
                current,
                source_type=pm.source_type,
            )
            if value is not current:
                pm.write_destination(destination, value)
        return destination


def default_mappers() -> list[ObjectMapper]:
    return [AssignableMapper(), ReplaceCollectionMapper(), TypeMapMapper()]
