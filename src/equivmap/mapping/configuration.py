"""Building and sealing mapper configurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

from .errors import ConfigurationSealedError, MissingTypeMapError
from .mapper import Mapper
from .members import member_names, member_type
from .strategies import MapperList, default_mappers
from .types import PropertyMap, TypeMap, TypePair

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from .strategies import ObjectMapper

log = logging.getLogger(__name__)

type SealCallback = Callable[[MapperConfiguration], None]


class TypeMapExpression:
    """Fluent declaration of the property maps between two types.

    Members with the same name on both sides are mapped automatically; use
    ``for_member`` to redirect a destination member and ``ignore`` to skip one.
    """

    def __init__(self, builder: MapperConfigurationBuilder, types: TypePair) -> None:
        self.builder = builder
        self.types = types
        self._property_maps: dict[str, PropertyMap] = {}
        source_names = set(member_names(types.source_type))
        for name in member_names(types.destination_type):
            if name in source_names:
                self._property_maps[name] = self._member_map(name, name)

    def for_member(
        self,
        destination_member: str,
        *,
        source: str | None = None,
        map_from: Callable[[Any], Any] | None = None,
    ) -> Self:
        self.builder.ensure_open()
        if (source is None) == (map_from is None):
            raise ValueError("for_member needs exactly one of source or map_from")
        if source is not None:
            self._property_maps[destination_member] = self._member_map(source, destination_member)
        else:
            self._property_maps[destination_member] = PropertyMap(
                destination_member=destination_member,
                source_member=None,
                destination_type=member_type(self.types.destination_type, destination_member),
                resolver=map_from,
            )
        return self

    def ignore(self, destination_member: str) -> Self:
        self.builder.ensure_open()
        self._property_maps[destination_member] = PropertyMap(
            destination_member=destination_member,
            source_member=None,
            destination_type=member_type(self.types.destination_type, destination_member),
            ignored=True,
        )
        return self

    def build_type_map(self) -> TypeMap:
        return TypeMap(types=self.types, property_maps=tuple(self._property_maps.values()))

    def _member_map(self, source_member: str, destination_member: str) -> PropertyMap:
        return PropertyMap(
            destination_member=destination_member,
            source_member=source_member,
            source_type=member_type(self.types.source_type, source_member),
            destination_type=member_type(self.types.destination_type, destination_member),
        )


class MapperConfigurationBuilder:
    """Mutable configuration that is sealed exactly once by ``build``."""

    def __init__(self) -> None:
        self.mappers = MapperList(default_mappers())
        # builder-scoped state owned by extensions, keyed by the extension
        self.extensions: dict[str, Any] = {}
        self._expressions: dict[TypePair, TypeMapExpression] = {}
        self._seal_callbacks: list[SealCallback] = []
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def ensure_open(self) -> None:
        if self._sealed:
            raise ConfigurationSealedError("Mapper configuration was already built")

    def create_map(self, source_type: type, destination_type: type) -> TypeMapExpression:
        self.ensure_open()
        types = TypePair(source_type, destination_type)
        expression = self._expressions.get(types)
        if expression is None:
            expression = TypeMapExpression(self, types)
            self._expressions[types] = expression
        return expression

    def before_seal(self, callback: SealCallback) -> None:
        """Run ``callback`` with the finalized configuration during ``build``."""

        self.ensure_open()
        self._seal_callbacks.append(callback)

    def build(self) -> MapperConfiguration:
        self.ensure_open()
        type_maps = {types: expr.build_type_map() for types, expr in self._expressions.items()}
        configuration = MapperConfiguration(type_maps, self.mappers)
        self._sealed = True
        for callback in self._seal_callbacks:
            callback(configuration)
        log.debug(
            "Sealed mapper configuration with %d type maps and %d strategies",
            len(type_maps),
            len(configuration.mappers),
        )
        return configuration


class MapperConfiguration:
    """Immutable set of type maps and the ordered mapping strategies."""

    def __init__(
        self,
        type_maps: Mapping[TypePair, TypeMap],
        mappers: Iterable[ObjectMapper],
    ) -> None:
        self._type_maps = dict(type_maps)
        self.mappers: tuple[ObjectMapper, ...] = tuple(mappers)

    @property
    def type_maps(self) -> tuple[TypeMap, ...]:
        return tuple(self._type_maps.values())

    def find_type_map(self, source_type: Any, destination_type: Any) -> TypeMap | None:
        """Return the type map for the pair, falling back to source base classes."""

        type_map = self._type_maps.get(TypePair(source_type, destination_type))
        if type_map is not None or not isinstance(source_type, type):
            return type_map
        for base in source_type.__mro__[1:]:
            type_map = self._type_maps.get(TypePair(base, destination_type))
            if type_map is not None:
                return type_map
        return None

    def resolve_type_map(self, source_type: Any, destination_type: Any) -> TypeMap:
        type_map = self.find_type_map(source_type, destination_type)
        if type_map is None:
            raise MissingTypeMapError(TypePair(source_type, destination_type))
        return type_map

    def create_mapper(self) -> Mapper:
        return Mapper(self)
