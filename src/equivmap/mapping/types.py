"""Value objects describing declared mappings between two types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


def _type_name(value: Any) -> str:
    return getattr(value, "__qualname__", None) or repr(value)


@dataclass(frozen=True, slots=True)
class TypePair:
    """Directional (source type, destination type) key."""

    source_type: Any
    destination_type: Any

    def __str__(self) -> str:
        return f"{_type_name(self.source_type)} -> {_type_name(self.destination_type)}"


@dataclass(frozen=True, slots=True, kw_only=True)
class PropertyMap:
    """One declared correspondence between a source and a destination member.

    ``source_member`` is ``None`` when the value comes from ``resolver`` instead of
    a plain attribute read. The declared value types are ``None`` when unknown.
    """

    destination_member: str
    source_member: str | None
    source_type: Any = None
    destination_type: Any = None
    resolver: Callable[[Any], Any] | None = None
    ignored: bool = False

    def __post_init__(self) -> None:
        if self.ignored:
            return
        if (self.source_member is None) == (self.resolver is None):
            raise ValueError(
                f"property map for {self.destination_member!r} needs exactly one of "
                "source_member or resolver"
            )

    def read_source(self, source: object) -> Any:
        if self.resolver is not None:
            return self.resolver(source)
        if self.source_member is None:
            raise ValueError(f"property map for {self.destination_member!r} is ignored")
        return getattr(source, self.source_member)

    def read_destination(self, destination: object) -> Any:
        return getattr(destination, self.destination_member)

    def write_destination(self, destination: object, value: object) -> None:
        setattr(destination, self.destination_member, value)


@dataclass(frozen=True, slots=True)
class TypeMap:
    """All property maps declared for one type pair, in declaration order."""

    types: TypePair
    property_maps: tuple[PropertyMap, ...]

    @property
    def source_type(self) -> Any:
        return self.types.source_type

    @property
    def destination_type(self) -> Any:
        return self.types.destination_type

    @property
    def active_property_maps(self) -> tuple[PropertyMap, ...]:
        return tuple(pm for pm in self.property_maps if not pm.ignored)

    def property_map_for(self, destination_member: str) -> PropertyMap | None:
        for property_map in self.property_maps:
            if property_map.destination_member == destination_member:
                return property_map
        return None
