"""Property-map providers choose which declared rules define entity identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from equivmap.mapping import PropertyMap, TypeMap


class PropertyMapProvider(Protocol):
    """Produce the property maps to synthesize an equivalence from.

    An empty result means "nothing to offer"; the next provider is asked.
    """

    def __call__(self, type_map: TypeMap) -> Sequence[PropertyMap]: ...


def declared_property_maps(type_map: TypeMap) -> tuple[PropertyMap, ...]:
    """Default provider: every active property map declared on the type map."""

    return type_map.active_property_maps


@dataclass(frozen=True, slots=True)
class KeyMembersPropertyMaps:
    """Use only the property maps of the named destination members.

    All names must be mapped, otherwise the provider yields nothing; a partial
    key does not identify an entity.
    """

    destination_members: tuple[str, ...]

    def __init__(self, *destination_members: str) -> None:
        if not destination_members:
            raise ValueError("KeyMembersPropertyMaps needs at least one member name")
        object.__setattr__(self, "destination_members", destination_members)

    def __call__(self, type_map: TypeMap) -> tuple[PropertyMap, ...]:
        selected: list[PropertyMap] = []
        for name in self.destination_members:
            property_map = type_map.property_map_for(name)
            if property_map is None or property_map.ignored:
                return ()
            selected.append(property_map)
        return tuple(selected)
