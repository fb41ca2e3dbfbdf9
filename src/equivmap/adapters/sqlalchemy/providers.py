"""Property-map provider deriving entity identity from SQLAlchemy primary keys."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapper

if TYPE_CHECKING:
    from equivmap.mapping import PropertyMap, TypeMap


def primary_key_names(entity_type: Any) -> tuple[str, ...]:
    """Attribute names of the primary-key columns, empty for unmapped classes."""

    if not isinstance(entity_type, type):
        return ()
    mapper = sa_inspect(entity_type, raiseerr=False)
    if not isinstance(mapper, Mapper):
        return ()
    return tuple(mapper.get_property_by_column(column).key for column in mapper.primary_key)


def primary_key_property_maps(type_map: TypeMap) -> tuple[PropertyMap, ...]:
    """Use the property maps feeding the destination's primary key.

    Yields nothing when the destination is not mapped or any key column has no
    property map.
    """

    selected: list[PropertyMap] = []
    for name in primary_key_names(type_map.destination_type):
        property_map = type_map.property_map_for(name)
        if property_map is None or property_map.ignored:
            return ()
        selected.append(property_map)
    return tuple(selected)
