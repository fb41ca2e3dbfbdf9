"""Minimal object-to-object mapping engine hosting the equivalence extensions."""

from __future__ import annotations

from .configuration import MapperConfiguration, MapperConfigurationBuilder, TypeMapExpression
from .errors import ConfigurationSealedError, MappingError, MissingTypeMapError
from .mapper import Mapper
from .members import collection_element_type, is_collection_type, member_names, member_type
from .strategies import (
    AssignableMapper,
    MapperList,
    MapRequest,
    ObjectMapper,
    ReplaceCollectionMapper,
    TypeMapMapper,
)
from .types import PropertyMap, TypeMap, TypePair

__all__ = [
    "AssignableMapper",
    "ConfigurationSealedError",
    "MapRequest",
    "Mapper",
    "MapperConfiguration",
    "MapperConfigurationBuilder",
    "MapperList",
    "MappingError",
    "MissingTypeMapError",
    "ObjectMapper",
    "PropertyMap",
    "ReplaceCollectionMapper",
    "TypeMap",
    "TypeMapExpression",
    "TypePair",
    "TypeMapMapper",
    "collection_element_type",
    "is_collection_type",
    "member_names",
    "member_type",
]
