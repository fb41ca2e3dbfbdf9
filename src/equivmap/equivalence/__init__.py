"""Equivalence resolution: which source element is the same entity as which destination."""

from __future__ import annotations

from .errors import (
    DuplicateRegistrationError,
    EquivalenceError,
    EquivalenceTypeError,
    MissingEquivalenceError,
    RegistryContractError,
    StagingClosedError,
)
from .extensions import (
    add_collection_mappers,
    add_property_map_provider,
    equality_comparison,
    equality_comparison_by_members,
)
from .functions import (
    NO_EQUIVALENCE,
    EquivalenceFunction,
    MemberEquivalence,
    MemberSelector,
    NoEquivalence,
    PredicateEquivalence,
    SynthesizedEquivalence,
    members_match,
)
from .providers import KeyMembersPropertyMaps, PropertyMapProvider, declared_property_maps
from .registry import EquivalenceRegistry, EquivalenceStaging, default_registry, staging_for
from .synthesis import select_property_maps, synthesize_equivalence

__all__ = [
    "NO_EQUIVALENCE",
    "DuplicateRegistrationError",
    "EquivalenceError",
    "EquivalenceFunction",
    "EquivalenceRegistry",
    "EquivalenceStaging",
    "EquivalenceTypeError",
    "KeyMembersPropertyMaps",
    "MemberEquivalence",
    "MemberSelector",
    "MissingEquivalenceError",
    "NoEquivalence",
    "PredicateEquivalence",
    "PropertyMapProvider",
    "RegistryContractError",
    "StagingClosedError",
    "SynthesizedEquivalence",
    "add_collection_mappers",
    "add_property_map_provider",
    "declared_property_maps",
    "default_registry",
    "equality_comparison",
    "equality_comparison_by_members",
    "members_match",
    "select_property_maps",
    "staging_for",
    "synthesize_equivalence",
]
