"""Configuration-time surface: register strategies and declare equivalences."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from equivmap.collection import EquivalentListMapper, EquivalentSetMapper
from equivmap.config import CollectionSettings, DuplicateRegistrationPolicy
from equivmap.mapping import ReplaceCollectionMapper

from .errors import DuplicateRegistrationError
from .functions import MemberEquivalence, PredicateEquivalence
from .registry import default_registry, staging_for

if TYPE_CHECKING:
    from collections.abc import Callable

    from equivmap.mapping import MapperConfigurationBuilder, TypeMapExpression

    from .functions import MemberSelector
    from .providers import PropertyMapProvider
    from .registry import EquivalenceRegistry

log = logging.getLogger(__name__)


def add_collection_mappers(
    builder: MapperConfigurationBuilder,
    *,
    settings: CollectionSettings | None = None,
    registry: EquivalenceRegistry | None = None,
) -> None:
    """Insert the equivalence collection strategies before ``ReplaceCollectionMapper``.

    Also arranges for the builder's staged declarations to be committed into
    ``registry`` when the configuration is sealed. Calling this twice on one
    builder is ignored, or rejected under ``DuplicateRegistrationPolicy.RAISE``.
    """

    settings = settings or CollectionSettings()
    registry = registry or default_registry
    staging = staging_for(builder)
    if staging.collection_mappers_added:
        if settings.duplicate_registration is DuplicateRegistrationPolicy.RAISE:
            raise DuplicateRegistrationError("Collection mappers were already added")
        log.debug("Collection mappers already added to this builder; ignoring")
        return

    builder.mappers.insert_before(
        ReplaceCollectionMapper,
        EquivalentListMapper(registry, settings),
        EquivalentSetMapper(registry, settings),
    )
    staging.collection_mappers_added = True
    builder.before_seal(lambda configuration: registry.commit(configuration, staging))


def equality_comparison[TMapping: TypeMapExpression](
    mapping: TMapping,
    predicate: Callable[[Any, Any], object],
) -> TMapping:
    """Declare ``predicate(source, destination)`` as the equivalence of the mapped pair."""

    mapping.builder.ensure_open()
    function = PredicateEquivalence(mapping.types, predicate)
    staging_for(mapping.builder).declare_explicit(mapping.types, function)
    return mapping


def equality_comparison_by_members[TMapping: TypeMapExpression](
    mapping: TMapping,
    source_member: MemberSelector,
    destination_member: MemberSelector,
) -> TMapping:
    """Declare equivalence as equality of one member on each side."""

    mapping.builder.ensure_open()
    function = MemberEquivalence(mapping.types, source_member, destination_member)
    staging_for(mapping.builder).declare_explicit(mapping.types, function)
    return mapping


def add_property_map_provider(
    builder: MapperConfigurationBuilder,
    provider: PropertyMapProvider,
) -> None:
    """Append ``provider``; providers are asked in registration order."""

    builder.ensure_open()
    staging_for(builder).declare_property_map_provider(provider)
