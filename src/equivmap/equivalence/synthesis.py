"""Build equivalence functions from declared property maps."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .functions import NO_EQUIVALENCE, NoEquivalence, SynthesizedEquivalence, members_match

if TYPE_CHECKING:
    from collections.abc import Iterable

    from equivmap.mapping import PropertyMap, TypeMap

    from .providers import PropertyMapProvider

log = logging.getLogger(__name__)


def select_property_maps(
    type_map: TypeMap,
    providers: Iterable[PropertyMapProvider],
) -> tuple[PropertyMap, ...]:
    """Return the rules of the first provider that yields any."""

    for provider in providers:
        property_maps = tuple(provider(type_map))
        if property_maps:
            return property_maps
    return ()


def synthesize_equivalence(
    type_map: TypeMap,
    providers: Iterable[PropertyMapProvider],
) -> SynthesizedEquivalence | NoEquivalence:
    """Synthesize an equivalence for ``type_map`` or return ``NO_EQUIVALENCE``.

    The rules must be non-empty and every source member type must equal its
    destination member type; anything else is a negative result, not an error.
    """

    property_maps = select_property_maps(type_map, providers)
    if not property_maps:
        log.debug("No property maps offered for %s", type_map.types)
        return NO_EQUIVALENCE
    mismatched = [pm for pm in property_maps if not members_match(pm)]
    if mismatched:
        log.debug(
            "Member type mismatch for %s on %s",
            type_map.types,
            ", ".join(pm.destination_member for pm in mismatched),
        )
        return NO_EQUIVALENCE
    log.debug(
        "Synthesized equivalence for %s over %s",
        type_map.types,
        ", ".join(pm.destination_member for pm in property_maps),
    )
    return SynthesizedEquivalence(type_map.types, property_maps)
