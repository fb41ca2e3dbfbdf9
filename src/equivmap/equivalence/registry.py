"""Per-configuration equivalence cache and the builder-scoped staging area.

Lifecycle:
1) declarations accumulate on an ``EquivalenceStaging`` owned by one builder
2) when the builder seals, ``EquivalenceRegistry.commit`` moves the staging into
   a partition keyed by the finalized configuration and closes the staging
3) at map time ``resolve`` returns the memoized equivalence or synthesizes it

Each partition is computed at most once per type pair: racing resolvers may all
synthesize a candidate, but only the first one is installed and every caller
gets the installed value.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final
from weakref import WeakKeyDictionary

from .errors import RegistryContractError, StagingClosedError
from .functions import NO_EQUIVALENCE, NoEquivalence
from .providers import declared_property_maps
from .synthesis import synthesize_equivalence

if TYPE_CHECKING:
    from typing import Any

    from equivmap.mapping import MapperConfiguration, MapperConfigurationBuilder, TypeMap, TypePair

    from .functions import EquivalenceFunction
    from .providers import PropertyMapProvider

log = logging.getLogger(__name__)

STAGING_KEY: Final[str] = "equivmap.equivalence"

type CachedEquivalence = EquivalenceFunction | NoEquivalence


@dataclass(slots=True)
class EquivalenceStaging:
    """Declarations made while one configuration is being built."""

    explicit: dict[TypePair, EquivalenceFunction] = field(
        default_factory=dict["TypePair", "EquivalenceFunction"]
    )
    providers: list[PropertyMapProvider] = field(default_factory=list["PropertyMapProvider"])
    collection_mappers_added: bool = False
    committed: bool = False

    def declare_explicit(self, types: TypePair, function: EquivalenceFunction) -> None:
        """Register or replace the explicit equivalence for ``types``."""

        self._ensure_open()
        if types in self.explicit:
            log.debug("Replacing explicit equivalence for %s", types)
        self.explicit[types] = function

    def declare_property_map_provider(self, provider: PropertyMapProvider) -> None:
        self._ensure_open()
        self.providers.append(provider)

    def _ensure_open(self) -> None:
        if self.committed:
            raise StagingClosedError("Equivalence declarations are closed after commit")


def staging_for(builder: MapperConfigurationBuilder) -> EquivalenceStaging:
    """Return the staging area owned by ``builder``, creating it on first use."""

    staging = builder.extensions.get(STAGING_KEY)
    if staging is None:
        staging = EquivalenceStaging()
        builder.extensions[STAGING_KEY] = staging
    return staging


@dataclass(slots=True)
class _Partition:
    providers: tuple[PropertyMapProvider, ...]
    equivalences: dict[TypePair, CachedEquivalence]
    lock: threading.Lock = field(default_factory=threading.Lock)

    def install(self, types: TypePair, candidate: CachedEquivalence) -> CachedEquivalence:
        with self.lock:
            return self.equivalences.setdefault(types, candidate)


class EquivalenceRegistry:
    """Durable equivalence partitions, one per sealed configuration."""

    def __init__(self) -> None:
        self._partitions: WeakKeyDictionary[MapperConfiguration, _Partition] = (
            WeakKeyDictionary()
        )
        self._lock = threading.Lock()

    def commit(self, configuration: MapperConfiguration, staging: EquivalenceStaging) -> None:
        """Move ``staging`` into the partition of ``configuration`` and close it."""

        if staging.committed:
            raise RegistryContractError("Equivalence staging was already committed")
        providers = tuple(staging.providers) or (declared_property_maps,)
        partition = _Partition(providers=providers, equivalences=dict(staging.explicit))
        with self._lock:
            if configuration in self._partitions:
                raise RegistryContractError("Configuration was already committed")
            self._partitions[configuration] = partition
        staging.committed = True
        log.debug(
            "Committed %d explicit equivalences and %d providers",
            len(staging.explicit),
            len(providers),
        )

    def is_committed(self, configuration: MapperConfiguration) -> bool:
        return configuration in self._partitions

    def resolve(
        self,
        configuration: MapperConfiguration,
        type_map: TypeMap,
    ) -> EquivalenceFunction | None:
        """Return the equivalence for ``type_map`` or ``None`` when there is none."""

        partition = self._partition(configuration)
        cached = partition.equivalences.get(type_map.types)
        if cached is None:
            candidate = synthesize_equivalence(type_map, partition.providers)
            cached = partition.install(type_map.types, candidate)
        if cached is NO_EQUIVALENCE:
            return None
        return cached  # type: ignore[return-value]

    def resolve_types(
        self,
        configuration: MapperConfiguration,
        source_type: Any,
        destination_type: Any,
    ) -> EquivalenceFunction | None:
        type_map = configuration.find_type_map(source_type, destination_type)
        if type_map is None:
            self._partition(configuration)
            return None
        return self.resolve(configuration, type_map)

    def _partition(self, configuration: MapperConfiguration) -> _Partition:
        partition = self._partitions.get(configuration)
        if partition is None:
            raise RegistryContractError(
                "Configuration has no equivalence partition; "
                "add_collection_mappers() must be called before build()"
            )
        return partition


default_registry = EquivalenceRegistry()
