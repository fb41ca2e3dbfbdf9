from __future__ import annotations

import gc
import weakref
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import pytest

from equivmap.equivalence import (
    EquivalenceRegistry,
    EquivalenceStaging,
    KeyMembersPropertyMaps,
    PredicateEquivalence,
    RegistryContractError,
    StagingClosedError,
    SynthesizedEquivalence,
    declared_property_maps,
)
from equivmap.mapping import MapperConfigurationBuilder, TypePair
from tests.helpers.models import Contact, ContactDto, Person, PersonDto

if TYPE_CHECKING:
    from collections.abc import Sequence

    from equivmap.mapping import MapperConfiguration, PropertyMap, TypeMap


class CountingProvider:
    def __init__(self, result: Sequence[PropertyMap] | None = None) -> None:
        self.calls = 0
        self.result = result

    def __call__(self, type_map: TypeMap) -> Sequence[PropertyMap]:
        self.calls += 1
        if self.result is None:
            return declared_property_maps(type_map)
        return self.result


def _configuration() -> MapperConfiguration:
    builder = MapperConfigurationBuilder()
    builder.create_map(Person, PersonDto)
    builder.create_map(ContactDto, Contact)
    return builder.build()


def _committed(
    registry: EquivalenceRegistry,
    staging: EquivalenceStaging | None = None,
) -> MapperConfiguration:
    configuration = _configuration()
    registry.commit(configuration, staging or EquivalenceStaging())
    return configuration


def test_resolve_memoizes_and_synthesizes_once(registry: EquivalenceRegistry) -> None:
    provider = CountingProvider()
    staging = EquivalenceStaging()
    staging.declare_property_map_provider(provider)
    configuration = _committed(registry, staging)
    type_map = configuration.resolve_type_map(Person, PersonDto)

    first = registry.resolve(configuration, type_map)
    second = registry.resolve(configuration, type_map)

    assert isinstance(first, SynthesizedEquivalence)
    assert first is second
    assert provider.calls == 1


def test_explicit_equivalence_overrides_synthesis(registry: EquivalenceRegistry) -> None:
    provider = CountingProvider()
    staging = EquivalenceStaging()
    staging.declare_property_map_provider(provider)
    explicit = PredicateEquivalence(TypePair(Person, PersonDto), lambda s, d: s.name == d.name)
    staging.declare_explicit(TypePair(Person, PersonDto), explicit)
    configuration = _committed(registry, staging)

    resolved = registry.resolve(configuration, configuration.resolve_type_map(Person, PersonDto))

    assert resolved is explicit
    assert provider.calls == 0


def test_last_explicit_declaration_wins() -> None:
    staging = EquivalenceStaging()
    types = TypePair(Person, PersonDto)
    first = PredicateEquivalence(types, lambda s, d: True)
    second = PredicateEquivalence(types, lambda s, d: False)

    staging.declare_explicit(types, first)
    staging.declare_explicit(types, second)

    assert staging.explicit[types] is second


def test_negative_synthesis_is_stable(registry: EquivalenceRegistry) -> None:
    provider = CountingProvider()
    staging = EquivalenceStaging()
    staging.declare_property_map_provider(provider)
    configuration = _committed(registry, staging)
    type_map = configuration.resolve_type_map(ContactDto, Contact)

    assert registry.resolve(configuration, type_map) is None
    assert registry.resolve(configuration, type_map) is None
    assert provider.calls == 1


def test_provider_precedence(registry: EquivalenceRegistry) -> None:
    empty = CountingProvider(result=())
    staging = EquivalenceStaging()
    staging.declare_property_map_provider(empty)
    staging.declare_property_map_provider(KeyMembersPropertyMaps("id"))
    configuration = _committed(registry, staging)

    resolved = registry.resolve(configuration, configuration.resolve_type_map(Person, PersonDto))

    assert isinstance(resolved, SynthesizedEquivalence)
    assert resolved.destination_members == ("id",)
    assert empty.calls == 1


def test_default_provider_used_when_none_registered(registry: EquivalenceRegistry) -> None:
    configuration = _committed(registry)

    resolved = registry.resolve_types(configuration, Person, PersonDto)

    assert isinstance(resolved, SynthesizedEquivalence)
    assert resolved.destination_members == ("id", "name")


def test_resolve_types_without_type_map_is_none(registry: EquivalenceRegistry) -> None:
    configuration = _committed(registry)

    assert registry.resolve_types(configuration, PersonDto, Person) is None


def test_resolve_before_commit_is_a_contract_violation(registry: EquivalenceRegistry) -> None:
    configuration = _configuration()

    with pytest.raises(RegistryContractError):
        registry.resolve(configuration, configuration.resolve_type_map(Person, PersonDto))
    with pytest.raises(RegistryContractError):
        registry.resolve_types(configuration, PersonDto, Person)


def test_commit_twice_is_a_contract_violation(registry: EquivalenceRegistry) -> None:
    configuration = _committed(registry)

    with pytest.raises(RegistryContractError, match="already committed"):
        registry.commit(configuration, EquivalenceStaging())


def test_staging_closes_after_commit(registry: EquivalenceRegistry) -> None:
    staging = EquivalenceStaging()
    _committed(registry, staging)

    assert staging.committed
    with pytest.raises(StagingClosedError):
        staging.declare_property_map_provider(declared_property_maps)
    with pytest.raises(RegistryContractError):
        registry.commit(_configuration(), staging)


def test_partitions_are_isolated(registry: EquivalenceRegistry) -> None:
    staging = EquivalenceStaging()
    staging.declare_property_map_provider(KeyMembersPropertyMaps("id"))
    keyed = _committed(registry, staging)
    default = _committed(registry)

    keyed_equivalence = registry.resolve_types(keyed, Person, PersonDto)
    default_equivalence = registry.resolve_types(default, Person, PersonDto)

    assert isinstance(keyed_equivalence, SynthesizedEquivalence)
    assert isinstance(default_equivalence, SynthesizedEquivalence)
    assert keyed_equivalence.destination_members == ("id",)
    assert default_equivalence.destination_members == ("id", "name")


def test_registry_does_not_keep_configurations_alive(registry: EquivalenceRegistry) -> None:
    configuration = _committed(registry)
    reference = weakref.ref(configuration)

    del configuration
    gc.collect()

    assert reference() is None


def test_concurrent_resolvers_observe_one_installed_value(
    registry: EquivalenceRegistry,
) -> None:
    configuration = _committed(registry)
    type_map = configuration.resolve_type_map(Person, PersonDto)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: registry.resolve(configuration, type_map), range(32)))

    assert results[0] is not None
    assert all(result is results[0] for result in results)
