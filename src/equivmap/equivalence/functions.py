"""Equivalence functions: does a source object denote the same entity as a destination?

Three immutable variants share one capability, ``evaluate(source, destination)``:

- ``PredicateEquivalence`` wraps a hand-written two-argument callable
- ``MemberEquivalence`` compares one selected member on each side
- ``SynthesizedEquivalence`` is the conjunction over declared property maps

Type checks happen when a variant is constructed, never during evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, Protocol, final, runtime_checkable

from equivmap.mapping import member_type

from .errors import EquivalenceTypeError

if TYPE_CHECKING:
    from collections.abc import Callable

    from equivmap.mapping import PropertyMap, TypePair


type MemberSelector = str | Callable[[Any], object]


@runtime_checkable
class EquivalenceFunction(Protocol):
    """Predicate bound to one (source type, destination type) pair."""

    @property
    def types(self) -> TypePair: ...

    def evaluate(self, source: Any, destination: Any) -> bool: ...


@final
class NoEquivalence:
    """Marker for "synthesis was attempted and produced nothing"."""

    _instance: NoEquivalence | None = None

    def __new__(cls) -> NoEquivalence:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_EQUIVALENCE"


NO_EQUIVALENCE: Final = NoEquivalence()


def members_match(property_map: PropertyMap) -> bool:
    """True when both members of ``property_map`` declare the same value type."""

    if property_map.source_type is None or property_map.destination_type is None:
        return False
    return property_map.source_type == property_map.destination_type


@dataclass(frozen=True, slots=True)
class PredicateEquivalence:
    types: TypePair
    predicate: Callable[[Any, Any], object]

    def __post_init__(self) -> None:
        if not callable(self.predicate):
            raise EquivalenceTypeError(f"Equivalence for {self.types} must be callable")

    def evaluate(self, source: Any, destination: Any) -> bool:
        return bool(self.predicate(source, destination))

    def __call__(self, source: Any, destination: Any) -> bool:
        return self.evaluate(source, destination)


def _select(instance: Any, selector: MemberSelector) -> object:
    if isinstance(selector, str):
        return getattr(instance, selector)
    return selector(instance)


@dataclass(frozen=True, slots=True)
class MemberEquivalence:
    """Compare ``source_member`` of the source with ``destination_member`` of the destination.

    Selectors are attribute names or one-argument callables. When both are names
    and both declared types are known they must be identical.
    """

    types: TypePair
    source_member: MemberSelector
    destination_member: MemberSelector

    def __post_init__(self) -> None:
        for selector in (self.source_member, self.destination_member):
            if not isinstance(selector, str) and not callable(selector):
                raise EquivalenceTypeError(f"Invalid member selector {selector!r}")
        if not (isinstance(self.source_member, str) and isinstance(self.destination_member, str)):
            return
        source_type = member_type(self.types.source_type, self.source_member)
        destination_type = member_type(self.types.destination_type, self.destination_member)
        if source_type is None or destination_type is None:
            return
        if source_type != destination_type:
            raise EquivalenceTypeError(
                f"Cannot compare {self.types.source_type.__qualname__}.{self.source_member} "
                f"({source_type!r}) with "
                f"{self.types.destination_type.__qualname__}.{self.destination_member} "
                f"({destination_type!r})"
            )

    def source_value(self, source: Any) -> object:
        return _select(source, self.source_member)

    def evaluate(self, source: Any, destination: Any) -> bool:
        return _select(source, self.source_member) == _select(destination, self.destination_member)

    def __call__(self, source: Any, destination: Any) -> bool:
        return self.evaluate(source, destination)


@dataclass(frozen=True, slots=True)
class SynthesizedEquivalence:
    types: TypePair
    property_maps: tuple[PropertyMap, ...]

    def __post_init__(self) -> None:
        if not self.property_maps:
            raise EquivalenceTypeError(f"Synthesized equivalence for {self.types} has no members")
        mismatched = [pm.destination_member for pm in self.property_maps if not members_match(pm)]
        if mismatched:
            raise EquivalenceTypeError(
                f"Synthesized equivalence for {self.types} has mismatched members: "
                + ", ".join(mismatched)
            )

    @property
    def destination_members(self) -> tuple[str, ...]:
        return tuple(pm.destination_member for pm in self.property_maps)

    def evaluate(self, source: Any, destination: Any) -> bool:
        # left to right, stops at the first differing member
        return all(
            pm.read_source(source) == pm.read_destination(destination)
            for pm in self.property_maps
        )

    def __call__(self, source: Any, destination: Any) -> bool:
        return self.evaluate(source, destination)
