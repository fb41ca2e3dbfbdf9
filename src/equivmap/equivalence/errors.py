"""Errors raised by the equivalence subsystem.

A missing equivalence is not an error: ``resolve`` returns ``None`` and the
collection strategies fall back to replacing the collection. Everything here is
a caller or configuration bug and is raised immediately.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from equivmap.mapping import TypePair


class EquivalenceError(RuntimeError):
    """Base class for equivalence contract violations."""


class RegistryContractError(EquivalenceError):
    """Raised when a configuration is resolved before commit or committed twice."""


class StagingClosedError(EquivalenceError):
    """Raised when declarations are made on staging that was already committed."""


class EquivalenceTypeError(EquivalenceError, TypeError):
    """Raised when an equivalence is declared between members of different types."""


class DuplicateRegistrationError(EquivalenceError):
    """Raised when collection mappers are added twice and duplicates are forbidden."""


class MissingEquivalenceError(EquivalenceError):
    """Raised by operations that cannot proceed without an equivalence."""

    def __init__(self, types: TypePair) -> None:
        self.types = types
        super().__init__(f"No equivalence available for {types}")
