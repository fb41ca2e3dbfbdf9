"""Errors raised by the mapping engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import TypePair


class MappingError(RuntimeError):
    """Raised when a value cannot be mapped to the requested destination type."""


class MissingTypeMapError(MappingError):
    """Raised when no type map was declared for a source/destination pair."""

    def __init__(self, types: TypePair) -> None:
        self.types = types
        super().__init__(f"No type map declared for {types}")


class ConfigurationSealedError(MappingError):
    """Raised when a builder is used after its configuration was sealed."""
