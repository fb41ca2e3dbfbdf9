"""SQLAlchemy adapter for equivmap."""

from __future__ import annotations

from .persist import equivalence_criteria, find_equivalent, persist_equivalent
from .providers import primary_key_names, primary_key_property_maps

__all__ = [
    "equivalence_criteria",
    "find_equivalent",
    "persist_equivalent",
    "primary_key_names",
    "primary_key_property_maps",
]
