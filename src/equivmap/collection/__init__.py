"""Equivalence-based collection reconciliation strategies."""

from __future__ import annotations

from .mappers import EquivalentListMapper, EquivalentSetMapper
from .reconcile import ElementMatches, ReconciliationResult, match_elements, reconcile_collection

__all__ = [
    "ElementMatches",
    "EquivalentListMapper",
    "EquivalentSetMapper",
    "ReconciliationResult",
    "match_elements",
    "reconcile_collection",
]
