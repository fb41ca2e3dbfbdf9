"""Adapters binding equivalence resolution to persistence libraries."""
