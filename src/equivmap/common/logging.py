"""Shared logging helpers for equivmap."""

from __future__ import annotations

import logging

LIBRARY_LOGGER = "equivmap"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to INFO level and a terse format. Pass ``force=True`` to reconfigure during tests.
    The library logger is set to ``level`` as well so DEBUG output from synthesis and
    reconciliation becomes visible without touching unrelated loggers.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    logging.getLogger(LIBRARY_LOGGER).setLevel(level)
