"""Seeded random sources for reproducible mock data."""

from __future__ import annotations

import logging
import random

log = logging.getLogger(__name__)


def init_seed(seed: int | None) -> random.Random:
    """Return a dedicated Random instance for the record generators.

    ``None`` gives an unseeded instance (fresh data on every session).
    The global ``random`` module is left alone so that two sessions with
    different seeds never disturb each other.
    """
    rng = random.Random(seed)
    if seed is None:
        log.info("Random source created without seed")
    else:
        log.info("Random source seeded: %d", seed)
    return rng
