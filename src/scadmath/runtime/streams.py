"""
Pseudo-random generator streams used by rands().

A stream owns one Mersenne Twister generator. Sampling advances its state,
so every draw and reseed goes through the stream's lock; a reseed followed
by its draws is performed as one critical section.
"""

from __future__ import annotations

import logging
import math
import os
import random as _random
import threading
import time
from typing import Optional

logger = logging.getLogger("scadmath.random")


def entropy_seed() -> int:
    """Wall-clock seconds mixed with the process id."""
    return int(time.time()) + os.getpid()


def seed_from_double(x: float) -> int:
    """Truncate a script number to an unsigned 32-bit seed."""
    if not math.isfinite(x):
        return 0
    return int(x) % (1 << 32)


class RandomStream:
    """A named, lock-protected generator stream."""

    def __init__(self, name: str, seed: Optional[int] = None) -> None:
        self.name = name
        self._rng = _random.Random(seed)
        self._lock = threading.Lock()

    def seed(self, seed: int) -> None:
        with self._lock:
            self._rng.seed(seed)

    def uniform(self, low: float, high: float, count: int, seed: Optional[int] = None) -> list[float]:
        """
        Draw count values uniformly from [low, high).

        If seed is given the stream is reseeded first, atomically with the
        draws that follow.
        """
        with self._lock:
            if seed is not None:
                logger.debug("Reseeding %s stream with %d", self.name, seed)
                self._rng.seed(seed)
            span = high - low
            return [low + span * self._rng.random() for _ in range(count)]


__all__ = ["RandomStream", "entropy_seed", "seed_from_double"]
