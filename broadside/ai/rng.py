"""Seeded linear congruential random source."""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

_MULTIPLIER = 1664525
_INCREMENT = 1013904223
_MODULUS = 2**32


def time_seed() -> int:
    """Return a millisecond wall-clock seed."""
    return time.time_ns() // 1_000_000


class SeededRNG:
    """Deterministic LCG; identical seeds reproduce identical sequences."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = time_seed()
        if not isinstance(seed, int) or isinstance(seed, bool):
            raise TypeError("seed must be an int")
        self._initial_seed = seed
        self._state = seed

    @property
    def seed(self) -> int:
        """Seed this generator was created with."""
        return self._initial_seed

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Advance the generator and return a float in ``[0, 1)``."""
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    def next_int(self, maximum: int) -> int:
        """Return an integer in ``[0, maximum)``."""
        if maximum <= 0:
            raise ValueError("maximum must be positive")
        return int(self.next() * maximum)

    def pick(self, items: Sequence[T]) -> T | None:
        """Return a uniformly chosen element, or ``None`` for an empty sequence."""
        if not items:
            return None
        return items[self.next_int(len(items))]
