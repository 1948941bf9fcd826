"""Seedable random source shared by map generation and gameplay."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import numpy as np

T = TypeVar("T")

SEED_MASK = (1 << 64) - 1


class RandomSource:
    """Thin wrapper over a NumPy ``Generator``.

    Each consumer receives its own instance, so reseeding one (for example
    regenerating a map) never disturbs the stream another one draws from.
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is not None:
            seed &= SEED_MASK
        self.seed = seed
        self._gen = np.random.default_rng(seed)

    def uniform(self) -> float:
        """Return a float in [0, 1)."""
        return float(self._gen.random())

    def randrange(self, low: int, high: int) -> int:
        """Return an integer in [low, high)."""
        if high <= low:
            raise ValueError("randrange requires high > low.")
        return int(self._gen.integers(low, high))

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element uniformly."""
        if not items:
            raise ValueError("cannot choose from an empty sequence.")
        return items[self.randrange(0, len(items))]
