"""Single seedable source for every random decision in the service.

Model pair selection, response-time jitter, model B fragment perturbation,
leaderboard noise and suggestion shuffling all draw from one RandomSource.
Tests construct it with a fixed seed to get reproducible runs.
"""

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class RandomSource:
    """Thin wrapper over random.Random with the draws the service needs."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self._rng.random() < probability

    def randrange(self, start: int, stop: int) -> int:
        """Uniform integer in [start, stop)."""
        return self._rng.randrange(start, stop)

    def choice(self, items: Sequence[T]) -> T:
        return self._rng.choice(items)

    def sample(self, items: Sequence[T], k: int) -> list[T]:
        """Draw k distinct items without replacement (k is clamped to len)."""
        return self._rng.sample(list(items), min(k, len(items)))

    def shuffled(self, items: Sequence[T]) -> list[T]:
        result = list(items)
        self._rng.shuffle(result)
        return result
