"""
Injectable randomness for evy operators.
Every operator owns a RandomSource; seeding one makes that operator reproducible.
"""

import random
from typing import List, MutableSequence, Optional

_SPAWN_BITS = 64


class RandomSource:
    """
    Uniform reals, bounded integers and shuffles backed by ``random.Random``.

    An unseeded source draws its seed from system entropy, so two default
    sources never share a stream.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random(self) -> float:
        """Uniform real in [0, 1)."""
        return self._random.random()

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""
        return self._random.randint(low, high)

    def uniform(self, lower: float, upper: float) -> float:
        """
        Uniform real in [lower, upper].

        Interpolates instead of scaling ``upper - lower``, which overflows
        for intervals wider than the largest float.
        """
        r = self.random()
        value = lower * (1.0 - r) + upper * r
        return min(max(value, lower), upper)

    def shuffle(self, items: MutableSequence) -> None:
        """Shuffle items in place."""
        self._random.shuffle(items)

    def sample_indices(self, population_size: int, count: int) -> List[int]:
        """
        Draw count distinct indices from [0, population_size).

        Shuffles the full index range and keeps the prefix.
        """
        if count > population_size:
            raise ValueError(
                f"cannot draw {count} distinct indices from {population_size}"
            )
        indices = list(range(population_size))
        self.shuffle(indices)
        return indices[:count]

    def spawn(self) -> "RandomSource":
        """Derive an independent child source seeded from this stream."""
        return RandomSource(self._random.getrandbits(_SPAWN_BITS))

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r})"
