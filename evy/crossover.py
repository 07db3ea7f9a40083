"""
Composable crossover for evy.

A Crossover is assembled from three independent callables:

- probability: ``() -> float``, the chance a pair recombines
- strategy: ``(first, second) -> None``, recombines two chromosomes in place
- generator: ``() -> float``, uniform draws in [0, 1)

Any of them can be swapped without touching the others.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from evy.interfaces import Chromosome, Population
from evy.rng import RandomSource

logger = logging.getLogger(__name__)

ProbabilityPolicy = Callable[[], float]
CrossoverStrategy = Callable[[List[float], List[float]], None]
ProbabilityGenerator = Callable[[], float]


class ConstantProbability:
    """Probability policy that always returns the same rate."""

    def __init__(self, probability: float):
        self.probability = probability

    def __call__(self) -> float:
        return self.probability

    def __repr__(self) -> str:
        return f"ConstantProbability({self.probability})"


class SinglePointCrossover:
    """
    Swaps the leading genes ``0..c`` (inclusive) of two chromosomes, with
    ``c`` drawn uniformly from every gene position.

    Genes keep their position, so both children stay within bounds.
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or RandomSource()

    def __call__(self, first: Chromosome, second: Chromosome) -> None:
        if len(first) != len(second):
            raise ValueError(
                f"cannot cross chromosomes of length {len(first)} and {len(second)}"
            )
        point = self.rng.randint(0, len(first) - 1)
        first[: point + 1], second[: point + 1] = (
            second[: point + 1],
            first[: point + 1],
        )


@dataclass
class Crossover:
    """Applies a strategy to consecutive pairs when the policy allows it."""

    probability: ProbabilityPolicy
    strategy: CrossoverStrategy
    generator: ProbabilityGenerator = field(default_factory=lambda: RandomSource().random)

    def __call__(self, population: Population) -> Population:
        """
        Recombine consecutive pairs (0, 1), (2, 3), ... of a population.

        The input is copied first; an odd trailing chromosome is passed
        through unchanged.

        Returns:
            New population with the input's size and order
        """
        offspring = [list(chromosome) for chromosome in population]
        crossed = 0

        for i in range(0, len(offspring) - 1, 2):
            if self.generator() < self.probability():
                self.strategy(offspring[i], offspring[i + 1])
                crossed += 1

        logger.debug(f"Crossed {crossed}/{len(offspring) // 2} pairs")
        return offspring
