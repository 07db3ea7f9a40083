"""
Uniform resampling mutation for evy.
"""

import logging
from typing import Optional, Sequence

from evy.interfaces import Bounds, Population
from evy.rng import RandomSource

logger = logging.getLogger(__name__)


class UniformMutation:
    """
    Resamples at most one gene per chromosome.

    With probability ``mutation_probability`` a chromosome gets one position,
    chosen uniformly, overwritten by a fresh uniform draw from that
    position's bounds. The previous value plays no part in the new one.
    """

    def __init__(
        self, mutation_probability: float, rng: Optional[RandomSource] = None
    ):
        self.mutation_probability = mutation_probability
        self.rng = rng or RandomSource()

    def mutate(self, population: Population, constraints: Sequence[Bounds]) -> Population:
        """
        Return a mutated copy of the population.

        Args:
            population: Chromosomes to mutate; left untouched
            constraints: (lower, upper) pair per gene position
        """
        mutated: Population = []
        count = 0

        for chromosome in population:
            child = list(chromosome)
            if self.rng.random() < self.mutation_probability:
                position = self.rng.randint(0, len(child) - 1)
                lower, upper = constraints[position]
                child[position] = self.rng.uniform(lower, upper)
                count += 1
            mutated.append(child)

        logger.debug(f"Mutated {count}/{len(population)} chromosomes")
        return mutated
