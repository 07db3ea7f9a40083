"""
Tournament selection for evy.
"""

import logging
from typing import List, Optional, Sequence

from evy.interfaces import Population, ScoreTable
from evy.rng import RandomSource

logger = logging.getLogger(__name__)


class TournamentSelector:
    """
    Fills every parent slot with the winner of an independent tournament.

    Each tournament draws ``k_tournament + 1`` distinct competitors, so
    ``k_tournament`` counts the rivals a candidate faces rather than the
    number of entrants.
    """

    def __init__(self, k_tournament: int, rng: Optional[RandomSource] = None):
        self.k_tournament = k_tournament
        self.rng = rng or RandomSource()

    @property
    def competitors(self) -> int:
        return self.k_tournament + 1

    def select(self, population: Population, scores: ScoreTable) -> Population:
        """
        Select a new parent population of the same size.

        Args:
            population: Current population
            scores: Scores index-aligned with population

        Returns:
            New population of copied winners; the same chromosome may win
            several slots
        """
        if len(population) != len(scores):
            raise ValueError(
                f"population has {len(population)} chromosomes but "
                f"{len(scores)} scores"
            )

        parents: Population = []
        for _ in range(len(population)):
            indices = self.pick_competitors(len(population))
            winner = self.tournament(indices, scores)
            parents.append(list(population[winner]))

        logger.debug(
            f"Selected {len(parents)} parents with {self.competitors}-way tournaments"
        )
        return parents

    def pick_competitors(self, pop_number: int) -> List[int]:
        """Draw k_tournament + 1 distinct indices from [0, pop_number)."""
        return self.rng.sample_indices(pop_number, self.competitors)

    @staticmethod
    def tournament(indices: Sequence[int], scores: ScoreTable) -> int:
        """Return the competitor with the highest score; the earliest wins ties."""
        best = indices[0]
        for index in indices[1:]:
            if scores[index] > scores[best]:
                best = index
        return best
