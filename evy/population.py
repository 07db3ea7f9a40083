"""
Population creation and fitness evaluation for evy.
"""

import logging
from typing import Optional

from evy.errors import ObjectiveFailure
from evy.interfaces import Population, ScoreTable
from evy.rng import RandomSource

logger = logging.getLogger(__name__)


class UniformInitializer:
    """
    Builds the first population by sampling every gene uniformly
    within its position's bounds.
    """

    def __init__(self, pop_number: int, rng: Optional[RandomSource] = None):
        self.pop_number = pop_number
        self.rng = rng or RandomSource()

    def initialize(self, problem) -> Population:
        """
        Generate the initial population for a problem.

        Args:
            problem: Object exposing num_parameters and constraints

        Returns:
            List of pop_number chromosomes, each feasible by construction
        """
        constraints = list(problem.constraints)
        population = [
            [self.rng.uniform(lower, upper) for lower, upper in constraints]
            for _ in range(self.pop_number)
        ]

        logger.debug(
            f"Initialized {len(population)} chromosomes with "
            f"{problem.num_parameters} parameters"
        )
        return population


class Evaluator:
    """Maps a population to an index-aligned score table."""

    def __init__(self):
        self.evaluations = 0

    def evaluate(self, population: Population, problem) -> ScoreTable:
        """
        Score every chromosome exactly once.

        The objective receives a copy of each chromosome, so the
        population itself is never touched.

        Raises:
            ObjectiveFailure: if the objective raises for any chromosome
        """
        scores: ScoreTable = []
        for index, chromosome in enumerate(population):
            try:
                score = float(problem.objective(list(chromosome)))
            except Exception as e:
                raise ObjectiveFailure(index, chromosome, str(e)) from e
            scores.append(score)

        self.evaluations += len(scores)
        return scores
