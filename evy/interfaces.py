"""evy: Core Interface Definitions"""

import math
from abc import ABC, abstractmethod
from numbers import Real
from typing import List, Sequence, Tuple

from evy.errors import MalformedProblem

# Type Aliases

Gene = float
Chromosome = List[float]
Population = List[Chromosome]
ScoreTable = List[float]
Bounds = Tuple[float, float]


# Core Interfaces


class OptimizationProblem(ABC):
    """Black-box maximization problem; higher objective is better."""

    @property
    @abstractmethod
    def num_parameters(self) -> int:
        pass

    @property
    @abstractmethod
    def constraints(self) -> Sequence[Bounds]:
        pass

    @abstractmethod
    def objective(self, chromosome: Sequence[float]) -> float:
        pass


def validate_problem(problem) -> None:
    """
    Check that a problem's bounds are consistent with its parameter count.

    Duck-typed: any object exposing ``num_parameters``, ``constraints`` and
    ``objective`` is accepted.

    Raises:
        MalformedProblem: listing every inconsistency found
    """
    errors: List[str] = []
    num_parameters = problem.num_parameters
    constraints = list(problem.constraints)

    if not isinstance(num_parameters, int) or num_parameters < 1:
        errors.append(f"num_parameters must be a positive integer, got {num_parameters!r}")
    elif len(constraints) != num_parameters:
        errors.append(
            f"expected {num_parameters} bound pairs, got {len(constraints)}"
        )

    for position, pair in enumerate(constraints):
        try:
            lower, upper = pair
        except (TypeError, ValueError):
            errors.append(f"bounds at position {position} must be a (lower, upper) pair")
            continue
        if not isinstance(lower, Real) or not isinstance(upper, Real):
            errors.append(f"bounds at position {position} must be numbers")
        elif math.isnan(lower) or math.isnan(upper):
            errors.append(f"bounds at position {position} contain NaN")
        elif math.isinf(lower) or math.isinf(upper):
            errors.append(f"bounds at position {position} must be finite")
        elif lower > upper:
            errors.append(
                f"lower bound {lower} exceeds upper bound {upper} at position {position}"
            )

    if not callable(getattr(problem, "objective", None)):
        errors.append("problem has no callable objective")

    if errors:
        raise MalformedProblem(errors)


# Constants (Defaults)

DEFAULT_POP_NUMBER = 50
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_K_TOURNAMENT = 2
DEFAULT_CROSSOVER_PROBABILITY = 0.7
DEFAULT_MUTATION_PROBABILITY = 0.1
