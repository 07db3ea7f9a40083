"""
Problem adapters and benchmark functions for evy.

Benchmarks are classic minimization test functions negated into
maximization form, so the optimum of each is a score of 0.
"""

import math
from typing import Callable, Dict, List, Optional, Sequence

from evy.interfaces import Bounds, OptimizationProblem


class FunctionProblem(OptimizationProblem):
    """Adapts a plain callable and its bounds to OptimizationProblem."""

    def __init__(
        self,
        objective: Callable[[Sequence[float]], float],
        constraints: Sequence[Bounds],
        name: str = "",
    ):
        self._objective = objective
        self._constraints = [tuple(pair) for pair in constraints]
        self.name = name or getattr(objective, "__name__", "objective")

    @property
    def num_parameters(self) -> int:
        return len(self._constraints)

    @property
    def constraints(self) -> List[Bounds]:
        return list(self._constraints)

    def objective(self, chromosome: Sequence[float]) -> float:
        return self._objective(chromosome)

    def __repr__(self) -> str:
        return f"FunctionProblem({self.name!r}, num_parameters={self.num_parameters})"


def uniform_bounds(num_parameters: int, lower: float, upper: float) -> List[Bounds]:
    """Same (lower, upper) pair for every position."""
    return [(lower, upper) for _ in range(num_parameters)]


# Benchmark functions (maximization form)


def sphere(x: Sequence[float]) -> float:
    return -sum(v * v for v in x)


def rastrigin(x: Sequence[float]) -> float:
    return -sum(v * v - 10.0 * math.cos(2.0 * math.pi * v) + 10.0 for v in x)


def rosenbrock(x: Sequence[float]) -> float:
    if len(x) < 2:
        return 0.0
    return -sum(
        100.0 * (x[i] * x[i] - x[i + 1]) ** 2 + (x[i] - 1.0) ** 2
        for i in range(len(x) - 1)
    )


def ackley(x: Sequence[float]) -> float:
    d = len(x)
    sum_sq = sum(v * v for v in x)
    sum_cos = sum(math.cos(2.0 * math.pi * v) for v in x)
    value = 20.0 - 20.0 * math.exp(-0.2 * math.sqrt(sum_sq / d)) - math.exp(sum_cos / d) + math.e
    return -value


def griewank(x: Sequence[float]) -> float:
    sum_term = sum(v * v for v in x) / 4000.0
    prod_term = 1.0
    for i, v in enumerate(x, start=1):
        prod_term *= math.cos(v / math.sqrt(i))
    return -(sum_term - prod_term + 1.0)


BENCHMARKS: Dict[str, Callable[[Sequence[float]], float]] = {
    "sphere": sphere,
    "rastrigin": rastrigin,
    "rosenbrock": rosenbrock,
    "ackley": ackley,
    "griewank": griewank,
}

# Conventional search domains
DEFAULT_BOUNDS: Dict[str, Bounds] = {
    "sphere": (-5.12, 5.12),
    "rastrigin": (-5.12, 5.12),
    "rosenbrock": (-2.048, 2.048),
    "ackley": (-32.768, 32.768),
    "griewank": (-600.0, 600.0),
}


def make_benchmark(
    name: str,
    num_parameters: int,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> FunctionProblem:
    """
    Build a named benchmark problem.

    Args:
        name: Key of BENCHMARKS
        num_parameters: Dimensionality
        lower: Lower bound for every position; conventional domain if omitted
        upper: Upper bound for every position; conventional domain if omitted

    Raises:
        KeyError: if the benchmark is unknown
    """
    if name not in BENCHMARKS:
        raise KeyError(f"Unknown benchmark {name!r}; available: {sorted(BENCHMARKS)}")

    default_lower, default_upper = DEFAULT_BOUNDS[name]
    lower = default_lower if lower is None else lower
    upper = default_upper if upper is None else upper

    return FunctionProblem(
        BENCHMARKS[name], uniform_bounds(num_parameters, lower, upper), name=name
    )
