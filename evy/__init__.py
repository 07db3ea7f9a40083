"""
evy: generic real-valued genetic algorithm.
Tournament selection, composable crossover and uniform mutation over bounded parameters.
"""

from .crossover import ConstantProbability, Crossover, SinglePointCrossover
from .engine import EvolutionConfig, EvolutionResult, GeneticAlgorithm, GenerationSummary
from .errors import ConfigurationError, EvyError, MalformedProblem, ObjectiveFailure
from .interfaces import OptimizationProblem, validate_problem
from .mutation import UniformMutation
from .population import Evaluator, UniformInitializer
from .problems import BENCHMARKS, FunctionProblem, make_benchmark, uniform_bounds
from .rng import RandomSource
from .selection import TournamentSelector

__version__ = "0.1.0"

__all__ = [
    "GeneticAlgorithm",
    "EvolutionConfig",
    "EvolutionResult",
    "GenerationSummary",
    "RandomSource",
    "UniformInitializer",
    "Evaluator",
    "TournamentSelector",
    "Crossover",
    "ConstantProbability",
    "SinglePointCrossover",
    "UniformMutation",
    "OptimizationProblem",
    "validate_problem",
    "FunctionProblem",
    "make_benchmark",
    "uniform_bounds",
    "BENCHMARKS",
    "EvyError",
    "ConfigurationError",
    "MalformedProblem",
    "ObjectiveFailure",
]
