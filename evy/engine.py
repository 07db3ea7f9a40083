"""
Genetic algorithm engine for evy.
Central orchestrator for the generational evolution loop.
"""

import logging
import statistics
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import UUID, uuid4

from evy.crossover import Crossover, ConstantProbability, SinglePointCrossover
from evy.errors import ConfigurationError
from evy.interfaces import (
    DEFAULT_CROSSOVER_PROBABILITY,
    DEFAULT_K_TOURNAMENT,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MUTATION_PROBABILITY,
    DEFAULT_POP_NUMBER,
    Chromosome,
    Population,
    ScoreTable,
    validate_problem,
)
from evy.logging_config import get_logger
from evy.mutation import UniformMutation
from evy.population import Evaluator, UniformInitializer
from evy.rng import RandomSource
from evy.selection import TournamentSelector

logger = logging.getLogger(__name__)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class EvolutionConfig:
    """
    Configuration for the genetic algorithm.

    ``k_tournament`` is the number of rivals per tournament: each
    tournament draws ``k_tournament + 1`` distinct competitors, which must
    not exceed ``pop_number``.

    By default the reported best comes from the last evaluated population,
    i.e. before the final generation's crossover and mutation. Set
    ``evaluate_final_population`` to score the final population instead.
    """

    pop_number: int = DEFAULT_POP_NUMBER
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    k_tournament: int = DEFAULT_K_TOURNAMENT
    crossover_probability: float = DEFAULT_CROSSOVER_PROBABILITY
    mutation_probability: float = DEFAULT_MUTATION_PROBABILITY
    evaluate_final_population: bool = False
    seed: Optional[int] = None

    def validate(self) -> None:
        """
        Check every option, reporting all violations at once.

        Raises:
            ConfigurationError: if any option is out of range
        """
        errors: List[str] = []

        if not _is_int(self.pop_number) or self.pop_number <= 0:
            errors.append(f"pop_number must be a positive integer, got {self.pop_number!r}")
        if not _is_int(self.max_iterations) or self.max_iterations < 0:
            errors.append(
                f"max_iterations must be a non-negative integer, got {self.max_iterations!r}"
            )
        if not _is_int(self.k_tournament) or self.k_tournament < 1:
            errors.append(f"k_tournament must be an integer >= 1, got {self.k_tournament!r}")
        elif (
            _is_int(self.pop_number)
            and self.pop_number > 0
            and self.k_tournament + 1 > self.pop_number
        ):
            errors.append(
                f"k_tournament + 1 ({self.k_tournament + 1} competitors) exceeds "
                f"pop_number ({self.pop_number})"
            )

        for name in ("crossover_probability", "mutation_probability"):
            value = getattr(self, name)
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or not 0.0 <= value <= 1.0
            ):
                errors.append(f"{name} must be within [0, 1], got {value!r}")

        if self.seed is not None and not _is_int(self.seed):
            errors.append(f"seed must be an integer, got {self.seed!r}")

        if errors:
            raise ConfigurationError(errors)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class GenerationSummary:
    """Score statistics of one evaluated generation"""

    generation: int
    best_score: float
    mean_score: float
    duration_seconds: float


@dataclass
class EvolutionResult:
    """Result of a complete run"""

    run_id: UUID
    best_chromosome: Chromosome
    best_score: float
    generations: int
    population: Population
    scored_population: Population
    scores: ScoreTable
    history: List[GenerationSummary]
    duration_seconds: float
    timestamp: datetime = field(default_factory=datetime.now)


class GeneticAlgorithm:
    """
    Generational genetic algorithm maximizing a black-box objective.

    Each generation evaluates the current population, selects parents by
    tournament, recombines consecutive pairs and mutates the offspring,
    which then replace the population wholesale. Every operator can be
    injected; defaults draw from independent RandomSource children of
    one root source, seeded from ``config.seed`` when given.
    """

    def __init__(
        self,
        config: Optional[EvolutionConfig] = None,
        *,
        rng: Optional[RandomSource] = None,
        initializer: Optional[UniformInitializer] = None,
        evaluator: Optional[Evaluator] = None,
        selector: Optional[TournamentSelector] = None,
        crossover: Optional[Callable[[Population], Population]] = None,
        mutation: Optional[UniformMutation] = None,
    ):
        self.config = config or EvolutionConfig()
        self.config.validate()

        root = rng or RandomSource(self.config.seed)
        self.initializer = initializer or UniformInitializer(
            self.config.pop_number, root.spawn()
        )
        self.evaluator = evaluator or Evaluator()
        self.selector = selector or TournamentSelector(
            self.config.k_tournament, root.spawn()
        )
        self.crossover = crossover or Crossover(
            probability=ConstantProbability(self.config.crossover_probability),
            strategy=SinglePointCrossover(root.spawn()),
            generator=root.spawn().random,
        )
        self.mutation = mutation or UniformMutation(
            self.config.mutation_probability, root.spawn()
        )

        self.current_generation = 0
        self.population: Population = []
        self.scores: ScoreTable = []
        self.event_listeners: List[Tuple[str, Callable]] = []
        self.log = get_logger(__name__)

    def run(self, problem) -> Chromosome:
        """Run the algorithm and return the best chromosome found."""
        return self.evolve(problem).best_chromosome

    def evolve(self, problem) -> EvolutionResult:
        """
        Run the full generation loop.

        Steps per generation:
        1. Evaluate current population
        2. Select parents by tournament
        3. Cross over consecutive pairs
        4. Mutate offspring into the next population

        Raises:
            MalformedProblem: before any sampling, if the bounds are inconsistent
            ObjectiveFailure: as soon as the objective fails; no partial result
        """
        validate_problem(problem)
        constraints = list(problem.constraints)

        run_id = uuid4()
        start_time = time.perf_counter()
        self.log.set_context(run_id=str(run_id))
        self.log.evolution_started(problem.num_parameters, self.config.pop_number)
        self._emit_event(
            "evolution_started", {"run_id": run_id, "config": self.config.to_dict()}
        )

        try:
            population = self.initializer.initialize(problem)
            scored_population: Population = population
            scores: ScoreTable = []
            history: List[GenerationSummary] = []

            for generation in range(self.config.max_iterations):
                self.current_generation = generation
                generation_start = time.perf_counter()
                self.log.generation_start(generation, len(population))

                scores = self.evaluator.evaluate(population, problem)
                scored_population = population
                self.population, self.scores = population, scores

                parents = self.selector.select(population, scores)
                offspring = self.crossover(parents)
                population = self.mutation.mutate(offspring, constraints)

                summary = GenerationSummary(
                    generation=generation,
                    best_score=max(scores),
                    mean_score=statistics.fmean(scores),
                    duration_seconds=time.perf_counter() - generation_start,
                )
                history.append(summary)
                self.log.generation_complete(
                    generation,
                    summary.best_score,
                    summary.mean_score,
                    int(summary.duration_seconds * 1000),
                )
                self._emit_event(
                    "generation_completed",
                    {
                        "run_id": run_id,
                        "summary": summary,
                        "scores": list(scores),
                        "population": [list(c) for c in population],
                    },
                )

            if not scores or self.config.evaluate_final_population:
                scores = self.evaluator.evaluate(population, problem)
                scored_population = population

            self.population, self.scores = population, scores
            best_index = max(range(len(scores)), key=scores.__getitem__)
            duration = time.perf_counter() - start_time

            result = EvolutionResult(
                run_id=run_id,
                best_chromosome=list(scored_population[best_index]),
                best_score=scores[best_index],
                generations=self.config.max_iterations,
                population=population,
                scored_population=scored_population,
                scores=scores,
                history=history,
                duration_seconds=duration,
            )

            self.log.evolution_complete(
                result.generations, result.best_score, int(duration * 1000)
            )
            self._emit_event(
                "evolution_completed", {"run_id": run_id, "result": result}
            )
            return result

        except Exception as e:
            self.log.error(
                f"Evolution run {run_id} failed: {e}", event_type="evolution_failed"
            )
            self._emit_event("evolution_failed", {"run_id": run_id, "error": str(e)})
            raise
        finally:
            self.log.clear_context()

    def add_event_listener(self, event_type: str, callback: Callable):
        """Add event listener for evolution events"""
        self.event_listeners.append((event_type, callback))

    def _emit_event(self, event_type: str, data: Dict[str, Any]):
        """Emit event to all registered listeners"""
        for listener_type, callback in self.event_listeners:
            if listener_type == event_type:
                try:
                    callback(data)
                except Exception:
                    logger.exception(f"Event listener for {event_type} failed")
