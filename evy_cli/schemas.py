"""
Pydantic schemas for CLI inputs and reports.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from evy.engine import EvolutionResult


class BenchmarkName(str, Enum):
    """Built-in benchmark problems."""

    SPHERE = "sphere"
    RASTRIGIN = "rastrigin"
    ROSENBROCK = "rosenbrock"
    ACKLEY = "ackley"
    GRIEWANK = "griewank"


# ============= Input Schemas =============


class ProblemInput(BaseModel):
    """Benchmark problem to optimize."""

    name: BenchmarkName = Field(
        default=BenchmarkName.SPHERE, description="Benchmark function"
    )
    dimensions: int = Field(default=2, ge=1, le=10000, description="Parameter count")
    lower: Optional[float] = Field(
        default=None, description="Lower bound for every parameter"
    )
    upper: Optional[float] = Field(
        default=None, description="Upper bound for every parameter"
    )

    @model_validator(mode="after")
    def check_bounds(self) -> "ProblemInput":
        if self.lower is not None and self.upper is not None and self.lower > self.upper:
            raise ValueError(f"lower ({self.lower}) must not exceed upper ({self.upper})")
        return self


# ============= Output Schemas =============


class GenerationEntry(BaseModel):
    """Score statistics of one generation."""

    generation: int
    best_score: float
    mean_score: float
    duration_seconds: float


class RunReport(BaseModel):
    """Serializable outcome of a run."""

    run_id: str
    problem: str
    num_parameters: int
    best_chromosome: List[float]
    best_score: float
    generations: int
    duration_seconds: float
    timestamp: str
    config: Dict[str, Any] = Field(default_factory=dict)
    history: List[GenerationEntry] = Field(default_factory=list)

    @classmethod
    def from_result(
        cls, result: EvolutionResult, problem: str, config: Dict[str, Any]
    ) -> "RunReport":
        return cls(
            run_id=str(result.run_id),
            problem=problem,
            num_parameters=len(result.best_chromosome),
            best_chromosome=result.best_chromosome,
            best_score=result.best_score,
            generations=result.generations,
            duration_seconds=result.duration_seconds,
            timestamp=result.timestamp.isoformat(),
            config=config,
            history=[
                GenerationEntry(
                    generation=s.generation,
                    best_score=s.best_score,
                    mean_score=s.mean_score,
                    duration_seconds=s.duration_seconds,
                )
                for s in result.history
            ],
        )
