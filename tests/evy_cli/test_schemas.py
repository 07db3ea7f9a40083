"""
Tests for pydantic input and report schemas.
"""

import json

import pytest
from pydantic import ValidationError

from evy.engine import EvolutionConfig, GeneticAlgorithm
from evy.problems import make_benchmark
from evy_cli.schemas import BenchmarkName, ProblemInput, RunReport


class TestProblemInput:
    def test_defaults(self):
        problem = ProblemInput()
        assert problem.name == BenchmarkName.SPHERE
        assert problem.dimensions == 2

    def test_name_from_string(self):
        assert ProblemInput(name="rastrigin").name == BenchmarkName.RASTRIGIN

    def test_unknown_name_rejected(self):
        with pytest.raises(ValidationError):
            ProblemInput(name="himmelblau")

    def test_zero_dimensions_rejected(self):
        with pytest.raises(ValidationError):
            ProblemInput(dimensions=0)

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValidationError):
            ProblemInput(lower=2.0, upper=1.0)

    def test_one_sided_bound_allowed(self):
        assert ProblemInput(lower=-1.0).upper is None

    def test_names_match_benchmarks(self):
        from evy.problems import BENCHMARKS

        assert {name.value for name in BenchmarkName} == set(BENCHMARKS)


class TestRunReport:
    def test_from_result(self):
        config = EvolutionConfig(pop_number=6, max_iterations=4, k_tournament=2, seed=3)
        result = GeneticAlgorithm(config).evolve(make_benchmark("sphere", 3))

        report = RunReport.from_result(result, "sphere", config.to_dict())

        assert report.run_id == str(result.run_id)
        assert report.num_parameters == 3
        assert report.best_chromosome == result.best_chromosome
        assert report.best_score == result.best_score
        assert len(report.history) == 4
        assert report.config["pop_number"] == 6

    def test_serializes_to_json(self):
        config = EvolutionConfig(pop_number=4, max_iterations=2, k_tournament=1, seed=3)
        result = GeneticAlgorithm(config).evolve(make_benchmark("sphere", 2))

        data = json.loads(
            RunReport.from_result(result, "sphere", config.to_dict()).model_dump_json()
        )

        assert data["problem"] == "sphere"
        assert data["generations"] == 2
        assert [entry["generation"] for entry in data["history"]] == [0, 1]
