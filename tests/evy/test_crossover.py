"""
Unit tests for the composable crossover operator.
"""

from typing import List

import pytest

from evy.crossover import ConstantProbability, Crossover, SinglePointCrossover
from evy.rng import RandomSource


class ScriptedRandomSource(RandomSource):
    """RandomSource replaying fixed crossover points"""

    def __init__(self, points: List[int]):
        super().__init__(0)
        self.points = list(points)
        self.requested = []

    def randint(self, low: int, high: int) -> int:
        self.requested.append((low, high))
        point = self.points.pop(0)
        assert low <= point <= high
        return point


class CountingGenerator:
    """Generator returning a constant draw and counting calls"""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def parents():
    return [
        [1.0, 2.0, 3.0, 4.0],
        [5.0, 6.0, 7.0, 8.0],
        [-1.0, -2.0, -3.0, -4.0],
        [-5.0, -6.0, -7.0, -8.0],
    ]


class TestConstantProbability:
    def test_returns_rate(self):
        assert ConstantProbability(0.3)() == 0.3


class TestSinglePointCrossover:
    """Test the single-point strategy in isolation."""

    def test_swaps_prefix_inclusive(self):
        first = [1.0, 2.0, 3.0, 4.0]
        second = [5.0, 6.0, 7.0, 8.0]

        SinglePointCrossover(ScriptedRandomSource([1]))(first, second)

        assert first == [5.0, 6.0, 3.0, 4.0]
        assert second == [1.0, 2.0, 7.0, 8.0]

    def test_point_zero_swaps_first_gene(self):
        first, second = [1.0, 2.0], [3.0, 4.0]
        SinglePointCrossover(ScriptedRandomSource([0]))(first, second)
        assert (first, second) == ([3.0, 2.0], [1.0, 4.0])

    def test_last_point_swaps_everything(self):
        first, second = [1.0, 2.0, 3.0], [4.0, 5.0, 6.0]
        SinglePointCrossover(ScriptedRandomSource([2]))(first, second)
        assert (first, second) == ([4.0, 5.0, 6.0], [1.0, 2.0, 3.0])

    def test_point_drawn_over_all_positions(self):
        rng = ScriptedRandomSource([3])
        SinglePointCrossover(rng)([0.0] * 5, [1.0] * 5)
        assert rng.requested == [(0, 4)]

    def test_mismatched_lengths_rejected(self):
        with pytest.raises(ValueError):
            SinglePointCrossover(RandomSource(1))([1.0], [1.0, 2.0])

    def test_genes_keep_their_position(self):
        """Position i of each child comes from position i of a parent."""
        rng = RandomSource(21)
        strategy = SinglePointCrossover(rng)
        for _ in range(100):
            a = [float(i) for i in range(6)]
            b = [float(i) + 0.5 for i in range(6)]
            strategy(a, b)
            for i in range(6):
                assert {a[i], b[i]} == {float(i), float(i) + 0.5}


class TestCrossover:
    """Test pairwise application of the composed operator."""

    def test_always_crosses_with_probability_one(self, parents):
        crossover = Crossover(
            probability=ConstantProbability(1.0),
            strategy=SinglePointCrossover(ScriptedRandomSource([1, 2])),
            generator=RandomSource(22).random,
        )

        offspring = crossover(parents)

        assert offspring == [
            [5.0, 6.0, 3.0, 4.0],
            [1.0, 2.0, 7.0, 8.0],
            [-5.0, -6.0, -7.0, -4.0],
            [-1.0, -2.0, -3.0, -8.0],
        ]

    def test_never_crosses_with_probability_zero(self, parents):
        crossover = Crossover(
            probability=ConstantProbability(0.0),
            strategy=SinglePointCrossover(RandomSource(23)),
            generator=RandomSource(24).random,
        )
        assert crossover(parents) == parents

    def test_odd_population_passes_last_through(self, parents):
        population = parents[:3]
        crossover = Crossover(
            probability=ConstantProbability(1.0),
            strategy=SinglePointCrossover(ScriptedRandomSource([0])),
            generator=CountingGenerator(0.0),
        )

        offspring = crossover(population)

        assert len(offspring) == 3
        assert offspring[2] == [-1.0, -2.0, -3.0, -4.0]
        assert offspring[0] == [5.0, 2.0, 3.0, 4.0]

    def test_single_chromosome_unchanged(self):
        calls = []
        crossover = Crossover(
            probability=ConstantProbability(1.0),
            strategy=lambda a, b: calls.append((a, b)),
            generator=CountingGenerator(0.0),
        )
        assert crossover([[1.0, 2.0]]) == [[1.0, 2.0]]
        assert calls == []

    def test_empty_population(self):
        crossover = Crossover(ConstantProbability(1.0), lambda a, b: None)
        assert crossover([]) == []

    def test_one_draw_per_complete_pair(self, parents):
        generator = CountingGenerator(0.9)
        crossover = Crossover(
            ConstantProbability(0.5), lambda a, b: None, generator=generator
        )

        crossover(parents + [[0.0] * 4])

        assert generator.calls == 2

    def test_draw_equal_to_probability_does_not_cross(self, parents):
        crossover = Crossover(
            probability=ConstantProbability(0.5),
            strategy=SinglePointCrossover(RandomSource(25)),
            generator=CountingGenerator(0.5),
        )
        assert crossover(parents) == parents

    def test_strategy_receives_consecutive_pairs(self, parents):
        seen = []
        crossover = Crossover(
            probability=ConstantProbability(1.0),
            strategy=lambda a, b: seen.append((a[0], b[0])),
            generator=CountingGenerator(0.0),
        )

        crossover(parents)

        assert seen == [(1.0, 5.0), (-1.0, -5.0)]

    def test_policy_consulted_per_pair(self, parents):
        """A changing policy applies to each pair as it comes."""
        rates = iter([1.0, 0.0])
        seen = []
        crossover = Crossover(
            probability=lambda: next(rates),
            strategy=lambda a, b: seen.append(a[0]),
            generator=CountingGenerator(0.5),
        )

        crossover(parents)

        assert seen == [1.0]

    def test_input_population_untouched(self, parents):
        snapshot = [list(c) for c in parents]
        crossover = Crossover(
            probability=ConstantProbability(1.0),
            strategy=SinglePointCrossover(RandomSource(26)),
            generator=CountingGenerator(0.0),
        )

        offspring = crossover(parents)

        assert parents == snapshot
        assert all(o is not p for o, p in zip(offspring, parents))

    def test_default_generator(self, parents):
        crossover = Crossover(ConstantProbability(0.0), SinglePointCrossover())
        assert 0.0 <= crossover.generator() < 1.0
        assert crossover(parents) == parents
