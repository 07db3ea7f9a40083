"""
Unit tests for RandomSource.
"""

import pytest

from evy.rng import RandomSource


class TestRandomSource:
    """Test seeded and unseeded random sources."""

    def test_same_seed_same_stream(self):
        """Two sources with one seed produce identical draws."""
        a = RandomSource(123)
        b = RandomSource(123)

        assert [a.random() for _ in range(10)] == [b.random() for _ in range(10)]
        assert [a.randint(0, 9) for _ in range(10)] == [b.randint(0, 9) for _ in range(10)]

    def test_random_in_unit_interval(self):
        rng = RandomSource(1)
        for _ in range(1000):
            value = rng.random()
            assert 0.0 <= value < 1.0

    def test_randint_is_inclusive(self):
        """Both ends of the range are reachable."""
        rng = RandomSource(2)
        draws = {rng.randint(0, 3) for _ in range(500)}
        assert draws == {0, 1, 2, 3}

    def test_uniform_within_bounds(self):
        rng = RandomSource(3)
        for _ in range(1000):
            value = rng.uniform(-2.5, 7.0)
            assert -2.5 <= value <= 7.0

    def test_uniform_degenerate_interval(self):
        rng = RandomSource(4)
        assert rng.uniform(1.5, 1.5) == 1.5

    @pytest.mark.parametrize("draw", [0.0, 0.5, 0.9999999999999999])
    def test_uniform_wider_than_float_range(self, draw):
        class FixedDraw(RandomSource):
            def random(self):
                return draw

        value = FixedDraw().uniform(-1e308, 1e308)
        assert -1e308 <= value <= 1e308

    def test_sample_indices_distinct_and_in_range(self):
        rng = RandomSource(5)
        for _ in range(200):
            indices = rng.sample_indices(10, 4)
            assert len(indices) == 4
            assert len(set(indices)) == 4
            assert all(0 <= i < 10 for i in indices)

    def test_sample_indices_full_population_is_permutation(self):
        rng = RandomSource(6)
        assert sorted(rng.sample_indices(7, 7)) == list(range(7))

    def test_sample_indices_too_many(self):
        rng = RandomSource(7)
        with pytest.raises(ValueError):
            rng.sample_indices(3, 4)

    def test_shuffle_in_place(self):
        rng = RandomSource(8)
        items = list(range(20))
        rng.shuffle(items)
        assert sorted(items) == list(range(20))

    def test_spawn_is_deterministic(self):
        """Children of equally seeded parents share streams."""
        child_a = RandomSource(9).spawn()
        child_b = RandomSource(9).spawn()

        assert child_a.seed == child_b.seed
        assert child_a.random() == child_b.random()

    def test_spawned_children_differ(self):
        parent = RandomSource(10)
        first = parent.spawn()
        second = parent.spawn()
        assert first.seed != second.seed

    def test_unseeded_sources_are_independent(self):
        a = RandomSource()
        b = RandomSource()
        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]
