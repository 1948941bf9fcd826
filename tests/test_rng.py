"""Tests for the RandomSource module."""

import pytest

from matrix_snake.rng import RandomSource


class TestRandomSource:
    def test_same_seed_same_stream(self):
        a = RandomSource(42)
        b = RandomSource(42)
        assert [a.uniform() for _ in range(10)] == [b.uniform() for _ in range(10)]

    def test_different_seeds_differ(self):
        a = RandomSource(1)
        b = RandomSource(2)
        assert [a.uniform() for _ in range(5)] != [b.uniform() for _ in range(5)]

    def test_uniform_range(self):
        rng = RandomSource(0)
        for _ in range(1000):
            assert 0.0 <= rng.uniform() < 1.0

    def test_randrange_bounds(self):
        rng = RandomSource(0)
        values = {rng.randrange(1, 4) for _ in range(500)}
        assert values == {1, 2, 3}

    def test_randrange_rejects_empty_range(self):
        with pytest.raises(ValueError, match="high > low"):
            RandomSource(0).randrange(3, 3)

    def test_choice(self):
        rng = RandomSource(0)
        assert rng.choice("abc") in "abc"

    def test_choice_empty(self):
        with pytest.raises(ValueError, match="empty"):
            RandomSource(0).choice([])

    def test_seed_masked_to_64_bits(self):
        assert RandomSource(-1).seed == 2**64 - 1
        assert RandomSource(2**64 + 3).seed == 3

    def test_unseeded(self):
        assert RandomSource().seed is None
