"""
Unit tests for the small numerical helpers.
"""

import numpy as np
import pytest

from bwsl.core.mathutils import (
    accumulate_product, array_to_index, cbinomial, choose_between,
    choose_with_probability, index_to_array, sgn, square
)


class TestArithmetic:
    """Test scalar helpers."""

    def test_accumulate_product(self):
        assert accumulate_product([3, 4, 5]) == 60
        assert accumulate_product(np.array([2, 2])) == 4
        assert accumulate_product([]) == 1

    def test_square_and_sign(self):
        assert square(3) == 9
        assert square(-1.5) == 2.25
        assert sgn(-2) == -1
        assert sgn(0) == 0
        assert sgn(3.5) == 1

    @pytest.mark.parametrize("n,k,expected", [
        (5, 2, 10), (10, 0, 1), (10, 10, 1), (10, 3, 120), (4, 5, 0), (4, -1, 0),
    ])
    def test_cbinomial(self, n, k, expected):
        assert cbinomial(n, k) == expected

    def test_cbinomial_exact_for_large_arguments_precision(self):
        assert cbinomial(60, 30) == 118264581564861424


class TestIndexConversion:
    """Test mixed-radix index conversion."""

    def test_array_to_index(self):
        assert array_to_index([1, 2], [3, 4]) == 6
        assert array_to_index([2, 3, 4], [3, 4, 5]) == 59

    def test_array_to_index_wraps(self):
        assert array_to_index([-1, 0], [3, 4]) == 8
        assert array_to_index([4, 5], [3, 4]) == 5

    def test_index_to_array(self):
        coords = index_to_array(11, [3, 4])
        np.testing.assert_array_equal(coords, [2, 3])
        assert coords.dtype == np.int64

    def test_roundtrip(self):
        size = [2, 3, 4]
        for i in range(24):
            assert array_to_index(index_to_array(i, size), size) == i

    def test_dimension_mismatch_invalid(self):
        with pytest.raises(ValueError, match="dimension"):
            array_to_index([1, 2, 3], [3, 4])


class TestRandomChoice:
    """Test weighted random choices."""

    def test_choose_between_deterministic(self, rng):
        for _ in range(100):
            assert choose_between([0.0, 1.0, 0.0], rng) == 1
            assert choose_between([2.0, 0.0, 0.0], rng) == 0

    def test_choose_between_statistical(self, rng, tolerance_config):
        draws = np.array([choose_between([1.0, 3.0], rng) for _ in range(10000)])
        assert np.mean(draws == 1) == pytest.approx(0.75, rel=tolerance_config['statistical_rtol'])

    def test_choose_with_probability(self, rng, tolerance_config):
        assert not any(choose_with_probability(0.0, rng) for _ in range(100))
        assert all(choose_with_probability(1.0, rng) for _ in range(100))
        hits = sum(choose_with_probability(0.3, rng) for _ in range(10000))
        assert hits / 10000 == pytest.approx(0.3, rel=tolerance_config['statistical_rtol'])

    def test_default_generator(self):
        assert choose_between([1.0]) == 0
        assert isinstance(choose_with_probability(0.5), bool)
