"""Tests for largest-remainder apportionment."""

import pytest

from py_polisim.core.alea_prng import AleaPRNG
from py_polisim.core.apportionment import (
    apportion_percentages,
    largest_remainder,
    normalize_by_sum,
)


class TestLargestRemainder:
    """Integer apportionment that always hits the exact total."""

    def test_sums_to_total_for_random_weights(self):
        prng = AleaPRNG("weights")
        for _ in range(200):
            n = prng.randint(1, 12)
            weights = [prng.uniform(0, 50) for _ in range(n)]
            total = prng.randint(0, 500)
            result = largest_remainder(weights, total)
            assert sum(result) == total
            assert all(v >= 0 for v in result)

    def test_zero_weights_split_evenly(self):
        """Leftover units go to the earliest buckets."""
        assert largest_remainder([0, 0, 0], 100) == [34, 33, 33]

    def test_equal_weights_favour_lower_index(self):
        assert largest_remainder([1, 1, 1], 100) == [34, 33, 33]

    def test_tie_keys_break_equal_remainders(self):
        assert largest_remainder([1, 1, 1], 100, tie_keys=[[1, 2, 3]]) == [33, 33, 34]

    def test_larger_weight_wins_equal_fraction(self):
        # Both fractions are .5; the heavier bucket takes the spare unit
        assert largest_remainder([3, 1], 2) == [2, 0]

    def test_minimum_floor(self):
        result = largest_remainder([100, 0, 0], 100, minimum=10)
        assert sum(result) == 100
        assert min(result) >= 10

    def test_minimum_larger_than_total_allows(self):
        result = largest_remainder([1, 1, 1], 10, minimum=25)
        assert sum(result) == 10

    def test_negative_and_nan_weights_count_as_zero(self):
        assert largest_remainder([-5, 5], 10) == [0, 10]
        assert largest_remainder([float("nan"), 1], 4) == [0, 4]

    def test_negative_total_raises(self):
        with pytest.raises(ValueError):
            largest_remainder([1, 2], -1)

    def test_empty_weights(self):
        assert largest_remainder([], 10) == []


class TestNormalizeBySum:
    """Scaling to a target with rounding drift absorbed."""

    def test_integer_drift_goes_to_largest(self):
        assert normalize_by_sum([1, 1, 1], 100) == [34, 33, 33]

    def test_decimal_precision(self):
        result = normalize_by_sum([10, 20, 30], 90, precision=1)
        assert round(sum(result), 1) == 90.0

    def test_all_zero_unchanged(self):
        assert normalize_by_sum([0, 0], 100) == [0.0, 0.0]

    def test_apportion_percentages(self):
        assert sum(apportion_percentages([1, 2, 3, 4])) == 100
