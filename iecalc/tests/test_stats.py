"""
Tests for the shared statistical primitives.

Validates:
1. z-value table lookup by value and label
2. Least-squares regression, including zero-variance and degenerate inputs
3. Descriptive statistics guards (empty, single value, zero mean)
4. Sorted-table interpolation with end clamping
"""

import math

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from iecalc.errors import (
    InsufficientDataError,
    InvalidConfidenceLevelError,
    LengthMismatchError,
    RangeViolationError,
)
from iecalc.stats import (
    descriptive_stats,
    interpolate_table,
    linear_regression,
    log_linear_regression,
    t_value,
    z_value,
)


class TestZValue:
    """Test confidence-level lookup."""

    @pytest.mark.parametrize("key, expected", [
        ('0.90', 1.645),
        ('0.95', 1.96),
        ('0.99', 2.576),
        ('90%', 1.645),
        ('95%', 1.96),
        ('99%', 2.576),
    ])
    def test_known_levels(self, key, expected):
        assert z_value(key) == expected

    def test_unknown_level_raises(self):
        with pytest.raises(InvalidConfidenceLevelError):
            z_value('0.80')

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            z_value('bogus')


class TestTValue:

    def test_table_value(self):
        assert t_value(0.99) == 2.576

    def test_unknown_confidence_falls_back_to_95(self):
        assert t_value(0.80) == 1.96


class TestLinearRegression:
    """Test ordinary least squares."""

    def test_exact_line(self):
        fit = linear_regression([1, 2, 3, 4], [3, 5, 7, 9])
        assert fit.slope == pytest.approx(2.0)
        assert fit.intercept == pytest.approx(1.0)
        assert fit.r_squared == pytest.approx(1.0)
        assert fit.standard_error == pytest.approx(0.0, abs=1e-12)
        assert fit.n == 4

    def test_noisy_line(self):
        fit = linear_regression([1, 2, 3, 4, 5], [2.1, 3.9, 6.2, 7.8, 10.1])
        assert fit.slope == pytest.approx(1.99, abs=0.01)
        assert 0.99 < fit.r_squared < 1.0
        assert fit.standard_error > 0

    def test_two_points_have_zero_standard_error(self):
        fit = linear_regression([1, 3], [10, 4])
        assert fit.slope == pytest.approx(-3.0)
        assert fit.standard_error == 0.0

    def test_flat_y_gives_zero_r_squared(self):
        """Zero total variance must not divide by zero."""
        fit = linear_regression([1, 2, 3], [5, 5, 5])
        assert fit.slope == pytest.approx(0.0)
        assert fit.r_squared == 0.0

    def test_single_point_raises(self):
        with pytest.raises(InsufficientDataError):
            linear_regression([1], [2])

    def test_mismatched_lengths_raise(self):
        with pytest.raises(LengthMismatchError):
            linear_regression([1, 2, 3], [2, 4])

    def test_same_inputs_same_fit(self):
        x = [1, 2, 3, 4, 5]
        y = [2.1, 3.9, 6.2, 7.8, 10.1]
        assert linear_regression(x, y) == linear_regression(x, y)

    def test_identical_x_raises(self):
        with pytest.raises(InsufficientDataError):
            linear_regression([2, 2], [1, 3])

    def test_log_linear_power_law(self):
        xs = [1, 2, 4, 8]
        ys = [100 * x ** -0.5 for x in xs]
        fit = log_linear_regression(xs, ys)
        assert fit.slope == pytest.approx(-0.5)
        assert math.exp(fit.intercept) == pytest.approx(100)

    def test_log_linear_rejects_non_positive(self):
        with pytest.raises(RangeViolationError):
            log_linear_regression([1, 0], [2, 3])


class TestDescriptiveStats:
    """Test mean, sample standard deviation and spread."""

    def test_known_values(self):
        stats = descriptive_stats([2, 4, 4, 4, 5, 5, 7, 9])
        assert stats.count == 8
        assert stats.mean == pytest.approx(5.0)
        assert stats.standard_deviation == pytest.approx(math.sqrt(32 / 7))
        assert stats.coefficient_of_variation == pytest.approx(math.sqrt(32 / 7) / 5 * 100)
        assert stats.minimum == 2
        assert stats.maximum == 9
        assert stats.range == 7

    def test_single_value_has_zero_deviation(self):
        stats = descriptive_stats([5.0])
        assert stats.standard_deviation == 0.0
        assert stats.mean == 5.0

    def test_zero_mean_has_zero_cv(self):
        stats = descriptive_stats([-1.0, 1.0])
        assert stats.coefficient_of_variation == 0.0

    def test_empty_input(self):
        stats = descriptive_stats([])
        assert stats.count == 0
        assert stats.mean == 0.0


class TestInterpolateTable:
    """Test breakpoint lookup."""

    KEYS = [0.0, 1.0, 2.0]
    VALUES = [1.0, 0.5, 0.0]

    def test_exact_breakpoint(self):
        assert interpolate_table(self.KEYS, self.VALUES, 1.0) == pytest.approx(0.5)

    def test_midpoint(self):
        assert interpolate_table(self.KEYS, self.VALUES, 1.5) == pytest.approx(0.25)

    def test_clamps_below_and_above(self):
        assert interpolate_table(self.KEYS, self.VALUES, -5) == pytest.approx(1.0)
        assert interpolate_table(self.KEYS, self.VALUES, 99) == pytest.approx(0.0)

    def test_unsorted_keys_raise(self):
        with pytest.raises(ValueError):
            interpolate_table([0, 2, 1], self.VALUES, 1.0)

    def test_mismatched_tables_raise(self):
        with pytest.raises(ValueError):
            interpolate_table([0, 1], [1.0], 0.5)
