"""
Learning (experience) curves.

Unit time falls as a power of the cumulative unit number:

    Y = a · X^b

    Y = time or cost of unit X
    a = time or cost of the first unit
    b = learning exponent (negative when there is improvement)

The learning rate 2^b is the fraction of time remaining each time output
doubles; an 80% curve has b = log2(0.80) ≈ −0.3219.

Two fitting methods are provided: the closed-form two-point method and an
ordinary least-squares fit on (ln X, ln Y).
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from iecalc.errors import (
    CycleOrderError,
    DuplicateCycleError,
    InsufficientDataError,
    LengthMismatchError,
    NoImprovementError,
    NonPositiveCycleError,
    NonPositiveTimeError,
    RangeViolationError,
)
from iecalc.stats import log_linear_regression

logger = logging.getLogger(__name__)

# Above this count the cumulative sum switches to its closed-form approximation
EXACT_SUM_LIMIT = 1000

EULER_MASCHERONI = 0.5772156649

LEARNING_RATE_PRESETS = (
    (70, "70% (Aerospace/Complex)"),
    (75, "75% (Electronics)"),
    (80, "80% (Standard Industrial)"),
    (85, "85% (Repetitive Assembly)"),
    (90, "90% (Simple Tasks)"),
)


@dataclass(frozen=True)
class TwoPointInput:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class LearningCurveResult:
    exponent: float
    first_unit_value: float
    learning_rate: float           # 2^b as a fraction
    learning_rate_percent: float   # 2^b × 100, rounded to 2 decimals


@dataclass(frozen=True)
class RegressionCurveResult(LearningCurveResult):
    r_squared: float = 0.0
    standard_error: float = 0.0


def learning_rate_percent(exponent: float) -> float:
    """Learning rate in percent, 2^b · 100, rounded to two decimals."""
    return round(2 ** exponent * 100, 2)


def calculate_two_point_method(inputs: TwoPointInput) -> LearningCurveResult:
    """
    Fit Y = a·X^b through two observed units.

        b = ln(y2 / y1) / ln(x2 / x1)
        a = y1 / x1^b

    Each precondition raises its own error class: positive cycles, positive
    times, distinct cycles, x2 > x1, and y2 < y1 (the data must show
    improvement).
    """
    x1, y1, x2, y2 = inputs.x1, inputs.y1, inputs.x2, inputs.y2

    if x1 <= 0 or x2 <= 0:
        raise NonPositiveCycleError("Cycle numbers must be positive")
    if y1 <= 0 or y2 <= 0:
        raise NonPositiveTimeError("Time/cost values must be positive")
    if x1 == x2:
        raise DuplicateCycleError("Cycle numbers must be different")
    if x2 < x1:
        raise CycleOrderError("Second cycle number must be greater than first")
    if y2 >= y1:
        raise NoImprovementError("Second time must be less than first (learning improvement)")

    exponent = math.log(y2 / y1) / math.log(x2 / x1)
    first_unit_value = y1 / x1 ** exponent

    return LearningCurveResult(
        exponent=exponent,
        first_unit_value=first_unit_value,
        learning_rate=2 ** exponent,
        learning_rate_percent=learning_rate_percent(exponent),
    )


def calculate_regression_method(
    cycles: Sequence[float],
    times: Sequence[float],
) -> RegressionCurveResult:
    """
    Least-squares fit of ln(Y) = ln(a) + b·ln(X) over many observed units.

    Args:
        cycles: Unit numbers (X), all positive
        times: Observed time or cost per unit (Y), all positive

    Returns:
        RegressionCurveResult with exponent, first-unit value, learning rate,
        R² and the standard error of estimate in log space.
    """
    if len(cycles) != len(times):
        raise LengthMismatchError("Cycles and times arrays must have the same length")
    if len(cycles) < 2:
        raise InsufficientDataError("At least 2 data points are required")
    if any(x <= 0 for x in cycles):
        raise NonPositiveCycleError("All cycle numbers must be positive")
    if any(y <= 0 for y in times):
        raise NonPositiveTimeError("All time values must be positive")

    fit = log_linear_regression(cycles, times)
    exponent = fit.slope

    logger.debug("Log-linear fit over %d points: b=%.4f R2=%.4f", fit.n, exponent, fit.r_squared)

    return RegressionCurveResult(
        exponent=exponent,
        first_unit_value=math.exp(fit.intercept),
        learning_rate=2 ** exponent,
        learning_rate_percent=learning_rate_percent(exponent),
        r_squared=fit.r_squared,
        standard_error=fit.standard_error,
    )


def predict_time_at_cycle(cycle: float, first_unit_value: float, exponent: float) -> float:
    if cycle <= 0:
        raise NonPositiveCycleError("Cycle number must be positive")
    return first_unit_value * cycle ** exponent


def cumulative_time(n: int, first_unit_value: float, exponent: float) -> float:
    """
    Total time for units 1..n.

    Summed exactly up to EXACT_SUM_LIMIT units; above that the integral
    approximation a·n^(b+1)/(b+1) + a/2 is used, with the harmonic form
    a·(ln n + γ) when b is close to −1.
    """
    if isinstance(n, bool) or int(n) != n or n <= 0:
        raise RangeViolationError("Number of cycles must be a positive integer")
    n = int(n)

    if n <= EXACT_SUM_LIMIT:
        units = np.arange(1, n + 1, dtype=float)
        return float(first_unit_value * np.sum(units ** exponent))

    bp1 = exponent + 1
    if abs(bp1) < 1e-4:
        return first_unit_value * (math.log(n) + EULER_MASCHERONI)
    return first_unit_value * n ** bp1 / bp1 + first_unit_value * 0.5


def exponent_from_learning_rate(rate_percent: float) -> float:
    """b = log2(rate / 100) for a learning rate strictly between 0 and 100%."""
    if rate_percent <= 0 or rate_percent >= 100:
        raise RangeViolationError("Learning rate must be between 0 and 100 (exclusive)")
    return math.log(rate_percent / 100) / math.log(2)


def generate_curve_points(
    first_unit_value: float,
    exponent: float,
    max_cycles: float,
    points: int = 50,
) -> List[Tuple[int, float]]:
    """Log-spaced (cycle, time) pairs from unit 1 to max_cycles."""
    if max_cycles <= 1:
        raise RangeViolationError("Maximum cycles must be greater than 1")
    if points < 2:
        raise RangeViolationError("Must generate at least 2 points")

    cycles = np.maximum(1, np.round(np.geomspace(1, max_cycles, points)))
    return [(int(x), predict_time_at_cycle(float(x), first_unit_value, exponent)) for x in cycles]
