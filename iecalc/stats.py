"""
Shared statistical primitives.

Lookup tables (z and t values), least-squares regression on raw and
log-transformed data, descriptive statistics, and the sorted-table
interpolation helper used by the NIOSH frequency multiplier.

Reference: Niebel & Freivalds, "Methods, Standards, and Work Design",
Appendix 2 (statistical tables).
"""

import logging
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np

from iecalc.errors import (
    InsufficientDataError,
    InvalidConfidenceLevelError,
    LengthMismatchError,
    RangeViolationError,
)

logger = logging.getLogger(__name__)

# (value key, display label, alpha, two-sided z)
CONFIDENCE_LEVELS: Tuple[Tuple[str, str, float, float], ...] = (
    ('0.90', '90%', 0.10, 1.645),
    ('0.95', '95%', 0.05, 1.96),
    ('0.99', '99%', 0.01, 2.576),
)

# Large-sample t approximation used by the time-study sample-size formula
T_VALUES: Dict[float, float] = {
    0.90: 1.645,
    0.95: 1.96,
    0.99: 2.576,
}


@dataclass(frozen=True)
class RegressionFit:
    """Least-squares line y = intercept + slope·x."""
    slope: float
    intercept: float
    r_squared: float
    standard_error: float
    n: int


@dataclass(frozen=True)
class DescriptiveStats:
    count: int
    mean: float
    standard_deviation: float
    coefficient_of_variation: float  # percent
    minimum: float
    maximum: float
    range: float


def z_value(confidence: str) -> float:
    """
    Return the two-sided z-value for a confidence level.

    Accepts either the value form ('0.95') or the label form ('95%').

    Raises:
        InvalidConfidenceLevelError: for any level outside the 90/95/99% table.
    """
    key = str(confidence).strip()
    for value, label, _alpha, z in CONFIDENCE_LEVELS:
        if key in (value, label):
            return z
    raise InvalidConfidenceLevelError(f"Invalid confidence level: {confidence}")


def t_value(confidence: float) -> float:
    """Return the t-table value for a confidence fraction, falling back to 95%."""
    for level, t in T_VALUES.items():
        if abs(confidence - level) < 1e-9:
            return t
    logger.warning("No t-value for confidence %s, using the 95%% value", confidence)
    return T_VALUES[0.95]


def linear_regression(x: Sequence[float], y: Sequence[float]) -> RegressionFit:
    """
    Ordinary least-squares fit of y on x.

    R² is reported as 0 when y has no variance (a flat line explains nothing
    and the ratio would divide by zero). The standard error of estimate uses
    n − 2 degrees of freedom and is 0 for an exact two-point fit.

    Raises:
        InsufficientDataError: fewer than 2 points, or all x values equal.
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if x_arr.shape != y_arr.shape:
        raise LengthMismatchError("x and y must contain the same number of points")
    n = int(x_arr.size)
    if n < 2:
        raise InsufficientDataError("At least 2 data points are required")

    dx = x_arr - x_arr.mean()
    dy = y_arr - y_arr.mean()
    sxx = float(np.sum(dx * dx))
    sxy = float(np.sum(dx * dy))
    syy = float(np.sum(dy * dy))

    if sxx == 0.0:
        raise InsufficientDataError("At least 2 distinct x values are required")

    slope = sxy / sxx
    intercept = float(y_arr.mean()) - slope * float(x_arr.mean())

    ss_reg = sxy * sxy / sxx
    if syy > 0:
        r_squared = ss_reg / syy
    else:
        logger.warning("Regression over %d points has zero variance in y", n)
        r_squared = 0.0

    ss_res = max(syy - ss_reg, 0.0)
    standard_error = float(np.sqrt(ss_res / (n - 2))) if n > 2 else 0.0

    return RegressionFit(
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
        standard_error=standard_error,
        n=n,
    )


def log_linear_regression(x: Sequence[float], y: Sequence[float]) -> RegressionFit:
    """Fit ln(y) = intercept + slope·ln(x). All values must be positive."""
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if np.any(x_arr <= 0) or np.any(y_arr <= 0):
        raise RangeViolationError("Log-linear regression requires positive x and y values")
    return linear_regression(np.log(x_arr), np.log(y_arr))


def descriptive_stats(values: Sequence[float]) -> DescriptiveStats:
    """
    Mean, sample standard deviation (n − 1), coefficient of variation (%)
    and min/max/range. An empty input yields all zeros; a single value has
    a standard deviation of 0.
    """
    arr = np.asarray(values, dtype=float)
    count = int(arr.size)
    if count == 0:
        return DescriptiveStats(0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    mean = float(arr.mean())
    std = float(arr.std(ddof=1)) if count > 1 else 0.0
    cv = (std / mean) * 100 if mean != 0 else 0.0
    lo = float(arr.min())
    hi = float(arr.max())

    return DescriptiveStats(
        count=count,
        mean=mean,
        standard_deviation=std,
        coefficient_of_variation=cv,
        minimum=lo,
        maximum=hi,
        range=hi - lo,
    )


def interpolate_table(breakpoints: Sequence[float], values: Sequence[float], x: float) -> float:
    """
    Look up x in a sorted breakpoint table.

    Between breakpoints the value is linearly interpolated; outside the
    table it clamps to the nearest end value.
    """
    keys = np.asarray(breakpoints, dtype=float)
    vals = np.asarray(values, dtype=float)
    if keys.size == 0 or keys.size != vals.size:
        raise ValueError("Breakpoint and value tables must be non-empty and the same length")
    if np.any(np.diff(keys) <= 0):
        raise ValueError("Breakpoints must be strictly ascending")
    return float(np.interp(x, keys, vals))
