"""
Stopwatch time study with Westinghouse performance rating.

    Observed time (OT) = mean of valid observations
    Normal time   (NT) = OT × rating factor
    Standard time (ST) = NT × (1 + allowance% / 100)

The Westinghouse rating factor is 1 plus the sum of four table adjustments
(skill, effort, conditions, consistency). It is not clamped: a poor enough
rating set drives the factor to zero or below, which is logged but returned
as-is.

Reference: Niebel & Freivalds, "Methods, Standards, and Work Design", Ch. 11.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from iecalc import config
from iecalc.errors import InsufficientDataError, RangeViolationError, UnknownRatingError
from iecalc.stats import DescriptiveStats, descriptive_stats, t_value

logger = logging.getLogger(__name__)

# grade -> (label, adjustment)
SKILL_RATINGS: Dict[str, Tuple[str, float]] = {
    'A1': ('Superskill', 0.15),
    'A2': ('Superskill', 0.13),
    'B1': ('Excellent', 0.11),
    'B2': ('Excellent', 0.08),
    'C1': ('Good', 0.06),
    'C2': ('Good', 0.03),
    'D': ('Average', 0.00),
    'E1': ('Fair', -0.05),
    'E2': ('Fair', -0.10),
    'F1': ('Poor', -0.16),
    'F2': ('Poor', -0.22),
}

EFFORT_RATINGS: Dict[str, Tuple[str, float]] = {
    'A1': ('Excessive', 0.13),
    'A2': ('Excessive', 0.12),
    'B1': ('Excellent', 0.10),
    'B2': ('Excellent', 0.08),
    'C1': ('Good', 0.05),
    'C2': ('Good', 0.02),
    'D': ('Average', 0.00),
    'E1': ('Fair', -0.04),
    'E2': ('Fair', -0.08),
    'F1': ('Poor', -0.12),
    'F2': ('Poor', -0.17),
}

CONDITIONS_RATINGS: Dict[str, Tuple[str, float]] = {
    'A': ('Ideal', 0.06),
    'B': ('Excellent', 0.04),
    'C': ('Good', 0.02),
    'D': ('Average', 0.00),
    'E': ('Fair', -0.03),
    'F': ('Poor', -0.07),
}

CONSISTENCY_RATINGS: Dict[str, Tuple[str, float]] = {
    'A': ('Perfect', 0.04),
    'B': ('Excellent', 0.03),
    'C': ('Good', 0.01),
    'D': ('Average', 0.00),
    'E': ('Fair', -0.02),
    'F': ('Poor', -0.04),
}

# Observation count suggested when the sample is too small to estimate spread
DEFAULT_MIN_OBSERVATIONS = 30


@dataclass(frozen=True)
class WestinghouseRating:
    skill: str = 'D'
    effort: str = 'D'
    conditions: str = 'D'
    consistency: str = 'D'


@dataclass(frozen=True)
class TimeStudyResult:
    observed_time: float
    normal_time: float
    standard_time: float
    rating_factor: float
    allowance_factor: float
    pieces_per_hour: float
    statistics: DescriptiveStats


def _adjustment(table: Dict[str, Tuple[str, float]], grade: str, factor: str) -> float:
    try:
        return table[grade][1]
    except KeyError:
        raise UnknownRatingError(
            f"Unknown {factor} rating '{grade}'. Must be one of: {list(table.keys())}"
        )


def westinghouse_factor(rating: WestinghouseRating) -> float:
    """Return 1 + Σ(skill, effort, conditions, consistency adjustments)."""
    factor = (
        1.0
        + _adjustment(SKILL_RATINGS, rating.skill, 'skill')
        + _adjustment(EFFORT_RATINGS, rating.effort, 'effort')
        + _adjustment(CONDITIONS_RATINGS, rating.conditions, 'conditions')
        + _adjustment(CONSISTENCY_RATINGS, rating.consistency, 'consistency')
    )
    if factor <= 0:
        logger.warning("Westinghouse rating %s gives a non-positive factor %.3f", rating, factor)
    return factor


def calculate_statistics(observations: Sequence[float]) -> DescriptiveStats:
    """Descriptive statistics for a set of stopwatch readings."""
    return descriptive_stats(observations)


def pieces_per_hour(standard_time_seconds: float) -> float:
    """Output rate implied by a standard time in seconds (0 if not positive)."""
    if standard_time_seconds <= 0:
        return 0.0
    return 3600.0 / standard_time_seconds


def calculate_time_study(
    observations: Sequence[float],
    rating: WestinghouseRating,
    allowance_pct: Optional[float] = None,
) -> TimeStudyResult:
    """
    Derive observed, normal and standard time for one work element.

    Non-positive readings are discarded as mis-reads before averaging.

    Args:
        observations: Stopwatch readings in seconds
        rating: Westinghouse grades for the operator
        allowance_pct: Personal, fatigue and delay allowance in percent.
            Defaults to the configured allowance (15%).

    Raises:
        InsufficientDataError: fewer than 2 positive readings.
        RangeViolationError: negative allowance.
    """
    if allowance_pct is None:
        allowance_pct = config.DEFAULT_ALLOWANCE_PCT
    if allowance_pct < 0:
        raise RangeViolationError("Allowance percentage must not be negative")

    valid = [float(obs) for obs in observations if obs > 0]
    if len(valid) < 2:
        raise InsufficientDataError(
            f"At least 2 positive observations are required, got {len(valid)}"
        )

    statistics = calculate_statistics(valid)
    observed_time = statistics.mean
    rating_factor = westinghouse_factor(rating)
    normal_time = observed_time * rating_factor

    allowance_factor = 1 + allowance_pct / 100
    standard_time = normal_time * allowance_factor

    logger.debug("Time study: OT=%.4f NT=%.4f ST=%.4f", observed_time, normal_time, standard_time)

    return TimeStudyResult(
        observed_time=observed_time,
        normal_time=normal_time,
        standard_time=standard_time,
        rating_factor=rating_factor,
        allowance_factor=allowance_factor,
        pieces_per_hour=pieces_per_hour(standard_time),
        statistics=statistics,
    )


def required_sample_size(
    observations: Sequence[float],
    accuracy: float = 0.05,
    confidence: float = 0.95,
) -> int:
    """
    Observations needed so the mean is within ±accuracy at the given confidence.

        n = (t · s / (k · x̄))²

    Never returns less than the number of readings already taken. With fewer
    than 2 readings (or a zero mean) the spread is unknown and the
    conventional minimum of 30 is returned.
    """
    if accuracy <= 0:
        raise RangeViolationError("Accuracy must be positive")

    stats = calculate_statistics(observations)
    if stats.count < 2 or stats.mean == 0:
        return DEFAULT_MIN_OBSERVATIONS

    t = t_value(confidence)
    n = ((t * stats.standard_deviation) / (accuracy * stats.mean)) ** 2
    return max(math.ceil(n), stats.count)
