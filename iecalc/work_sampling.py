"""
Work sampling study design.

Sample size and error limit for estimating the proportion of time spent in
an activity, plus randomized observation schedules.

    n = z² · p · (1 − p) / l²
    l = z · √(p · (1 − p) / n)

Reference: Niebel & Freivalds, "Methods, Standards, and Work Design", Ch. 14.
"""

import logging
import math
from datetime import time
from typing import List, Optional

import numpy as np

from iecalc import config
from iecalc.errors import RangeViolationError

logger = logging.getLogger(__name__)

MAX_OBSERVATION_TIMES = 10000


def _check_proportion(p: float) -> None:
    if p < 0 or p > 1:
        raise RangeViolationError("Probability (p) must be between 0 and 1")


def _check_z(z: float) -> None:
    if z <= 0:
        raise RangeViolationError("Z-value must be positive")


def calculate_sample_size(p: float, z: float, l: float) -> int:
    """
    Number of random observations needed to estimate p within ±l.

    Args:
        p: Estimated proportion of occurrence (0 to 1)
        z: z-value for the desired confidence level
        l: Acceptable absolute error limit (e.g. 0.05 for ±5%)

    Returns:
        Required observations, rounded up. 0 when p is 0 or 1, since a
        proportion with no variance needs no sampling.
    """
    _check_proportion(p)
    _check_z(z)
    if l <= 0:
        raise RangeViolationError("Error limit (l) must be positive")
    if l > 1:
        raise RangeViolationError("Error limit (l) should not exceed 1 (100%)")

    if p in (0, 1):
        return 0

    n = (z * z * p * (1 - p)) / (l * l)
    return math.ceil(n)


def calculate_error_limit(p: float, z: float, n: int) -> float:
    """Absolute error limit achieved by n observations (inverse of sample size)."""
    _check_proportion(p)
    _check_z(z)
    if n <= 0:
        raise RangeViolationError("Sample size (n) must be positive")
    if isinstance(n, bool) or int(n) != n:
        raise RangeViolationError("Sample size (n) must be an integer")

    if p in (0, 1):
        return 0.0

    return z * math.sqrt((p * (1 - p)) / n)


def random_observation_times(
    count: int,
    start_hour: Optional[int] = None,
    end_hour: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[time]:
    """
    Draw `count` independent observation times within [start_hour, end_hour).

    Times are uniform at one-minute resolution and returned in ascending
    order. The working period defaults to the configured workday.
    """
    if start_hour is None:
        start_hour = config.WORKDAY_START_HOUR
    if end_hour is None:
        end_hour = config.WORKDAY_END_HOUR

    if isinstance(count, bool) or int(count) != count:
        raise RangeViolationError("Count must be an integer")
    count = int(count)
    if count <= 0:
        raise RangeViolationError("Count must be positive")
    if count > MAX_OBSERVATION_TIMES:
        raise RangeViolationError(f"Count exceeds maximum ({MAX_OBSERVATION_TIMES})")
    if start_hour < 0 or start_hour > 23:
        raise RangeViolationError("Start hour must be between 0 and 23")
    if end_hour < 0 or end_hour > 24:
        raise RangeViolationError("End hour must be between 0 and 24")
    if start_hour >= end_hour:
        raise RangeViolationError("Start hour must be before end hour")

    if rng is None:
        rng = config.make_rng()

    start_minutes = int(start_hour * 60)
    end_minutes = int(end_hour * 60)
    minutes = np.sort(rng.integers(start_minutes, end_minutes, size=count))

    logger.debug("Generated %d observation times between %s:00 and %s:00", count, start_hour, end_hour)
    return [time(int(m) // 60, int(m) % 60) for m in minutes]
