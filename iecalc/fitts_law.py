"""
Fitts' Law pointing test.

Movement time grows linearly with the index of difficulty (ID):

    MT = a + b · ID
    ID = log2(D / W + 1)      (Shannon formulation)

D is the distance to the target and W its width. Throughput (index of
performance) is mean ID over mean movement time, in bits per second.

The trial sequence is owned by the caller: it is generated here, filled in
as the participant clicks, then passed back to analyze_fitts_results, which
only reads it.

Reference: Fitts, P.M. (1954); MacKenzie, I.S. (1992).
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from iecalc import config
from iecalc.errors import RangeViolationError
from iecalc.stats import linear_regression

logger = logging.getLogger(__name__)

DEFAULT_DISTANCES = (100, 200, 400)  # pixels
DEFAULT_WIDTHS = (20, 40, 80)        # pixels


@dataclass(frozen=True)
class TargetConfig:
    distance: float
    width: float

    @property
    def index_of_difficulty(self) -> float:
        return index_of_difficulty(self.distance, self.width)


@dataclass
class FittsTrial:
    target_id: str
    distance: float
    width: float
    index_of_difficulty: float
    movement_time: float  # ms
    hit: bool
    start_x: float = 0.0
    start_y: float = 0.0
    end_x: float = 0.0
    end_y: float = 0.0
    target_x: float = 0.0
    target_y: float = 0.0


@dataclass(frozen=True)
class FittsRegression:
    slope: float       # ms/bit
    intercept: float   # ms
    r_squared: float


@dataclass(frozen=True)
class FittsResult:
    intercept: float
    slope: float
    r_squared: float
    throughput: float             # bits/s
    average_movement_time: float  # ms, hits only
    error_rate: float             # percent of missed targets
    total_trials: int
    successful_trials: int
    trials_by_difficulty: Dict[float, Tuple[FittsTrial, ...]]


def index_of_difficulty(distance: float, width: float) -> float:
    """ID in bits; infinite for a target with no width."""
    if distance < 0:
        raise RangeViolationError(f"Distance must not be negative, got {distance:g}")
    if width <= 0:
        return math.inf
    return math.log2(distance / width + 1)


def predict_movement_time(distance: float, width: float, a: float, b: float) -> float:
    return a + b * index_of_difficulty(distance, width)


def generate_target_configurations(
    num_configs: int = 9,
    distances: Sequence[float] = DEFAULT_DISTANCES,
    widths: Sequence[float] = DEFAULT_WIDTHS,
) -> List[TargetConfig]:
    """Distance × width grid ordered by increasing ID, truncated to num_configs."""
    configs = [TargetConfig(d, w) for d in distances for w in widths]
    configs.sort(key=lambda c: c.index_of_difficulty)
    return configs[:num_configs]


def generate_trial_schedule(
    trials_per_condition: int = 3,
    num_configs: int = 9,
    rng: Optional[np.random.Generator] = None,
) -> List[TargetConfig]:
    """Each target configuration repeated trials_per_condition times, shuffled."""
    if trials_per_condition < 1:
        raise RangeViolationError("At least 1 trial per condition is required")
    if rng is None:
        rng = config.make_rng()

    schedule = [
        cfg
        for cfg in generate_target_configurations(num_configs)
        for _ in range(trials_per_condition)
    ]
    order = rng.permutation(len(schedule))
    return [schedule[i] for i in order]


def generate_target_position(
    origin_x: float,
    origin_y: float,
    distance: float,
    container_width: float,
    container_height: float,
    target_width: float,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[float, float]:
    """
    Place a target `distance` away from the origin at a random angle.

    The centre is clamped so the whole target stays inside the container,
    which can shorten the actual distance near the edges.
    """
    if rng is None:
        rng = config.make_rng()
    angle = rng.uniform(0, 2 * math.pi)

    half = target_width / 2
    x = origin_x + distance * math.cos(angle)
    y = origin_y + distance * math.sin(angle)
    x = max(half, min(container_width - half, x))
    y = max(half, min(container_height - half, y))
    return x, y


def check_hit(click_x: float, click_y: float, target_x: float, target_y: float, target_width: float) -> bool:
    return math.hypot(click_x - target_x, click_y - target_y) <= target_width / 2


def record_trial(
    trial_index: int,
    target: TargetConfig,
    start: Tuple[float, float],
    click: Tuple[float, float],
    target_center: Tuple[float, float],
    movement_time: float,
) -> FittsTrial:
    """Build the trial record for one click."""
    return FittsTrial(
        target_id=f"trial-{trial_index}",
        distance=target.distance,
        width=target.width,
        index_of_difficulty=target.index_of_difficulty,
        movement_time=movement_time,
        hit=check_hit(click[0], click[1], target_center[0], target_center[1], target.width),
        start_x=start[0],
        start_y=start[1],
        end_x=click[0],
        end_y=click[1],
        target_x=target_center[0],
        target_y=target_center[1],
    )


def fit_movement_times(trials: Sequence[FittsTrial]) -> FittsRegression:
    """
    Regress mean movement time on ID.

    Only hits are used, and they are first averaged per ID bucket (rounded
    to 0.01 bit) so each difficulty level carries equal weight. Fewer than
    two buckets gives an all-zero fit.
    """
    buckets: Dict[float, List[float]] = {}
    for trial in trials:
        if not trial.hit:
            continue
        key = round(trial.index_of_difficulty, 2)
        buckets.setdefault(key, []).append(trial.movement_time)

    if len(buckets) < 2:
        return FittsRegression(0.0, 0.0, 0.0)

    ids = sorted(buckets)
    means = [float(np.mean(buckets[i])) for i in ids]
    fit = linear_regression(ids, means)
    return FittsRegression(slope=fit.slope, intercept=fit.intercept, r_squared=fit.r_squared)


def analyze_fitts_results(trials: Sequence[FittsTrial]) -> FittsResult:
    """Reduce a completed trial sequence to regression, throughput and error rate."""
    hits = [t for t in trials if t.hit]
    total = len(trials)
    error_rate = ((total - len(hits)) / total) * 100 if total > 0 else 0.0

    regression = fit_movement_times(trials)

    average_mt = float(np.mean([t.movement_time for t in hits])) if hits else 0.0
    average_id = float(np.mean([t.index_of_difficulty for t in hits])) if hits else 0.0
    throughput = (average_id / average_mt) * 1000 if average_mt > 0 else 0.0

    grouped: Dict[float, List[FittsTrial]] = {}
    for trial in trials:
        grouped.setdefault(round(trial.index_of_difficulty, 1), []).append(trial)

    logger.debug("Fitts analysis: %d trials, %.1f%% errors, TP %.2f bits/s", total, error_rate, throughput)

    return FittsResult(
        intercept=regression.intercept,
        slope=regression.slope,
        r_squared=regression.r_squared,
        throughput=throughput,
        average_movement_time=average_mt,
        error_rate=error_rate,
        total_trials=total,
        successful_trials=len(hits),
        trials_by_difficulty={k: tuple(v) for k, v in grouped.items()},
    )


def interpret_fitts_results(result: FittsResult) -> str:
    parts = []

    if result.r_squared >= 0.9:
        parts.append("Excellent fit to Fitts' Law model (R² ≥ 0.90).")
    elif result.r_squared >= 0.7:
        parts.append("Good fit to Fitts' Law model (R² ≥ 0.70).")
    else:
        parts.append("Poor fit to model - results may not be reliable.")

    if result.throughput >= 4:
        parts.append("Above-average throughput indicates efficient pointing performance.")
    elif result.throughput >= 3:
        parts.append("Throughput is in the typical range for mouse pointing.")
    else:
        parts.append("Below-average throughput may indicate interface or motor control issues.")

    if result.error_rate > 10:
        parts.append(f"High error rate ({result.error_rate:.1f}%) suggests targets may be too small.")

    return " ".join(parts)
