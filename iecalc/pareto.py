"""
Pareto (80/20) analysis.

Categories are ranked by descending value and accumulated in rank order.
The "vital few" are the leading categories whose cumulative share has not
yet exceeded the threshold; the top category is always included so the set
is never empty.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from iecalc import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParetoItem:
    category: str
    value: float
    id: Optional[str] = None


@dataclass(frozen=True)
class RankedItem:
    category: str
    value: float
    rank: int
    percentage: float
    cumulative_value: float
    cumulative_percentage: float
    is_vital_few: bool
    id: Optional[str] = None


@dataclass(frozen=True)
class ParetoResult:
    items: Tuple[RankedItem, ...]
    total_value: float
    vital_few_threshold: float
    vital_few_count: int
    vital_few_categories: Tuple[str, ...]
    vital_few_percentage: float
    trivial_many_count: int


def analyze_pareto(items: Sequence[ParetoItem], threshold: Optional[float] = None) -> ParetoResult:
    """
    Rank categories and split them into vital few and trivial many.

    Args:
        items: Categories with non-negative values
        threshold: Cumulative percentage bounding the vital few (50–99).
            Defaults to the configured threshold (80%).

    Returns:
        ParetoResult; an empty input gives an empty result rather than an error.
    """
    if threshold is None:
        threshold = config.PARETO_THRESHOLD

    if not items:
        return ParetoResult((), 0.0, threshold, 0, (), 0.0, 0)

    total = float(sum(item.value for item in items))
    # sorted() is stable, so equal values keep their input order
    ordered = sorted(items, key=lambda item: item.value, reverse=True)

    ranked: List[RankedItem] = []
    cumulative = 0.0
    vital_count = 0
    for index, item in enumerate(ordered):
        cumulative += item.value
        percentage = (item.value / total) * 100 if total > 0 else 0.0
        cumulative_pct = (cumulative / total) * 100 if total > 0 else 0.0

        is_vital = index == 0 or (vital_count == index and cumulative_pct <= threshold)
        if is_vital:
            vital_count += 1

        ranked.append(RankedItem(
            category=item.category,
            value=item.value,
            rank=index + 1,
            percentage=percentage,
            cumulative_value=cumulative,
            cumulative_percentage=cumulative_pct,
            is_vital_few=is_vital,
            id=item.id,
        ))

    vital = ranked[:vital_count]
    vital_pct = (sum(r.value for r in vital) / total) * 100 if total > 0 else 0.0

    logger.debug("Pareto: %d of %d categories in the vital few", vital_count, len(ranked))

    return ParetoResult(
        items=tuple(ranked),
        total_value=total,
        vital_few_threshold=threshold,
        vital_few_count=vital_count,
        vital_few_categories=tuple(r.category for r in vital),
        vital_few_percentage=vital_pct,
        trivial_many_count=len(ranked) - vital_count,
    )


def ideal_vital_few_count(total_categories: int) -> int:
    """Roughly 20% of categories, at least one."""
    return max(1, math.ceil(total_categories * 0.2))


def sample_defect_data() -> List[ParetoItem]:
    """Canonical seven-category defect tally."""
    return [
        ParetoItem("Machine Breakdown", 42, "1"),
        ParetoItem("Material Defects", 28, "2"),
        ParetoItem("Operator Error", 15, "3"),
        ParetoItem("Tool Wear", 8, "4"),
        ParetoItem("Setup Issues", 4, "5"),
        ParetoItem("Documentation", 2, "6"),
        ParetoItem("Other", 1, "7"),
    ]
