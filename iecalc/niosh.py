"""
NIOSH Revised Lifting Equation (1991).

    RWL = LC × HM × VM × DM × AM × FM × CM
    LI  = load weight / RWL

LC is the load constant (23 kg or 51 lb). Each multiplier lies in [0, 1].
Geometry outside the equation's calibrated range does not raise: the
affected multiplier drops to 0, RWL becomes 0 and LI becomes infinite,
which is the "task infeasible" signal.

Risk bands on LI:
    LI ≤ 1.0        acceptable
    1.0 < LI ≤ 3.0  increased
    LI > 3.0        high

Reference: Waters et al., "Applications Manual for the Revised NIOSH
Lifting Equation", DHHS (NIOSH) Publication 94-110.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from iecalc.stats import interpolate_table

logger = logging.getLogger(__name__)


class Unit(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class Duration(str, Enum):
    SHORT = "short"        # ≤ 1 hour
    MODERATE = "moderate"  # 1–2 hours
    LONG = "long"          # 2–8 hours


class Coupling(str, Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class RiskLevel(str, Enum):
    ACCEPTABLE = "acceptable"
    INCREASED = "increased"
    HIGH = "high"


LC_KG = 23.0
LC_LB = 51.0

# Per-unit geometry constants
_H_MIN = {Unit.METRIC: 25.0, Unit.IMPERIAL: 10.0}
_H_MAX = {Unit.METRIC: 63.0, Unit.IMPERIAL: 25.0}
_V_OPTIMAL = {Unit.METRIC: 75.0, Unit.IMPERIAL: 30.0}
_V_FACTOR = {Unit.METRIC: 0.003, Unit.IMPERIAL: 0.0075}
_V_MAX = {Unit.METRIC: 175.0, Unit.IMPERIAL: 70.0}
_D_MIN = {Unit.METRIC: 25.0, Unit.IMPERIAL: 10.0}
_D_FACTOR = {Unit.METRIC: 4.5, Unit.IMPERIAL: 1.8}

# Vertical location at or above which the "high" table columns apply
V_THRESHOLD = {Unit.METRIC: 75.0, Unit.IMPERIAL: 30.0}

MAX_ASYMMETRY_DEG = 135.0

# Frequency multiplier table (Table 5 of the applications manual).
# Lifts/min breakpoints; one column per (duration, vertical position).
FM_FREQUENCIES = [0.2, 0.5, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15]

FM_TABLE: Dict[Tuple[Duration, str], List[float]] = {
    (Duration.SHORT, 'low'): [
        1.00, 0.97, 0.94, 0.91, 0.88, 0.84, 0.80, 0.75, 0.70, 0.60, 0.52, 0.45,
        0.41, 0.37, 0.34, 0.31, 0.28,
    ],
    (Duration.SHORT, 'high'): [
        1.00, 0.97, 0.94, 0.91, 0.88, 0.84, 0.80, 0.75, 0.70, 0.60, 0.52, 0.45,
        0.41, 0.37, 0.00, 0.00, 0.00,
    ],
    (Duration.MODERATE, 'low'): [
        0.95, 0.92, 0.88, 0.84, 0.79, 0.72, 0.60, 0.50, 0.42, 0.35, 0.30, 0.26,
        0.23, 0.21, 0.00, 0.00, 0.00,
    ],
    (Duration.MODERATE, 'high'): [
        0.95, 0.92, 0.88, 0.84, 0.79, 0.72, 0.60, 0.50, 0.42, 0.35, 0.30, 0.26,
        0.00, 0.00, 0.00, 0.00, 0.00,
    ],
    (Duration.LONG, 'low'): [
        0.85, 0.81, 0.75, 0.65, 0.55, 0.45, 0.35, 0.27, 0.22, 0.18, 0.00, 0.00,
        0.00, 0.00, 0.00, 0.00, 0.00,
    ],
    (Duration.LONG, 'high'): [
        0.85, 0.81, 0.75, 0.65, 0.55, 0.45, 0.35, 0.27, 0.22, 0.00, 0.00, 0.00,
        0.00, 0.00, 0.00, 0.00, 0.00,
    ],
}

# coupling -> (V below threshold, V at/above threshold)
CM_TABLE: Dict[Coupling, Tuple[float, float]] = {
    Coupling.GOOD: (1.00, 1.00),
    Coupling.FAIR: (0.95, 1.00),
    Coupling.POOR: (0.90, 0.90),
}

FACTOR_NAMES = {
    'hm': 'Horizontal distance',
    'vm': 'Vertical location',
    'dm': 'Travel distance',
    'am': 'Asymmetric angle',
    'fm': 'Frequency',
    'cm': 'Coupling',
}

RISK_DESCRIPTIONS = {
    RiskLevel.ACCEPTABLE: "Task poses minimal risk to most workers",
    RiskLevel.INCREASED: "Task may pose increased risk; consider redesign",
    RiskLevel.HIGH: "Task poses significant risk; redesign required",
}


@dataclass(frozen=True)
class NIOSHInputs:
    """Task geometry in cm/kg (metric) or in/lb (imperial)."""
    horizontal_distance: float
    vertical_distance: float
    travel_distance: float
    asymmetric_angle: float     # degrees
    frequency: float            # lifts per minute
    duration: Duration
    coupling: Coupling
    load_weight: float
    unit: Unit = Unit.METRIC


@dataclass(frozen=True)
class Multipliers:
    hm: float
    vm: float
    dm: float
    am: float
    fm: float
    cm: float

    def as_dict(self) -> Dict[str, float]:
        return {
            'hm': self.hm,
            'vm': self.vm,
            'dm': self.dm,
            'am': self.am,
            'fm': self.fm,
            'cm': self.cm,
        }

    def product(self) -> float:
        return self.hm * self.vm * self.dm * self.am * self.fm * self.cm


@dataclass(frozen=True)
class NIOSHResult:
    rwl: float
    lifting_index: float
    risk_level: RiskLevel
    risk_description: str
    multipliers: Multipliers
    limiting_factor: str


def horizontal_multiplier(h: float, unit: Unit = Unit.METRIC) -> float:
    """HM = 25/H (cm) or 10/H (in); H below 25 cm is treated as 25, above 63 cm gives 0."""
    unit = Unit(unit)
    h_min = _H_MIN[unit]
    if h > _H_MAX[unit]:
        return 0.0
    h = max(h, h_min)
    return min(1.0, h_min / h)


def vertical_multiplier(v: float, unit: Unit = Unit.METRIC) -> float:
    """VM = 1 − 0.003|V − 75| (cm) or 1 − 0.0075|V − 30| (in); 0 above 175 cm."""
    unit = Unit(unit)
    if v > _V_MAX[unit]:
        return 0.0
    v = max(v, 0.0)
    return max(0.0, 1 - _V_FACTOR[unit] * abs(v - _V_OPTIMAL[unit]))


def distance_multiplier(d: float, unit: Unit = Unit.METRIC) -> float:
    """DM = 0.82 + 4.5/D (cm) or 0.82 + 1.8/D (in), with D floored at 25 cm / 10 in."""
    unit = Unit(unit)
    d = max(d, _D_MIN[unit])
    return min(1.0, 0.82 + _D_FACTOR[unit] / d)


def asymmetric_multiplier(angle: float) -> float:
    """AM = 1 − 0.0032·A; 0 beyond 135°."""
    if angle > MAX_ASYMMETRY_DEG:
        return 0.0
    angle = max(angle, 0.0)
    return 1 - 0.0032 * angle


def _vertical_position(vertical_distance: float, unit: Unit) -> str:
    return 'high' if vertical_distance >= V_THRESHOLD[unit] else 'low'


def frequency_multiplier(
    frequency: float,
    duration: Duration,
    vertical_distance: float,
    unit: Unit = Unit.METRIC,
) -> float:
    """
    FM from the frequency table, linearly interpolated between breakpoints.

    The table column is selected by work duration and whether the hands
    start at or above the vertical threshold (75 cm / 30 in). Frequencies
    outside 0.2–15 lifts/min clamp to the end of the table.
    """
    unit = Unit(unit)
    column = FM_TABLE[(Duration(duration), _vertical_position(vertical_distance, unit))]
    return interpolate_table(FM_FREQUENCIES, column, frequency)


def coupling_multiplier(
    coupling: Coupling,
    vertical_distance: float,
    unit: Unit = Unit.METRIC,
) -> float:
    unit = Unit(unit)
    low, high = CM_TABLE[Coupling(coupling)]
    return high if _vertical_position(vertical_distance, unit) == 'high' else low


def classify_lifting_index(li: float) -> RiskLevel:
    if li <= 1.0:
        return RiskLevel.ACCEPTABLE
    if li <= 3.0:
        return RiskLevel.INCREASED
    return RiskLevel.HIGH


def calculate_niosh(inputs: NIOSHInputs) -> NIOSHResult:
    """
    Compute the Recommended Weight Limit and Lifting Index for a lifting task.

    Returns:
        NIOSHResult with RWL, LI, risk band, the six multipliers and the name
        of the smallest multiplier (the factor limiting the RWL).
    """
    unit = Unit(inputs.unit)
    lc = LC_KG if unit == Unit.METRIC else LC_LB

    multipliers = Multipliers(
        hm=horizontal_multiplier(inputs.horizontal_distance, unit),
        vm=vertical_multiplier(inputs.vertical_distance, unit),
        dm=distance_multiplier(inputs.travel_distance, unit),
        am=asymmetric_multiplier(inputs.asymmetric_angle),
        fm=frequency_multiplier(inputs.frequency, inputs.duration, inputs.vertical_distance, unit),
        cm=coupling_multiplier(inputs.coupling, inputs.vertical_distance, unit),
    )

    rwl = lc * multipliers.product()
    if rwl > 0:
        lifting_index = inputs.load_weight / rwl
    else:
        logger.warning("RWL is 0 for %s; task geometry is outside the lifting equation", inputs)
        lifting_index = math.inf

    risk_level = classify_lifting_index(lifting_index)

    # min() keeps the first of equal values, so ties resolve in HM..CM order
    limiting_key = min(multipliers.as_dict().items(), key=lambda item: item[1])[0]

    return NIOSHResult(
        rwl=rwl,
        lifting_index=lifting_index,
        risk_level=risk_level,
        risk_description=RISK_DESCRIPTIONS[risk_level],
        multipliers=multipliers,
        limiting_factor=FACTOR_NAMES[limiting_key],
    )
