"""
OSHA occupational noise dose (29 CFR 1910.95).

The permissible exposure limit is 90 dB(A) for 8 hours with a 5 dB exchange
rate, so each 5 dB increase halves the allowed time:

    T = 8 / 2^((L − 90) / 5)
    D = Σ (C_i / T_i) × 100%
    TWA = 16.61 × log10(D / 100) + 90

Levels below 80 dB(A) do not contribute to the dose. Levels above 130 dB(A)
have no defined allowed time and are rejected.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from iecalc.errors import InsufficientDataError, NoiseLevelOutOfRangeError, RangeViolationError

logger = logging.getLogger(__name__)

OSHA_REFERENCE_LEVEL = 90.0   # dB(A)
OSHA_REFERENCE_TIME = 8.0     # hours
OSHA_EXCHANGE_RATE = 5.0      # dB
OSHA_THRESHOLD = 80.0         # dB(A)
OSHA_MAX_LEVEL = 130.0        # dB(A)
TWA_COEFFICIENT = 16.61

ACTION_LEVEL_DOSE = 50.0
PEL_DOSE = 100.0

# Table G-16: (level dB(A), permissible hours)
OSHA_PERMISSIBLE_EXPOSURES: Tuple[Tuple[float, float], ...] = (
    (90, 8),
    (92, 6),
    (95, 4),
    (97, 3),
    (100, 2),
    (102, 1.5),
    (105, 1),
    (110, 0.5),
    (115, 0.25),
)


@dataclass(frozen=True)
class NoiseExposure:
    level: float     # dB(A)
    duration: float  # hours


@dataclass(frozen=True)
class ExposureDose:
    level: float
    actual_duration: float
    allowed_duration: float  # inf below the 80 dB threshold
    partial_dose: float


@dataclass(frozen=True)
class NoiseRisk:
    level: str  # 'safe', 'action' or 'exceeded'
    description: str


@dataclass(frozen=True)
class NoiseDoseResult:
    dose: float
    twa: float
    exposures: Tuple[ExposureDose, ...]
    exceeds_pel: bool
    exceeds_action_level: bool
    risk: NoiseRisk


def allowed_time(level: float) -> float:
    """Permissible exposure in hours at a sound level between 80 and 130 dB(A)."""
    if level < OSHA_THRESHOLD:
        raise NoiseLevelOutOfRangeError(f"Noise level must be at least {OSHA_THRESHOLD:g} dB")
    if level > OSHA_MAX_LEVEL:
        raise NoiseLevelOutOfRangeError(f"Noise level must not exceed {OSHA_MAX_LEVEL:g} dB")
    exponent = (level - OSHA_REFERENCE_LEVEL) / OSHA_EXCHANGE_RATE
    return OSHA_REFERENCE_TIME / (2 ** exponent)


def level_from_time(hours: float) -> float:
    """Inverse of allowed_time: L = 90 + 5 · log2(8 / T)."""
    if hours <= 0:
        raise RangeViolationError("Time must be positive")
    return OSHA_REFERENCE_LEVEL + OSHA_EXCHANGE_RATE * math.log2(OSHA_REFERENCE_TIME / hours)


def calculate_twa(dose: float) -> float:
    """8-hour TWA in dB(A) for a dose in percent; 0 for a zero dose."""
    if dose <= 0:
        return 0.0
    return TWA_COEFFICIENT * math.log10(dose / 100) + OSHA_REFERENCE_LEVEL


def dose_from_twa(twa: float) -> float:
    """Dose in percent for an 8-hour TWA: D = 100 · 10^((TWA − 90) / 16.61)."""
    return 100 * 10 ** ((twa - OSHA_REFERENCE_LEVEL) / TWA_COEFFICIENT)


def noise_risk_level(dose: float) -> NoiseRisk:
    if dose > PEL_DOSE:
        return NoiseRisk('exceeded', "Exceeds OSHA PEL - Immediate engineering controls required")
    if dose > ACTION_LEVEL_DOSE:
        return NoiseRisk('action', "Exceeds Action Level - Hearing conservation program required")
    return NoiseRisk('safe', "Below OSHA Action Level")


def _exposure_dose(exposure: NoiseExposure) -> ExposureDose:
    if exposure.level < OSHA_THRESHOLD:
        return ExposureDose(exposure.level, exposure.duration, math.inf, 0.0)
    allowed = allowed_time(exposure.level)
    return ExposureDose(
        level=exposure.level,
        actual_duration=exposure.duration,
        allowed_duration=allowed,
        partial_dose=(exposure.duration / allowed) * 100,
    )


def calculate_noise_dose(exposures: Sequence[NoiseExposure]) -> NoiseDoseResult:
    """
    Cumulative OSHA dose and TWA for a shift made up of several exposures.

    Every entry is validated, then entries with zero duration are skipped;
    the breakdown lists the remaining exposures in input order.

    Raises:
        InsufficientDataError: empty list, or every duration is zero.
        RangeViolationError: a negative duration.
        NoiseLevelOutOfRangeError: a level above 130 dB(A).
    """
    if len(exposures) == 0:
        raise InsufficientDataError("At least one exposure is required")

    for exposure in exposures:
        if exposure.duration < 0:
            raise RangeViolationError(
                f"Exposure duration must not be negative, got {exposure.duration:g} h"
            )
        if exposure.level > OSHA_MAX_LEVEL:
            raise NoiseLevelOutOfRangeError(
                f"Noise level {exposure.level:g} dB exceeds maximum {OSHA_MAX_LEVEL:g} dB"
            )

    active = [e for e in exposures if e.duration > 0]
    if not active:
        raise InsufficientDataError("At least one exposure with duration > 0 is required")

    breakdown: List[ExposureDose] = [_exposure_dose(e) for e in active]
    total_dose = sum(item.partial_dose for item in breakdown)
    twa = calculate_twa(total_dose)

    logger.debug("Noise dose %.2f%% over %d exposures, TWA %.2f dB(A)", total_dose, len(breakdown), twa)

    return NoiseDoseResult(
        dose=total_dose,
        twa=twa,
        exposures=tuple(breakdown),
        exceeds_pel=total_dose > PEL_DOSE,
        exceeds_action_level=total_dose > ACTION_LEVEL_DOSE,
        risk=noise_risk_level(total_dose),
    )
