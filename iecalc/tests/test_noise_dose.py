"""
Tests for OSHA noise dose.

Validates:
1. Allowed time with the 5 dB exchange rate, and its inverse
2. Agreement with the Table G-16 permissible exposures
3. Dose, TWA and risk classification for a shift
4. Threshold, range and duration handling
"""

import math

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from iecalc.errors import InsufficientDataError, NoiseLevelOutOfRangeError, RangeViolationError
from iecalc.noise_dose import (
    OSHA_PERMISSIBLE_EXPOSURES,
    NoiseExposure,
    allowed_time,
    calculate_noise_dose,
    calculate_twa,
    dose_from_twa,
    level_from_time,
    noise_risk_level,
)


class TestAllowedTime:
    """Test T = 8 / 2^((L − 90) / 5)."""

    def test_reference_level(self):
        assert allowed_time(90) == pytest.approx(8.0)

    def test_exchange_rate_halves_time(self):
        assert allowed_time(95) == pytest.approx(4.0)
        assert allowed_time(85) == pytest.approx(16.0)

    def test_range_limits_inclusive(self):
        assert allowed_time(80) == pytest.approx(32.0)
        assert allowed_time(130) == pytest.approx(8 / 256)

    @pytest.mark.parametrize("level", [79.9, 130.1])
    def test_out_of_range_raises(self, level):
        with pytest.raises(NoiseLevelOutOfRangeError):
            allowed_time(level)

    @pytest.mark.parametrize("level, hours", OSHA_PERMISSIBLE_EXPOSURES)
    def test_matches_permissible_exposure_table(self, level, hours):
        assert allowed_time(level) == pytest.approx(hours, abs=0.1)

    @pytest.mark.parametrize("level", [80, 85, 92.5, 100, 117, 130])
    def test_inverse(self, level):
        assert level_from_time(allowed_time(level)) == pytest.approx(level)

    def test_level_from_time_rejects_zero(self):
        with pytest.raises(RangeViolationError):
            level_from_time(0)


class TestTwa:

    def test_full_dose_is_90(self):
        assert calculate_twa(100) == pytest.approx(90.0)

    def test_zero_dose(self):
        assert calculate_twa(0) == 0.0

    @pytest.mark.parametrize("dose", [10, 50, 100, 250])
    def test_inverse(self, dose):
        assert dose_from_twa(calculate_twa(dose)) == pytest.approx(dose)


class TestRiskLevel:

    @pytest.mark.parametrize("dose, level", [
        (30, 'safe'),
        (50, 'safe'),
        (50.1, 'action'),
        (100, 'action'),
        (100.1, 'exceeded'),
    ])
    def test_bands(self, dose, level):
        assert noise_risk_level(dose).level == level


class TestCalculateNoiseDose:
    """Test the cumulative dose for a shift."""

    def test_eight_hours_at_90(self):
        result = calculate_noise_dose([NoiseExposure(90, 8)])
        assert result.dose == pytest.approx(100.0)
        assert result.twa == pytest.approx(90.0)
        assert result.exceeds_pel is False
        assert result.exceeds_action_level is True
        assert result.risk.level == 'action'

    def test_half_dose(self):
        result = calculate_noise_dose([NoiseExposure(90, 4)])
        assert result.dose == pytest.approx(50.0)
        assert result.twa == pytest.approx(85.0, abs=0.01)
        assert result.exceeds_action_level is False
        assert result.risk.level == 'safe'

    def test_partial_doses_add(self):
        result = calculate_noise_dose([NoiseExposure(90, 4), NoiseExposure(95, 2)])
        assert result.dose == pytest.approx(100.0)
        assert [e.partial_dose for e in result.exposures] == [pytest.approx(50.0), pytest.approx(50.0)]

    def test_over_limit(self):
        result = calculate_noise_dose([NoiseExposure(100, 4)])
        assert result.dose == pytest.approx(200.0)
        assert result.exceeds_pel is True
        assert result.risk.level == 'exceeded'

    def test_below_threshold_contributes_nothing(self):
        result = calculate_noise_dose([NoiseExposure(75, 4), NoiseExposure(90, 4)])
        assert result.dose == pytest.approx(50.0)
        quiet = result.exposures[0]
        assert math.isinf(quiet.allowed_duration)
        assert quiet.partial_dose == 0.0

    def test_zero_durations_skipped(self):
        result = calculate_noise_dose([NoiseExposure(100, 0), NoiseExposure(90, 8)])
        assert len(result.exposures) == 1
        assert result.dose == pytest.approx(100.0)

    def test_breakdown_keeps_input_order(self):
        result = calculate_noise_dose([NoiseExposure(95, 1), NoiseExposure(85, 2), NoiseExposure(90, 1)])
        assert [e.level for e in result.exposures] == [95, 85, 90]

    def test_empty_list_raises(self):
        with pytest.raises(InsufficientDataError):
            calculate_noise_dose([])

    def test_all_zero_durations_raise(self):
        with pytest.raises(InsufficientDataError):
            calculate_noise_dose([NoiseExposure(90, 0), NoiseExposure(95, 0)])

    def test_negative_duration_raises(self):
        with pytest.raises(RangeViolationError):
            calculate_noise_dose([NoiseExposure(90, -1)])

    def test_level_above_max_raises(self):
        with pytest.raises(NoiseLevelOutOfRangeError):
            calculate_noise_dose([NoiseExposure(140, 1)])

    def test_level_above_max_raises_even_with_zero_duration(self):
        with pytest.raises(NoiseLevelOutOfRangeError):
            calculate_noise_dose([NoiseExposure(140, 0), NoiseExposure(90, 4)])

    def test_same_inputs_same_result(self):
        exposures = [NoiseExposure(75, 2), NoiseExposure(92, 3), NoiseExposure(100, 1)]
        assert calculate_noise_dose(exposures) == calculate_noise_dose(list(exposures))
