"""
Industrial Engineering Calculation Engine

Pure, deterministic calculators for work measurement, ergonomics,
cost-volume-profit and psychophysics: time study, work sampling, the NIOSH
lifting equation, OSHA noise dose, learning curves, break-even, Pareto
analysis, Fitts' Law and the Stroop test.

Randomness (trial and observation-time generation) always goes through an
injectable numpy Generator.
"""

from iecalc.errors import CalculationError
from iecalc.stats import z_value, linear_regression, log_linear_regression, descriptive_stats, interpolate_table
from iecalc.work_sampling import calculate_sample_size, calculate_error_limit, random_observation_times
from iecalc.time_study import WestinghouseRating, westinghouse_factor, calculate_time_study, required_sample_size
from iecalc.niosh import NIOSHInputs, calculate_niosh
from iecalc.noise_dose import NoiseExposure, allowed_time, level_from_time, calculate_noise_dose, calculate_twa, dose_from_twa
from iecalc.learning_curves import (
    TwoPointInput,
    calculate_two_point_method,
    calculate_regression_method,
    predict_time_at_cycle,
    learning_rate_percent,
)
from iecalc.break_even import BreakEvenInputs, calculate_break_even
from iecalc.pareto import ParetoItem, analyze_pareto
from iecalc.fitts_law import index_of_difficulty, analyze_fitts_results
from iecalc.stroop import generate_trial_set, analyze_stroop_results

__version__ = "0.1.0"
