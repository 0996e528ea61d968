"""
Runtime configuration for the calculation engine.

Values come from the environment (a local .env file is honoured) and only
supply defaults; every calculator still accepts explicit arguments.
"""

import logging
import os
from typing import Optional

import numpy as np
from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-numeric %s=%r", name, raw)
        return default


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-integer %s=%r", name, raw)
        return None


LOG_LEVEL = os.getenv("IECALC_LOG_LEVEL", "WARNING").upper()

DEFAULT_ALLOWANCE_PCT = _env_float("IECALC_DEFAULT_ALLOWANCE_PCT", 15.0)
PARETO_THRESHOLD = _env_float("IECALC_PARETO_THRESHOLD", 80.0)
WORKDAY_START_HOUR = int(_env_float("IECALC_WORKDAY_START_HOUR", 8))
WORKDAY_END_HOUR = int(_env_float("IECALC_WORKDAY_END_HOUR", 17))
RANDOM_SEED = _env_int("IECALC_RANDOM_SEED")


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Build the random source used by trial and observation-time generation.

    An explicit seed wins over IECALC_RANDOM_SEED; with neither set the
    generator is seeded from OS entropy.
    """
    if seed is None:
        seed = RANDOM_SEED
    return np.random.default_rng(seed)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stream handler to the package logger at the configured level."""
    logger = logging.getLogger("iecalc")
    logger.setLevel((level or LOG_LEVEL).upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
