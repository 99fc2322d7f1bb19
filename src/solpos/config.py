"""
Constants and nominal defaults for solar position calculations
"""
import os
from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent
RESULTS_DIR = PROJECT_ROOT / "results"

# Angle conversion factors
DEGRAD = 57.295779513  # radians -> degrees
RADDEG = 0.0174532925  # degrees -> radians

# Limits of the algorithm
MIN_YEAR = 1950
MAX_YEAR = 2050

# Nominal values for optional inputs
DEFAULT_PRESS = 1013.0  # Surface pressure, millibars
DEFAULT_TEMP = 15.0  # Ambient dry-bulb temperature, degrees C
DEFAULT_TILT = 0.0  # Horizontal panel
DEFAULT_ASPECT = 180.0  # Panel faces south
DEFAULT_SOLCON = 1367.0  # Solar constant, W/sq m
DEFAULT_SBWID = 7.6  # Eppley shadow band width, cm
DEFAULT_SBRAD = 31.7  # Eppley shadow band radius, cm
DEFAULT_SBSKY = 0.04  # Drummond factor for partly cloudy skies
DEFAULT_INTERVAL = 0  # Instantaneous measurement

# Environment overrides for the command-line entry point
ENV_LATITUDE = "SOLPOS_LATITUDE"
ENV_LONGITUDE = "SOLPOS_LONGITUDE"
ENV_TZ = "SOLPOS_TZ"
ENV_LOG_LEVEL = "SOLPOS_LOG_LEVEL"


def env_float(name: str) -> float | None:
    """Read a float from the environment, None when unset or blank."""
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else None
