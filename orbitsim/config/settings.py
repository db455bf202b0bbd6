"""
Project settings (constants + small helpers).
Units: meters (m), seconds (s), kilograms (kg), meters/second (m/s).
"""
from __future__ import annotations

import os
from typing import Optional

# Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
OUTPUT_DIR = os.path.join(BASE_DIR, "outputs")

# Run
VALIDATE_ON_IMPORT = False

# Central body (Earth)
G = 6.6743e-11
EARTH_MASS = 5.972e24
EARTH_RADIUS = 6371000.0
MU = G * EARTH_MASS

# Integrator
SUBSTEP_DT = 0.01
MAX_SUBSTEPS = 50
FRAME_DT = 1.0  # wall-clock delta the headless driver feeds per tick

# Time-scale ceilings
MAX_GLOBAL_TIME_SCALE = 20.0
MAX_SATELLITE_TIME_SCALE = 10.0

# Safety thresholds
CRASH_ALTITUDE = 80_000.0
DRAG_MIN_ALTITUDE = 100_000.0
DRAG_ESCAPE_RATIO = 0.95
DRAG_MIN_SPEED = 1.0

# Status classification (fractions of escape speed)
ESCAPING_RATIO = 1.1
NEAR_ESCAPE_RATIO = 0.9

# Gradual height adjustment
TARGET_HEIGHT_TOLERANCE = 100.0
TARGET_HEIGHT_MAX_STEP = 500.0

# Satellite defaults
DEFAULT_MASS = 1000.0
DEFAULT_DRAG_COEFFICIENT = 2.2
DEFAULT_CROSS_SECTIONAL_AREA = 10.0
DEFAULT_SURFACE_DENSITY = 1.225
DEFAULT_DENSITY_SCALE_HEIGHT = 8500.0
DEFAULT_DENSITY_MODEL = "layered"
DENSITY_MODELS = ("layered", "exponential")

DEFAULT_HEIGHT = 2_000_000.0
DEFAULT_DIRECTION_DEG = 90.0
MIN_SAFE_ORBIT_HEIGHT = 200_000.0

# Trail (bounded recent history)
TRAIL_MAX_POINTS = 1000
TRAIL_MIN_SPACING = 1000.0

# CLI
MAX_SATELLITES = 20
DEFAULT_DURATION = 600.0


def clamp_time_scale(value: float, ceiling: float) -> float:
    return min(float(value), float(ceiling))


def clamp_height(val: Optional[float], minimum: float = MIN_SAFE_ORBIT_HEIGHT) -> float:
    out = float(DEFAULT_HEIGHT if val is None else val)
    return max(float(minimum), out)


def validate_settings() -> None:
    if G <= 0 or EARTH_MASS <= 0:
        raise ValueError("G and EARTH_MASS must be > 0")
    if EARTH_RADIUS <= 0:
        raise ValueError("EARTH_RADIUS must be > 0")
    if SUBSTEP_DT <= 0:
        raise ValueError("SUBSTEP_DT must be > 0")
    if MAX_SUBSTEPS <= 0:
        raise ValueError("MAX_SUBSTEPS must be > 0")
    if MAX_GLOBAL_TIME_SCALE <= 0 or MAX_SATELLITE_TIME_SCALE <= 0:
        raise ValueError("time-scale ceilings must be > 0")
    if CRASH_ALTITUDE < 0:
        raise ValueError("CRASH_ALTITUDE must be >= 0")
    if DRAG_MIN_ALTITUDE < CRASH_ALTITUDE:
        raise ValueError("DRAG_MIN_ALTITUDE must be >= CRASH_ALTITUDE")
    if not 0 < DRAG_ESCAPE_RATIO <= 1:
        raise ValueError("DRAG_ESCAPE_RATIO must be in (0, 1]")
    if NEAR_ESCAPE_RATIO >= ESCAPING_RATIO:
        raise ValueError("NEAR_ESCAPE_RATIO must be < ESCAPING_RATIO")
    if TARGET_HEIGHT_TOLERANCE <= 0 or TARGET_HEIGHT_MAX_STEP <= 0:
        raise ValueError("target-height tolerances must be > 0")
    if DEFAULT_MASS <= 0:
        raise ValueError("DEFAULT_MASS must be > 0")
    if DEFAULT_DRAG_COEFFICIENT <= 0 or DEFAULT_CROSS_SECTIONAL_AREA <= 0:
        raise ValueError("default drag parameters must be > 0")
    if DEFAULT_SURFACE_DENSITY <= 0 or DEFAULT_DENSITY_SCALE_HEIGHT <= 0:
        raise ValueError("default density fallback parameters must be > 0")
    if DEFAULT_DENSITY_MODEL not in DENSITY_MODELS:
        raise ValueError(f"DEFAULT_DENSITY_MODEL must be one of {DENSITY_MODELS}")
    if TRAIL_MAX_POINTS <= 0:
        raise ValueError("TRAIL_MAX_POINTS must be > 0")
    if TRAIL_MIN_SPACING < 0:
        raise ValueError("TRAIL_MIN_SPACING must be >= 0")


if VALIDATE_ON_IMPORT:
    validate_settings()
