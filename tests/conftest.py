"""
Pytest configuration and shared fixtures.
"""
import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from orbitsim.config import settings
from orbitsim.engine.integrator import Integrator
from orbitsim.models.satellite import Satellite
from orbitsim.physics.kinematics import circular_speed, tangential_velocity
from orbitsim.simulation.fleet import Fleet

EARTH_RADIUS = 6371000.0
ISS_RADIUS = EARTH_RADIUS + 400_000.0


@pytest.fixture
def integrator():
    return Integrator()


@pytest.fixture
def fleet():
    return Fleet()


@pytest.fixture
def leo_position():
    """400 km altitude on the +x axis."""
    return np.array([ISS_RADIUS, 0.0, 0.0])


@pytest.fixture
def circular_leo(leo_position):
    """Circular 400 km orbit, drag off."""
    v = tangential_velocity(leo_position, circular_speed(ISS_RADIUS))
    return Satellite(leo_position, v, air_resistance_enabled=False, name="LEO")


@pytest.fixture
def high_orbit():
    """Circular orbit at the default 2000 km height, drag on (above the drag floor)."""
    r = settings.EARTH_RADIUS + settings.DEFAULT_HEIGHT
    pos = np.array([r, 0.0, 0.0])
    return Satellite(pos, tangential_velocity(pos, circular_speed(r)), name="HIGH")


@pytest.fixture
def tmp_output_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "OUTPUT_DIR", str(tmp_path))
    return tmp_path
