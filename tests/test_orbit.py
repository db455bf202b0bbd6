"""
Long-run orbit tests: one full orbital period at 400 km with drag off.

Both runs share a module-scoped fixture since each covers ~5500 s of
simulated time in 0.01 s substeps.
"""
import math

import numpy as np
import pytest

from orbitsim.config import settings
from orbitsim.models.satellite import Satellite
from orbitsim.physics.kinematics import circular_speed, orbital_period, tangential_velocity
from orbitsim.physics.utils import mechanical_energy, energy_drift_percent
from orbitsim.simulation.fleet import Fleet

RADIUS = 6_771_000.0
TICK = settings.SUBSTEP_DT * settings.MAX_SUBSTEPS


@pytest.fixture(scope="module")
def one_orbit():
    assert settings.EARTH_RADIUS == 6_371_000.0
    assert settings.EARTH_MASS == 5.972e24
    assert settings.G == 6.6743e-11

    fleet = Fleet()
    start = np.array([RADIUS, 0.0, 0.0])
    circular = Satellite(start, tangential_velocity(start, circular_speed(RADIUS)),
                         air_resistance_enabled=False, name="circular")
    iss = Satellite(start, [0.0, 7669.0, 0.0], air_resistance_enabled=False, name="iss")
    fleet.add(circular)
    fleet.add(iss)

    initial = {
        s.name: (s.position.copy(), mechanical_energy(s.state(), s.mass)) for s in fleet
    }

    period = orbital_period(RADIUS)
    n_ticks = int(period // TICK)
    for _ in range(n_ticks):
        fleet.tick(TICK)
    fleet.tick(period - n_ticks * TICK)

    return fleet, initial, period


def test_period_matches_expected(one_orbit):
    _, _, period = one_orbit
    assert period == pytest.approx(2 * math.pi * math.sqrt(RADIUS**3 / settings.MU))
    assert 5500.0 < period < 5600.0


def test_circular_orbit_closes(one_orbit):
    fleet, initial, _ = one_orbit
    sat = fleet[0]
    start, _ = initial["circular"]
    assert not sat.crashed
    assert np.linalg.norm(sat.position - start) < 0.001 * RADIUS


def test_circular_orbit_conserves_energy(one_orbit):
    fleet, initial, _ = one_orbit
    sat = fleet[0]
    _, e0 = initial["circular"]
    e1 = mechanical_energy(sat.state(), sat.mass)
    assert energy_drift_percent(e0, e1) < 1e-4


def test_iss_altitude_after_one_period(one_orbit):
    fleet, _, _ = one_orbit
    sat = fleet[1]
    assert not sat.crashed
    assert sat.altitude() == pytest.approx(400_000.0, rel=0.01)


def test_iss_conserves_energy(one_orbit):
    fleet, initial, _ = one_orbit
    sat = fleet[1]
    _, e0 = initial["iss"]
    assert energy_drift_percent(e0, mechanical_energy(sat.state(), sat.mass)) < 1e-4


def test_trail_is_bounded_after_full_orbit(one_orbit):
    fleet, _, _ = one_orbit
    for sat in fleet:
        assert 0 < len(sat.trail) <= settings.TRAIL_MAX_POINTS
