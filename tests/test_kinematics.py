"""
Orbital kinematics helper tests.
"""
import math

import numpy as np
import pytest

from orbitsim.config.settings import MU
from orbitsim.physics.kinematics import (
    circular_speed,
    escape_speed,
    orbital_period,
    tangential_velocity,
    velocity_from_direction,
)


@pytest.mark.parametrize("r", [6.5e6, 6771000.0, 8.371e6, 4.2164e7, 1.0])
def test_escape_is_sqrt2_times_circular(r):
    assert escape_speed(r) == pytest.approx(math.sqrt(2.0) * circular_speed(r), rel=1e-12)


def test_circular_speed_leo():
    # ~7.67 km/s at 400 km
    assert circular_speed(6771000.0) == pytest.approx(7672.5, abs=1.0)


def test_circular_speed_custom_mu():
    assert circular_speed(4.0, mu=16.0) == pytest.approx(2.0)


def test_orbital_period():
    r = 6771000.0
    assert orbital_period(r) == pytest.approx(2 * math.pi * math.sqrt(r**3 / MU))


class TestTangentialVelocity:

    def test_on_x_axis_points_along_y(self):
        v = tangential_velocity([7e6, 0.0, 0.0], 7500.0)
        assert np.allclose(v, [0.0, 7500.0, 0.0])

    def test_counter_clockwise_from_plus_z(self):
        v = tangential_velocity([0.0, 7e6, 0.0], 100.0)
        assert np.allclose(v, [-100.0, 0.0, 0.0])

    def test_perpendicular_and_in_plane(self):
        pos = np.array([3e6, 4e6, 2e6])
        v = tangential_velocity(pos, 123.0)
        assert np.isclose(np.linalg.norm(v), 123.0)
        assert np.isclose(np.dot(v, pos), 0.0, atol=1e-6)
        assert v[2] == 0.0

    def test_position_on_z_axis_rejected(self):
        with pytest.raises(ValueError):
            tangential_velocity([0.0, 0.0, 7e6], 100.0)


class TestVelocityFromDirection:

    def test_prograde(self):
        assert np.allclose(velocity_from_direction(100.0, 90.0), [0.0, 100.0, 0.0], atol=1e-9)

    def test_straight_down_from_plus_x(self):
        assert np.allclose(velocity_from_direction(200.0, 270.0), [0.0, -200.0, 0.0], atol=1e-9)

    def test_zero_direction(self):
        assert np.allclose(velocity_from_direction(50.0, 0.0), [50.0, 0.0, 0.0])
