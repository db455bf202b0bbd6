import math
import numpy as np
from orbitsim.config.settings import MU


def circular_speed(r, mu=MU):
    """
    Speed of a circular orbit at radius r (m) about the central body.
    """
    return math.sqrt(mu / float(r))


def escape_speed(r, mu=MU):
    """
    Minimum speed at radius r (m) to leave the central body entirely.
    """
    return math.sqrt(2.0 * mu / float(r))


def orbital_period(r, mu=MU):
    return 2.0 * math.pi * float(r) / circular_speed(r, mu)


def tangential_velocity(position, speed):
    """
    Velocity of magnitude `speed` perpendicular to the position's projection on
    the z=0 plane, direction (-y, x, 0): counter-clockwise seen from +z.
    """
    position = np.asarray(position, dtype=float)
    direction = np.array([-position[1], position[0], 0.0], dtype=float)
    norm = np.linalg.norm(direction)
    if norm == 0.0:
        # position on the z axis: no in-plane projection to be tangent to
        raise ValueError("Cannot derive a tangential direction for a position on the z axis.")
    return direction / norm * float(speed)


def velocity_from_direction(speed, direction_deg):
    """
    In-plane velocity from a speed and a heading in degrees
    (0 = +x, 90 = +y, 270 = -y).
    """
    d = math.radians(float(direction_deg))
    return np.array([speed * math.cos(d), speed * math.sin(d), 0.0], dtype=float)
