# orbitsim/physics/forces.py
import numpy as np
from orbitsim.config.settings import MU, EARTH_RADIUS, DRAG_MIN_SPEED
from orbitsim.physics.atmosphere import density


class ForceModel:
    """
    Base force model. Returns the acceleration (m/s^2) acting on a state.
    """
    def acceleration(self, state) -> np.ndarray:
        raise NotImplementedError


class NewtonianGravity(ForceModel):
    def __init__(self, mu: float = MU):
        self.mu = float(mu)

    def acceleration(self, state) -> np.ndarray:
        r = state.r
        norm = np.sqrt(r @ r)
        if norm == 0:
            return np.zeros(3, dtype=float)
        return -(self.mu / norm**3) * r


class AtmosphericDrag(ForceModel):
    """
    Quadratic drag opposing the velocity: F = 0.5 * rho * v^2 * Cd * A.
    `density_fn` maps altitude (m) to density (kg/m^3).
    """
    def __init__(self, drag_coefficient: float, area: float, mass: float,
                 density_fn=density, body_radius: float = EARTH_RADIUS,
                 min_speed: float = DRAG_MIN_SPEED):
        self.cd = float(drag_coefficient)
        self.area = float(area)
        self.mass = float(mass)
        self.density_fn = density_fn
        self.body_radius = float(body_radius)
        self.min_speed = float(min_speed)

    def acceleration(self, state) -> np.ndarray:
        velocity = state.v
        v = np.sqrt(velocity @ velocity)
        if v <= self.min_speed:
            return np.zeros(3, dtype=float)
        altitude = np.sqrt(state.r @ state.r) - self.body_radius
        rho = self.density_fn(altitude)
        if rho == 0.0:
            return np.zeros(3, dtype=float)
        force = 0.5 * rho * v**2 * self.cd * self.area
        return -(force / self.mass) * (velocity / v)


class CompositeForce(ForceModel):
    """
    Combines multiple force models.
    """
    def __init__(self, *models):
        self.models = list(models)

    def acceleration(self, state) -> np.ndarray:
        total_a = np.zeros(3, dtype=float)
        for model in self.models:
            total_a += model.acceleration(state)
        return total_a
