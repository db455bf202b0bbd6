# orbitsim/models/satellite.py
from collections import deque
from dataclasses import dataclass, fields
from typing import Optional, Sequence

import numpy as np

from orbitsim.config import settings
from orbitsim.config.settings import (
    EARTH_RADIUS,
    DEFAULT_MASS,
    DEFAULT_DRAG_COEFFICIENT,
    DEFAULT_CROSS_SECTIONAL_AREA,
    DEFAULT_SURFACE_DENSITY,
    DEFAULT_DENSITY_SCALE_HEIGHT,
    DEFAULT_DENSITY_MODEL,
    DENSITY_MODELS,
    DEFAULT_HEIGHT,
    DEFAULT_DIRECTION_DEG,
)
from orbitsim.errors import require_positive
from orbitsim.physics.kinematics import circular_speed, tangential_velocity, velocity_from_direction
from orbitsim.physics.state import State


def _to_vector(v, name):
    arr = np.array(v, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"{name} must be a 3D vector, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite, got {arr}")
    return arr


def _check_density_model(name):
    if name not in DENSITY_MODELS:
        raise ValueError(f"Unknown density model {name!r}; expected one of {DENSITY_MODELS}")
    return name


class Satellite:
    """
    One tracked satellite: orbital state, physical parameters, user preferences
    and lifecycle fields.

    `air_resistance_enabled` is the user's preference; the integrator may
    ignore it for a tick but never overwrites it. `target_height` is None when
    no gradual height change is pending.
    """
    def __init__(self, position, velocity,
                 mass=DEFAULT_MASS,
                 drag_coefficient=DEFAULT_DRAG_COEFFICIENT,
                 cross_sectional_area=DEFAULT_CROSS_SECTIONAL_AREA,
                 surface_density=DEFAULT_SURFACE_DENSITY,
                 density_scale_height=DEFAULT_DENSITY_SCALE_HEIGHT,
                 density_model=DEFAULT_DENSITY_MODEL,
                 air_resistance_enabled=True,
                 time_scale=1.0,
                 target_height=None,
                 name="Satellite"):
        self.name = name
        self.position = _to_vector(position, "position")
        self.velocity = _to_vector(velocity, "velocity")
        if not np.any(self.position):
            raise ValueError("position must not be the body centre")

        self.mass = require_positive("mass", mass)
        self.drag_coefficient = require_positive("drag_coefficient", drag_coefficient)
        self.cross_sectional_area = require_positive("cross_sectional_area", cross_sectional_area)
        self.surface_density = require_positive("surface_density", surface_density)
        self.density_scale_height = require_positive("density_scale_height", density_scale_height)
        self.density_model = _check_density_model(density_model)
        self.time_scale = require_positive("time_scale", time_scale)
        self.air_resistance_enabled = bool(air_resistance_enabled)
        self.target_height: Optional[float] = None if target_height is None else float(target_height)

        self.crashed = False
        self.trail = deque(maxlen=settings.TRAIL_MAX_POINTS)
        self.record_trail()

    @property
    def radius(self):
        return float(np.sqrt(self.position @ self.position))

    @property
    def speed(self):
        return float(np.sqrt(self.velocity @ self.velocity))

    def altitude(self, body_radius=EARTH_RADIUS):
        return self.radius - body_radius

    def state(self):
        return State(self.position, self.velocity)

    def set_state(self, state):
        self.position = state.r
        self.velocity = state.v

    def record_trail(self):
        """Append the current position if it moved far enough since the last point."""
        if self.trail:
            last = self.trail[-1]
            if np.linalg.norm(self.position - last) <= settings.TRAIL_MIN_SPACING:
                return False
        self.trail.append(self.position.copy())
        return True

    def to_dict(self):
        return {
            "name": self.name,
            "position": self.position.tolist(),
            "velocity": self.velocity.tolist(),
            "mass": self.mass,
            "drag_coefficient": self.drag_coefficient,
            "cross_sectional_area": self.cross_sectional_area,
            "surface_density": self.surface_density,
            "density_scale_height": self.density_scale_height,
            "density_model": self.density_model,
            "air_resistance_enabled": self.air_resistance_enabled,
            "time_scale": self.time_scale,
            "target_height": self.target_height,
            "crashed": self.crashed,
        }

    def __repr__(self):
        flag = " CRASHED" if self.crashed else ""
        return f"{self.name} at pos {self.position}, vel {self.velocity}{flag}"


@dataclass
class SatelliteConfig:
    """
    Initial configuration for a new satellite.

    Position: explicit `position`, else (R + height, 0, 0).
    Velocity: explicit `velocity`; else circular tangential velocity when
    `circular` is set or no `speed` is given; else `speed` along `direction_deg`.
    """
    height: float = DEFAULT_HEIGHT
    speed: Optional[float] = None
    direction_deg: float = DEFAULT_DIRECTION_DEG
    circular: bool = False
    position: Optional[Sequence[float]] = None
    velocity: Optional[Sequence[float]] = None
    mass: float = DEFAULT_MASS
    drag_coefficient: float = DEFAULT_DRAG_COEFFICIENT
    cross_sectional_area: float = DEFAULT_CROSS_SECTIONAL_AREA
    surface_density: float = DEFAULT_SURFACE_DENSITY
    density_scale_height: float = DEFAULT_DENSITY_SCALE_HEIGHT
    density_model: str = DEFAULT_DENSITY_MODEL
    air_resistance_enabled: bool = True
    time_scale: float = 1.0
    name: Optional[str] = None

    def initial_position(self, body_radius=EARTH_RADIUS):
        if self.position is not None:
            return _to_vector(self.position, "position")
        return np.array([body_radius + float(self.height), 0.0, 0.0], dtype=float)

    def initial_velocity(self, position, mu=settings.MU):
        if self.velocity is not None:
            return _to_vector(self.velocity, "velocity")
        if self.circular or self.speed is None:
            r = float(np.linalg.norm(position))
            return tangential_velocity(position, circular_speed(r, mu))
        return velocity_from_direction(self.speed, self.direction_deg)

    def build(self, name="Satellite", body_radius=EARTH_RADIUS, mu=settings.MU):
        position = self.initial_position(body_radius)
        velocity = self.initial_velocity(position, mu)
        return Satellite(
            position=position,
            velocity=velocity,
            mass=self.mass,
            drag_coefficient=self.drag_coefficient,
            cross_sectional_area=self.cross_sectional_area,
            surface_density=self.surface_density,
            density_scale_height=self.density_scale_height,
            density_model=self.density_model,
            air_resistance_enabled=self.air_resistance_enabled,
            time_scale=self.time_scale,
            name=self.name or name,
        )


@dataclass
class SatelliteUpdate:
    """
    Live parameter change for an existing satellite. Fields left as None are
    not touched. `speed` (with optional `direction_deg`) and `target_height`
    are mutually exclusive: one re-aims the velocity, the other schedules a
    gradual height change. Neither moves the satellite directly.
    """
    mass: Optional[float] = None
    drag_coefficient: Optional[float] = None
    cross_sectional_area: Optional[float] = None
    surface_density: Optional[float] = None
    density_scale_height: Optional[float] = None
    density_model: Optional[str] = None
    time_scale: Optional[float] = None
    air_resistance_enabled: Optional[bool] = None
    speed: Optional[float] = None
    direction_deg: Optional[float] = None
    target_height: Optional[float] = None

    _POSITIVE = ("mass", "drag_coefficient", "cross_sectional_area",
                 "surface_density", "density_scale_height", "time_scale")

    def set_fields(self):
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def validate(self):
        if self.target_height is not None and (self.speed is not None or self.direction_deg is not None):
            raise ValueError("speed/direction and target_height cannot be applied together")
        for name in self._POSITIVE:
            value = getattr(self, name)
            if value is not None:
                require_positive(name, value)
        if self.speed is not None and float(self.speed) < 0:
            raise ValueError(f"speed must be >= 0 (got {self.speed!r})")
        if self.density_model is not None:
            _check_density_model(self.density_model)
        return self

    def apply_to(self, satellite):
        """Write the set fields into `satellite`; position is never modified."""
        self.validate()
        for name in self._POSITIVE:
            value = getattr(self, name)
            if value is not None:
                setattr(satellite, name, float(value))
        if self.density_model is not None:
            satellite.density_model = self.density_model
        if self.air_resistance_enabled is not None:
            satellite.air_resistance_enabled = bool(self.air_resistance_enabled)

        if self.speed is not None or self.direction_deg is not None:
            speed = satellite.speed if self.speed is None else float(self.speed)
            if self.direction_deg is not None:
                satellite.velocity = velocity_from_direction(speed, self.direction_deg)
            elif satellite.speed > 0:
                # keep current heading, rescale
                satellite.velocity = satellite.velocity / satellite.speed * speed
            else:
                satellite.velocity = tangential_velocity(satellite.position, speed)
        if self.target_height is not None:
            satellite.target_height = float(self.target_height)
        return satellite
