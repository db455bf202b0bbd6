"""
Integrator: advances one satellite by a requested time delta.

Features:
- Fixed-size velocity-Verlet substeps (symplectic, bounded energy error in
  closed orbits) with a hard substep budget per call.
- Newtonian gravity plus optional quadratic drag from the layered density
  model (or the satellite's exponential fallback).
- Crash detection before and after every drift.
- Safety rules: time-scale ceilings, drag suppressed near escape speed and
  below the drag floor altitude.
- Gradual radial height adjustment toward an optional target height.

Time left over when the substep budget runs out is dropped, not carried.
"""
from typing import Dict, Any, List, Tuple
import math

from orbitsim.config import settings
from orbitsim.physics.atmosphere import density, exponential_density
from orbitsim.physics.forces import NewtonianGravity, AtmosphericDrag, CompositeForce
from orbitsim.physics.kinematics import escape_speed
from orbitsim.physics.solver import VerletSolver
from orbitsim.physics.state import State

# after the first substep, residue below this is float noise from repeated
# subtraction, not simulated time
_DT_EPS = 1e-12

STATUS_ESCAPING = "Escaping"
STATUS_NEAR_ESCAPE = "Near escape velocity"
STATUS_ORBITING = "Orbiting"
STATUS_CRASHED = "Crashed"


class Integrator:
    """
    Stateless with respect to satellites: all per-satellite data lives on the
    Satellite passed to `advance`.
    """
    def __init__(self, mu: float = None, body_radius: float = None,
                 substep_dt: float = None, max_substeps: int = None):
        """
        Defaults are read from settings at construction time.
        """
        self.mu = float(settings.MU if mu is None else mu)
        self.body_radius = float(settings.EARTH_RADIUS if body_radius is None else body_radius)
        self.substep_dt = float(settings.SUBSTEP_DT if substep_dt is None else substep_dt)
        self.max_substeps = int(settings.MAX_SUBSTEPS if max_substeps is None else max_substeps)
        self.gravity = NewtonianGravity(self.mu)

    # ------------------------------------------------------------------
    # time scaling
    # ------------------------------------------------------------------
    def effective_time_scale(self, global_time_scale: float, satellite_time_scale: float) -> Tuple[float, List[str]]:
        """
        Product of the global and per-satellite multipliers, each clamped to
        its ceiling. Returns (multiplier, warning messages).
        """
        global_time_scale = float(global_time_scale)
        satellite_time_scale = float(satellite_time_scale)
        if global_time_scale < 0:
            raise ValueError(f"global time scale must be >= 0 (got {global_time_scale})")

        messages = []
        g = settings.clamp_time_scale(global_time_scale, settings.MAX_GLOBAL_TIME_SCALE)
        if g < global_time_scale:
            messages.append(
                f"Global time scale {global_time_scale:g}x exceeds the {settings.MAX_GLOBAL_TIME_SCALE:g}x "
                f"ceiling; clamped to {g:g}x."
            )
        s = settings.clamp_time_scale(satellite_time_scale, settings.MAX_SATELLITE_TIME_SCALE)
        if s < satellite_time_scale:
            messages.append(
                f"Satellite time scale {satellite_time_scale:g}x exceeds the "
                f"{settings.MAX_SATELLITE_TIME_SCALE:g}x ceiling; clamped to {s:g}x."
            )
        return g * s, messages

    # ------------------------------------------------------------------
    # safety / classification
    # ------------------------------------------------------------------
    def drag_allowed(self, satellite) -> bool:
        """
        Whether drag applies this tick: the user preference, unless the
        satellite is close to escape speed or below the drag floor.
        Evaluated once per tick; the preference itself is left untouched.
        """
        if not satellite.air_resistance_enabled:
            return False
        r = satellite.radius
        if satellite.speed > settings.DRAG_ESCAPE_RATIO * escape_speed(r, self.mu):
            return False
        if r - self.body_radius < settings.DRAG_MIN_ALTITUDE:
            return False
        return True

    def classify(self, satellite) -> str:
        if satellite.crashed:
            return STATUS_CRASHED
        v_esc = escape_speed(satellite.radius, self.mu)
        speed = satellite.speed
        if speed > settings.ESCAPING_RATIO * v_esc:
            return STATUS_ESCAPING
        if speed > settings.NEAR_ESCAPE_RATIO * v_esc:
            return STATUS_NEAR_ESCAPE
        return STATUS_ORBITING

    def _force_model(self, satellite, drag: bool):
        if not drag:
            return CompositeForce(self.gravity)
        if satellite.density_model == "exponential":
            surface, scale = satellite.surface_density, satellite.density_scale_height

            def density_fn(altitude):
                return exponential_density(altitude, surface, scale)
        else:
            density_fn = density
        drag_model = AtmosphericDrag(
            satellite.drag_coefficient,
            satellite.cross_sectional_area,
            satellite.mass,
            density_fn=density_fn,
            body_radius=self.body_radius,
        )
        return CompositeForce(self.gravity, drag_model)

    def _adjust_height(self, satellite, position):
        """
        Nudge `position` radially toward the target height; clear the target
        once within tolerance. Returns the (possibly new) position.
        """
        r = math.sqrt(float(position @ position))
        error = satellite.target_height - (r - self.body_radius)
        if abs(error) > settings.TARGET_HEIGHT_TOLERANCE:
            move = math.copysign(min(abs(error), settings.TARGET_HEIGHT_MAX_STEP), error)
            return position * ((r + move) / r)
        satellite.target_height = None
        return position

    # ------------------------------------------------------------------
    # main entry
    # ------------------------------------------------------------------
    def advance(self, satellite, dt_requested: float, global_time_scale: float = 1.0) -> Dict[str, Any]:
        """
        Advance `satellite` in place by dt_requested (seconds of wall-clock)
        scaled by the global and per-satellite multipliers.

        Returns:
          {
            "crashed": bool (crashed during this call),
            "substeps": int,
            "simulated_time": float (s actually integrated),
            "dropped_time": float (s discarded by the substep budget),
            "drag_active": bool,
            "warnings": list[str],
          }
        """
        dt_requested = float(dt_requested)
        if dt_requested < 0:
            raise ValueError(f"dt_requested must be >= 0 (got {dt_requested})")

        result = {
            "crashed": False,
            "substeps": 0,
            "simulated_time": 0.0,
            "dropped_time": 0.0,
            "drag_active": False,
            "warnings": [],
        }
        if satellite.crashed:
            return result

        multiplier, messages = self.effective_time_scale(global_time_scale, satellite.time_scale)
        result["warnings"] = messages
        dt = dt_requested * multiplier

        drag = self.drag_allowed(satellite)
        result["drag_active"] = drag
        solver = VerletSolver(self._force_model(satellite, drag))

        state = satellite.state()
        crash_altitude = settings.CRASH_ALTITUDE
        substeps = 0
        while substeps < self.max_substeps and (dt > _DT_EPS or (substeps == 0 and dt > 0)):
            step = min(self.substep_dt, dt)
            substeps += 1

            if state.altitude(self.body_radius) <= crash_altitude:
                result["crashed"] = True
                break

            half = solver.drift(state, step)
            if half.altitude(self.body_radius) <= crash_altitude:
                # freeze at the crash-causing drift; velocity not yet closed
                state = State(half.r, state.v, copy=False)
                result["crashed"] = True
                break

            state = solver.kick(half, step)

            if satellite.target_height is not None:
                state.r = self._adjust_height(satellite, state.r)

            dt -= step
            result["simulated_time"] += step

        result["substeps"] = substeps
        if not result["crashed"]:
            result["dropped_time"] = dt if dt > _DT_EPS else 0.0

        satellite.set_state(state)
        if result["crashed"]:
            satellite.crashed = True
        else:
            satellite.record_trail()
        return result
