# orbitsim/physics/solver.py
from orbitsim.physics.state import State


class VerletSolver:
    """
    Velocity-Verlet (kick-drift-kick) stepping for orbital state integration.

    The step is split in two so a caller can inspect the drifted position
    before committing the closing kick:

        half = solver.drift(state, dt)     # v_half, r_new
        new  = solver.kick(half, dt)       # v_new from a(r_new, v_half)
    """
    def __init__(self, force_model):
        self.force = force_model

    def drift(self, state, dt):
        """
        Half-kick the velocity with the current acceleration, then move the
        position with the half-step velocity. Returns State(r_new, v_half).
        """
        accel = self.force.acceleration(state)
        v_half = state.v + accel * (dt * 0.5)
        return State(state.r + v_half * dt, v_half, copy=False)

    def kick(self, half_state, dt):
        """
        Close the step from State(r_new, v_half); velocity-dependent forces
        see v_half.
        """
        accel_new = self.force.acceleration(half_state)
        return State(half_state.r, half_state.v + accel_new * (dt * 0.5), copy=False)
