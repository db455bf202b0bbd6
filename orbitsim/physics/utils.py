# orbitsim/physics/utils.py
import numpy as np
from orbitsim.config.settings import MU


def specific_energy(state, mu=MU):
    """
    Specific mechanical energy (kinetic + Newtonian potential), J/kg.
    Used as a numerical stability diagnostic; only conserved without drag.
    """
    r = np.linalg.norm(state.r)
    kinetic = 0.5 * np.dot(state.v, state.v)
    return float(kinetic - mu / r)


def mechanical_energy(state, mass, mu=MU):
    """Total mechanical energy 0.5*m*v^2 - G*M*m/r, J."""
    return float(mass) * specific_energy(state, mu)


def energy_drift_percent(initial, final):
    if initial == 0:
        return 0.0
    return abs(final - initial) / abs(initial) * 100.0
