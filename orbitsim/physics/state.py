# orbitsim/physics/state.py
import math

import numpy as np


class State:
    """
    Body-centred position (m) and velocity (m/s) of one satellite.
    Force models and the solver work on States; everything else about a
    satellite lives on the Satellite model.
    """
    __slots__ = ("r", "v")

    def __init__(self, position, velocity, copy=True):
        if copy:
            position = np.array(position, dtype=float)
            velocity = np.array(velocity, dtype=float)
            if position.shape != (3,) or velocity.shape != (3,):
                raise ValueError("Position and velocity must be 3D vectors.")
        self.r = position
        self.v = velocity

    def copy(self):
        return State(self.r.copy(), self.v.copy(), copy=False)

    def radius(self):
        return math.sqrt(float(self.r @ self.r))

    def altitude(self, body_radius):
        return self.radius() - body_radius

    def speed(self):
        return math.sqrt(float(self.v @ self.v))
