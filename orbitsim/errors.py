# orbitsim/errors.py


class SimulationError(Exception):
    """Base class for errors raised by the simulation core."""


class InvalidIndexError(SimulationError, IndexError):
    """
    Raised when an operation references a satellite slot that does not exist
    (or, for live updates, a slot whose satellite has crashed).
    The fleet is left unchanged.
    """
    def __init__(self, index, size, reason="out of range"):
        self.index = index
        self.size = size
        self.reason = reason
        super().__init__(f"Satellite index {index} {reason} (fleet size {size})")


class NonPositiveParameterError(SimulationError, ValueError):
    """Raised when a physical parameter is zero or negative at configuration time."""
    def __init__(self, name, value):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be > 0 (got {value!r})")


def require_positive(name, value):
    value = float(value)
    # NaN fails the comparison too
    if not value > 0.0:
        raise NonPositiveParameterError(name, value)
    return value
