# orbitsim/physics/atmosphere.py
"""
Altitude-dependent atmospheric density.

Piecewise empirical model of the standard atmosphere. Each layer is
(upper bound, base density, reference altitude, scale height); the exponent
is taken on the absolute altitude minus the layer's reference altitude.
The lowest layer uses the tropospheric lapse-rate formula instead.
"""
import math

# Troposphere: rho = RHO_SEA_LEVEL * (1 - LAPSE_RATE * h / T0) ** EXPONENT
RHO_SEA_LEVEL = 1.225
LAPSE_RATE = 0.0065
T0 = 288.15
TROPOSPHERE_EXPONENT = 4.256
TROPOPAUSE = 11000.0

# (upper bound exclusive, rho_ref, h_ref, scale height)
_LAYERS = (
    (20000.0, 0.3639, 11000.0, 6341.6),
    (32000.0, 0.0880, 20000.0, 7360.0),
    (47000.0, 0.0132, 32000.0, 8000.0),
    (51000.0, 0.00143, 47000.0, 7500.0),
    (71000.0, 0.000086, 51000.0, 10000.0),
    (100000.0, 0.0000032, 71000.0, 15000.0),
    (200000.0, 0.0000001, 100000.0, 25000.0),
    (500000.0, 0.00000001, 200000.0, 100000.0),
    (math.inf, 0.000000001, 500000.0, 500000.0),
)

LAYER_BOUNDARIES = (0.0, TROPOPAUSE) + tuple(layer[0] for layer in _LAYERS[:-1])


def density(altitude: float) -> float:
    """
    Atmospheric density (kg/m^3) at an altitude above the surface (m).
    Negative altitudes are treated as sea level. The table is not
    continuous: density steps up when crossing 200 km and 500 km.
    """
    h = max(0.0, float(altitude))
    if h < TROPOPAUSE:
        return float(RHO_SEA_LEVEL * (1.0 - LAPSE_RATE * h / T0) ** TROPOSPHERE_EXPONENT)
    for upper, rho_ref, h_ref, scale in _LAYERS:
        if h < upper:
            return float(rho_ref * math.exp(-(h - h_ref) / scale))
    # unreachable, the last layer is unbounded
    return 0.0


def exponential_density(altitude: float, surface_density: float, scale_height: float) -> float:
    """Single-exponential fallback: surface_density * exp(-altitude / scale_height)."""
    h = max(0.0, float(altitude))
    return float(surface_density * math.exp(-h / scale_height))
