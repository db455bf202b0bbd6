"""
Atmospheric density model tests.
"""
import math

import numpy as np
import pytest

from orbitsim.physics.atmosphere import density, exponential_density, LAYER_BOUNDARIES

RISING_BOUNDARIES = (200000.0, 500000.0)


class TestLayeredDensity:

    def test_sea_level(self):
        assert density(0.0) == 1.225

    def test_negative_altitude_clamps_to_sea_level(self):
        assert density(-500.0) == 1.225
        assert density(-1e9) == 1.225

    @pytest.mark.parametrize("altitude, expected", [
        (11000.0, 0.3639),
        (20000.0, 0.0880),
        (32000.0, 0.0132),
        (47000.0, 0.00143),
        (51000.0, 0.000086),
        (71000.0, 0.0000032),
        (100000.0, 0.0000001),
        (200000.0, 0.00000001),
        (500000.0, 0.000000001),
    ])
    def test_layer_floor_values(self, altitude, expected):
        assert density(altitude) == pytest.approx(expected, rel=1e-12)

    def test_tropopause_is_continuous(self):
        assert density(10999.999) == pytest.approx(0.3639, rel=1e-3)

    def test_exponent_uses_absolute_altitude(self):
        h = 150000.0
        assert density(h) == pytest.approx(1e-7 * math.exp(-(h - 100000.0) / 25000.0))

    @pytest.mark.parametrize("boundary", [b for b in LAYER_BOUNDARIES[1:] if b not in RISING_BOUNDARIES])
    def test_non_increasing_across_boundary(self, boundary):
        left, right = density(boundary - 1e-6), density(boundary)
        # 11 km is continuous to about 1e-5 relative
        assert left >= right * (1.0 - 1e-4)

    @pytest.mark.parametrize("boundary, left_expected, right_expected", [
        (200000.0, 1e-7 * math.exp(-4.0), 1e-8),
        (500000.0, 1e-8 * math.exp(-3.0), 1e-9),
    ])
    def test_density_steps_up_at_upper_layers(self, boundary, left_expected, right_expected):
        left, right = density(boundary - 1e-6), density(boundary)
        assert left == pytest.approx(left_expected, rel=1e-6)
        assert right == pytest.approx(right_expected, rel=1e-12)
        assert left < right

    @pytest.mark.parametrize("lower, upper", list(zip(LAYER_BOUNDARIES, LAYER_BOUNDARIES[1:] + (2e6,))))
    def test_non_increasing_within_layer(self, lower, upper):
        heights = np.linspace(lower, upper, 50, endpoint=False)
        values = [density(h) for h in heights]
        assert all(a >= b for a, b in zip(values, values[1:]))

    def test_always_non_negative(self):
        for h in (0.0, 1e5, 1e6, 1e7, 1e9):
            assert density(h) >= 0.0


class TestExponentialFallback:

    def test_surface_value(self):
        assert exponential_density(0.0, 1.225, 8500.0) == pytest.approx(1.225)

    def test_one_scale_height(self):
        assert exponential_density(8500.0, 1.225, 8500.0) == pytest.approx(1.225 / math.e)

    def test_negative_altitude_clamps(self):
        assert exponential_density(-100.0, 2.0, 1000.0) == pytest.approx(2.0)
