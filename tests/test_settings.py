"""
Settings helper tests.
"""
import pytest

from orbitsim.config import settings


def test_defaults_are_valid():
    settings.validate_settings()


def test_mu():
    assert settings.MU == pytest.approx(6.6743e-11 * 5.972e24)


def test_clamp_time_scale():
    assert settings.clamp_time_scale(1000, settings.MAX_GLOBAL_TIME_SCALE) == 20.0
    assert settings.clamp_time_scale(3, settings.MAX_GLOBAL_TIME_SCALE) == 3.0


def test_clamp_height():
    assert settings.clamp_height(50_000.0) == settings.MIN_SAFE_ORBIT_HEIGHT
    assert settings.clamp_height(None) == settings.DEFAULT_HEIGHT


@pytest.mark.parametrize("name, value", [
    ("SUBSTEP_DT", 0.0),
    ("MAX_SUBSTEPS", 0),
    ("DRAG_MIN_ALTITUDE", 10_000.0),
    ("DRAG_ESCAPE_RATIO", 1.5),
    ("DEFAULT_MASS", -1.0),
    ("DEFAULT_DENSITY_MODEL", "msis"),
    ("TRAIL_MAX_POINTS", 0),
])
def test_invalid_settings_rejected(monkeypatch, name, value):
    monkeypatch.setattr(settings, name, value)
    with pytest.raises(ValueError):
        settings.validate_settings()


def test_ceiling_override_is_read_at_call_time(monkeypatch, integrator):
    monkeypatch.setattr(settings, "MAX_GLOBAL_TIME_SCALE", 50.0)
    assert integrator.effective_time_scale(1000.0, 1.0)[0] == 50.0
