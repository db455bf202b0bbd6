"""
Preset starting conditions.

  crash  -> 50 km, 200 m/s straight down, drag off: crashes on the first tick
  orbit  -> circular orbit, height raised to the minimum safe orbit height
  escape -> 5% above escape speed, prograde
"""
from orbitsim.config import settings
from orbitsim.models.satellite import SatelliteConfig
from orbitsim.physics.kinematics import escape_speed

SCENARIOS = ("crash", "orbit", "escape")

CRASH_HEIGHT = 50_000.0
CRASH_SPEED = 200.0
CRASH_DIRECTION_DEG = 270.0
ESCAPE_MARGIN = 1.05


def build_scenario(scenario, height=None, **overrides):
    """
    SatelliteConfig for a named scenario. `height` (m) is the current height
    setting the preset starts from; extra keywords go to SatelliteConfig.
    """
    scenario = str(scenario).lower()
    height = float(settings.DEFAULT_HEIGHT if height is None else height)

    if scenario == "crash":
        cfg = dict(height=CRASH_HEIGHT, speed=CRASH_SPEED, direction_deg=CRASH_DIRECTION_DEG,
                   circular=False, air_resistance_enabled=False)
    elif scenario == "orbit":
        cfg = dict(height=settings.clamp_height(height), direction_deg=90.0, circular=True)
    elif scenario == "escape":
        r = settings.EARTH_RADIUS + height
        cfg = dict(height=height, speed=round(escape_speed(r) * ESCAPE_MARGIN),
                   direction_deg=90.0, circular=False)
    else:
        raise ValueError(f"Unknown scenario: {scenario!r} (expected one of {SCENARIOS})")

    cfg.update(overrides)
    return SatelliteConfig(**cfg)
