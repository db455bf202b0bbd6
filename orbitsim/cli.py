# orbitsim/cli.py
from orbitsim.config import settings
from orbitsim.models.satellite import SatelliteConfig
from orbitsim.physics.kinematics import circular_speed, orbital_period
from orbitsim.simulation.scenarios import SCENARIOS, build_scenario

# bring in useful defaults from settings for CLI defaults
from orbitsim.config.settings import (
    MAX_SATELLITES,
    DEFAULT_HEIGHT,
    DEFAULT_DURATION,
    EARTH_RADIUS,
    MAX_GLOBAL_TIME_SCALE,
)


def get_float(prompt, default=None):
    """
    Safe float input with optional default. Non-interactive (EOF) returns default.
    """
    while True:
        try:
            user = input(prompt)
        except EOFError:
            return float(default) if default is not None else None
        if user.strip() == "" and default is not None:
            return float(default)
        try:
            return float(user)
        except (ValueError, TypeError):
            print("❌ Please enter a valid number.")


def get_int(prompt, default=None, min_val=None, max_val=None):
    """
    Safe integer input with limits. Non-interactive (EOF) returns default.
    """
    while True:
        try:
            user = input(prompt)
        except EOFError:
            return int(default) if default is not None else None
        if user.strip() == "" and default is not None:
            return int(default)
        try:
            val = int(user)
            if min_val is not None and val < min_val:
                raise ValueError
            if max_val is not None and val > max_val:
                raise ValueError
            return val
        except (ValueError, TypeError):
            print("❌ Invalid integer input.")


def get_choice(prompt, choices, default):
    try:
        choice = input(prompt).strip().lower()
    except EOFError:
        return default
    return choice if choice in choices else default


def print_orbital_check(height=DEFAULT_HEIGHT):
    """
    Sanity readout of circular-orbit numbers at the default height.
    """
    r = EARTH_RADIUS + height
    v = circular_speed(r)
    print("=== ORBITAL MECHANICS CHECK ===")
    print(f"Earth radius: {EARTH_RADIUS / 1000:.0f} km")
    print(f"Test height: {height / 1000:.0f} km")
    print(f"Orbital radius: {r / 1000:.0f} km")
    print(f"Circular velocity: {v:.0f} m/s")
    print(f"Orbital period: {orbital_period(r) / 60:.1f} minutes")
    print("Expected orbit: Counterclockwise in XY plane")
    print("===============================")


def create_satellite_config(i):
    print(f"\n🛰️ Satellite-{i + 1}")

    scenario = get_choice(
        f"Scenario ({'/'.join(SCENARIOS)}/custom) [orbit]: ",
        SCENARIOS + ("custom",),
        "orbit",
    )

    height_km = get_float(
        f"Height above surface (km) [default {DEFAULT_HEIGHT / 1000:.0f}]: ",
        default=DEFAULT_HEIGHT / 1000.0,
    )
    height = height_km * 1000.0

    time_scale = get_float("Per-satellite time scale [default 1]: ", default=1.0)

    if scenario == "custom":
        r = EARTH_RADIUS + height
        speed = get_float(f"Speed (m/s) [default circular {circular_speed(r):.0f}]: ", default=circular_speed(r))
        direction = get_float("Direction (deg, 90 = prograde) [default 90]: ", default=90.0)
        mass = get_float(f"Mass (kg) [default {settings.DEFAULT_MASS:.0f}]: ", default=settings.DEFAULT_MASS)
        drag = get_choice("Air resistance? (Y/n): ", ("y", "n"), "y") == "y"
        config = SatelliteConfig(
            height=height,
            speed=speed,
            direction_deg=direction,
            mass=mass,
            air_resistance_enabled=drag,
            time_scale=time_scale,
            name=f"Satellite-{i + 1}",
        )
    else:
        config = build_scenario(scenario, height, time_scale=time_scale, name=f"Satellite-{i + 1}")

    print(f"✔ {config.name}: scenario={scenario}, height={config.height / 1000:.1f} km")
    return config


def run_cli():
    print("======================================")
    print("   MULTI-SATELLITE ORBIT SIMULATOR    ")
    print("======================================")
    print_orbital_check()

    n = get_int(
        f"\nNumber of satellites (1–{MAX_SATELLITES}) [default 1]: ",
        default=1,
        min_val=1,
        max_val=MAX_SATELLITES,
    )
    configs = [create_satellite_config(i) for i in range(n)]

    global_scale = get_float(
        f"\nGlobal time scale (ceiling {MAX_GLOBAL_TIME_SCALE:g}x) [default 1]: ",
        default=1.0,
    )
    duration = get_float(
        f"Wall-clock duration to simulate (s) [default {DEFAULT_DURATION:.0f}]: ",
        default=DEFAULT_DURATION,
    )

    print("\n✅ CLI input complete.")
    print(f"→ Satellites: {len(configs)}")
    print(f"→ Global time scale: {global_scale:g}x")
    print(f"→ Duration: {duration:.0f} s")

    return configs, float(global_scale), float(duration)
