# orbitsim/main.py
import json
import logging
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from orbitsim.cli import run_cli
from orbitsim.config import settings
from orbitsim.simulation.fleet import Fleet
from orbitsim.visualization.plots import plot_trails, plot_altitude_history

# --- Setup logger ------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S"
)
log = logging.getLogger("main")


def _utcnow():
    return datetime.now(timezone.utc)


def save_json(obj: Any, name_prefix: str) -> str:
    ts = _utcnow().strftime("%Y%m%dT%H%M%SZ")
    out_dir = Path(settings.OUTPUT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    filename = out_dir / f"{name_prefix}_{ts}.json"
    with open(filename, "w") as f:
        json.dump(obj, f, indent=2, default=lambda o: repr(o))
    return str(filename)


def run(fleet: Fleet, global_scale: float, duration: float, frame_dt: float = None):
    """
    Headless driver: feed `frame_dt` wall-clock seconds per tick until
    `duration` is covered. Returns (times, altitude series per satellite).
    """
    frame_dt = float(settings.FRAME_DT if frame_dt is None else frame_dt)
    body_radius = fleet.integrator.body_radius

    times = [0.0]
    altitudes = [[sat.altitude(body_radius)] for sat in fleet]
    elapsed = 0.0
    seen_warnings = set()

    while elapsed < duration:
        dt = min(frame_dt, duration - elapsed)
        report = fleet.tick(dt, global_scale)
        elapsed += dt
        for message in report.warnings:
            seen_warnings.add(message)

        times.append(elapsed)
        for series, sat in zip(altitudes, fleet):
            if not sat.crashed:
                series.append(sat.altitude(body_radius))

        if fleet.satellites and all(sat.crashed for sat in fleet):
            log.info("All satellites crashed after %.1f s wall-clock.", elapsed)
            break

    if seen_warnings:
        log.info("Warnings during run: %s", "; ".join(sorted(seen_warnings)))
    return times, altitudes


def main():
    try:
        # 1) Get inputs from CLI
        configs, global_scale, duration = run_cli()

        fleet = Fleet()
        for config in configs:
            fleet.add(config)

        crash_log = []
        fleet.on_crash(lambda index, sat: crash_log.append({"index": index, "name": sat.name}))

        log.info("Starting simulation: satellites=%d, global_scale=%sx, duration=%ss",
                 len(fleet), global_scale, duration)

        # 2) Run
        times, altitudes = run(fleet, global_scale, duration)

        # 3) Report
        print("\n================ FINAL STATE ================\n")
        for index in range(len(fleet)):
            t = fleet.telemetry(index)
            print(f"Satellite          : {t['name']}")
            print(f"Status             : {t['status']}")
            print(f"Altitude (km)      : {t['altitude_km']:.1f}")
            print(f"Distance (km)      : {t['distance_km']:.1f}")
            print(f"Speed (m/s)        : {t['speed']:.0f}")
            print(f"Escape speed (m/s) : {t['escape_speed']:.0f}")
            print("-" * 45)

        # 4) Save snapshot
        out_file = save_json(
            {
                "meta": {
                    "global_time_scale": global_scale,
                    "duration": duration,
                    "frame_dt": settings.FRAME_DT,
                    "timestamp_utc": _utcnow().isoformat(),
                },
                "crashes": crash_log,
                "satellites": fleet.snapshot(),
            },
            "fleet_snapshot"
        )
        log.info("Saved fleet snapshot: %s", out_file)

        # 5) Plots (best-effort)
        try:
            plot_trails(fleet)
            plot_altitude_history(times, altitudes, [sat.name for sat in fleet])
            log.info("Plots generated.")
        except Exception as e:
            log.warning("Plotting failed: %s", e)

    except Exception:
        log.error("Fatal exception during run:")
        traceback.print_exc()


if __name__ == "__main__":
    main()
