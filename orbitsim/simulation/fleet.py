"""
Fleet controller: owns the ordered satellites and drives the integrator.

Satellites are addressed by insertion index; removing one shifts the later
indices down. All mutation goes through this class and every call completes
before returning, so a host that needs threads must serialise calls itself.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Any, Optional

import numpy as np

from orbitsim.engine.integrator import Integrator
from orbitsim.errors import InvalidIndexError
from orbitsim.models.satellite import Satellite, SatelliteConfig, SatelliteUpdate
from orbitsim.physics.kinematics import circular_speed, escape_speed, orbital_period, tangential_velocity

logger = logging.getLogger(__name__)


@dataclass
class TickReport:
    crashes: List[int] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    substeps: int = 0
    dropped_time: float = 0.0


class Fleet:
    def __init__(self, integrator: Optional[Integrator] = None):
        self.integrator = integrator or Integrator()
        self.satellites: List[Satellite] = []
        self._crash_listeners: List[Callable[[int, Satellite], Any]] = []
        self._created = 0

    # --- container protocol ----------------------------------------------
    def __len__(self):
        return len(self.satellites)

    def __iter__(self):
        return iter(self.satellites)

    def __getitem__(self, index) -> Satellite:
        return self.satellites[self._check_index(index)]

    def _check_index(self, index, require_active=False):
        size = len(self.satellites)
        if not isinstance(index, (int, np.integer)) or isinstance(index, bool) or not 0 <= index < size:
            raise InvalidIndexError(index, size)
        if require_active and self.satellites[index].crashed:
            raise InvalidIndexError(index, size, reason="refers to a crashed satellite")
        return int(index)

    # --- collaborators ---------------------------------------------------
    def on_crash(self, listener: Callable[[int, Satellite], Any]):
        """
        Register listener(index, satellite), called once per crash during tick().
        """
        self._crash_listeners.append(listener)
        return listener

    def _notify_crash(self, index, satellite):
        for listener in self._crash_listeners:
            try:
                listener(index, satellite)
            except Exception:
                logger.warning("Crash listener %r failed for satellite %d", listener, index, exc_info=True)

    # --- lifecycle -------------------------------------------------------
    def add(self, satellite=None, **overrides) -> int:
        """
        Append a satellite and return its index.

        Accepts a ready Satellite, a SatelliteConfig, or nothing (defaults);
        keyword overrides replace SatelliteConfig fields. Without an explicit
        velocity the circular tangential velocity at the position is used.
        """
        if isinstance(satellite, Satellite) and any(s is satellite for s in self.satellites):
            raise ValueError(f"{satellite.name} is already in the fleet")
        self._created += 1
        default_name = f"Satellite-{self._created}"
        if isinstance(satellite, Satellite):
            if overrides:
                raise TypeError("overrides are only accepted with a SatelliteConfig or defaults")
            sat = satellite
        else:
            config = satellite if satellite is not None else SatelliteConfig()
            if overrides:
                config = SatelliteConfig(**{**vars(config), **overrides})
            sat = config.build(
                name=default_name,
                body_radius=self.integrator.body_radius,
                mu=self.integrator.mu,
            )
        self.satellites.append(sat)
        index = len(self.satellites) - 1
        logger.debug("Added %s at index %d (altitude %.1f m)", sat.name, index, sat.altitude(self.integrator.body_radius))
        return index

    def remove(self, index) -> Satellite:
        index = self._check_index(index)
        sat = self.satellites.pop(index)
        sat.trail.clear()
        logger.debug("Removed %s (index %d)", sat.name, index)
        return sat

    def reset(self):
        for sat in self.satellites:
            sat.trail.clear()
        self.satellites.clear()
        logger.debug("Fleet reset")

    # --- simulation ------------------------------------------------------
    def tick(self, dt_requested: float, global_time_scale: float = 1.0) -> TickReport:
        """
        Advance every non-crashed satellite by dt_requested, in index order.
        Satellites interact only with the central body, so order never matters.
        """
        if float(dt_requested) < 0:
            raise ValueError(f"dt_requested must be >= 0 (got {dt_requested})")
        if float(global_time_scale) < 0:
            raise ValueError(f"global time scale must be >= 0 (got {global_time_scale})")
        report = TickReport()
        for index, sat in enumerate(self.satellites):
            if sat.crashed:
                continue
            res = self.integrator.advance(sat, dt_requested, global_time_scale)
            report.substeps += res["substeps"]
            report.dropped_time = max(report.dropped_time, res["dropped_time"])
            for message in res["warnings"]:
                if message not in report.warnings:
                    report.warnings.append(message)
            if res["crashed"]:
                report.crashes.append(index)
                logger.info("%s (index %d) crashed at altitude %.1f m",
                            sat.name, index, sat.altitude(self.integrator.body_radius))
                self._notify_crash(index, sat)

        for message in report.warnings:
            logger.warning(message)
        if report.dropped_time > 0:
            logger.debug("Substep budget exhausted; dropped up to %.3f s of simulated time", report.dropped_time)
        return report

    def apply_live_update(self, index, update: Optional[SatelliteUpdate] = None, **fields) -> Satellite:
        """
        Change parameters of an active satellite without moving it.
        Either pass a SatelliteUpdate or its fields as keywords.
        """
        index = self._check_index(index, require_active=True)
        if update is None:
            update = SatelliteUpdate(**fields)
        elif fields:
            raise TypeError("pass either a SatelliteUpdate or keyword fields, not both")
        sat = self.satellites[index]
        update.apply_to(sat)
        logger.debug("Applied live update to %s: %s", sat.name, update.set_fields())
        return sat

    def change_height(self, index, height: float, keep_circular: bool = True) -> Satellite:
        """
        Height change request. With keep_circular the satellite is moved
        radially to the new height and given the circular tangential velocity
        there; otherwise a target height is scheduled for gradual adjustment.
        """
        index = self._check_index(index, require_active=True)
        sat = self.satellites[index]
        height = float(height)
        if not keep_circular:
            return self.apply_live_update(index, SatelliteUpdate(target_height=height))

        new_radius = self.integrator.body_radius + height
        if new_radius <= 0:
            raise ValueError(f"height {height} puts the satellite inside the body centre")
        sat.position = sat.position / sat.radius * new_radius
        sat.velocity = tangential_velocity(sat.position, circular_speed(new_radius, self.integrator.mu))
        sat.target_height = None
        return sat

    # --- queries ---------------------------------------------------------
    def status(self, index) -> str:
        return self.integrator.classify(self[index])

    def statuses(self) -> List[str]:
        return [self.integrator.classify(sat) for sat in self.satellites]

    def telemetry(self, index) -> Dict[str, Any]:
        """Readout for one (typically the followed) satellite."""
        sat = self[index]
        radius = sat.radius
        altitude = radius - self.integrator.body_radius
        mu = self.integrator.mu
        return {
            "name": sat.name,
            "altitude_km": altitude / 1000.0,
            "distance_km": radius / 1000.0,
            "speed": sat.speed,
            "circular_speed": circular_speed(radius, mu),
            "escape_speed": escape_speed(radius, mu),
            "period_min": orbital_period(radius, mu) / 60.0,
            "status": self.integrator.classify(sat),
            "drag_active": (not sat.crashed) and self.integrator.drag_allowed(sat),
            "crashed": sat.crashed,
        }

    def snapshot(self) -> List[Dict[str, Any]]:
        """Plain-data view of every satellite for render / persistence collaborators."""
        out = []
        for index, sat in enumerate(self.satellites):
            rec = sat.to_dict()
            rec["index"] = index
            rec["status"] = self.integrator.classify(sat)
            out.append(rec)
        return out
