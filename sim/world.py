#!/usr/bin/env python3
"""
sim/world.py
============
Entity-based ring-road world.

This module manages a flat list of :class:`~sim.vehicle.Vehicle`
entities on a circular multi-lane track.  The :class:`RingWorld` class
owns the simulation clock, the tick loop (congestion pass, then motion
pass), pause handling, lane reconciliation and spawn logic.
"""

from __future__ import annotations

import colorsys
import logging
import math
import random
from typing import Any, Dict, List, Optional

from sim.congestion import LaneGroups, apply_traffic_rules, group_by_lane, leader_angles
from sim.geometry import TWO_PI
from sim.settings import SimSettings
from sim.traffic_policy import TrafficPolicy, lane_offset
from sim.vehicle import ColorRGB, Vehicle

log = logging.getLogger("world")

# Periodic debug dump interval (ticks)
_DEBUG_EVERY = 60


def _random_color(rng: random.Random) -> ColorRGB:
    """Random hue at 80 % saturation, 60 % lightness."""
    r, g, b = colorsys.hls_to_rgb(rng.random(), 0.6, 0.8)
    return (int(r * 255), int(g * 255), int(b * 255))


class RingWorld:
    """Vehicles on concentric elliptical lanes around one circular track.

    Parameters
    ----------
    settings : SimSettings or None
        Initial live configuration; uses defaults when *None*.
    policy : TrafficPolicy or None
        Tunable constants; uses defaults when *None*.
    seed : int or None
        Random seed for reproducibility.
    """

    def __init__(
        self,
        settings: Optional[SimSettings] = None,
        policy: Optional[TrafficPolicy] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.settings = settings or SimSettings()
        self.policy = policy or TrafficPolicy()
        self._rng = random.Random(seed)
        self.vehicles: List[Vehicle] = []
        self.clock: float = 0.0
        self.tick_count: int = 0
        self.lane_change_requests: int = 0
        self.lane_commits: int = 0
        self._init_vehicles()

    # ── initialisation / reset ────────────────────────────────────────────

    def _init_vehicles(self) -> None:
        lanes = self.settings.lane_count
        self.vehicles = [self._make_random_vehicle(idx, lanes)
                         for idx in range(self.settings.car_count)]
        self.lane_change_requests = 0
        self.lane_commits = 0
        log.info(
            "Initialised %d vehicles on %d lanes (t=%.2f)",
            len(self.vehicles), lanes, self.clock,
        )

    def _make_random_vehicle(self, idx: int, lane_count: int) -> Vehicle:
        """Spawn one vehicle anywhere on the ring, in a random lane."""
        lane = self._rng.randrange(lane_count)
        offset = lane_offset(lane, lane_count, self.policy.lane_spacing)
        lo, hi = self.policy.min_base_speed, self.policy.max_base_speed
        base_speed = lo + (hi - lo) * self._rng.random()
        vehicle = Vehicle(
            id=f"CAR_{idx:03d}",
            angle=self._rng.uniform(0.0, TWO_PI),
            base_speed=base_speed,
            lane=lane,
            lateral_offset=offset,
            color=_random_color(self._rng),
        )
        # Stagger cooldowns so the whole field does not become eligible at once.
        vehicle.last_lane_change_time = (
            self.clock - self._rng.uniform(0.0, self.policy.lane_change_cooldown_s)
        )
        return vehicle

    def reinitialize(
        self,
        lane_count: Optional[int] = None,
        car_count: Optional[int] = None,
    ) -> None:
        """Discard every vehicle and spawn a fresh batch."""
        changes: Dict[str, Any] = {}
        if lane_count is not None:
            changes["lane_count"] = lane_count
        if car_count is not None:
            changes["car_count"] = car_count
        if changes:
            self.settings = self.settings.with_changes(**changes)
        self._init_vehicles()

    def reset(self) -> None:
        """Re-initialise with the current lane and car counts."""
        self.reinitialize()

    # ── live configuration ────────────────────────────────────────────────

    @property
    def is_paused(self) -> bool:
        return self.settings.paused

    def set_paused(self, paused: bool) -> None:
        if paused != self.settings.paused:
            self.settings = self.settings.with_changes(paused=bool(paused))
            log.info("Simulation %s at t=%.2f", "paused" if paused else "resumed", self.clock)

    def toggle_pause(self) -> bool:
        """Flip the paused flag and return the new value."""
        self.set_paused(not self.settings.paused)
        return self.settings.paused

    def set_speed_multiplier(self, multiplier: int) -> None:
        self.settings = self.settings.with_changes(speed_multiplier=multiplier)

    def set_lane_count(self, lane_count: int) -> None:
        """Change the number of lanes, clamping vehicles into the new range.

        Every vehicle's ``target_offset`` is recomputed for the new
        layout; the motion step then glides it to the new radius.
        """
        self.settings = self.settings.with_changes(lane_count=lane_count)
        top = lane_count - 1
        clamped = 0
        for vehicle in self.vehicles:
            if vehicle.lane > top or vehicle.target_lane > top:
                clamped += 1
            vehicle.lane = min(vehicle.lane, top)
            vehicle.target_lane = min(vehicle.target_lane, top)
            vehicle.target_offset = lane_offset(
                vehicle.target_lane, lane_count, self.policy.lane_spacing,
            )
        log.info("Lane count set to %d (%d vehicles clamped)", lane_count, clamped)

    def apply_settings(self, settings: SimSettings) -> None:
        """Adopt a new live configuration.

        A car-count change rebuilds the vehicle set, a lane-count change
        reconciles the existing vehicles in place.
        """
        previous = self.settings
        if settings.car_count != previous.car_count:
            self.settings = settings
            self._init_vehicles()
            return
        if settings.lane_count != previous.lane_count:
            self.set_lane_count(settings.lane_count)
        self.settings = settings

    # ── queries ───────────────────────────────────────────────────────────

    @property
    def speed_scale(self) -> float:
        return self.settings.speed_multiplier / self.policy.speed_multiplier_scale

    def all_vehicles(self) -> List[Vehicle]:
        return list(self.vehicles)

    def lanes(self) -> LaneGroups:
        """Vehicles grouped by committed lane, each sorted by angle."""
        return group_by_lane(self.vehicles, self.settings.lane_count)

    def stats(self) -> Dict[str, Any]:
        """Aggregate numbers for the HUD and headless runs."""
        n = len(self.vehicles)
        ratios = [v.speed / v.base_speed for v in self.vehicles if v.base_speed > 0]
        return {
            "vehicles": n,
            "lanes": self.settings.lane_count,
            "clock": self.clock,
            "ticks": self.tick_count,
            "mean_speed_ratio": sum(ratios) / len(ratios) if ratios else 0.0,
            "congested": sum(1 for v in self.vehicles if v.congested),
            "changing_lane": sum(1 for v in self.vehicles if v.is_changing_lane),
            "lane_change_requests": self.lane_change_requests,
            "lane_commits": self.lane_commits,
            "per_lane": [len(g) for g in self.lanes()],
        }

    # ── tick ──────────────────────────────────────────────────────────────

    def update(self, dt: float, settings: Optional[SimSettings] = None) -> None:
        """
        Advance the world by *dt* seconds.

        Reads the live configuration, then (unless paused) runs the
        congestion pass over every vehicle followed by one motion step
        per vehicle.  Leader angles for the motion step come from one
        snapshot taken before anyone moves.
        """
        if dt < 0.0 or math.isnan(dt):
            raise ValueError(f"dt must be a non-negative number, got {dt!r}")
        if settings is not None and settings != self.settings:
            self.apply_settings(settings)
        if self.settings.paused:
            return

        self.tick_count += 1
        self.clock += dt
        lane_count = self.settings.lane_count

        self.lane_change_requests += apply_traffic_rules(
            self.vehicles, lane_count, self.clock, dt, self.policy,
        )

        leaders = leader_angles(group_by_lane(self.vehicles, lane_count))
        scale = self.speed_scale
        for vehicle in self.vehicles:
            if vehicle.update(dt, leaders.get(vehicle.id), scale, self.policy):
                self.lane_commits += 1
                log.debug("LANE COMMIT %s -> lane %d  t=%.2f",
                          vehicle.id, vehicle.lane, self.clock)

        if self.tick_count % _DEBUG_EVERY == 1:
            log.debug("=== TICK %d  t=%.2f ===", self.tick_count, self.clock)
            for vehicle in self.vehicles:
                log.debug(
                    "  %s  angle=%.3f lane=%d->%d off=%.1f->%.1f "
                    "spd=%.3f base=%.3f congested=%s",
                    vehicle.id, vehicle.angle, vehicle.lane, vehicle.target_lane,
                    vehicle.lateral_offset, vehicle.target_offset,
                    vehicle.speed, vehicle.base_speed, vehicle.congested,
                )
