#!/usr/bin/env python3
"""
sim/vehicle.py
==============
A single vehicle on the ring road.  Each vehicle:
  - owns its angular position, speed and lane state
  - records lane-change requests issued by :mod:`sim.congestion`
  - advances itself once per tick, clamped behind its leader
  - exposes a flat dict for the UI bridge
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from sim.geometry import circular_gap, lerp, normalize_angle, smoothing_alpha
from sim.traffic_policy import TrafficPolicy

ColorRGB = Tuple[int, int, int]


@dataclass
class Vehicle:
    """A standalone vehicle entity.

    Attributes
    ----------
    id : str
        Unique identifier (e.g. ``CAR_000``).
    angle : float
        Position on the track in radians, always in ``[0, 2π)``.
    base_speed : float
        Cruising angular speed (rad/s), fixed at creation.
    speed : float
        Current angular speed (rad/s); smoothed toward a target.
    lane : int
        Committed lane, used for every congestion / leader lookup.
    target_lane : int
        Lane being animated toward; equals ``lane`` when idle.
    lateral_offset : float
        Current radial offset from the track centre line.
    target_offset : float
        Radial offset of ``target_lane``.
    last_lane_change_time : float
        Simulation clock of the most recent lane-change request.
    """

    id: str
    angle: float
    base_speed: float
    lane: int
    lateral_offset: float
    color: ColorRGB = (255, 255, 255)
    speed: float = -1.0
    target_lane: int = -1
    target_offset: Optional[float] = None
    last_lane_change_time: float = 0.0
    congested: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        self.angle = normalize_angle(self.angle)
        if self.speed < 0.0:
            self.speed = self.base_speed
        if self.target_lane < 0:
            self.target_lane = self.lane
        if self.target_offset is None:
            self.target_offset = self.lateral_offset

    @property
    def is_changing_lane(self) -> bool:
        """True between a lane-change request and its commit."""
        return self.target_lane != self.lane

    # ── lane changes ──────────────────────────────────────────────────────
    def can_change_lane(self, now: float, cooldown_s: float) -> bool:
        return now - self.last_lane_change_time > cooldown_s

    def request_lane_change(self, new_lane: int, new_offset: float, now: float) -> None:
        """Start animating toward *new_lane*; overwrites any pending request."""
        self.target_lane = new_lane
        self.target_offset = new_offset
        self.last_lane_change_time = now

    # ── movement ──────────────────────────────────────────────────────────
    def update(
        self,
        dt: float,
        leader_angle: Optional[float],
        speed_scale: float,
        policy: TrafficPolicy,
    ) -> bool:
        """Advance along the track and slide toward ``target_offset``.

        Parameters
        ----------
        dt : float
            Tick length in seconds.
        leader_angle : float or None
            Angle of the next vehicle ahead in the committed lane, or
            None when the vehicle is alone there.
        speed_scale : float
            Global speed factor (``speed_multiplier / 10``).
        policy : TrafficPolicy
            Source of ``min_gap``, smoothing and commit tolerance.

        Returns
        -------
        bool
            True when this step committed a lane change.
        """
        distance = self.speed * dt * speed_scale
        if leader_angle is not None:
            gap = circular_gap(self.angle, leader_angle)
            distance = min(distance, max(gap - policy.min_gap, 0.0))
        self.angle = normalize_angle(self.angle + max(distance, 0.0))

        alpha = smoothing_alpha(policy.offset_smoothing, dt, policy.smoothing_reference_dt)
        self.lateral_offset = lerp(self.lateral_offset, self.target_offset, alpha)
        if abs(self.lateral_offset - self.target_offset) < policy.lane_commit_tolerance:
            if self.lane != self.target_lane:
                self.lane = self.target_lane
                return True
        return False

    # ── serialisation ─────────────────────────────────────────────────────
    def as_dict(self) -> Dict[str, Any]:
        """Render-side view: position, lane state, speed and colour."""
        return {
            "id": self.id,
            "angle": self.angle,
            "lane": self.lane,
            "target_lane": self.target_lane,
            "lateral_offset": self.lateral_offset,
            "speed": self.speed,
            "base_speed": self.base_speed,
            "color": self.color,
            "congested": self.congested,
        }
