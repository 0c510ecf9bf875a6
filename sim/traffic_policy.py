#!/usr/bin/env python3
"""
sim/traffic_policy.py
=====================
Tunable behaviour parameters for the ring-road simulation.  Every
constant lives in the frozen :class:`TrafficPolicy` dataclass so that
experiments can swap policies without touching code.

Also provides two stateless layout helpers:

* :func:`lane_offset` — radial offset of a lane centre from the track
  centre line.
* :func:`lane_offsets` — every lane offset for a given lane count.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class TrafficPolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: congestion, lane changes, motion, smoothing, layout, spawn.
    """

    # ── Congestion ────────────────────────────────────────────────────────
    safe_angle: float = 0.4
    """Gap (rad) to the leader below which a vehicle counts as congested."""

    slowdown_factor: float = 0.3
    """Fraction of ``base_speed`` targeted while congested."""

    # ── Lane changes ──────────────────────────────────────────────────────
    lane_change_cooldown_s: float = 2.0
    """Minimum simulation time between two lane-change requests."""

    safe_gap_factor: float = 1.5
    """Candidate-lane clearance as a multiple of ``safe_angle``."""

    lane_commit_tolerance: float = 1.0
    """Offset distance (px-like units, not radians) at which a lane change commits."""

    # ── Motion ────────────────────────────────────────────────────────────
    min_gap: float = 0.2
    """Hard minimum gap (rad) a vehicle keeps to its leader."""

    speed_multiplier_scale: float = 10.0
    """The live ``speed_multiplier`` is divided by this value."""

    # ── Smoothing ─────────────────────────────────────────────────────────
    speed_smoothing: float = 0.1
    """Share of the speed error removed per reference frame."""

    offset_smoothing: float = 0.1
    """Share of the lateral-offset error removed per reference frame."""

    smoothing_reference_dt: Optional[float] = 1.0 / 60.0
    """Frame length the smoothing rates were tuned for.

    ``None`` applies the rates once per tick, which couples visual
    responsiveness to the frame rate.
    """

    # ── Layout ────────────────────────────────────────────────────────────
    lane_spacing: float = 30.0
    """Radial distance between adjacent lane centres."""

    # ── Spawn envelope ────────────────────────────────────────────────────
    min_base_speed: float = 0.5
    """Lower bound (inclusive) of the cruising speed draw, rad/s."""

    max_base_speed: float = 1.0
    """Upper bound (exclusive) of the cruising speed draw, rad/s."""

    def __post_init__(self) -> None:
        for name in ("safe_angle", "safe_gap_factor", "lane_spacing",
                     "speed_multiplier_scale", "min_base_speed"):
            if getattr(self, name) <= 0.0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        for name in ("min_gap", "lane_change_cooldown_s", "lane_commit_tolerance"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)!r}")
        for name in ("speed_smoothing", "offset_smoothing"):
            rate = getattr(self, name)
            if not 0.0 < rate <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {rate!r}")
        if not 0.0 <= self.slowdown_factor <= 1.0:
            raise ValueError(f"slowdown_factor must be in [0, 1], got {self.slowdown_factor!r}")
        if self.max_base_speed < self.min_base_speed:
            raise ValueError("max_base_speed must not be below min_base_speed")
        if self.smoothing_reference_dt is not None and self.smoothing_reference_dt <= 0.0:
            raise ValueError("smoothing_reference_dt must be positive or None")

    @property
    def safe_gap(self) -> float:
        """Clearance (rad) a candidate lane needs ahead and behind."""
        return self.safe_angle * self.safe_gap_factor


def lane_offset(lane: int, lane_count: int, lane_spacing: float) -> float:
    """Radial offset of *lane*'s centre; lane 0 is the innermost ring.

    Parameters
    ----------
    lane : int
        Lane index in ``[0, lane_count)``.
    lane_count : int
        Total number of lanes on the track.
    lane_spacing : float
        Distance between adjacent lane centres.
    """
    half_width = lane_count * lane_spacing / 2.0
    return -half_width + (lane + 0.5) * lane_spacing


def lane_offsets(lane_count: int, lane_spacing: float) -> List[float]:
    return [lane_offset(lane, lane_count, lane_spacing) for lane in range(lane_count)]
