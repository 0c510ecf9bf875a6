#!/usr/bin/env python3
"""
sim/settings.py
===============
Live configuration handed to :class:`sim.world.RingWorld` on every tick.

The UI owns the sliders and the pause button; the simulation only ever
sees this frozen snapshot, so behaviour code never reads widget state.
Malformed values are rejected here, at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SimSettings:
    """Snapshot of the collaborator-controlled values.

    Attributes
    ----------
    lane_count : int
        Number of concentric lanes, at least 1.
    car_count : int
        Vehicles created on (re)initialisation, 0 or more.
    speed_multiplier : int
        Global speed knob; motion is scaled by ``speed_multiplier / 10``.
    paused : bool
        When True, ticks leave every vehicle untouched.
    """

    lane_count: int = 3
    car_count: int = 30
    speed_multiplier: int = 10
    paused: bool = False

    def __post_init__(self) -> None:
        for name in ("lane_count", "car_count", "speed_multiplier"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an int, got {value!r}")
        if self.lane_count < 1:
            raise ValueError(f"lane_count must be >= 1, got {self.lane_count}")
        if self.car_count < 0:
            raise ValueError(f"car_count must be >= 0, got {self.car_count}")
        if self.speed_multiplier < 0:
            raise ValueError(f"speed_multiplier must be >= 0, got {self.speed_multiplier}")

    def with_changes(self, **changes) -> "SimSettings":
        """Return a validated copy with *changes* applied."""
        return replace(self, **changes)
