"""
sim/sim_bridge.py
=================
Frame-driven orchestrator tying :mod:`sim.world` to the UI.  The view
calls :meth:`SimBridge.step` once per rendered frame and then reads the
latest snapshot; controls are forwarded through the action methods.

Public API consumed by :mod:`ui.pygame_view`
--------------------------------------------
* ``step(dt)``                 → ``None``
* ``get_vehicles()``           → ``List[dict]``
* ``get_track()``              → ``dict``
* ``get_stats()``              → ``dict``
* ``get_settings()``           → ``SimSettings``
* ``reset()``                  → ``None``
* ``set_paused(bool)``         → ``None``
* ``toggle_pause()``           → ``bool``
* ``is_paused()``              → ``bool``
* ``set_lane_count(int)``      → ``None``
* ``set_car_count(int)``       → ``None``
* ``set_speed_multiplier(int)``→ ``None``
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sim.settings import SimSettings
from sim.traffic_policy import TrafficPolicy, lane_offsets
from sim.world import RingWorld

log = logging.getLogger("sim_bridge")


class SimBridge:
    """Simulation orchestrator driven by the render loop.

    One :meth:`step` per frame advances :class:`~sim.world.RingWorld`
    and caches vehicle dicts for the view.  There is no background
    thread: reinitialisation always happens between two steps.

    Parameters
    ----------
    settings : SimSettings or None
        Initial lane count, car count, speed multiplier and pause flag.
    policy : TrafficPolicy or None
        Tunable constants.
    random_seed : int or None
        Seed for reproducibility.
    max_dt : float
        Upper clamp on one frame's ``dt`` (seconds), so a stalled window
        does not teleport vehicles.
    """

    def __init__(
        self,
        settings: Optional[SimSettings] = None,
        policy: Optional[TrafficPolicy] = None,
        random_seed: Optional[int] = None,
        max_dt: float = 0.1,
    ) -> None:
        self._world = RingWorld(settings=settings, policy=policy, seed=random_seed)
        self._max_dt = max_dt
        self._vehicles: List[Dict[str, Any]] = []
        self._refresh()
        log.info(
            "SimBridge ready: %d lanes, %d cars, speed x%d",
            self._world.settings.lane_count,
            self._world.settings.car_count,
            self._world.settings.speed_multiplier,
        )

    @property
    def world(self) -> RingWorld:
        return self._world

    # ── Frame step ────────────────────────────────────────────────────────────

    def step(self, dt: float) -> None:
        """Advance one frame; unexpected errors are logged, not raised."""
        dt = min(max(0.0, dt), self._max_dt)
        try:
            self._world.update(dt)
        except Exception:
            log.exception("SimBridge tick error")
        self._refresh()

    def _refresh(self) -> None:
        self._vehicles = [v.as_dict() for v in self._world.vehicles]

    # ── View adapter API ──────────────────────────────────────────────────────

    def get_vehicles(self) -> List[Dict[str, Any]]:
        return list(self._vehicles)

    def get_track(self) -> Dict[str, Any]:
        """Lane layout the renderer needs to draw the ring."""
        lanes = self._world.settings.lane_count
        spacing = self._world.policy.lane_spacing
        return {
            "lane_count": lanes,
            "lane_spacing": spacing,
            "half_width": lanes * spacing / 2.0,
            "lane_offsets": lane_offsets(lanes, spacing),
        }

    def get_stats(self) -> Dict[str, Any]:
        return self._world.stats()

    def get_settings(self) -> SimSettings:
        return self._world.settings

    def is_paused(self) -> bool:
        return self._world.is_paused

    # ── Actions ───────────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Re-initialise the world with the current counts."""
        self._world.reset()
        self._refresh()
        log.info("SimBridge reset")

    def set_paused(self, paused: bool) -> None:
        self._world.set_paused(paused)

    def toggle_pause(self) -> bool:
        return self._world.toggle_pause()

    def set_lane_count(self, lane_count: int) -> None:
        if lane_count != self._world.settings.lane_count:
            self._world.set_lane_count(lane_count)
            self._refresh()

    def set_car_count(self, car_count: int) -> None:
        if car_count != self._world.settings.car_count:
            self._world.reinitialize(car_count=car_count)
            self._refresh()

    def set_speed_multiplier(self, multiplier: int) -> None:
        self._world.set_speed_multiplier(multiplier)
