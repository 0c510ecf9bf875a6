#!/usr/bin/env python3
"""
main.py
=======
Entry point: configures logging, applies environment overrides and
runs the ring-road simulation in a Pygame window, or headless for a
fixed stretch of simulated time.

Environment overrides
---------------------
``RING_LANES``, ``RING_CARS``, ``RING_SPEED``
    Initial lane count, car count and speed multiplier.
``RING_SEED``
    Random seed for reproducible runs.
``RING_FPS``
    Target frame rate of the window.
``RING_HEADLESS_SECONDS``
    When set, skip the window and simulate this many seconds.
``RING_LOG_LEVEL``
    ``DEBUG``, ``INFO`` (default), ``WARNING`` …
"""

import logging
import os
from typing import Optional

import config
from logging_setup import setup_logging
from sim.settings import SimSettings
from sim.sim_bridge import SimBridge

log = logging.getLogger("main")


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring %s=%r (not an integer), using %r", name, raw, default)
        return default


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring %s=%r (not a number), using %r", name, raw, default)
        return default


def _clamp(value: int, bounds) -> int:
    lo, hi = bounds
    return max(lo, min(hi, value))


def build_settings() -> SimSettings:
    """Initial live configuration from :mod:`config` plus env overrides."""
    return SimSettings(
        lane_count=_clamp(_env_int("RING_LANES", config.DEFAULT_LANE_COUNT),
                          config.LANE_COUNT_RANGE),
        car_count=_clamp(_env_int("RING_CARS", config.DEFAULT_CAR_COUNT),
                         config.CAR_COUNT_RANGE),
        speed_multiplier=_clamp(_env_int("RING_SPEED", config.DEFAULT_SPEED_MULTIPLIER),
                                config.SPEED_MULTIPLIER_RANGE),
    )


def run_headless(bridge: SimBridge, seconds: float) -> None:
    """Step the simulation at a fixed rate and log periodic statistics."""
    dt = config.HEADLESS_DT
    report_every = max(1, int(config.HEADLESS_REPORT_EVERY_S / dt))
    steps = int(seconds / dt)
    log.info("Running headless for %.1f s (%d steps)", seconds, steps)
    for i in range(1, steps + 1):
        bridge.step(dt)
        if i % report_every == 0 or i == steps:
            stats = bridge.get_stats()
            log.info(
                "t=%6.1fs  speed=%.2f  congested=%d/%d  changing=%d  "
                "requests=%d  commits=%d  per_lane=%s",
                stats["clock"], stats["mean_speed_ratio"], stats["congested"],
                stats["vehicles"], stats["changing_lane"],
                stats["lane_change_requests"], stats["lane_commits"],
                stats["per_lane"],
            )


def main() -> None:
    level_name = os.environ.get("RING_LOG_LEVEL", "INFO").upper()
    setup_logging(getattr(logging, level_name, logging.INFO))
    log.info("Starting ring-road simulation...")

    bridge = SimBridge(
        settings=build_settings(),
        random_seed=_env_int("RING_SEED", config.DEFAULT_RANDOM_SEED),
    )

    headless = _env_float("RING_HEADLESS_SECONDS", None)
    try:
        if headless is not None:
            run_headless(bridge, headless)
        else:
            # Imported lazily so headless runs work without a display.
            from ui.pygame_view import run_pygame_view

            run_pygame_view(
                bridge,
                width=config.WINDOW_WIDTH,
                height=config.WINDOW_HEIGHT,
                fps=_env_int("RING_FPS", config.TARGET_FPS),
            )
    except KeyboardInterrupt:
        log.info("Shutting down...")


if __name__ == "__main__":
    main()
