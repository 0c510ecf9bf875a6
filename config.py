#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf; it never imports from
other project packages.
"""

# ── Simulation defaults ──────────────────────────────────────────────────────
DEFAULT_LANE_COUNT: int = 3
DEFAULT_CAR_COUNT: int = 30
DEFAULT_SPEED_MULTIPLIER: int = 10
DEFAULT_RANDOM_SEED = None

# ── Slider ranges (inclusive) ────────────────────────────────────────────────
LANE_COUNT_RANGE = (1, 5)
CAR_COUNT_RANGE = (5, 100)
SPEED_MULTIPLIER_RANGE = (1, 20)

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 1200
WINDOW_HEIGHT: int = 800
TARGET_FPS: int = 60

# ── Headless runs ────────────────────────────────────────────────────────────
HEADLESS_DT: float = 1.0 / 60.0
HEADLESS_REPORT_EVERY_S: float = 5.0
