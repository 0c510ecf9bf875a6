#!/usr/bin/env python3
"""
sim/geometry.py
===============
Angle helpers for the circular track used by :mod:`sim.congestion`,
:mod:`sim.vehicle` and :mod:`sim.world`.

Every position on the track is an angle in radians.  Keeping the
wraparound arithmetic here avoids circular imports and makes unit
testing straightforward.
"""

from __future__ import annotations

import math
from typing import Optional

TWO_PI: float = 2.0 * math.pi


def normalize_angle(a: float) -> float:
    """Wrap *a* into ``[0, 2π)``, negative inputs included."""
    wrapped = math.fmod(a, TWO_PI)
    if wrapped < 0.0:
        wrapped += TWO_PI
    # -1e-18 + 2π rounds to exactly 2π
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def circular_gap(frm: float, to: float) -> float:
    """Forward angular distance from *frm* to *to* going counter-clockwise.

    Not symmetric: ``circular_gap(a, b) + circular_gap(b, a) == 2π``
    whenever ``a != b``.
    """
    return normalize_angle(to - frm)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def smoothing_alpha(rate: float, dt: float, reference_dt: Optional[float]) -> float:
    """Blend factor for one exponential-smoothing step.

    Parameters
    ----------
    rate : float
        Fraction of the remaining distance covered per reference frame
        (0.1 in the classic per-frame formulation).
    dt : float
        Elapsed simulation time for this tick, in seconds.
    reference_dt : float or None
        Frame length *rate* was tuned for.  ``None`` applies *rate* once
        per tick regardless of *dt* (frame-rate dependent).

    Returns
    -------
    float
        ``1 - (1 - rate) ** (dt / reference_dt)``, which equals
        ``1 - exp(-dt / tau)`` with ``tau = -reference_dt / ln(1 - rate)``.
    """
    if reference_dt is None:
        return rate
    if dt <= 0.0:
        return 0.0
    if rate >= 1.0:
        return 1.0
    return 1.0 - (1.0 - rate) ** (dt / reference_dt)
