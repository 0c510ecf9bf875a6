"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass
class TrackFrame:
    """Screen placement of the ring: centre, centre-line radii, half width."""
    cx: float
    cy: float
    rx: float
    ry: float
    half_width: float

    def to_screen(self, angle: float, offset: float) -> Tuple[float, float]:
        return (
            self.cx + (self.rx + offset) * math.cos(angle),
            self.cy + (self.ry + offset) * math.sin(angle),
        )

    @property
    def outer(self) -> Tuple[float, float]:
        return self.rx + self.half_width, self.ry + self.half_width

    @property
    def inner(self) -> Tuple[float, float]:
        return max(self.rx - self.half_width, 0.0), max(self.ry - self.half_width, 0.0)


@dataclass
class ButtonRect:
    """Stores a button's screen rect and label for click detection."""
    label: str
    x: int
    y: int
    w: int
    h: int

    def contains(self, mx: int, my: int) -> bool:
        return self.x <= mx <= self.x + self.w and self.y <= my <= self.y + self.h


@dataclass
class Slider:
    """Integer slider with an inclusive range and a horizontal track."""
    label: str
    lo: int
    hi: int
    value: int
    x: int = 0
    y: int = 0
    w: int = 160
    h: int = 16
    dragging: bool = False

    def contains(self, mx: int, my: int) -> bool:
        return self.x - 6 <= mx <= self.x + self.w + 6 and self.y <= my <= self.y + self.h

    def value_at(self, mx: int) -> int:
        """Slider value for a pointer at screen x *mx*, clamped to the range."""
        if self.hi <= self.lo or self.w <= 0:
            return self.lo
        frac = min(1.0, max(0.0, (mx - self.x) / self.w))
        return self.lo + int(round(frac * (self.hi - self.lo)))

    @property
    def knob_x(self) -> int:
        if self.hi <= self.lo:
            return self.x
        return self.x + int((self.value - self.lo) / (self.hi - self.lo) * self.w)
