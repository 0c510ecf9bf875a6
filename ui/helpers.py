"""
ui/helpers.py
=============
Pure utility functions shared across UI modules:
track placement, ellipse sampling, dashed-line splitting, the
procedural asphalt texture, and text drawing.
"""

from __future__ import annotations

from typing import List, Tuple

import numpy as np
import pygame

from ui.types import TrackFrame

Point = Tuple[float, float]


# ── Track placement ───────────────────────────────────────────────────────────

def track_frame(
    width: int,
    height: int,
    half_width: float,
    width_pct: float,
    height_pct: float,
) -> TrackFrame:
    """Centre the ring in a *width* × *height* area."""
    return TrackFrame(
        cx=width / 2.0,
        cy=height / 2.0,
        rx=width * width_pct / 2.0,
        ry=height * height_pct / 2.0,
        half_width=half_width,
    )


# ── Ellipse sampling ─────────────────────────────────────────────────────────

def ellipse_points(cx: float, cy: float, rx: float, ry: float, n: int) -> np.ndarray:
    """Closed polyline of *n* + 1 points on an axis-aligned ellipse, shape (n+1, 2)."""
    t = np.linspace(0.0, 2.0 * np.pi, n + 1)
    return np.column_stack((cx + rx * np.cos(t), cy + ry * np.sin(t)))


def dashed_segments(points: np.ndarray, dash: float, gap: float) -> List[Tuple[Point, Point]]:
    """Split a polyline into the segments that fall on a dash.

    Dash phase is measured along the arc length so dashes keep the same
    length on the flat and the curved parts of an ellipse.
    """
    if len(points) < 2:
        return []
    seg_len = np.hypot(*np.diff(points, axis=0).T)
    start_len = np.concatenate(([0.0], np.cumsum(seg_len)[:-1]))
    on = (start_len % (dash + gap)) < dash
    return [
        (tuple(points[i]), tuple(points[i + 1]))
        for i in np.flatnonzero(on)
    ]


# ── Asphalt texture ──────────────────────────────────────────────────────────

def make_asphalt_tile(size: int, seed: int = 0) -> pygame.Surface:
    """Grey noise with sparse light aggregate specks, as an RGB surface."""
    rng = np.random.default_rng(seed)
    base = rng.normal(62.0, 7.0, (size, size))
    specks = rng.random((size, size)) > 0.985
    base[specks] += rng.uniform(30.0, 60.0, int(specks.sum()))
    grey = np.clip(base, 0, 255)
    rgb = np.stack((grey, grey, np.clip(grey * 1.04, 0, 255)), axis=-1)
    return pygame.surfarray.make_surface(rgb.astype(np.uint8))


def tile_surface(tile: pygame.Surface, width: int, height: int) -> pygame.Surface:
    """Repeat *tile* over a *width* × *height* surface."""
    out = pygame.Surface((width, height))
    tw, th = tile.get_size()
    for x in range(0, width, tw):
        for y in range(0, height, th):
            out.blit(tile, (x, y))
    return out


def ellipse_rect(cx: float, cy: float, rx: float, ry: float) -> pygame.Rect:
    return pygame.Rect(int(cx - rx), int(cy - ry), int(2 * rx), int(2 * ry))


# ── Text helper ──────────────────────────────────────────────────────────────

def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect
