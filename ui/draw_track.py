"""
ui/draw_track.py
================
Renders the ring road: grass background, textured asphalt ring,
dashed lane dividers and solid boundaries.

All methods are *pure renderers*: they read the track layout and draw
to a surface.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import pygame

from ui.helpers import (
    dashed_segments,
    ellipse_points,
    ellipse_rect,
    make_asphalt_tile,
    tile_surface,
)
from ui.types import TrackFrame


class TrackRenderer:
    """Mixin that draws the track under the vehicles."""

    _asphalt: Optional[pygame.Surface] = None
    _ring_cache_key: Optional[Tuple[Any, ...]] = None
    _ring_cache: Optional[pygame.Surface] = None

    def _build_track_graphic(self) -> None:
        """Tile the asphalt into a full-window buffer (called on resize)."""
        tile = make_asphalt_tile(self.ASPHALT_TILE, seed=self.ASPHALT_SEED)
        self._asphalt = tile_surface(tile, self.width, self.height)
        self._ring_cache_key = None

    def _textured_ring(self, frame: TrackFrame) -> pygame.Surface:
        """Asphalt clipped to the ring between the outer and inner ellipse."""
        key = (self.width, self.height, frame.rx, frame.ry, frame.half_width)
        if self._ring_cache is not None and self._ring_cache_key == key:
            return self._ring_cache

        if self._asphalt is None or self._asphalt.get_size() != (self.width, self.height):
            self._build_track_graphic()

        mask = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        mask.fill((0, 0, 0, 0))
        orx, ory = frame.outer
        irx, iry = frame.inner
        pygame.draw.ellipse(mask, (255, 255, 255, 255), ellipse_rect(frame.cx, frame.cy, orx, ory))
        if irx > 0 and iry > 0:
            pygame.draw.ellipse(mask, (0, 0, 0, 0), ellipse_rect(frame.cx, frame.cy, irx, iry))

        ring = self._asphalt.convert_alpha()
        ring.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MULT)
        self._ring_cache_key = key
        self._ring_cache = ring
        return ring

    def draw_track(self, surface: pygame.Surface, frame: TrackFrame, track: Dict[str, Any]) -> None:
        surface.fill(self.GRASS_COLOR)
        surface.blit(self._textured_ring(frame), (0, 0))

        # Dashed dividers sit halfway between adjacent lane centres.
        spacing = float(track.get("lane_spacing", 30.0))
        lanes = int(track.get("lane_count", 1))
        for j in range(1, lanes):
            offs = -frame.half_width + j * spacing
            points = ellipse_points(
                frame.cx, frame.cy, frame.rx + offs, frame.ry + offs, self.ELLIPSE_SAMPLES,
            )
            for a, b in dashed_segments(points, self.DASH_LEN, self.DASH_GAP):
                pygame.draw.line(surface, self.LANE_DASH_COLOR, a, b, self.DIVIDER_WIDTH)

        orx, ory = frame.outer
        irx, iry = frame.inner
        pygame.draw.ellipse(
            surface, self.BOUNDARY_COLOR,
            ellipse_rect(frame.cx, frame.cy, orx, ory), self.BOUNDARY_WIDTH,
        )
        if irx > 0 and iry > 0:
            pygame.draw.ellipse(
                surface, self.BOUNDARY_COLOR,
                ellipse_rect(frame.cx, frame.cy, irx, iry), self.BOUNDARY_WIDTH,
            )
