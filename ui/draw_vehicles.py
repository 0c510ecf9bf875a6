#!/usr/bin/env python3
"""Vehicle glyph rendering (mixin)."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Tuple

import pygame

from .types import ColorRGB, TrackFrame


class VehicleRenderer:
    """Mixin that draws each vehicle as an oriented ellipse on its lane offset."""

    _sprite_cache: Dict[Tuple[ColorRGB, int, int, bool], pygame.Surface]

    def _vehicle_sprite(self, color: ColorRGB, length: int, width: int, braking: bool) -> pygame.Surface:
        key = (color, length, width, braking)
        sprite = self._sprite_cache.get(key)
        if sprite is not None:
            return sprite

        sprite = pygame.Surface((length, width), pygame.SRCALPHA)
        pygame.draw.ellipse(sprite, color, (0, 0, length, width))

        # Front is +x; the sprite is rotated onto the direction of travel.
        light_r = max(1, width // 6)
        pygame.draw.circle(sprite, self.HEADLIGHT_COLOR, (length - light_r - 1, width // 2), light_r)
        if braking:
            pygame.draw.circle(sprite, self.BRAKE_LIGHT_COLOR, (light_r + 1, width // 2), light_r + 1)

        self._sprite_cache[key] = sprite
        return sprite

    def draw_vehicle(self, surface: pygame.Surface, frame: TrackFrame, vehicle: Mapping[str, Any], lane_spacing: float) -> None:
        angle = float(vehicle["angle"])
        x, y = frame.to_screen(angle, float(vehicle["lateral_offset"]))
        length = max(4, int(lane_spacing * self.CAR_LENGTH_FACTOR))
        width = max(2, int(lane_spacing * self.CAR_WIDTH_FACTOR))
        color = tuple(vehicle.get("color", (255, 255, 255)))

        sprite = self._vehicle_sprite(color, length, width, bool(vehicle.get("congested")))
        # Screen y points down, so increasing angle runs clockwise on screen.
        rotated = pygame.transform.rotate(sprite, -math.degrees(angle + math.pi / 2))
        surface.blit(rotated, rotated.get_rect(center=(int(x), int(y))))
