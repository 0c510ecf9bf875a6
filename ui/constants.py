#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

import config

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    GRASS_COLOR: ColorRGB = (38, 115, 38)
    LANE_DASH_COLOR: ColorRGB = (255, 255, 255)
    BOUNDARY_COLOR: ColorRGB = (255, 255, 255)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    HUD_TEXT_COLOR: ColorRGB = (220, 220, 220)
    HUD_DIM_COLOR: ColorRGB = (140, 140, 140)
    ACCENT_COLOR: ColorRGB = (0, 255, 127)
    WARNING_COLOR: ColorRGB = (255, 60, 60)
    BUTTON_COLOR: ColorRGB = (58, 58, 58)
    BUTTON_HOVER_COLOR: ColorRGB = (80, 80, 80)
    HEADLIGHT_COLOR: ColorRGB = (255, 248, 200)
    BRAKE_LIGHT_COLOR: ColorRGB = (255, 40, 40)

    TRACK_WIDTH_PCT = 0.7
    TRACK_HEIGHT_PCT = 0.5

    ASPHALT_TILE = 128
    ASPHALT_SEED = 7
    DASH_LEN = 20
    DASH_GAP = 20
    DIVIDER_WIDTH = 2
    BOUNDARY_WIDTH = 4
    ELLIPSE_SAMPLES = 720

    CAR_LENGTH_FACTOR = 0.8   # × lane spacing
    CAR_WIDTH_FACTOR = 0.4

    PANEL_WIDTH = 200
    PANEL_MARGIN = 12

    LANE_RANGE = config.LANE_COUNT_RANGE
    CAR_RANGE = config.CAR_COUNT_RANGE
    SPEED_RANGE = config.SPEED_MULTIPLIER_RANGE

    SCREENSHOT_DIR = "screenshots"
