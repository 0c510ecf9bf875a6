#!/usr/bin/env python3

from .types import ColorRGB, ColorRGBA, TrackFrame, ButtonRect, Slider
from .constants import ViewConstants
from .draw_track import TrackRenderer
from .draw_vehicles import VehicleRenderer
from .hud import HudRenderer
from .pygame_view import RingRoadView, run_pygame_view

__all__ = [
    "ColorRGB",
    "ColorRGBA",
    "TrackFrame",
    "ButtonRect",
    "Slider",
    "ViewConstants",
    "TrackRenderer",
    "VehicleRenderer",
    "HudRenderer",
    "RingRoadView",
    "run_pygame_view",
]
