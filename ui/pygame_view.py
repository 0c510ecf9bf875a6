#!/usr/bin/env python3
"""
Main view class — combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – ColorRGB, TrackFrame, ButtonRect, Slider
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – pure utilities (ellipse sampling, asphalt texture)
    ├── draw_track.py      – TrackRenderer mixin (asphalt ring, lane dividers)
    ├── draw_vehicles.py   – VehicleRenderer mixin (oriented car glyphs)
    ├── hud.py             – HudRenderer mixin  (controls, HUD, debug, pause)
    └── pygame_view.py     – RingRoadView (this file – main loop)
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

import pygame

from .constants import ViewConstants
from .draw_track import TrackRenderer
from .draw_vehicles import VehicleRenderer
from .helpers import track_frame
from .hud import HudRenderer
from .types import Slider

log = logging.getLogger("ui")


class RingRoadView(
    ViewConstants,
    TrackRenderer,
    VehicleRenderer,
    HudRenderer,
):
    """Ring-road visualiser powered by Pygame.

    Reads vehicle snapshots from the bridge and forwards slider and
    button input to it; no traffic behaviour lives here.
    """

    def __init__(self, bridge: Any, width: int = 1200, height: int = 800, fps: int = 60):
        self.bridge = bridge
        self.width = width
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.time_seconds = 0.0
        self.show_debug = False
        self._sprite_cache = {}
        self._screenshot_flash_until = 0.0

        settings = bridge.get_settings()
        self._build_controls(settings.lane_count, settings.car_count, settings.speed_multiplier)

    # ------------------------------------------------------------------ #
    #  Resize                                                              #
    # ------------------------------------------------------------------ #
    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(400, new_w)
        self.height = max(300, new_h)
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self._build_track_graphic()
        self._layout_controls()

    # ------------------------------------------------------------------ #
    #  Screenshot                                                          #
    # ------------------------------------------------------------------ #
    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"ring_{stamp}.png")
        pygame.image.save(self.screen, path)
        self._screenshot_flash_until = self.time_seconds + 0.35
        log.info("Screenshot saved to %s", path)

    # ------------------------------------------------------------------ #
    #  Controls → bridge                                                   #
    # ------------------------------------------------------------------ #
    def _apply_slider(self, slider: Slider, released: bool) -> None:
        """Lanes and speed apply live; a car-count change rebuilds on release."""
        if slider.label == "Lanes":
            self.bridge.set_lane_count(slider.value)
        elif slider.label == "Global Speed x":
            self.bridge.set_speed_multiplier(slider.value)
        elif slider.label == "Cars" and released:
            self.bridge.set_car_count(slider.value)

    def _on_reset(self) -> None:
        cars = self.slider_by_label("Cars")
        if cars is not None and cars.value != self.bridge.get_settings().car_count:
            self.bridge.set_car_count(cars.value)
        else:
            self.bridge.reset()

    def _handle_mouse(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            mx, my = event.pos
            for button in self.buttons:
                if button.contains(mx, my):
                    if button.label == "Pause":
                        self.bridge.toggle_pause()
                    elif button.label == "Reset":
                        self._on_reset()
                    return
            for slider in self.sliders:
                if slider.contains(mx, my):
                    slider.dragging = True
                    slider.value = slider.value_at(mx)
                    self._apply_slider(slider, released=False)
                    return
        elif event.type == pygame.MOUSEMOTION:
            for slider in self.sliders:
                if slider.dragging:
                    new_value = slider.value_at(event.pos[0])
                    if new_value != slider.value:
                        slider.value = new_value
                        self._apply_slider(slider, released=False)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            for slider in self.sliders:
                if slider.dragging:
                    slider.dragging = False
                    self._apply_slider(slider, released=True)

    def _handle_key(self, key: int) -> None:
        if key == pygame.K_SPACE:
            self.bridge.toggle_pause()
        elif key == pygame.K_r:
            self._on_reset()
        elif key == pygame.K_F3:
            self.show_debug = not self.show_debug
        elif key == pygame.K_F12:
            self._take_screenshot()

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption("RING ROAD TRAFFIC")
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self.font_small = pygame.font.SysFont("Arial", 14, bold=True)
        self.font_tiny = pygame.font.SysFont("Arial", 12)
        self.font_title = pygame.font.SysFont("Arial", 28, bold=True)
        self._build_track_graphic()
        self._layout_controls()
        log.info("View running at %dx%d, %d fps", self.width, self.height, self.fps)

        running = True
        while running:
            delta_time = self.clock.tick(self.fps) / 1000.0
            self.time_seconds += delta_time

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    self._handle_resize(event.w, event.h)
                elif event.type == pygame.KEYDOWN:
                    self._handle_key(event.key)
                elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP):
                    self._handle_mouse(event)

            # ---- simulation tick (skipped inside the world when paused) -- #
            self.bridge.step(delta_time)
            vehicles = self.bridge.get_vehicles()
            track: Dict[str, Any] = self.bridge.get_track()
            paused = self.bridge.is_paused()

            # ---- render ------------------------------------------------- #
            frame = track_frame(
                self.width, self.height, track["half_width"],
                self.TRACK_WIDTH_PCT, self.TRACK_HEIGHT_PCT,
            )
            self.draw_track(self.screen, frame, track)
            for vehicle in vehicles:
                self.draw_vehicle(self.screen, frame, vehicle, track["lane_spacing"])

            self.draw_controls(self.screen, paused)
            self.draw_hud(self.screen, self.bridge.get_stats())
            if self.show_debug:
                self._draw_debug_overlay(self.screen, len(vehicles), delta_time)
            if paused:
                self._draw_pause_banner(self.screen)
            if self.time_seconds < self._screenshot_flash_until:
                flash = pygame.Surface(
                    (self.width, self.height), pygame.SRCALPHA
                )
                flash.fill((255, 255, 255, 40))
                self.screen.blit(flash, (0, 0))

            pygame.display.flip()

        pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(
    bridge: Any, width: int = 1200, height: int = 800, fps: int = 60
) -> None:
    view = RingRoadView(bridge=bridge, width=width, height=height, fps=fps)
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a bridge object. Run `python main.py` "
        "or call run_pygame_view(your_bridge)."
    )
