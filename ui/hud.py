#!/usr/bin/env python3
"""Control panel, statistics HUD, debug overlay and pause banner (mixin)."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

import pygame

from .helpers import render_text
from .types import ButtonRect, Slider


class HudRenderer:
    """Mixin that draws every overlay / HUD element and owns the widgets."""

    sliders: List[Slider]
    buttons: List[ButtonRect]

    # ------------------------------------------------------------------ #
    #  Widgets                                                             #
    # ------------------------------------------------------------------ #

    def _build_controls(self, lanes: int, cars: int, speed: int) -> None:
        self.sliders = [
            Slider("Lanes", self.LANE_RANGE[0], self.LANE_RANGE[1], lanes),
            Slider("Cars", self.CAR_RANGE[0], self.CAR_RANGE[1], cars),
            Slider("Global Speed x", self.SPEED_RANGE[0], self.SPEED_RANGE[1], speed),
        ]
        self.buttons = [ButtonRect("Pause", 0, 0, 84, 26), ButtonRect("Reset", 0, 0, 84, 26)]
        self._layout_controls()

    def _layout_controls(self) -> None:
        """Stack the widgets in a panel at the top-right corner."""
        x = self.width - self.PANEL_WIDTH - self.PANEL_MARGIN + 16
        y = self.PANEL_MARGIN + 28
        for slider in self.sliders:
            slider.x = x
            slider.y = y
            slider.w = self.PANEL_WIDTH - 32
            y += 48
        bx = x
        for button in self.buttons:
            button.x = bx
            button.y = y
            bx += button.w + 8

    def _panel_rect(self) -> pygame.Rect:
        height = 28 + len(self.sliders) * 48 + 38
        return pygame.Rect(
            self.width - self.PANEL_WIDTH - self.PANEL_MARGIN,
            self.PANEL_MARGIN,
            self.PANEL_WIDTH,
            height,
        )

    def slider_by_label(self, label: str) -> Optional[Slider]:
        return next((s for s in self.sliders if s.label == label), None)

    # ------------------------------------------------------------------ #
    #  Control panel                                                       #
    # ------------------------------------------------------------------ #

    def draw_controls(self, surface: pygame.Surface, paused: bool) -> None:
        if self.font_small is None or self.font_tiny is None:
            return
        panel = self._panel_rect()
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel, border_radius=6)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel, width=1, border_radius=6)
        render_text(surface, self.font_small, "CONTROLS", (panel.x + 12, panel.y + 8), self.HUD_TEXT_COLOR)

        for slider in self.sliders:
            render_text(
                surface, self.font_tiny, f"{slider.label} {slider.value}",
                (slider.x, slider.y - 14), self.HUD_DIM_COLOR,
            )
            mid = slider.y + slider.h // 2
            pygame.draw.line(surface, self.HUD_BORDER_COLOR, (slider.x, mid), (slider.x + slider.w, mid), 4)
            pygame.draw.line(surface, self.ACCENT_COLOR, (slider.x, mid), (slider.knob_x, mid), 4)
            pygame.draw.circle(surface, self.HUD_TEXT_COLOR, (slider.knob_x, mid), 7)

        mx, my = pygame.mouse.get_pos()
        for button in self.buttons:
            label = button.label
            if label == "Pause" and paused:
                label = "Resume"
            color = self.BUTTON_HOVER_COLOR if button.contains(mx, my) else self.BUTTON_COLOR
            rect = pygame.Rect(button.x, button.y, button.w, button.h)
            pygame.draw.rect(surface, color, rect, border_radius=4)
            render_text(surface, self.font_tiny, label, rect.center, self.HUD_TEXT_COLOR, anchor="center")

    # ------------------------------------------------------------------ #
    #  Statistics HUD                                                      #
    # ------------------------------------------------------------------ #

    def draw_hud(self, surface: pygame.Surface, stats: Mapping[str, Any]) -> None:
        if self.font_tiny is None:
            return
        per_lane = " ".join(str(n) for n in stats.get("per_lane", []))
        lines = [
            f"VEHICLES   {stats.get('vehicles', 0)}",
            f"CONGESTED  {stats.get('congested', 0)}",
            f"CHANGING   {stats.get('changing_lane', 0)}",
            f"FLOW       {stats.get('mean_speed_ratio', 0.0) * 100:.0f}% of cruise",
            f"REQUESTS   {stats.get('lane_change_requests', 0)}",
            f"COMMITS    {stats.get('lane_commits', 0)}",
            f"PER LANE   {per_lane}",
            f"SIM TIME   {stats.get('clock', 0.0):.1f}s",
        ]
        row_h = 15
        panel = pygame.Rect(16, self.height - len(lines) * row_h - 32, 220, len(lines) * row_h + 16)
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel, border_radius=6)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel, width=1, border_radius=6)
        y = panel.y + 8
        for line in lines:
            color = self.WARNING_COLOR if line.startswith("CONGESTED") and stats.get("congested") else self.HUD_TEXT_COLOR
            render_text(surface, self.font_tiny, line, (panel.x + 10, y), color)
            y += row_h

    # ------------------------------------------------------------------ #
    #  Debug / FPS overlay                                                 #
    # ------------------------------------------------------------------ #

    def _draw_debug_overlay(self, surface: pygame.Surface, vehicle_count: int, dt: float) -> None:
        if self.font_tiny is None:
            return
        fps = self.clock.get_fps() if self.clock else 0.0
        lines = [
            f"FPS  {fps:.1f}",
            f"DT   {dt * 1000:.1f} ms",
            f"VEH  {vehicle_count}",
            f"RES  {self.width}x{self.height}",
            f"TIME {self.time_seconds:.1f}s",
        ]
        x, y = 16, 16
        for line in lines:
            text = self.font_tiny.render(line, True, self.ACCENT_COLOR)
            surface.blit(text, (x, y))
            y += 14

    # ------------------------------------------------------------------ #
    #  Pause banner                                                        #
    # ------------------------------------------------------------------ #

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        if self.font_title:
            text = self.font_title.render("PAUSED", True, (220, 220, 220))
            surface.blit(text, text.get_rect(center=(self.width // 2, self.height // 2)))
