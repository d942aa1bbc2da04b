#!/usr/bin/env python3
"""
Pygame rendering of the simulation state.

Read-only consumer: draws the grid, trails, bodies, selection ring and the
creation ghost from the controller's body list and the viewport once per
frame. Nothing here mutates simulation or camera state.
"""
import math

import pygame
from pygame import gfxdraw

from .constants import (
    BACKGROUND_COLOR,
    DEFAULT_DENSITY,
    FIXED_MARKER_COLOR,
    GHOST_COLOR,
    GRID_COLOR,
    GRID_FINE_COLOR,
    SAFE_COORD_LIMIT,
    SELECTION_COLOR,
)
from .data_models import radius_of

_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        _cached_font = pygame.font.SysFont("consolas", 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def _scaled(color, alpha):
    return tuple(int(c * alpha) for c in color)


def draw_arrow_head(surface, tip, tail, color):
    # Small triangle for arrow head
    tip_s = _safe_point(tip)
    tail_s = _safe_point(tail)
    if tip_s is None or tail_s is None or tip_s == tail_s:
        return
    ang = math.atan2(tip_s[1] - tail_s[1], tip_s[0] - tail_s[0])
    size = 8
    left = (tip_s[0] - size * math.cos(ang - math.pi / 6), tip_s[1] - size * math.sin(ang - math.pi / 6))
    right = (tip_s[0] - size * math.cos(ang + math.pi / 6), tip_s[1] - size * math.sin(ang + math.pi / 6))
    left_s = _safe_point(left)
    right_s = _safe_point(right)
    if left_s and right_s:
        pygame.draw.polygon(surface, color, [tip_s, left_s, right_s])


class Renderer:
    """Draws one frame of the simulation onto a pygame surface."""

    def __init__(self, surface):
        self.surface = surface

    def set_surface(self, surface):
        self.surface = surface

    def draw(self, sim, viewport, interaction):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        config = sim.config

        if config.show_grid:
            self.draw_grid(surf, viewport)
        if config.show_trails:
            self.draw_trails(surf, sim.bodies, viewport, config.trail_fade)
        self.draw_bodies(surf, sim.bodies, viewport, sim.selected_id)
        self.draw_creation_ghost(surf, viewport, interaction, sim.creation_mass)

        mode = interaction.mode.value.upper()
        draw_text(surf, "Drag: pan | Click: select | Wheel/pinch: zoom | Space: play/pause | C: toggle mode",
                  10, 10, (200, 200, 200))
        state = "Playing" if sim.running else "Paused"
        draw_text(surf, f"Mode: {mode}  Bodies: {len(sim.bodies)}  Zoom: {viewport.zoom:.2f}x  [{state}]",
                  10, 30, (200, 200, 200))

    def draw_grid(self, surf, viewport):
        w, h = viewport.viewport_size
        spacing = 60.0  # world units
        fine = spacing / 5
        top_left = viewport.screen_to_world((0, 0))
        bottom_right = viewport.screen_to_world((w, h))

        for step, color in ((fine, GRID_FINE_COLOR), (spacing, GRID_COLOR)):
            if step * viewport.zoom < 4:
                continue
            x = math.floor(top_left[0] / step) * step
            while x <= bottom_right[0]:
                sx = int(viewport.world_to_screen((x, 0))[0])
                pygame.draw.line(surf, color, (sx, 0), (sx, h), 1)
                x += step
            y = math.floor(top_left[1] / step) * step
            while y <= bottom_right[1]:
                sy = int(viewport.world_to_screen((0, y))[1])
                pygame.draw.line(surf, color, (0, sy), (w, sy), 1)
                y += step

    def draw_trails(self, surf, bodies, viewport, fade):
        for b in bodies:
            pts = [_safe_point(viewport.world_to_screen(p)) for p in b.trail]
            pts.append(_safe_point(viewport.world_to_screen(b.position)))
            pts = [p for p in pts if p]
            n = len(pts)
            if n < 2:
                continue
            if not fade:
                pygame.draw.aalines(surf, _scaled(b.color, 0.6), False, pts)
                continue
            for i in range(n - 1):
                ratio = i / n
                alpha = max(0.1, ratio * ratio * 0.8)
                width = max(1, int(1 + ratio * 2.5))
                pygame.draw.line(surf, _scaled(b.color, alpha), pts[i], pts[i + 1], width)

    def draw_bodies(self, surf, bodies, viewport, selected_id):
        for b in bodies:
            pos = _safe_point(viewport.world_to_screen(b.position))
            if pos is None:
                continue
            vis_r = max(2, min(int(b.radius * viewport.zoom), 200))
            if b.id == selected_id:
                gfxdraw.aacircle(surf, pos[0], pos[1], vis_r + 8, SELECTION_COLOR)
            gfxdraw.filled_circle(surf, pos[0], pos[1], vis_r, b.color)
            gfxdraw.aacircle(surf, pos[0], pos[1], vis_r, b.color)
            if b.is_fixed:
                gfxdraw.aacircle(surf, pos[0], pos[1], max(1, vis_r // 3), FIXED_MARKER_COLOR)

    def draw_creation_ghost(self, surf, viewport, interaction, creation_mass):
        preview = interaction.creation_preview
        if preview is None:
            return
        start, end = preview
        start_s = _safe_point(viewport.world_to_screen(start))
        end_s = _safe_point(viewport.world_to_screen(end))
        if start_s is None:
            return
        ghost_r = max(2, int(radius_of(creation_mass, DEFAULT_DENSITY) * viewport.zoom))
        gfxdraw.aacircle(surf, start_s[0], start_s[1], ghost_r, GHOST_COLOR)
        if end_s and end_s != start_s:
            pygame.draw.line(surf, GHOST_COLOR, start_s, end_s, 2)
            draw_arrow_head(surf, end_s, start_s, GHOST_COLOR)
