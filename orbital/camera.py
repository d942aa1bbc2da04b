#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.

The viewport stores the screen position of the world origin (offset, pixels)
and a zoom factor (pixels per world unit):

    screen = world * zoom + offset
    world  = (screen - offset) / zoom

Zoom is always clamped to [MIN_ZOOM, MAX_ZOOM]. Panning is unbounded.
"""
from typing import Optional, Sequence, Tuple

from .constants import (
    BUTTON_ZOOM_STEP,
    MAX_ZOOM,
    MIN_ZOOM,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .vector_utils import Vector2, clamp


class Viewport:
    """
    Simple 2D camera mapping world coordinates to screen pixels.

    Attributes:
        offset: screen-space position of the world origin.
        zoom: screen pixels per world unit.
        viewport_size: (width, height) of the drawing surface in pixels.
    """

    def __init__(self, offset: Optional[Sequence[float]] = None, zoom: float = 1.0,
                 viewport_size: Tuple[int, int] = (VIEW_WIDTH, VIEW_HEIGHT)):
        self.viewport_size = (int(viewport_size[0]), int(viewport_size[1]))
        if offset is None:
            offset = self.screen_center()
        self.offset = Vector2(float(offset[0]), float(offset[1]))
        self.zoom = clamp(float(zoom), MIN_ZOOM, MAX_ZOOM)

    def screen_center(self) -> Vector2:
        return Vector2(self.viewport_size[0] / 2, self.viewport_size[1] / 2)

    def set_viewport_size(self, w: int, h: int) -> None:
        """Resize the drawing surface; offset and zoom are left alone."""
        self.viewport_size = (int(w), int(h))

    def world_to_screen(self, pos: Sequence[float]) -> Vector2:
        return Vector2(pos[0] * self.zoom + self.offset.x, pos[1] * self.zoom + self.offset.y)

    def screen_to_world(self, screen: Sequence[float]) -> Vector2:
        return Vector2((screen[0] - self.offset.x) / self.zoom, (screen[1] - self.offset.y) / self.zoom)

    def pan(self, delta: Sequence[float]) -> None:
        self.offset = Vector2(self.offset.x + delta[0], self.offset.y + delta[1])

    def zoom_at(self, factor: float, focus: Sequence[float], anchor: Optional[Sequence[float]] = None) -> None:
        """
        Scale the zoom by factor while keeping a world point fixed on screen.

        The world point currently under anchor (defaults to focus) ends up
        under focus after the change. With distinct anchor and focus this is
        a combined pan and zoom, which is what a pinch update needs.
        """
        world = self.screen_to_world(focus if anchor is None else anchor)
        self.zoom = clamp(self.zoom * factor, MIN_ZOOM, MAX_ZOOM)
        self.offset = Vector2(focus[0] - world.x * self.zoom, focus[1] - world.y * self.zoom)

    def zoom_in(self) -> None:
        self.zoom_at(BUTTON_ZOOM_STEP, self.screen_center())

    def zoom_out(self) -> None:
        self.zoom_at(1.0 / BUTTON_ZOOM_STEP, self.screen_center())

    def reset(self, viewport_size: Optional[Tuple[int, int]] = None) -> None:
        """Put the world origin at the screen center at zoom 1."""
        if viewport_size is not None:
            self.set_viewport_size(*viewport_size)
        self.offset = self.screen_center()
        self.zoom = 1.0

    def center_on(self, world_point: Sequence[float]) -> None:
        """Pan so world_point sits at the screen center, keeping the zoom."""
        c = self.screen_center()
        self.offset = Vector2(c.x - world_point[0] * self.zoom, c.y - world_point[1] * self.zoom)

    def frame_bodies(self, bodies, margin: float = 1.3) -> None:
        """
        Adjust camera to fit all bodies into view with margin.
        """
        if not bodies:
            self.reset()
            return
        xs = [b.position.x for b in bodies]
        ys = [b.position.y for b in bodies]
        minx, maxx = min(xs), max(xs)
        miny, maxy = min(ys), max(ys)
        width = (maxx - minx) * margin + 1.0
        height = (maxy - miny) * margin + 1.0
        zoom_x = max(self.viewport_size[0], 1) / width
        zoom_y = max(self.viewport_size[1], 1) / height
        self.zoom = clamp(min(zoom_x, zoom_y), MIN_ZOOM, MAX_ZOOM)
        self.center_on(((minx + maxx) / 2, (miny + maxy) / 2))
