#!/usr/bin/env python3
"""
Pointer and touch gesture handling for the viewport.

InteractionController is a small state machine (Idle, Panning, Creating,
Pinching) driven by pointer/touch begin, move and end events and by the
externally selected interaction mode (VIEW or CREATE).

- VIEW: press-and-drag pans the camera. A press released without moving more
  than CLICK_DRAG_THRESHOLD pixels on either axis is a click and hit-tests
  the bodies, topmost (last drawn) first.
- CREATE: press records a world start point, moves update the end point and
  release emits a BodyCreated event with velocity (end - start) * 0.05.
- Two fingers always pinch: zoom by the change in finger distance about the
  midpoint, and pan with the midpoint, recomputed every tick.
- Leaving the surface or a cancelled pointer drops any gesture silently.

Camera changes are applied to the Viewport directly. Selection and creation
are returned as events for the caller to apply.
"""
import enum
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .camera import Viewport
from .constants import (
    CLICK_DRAG_THRESHOLD,
    HIT_MIN_SCREEN_RADIUS,
    HIT_RADIUS_SCALE,
    LAUNCH_VELOCITY_SCALE,
    WHEEL_ZOOM_STEP,
)
from .vector_utils import Vector2, vec_dist, vec_mid, vec_scale, vec_sub


class InteractionMode(enum.Enum):
    VIEW = "view"
    CREATE = "create"


class InteractionState(enum.Enum):
    IDLE = "idle"
    PANNING = "panning"
    CREATING = "creating"
    PINCHING = "pinching"


@dataclass(frozen=True)
class BodySelected:
    body_id: Optional[str]


@dataclass(frozen=True)
class BodyCreated:
    position: Vector2
    velocity: Vector2


InteractionEvent = Union[BodySelected, BodyCreated]


def hit_test(bodies, world_point: Sequence[float], zoom: float) -> Optional[str]:
    """Return the id of the topmost body under world_point, or None."""
    for body in reversed(list(bodies)):
        reach = max(body.radius * HIT_RADIUS_SCALE, HIT_MIN_SCREEN_RADIUS / zoom)
        if vec_dist(world_point, body.position) <= reach:
            return body.id
    return None


class InteractionController:
    def __init__(self, viewport: Viewport, mode: InteractionMode = InteractionMode.VIEW):
        self.viewport = viewport
        self.mode = mode
        self.state = InteractionState.IDLE
        self._start_screen = Vector2(0.0, 0.0)
        self._last_screen = Vector2(0.0, 0.0)
        self._is_drag = False
        self._create_start: Optional[Vector2] = None
        self._create_end: Optional[Vector2] = None
        self._pinch_distance = 0.0
        self._pinch_mid = Vector2(0.0, 0.0)

    @property
    def creation_preview(self):
        """(start, end) world points of the body being created, or None."""
        if self.state is not InteractionState.CREATING or self._create_start is None:
            return None
        return self._create_start, self._create_end

    @property
    def is_drag(self) -> bool:
        return self._is_drag

    def set_mode(self, mode: InteractionMode) -> List[InteractionEvent]:
        """Switch mode, dropping any gesture in progress and clearing the selection."""
        self.mode = mode
        self._cancel()
        return [BodySelected(None)]

    # -----------------------
    # Single pointer
    # -----------------------

    def pointer_down(self, screen: Sequence[float]) -> List[InteractionEvent]:
        screen = Vector2(float(screen[0]), float(screen[1]))
        if self.mode is InteractionMode.CREATE:
            world = self.viewport.screen_to_world(screen)
            self._create_start = world
            self._create_end = world
            self.state = InteractionState.CREATING
        else:
            self._begin_pan(screen, is_drag=False)
        return []

    def pointer_move(self, screen: Sequence[float]) -> List[InteractionEvent]:
        screen = Vector2(float(screen[0]), float(screen[1]))
        if self.state is InteractionState.PANNING:
            delta = vec_sub(screen, self._last_screen)
            if (abs(screen.x - self._start_screen.x) > CLICK_DRAG_THRESHOLD
                    or abs(screen.y - self._start_screen.y) > CLICK_DRAG_THRESHOLD):
                self._is_drag = True
            self.viewport.pan(delta)
            self._last_screen = screen
        elif self.state is InteractionState.CREATING:
            self._create_end = self.viewport.screen_to_world(screen)
        return []

    def pointer_up(self, screen: Sequence[float], bodies=()) -> List[InteractionEvent]:
        screen = Vector2(float(screen[0]), float(screen[1]))
        events: List[InteractionEvent] = []
        if self.state is InteractionState.PANNING:
            if not self._is_drag:
                world = self.viewport.screen_to_world(screen)
                events.append(BodySelected(hit_test(bodies, world, self.viewport.zoom)))
        elif self.state is InteractionState.CREATING:
            self._create_end = self.viewport.screen_to_world(screen)
            velocity = vec_scale(vec_sub(self._create_end, self._create_start), LAUNCH_VELOCITY_SCALE)
            events.append(BodyCreated(self._create_start, velocity))
        self._cancel()
        return events

    def pointer_leave(self) -> List[InteractionEvent]:
        if self.state in (InteractionState.PANNING, InteractionState.CREATING):
            self._cancel()
        return []

    def pointer_cancel(self) -> List[InteractionEvent]:
        self._cancel()
        return []

    def wheel(self, steps: float, screen: Sequence[float]) -> List[InteractionEvent]:
        """Zoom about the cursor; positive steps zoom in."""
        self.viewport.zoom_at(WHEEL_ZOOM_STEP ** steps, screen)
        return []

    # -----------------------
    # Touch
    # -----------------------

    def touch_start(self, points: Sequence[Sequence[float]]) -> List[InteractionEvent]:
        """Touches began; points holds every finger currently down."""
        if len(points) >= 2:
            self._cancel()
            a, b = points[0], points[1]
            self._pinch_distance = vec_dist(a, b)
            self._pinch_mid = vec_mid(a, b)
            self.state = InteractionState.PINCHING
            return []
        if len(points) == 1 and self.state is InteractionState.IDLE:
            return self.pointer_down(points[0])
        return []

    def touch_move(self, points: Sequence[Sequence[float]]) -> List[InteractionEvent]:
        if self.state is InteractionState.PINCHING:
            if len(points) < 2:
                return []
            a, b = points[0], points[1]
            distance = vec_dist(a, b)
            mid = vec_mid(a, b)
            factor = distance / self._pinch_distance if self._pinch_distance > 0 else 1.0
            self.viewport.zoom_at(factor, mid, anchor=self._pinch_mid)
            self._pinch_distance = distance
            self._pinch_mid = mid
            return []
        if len(points) == 1:
            return self.pointer_move(points[0])
        return []

    def touch_end(self, remaining: Sequence[Sequence[float]], released: Sequence[float],
                  bodies=()) -> List[InteractionEvent]:
        """
        A finger lifted. remaining holds the fingers still down, released is
        the lifted finger's last position.
        """
        if self.state is InteractionState.PINCHING:
            if len(remaining) >= 2:
                a, b = remaining[0], remaining[1]
                self._pinch_distance = vec_dist(a, b)
                self._pinch_mid = vec_mid(a, b)
            elif len(remaining) == 1:
                self._cancel()
                if self.mode is InteractionMode.VIEW:
                    # continue as a pan from where the finger is, never as a click
                    self._begin_pan(Vector2(float(remaining[0][0]), float(remaining[0][1])), is_drag=True)
            else:
                self._cancel()
            return []
        if not remaining:
            return self.pointer_up(released, bodies)
        return []

    # -----------------------
    # Internals
    # -----------------------

    def _begin_pan(self, screen: Vector2, is_drag: bool) -> None:
        self.state = InteractionState.PANNING
        self._start_screen = screen
        self._last_screen = screen
        self._is_drag = is_drag

    def _cancel(self) -> None:
        self.state = InteractionState.IDLE
        self._is_drag = False
        self._create_start = None
        self._create_end = None
