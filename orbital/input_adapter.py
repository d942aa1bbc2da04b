#!/usr/bin/env python3
"""
Translate pygame input events into InteractionController calls.

Mouse events drive the single-pointer gestures, FINGER* events drive touch
(and pinch), the wheel zooms about the last known cursor position, and the
window losing the pointer or focus cancels whatever gesture is in progress.
Mouse events that SDL synthesizes from touches are ignored so a finger is
not seen twice.
"""
from typing import Callable, Dict, List, Sequence

import pygame

from .data_models import Body
from .interaction import InteractionController, InteractionEvent
from .vector_utils import Vector2


class PygameInputAdapter:
    def __init__(self, interaction: InteractionController, get_bodies: Callable[[], Sequence[Body]]):
        self.interaction = interaction
        self.get_bodies = get_bodies
        self.fingers: Dict[int, Vector2] = {}
        self.last_mouse = Vector2(0.0, 0.0)

    def _finger_pos(self, event) -> Vector2:
        w, h = self.interaction.viewport.viewport_size
        return Vector2(event.x * w, event.y * h)

    def handle_event(self, event) -> List[InteractionEvent]:
        interaction = self.interaction
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION):
            if getattr(event, "touch", False):
                return []
            self.last_mouse = Vector2(float(event.pos[0]), float(event.pos[1]))
            if event.type == pygame.MOUSEMOTION:
                return interaction.pointer_move(event.pos)
            if event.button != 1:
                return []
            if event.type == pygame.MOUSEBUTTONDOWN:
                return interaction.pointer_down(event.pos)
            return interaction.pointer_up(event.pos, self.get_bodies())

        if event.type == pygame.MOUSEWHEEL:
            return interaction.wheel(event.y, self.last_mouse)

        if event.type == pygame.FINGERDOWN:
            self.fingers[event.finger_id] = self._finger_pos(event)
            return interaction.touch_start(list(self.fingers.values()))

        if event.type == pygame.FINGERMOTION:
            if event.finger_id not in self.fingers:
                return []
            self.fingers[event.finger_id] = self._finger_pos(event)
            return interaction.touch_move(list(self.fingers.values()))

        if event.type == pygame.FINGERUP:
            released = self.fingers.pop(event.finger_id, self._finger_pos(event))
            return interaction.touch_end(list(self.fingers.values()), released, self.get_bodies())

        if event.type == pygame.WINDOWLEAVE:
            return interaction.pointer_leave()

        if event.type == pygame.WINDOWFOCUSLOST:
            self.fingers.clear()
            return interaction.pointer_cancel()

        return []
