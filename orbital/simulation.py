#!/usr/bin/env python3
"""
Simulation loop driver.

SimulationController owns the authoritative body list, the configuration and
the snapshot used by reset. tick() is called once per display frame; when
running it folds SUB_STEPS integration substeps into a new body list and
commits it in one assignment, so nothing observes a half-stepped frame.

Body-list updates from the UI arrive as explicit tags:

- ScenarioLoad: a new universe. The list is replaced exactly as supplied.
- PropertyEdit: tweaks to existing bodies. Matching ids take the edited
  physical/display parameters but keep their live position, velocity and
  trail, so moving a slider never resets motion.

Everything runs on one thread; there are no locks.
"""
import dataclasses
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .collisions import handle_collisions
from .constants import (
    BODY_COLORS,
    DEFAULT_CREATION_MASS,
    SUB_STEPS,
    SUBSTEP_DT,
    WAVE_TIME_STEP,
)
from .data_models import DEFAULT_CONFIG, Body, SimulationConfig, clamp_density, clamp_mass, create_body
from .interaction import BodyCreated, BodySelected, InteractionEvent
from .physics import advance
from .scenarios import Scenario

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioLoad:
    bodies: Tuple[Body, ...]
    config_overrides: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PropertyEdit:
    bodies: Tuple[Body, ...]


BodyListUpdate = Union[ScenarioLoad, PropertyEdit]


def merge_property_edit(current: Sequence[Body], incoming: Sequence[Body]) -> List[Body]:
    """
    Reconcile an edited body list against the live one.

    Bodies whose id is live keep position, velocity and trail and take mass,
    density, color and is_fixed from the edit (radius follows from mass and
    density). Unknown ids are taken as supplied. The result follows the order
    of incoming, so live bodies missing from it are dropped.
    """
    live = {b.id: b for b in current}
    merged = []
    for body in incoming:
        existing = live.get(body.id)
        if existing is None:
            merged.append(body)
            continue
        merged.append(dataclasses.replace(
            existing,
            mass=body.mass,
            density=body.density,
            color=body.color,
            is_fixed=body.is_fixed,
        ))
    return merged


class SimulationController:
    """
    Owns bodies, config and run state; advanced once per frame by tick().
    """

    def __init__(self, config: SimulationConfig = DEFAULT_CONFIG, rng: Optional[random.Random] = None):
        self.bodies: List[Body] = []
        self.initial_bodies: List[Body] = []
        self.config = config
        self.running = False
        self.sim_time = 0.0
        self.selected_id: Optional[str] = None
        self.creation_mass = DEFAULT_CREATION_MASS
        self.frame_count = 0
        self.last_collision_msg: Optional[str] = None
        self._rng = rng or random.Random()

    # -----------------------
    # Frame stepping
    # -----------------------

    def tick(self) -> None:
        """Per-frame callback: advance the clock and integrate when running."""
        if not self.running:
            return
        self.sim_time += WAVE_TIME_STEP * self.config.time_scale
        self._advance_frame()

    def step_once(self) -> None:
        """Advance exactly one frame regardless of the running flag."""
        self._advance_frame()

    def _advance_frame(self) -> None:
        if not self.bodies:
            return
        current = self.bodies
        config = self.config
        merged: List[Tuple[str, str]] = []
        try:
            for _ in range(SUB_STEPS):
                current = advance(current, config, SUBSTEP_DT)
                if config.collision_enabled:
                    current, pairs = handle_collisions(current)
                    merged.extend(pairs)
        except ArithmeticError:
            logger.exception("Physics error; frame %d dropped", self.frame_count)
            return
        self.bodies = current
        if merged:
            self._on_merged(merged)
        self.frame_count += 1

    def _on_merged(self, merged: List[Tuple[str, str]]) -> None:
        for survivor, absorbed in merged:
            if self.selected_id == absorbed:
                self.selected_id = survivor
        self.last_collision_msg = f"Merged {len(merged)} bod{'y' if len(merged) == 1 else 'ies'}"
        logger.debug("%s at frame %d", self.last_collision_msg, self.frame_count)

    # -----------------------
    # Run state
    # -----------------------

    def play(self) -> None:
        self.running = True

    def pause(self) -> None:
        """Stop integrating. Safe to call repeatedly; state is kept."""
        self.running = False

    def toggle_running(self) -> bool:
        self.running = not self.running
        return self.running

    # -----------------------
    # Body list updates
    # -----------------------

    def apply(self, update: BodyListUpdate) -> None:
        if isinstance(update, ScenarioLoad):
            bodies = list(update.bodies)
            self.bodies = bodies
            self.initial_bodies = list(bodies)
            self.config = DEFAULT_CONFIG.with_overrides(update.config_overrides)
            self.running = False
            self.selected_id = None
            self.sim_time = 0.0
            logger.info("Loaded %d bodies", len(bodies))
        elif isinstance(update, PropertyEdit):
            if not update.bodies:
                self.bodies = []
            else:
                self.bodies = merge_property_edit(self.bodies, update.bodies)
            if self.selected_id is not None and all(b.id != self.selected_id for b in self.bodies):
                self.selected_id = None
        else:
            raise TypeError(f"Unsupported body list update: {type(update).__name__}")

    def load_scenario(self, scenario: Scenario, rng: Optional[random.Random] = None) -> None:
        logger.info("Loading scenario %r", scenario.name)
        bodies = scenario.get_bodies(rng or self._rng)
        self.apply(ScenarioLoad(tuple(bodies), dict(scenario.config)))

    def reset(self) -> None:
        """
        Rebuild bodies from the initial snapshot with new ids and no trails, so
        the result is taken as a fresh scenario rather than merged into the
        live state. The loaded config is kept.
        """
        self.bodies = [b.with_fresh_id() for b in self.initial_bodies]
        self.running = False
        self.selected_id = None
        self.sim_time = 0.0
        logger.info("Reset to %d initial bodies", len(self.bodies))

    def add_body(self, body: Body) -> None:
        self.bodies = self.bodies + [body]

    def spawn_body(self, position, velocity) -> Body:
        """Create a body of creation_mass with a palette color and add it."""
        color = self._rng.choice(BODY_COLORS)
        body = create_body(position, velocity, self.creation_mass, color)
        self.add_body(body)
        logger.debug("Created body %s at (%.1f, %.1f)", body.id, body.position.x, body.position.y)
        return body

    # -----------------------
    # Selection and edits
    # -----------------------

    def select(self, body_id: Optional[str]) -> None:
        self.selected_id = body_id

    def get_selected_body(self) -> Optional[Body]:
        for b in self.bodies:
            if b.id == self.selected_id:
                return b
        return None

    def edit_selected(self, mass: Optional[float] = None, density: Optional[float] = None,
                      color=None, is_fixed: Optional[bool] = None) -> None:
        body = self.get_selected_body()
        if body is None:
            return
        changes: Dict[str, Any] = {}
        if mass is not None:
            changes["mass"] = clamp_mass(float(mass))
        if density is not None:
            changes["density"] = clamp_density(float(density))
        if color is not None:
            changes["color"] = tuple(color)
        if is_fixed is not None:
            changes["is_fixed"] = bool(is_fixed)
        edited = dataclasses.replace(body, **changes)
        self.apply(PropertyEdit(tuple(edited if b.id == body.id else b for b in self.bodies)))

    def toggle_selected_fixed(self) -> None:
        body = self.get_selected_body()
        if body is not None:
            self.edit_selected(is_fixed=not body.is_fixed)

    def update_config(self, **overrides) -> None:
        self.config = self.config.with_overrides(overrides)

    def handle_interaction(self, events: Sequence[InteractionEvent]) -> None:
        """Apply selection and creation events emitted by the viewport."""
        for event in events:
            if isinstance(event, BodySelected):
                self.select(event.body_id)
            elif isinstance(event, BodyCreated):
                self.spawn_body(event.position, event.velocity)
