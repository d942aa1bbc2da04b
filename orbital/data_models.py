#!/usr/bin/env python3
"""
Data models for the Orbital simulator.

This module defines the Body record shared between physics, interaction and
rendering, and the SimulationConfig read by the integrator every substep.

Units and usage
- position is in world units, velocity in world units per second.
- radius is derived from mass and density by radius_of(); it is never set
  directly. Bodies are frozen, so every change goes through dataclasses.replace
  (or the with_* helpers) and the radius is recomputed on the way.
- trail is a tuple of past positions, oldest first.
"""
import dataclasses
import math
import random
import string
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from .constants import (
    DEFAULT_DENSITY,
    MAX_DENSITY,
    MAX_MASS,
    MAX_TRAIL_LENGTH,
    MIN_BODY_RADIUS,
    MIN_DENSITY,
    MIN_MASS,
)
from .vector_utils import Vector2, clamp

_ID_ALPHABET = string.ascii_lowercase + string.digits
_id_rng = random.Random()


def new_body_id() -> str:
    """Return a short random base-36 identifier."""
    return "".join(_id_rng.choice(_ID_ALPHABET) for _ in range(9))


def radius_of(mass: float, density: float) -> float:
    """Visual/hit-test radius: area grows with mass/density, never below 3."""
    return max(MIN_BODY_RADIUS, math.sqrt(mass / density))


def clamp_mass(mass: float) -> float:
    if math.isnan(mass):
        return 1.0
    return clamp(mass, MIN_MASS, MAX_MASS)


def clamp_density(density: float) -> float:
    return clamp(density, MIN_DENSITY, MAX_DENSITY)


@dataclass(frozen=True)
class Body:
    """
    Represents a point mass in the simulation.

    Fields:
    - id: Opaque identifier, stable across frames
    - mass: Mass (> 0)
    - density: Density (> 0), together with mass determines radius
    - position: World position (x, y)
    - velocity: World velocity (vx, vy) in units per second
    - color: RGB tuple used for rendering
    - trail: Past positions for drawing motion paths, oldest first
    - is_fixed: Attracts others but never moves
    - radius: Derived, see radius_of()
    """
    id: str
    mass: float
    density: float
    position: Vector2
    velocity: Vector2
    color: Tuple[int, int, int] = (200, 200, 255)
    trail: Tuple[Vector2, ...] = ()
    is_fixed: bool = False
    radius: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "position", Vector2(*self.position))
        object.__setattr__(self, "velocity", Vector2(*self.velocity))
        object.__setattr__(self, "trail", tuple(self.trail))
        object.__setattr__(self, "radius", radius_of(self.mass, self.density))

    def with_mass(self, mass: float) -> "Body":
        return dataclasses.replace(self, mass=mass)

    def with_density(self, density: float) -> "Body":
        return dataclasses.replace(self, density=density)

    def with_fresh_id(self) -> "Body":
        """Copy with a new identifier and no trail, used when restoring snapshots."""
        return dataclasses.replace(self, id=new_body_id(), trail=())


def create_body(position, velocity, mass: float, color: Tuple[int, int, int],
                is_fixed: bool = False, density: float = DEFAULT_DENSITY,
                body_id: Optional[str] = None) -> Body:
    """Build a new body with a fresh id and an empty trail."""
    return Body(
        id=body_id or new_body_id(),
        mass=float(mass),
        density=float(density),
        position=Vector2(float(position[0]), float(position[1])),
        velocity=Vector2(float(velocity[0]), float(velocity[1])),
        color=tuple(color),
        is_fixed=bool(is_fixed),
    )


# camelCase option names used by scenario data and the configuration surface
_CONFIG_ALIASES = {
    "timeScale": "time_scale",
    "trailLength": "trail_length",
    "trailFade": "trail_fade",
    "collisionEnabled": "collision_enabled",
    "showTrails": "show_trails",
    "showGrid": "show_grid",
    "waveAmplitude": "wave_amplitude",
    "waveFrequency": "wave_frequency",
}


@dataclass(frozen=True)
class SimulationConfig:
    """
    Options consumed read-only by the core each step.

    Only G, time_scale, softening and trail_length affect the integrator.
    collision_enabled switches the optional merge pass in the loop driver;
    the remaining fields are passed through for the renderer.
    """
    G: float = 0.5
    time_scale: float = 5.0
    trail_length: int = 100
    trail_fade: bool = True
    collision_enabled: bool = False
    softening: float = 5.0
    show_trails: bool = True
    show_grid: bool = False
    wave_amplitude: float = 0.0
    wave_frequency: float = 0.02

    def __post_init__(self):
        length = int(clamp(int(self.trail_length), 0, MAX_TRAIL_LENGTH))
        object.__setattr__(self, "trail_length", length)

    def with_overrides(self, overrides: Optional[Mapping[str, Any]] = None, **kwargs) -> "SimulationConfig":
        """
        Return a copy with the given options replaced.

        Keys may use snake_case field names or the camelCase names of the
        configuration surface. Unknown keys raise KeyError.
        """
        merged = dict(overrides or {})
        merged.update(kwargs)
        names = {f.name for f in dataclasses.fields(self)}
        changes = {}
        for key, value in merged.items():
            name = _CONFIG_ALIASES.get(key, key)
            if name not in names:
                raise KeyError(f"Unknown simulation option: {key!r}")
            changes[name] = value
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = SimulationConfig()
