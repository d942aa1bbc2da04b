#!/usr/bin/env python3
"""
Built-in scenarios: named initial-condition generators.

Each Scenario produces a fresh list of bodies (new ids every call) and a
partial set of configuration overrides applied on top of the defaults when
the scenario is loaded. Generators that scatter bodies randomly accept an
optional random.Random so results can be reproduced.
"""
import math
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .constants import BODY_COLORS, MAX_TRAIL_LENGTH
from .data_models import Body, create_body
from .physics import circular_orbit_velocity

AMBER = (251, 191, 36)
SKY = (56, 189, 248)
RED = (248, 113, 113)
VIOLET = (167, 139, 250)
PINK = (244, 114, 182)
EMERALD = (52, 211, 153)
WHITE = (255, 255, 255)


@dataclass(frozen=True)
class Scenario:
    name: str
    generator: Callable[[random.Random], List[Body]]
    config: Dict[str, Any] = field(default_factory=dict)

    def get_bodies(self, rng: Optional[random.Random] = None) -> List[Body]:
        return self.generator(rng or random.Random())


def template_solar_system(rng: random.Random) -> List[Body]:
    return [
        create_body((0, 0), (0, 0), 5000, AMBER, is_fixed=True),
        create_body((200, 0), (0, 3.5), 50, SKY),
        create_body((350, 0), (0, 2.6), 200, RED),
        create_body((600, 0), (0, 2.0), 150, VIOLET),
    ]


def template_sun_earth_moon(rng: random.Random) -> List[Body]:
    G = 0.5
    sun_mass, earth_mass, moon_mass = 5000, 200, 5
    earth_dist, moon_dist = 400, 30
    v_earth = circular_orbit_velocity(G, sun_mass, earth_dist)
    v_moon_rel = circular_orbit_velocity(G, earth_mass, moon_dist)
    return [
        create_body((0, 0), (0, 0), sun_mass, AMBER, is_fixed=True),
        create_body((earth_dist, 0), (0, v_earth), earth_mass, SKY),
        create_body((earth_dist + moon_dist, 0), (0, v_earth + v_moon_rel), moon_mass, (226, 232, 240)),
    ]


def template_butterfly(rng: random.Random) -> List[Body]:
    """
    Pythagorean three-body problem (masses 3, 4, 5 on a 3-4-5 triangle), each
    body paired with a ghost offset by a tiny amount to show divergence.
    """
    offset = 0.01
    scale = 50
    pairs = [
        (3 * scale, 0, 300, RED, (239, 68, 68)),
        (-1 * scale, 3 * scale, 400, SKY, (14, 165, 233)),
        (-1 * scale, -3 * scale, 500, EMERALD, (16, 185, 129)),
    ]
    bodies = []
    for x, y, mass, color, ghost_color in pairs:
        bodies.append(create_body((x, y), (0, 0), mass, color))
        bodies.append(create_body((x + offset, y + offset), (0, 0), mass, ghost_color))
    return bodies


def template_figure_eight(rng: random.Random) -> List[Body]:
    """Equal-mass figure-eight periodic solution (Chenciner-Montgomery), scaled."""
    scale = 150
    v_scale = 1.4
    p1 = (0.97000436 * scale, -0.24308753 * scale)
    v3 = (0.93240737 * v_scale, 0.86473146 * v_scale)
    v1 = (-v3[0] / 2, -v3[1] / 2)
    return [
        create_body(p1, v1, 100, PINK),
        create_body((-p1[0], -p1[1]), v1, 100, SKY),
        create_body((0, 0), v3, 100, AMBER),
    ]


def _galaxy(rng: random.Random, core_pos, core_vel, core_color, star_color) -> List[Body]:
    bodies = [create_body(core_pos, core_vel, 2000, core_color)]
    for _ in range(60):
        angle = rng.random() * math.pi * 2
        dist = 40 + rng.random() * 100
        v = math.sqrt(1000 / dist)
        bodies.append(create_body(
            (core_pos[0] + math.cos(angle) * dist, core_pos[1] + math.sin(angle) * dist),
            (core_vel[0] - math.sin(angle) * v, core_vel[1] + math.cos(angle) * v),
            5,
            star_color,
        ))
    return bodies


def template_galaxy_collision(rng: random.Random) -> List[Body]:
    return (_galaxy(rng, (-300, -150), (1.5, 0.5), AMBER, (252, 211, 77))
            + _galaxy(rng, (300, 150), (-1.5, -0.5), SKY, (125, 211, 252)))


def template_lagrange(rng: random.Random) -> List[Body]:
    """Trojan bodies at the L4 and L5 points of a planet around a fixed sun."""
    sun_mass = 5000
    r = 350
    v = circular_orbit_velocity(0.5, sun_mass, r)
    bodies = [
        create_body((0, 0), (0, 0), sun_mass, AMBER, is_fixed=True),
        create_body((r, 0), (0, v), 200, SKY),
    ]
    for angle, color in ((math.pi / 3, VIOLET), (-math.pi / 3, PINK)):
        bodies.append(create_body(
            (r * math.cos(angle), r * math.sin(angle)),
            (-v * math.sin(angle), v * math.cos(angle)),
            10,
            color,
        ))
    return bodies


def template_grid_collapse(rng: random.Random) -> List[Body]:
    grid_size = 6
    spacing = 80
    offset = grid_size * spacing / 2
    return [
        create_body((i * spacing - offset, j * spacing - offset), (0, 0), 100,
                    BODY_COLORS[(i + j) % len(BODY_COLORS)])
        for i in range(grid_size)
        for j in range(grid_size)
    ]


def template_random_cluster(rng: random.Random) -> List[Body]:
    bodies = [create_body((0, 0), (0, 0), 3000, WHITE, is_fixed=True)]
    for i in range(30):
        angle = rng.random() * math.pi * 2
        dist = 150 + rng.random() * 400
        v = math.sqrt(1500 / dist)
        bodies.append(create_body(
            (math.cos(angle) * dist, math.sin(angle) * dist),
            (-math.sin(angle) * v, math.cos(angle) * v),
            10 + rng.random() * 30,
            BODY_COLORS[i % len(BODY_COLORS)],
        ))
    return bodies


def template_binary_star(rng: random.Random) -> List[Body]:
    return [
        create_body((-100, 0), (0, 2.5), 1000, RED),
        create_body((100, 0), (0, -2.5), 1000, SKY),
        create_body((0, 300), (-2, 0), 20, VIOLET),
        create_body((0, -300), (2, 0), 20, AMBER),
    ]


def template_collision_course(rng: random.Random) -> List[Body]:
    bodies = [
        create_body((-400, -100), (2, 0.5), 500, PINK),
        create_body((400, 100), (-2, -0.5), 500, EMERALD),
    ]
    for i in range(20):
        bodies.append(create_body(
            (-50 + rng.random() * 100, -50 + rng.random() * 100),
            (rng.random() - 0.5, rng.random() - 0.5),
            5,
            BODY_COLORS[i % len(BODY_COLORS)],
        ))
    return bodies


SCENARIOS: List[Scenario] = [
    Scenario("Solar System (Simple)", template_solar_system,
             {"G": 0.5, "trail_length": 200, "trail_fade": True}),
    Scenario("Sun, Earth & Moon", template_sun_earth_moon,
             {"G": 0.5, "trail_length": 600, "time_scale": 4.0, "trail_fade": True}),
    Scenario("Chaos: Butterfly Effect", template_butterfly,
             {"G": 0.8, "trail_length": MAX_TRAIL_LENGTH, "trail_fade": False,
              "time_scale": 2.0, "collision_enabled": False}),
    Scenario("Three-Body Figure 8", template_figure_eight,
             {"G": 1.0, "trail_length": 500, "time_scale": 3.0, "trail_fade": True}),
    Scenario("Galaxy Collision", template_galaxy_collision,
             {"G": 0.5, "trail_length": 50, "collision_enabled": True, "trail_fade": True}),
    Scenario("Lagrange Points", template_lagrange,
             {"G": 0.5, "trail_length": 600, "trail_fade": True}),
    Scenario("Grid Collapse", template_grid_collapse,
             {"G": 0.5, "collision_enabled": True, "time_scale": 2.0, "trail_fade": True}),
    Scenario("Random Cluster", template_random_cluster),
    Scenario("Binary Star System", template_binary_star,
             {"G": 0.8, "trail_fade": True}),
    Scenario("Collision Course", template_collision_course,
             {"collision_enabled": True, "G": 0.5, "trail_fade": True}),
]


def scenario_names() -> List[str]:
    return [s.name for s in SCENARIOS]


def scenario_by_name(name: str) -> Scenario:
    for scenario in SCENARIOS:
        if scenario.name == name:
            return scenario
    raise KeyError(f"Unknown scenario: {name!r}")


def random_scenario(rng: Optional[random.Random] = None) -> Scenario:
    return (rng or random).choice(SCENARIOS)
