#!/usr/bin/env python3
"""
Core Physics Engine for the Orbital simulator

Responsibilities
- Compute pairwise gravitational forces with softening (exact O(N^2) summation,
  each unordered pair visited once).
- Advance body states with semi-implicit (symplectic) Euler: velocity first,
  then position from the updated velocity.
- Record decimated trail history and contain numerical failures per body.
- Provide small helpers for common orbital computations and conserved-quantity
  diagnostics.

Numerical notes
- Force law: f = G * m_i * m_j / (r^2 + eps^2), applied along the unit vector
  between the pair. Pairs closer than MIN_INTERACTION_DISTANCE are skipped;
  this is the only short-range guard in the integrator.
- Forces are accumulated per pair with equal and opposite contributions, so
  total momentum is conserved up to rounding when no body is fixed.
- A body whose updated position or velocity is not finite keeps its previous
  state for that step. One diverging body never corrupts the rest.

This module is stateless: advance() is a pure function of its inputs.
"""

import dataclasses
import logging
import math
from typing import List, Sequence

import numpy as np

from .constants import MIN_INTERACTION_DISTANCE, TRAIL_MIN_SPACING_SQ
from .data_models import Body, SimulationConfig
from .vector_utils import Vector2, vec_dist_sq, vec_is_finite

logger = logging.getLogger(__name__)


def compute_forces(bodies: Sequence[Body], config: SimulationConfig) -> np.ndarray:
    """
    Compute the net gravitational force on every body.

    For each unordered pair (i, j) with d = p_j - p_i and r = |d|:

        F_i += f * d / r,   F_j -= f * d / r,   f = G m_i m_j / (r^2 + eps^2)

    Pairs with r < MIN_INTERACTION_DISTANCE contribute nothing. Fixed bodies
    take part like any other body.

    Args:
        bodies: Bodies to evaluate (only position and mass are read).
        config: Supplies G and softening.

    Returns:
        (N, 2) array of forces in the same order as the input.
    """
    n = len(bodies)
    forces = np.zeros((n, 2), dtype=float)
    if n < 2:
        return forces

    positions = np.array([b.position for b in bodies], dtype=float)
    masses = np.array([b.mass for b in bodies], dtype=float)

    i_idx, j_idx = np.triu_indices(n, k=1)
    delta = positions[j_idx] - positions[i_idx]
    dist_sq = delta[:, 0] * delta[:, 0] + delta[:, 1] * delta[:, 1]
    dist = np.sqrt(dist_sq)

    active = dist >= MIN_INTERACTION_DISTANCE
    if not np.any(active):
        return forces
    i_idx, j_idx = i_idx[active], j_idx[active]
    delta, dist_sq, dist = delta[active], dist_sq[active], dist[active]

    eps_sq = config.softening * config.softening
    magnitude = config.G * (masses[i_idx] * masses[j_idx]) / (dist_sq + eps_sq)
    pair_force = delta * (magnitude / dist)[:, np.newaxis]

    np.add.at(forces, i_idx, pair_force)
    np.add.at(forces, j_idx, -pair_force)
    return forces


def advance(bodies: Sequence[Body], config: SimulationConfig, dt: float) -> List[Body]:
    """
    Advance all bodies by one fixed substep.

    Velocity is integrated first (v' = v + a dt s), then position from the
    updated velocity (p' = p + v' dt s), where s is config.time_scale.
    Fixed bodies keep position and velocity. A trail sample is appended when
    the new position is more than sqrt(TRAIL_MIN_SPACING_SQ) from the last one.
    Every returned trail, moved or not, is cut to config.trail_length from the
    front.

    Args:
        bodies: Current state; never modified.
        config: Simulation options.
        dt: Substep length in seconds (> 0).

    Returns:
        New list of bodies in the same order.
    """
    if not bodies:
        return list(bodies)

    forces = compute_forces(bodies, config)
    step = dt * config.time_scale
    trail_length = config.trail_length

    result: List[Body] = []
    for body, force in zip(bodies, forces):
        if body.is_fixed:
            result.append(_with_bounded_trail(body, trail_length))
            continue

        ax = force[0] / body.mass
        ay = force[1] / body.mass
        vx = body.velocity.x + ax * step
        vy = body.velocity.y + ay * step
        px = body.position.x + vx * step
        py = body.position.y + vy * step

        if not (vec_is_finite((px, py)) and vec_is_finite((vx, vy))):
            logger.debug("Discarding non-finite update for body %s", body.id)
            result.append(_with_bounded_trail(body, trail_length))
            continue

        new_pos = Vector2(float(px), float(py))
        trail = body.trail
        if not trail or vec_dist_sq(new_pos, trail[-1]) > TRAIL_MIN_SPACING_SQ:
            trail = trail + (new_pos,)
        trail = _bound_trail(trail, trail_length)

        result.append(dataclasses.replace(
            body,
            position=new_pos,
            velocity=Vector2(float(vx), float(vy)),
            trail=trail,
        ))
    return result


def _bound_trail(trail, trail_length: int):
    if len(trail) <= trail_length:
        return trail
    return trail[len(trail) - trail_length:] if trail_length > 0 else ()


def _with_bounded_trail(body: Body, trail_length: int) -> Body:
    """Body unchanged except for a trail cut to trail_length; same object if already within it."""
    if len(body.trail) <= trail_length:
        return body
    return dataclasses.replace(body, trail=_bound_trail(body.trail, trail_length))


def total_momentum(bodies: Sequence[Body]) -> Vector2:
    """Sum of m * v over all bodies."""
    px = sum(b.mass * b.velocity.x for b in bodies)
    py = sum(b.mass * b.velocity.y for b in bodies)
    return Vector2(px, py)


def kinetic_energy(bodies: Sequence[Body]) -> float:
    return sum(0.5 * b.mass * (b.velocity.x ** 2 + b.velocity.y ** 2) for b in bodies)


def potential_energy(bodies: Sequence[Body], config: SimulationConfig) -> float:
    """
    Potential energy consistent with the softened force law.

    For f(r) = G m m / (r^2 + eps^2) the potential is
    -G m m / eps * (pi/2 - atan(r / eps)), reducing to -G m m / r when eps is 0.
    Pairs inside MIN_INTERACTION_DISTANCE are ignored, as in compute_forces.
    """
    eps = config.softening
    energy = 0.0
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            bi, bj = bodies[i], bodies[j]
            r = math.sqrt(vec_dist_sq(bi.position, bj.position))
            if r < MIN_INTERACTION_DISTANCE:
                continue
            gmm = config.G * bi.mass * bj.mass
            if eps > 0:
                energy -= gmm / eps * (math.pi / 2 - math.atan(r / eps))
            else:
                energy -= gmm / r
    return energy


def circular_orbit_velocity(G: float, central_mass: float, orbital_radius: float) -> float:
    """
    Speed of a circular orbit around a central mass (unsoftened).

    G * M / r = v^2 / r, therefore v = sqrt(G * M / r).
    """
    if orbital_radius <= 0:
        return 0.0
    return math.sqrt(G * central_mass / orbital_radius)


def orbital_period(G: float, central_mass: float, orbital_radius: float) -> float:
    """Period of a circular orbit: 2 pi r / v."""
    v = circular_orbit_velocity(G, central_mass, orbital_radius)
    if v == 0:
        return math.inf
    return 2.0 * math.pi * orbital_radius / v
