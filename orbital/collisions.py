#!/usr/bin/env python3
"""
Collision handling for the Orbital simulator.

The integrator only skips force between pairs closer than the minimum
interaction distance. When collisions are enabled in SimulationConfig the loop
driver additionally runs handle_collisions() after each substep:

- Two bodies whose centers are within the sum of their radii merge into one.
- The merge is perfectly inelastic: mass adds, momentum is conserved and the
  merged position is the mass-weighted centroid.
- The heavier body keeps its id, color and density; radius follows from
  radius_of() for the combined mass.
- If either body is fixed the merged body is fixed in place at the fixed
  body's position and keeps its velocity.
"""
import dataclasses
import logging
from typing import List, Sequence, Tuple

from .data_models import Body
from .vector_utils import Vector2, vec_dist_sq

logger = logging.getLogger(__name__)


def handle_collisions(bodies: Sequence[Body]) -> Tuple[List[Body], List[Tuple[str, str]]]:
    """
    Detect and resolve overlapping bodies.

    Returns the new body list and the (survivor_id, absorbed_id) pairs merged.
    """
    current = list(bodies)
    merged_pairs: List[Tuple[str, str]] = []
    if len(current) < 2:
        return current, merged_pairs

    removed = set()
    n = len(current)
    for i in range(n):
        if i in removed:
            continue
        for j in range(i + 1, n):
            if j in removed:
                continue
            bi = current[i]
            bj = current[j]
            r_sum = bi.radius + bj.radius
            if vec_dist_sq(bi.position, bj.position) > r_sum * r_sum:
                continue

            merged = _merge_pair(bi, bj)
            # the survivor takes the slot of the earlier body to keep draw order stable
            current[i] = merged
            removed.add(j)
            absorbed = bj.id if merged.id == bi.id else bi.id
            merged_pairs.append((merged.id, absorbed))
            logger.debug("Merged body %s into %s", absorbed, merged.id)

    if not removed:
        return current, merged_pairs
    return [b for k, b in enumerate(current) if k not in removed], merged_pairs


def _merge_pair(bi: Body, bj: Body) -> Body:
    # Ensure bi is heavier for stable replacement
    if bj.mass > bi.mass:
        bi, bj = bj, bi

    m_total = bi.mass + bj.mass
    fixed = [b for b in (bi, bj) if b.is_fixed]
    if fixed:
        anchor = fixed[0]
        new_pos = anchor.position
        new_vel = anchor.velocity
    else:
        new_pos = Vector2((bi.position.x * bi.mass + bj.position.x * bj.mass) / m_total,
                          (bi.position.y * bi.mass + bj.position.y * bj.mass) / m_total)
        new_vel = Vector2((bi.velocity.x * bi.mass + bj.velocity.x * bj.mass) / m_total,
                          (bi.velocity.y * bi.mass + bj.velocity.y * bj.mass) / m_total)

    return dataclasses.replace(
        bi,
        mass=m_total,
        position=new_pos,
        velocity=new_vel,
        is_fixed=bool(fixed),
        trail=(),
    )
