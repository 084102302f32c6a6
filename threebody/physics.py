#!/usr/bin/env python3
"""
Core Physics Engine for the Three Body Simulator

Responsibilities
- Compute pairwise forces between the primary bodies with a clamped
  inverse-square law and apply them as velocity deltas.
- Advance body states with explicit Euler integration (one step per tick).
- Spawn a fresh set of bodies for a new epoch.

Force law
    distance  = max(|a - b|, min_distance)
    magnitude = min(m_a * m_b * G / distance^2, force_cap) * force_scale

The magnitude is applied as a velocity change, not divided by mass: heavier
bodies do not resist acceleration. This is tuned for looks, not realism.

Numerical notes
- The min_distance floor removes the singularity at contact; force_cap bounds
  the result for near-singular configurations.
- Each pair applies equal and opposite deltas, so momentum (as the sum of
  velocities) is conserved to floating-point precision. Pair iteration order
  can change the last bits of the sum between runs; that is accepted for a
  visual simulation.
"""

import math
import random
from collections import deque
from typing import List, Optional, Sequence, Tuple

from .config import SimulationConfig
from .constants import BODY_COUNT, BODY_MASS_MIN, BODY_MASS_SPAN, BODY_SPEED_MIN, BODY_SPEED_SPAN
from .data_models import Body
from .vector_utils import Vector2


def effective_distance(diff: Vector2, min_distance: float) -> float:
    """Separation used by the force law; never below min_distance."""
    return max(diff.length(), min_distance)


def force_magnitude(mass_a: float, mass_b: float, distance: float, config: SimulationConfig) -> float:
    raw = mass_a * mass_b * config.gravity_strength / (distance * distance)
    return min(raw, config.force_cap) * config.force_scale


class GravitySolver:
    """
    Pairwise gravity among the primary bodies.

    The satellite is never passed in here; it reads body state on its own and
    contributes no force.
    """

    def pair_impulse(self, a: Body, b: Body, config: SimulationConfig) -> Vector2:
        """
        Velocity delta applied to b for the pair (a, b); a receives the negation.

        The returned vector points from b toward a, so adding it to b and
        subtracting it from a pulls the two together.
        """
        diff = a.position - b.position
        distance = effective_distance(diff, config.min_distance)
        direction = diff / distance
        return direction * force_magnitude(a.mass, b.mass, distance, config)

    def apply(self, bodies: Sequence[Body], config: SimulationConfig) -> None:
        """
        Apply one tick of pairwise forces in place, before position integration.

        Only alive bodies take part.
        """
        alive = [b for b in bodies if b.alive]
        n = len(alive)
        for i in range(n):
            for j in range(i + 1, n):
                a = alive[i]
                b = alive[j]
                impulse = self.pair_impulse(a, b, config)
                a.velocity = a.velocity - impulse
                b.velocity = b.velocity + impulse


def integrate_bodies(bodies: Sequence[Body], trail_capacity: Optional[int] = None) -> None:
    """Record trails and move every body by its velocity."""
    for body in bodies:
        body.update(trail_capacity)


def spawn_bodies(width: float, height: float, config: SimulationConfig,
                 rng: Optional[random.Random] = None) -> List[Body]:
    """
    Create a fresh set of bodies for a new epoch.

    Positions are uniform within [margin, dimension - margin] on each axis,
    masses uniform in [BODY_MASS_MIN, BODY_MASS_MIN + BODY_MASS_SPAN), and
    velocities polar-initialised with a uniform heading.
    """
    rng = rng or random.Random()
    margin = config.spawn_margin_px(width, height)
    spawn_w = max(width - 2 * margin, 0.0)
    spawn_h = max(height - 2 * margin, 0.0)
    bodies = []
    for i in range(BODY_COUNT):
        position = Vector2(margin + rng.random() * spawn_w, margin + rng.random() * spawn_h)
        velocity = Vector2.from_polar(
            rng.random() * BODY_SPEED_SPAN + BODY_SPEED_MIN,
            rng.random() * 2.0 * math.pi,
        )
        bodies.append(Body(
            position=position,
            velocity=velocity,
            mass=rng.random() * BODY_MASS_SPAN + BODY_MASS_MIN,
            color=config.colors[i],
            trail=deque(maxlen=config.trail_capacity),
        ))
    return bodies


def total_velocity(bodies: Sequence[Body]) -> Tuple[float, float]:
    """Sum of body velocities; unchanged by GravitySolver.apply up to rounding."""
    vx = sum(b.velocity.x for b in bodies)
    vy = sum(b.velocity.y for b in bodies)
    return (vx, vy)
