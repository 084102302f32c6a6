#!/usr/bin/env python3
"""
Reflective satellite.

A small planet that falls through the primaries' gravity field without
pulling back on them, and whose colour is the light it "reflects": an
inverse-square weighted mix of the primary colours, smoothed over time.

Coupling is one-directional. Satellite.update() reads Body positions, masses
and colours and writes only the satellite's own fields.
"""
import math
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Sequence, Tuple

from .config import SimulationConfig
from .constants import (
    SATELLITE_RADIUS,
    SATELLITE_RESPAWN_SPEED_SPAN,
    SATELLITE_RESPAWN_SPREAD,
    SATELLITE_SPAWN_MARGIN,
    SATELLITE_SPEED_MIN,
    SATELLITE_SPEED_SPAN,
    SATELLITE_TRAIL_CAPACITY,
    WHITE,
)
from .data_models import Body, Color, resize_trail
from .vector_utils import Vector2, clamp, lerp


def interpolate_color(color1: Color, color2: Color, fraction: float) -> Color:
    """Per-channel linear blend, truncated to integers."""
    return tuple(
        int(clamp(lerp(c1, c2, fraction), 0, 255))
        for c1, c2 in zip(color1, color2)
    )


def reflected_color(bodies: Sequence[Body], position: Vector2) -> Tuple[float, float, float]:
    """
    Inverse-square weighted average of body colours as seen from position.

    Returns white when there is nothing to reflect or the weights degenerate.
    A body sitting exactly on position dominates completely.
    """
    if not bodies:
        return WHITE
    weights = []
    for body in bodies:
        dist_sq = (body.position - position).dot(body.position - position)
        if dist_sq == 0:
            return tuple(float(c) for c in body.color)
        weights.append(1.0 / dist_sq)
    total = sum(weights)
    if not total > 0 or math.isinf(total):
        return WHITE
    r = g = b = 0.0
    for body, weight in zip(bodies, weights):
        w = weight / total
        r += body.color[0] * w
        g += body.color[1] * w
        b += body.color[2] * w
    return (r, g, b)


@dataclass
class Satellite:
    """
    Massless body that responds to gravity and mixes the primaries' light.

    Fields:
    - position, velocity: same units as Body
    - radius: fixed render radius
    - current_color: smoothed reflected colour
    - trail: Deque of past positions, index 0 is the most recent
    """
    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)
    radius: float = SATELLITE_RADIUS
    current_color: Color = WHITE
    trail: Deque[Vector2] = field(default_factory=lambda: deque(maxlen=SATELLITE_TRAIL_CAPACITY))

    def response_force(self, bodies: Sequence[Body], config: SimulationConfig) -> Vector2:
        """Summed pull of the bodies, each capped at config.response_force_cap."""
        floor = config.min_distance * config.response_range_factor
        total = Vector2(0.0, 0.0)
        for body in bodies:
            diff = body.position - self.position
            distance = max(diff.length(), floor)
            direction = diff / distance
            force = min(
                body.mass * config.gravity_strength * config.response_amplification / (distance * distance),
                config.response_force_cap,
            )
            total = total + direction * force
        return total

    def update(self, bodies: Sequence[Body], config: SimulationConfig) -> None:
        self.trail = resize_trail(self.trail, config.satellite_trail_capacity)
        self.trail.appendleft(self.position)

        target = reflected_color(bodies, self.position)
        self.current_color = interpolate_color(self.current_color, target, config.color_blend)

        self.velocity = self.velocity + self.response_force(bodies, config) * config.response_force_multiplier
        self.velocity = self.velocity * (1.0 - config.damping_rate)
        self.position = self.position + self.velocity

    def light_direction(self, bodies: Sequence[Body]) -> Optional[Vector2]:
        """Unit vector toward the nearest body, used to offset the highlight."""
        if not bodies:
            return None
        nearest = min(bodies, key=lambda b: (b.position - self.position).length())
        return (nearest.position - self.position).normalized()


def spawn_satellite(width: float, height: float, rng: Optional[random.Random] = None,
                    trail_capacity: int = SATELLITE_TRAIL_CAPACITY) -> Satellite:
    """Place a satellite anywhere in the viewport with a gentle random drift."""
    rng = rng or random.Random()
    margin = SATELLITE_SPAWN_MARGIN
    x = margin + rng.random() * max(width - 2 * margin, 0.0)
    y = margin + rng.random() * max(height - 2 * margin, 0.0)
    return Satellite(
        position=Vector2(x, y),
        velocity=Vector2.from_polar(
            rng.random() * SATELLITE_SPEED_SPAN + SATELLITE_SPEED_MIN,
            rng.random() * 2.0 * math.pi,
        ),
        trail=deque(maxlen=trail_capacity),
    )


def spawn_satellite_near(center: Vector2, rng: Optional[random.Random] = None,
                         trail_capacity: int = SATELLITE_TRAIL_CAPACITY) -> Satellite:
    """Respawn a satellite within SATELLITE_RESPAWN_SPREAD of center."""
    rng = rng or random.Random()
    spread = SATELLITE_RESPAWN_SPREAD
    offset = Vector2(rng.random() * 2 * spread - spread, rng.random() * 2 * spread - spread)
    return Satellite(
        position=center + offset,
        velocity=Vector2.from_polar(
            rng.random() * SATELLITE_RESPAWN_SPEED_SPAN,
            rng.random() * 2.0 * math.pi,
        ),
        trail=deque(maxlen=trail_capacity),
    )
