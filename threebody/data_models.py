#!/usr/bin/env python3
"""
Data models for the Three Body Simulator.

This module defines the Body dataclass shared between physics, rendering, and
UI, plus the read-only snapshot types handed to the renderer every tick.

Units and usage
- position is in viewport pixels, velocity in pixels per tick, mass is unitless.
- trail stores past positions most-recent-first; its length never exceeds the
  capacity passed to update().
- Bodies are mutated only by SimulationLoop.step(); the renderer reads
  RenderSnapshot values, never live Body instances.
"""
import math
from collections import deque
from itertools import islice
from dataclasses import dataclass, field
from typing import Deque, Optional, Tuple

from .constants import DEFAULT_TRAIL_CAPACITY
from .vector_utils import Vector2

Color = Tuple[int, int, int]


def resize_trail(trail: Deque[Vector2], capacity: int) -> Deque[Vector2]:
    """Return trail bounded to capacity, keeping the most recent points."""
    if trail.maxlen == capacity:
        return trail
    return deque(islice(trail, capacity), maxlen=capacity)


@dataclass
class Body:
    """
    One of the three primary gravitating masses.

    Fields:
    - position: 2D position in pixels
    - velocity: 2D velocity in pixels per tick
    - mass: strictly positive mass
    - color: RGB tuple used for rendering
    - trail: Deque of past positions, index 0 is the most recent
    - alive: whether the body takes part in gravity pairing
    """
    position: Vector2
    velocity: Vector2
    mass: float
    color: Color = (255, 255, 255)
    trail: Deque[Vector2] = field(default_factory=lambda: deque(maxlen=DEFAULT_TRAIL_CAPACITY))
    alive: bool = True

    def __post_init__(self):
        if not self.mass > 0:
            raise ValueError(f"Body mass must be positive, got {self.mass!r}")

    @property
    def radius_basis(self) -> float:
        return math.sqrt(self.mass)

    def add_trail_point(self, trail_capacity: Optional[int] = None) -> None:
        """Push the current position to the front of the trail."""
        if trail_capacity is not None:
            self.trail = resize_trail(self.trail, trail_capacity)
        self.trail.appendleft(self.position)

    def update(self, trail_capacity: Optional[int] = None) -> None:
        """Record the trail point, then advance position by one explicit Euler step."""
        self.add_trail_point(trail_capacity)
        self.position = self.position + self.velocity

    def is_visible(self, width: float, height: float, margin: float) -> bool:
        x, y = self.position
        return -margin < x < width + margin and -margin < y < height + margin


@dataclass(frozen=True)
class BodyView:
    position: Vector2
    radius_basis: float
    color: Color
    trail: Tuple[Vector2, ...]


@dataclass(frozen=True)
class SatelliteView:
    position: Vector2
    radius: float
    color: Color
    trail: Tuple[Vector2, ...]
    light_direction: Optional[Vector2] = None


@dataclass(frozen=True)
class CameraView:
    position: Vector2
    zoom: float


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything the renderer needs for one frame."""
    bodies: Tuple[BodyView, ...]
    satellite: Optional[SatelliteView]
    camera: CameraView
    stats_text: str = ""
    reset: bool = False
    tick: int = 0
