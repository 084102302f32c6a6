#!/usr/bin/env python3
"""
Escape detection for the primary bodies.

Two reset policies are available, selected by SimulationConfig.reset_policy:
- "extent" (default): reset when the bodies' bounding box grows wider or
  taller than escape_multiplier * min(viewport width, viewport height).
- "visible": reset when fewer than two bodies remain inside the viewport grown
  by visible_margin on every side.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from .config import SimulationConfig
from .data_models import Body
from .vector_utils import Vector2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundingBox:
    left: float
    right: float
    top: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Vector2:
        return Vector2((self.left + self.right) / 2, (self.top + self.bottom) / 2)


def bounding_box(positions: Iterable[Vector2]) -> BoundingBox:
    pts = list(positions)
    if not pts:
        raise ValueError("bounding_box() needs at least one position")
    xs = [p.x for p in pts]
    ys = [p.y for p in pts]
    return BoundingBox(left=min(xs), right=max(xs), top=min(ys), bottom=max(ys))


class EscapeDetector:
    """Decides after integration whether the current epoch is over."""

    def escape_limit(self, viewport: Tuple[float, float], config: SimulationConfig) -> float:
        return min(viewport[0], viewport[1]) * config.escape_multiplier

    def should_reset(self, bodies: Sequence[Body], viewport: Tuple[float, float],
                     config: SimulationConfig) -> bool:
        alive = [b for b in bodies if b.alive]
        if config.reset_policy == "visible":
            return self._visible_count(alive, viewport, config) < 2
        if not alive:
            return True
        box = bounding_box(b.position for b in alive)
        limit = self.escape_limit(viewport, config)
        escaped = box.width > limit or box.height > limit
        if escaped:
            logger.debug("Escape: extent %.1fx%.1f exceeds limit %.1f", box.width, box.height, limit)
        return escaped

    @staticmethod
    def _visible_count(bodies: Sequence[Body], viewport: Tuple[float, float],
                       config: SimulationConfig) -> int:
        w, h = viewport
        return sum(1 for b in bodies if b.is_visible(w, h, config.visible_margin))
