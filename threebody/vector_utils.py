#!/usr/bin/env python3
"""
Vector helpers for 2D operations.

Vector2 is an immutable value type; every operation returns a new vector.
Only real scalars may scale a vector, there is no component-wise product.
"""
import math
import numbers
from dataclasses import dataclass
from typing import Iterator


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@dataclass(frozen=True)
class Vector2:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_polar(cls, r: float, angle: float) -> "Vector2":
        return cls(math.cos(angle) * r, math.sin(angle) * r)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: "Vector2") -> "Vector2":
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def __mul__(self, s: float) -> "Vector2":
        if isinstance(s, Vector2) or not isinstance(s, numbers.Real):
            return NotImplemented
        return Vector2(self.x * s, self.y * s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> "Vector2":
        if isinstance(s, Vector2) or not isinstance(s, numbers.Real):
            return NotImplemented
        return Vector2(self.x / s, self.y / s)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vector2":
        l = self.length()
        if l == 0:
            return Vector2(0.0, 0.0)
        return Vector2(self.x / l, self.y / l)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y
