"""Immutable 2D vector value type and its arithmetic."""

import math

from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """A point or direction on the force-platform plane."""

    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


ZERO = Vector2(0.0, 0.0)
UNIT_X = Vector2(1.0, 0.0)
UNIT_Y = Vector2(0.0, 1.0)


def add(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a.x + b.x, a.y + b.y)


def subtract(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a.x - b.x, a.y - b.y)


def scale(v: Vector2, factor: float) -> Vector2:
    return Vector2(v.x * factor, v.y * factor)


def dot(a: Vector2, b: Vector2) -> float:
    return a.x * b.x + a.y * b.y


def length(v: Vector2) -> float:
    return math.sqrt(v.x * v.x + v.y * v.y)


def distance(a: Vector2, b: Vector2) -> float:
    """Euclidean distance between two points."""
    return length(subtract(a, b))
