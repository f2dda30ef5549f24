"""Small math helpers shared by the garden systems."""

from __future__ import annotations

import math
from typing import NamedTuple


class Point(NamedTuple):
    """An immutable 2D canvas coordinate (pixels, y grows downward)."""

    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


def clamp_probability(value: float) -> float:
    """Clamp a delta-scaled chance into [0, 1].

    ``rate * delta`` exceeds 1 for large deltas (a backgrounded window), and a
    negative delta must never produce a negative chance.
    """
    if value <= 0.0:
        return 0.0
    if value >= 1.0:
        return 1.0
    return value


__all__ = ["Point", "clamp_probability"]
