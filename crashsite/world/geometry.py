"""Planar helpers shared by the placement and carving stages."""
from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

from pygame.math import Vector2


Vector = Tuple[float, float]


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    return Vector2(a[0], a[1]).distance_to((b[0], b[1]))


def within(a: Sequence[float], b: Sequence[float], radius: float) -> bool:
    """True when ``b`` is strictly closer than ``radius`` to ``a``."""
    return Vector2(a[0], a[1]).distance_squared_to((b[0], b[1])) < radius * radius


def nearest_index(point: Sequence[float], candidates: Iterable[Sequence[float]]) -> int:
    """Index of the closest candidate; the first one wins ties."""
    origin = Vector2(point[0], point[1])
    best = -1
    best_distance = math.inf
    for index, candidate in enumerate(candidates):
        candidate_distance = origin.distance_squared_to((candidate[0], candidate[1]))
        if candidate_distance < best_distance:
            best = index
            best_distance = candidate_distance
    return best


def sample_segment(start: Sequence[float], end: Sequence[float], step: float) -> List[Vector]:
    """Points from ``start`` to ``end`` inclusive, no more than ``step`` apart."""
    a = Vector2(start[0], start[1])
    b = Vector2(end[0], end[1])
    steps = max(1, math.ceil(a.distance_to(b) / step))
    points: List[Vector] = []
    for i in range(steps + 1):
        point = a.lerp(b, i / steps)
        points.append((point.x, point.y))
    return points


__all__ = ["distance", "within", "nearest_index", "sample_segment"]
