"""Deterministic coordinate noise used to blend biomes and vary terrain."""
from __future__ import annotations

import math


def hash_noise(x: float, y: float) -> float:
    """Trig hash noise in ``(-1, 1)``; the sign follows ``sin``.

    Not gradient noise: neighbouring inputs are uncorrelated. Callers only
    compare it against a threshold to pick occasional overrides.
    """
    return math.fmod(math.sin(x * 12.9898 + y * 78.233) * 43758.5453, 1.0)


__all__ = ["hash_noise"]
