from __future__ import annotations

from crashsite.world import WorldMap, generate_world

__all__ = ["WorldMap", "generate_world"]
