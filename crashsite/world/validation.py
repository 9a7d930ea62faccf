"""Post-generation checks of the world invariants."""
from __future__ import annotations

from itertools import combinations
from typing import Any, Dict, List

from crashsite.world.catalog import StructureCatalog
from crashsite.world.geometry import within
from crashsite.world.model import WorldMap


def validate_world(world: WorldMap, structures: StructureCatalog) -> Dict[str, Any]:
    violations: List[str] = []
    size = world.map_size

    if set(world.biome_grid) != set(world.terrain_grid):
        violations.append("terrain_coverage")

    for archetype in structures:
        spaced = [p.position for p in world.structures_of(archetype.id) if not p.forced]
        if any(within(a, b, archetype.min_distance) for a, b in combinations(spaced, 2)):
            violations.append(f"spacing:{archetype.id}")

    if structures.anchors() and not world.anchors(structures):
        violations.append("missing_anchor")

    if not size.contains(*world.player_start):
        violations.append("player_start_out_of_bounds")
    if any(not size.contains(*placement.position) for placement in world.structures):
        violations.append("structure_out_of_bounds")
    if any(not size.contains(*area.position) for area in world.zombie_spawn_areas):
        violations.append("spawn_area_out_of_bounds")

    return {
        "valid": not violations,
        "violations": violations,
    }


__all__ = ["validate_world"]
