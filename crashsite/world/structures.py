"""Structure placement with rarity, biome affinity and spacing rules."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from crashsite.engine.logger import ChannelLogger
from crashsite.world.catalog import TILE_SIZE, MapSizeSpec, StructureArchetype, StructureCatalog
from crashsite.world.geometry import within
from crashsite.world.model import Point, StructurePlacement, TileKey
from crashsite.world.random_source import SeededRandomSource


@dataclass
class PlacementResult:
    structures: List[StructurePlacement] = field(default_factory=list)
    # Anchor archetypes left without any placement after the fallback.
    missing_anchors: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.missing_anchors


class StructurePlacer:
    """Scan the map once, then make sure every anchor archetype appears."""

    BORDER_TILES = 1
    FORCED_ATTEMPTS = 20
    FORCED_SPREAD = 400.0

    def __init__(self, structures: StructureCatalog, tile_size: int = TILE_SIZE) -> None:
        self.structures = structures
        self.tile_size = tile_size

    def place(
        self,
        map_size: MapSizeSpec,
        biome_grid: Mapping[TileKey, str],
        rng: SeededRandomSource,
        logger: Optional[ChannelLogger] = None,
    ) -> PlacementResult:
        result = PlacementResult()
        placed: Dict[str, List[Point]] = {archetype.id: [] for archetype in self.structures}
        margin = self.BORDER_TILES * self.tile_size

        for x in range(margin, map_size.width - margin, self.tile_size):
            for y in range(margin, map_size.height - margin, self.tile_size):
                biome = biome_grid.get(TileKey.from_world(x, y, self.tile_size))
                if biome is None:
                    continue
                for archetype in self.structures:
                    if biome not in archetype.biome_affinity:
                        continue
                    if rng.next() >= archetype.rarity:
                        continue
                    if self._too_close((x, y), placed[archetype.id], archetype.min_distance):
                        continue
                    placement = StructurePlacement((x, y), archetype.id, biome)
                    result.structures.append(placement)
                    placed[archetype.id].append(placement.position)
                    if logger and logger.enabled:
                        logger.debug("Placed %s at (%d, %d) in %s", archetype.id, x, y, biome)

        for archetype in self.structures.anchors():
            if placed[archetype.id]:
                continue
            placement = self.force_anchor(archetype, map_size, biome_grid, rng)
            if placement is None:
                result.missing_anchors.append(archetype.id)
                if logger and logger.enabled:
                    logger.warning(
                        "Could not force-place %s after %d attempts",
                        archetype.id,
                        self.FORCED_ATTEMPTS,
                    )
                continue
            result.structures.append(placement)
            placed[archetype.id].append(placement.position)
            if logger and logger.enabled:
                logger.info("Force-placed %s at (%d, %d)", archetype.id, *placement.position)

        if logger and logger.enabled:
            logger.info("Placed %d structures", len(result.structures))
        return result

    def force_anchor(
        self,
        archetype: StructureArchetype,
        map_size: MapSizeSpec,
        biome_grid: Mapping[TileKey, str],
        rng: SeededRandomSource,
    ) -> Optional[StructurePlacement]:
        """Drop an anchor near the map center; ignores spacing since none exist yet."""
        center_x = map_size.width / 2
        center_y = map_size.height / 2
        margin = self.BORDER_TILES * self.tile_size
        for _ in range(self.FORCED_ATTEMPTS):
            x = center_x + (rng.next() - 0.5) * self.FORCED_SPREAD
            y = center_y + (rng.next() - 0.5) * self.FORCED_SPREAD
            key = TileKey.from_world(x, y, self.tile_size)
            tile_x, tile_y = key.origin(self.tile_size)
            if not (margin < tile_x < map_size.width - margin and margin < tile_y < map_size.height - margin):
                continue
            biome = biome_grid.get(key)
            if biome is None:
                continue
            return StructurePlacement((tile_x, tile_y), archetype.id, biome, forced=True)
        return None

    @staticmethod
    def _too_close(position: Tuple[int, int], others: List[Point], min_distance: float) -> bool:
        return any(within(position, other, min_distance) for other in others)


__all__ = ["StructurePlacer", "PlacementResult"]
