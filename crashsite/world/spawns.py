"""Player start and zombie spawn zone searches."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import FrozenSet, List, Mapping, Optional, Sequence

from crashsite.engine.logger import ChannelLogger
from crashsite.world.catalog import TILE_SIZE, MapSizeSpec
from crashsite.world.geometry import within
from crashsite.world.model import Point, SpawnArea, StructurePlacement, TileKey
from crashsite.world.random_source import SeededRandomSource


def _sample_position(map_size: MapSizeSpec, rng: SeededRandomSource, edge_margin: float) -> Point:
    x = edge_margin + rng.next() * (map_size.width - 2 * edge_margin)
    y = edge_margin + rng.next() * (map_size.height - 2 * edge_margin)
    return (math.floor(x), math.floor(y))


@dataclass(frozen=True)
class PlayerStart:
    position: Point
    biome: Optional[str]
    fallback: bool
    attempts: int


class SpawnPointSelector:
    PREFERRED_BIOMES: FrozenSet[str] = frozenset({"grassland", "forest"})
    ATTEMPTS = 50
    EDGE_MARGIN = 100.0
    STRUCTURE_CLEARANCE = 200.0

    def __init__(
        self,
        preferred_biomes: Optional[FrozenSet[str]] = None,
        tile_size: int = TILE_SIZE,
    ) -> None:
        self.preferred_biomes = frozenset(preferred_biomes) if preferred_biomes is not None else self.PREFERRED_BIOMES
        self.tile_size = tile_size

    def select(
        self,
        map_size: MapSizeSpec,
        biome_grid: Mapping[TileKey, str],
        structures: Sequence[StructurePlacement],
        rng: SeededRandomSource,
        logger: Optional[ChannelLogger] = None,
    ) -> PlayerStart:
        for attempt in range(1, self.ATTEMPTS + 1):
            position = _sample_position(map_size, rng, self.EDGE_MARGIN)
            biome = biome_grid.get(TileKey.from_world(*position, self.tile_size))
            if biome not in self.preferred_biomes:
                continue
            if any(within(position, structure.position, self.STRUCTURE_CLEARANCE) for structure in structures):
                continue
            if logger and logger.enabled:
                logger.info("Player start at (%d, %d) in %s", position[0], position[1], biome)
            return PlayerStart(position, biome, fallback=False, attempts=attempt)

        center = map_size.center
        if logger and logger.enabled:
            logger.info("Player start fell back to map center (%d, %d)", *center)
        return PlayerStart(
            center,
            biome_grid.get(TileKey.from_world(*center, self.tile_size)),
            fallback=True,
            attempts=self.ATTEMPTS,
        )


class ZombieSpawnAreaGenerator:
    """Best-effort spawn zones kept away from the player start.

    A zone that finds no far-enough position within its attempts is dropped,
    so callers should treat ``TARGET_COUNT`` as an upper bound.
    """

    TARGET_COUNT = 8
    ATTEMPTS = 20
    EDGE_MARGIN = 100.0
    MIN_PLAYER_DISTANCE = 300.0
    RADIUS_RANGE = (100.0, 200.0)

    def __init__(self, target_count: Optional[int] = None) -> None:
        self.target_count = self.TARGET_COUNT if target_count is None else target_count

    def generate(
        self,
        map_size: MapSizeSpec,
        player_start: Point,
        rng: SeededRandomSource,
        logger: Optional[ChannelLogger] = None,
    ) -> List[SpawnArea]:
        areas: List[SpawnArea] = []
        low, high = self.RADIUS_RANGE
        for _ in range(self.target_count):
            for _attempt in range(self.ATTEMPTS):
                position = _sample_position(map_size, rng, self.EDGE_MARGIN)
                if within(position, player_start, self.MIN_PLAYER_DISTANCE):
                    continue
                areas.append(SpawnArea(position, low + rng.next() * (high - low)))
                break
        if logger and logger.enabled:
            logger.info("Generated %d/%d zombie spawn areas", len(areas), self.target_count)
        return areas


__all__ = ["SpawnPointSelector", "ZombieSpawnAreaGenerator", "PlayerStart"]
