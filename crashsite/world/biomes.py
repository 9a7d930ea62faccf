"""Voronoi-style biome regions with noisy borders."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from crashsite.engine.logger import ChannelLogger
from crashsite.world.catalog import TILE_SIZE, BiomeCatalog, MapSizeSpec
from crashsite.world.geometry import nearest_index
from crashsite.world.model import TileKey, tile_iteration
from crashsite.world.noise import hash_noise
from crashsite.world.random_source import SeededRandomSource


@dataclass(frozen=True)
class BiomeSeed:
    x: float
    y: float
    biome: str


class BiomeRegionAssigner:
    """Assign every tile the biome of its nearest seed point.

    Tiles whose noise value crosses ``BLEND_THRESHOLD`` get a small chance of
    taking a random biome instead, which roughens the region borders.
    """

    MIN_REGIONS = 6
    REGION_AREA = 512 * 512
    NOISE_SCALE = 0.003
    BLEND_THRESHOLD = 0.3
    BLEND_CHANCE = 0.2

    def __init__(self, biomes: BiomeCatalog, tile_size: int = TILE_SIZE) -> None:
        self.biomes = biomes
        self.tile_size = tile_size

    def region_count(self, map_size: MapSizeSpec) -> int:
        return max(self.MIN_REGIONS, (map_size.width * map_size.height) // self.REGION_AREA)

    def seed_points(self, map_size: MapSizeSpec, rng: SeededRandomSource) -> List[BiomeSeed]:
        biome_ids = self.biomes.ids()
        points: List[BiomeSeed] = []
        for _ in range(self.region_count(map_size)):
            x = rng.next() * map_size.width
            y = rng.next() * map_size.height
            points.append(BiomeSeed(x, y, rng.choice(biome_ids)))
        return points

    def assign(
        self,
        map_size: MapSizeSpec,
        rng: SeededRandomSource,
        logger: Optional[ChannelLogger] = None,
    ) -> Dict[TileKey, str]:
        seeds = self.seed_points(map_size, rng)
        seed_positions = [(seed.x, seed.y) for seed in seeds]
        biome_ids = self.biomes.ids()
        grid: Dict[TileKey, str] = {}
        blended = 0
        for key in tile_iteration(map_size, self.tile_size):
            biome = seeds[nearest_index(key.center(self.tile_size), seed_positions)].biome
            x, y = key.origin(self.tile_size)
            if hash_noise(x * self.NOISE_SCALE, y * self.NOISE_SCALE) > self.BLEND_THRESHOLD:
                if rng.next() < self.BLEND_CHANCE:
                    biome = rng.choice(biome_ids)
                    blended += 1
            grid[key] = biome
        if logger and logger.enabled:
            logger.debug(
                "Assigned %d tiles from %d biome seeds (%d blended)",
                len(grid),
                len(seeds),
                blended,
            )
        return grid


__all__ = ["BiomeRegionAssigner", "BiomeSeed"]
