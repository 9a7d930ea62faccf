"""Per-tile terrain selection inside each biome."""
from __future__ import annotations

from typing import Dict, Mapping, Optional

from crashsite.engine.logger import ChannelLogger
from crashsite.world.catalog import TILE_SIZE, BiomeCatalog, BiomeKind
from crashsite.world.model import TerrainTile, TileKey
from crashsite.world.noise import hash_noise
from crashsite.world.random_source import SeededRandomSource


def select_weighted_terrain(biome: BiomeKind, roll: float) -> str:
    """First terrain type whose cumulative weight reaches ``roll``."""
    cumulative = 0.0
    for terrain_type, weight in zip(biome.terrain_types, biome.weights):
        cumulative += weight
        if roll <= cumulative:
            return terrain_type
    return biome.terrain_types[0]


class TerrainTileSelector:
    NOISE_SCALE = 0.01
    OVERRIDE_THRESHOLD = 0.6

    def __init__(self, biomes: BiomeCatalog, tile_size: int = TILE_SIZE) -> None:
        self.biomes = biomes
        self.tile_size = tile_size

    def select(
        self,
        biome_grid: Mapping[TileKey, str],
        rng: SeededRandomSource,
        logger: Optional[ChannelLogger] = None,
    ) -> Dict[TileKey, TerrainTile]:
        terrain: Dict[TileKey, TerrainTile] = {}
        overrides = 0
        for key, biome_id in biome_grid.items():
            biome = self.biomes.get(biome_id)
            terrain_type = select_weighted_terrain(biome, rng.next())
            x, y = key.origin(self.tile_size)
            if hash_noise(x * self.NOISE_SCALE, y * self.NOISE_SCALE) > self.OVERRIDE_THRESHOLD:
                terrain_type = rng.choice(biome.terrain_types)
                overrides += 1
            rotated = rng.next() >= 0.5
            terrain[key] = TerrainTile(terrain_type, biome_id, rotated)
        if logger and logger.enabled:
            logger.debug("Selected terrain for %d tiles (%d noise overrides)", len(terrain), overrides)
        return terrain


__all__ = ["TerrainTileSelector", "select_weighted_terrain"]
