"""Deterministic world generation for the crash site survival mode."""
from __future__ import annotations

import time
from dataclasses import replace
from typing import Mapping, Optional

from crashsite.engine.logger import ChannelLogger, GameLogger
from crashsite.world.biomes import BiomeRegionAssigner
from crashsite.world.catalog import (
    BIOMES,
    MAP_SIZES,
    STRUCTURES,
    TILE_SIZE,
    BiomeCatalog,
    MapSizeSpec,
    StructureCatalog,
    resolve_map_size,
)
from crashsite.world.errors import IncompleteGenerationError
from crashsite.world.model import WorldMap
from crashsite.world.paths import PathCarver
from crashsite.world.random_source import SeededRandomSource, derive_seed, random_seed
from crashsite.world.spawns import SpawnPointSelector, ZombieSpawnAreaGenerator
from crashsite.world.structures import StructurePlacer
from crashsite.world.terrain import TerrainTileSelector
from crashsite.world.validation import validate_world


class WorldGenerator:
    """Run the generation stages in order against one shared random source.

    Stages run in a fixed order, each reading what the earlier ones wrote:
    biomes, terrain, structures, player start, zombie spawn areas, then
    roads over the finished terrain. A world without any anchor
    structure is regenerated once from a derived seed before giving up.
    """

    MAX_ATTEMPTS = 2

    def __init__(
        self,
        *,
        map_sizes: Mapping[str, MapSizeSpec] = MAP_SIZES,
        biomes: BiomeCatalog = BIOMES,
        structures: StructureCatalog = STRUCTURES,
        logger: Optional[GameLogger] = None,
        tile_size: int = TILE_SIZE,
    ) -> None:
        structures.validate_against(biomes)
        self._map_sizes = map_sizes
        self._biomes = biomes
        self._structures = structures
        self._logger = logger
        self.tile_size = tile_size
        self.biome_assigner = BiomeRegionAssigner(biomes, tile_size)
        self.terrain_selector = TerrainTileSelector(biomes, tile_size)
        self.structure_placer = StructurePlacer(structures, tile_size)
        self.spawn_selector = SpawnPointSelector(tile_size=tile_size)
        self.zombie_spawns = ZombieSpawnAreaGenerator()
        self.path_carver = PathCarver(tile_size)

    def map_sizes(self) -> Mapping[str, MapSizeSpec]:
        return self._map_sizes

    def biomes(self) -> BiomeCatalog:
        return self._biomes

    def structures(self) -> StructureCatalog:
        return self._structures

    def generate(self, map_size_id: str, seed: Optional[int] = None) -> WorldMap:
        start_time = time.perf_counter()
        map_size = resolve_map_size(map_size_id, self._map_sizes)
        log = self._channel("generator")
        base_seed = random_seed() if seed is None else int(seed)
        if log:
            log.info(
                "Generating %s world (%dx%d) with seed %d",
                map_size.id,
                map_size.width,
                map_size.height,
                base_seed,
            )

        seeds_tried = []
        world: Optional[WorldMap] = None
        for attempt in range(self.MAX_ATTEMPTS):
            attempt_seed = base_seed if attempt == 0 else derive_seed(base_seed, "retry", attempt)
            seeds_tried.append(attempt_seed)
            world = self._run_stages(map_size, attempt_seed, requested_seed=seed, attempts=attempt + 1)
            if world is not None:
                break
            if log:
                log.warning("Seed %d produced no anchor structure; retrying", attempt_seed)
        if world is None:
            raise IncompleteGenerationError(map_size.id, seeds_tried)

        generation_time_ms = (time.perf_counter() - start_time) * 1000.0
        world = replace(world, generation_time_ms=generation_time_ms)

        report = validate_world(world, self._structures)
        if log:
            if not report["valid"]:
                log.warning("Generated world failed validation: %s", ", ".join(report["violations"]))
            summary = world.summary()
            log.info(
                "World ready in %.1f ms: %d tiles, %d structures (%s), %d zombie spawn areas",
                generation_time_ms,
                summary["tiles"],
                summary["structures"],
                ", ".join(f"{name}={count}" for name, count in summary["structure_counts"].items()),
                summary["zombie_spawn_areas"],
            )
        return world

    def _run_stages(
        self,
        map_size: MapSizeSpec,
        seed: int,
        *,
        requested_seed: Optional[int],
        attempts: int,
    ) -> Optional[WorldMap]:
        rng = SeededRandomSource(seed)
        biome_grid = self.biome_assigner.assign(map_size, rng, self._channel("biomes"))
        terrain_grid = self.terrain_selector.select(biome_grid, rng, self._channel("terrain"))
        placement = self.structure_placer.place(map_size, biome_grid, rng, self._channel("structures"))
        if not placement.complete:
            return None

        spawns_log = self._channel("spawns")
        player_start = self.spawn_selector.select(map_size, biome_grid, placement.structures, rng, spawns_log)
        spawn_areas = self.zombie_spawns.generate(map_size, player_start.position, rng, spawns_log)

        anchor_ids = {archetype.id for archetype in self._structures.anchors()}
        anchors = [p for p in placement.structures if p.archetype_id in anchor_ids]
        roads = self.path_carver.carve(terrain_grid, player_start.position, anchors, self._channel("paths"))

        return WorldMap(
            map_size=map_size,
            seed=seed,
            biome_grid=biome_grid,
            terrain_grid=roads.terrain,
            structures=tuple(placement.structures),
            player_start=player_start.position,
            zombie_spawn_areas=tuple(spawn_areas),
            tile_size=self.tile_size,
            requested_seed=requested_seed,
            attempts=attempts,
        )

    def _channel(self, name: str) -> Optional[ChannelLogger]:
        if self._logger is None:
            return None
        return self._logger.channel(name)


_default_generator: Optional[WorldGenerator] = None


def generate_world(
    map_size_id: str = "medium",
    seed: Optional[int] = None,
    *,
    logger: Optional[GameLogger] = None,
) -> WorldMap:
    """Generate a world with the reference catalogs."""
    global _default_generator
    if logger is not None:
        return WorldGenerator(logger=logger).generate(map_size_id, seed)
    if _default_generator is None:
        _default_generator = WorldGenerator()
    return _default_generator.generate(map_size_id, seed)


__all__ = ["WorldGenerator", "generate_world"]
