"""Value types making up a generated world."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from crashsite.world.catalog import TILE_SIZE, MapSizeSpec, StructureCatalog


Point = Tuple[int, int]


@dataclass(frozen=True, order=True)
class TileKey:
    """Grid coordinate of a tile; hashable and ordered column first."""

    col: int
    row: int

    @classmethod
    def from_world(cls, x: float, y: float, tile_size: int = TILE_SIZE) -> "TileKey":
        return cls(math.floor(x / tile_size), math.floor(y / tile_size))

    def origin(self, tile_size: int = TILE_SIZE) -> Point:
        return (self.col * tile_size, self.row * tile_size)

    def center(self, tile_size: int = TILE_SIZE) -> Tuple[float, float]:
        return (self.col * tile_size + tile_size / 2.0, self.row * tile_size + tile_size / 2.0)

    def chebyshev(self, other: "TileKey") -> int:
        return max(abs(self.col - other.col), abs(self.row - other.row))


@dataclass(frozen=True)
class TerrainTile:
    terrain_type: str
    biome: str
    rotated: bool = False

    @property
    def rotation(self) -> float:
        """Rotation in radians for the tile layer."""
        return math.pi / 2 if self.rotated else 0.0


@dataclass(frozen=True)
class StructurePlacement:
    position: Point
    archetype_id: str
    biome: str
    # Set only for the anchor fallback, which skips the spacing check.
    forced: bool = False


@dataclass(frozen=True)
class SpawnArea:
    position: Point
    radius: float


def tile_iteration(map_size: MapSizeSpec, tile_size: int = TILE_SIZE) -> Iterable[TileKey]:
    """Every tile of the map, column by column."""
    for col in range(map_size.tile_columns(tile_size)):
        for row in range(map_size.tile_rows(tile_size)):
            yield TileKey(col, row)


@dataclass(frozen=True, eq=False)
class WorldMap:
    """Immutable blueprint handed to the tile, entity and structure layers."""

    map_size: MapSizeSpec
    seed: int
    biome_grid: Mapping[TileKey, str]
    terrain_grid: Mapping[TileKey, TerrainTile]
    structures: Tuple[StructurePlacement, ...]
    player_start: Point
    zombie_spawn_areas: Tuple[SpawnArea, ...]
    tile_size: int = TILE_SIZE
    requested_seed: Optional[int] = None
    attempts: int = 1
    generation_time_ms: float = field(default=0.0, compare=False)

    def __post_init__(self) -> None:
        # Freeze the containers handed in by the generator.
        if not isinstance(self.biome_grid, MappingProxyType):
            object.__setattr__(self, "biome_grid", MappingProxyType(dict(self.biome_grid)))
        if not isinstance(self.terrain_grid, MappingProxyType):
            object.__setattr__(self, "terrain_grid", MappingProxyType(dict(self.terrain_grid)))
        object.__setattr__(self, "structures", tuple(self.structures))
        object.__setattr__(self, "zombie_spawn_areas", tuple(self.zombie_spawn_areas))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorldMap):
            return NotImplemented
        # Generation time is not part of the world's identity.
        return (
            self.map_size == other.map_size
            and self.seed == other.seed
            and self.tile_size == other.tile_size
            and self.requested_seed == other.requested_seed
            and self.attempts == other.attempts
            and dict(self.biome_grid) == dict(other.biome_grid)
            and dict(self.terrain_grid) == dict(other.terrain_grid)
            and self.structures == other.structures
            and self.player_start == other.player_start
            and self.zombie_spawn_areas == other.zombie_spawn_areas
        )

    def biome_at(self, x: float, y: float) -> Optional[str]:
        return self.biome_grid.get(TileKey.from_world(x, y, self.tile_size))

    def terrain_at(self, x: float, y: float) -> Optional[TerrainTile]:
        return self.terrain_grid.get(TileKey.from_world(x, y, self.tile_size))

    def structures_of(self, archetype_id: str) -> List[StructurePlacement]:
        return [placement for placement in self.structures if placement.archetype_id == archetype_id]

    def anchors(self, catalog: StructureCatalog) -> List[StructurePlacement]:
        anchor_ids = {archetype.id for archetype in catalog.anchors()}
        return [placement for placement in self.structures if placement.archetype_id in anchor_ids]

    def summary(self) -> Dict[str, Any]:
        counts: Dict[str, int] = {}
        for placement in self.structures:
            counts[placement.archetype_id] = counts.get(placement.archetype_id, 0) + 1
        biome_tiles: Dict[str, int] = {}
        for biome in self.biome_grid.values():
            biome_tiles[biome] = biome_tiles.get(biome, 0) + 1
        return {
            "map_size": self.map_size.id,
            "seed": self.seed,
            "tiles": len(self.terrain_grid),
            "biome_tiles": biome_tiles,
            "structures": len(self.structures),
            "structure_counts": counts,
            "player_start": self.player_start,
            "zombie_spawn_areas": len(self.zombie_spawn_areas),
            "attempts": self.attempts,
        }

    def to_dict(self) -> Dict[str, Any]:
        tiles = []
        for key in sorted(self.terrain_grid):
            tile = self.terrain_grid[key]
            x, y = key.origin(self.tile_size)
            tiles.append(
                {
                    "x": x,
                    "y": y,
                    "biome": self.biome_grid.get(key, tile.biome),
                    "type": tile.terrain_type,
                    "rotated": tile.rotated,
                }
            )
        return {
            "map_size": {
                "id": self.map_size.id,
                "name": self.map_size.name,
                "width": self.map_size.width,
                "height": self.map_size.height,
            },
            "seed": self.seed,
            "requested_seed": self.requested_seed,
            "attempts": self.attempts,
            "tile_size": self.tile_size,
            "tiles": tiles,
            "structures": [
                {
                    "x": placement.position[0],
                    "y": placement.position[1],
                    "archetype": placement.archetype_id,
                    "biome": placement.biome,
                    "forced": placement.forced,
                }
                for placement in self.structures
            ],
            "player_start": {"x": self.player_start[0], "y": self.player_start[1]},
            "zombie_spawn_areas": [
                {"x": area.position[0], "y": area.position[1], "radius": area.radius}
                for area in self.zombie_spawn_areas
            ],
            "generation_time_ms": self.generation_time_ms,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


__all__ = [
    "Point",
    "TileKey",
    "TerrainTile",
    "StructurePlacement",
    "SpawnArea",
    "WorldMap",
    "tile_iteration",
]
