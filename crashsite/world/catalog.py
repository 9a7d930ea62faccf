"""Static catalogs: map sizes, biomes and structure archetypes."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, Mapping, Optional, Sequence, Tuple

from crashsite.world.errors import ConfigurationError, UnknownMapSizeError


TILE_SIZE = 64
ROAD_TERRAIN = "dirt_road"


@dataclass(frozen=True)
class MapSizeSpec:
    """Fixed world dimensions in world units."""

    id: str
    width: int
    height: int
    name: str = ""

    def tile_columns(self, tile_size: int = TILE_SIZE) -> int:
        return math.ceil(self.width / tile_size)

    def tile_rows(self, tile_size: int = TILE_SIZE) -> int:
        return math.ceil(self.height / tile_size)

    @property
    def center(self) -> Tuple[int, int]:
        return (self.width // 2, self.height // 2)

    def estimated_structures(self) -> int:
        """Rough structure count shown on the map selector."""
        return (self.width * self.height) // (300 * 300)

    def estimated_crash_sites(self) -> int:
        return max(1, int(self.estimated_structures() * 0.1))

    def contains(self, x: float, y: float) -> bool:
        return 0 <= x <= self.width and 0 <= y <= self.height


def _map_size(size_id: str, width: int, height: int) -> MapSizeSpec:
    return MapSizeSpec(size_id, width, height, f"{size_id.title()} ({width}x{height})")


MAP_SIZES: Mapping[str, MapSizeSpec] = MappingProxyType(
    {
        "small": _map_size("small", 1024, 768),
        "medium": _map_size("medium", 2048, 1536),
        "large": _map_size("large", 3072, 2304),
        "huge": _map_size("huge", 4096, 3072),
    }
)


def resolve_map_size(map_size_id: str, sizes: Mapping[str, MapSizeSpec] = MAP_SIZES) -> MapSizeSpec:
    try:
        return sizes[map_size_id]
    except (KeyError, TypeError):
        raise UnknownMapSizeError(str(map_size_id), list(sizes.keys())) from None


@dataclass(frozen=True)
class BiomeKind:
    """A terrain theme and the weighted terrain sub-types it allows."""

    id: str
    terrain_types: Tuple[str, ...]
    weights: Tuple[float, ...]
    structure_spawn_rate: float
    zombie_spawn_rate: float
    color: int

    def __post_init__(self) -> None:
        if not self.terrain_types:
            raise ConfigurationError(f"Biome '{self.id}' has no terrain types")
        if len(self.terrain_types) != len(self.weights):
            raise ConfigurationError(f"Biome '{self.id}' needs one weight per terrain type")
        if any(weight < 0.0 for weight in self.weights):
            raise ConfigurationError(f"Biome '{self.id}' has a negative terrain weight")
        if not math.isclose(sum(self.weights), 1.0, abs_tol=1e-6):
            raise ConfigurationError(f"Biome '{self.id}' terrain weights sum to {sum(self.weights):.4f}, expected 1")

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return ((self.color >> 16) & 0xFF, (self.color >> 8) & 0xFF, self.color & 0xFF)

    @classmethod
    def from_dict(cls, data: Dict) -> "BiomeKind":
        color = data.get("color", 0xFF00FF)
        if isinstance(color, str):
            color = int(color.lstrip("#").replace("0x", ""), 16)
        return cls(
            id=data["id"],
            terrain_types=tuple(data["terrainTypes"]),
            weights=tuple(float(weight) for weight in data["weights"]),
            structure_spawn_rate=float(data.get("structureSpawnRate", 0.0)),
            zombie_spawn_rate=float(data.get("zombieSpawnRate", 1.0)),
            color=int(color),
        )


@dataclass(frozen=True)
class Footprint:
    width: float
    height: float


@dataclass(frozen=True)
class StructureArchetype:
    """Catalog entry describing where and how often a structure appears."""

    id: str
    rarity: float
    min_distance: float
    biome_affinity: FrozenSet[str]
    is_anchor: bool
    footprint: Footprint
    destructible: bool
    health: float
    structure_type: str = ""
    texture_key: str = ""
    material: str = "metal"

    def __post_init__(self) -> None:
        if not 0.0 < self.rarity <= 1.0:
            raise ConfigurationError(f"Structure '{self.id}' rarity {self.rarity} is outside (0, 1]")
        if self.min_distance < 0.0:
            raise ConfigurationError(f"Structure '{self.id}' has a negative minimum distance")

    @classmethod
    def from_dict(cls, data: Dict) -> "StructureArchetype":
        size = data.get("size", {})
        structure_type = data.get("type", data["id"])
        return cls(
            id=data["id"],
            rarity=float(data["rarity"]),
            min_distance=float(data.get("minDistance", 0.0)),
            biome_affinity=frozenset(data.get("biomePreference", ())),
            is_anchor=bool(data.get("anchor", False)),
            footprint=Footprint(float(size.get("width", 64.0)), float(size.get("height", 64.0))),
            destructible=bool(data.get("destructible", True)),
            health=float(data.get("health", 100.0)),
            structure_type=structure_type,
            texture_key=data.get("textureKey", structure_type),
            material=data.get("material", "metal"),
        )


class _Catalog:
    """Ordered, read-only collection of catalog entries keyed by id."""

    kind = "entry"

    def __init__(self, entries: Sequence) -> None:
        self._entries = tuple(entries)
        self._by_id = MappingProxyType({entry.id: entry for entry in self._entries})
        if len(self._by_id) != len(self._entries):
            raise ConfigurationError(f"Duplicate {self.kind} ids in catalog")

    def __iter__(self) -> Iterator:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._by_id

    def __getitem__(self, index: int):
        return self._entries[index]

    def get(self, entry_id: str):
        return self._by_id[entry_id]

    def ids(self) -> Tuple[str, ...]:
        return tuple(self._by_id.keys())

    @classmethod
    def _read(cls, path: Path) -> Optional[list]:
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            return None
        if isinstance(data, dict):
            data = data.get(cls.kind + "s", [data])
        return data


class BiomeCatalog(_Catalog):
    kind = "biome"

    @classmethod
    def load(cls, path: Path, fallback: Optional["BiomeCatalog"] = None) -> "BiomeCatalog":
        """Read biomes from JSON, keeping ``fallback`` when the file is unusable."""
        fallback = fallback if fallback is not None else BIOMES
        data = cls._read(path)
        if not data:
            return fallback
        return cls([BiomeKind.from_dict(entry) for entry in data])


class StructureCatalog(_Catalog):
    kind = "structure"

    def anchors(self) -> Tuple[StructureArchetype, ...]:
        return tuple(entry for entry in self._entries if entry.is_anchor)

    def validate_against(self, biomes: BiomeCatalog) -> None:
        for archetype in self._entries:
            unknown = sorted(archetype.biome_affinity.difference(biomes.ids()))
            if unknown:
                raise ConfigurationError(
                    f"Structure '{archetype.id}' prefers unknown biomes: {', '.join(unknown)}"
                )

    @classmethod
    def load(cls, path: Path, fallback: Optional["StructureCatalog"] = None) -> "StructureCatalog":
        fallback = fallback if fallback is not None else STRUCTURES
        data = cls._read(path)
        if not data:
            return fallback
        return cls([StructureArchetype.from_dict(entry) for entry in data])


BIOMES = BiomeCatalog(
    (
        BiomeKind("grassland", ("grass_texture", "dirt_texture"), (0.8, 0.2), 0.05, 1.0, 0x4A7C59),
        BiomeKind("desert", ("sand_texture", "stone_texture"), (0.9, 0.1), 0.03, 0.8, 0xC2B280),
        BiomeKind("urban", ("crackled_concrete", "dirt_road"), (0.7, 0.3), 0.1, 1.2, 0x666666),
        BiomeKind(
            "wasteland",
            ("rubble", "crackled_concrete", "dirt_texture"),
            (0.4, 0.4, 0.2),
            0.08,
            1.1,
            0x4A4A4A,
        ),
        BiomeKind("forest", ("grass_texture", "dirt_texture"), (0.9, 0.1), 0.02, 0.7, 0x2D5033),
    )
)

STRUCTURES = StructureCatalog(
    (
        StructureArchetype(
            id="helicopter_crash",
            rarity=0.003,
            min_distance=400.0,
            biome_affinity=frozenset({"wasteland", "urban"}),
            is_anchor=True,
            footprint=Footprint(240.0, 160.0),
            destructible=False,
            health=1500.0,
            structure_type="crashed_helicopter",
            texture_key="crashed_helicopter",
            material="metal",
        ),
        StructureArchetype(
            id="building_ruins",
            rarity=0.01,
            min_distance=200.0,
            biome_affinity=frozenset({"urban", "wasteland"}),
            is_anchor=False,
            footprint=Footprint(128.0, 128.0),
            destructible=True,
            health=800.0,
            structure_type="concrete_building",
            texture_key="concrete_building",
            material="concrete",
        ),
        StructureArchetype(
            id="abandoned_vehicle",
            rarity=0.02,
            min_distance=150.0,
            biome_affinity=frozenset({"urban", "desert", "wasteland"}),
            is_anchor=False,
            footprint=Footprint(96.0, 64.0),
            destructible=True,
            health=300.0,
            structure_type="vehicle_wreck",
            texture_key="vehicle_wreck",
            material="metal",
        ),
    )
)


__all__ = [
    "TILE_SIZE",
    "ROAD_TERRAIN",
    "MapSizeSpec",
    "MAP_SIZES",
    "resolve_map_size",
    "BiomeKind",
    "BiomeCatalog",
    "BIOMES",
    "Footprint",
    "StructureArchetype",
    "StructureCatalog",
    "STRUCTURES",
]
