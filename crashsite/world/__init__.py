"""Procedural world generation: biomes, terrain, structures, spawns and roads."""

from .catalog import BIOMES, MAP_SIZES, STRUCTURES, TILE_SIZE, MapSizeSpec, resolve_map_size
from .errors import ConfigurationError, IncompleteGenerationError, UnknownMapSizeError, WorldGenerationError
from .generator import WorldGenerator, generate_world
from .model import SpawnArea, StructurePlacement, TerrainTile, TileKey, WorldMap
from .validation import validate_world

__all__ = [
    "BIOMES",
    "MAP_SIZES",
    "STRUCTURES",
    "TILE_SIZE",
    "MapSizeSpec",
    "resolve_map_size",
    "ConfigurationError",
    "IncompleteGenerationError",
    "UnknownMapSizeError",
    "WorldGenerationError",
    "WorldGenerator",
    "generate_world",
    "SpawnArea",
    "StructurePlacement",
    "TerrainTile",
    "TileKey",
    "WorldMap",
    "validate_world",
]
