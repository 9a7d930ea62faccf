"""Debug minimap of a generated world drawn with pygame."""
from __future__ import annotations

from typing import Dict, Tuple

import pygame

from crashsite.world.catalog import BIOMES, ROAD_TERRAIN, STRUCTURES, BiomeCatalog, StructureCatalog
from crashsite.world.model import WorldMap

Color = Tuple[int, int, int]

ROAD_COLOR: Color = (150, 118, 82)
PLAYER_COLOR: Color = (90, 150, 255)
SPAWN_COLOR: Color = (210, 60, 60)
FALLBACK_COLOR: Color = (255, 0, 255)
STRUCTURE_COLORS: Dict[str, Color] = {
    "metal": (200, 200, 210),
    "concrete": (160, 150, 140),
}
ANCHOR_COLOR: Color = (255, 210, 90)


def render_preview(
    world: WorldMap,
    biomes: BiomeCatalog = BIOMES,
    structures: StructureCatalog = STRUCTURES,
    scale: float = 0.125,
) -> pygame.Surface:
    """Draw ``world`` onto a new surface at ``scale`` pixels per world unit."""

    if scale <= 0.0:
        raise ValueError("Preview scale must be positive")
    width = max(1, int(world.map_size.width * scale))
    height = max(1, int(world.map_size.height * scale))
    surface = pygame.Surface((width, height))
    surface.fill((0, 0, 0))

    tile_px = max(1, round(world.tile_size * scale))
    for key, tile in world.terrain_grid.items():
        x, y = key.origin(world.tile_size)
        if tile.terrain_type == ROAD_TERRAIN and tile.biome != "urban":
            color = ROAD_COLOR
        elif tile.biome in biomes:
            color = biomes.get(tile.biome).rgb
        else:
            color = FALLBACK_COLOR
        surface.fill(color, pygame.Rect(int(x * scale), int(y * scale), tile_px, tile_px))

    for placement in world.structures:
        if placement.archetype_id not in structures:
            continue
        archetype = structures.get(placement.archetype_id)
        rect = pygame.Rect(0, 0, max(2, int(archetype.footprint.width * scale)), max(2, int(archetype.footprint.height * scale)))
        rect.center = (int(placement.position[0] * scale), int(placement.position[1] * scale))
        color = ANCHOR_COLOR if archetype.is_anchor else STRUCTURE_COLORS.get(archetype.material, FALLBACK_COLOR)
        pygame.draw.rect(surface, color, rect)

    for area in world.zombie_spawn_areas:
        center = (int(area.position[0] * scale), int(area.position[1] * scale))
        pygame.draw.circle(surface, SPAWN_COLOR, center, max(2, int(area.radius * scale)), 1)

    start = (int(world.player_start[0] * scale), int(world.player_start[1] * scale))
    pygame.draw.circle(surface, PLAYER_COLOR, start, max(3, int(48 * scale)))
    return surface


__all__ = ["render_preview"]
