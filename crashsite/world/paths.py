"""Road carving between the player start and the anchor structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from crashsite.engine.logger import ChannelLogger
from crashsite.world.catalog import ROAD_TERRAIN, TILE_SIZE
from crashsite.world.geometry import sample_segment
from crashsite.world.model import Point, StructurePlacement, TerrainTile, TileKey


@dataclass
class CarvedRoads:
    terrain: Dict[TileKey, TerrainTile]
    # Tiles visited by each segment, in walking order.
    segments: List[List[TileKey]] = field(default_factory=list)

    def tiles(self) -> List[TileKey]:
        seen: Dict[TileKey, None] = {}
        for segment in self.segments:
            for key in segment:
                seen.setdefault(key, None)
        return list(seen)


class PathCarver:
    ROAD_TERRAIN = ROAD_TERRAIN

    def __init__(self, tile_size: int = TILE_SIZE) -> None:
        self.tile_size = tile_size

    def waypoints(self, player_start: Point, anchors: Sequence[StructurePlacement]) -> List[Point]:
        return [player_start] + [anchor.position for anchor in anchors]

    def carve(
        self,
        terrain_grid: Mapping[TileKey, TerrainTile],
        player_start: Point,
        anchors: Sequence[StructurePlacement],
        logger: Optional[ChannelLogger] = None,
    ) -> CarvedRoads:
        """Return a copy of ``terrain_grid`` with roads laid between waypoints."""
        roads = CarvedRoads(terrain=dict(terrain_grid))
        points = self.waypoints(player_start, anchors)
        for start, end in zip(points, points[1:]):
            roads.segments.append(self._carve_segment(roads.terrain, start, end))
        if logger and logger.enabled:
            logger.debug(
                "Carved %d road tiles across %d segments",
                len(roads.tiles()),
                len(roads.segments),
            )
        return roads

    def _carve_segment(self, terrain: Dict[TileKey, TerrainTile], start: Point, end: Point) -> List[TileKey]:
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        # Mostly horizontal roads are drawn with the rotated texture.
        rotated = abs(dx) > abs(dy)
        visited: List[TileKey] = []
        for x, y in sample_segment(start, end, self.tile_size):
            key = TileKey.from_world(x, y, self.tile_size)
            existing = terrain.get(key)
            if existing is None:
                continue
            terrain[key] = TerrainTile(self.ROAD_TERRAIN, existing.biome, rotated)
            if not visited or visited[-1] != key:
                visited.append(key)
        return visited


__all__ = ["PathCarver", "CarvedRoads"]
