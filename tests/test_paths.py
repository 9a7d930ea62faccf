from crashsite.world.catalog import MAP_SIZES, ROAD_TERRAIN
from crashsite.world.geometry import sample_segment
from crashsite.world.model import StructurePlacement, TerrainTile, TileKey, tile_iteration
from crashsite.world.paths import PathCarver


def grass_terrain(size):
    return {key: TerrainTile("grass_texture", "grassland", False) for key in tile_iteration(size)}


def anchor(x: int, y: int) -> StructurePlacement:
    return StructurePlacement((x, y), "helicopter_crash", "grassland")


def test_horizontal_road_is_rotated_and_complete() -> None:
    terrain = grass_terrain(MAP_SIZES["small"])
    roads = PathCarver().carve(terrain, (100, 100), [anchor(900, 100)])
    row = [roads.terrain[TileKey(col, 1)] for col in range(1, 15)]
    assert all(tile.terrain_type == ROAD_TERRAIN for tile in row)
    assert all(tile.rotated for tile in row)
    assert all(tile.biome == "grassland" for tile in row)
    assert roads.terrain[TileKey(0, 1)].terrain_type == "grass_texture"


def test_vertical_road_is_not_rotated() -> None:
    terrain = grass_terrain(MAP_SIZES["small"])
    roads = PathCarver().carve(terrain, (300, 80), [anchor(320, 700)])
    carved = roads.tiles()
    assert carved
    assert all(not roads.terrain[key].rotated for key in carved)


def test_carving_leaves_input_untouched_and_keeps_coverage() -> None:
    terrain = grass_terrain(MAP_SIZES["small"])
    before = dict(terrain)
    roads = PathCarver().carve(terrain, (100, 650), [anchor(900, 80)])
    assert terrain == before
    assert set(roads.terrain) == set(terrain)


def test_roads_chain_through_every_anchor() -> None:
    terrain = grass_terrain(MAP_SIZES["medium"])
    anchors = [anchor(1800, 200), anchor(300, 1400), anchor(1500, 1300)]
    start = (1000, 700)
    roads = PathCarver().carve(terrain, start, anchors)
    assert len(roads.segments) == 3
    waypoints = [start] + [placement.position for placement in anchors]
    for segment, (a, b) in zip(roads.segments, zip(waypoints, waypoints[1:])):
        assert segment[0] == TileKey.from_world(*a)
        assert segment[-1] == TileKey.from_world(*b)
        for previous, current in zip(segment, segment[1:]):
            assert previous.chebyshev(current) <= 1
    for key in roads.tiles():
        assert roads.terrain[key].terrain_type == ROAD_TERRAIN


def test_no_anchors_means_no_roads() -> None:
    terrain = grass_terrain(MAP_SIZES["small"])
    roads = PathCarver().carve(terrain, (500, 400), [])
    assert roads.segments == []
    assert roads.terrain == terrain


def test_sample_segment_steps_never_exceed_tile_size() -> None:
    points = sample_segment((0, 0), (1000, 37), 64)
    assert points[0] == (0.0, 0.0)
    assert points[-1] == (1000.0, 37.0)
    for (ax, ay), (bx, by) in zip(points, points[1:]):
        assert ((bx - ax) ** 2 + (by - ay) ** 2) ** 0.5 <= 64.0 + 1e-9
    assert sample_segment((5, 5), (5, 5), 64) == [(5.0, 5.0), (5.0, 5.0)]
