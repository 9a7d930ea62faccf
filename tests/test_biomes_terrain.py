import math
from collections import Counter

from crashsite.world.biomes import BiomeRegionAssigner
from crashsite.world.catalog import BIOMES, MAP_SIZES, BiomeCatalog, BiomeKind, MapSizeSpec
from crashsite.world.model import TileKey, tile_iteration
from crashsite.world.noise import hash_noise
from crashsite.world.random_source import SeededRandomSource
from crashsite.world.terrain import TerrainTileSelector, select_weighted_terrain


def test_hash_noise_is_deterministic_and_bounded() -> None:
    for i in range(200):
        value = hash_noise(i * 0.37, i * 1.91)
        assert -1.0 < value < 1.0
        assert value == hash_noise(i * 0.37, i * 1.91)


def test_region_count_has_floor_of_six() -> None:
    assigner = BiomeRegionAssigner(BIOMES)
    assert assigner.region_count(MapSizeSpec("tiny", 128, 128)) == 6
    assert assigner.region_count(MAP_SIZES["small"]) == 6
    assert assigner.region_count(MAP_SIZES["huge"]) == 48


def test_seed_points_lie_inside_the_map() -> None:
    size = MAP_SIZES["large"]
    points = BiomeRegionAssigner(BIOMES).seed_points(size, SeededRandomSource(11))
    assert len(points) == 27
    for point in points:
        assert 0.0 <= point.x < size.width
        assert 0.0 <= point.y < size.height
        assert point.biome in BIOMES


def test_every_tile_gets_one_biome() -> None:
    size = MAP_SIZES["small"]
    grid = BiomeRegionAssigner(BIOMES).assign(size, SeededRandomSource(5))
    assert len(grid) == 16 * 12
    assert set(grid) == set(tile_iteration(size))
    assert set(grid.values()) <= set(BIOMES.ids())


def test_single_biome_catalog_fills_the_map() -> None:
    rock = BiomeCatalog([BiomeKind("rock", ("stone_texture",), (1.0,), 0.0, 0.0, 0x777777)])
    grid = BiomeRegionAssigner(rock).assign(MAP_SIZES["small"], SeededRandomSource(8))
    assert set(grid.values()) == {"rock"}


def test_regions_are_mostly_contiguous() -> None:
    grid = BiomeRegionAssigner(BIOMES).assign(MAP_SIZES["medium"], SeededRandomSource(42))
    same = 0
    pairs = 0
    for key, biome in grid.items():
        right = grid.get(TileKey(key.col + 1, key.row))
        if right is not None:
            pairs += 1
            same += right == biome
    # Voronoi cells with light blending: most horizontal neighbours agree.
    assert same / pairs > 0.6


def test_weighted_terrain_selection_uses_cumulative_weights() -> None:
    wasteland = BIOMES.get("wasteland")
    assert select_weighted_terrain(wasteland, 0.0) == "rubble"
    assert select_weighted_terrain(wasteland, 0.4) == "rubble"
    assert select_weighted_terrain(wasteland, 0.41) == "crackled_concrete"
    assert select_weighted_terrain(wasteland, 0.99) == "dirt_texture"


def test_weighted_terrain_falls_back_to_first_type() -> None:
    skewed = BiomeKind("skewed", ("a", "b"), (0.5, 0.4999999), 0.0, 0.0, 0)
    assert select_weighted_terrain(skewed, 0.99999999) == "a"


def test_terrain_covers_every_biome_tile() -> None:
    size = MAP_SIZES["small"]
    rng = SeededRandomSource(21)
    biome_grid = BiomeRegionAssigner(BIOMES).assign(size, rng)
    terrain = TerrainTileSelector(BIOMES).select(biome_grid, rng)
    assert set(terrain) == set(biome_grid)
    for key, tile in terrain.items():
        assert tile.biome == biome_grid[key]
        assert tile.terrain_type in BIOMES.get(tile.biome).terrain_types
        assert tile.rotation == (math.pi / 2 if tile.rotated else 0.0)


def test_terrain_distribution_follows_weights() -> None:
    size = MapSizeSpec("field", 4096, 4096)
    biome_grid = {key: "desert" for key in tile_iteration(size)}
    terrain = TerrainTileSelector(BIOMES).select(biome_grid, SeededRandomSource(77))
    counts = Counter(tile.terrain_type for tile in terrain.values())
    sand_share = counts["sand_texture"] / len(terrain)
    assert 0.7 < sand_share < 0.97
    rotated = sum(tile.rotated for tile in terrain.values()) / len(terrain)
    assert 0.4 < rotated < 0.6
