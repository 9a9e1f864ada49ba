"""Tests for spawn areas and spawn tile validation."""

from fakes import DIRT, FakeChunks, FakeForest, FakeOccupancy, FakeOverlay, FakeTileMap

from tick_meadow.collaborators import NoForest, NoOccupants, NoOverlay
from tick_meadow.regions import SpawnRegionResolver
from tick_meadow.types import AreaOrigin, SpawnArea


class TestSpawnArea:
    def test_half_open_bounds(self):
        area = SpawnArea(0, 4, 2, 5, AreaOrigin.FARM)
        assert area.contains(0, 2)
        assert area.contains(3, 4)
        assert not area.contains(4, 2)
        assert not area.contains(0, 5)

    def test_weight_counts_flat_band_as_one_row(self):
        assert SpawnArea(0, 4, 2, 5, AreaOrigin.FARM).weight == 12
        assert SpawnArea(0, 4, 2, 2, AreaOrigin.FARM).weight == 4


class TestGetSpawnAreas:
    def test_farm_only_without_chunks(self, tilemap):
        areas = SpawnRegionResolver(tilemap).get_spawn_areas()
        assert areas == [SpawnArea(0, 40, 6, 30, AreaOrigin.FARM)]

    def test_farm_clipped_to_farm_chunk(self, tilemap, chunks):
        areas = SpawnRegionResolver(tilemap, chunks=chunks).get_spawn_areas()
        assert areas[0] == SpawnArea(0, 10, 10, 20, AreaOrigin.FARM)

    def test_town_snapped_from_anchor(self, tilemap, chunks):
        areas = SpawnRegionResolver(tilemap, chunks=chunks).get_spawn_areas()
        assert areas[1] == SpawnArea(20, 30, 0, 10, AreaOrigin.TOWN)

    def test_forest_chunks_added(self, tilemap, chunks):
        areas = SpawnRegionResolver(tilemap, chunks=chunks).get_spawn_areas()
        assert len(areas) == 3
        assert areas[2] == SpawnArea(30, 40, 20, 30, AreaOrigin.FOREST_CHUNK)


class TestIsValidSpawnTile:
    def test_grass_inside_farm_is_valid(self, tilemap):
        assert SpawnRegionResolver(tilemap).is_valid_spawn_tile(5, 10)

    def test_outside_every_area_is_invalid(self, tilemap, chunks):
        resolver = SpawnRegionResolver(tilemap, chunks=chunks)
        # Grass, in bounds, but not in farm, town or forest rectangles.
        assert not resolver.is_valid_spawn_tile(15, 25)
        assert not resolver.is_valid_spawn_tile(5, 3)

    def test_out_of_bounds(self, tilemap):
        resolver = SpawnRegionResolver(tilemap)
        assert not resolver.is_valid_spawn_tile(-1, 10)
        assert not resolver.is_valid_spawn_tile(40, 10)

    def test_non_grass_tile(self, tilemap):
        tilemap.set_tile(5, 10, DIRT)
        assert not SpawnRegionResolver(tilemap).is_valid_spawn_tile(5, 10)

    def test_custom_submap_tile(self, tilemap):
        tilemap.custom.add((5, 10))
        assert not SpawnRegionResolver(tilemap).is_valid_spawn_tile(5, 10)

    def test_overlay_blocks(self, tilemap):
        resolver = SpawnRegionResolver(tilemap, overlay=FakeOverlay({(5, 10)}))
        assert not resolver.is_valid_spawn_tile(5, 10)
        assert resolver.is_valid_spawn_tile(6, 10)

    def test_each_occupancy_lookup_blocks(self, tilemap):
        for name in ("crops", "trees", "ores", "enemies", "plants"):
            resolver = SpawnRegionResolver(tilemap, **{name: FakeOccupancy({(5, 10)})})
            assert not resolver.is_valid_spawn_tile(5, 10), name

    def test_forest_trunk_and_pocket_tiles_block(self, tilemap):
        forest = FakeForest()
        forest.trunk_tiles.add((5, 10))
        forest.pocket_occupied_tiles.add((6, 10))
        resolver = SpawnRegionResolver(tilemap, forest=forest)
        assert not resolver.is_valid_spawn_tile(5, 10)
        assert not resolver.is_valid_spawn_tile(6, 10)

    def test_forest_tile_delegates_to_forest(self, tilemap):
        forest = FakeForest([(50, 50)])
        resolver = SpawnRegionResolver(tilemap, forest=forest)
        assert resolver.is_valid_spawn_tile(50, 50, is_forest_tile=True)
        assert not resolver.is_valid_spawn_tile(51, 50, is_forest_tile=True)

    def test_forest_tile_with_plant_is_invalid(self, tilemap):
        forest = FakeForest([(50, 50)])
        resolver = SpawnRegionResolver(tilemap, forest=forest, plants=FakeOccupancy({(50, 50)}))
        assert not resolver.is_valid_spawn_tile(50, 50, is_forest_tile=True)


class TestNullCollaborators:
    def test_defaults_are_null_objects(self, tilemap):
        resolver = SpawnRegionResolver(tilemap)
        assert isinstance(resolver.overlay, NoOverlay)
        assert isinstance(resolver.crops, NoOccupants)
        assert isinstance(resolver.forest, NoForest)

    def test_null_objects_pass_every_tile(self):
        assert NoOverlay().has_overlay(1, 1) is False
        assert NoOccupants().occupant_at(1, 1) is None
        assert NoForest().get_forest_grass_tiles() == []

    def test_small_map_without_grass_band(self):
        tilemap = FakeTileMap(width=5, height=4)
        resolver = SpawnRegionResolver(tilemap)
        area = resolver.get_spawn_areas()[0]
        assert area.height == 0
        assert not resolver.is_valid_spawn_tile(1, 1)
