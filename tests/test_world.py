"""End-to-end tests: a whole meadow driven by the engine."""

import random

from fakes import FakeCamera, FakeChunks, FakeForest, FakeTileMap

from tick_meadow import Engine, MeadowConfig, TravelerConfig, build_meadow, make_meadow_systems
from tick_meadow.collaborators import Chunk, ChunkKind
from tick_meadow.ores import ORE_TYPES
from tick_meadow.travelers import MovementPhase


def make_engine(seed, clock, **kwargs):
    meadow = build_meadow(FakeTileMap(), rng=random.Random(seed), now_ms=clock, **kwargs)
    engine = Engine(meadow, seed=seed)
    for system in make_meadow_systems(meadow):
        engine.add_system(system)
    return engine


def snapshot(meadow):
    return (
        sorted((f.tile_x, f.tile_y, f.flower_type.name) for f in meadow.flowers.flowers),
        sorted((w.tile_x, w.tile_y, w.stage) for w in meadow.flowers.weeds),
        [(round(t.x, 3), t.phase) for t in meadow.travelers.travelers],
    )


class TestBuildMeadow:
    def test_wires_stand_and_service(self, clock):
        meadow = build_meadow(FakeTileMap(), now_ms=clock)
        assert meadow.stand is not None
        assert meadow.stand.on_traveler_arrived == meadow.service.on_traveler_arrived
        assert meadow.travelers.stand is meadow.stand
        assert meadow.resolver.plants is meadow.flowers
        assert meadow.resolver.ores is meadow.ores

    def test_without_stand(self, clock):
        meadow = build_meadow(FakeTileMap(), with_stand=False, now_ms=clock)
        assert meadow.stand is None
        assert meadow.service is None
        assert len(make_meadow_systems(meadow)) == 3

    def test_optional_collaborators_passed_through(self, clock, chunks):
        forest = FakeForest([(35, 25)])
        camera = FakeCamera(0.0, 320.0)
        meadow = build_meadow(
            FakeTileMap(), chunks=chunks, forest=forest, camera=camera, now_ms=clock,
        )
        assert len(meadow.resolver.get_spawn_areas()) == 3
        assert meadow.travelers.visible_bounds() == (0.0, 320.0)


class TestPlayerActions:
    def test_harvest_banks_flower(self, clock):
        meadow = build_meadow(FakeTileMap(), rng=random.Random(1), now_ms=clock)
        meadow.flowers.spawn_flower(3, 10)
        result = meadow.harvest_flower(3, 10)
        assert result.yield_ == 1
        assert meadow.inventory.count("flower") == 1
        assert meadow.harvest_flower(3, 10) is None

    def test_mining_banks_ore(self, clock):
        meadow = build_meadow(FakeTileMap(), rng=random.Random(1), now_ms=clock)
        meadow.ores.spawn_ore(10, 12, ORE_TYPES["COAL"])
        meadow.mine(11, 13)
        assert meadow.inventory.count("ore_coal") == 1

    def test_ore_blocks_plant_spawns(self, clock):
        meadow = build_meadow(FakeTileMap(), rng=random.Random(1), now_ms=clock)
        meadow.ores.spawn_ore(10, 12)
        assert not meadow.flowers.is_valid_spawn_tile(11, 12)

    def test_pull_weed(self, clock):
        meadow = build_meadow(FakeTileMap(), rng=random.Random(1), now_ms=clock)
        meadow.flowers.spawn_weed(5, 15)
        clicks = [meadow.pull_weed(5, 15).removed for _ in range(4)]
        assert clicks == [False, False, False, True]

    def test_tile_changed_recounts_grass(self, clock):
        tilemap = FakeTileMap()
        meadow = build_meadow(tilemap, now_ms=clock)
        before = meadow.flowers.get_grass_tile_count()
        tilemap.set_tile(3, 10, 67)
        meadow.tile_changed()
        assert meadow.flowers.get_grass_tile_count() == before - 1


class TestSimulation:
    def test_cap_holds_over_long_run(self, clock):
        config = MeadowConfig()
        engine = make_engine(5, clock, config=config)
        engine.run(600, 1000)
        flowers = engine.world.flowers
        assert len(flowers.flowers) + len(flowers.weeds) <= config.spawn.max_entities
        assert flowers.flowers or flowers.weeds

    def test_replay_is_deterministic(self, clock):
        a = make_engine(21, clock)
        b = make_engine(21, clock)
        a.run(300, 250)
        b.run(300, 250)
        assert snapshot(a.world) == snapshot(b.world)

    def test_travelers_shop_at_stocked_stand(self, clock):
        config = MeadowConfig(traveler=TravelerConfig(
            spawn_interval_min=2000, spawn_interval_max=2000,
        ))
        engine = make_engine(3, clock, config=config)
        meadow = engine.world
        for i, rid in enumerate(["crop_carrot", "crop_radish", "crop_parsnip",
                                 "crop_potato", "crop_beetroot", "crop_cabbage"]):
            meadow.inventory.add(rid, 5)
            meadow.stand.list_item(i, meadow.registry[rid], auto_replenish=True)

        phases = set()

        def watch(world, ctx):
            for t in world.travelers.travelers:
                t.assert_consistent()
                phases.add(t.phase)

        engine.add_system(watch)
        engine.run(400, 250)

        assert meadow.service.sales
        assert meadow.inventory.count("gold") == sum(s.price for s in meadow.service.sales)
        assert MovementPhase.WAITING in phases
        assert MovementPhase.RETURN_TO_PATH in phases


def test_spawns_land_in_areas_or_forest_grass(clock):
    tilemap = FakeTileMap(width=20, height=20)
    chunks = FakeChunks([Chunk(0, 0, ChunkKind.FARM), Chunk(1, 1, ChunkKind.FOREST)])
    forest = FakeForest([(12, 2), (13, 3), (14, 4)])
    meadow = build_meadow(
        tilemap, chunks=chunks, forest=forest, with_stand=False,
        rng=random.Random(2), now_ms=clock,
    )
    areas = meadow.resolver.get_spawn_areas()
    spawned = [meadow.flowers.spawn_random_flower() for _ in range(80)]
    spawned = [f for f in spawned if f is not None]
    assert spawned
    for flower in spawned:
        pos = (flower.tile_x, flower.tile_y)
        assert pos in forest.grass or any(a.contains(*pos) for a in areas)
