"""Tests for ore veins and the ore manager."""

import random

import pytest

from tick_meadow.config import OreConfig
from tick_meadow.ores import ORE_TYPES, MiningStage, OreManager, OreVein, visual_stage


def make_vein(resources=8):
    return OreVein(10, 10, ORE_TYPES["IRON"], resources)


class TestVisualStage:
    @pytest.mark.parametrize(
        "remaining,expected",
        [
            (8, MiningStage.FULL),
            (7, MiningStage.FULL),
            (6, MiningStage.PARTIAL),  # exactly 0.75 is not full
            (5, MiningStage.PARTIAL),
            (4, MiningStage.DEPLETED),  # exactly 0.5 is not partial
            (1, MiningStage.DEPLETED),
            (0, MiningStage.GONE),
        ],
    )
    def test_thresholds_are_strict(self, remaining, expected):
        assert visual_stage(remaining, 8) is expected


class TestOreVein:
    def test_two_mines_from_eight(self):
        vein = make_vein(8)
        first = vein.mine()
        second = vein.mine()
        assert vein.resources_remaining == 6
        assert vein.stage is MiningStage.PARTIAL
        assert first.stage_changed is False
        assert second.stage_changed is True
        assert first.ore_yielded == second.ore_yielded == "ore_iron"

    def test_mine_to_depletion(self):
        vein = make_vein(2)
        vein.mine()
        result = vein.mine()
        assert result.depleted
        assert result.stage_changed
        assert vein.is_depleted()
        assert not vein.can_be_mined()

    def test_mine_depleted_is_noop(self):
        vein = make_vein(1)
        vein.mine()
        result = vein.mine()
        assert result.stage_changed is False
        assert result.ore_yielded is None
        assert vein.resources_remaining == 0

    def test_fades_after_depletion(self):
        vein = make_vein(1)
        vein.update(1000)
        assert not vein.is_gone
        vein.mine()
        vein.update(250)
        assert vein.alpha == pytest.approx(0.5)
        vein.update(250)
        assert vein.is_gone

    def test_footprint_is_two_by_two(self):
        vein = make_vein()
        assert vein.tile_positions() == [(10, 10), (11, 10), (10, 11), (11, 11)]
        assert vein.contains_tile(11, 11)
        assert not vein.contains_tile(12, 10)

    def test_sort_y_near_bottom_of_footprint(self):
        assert make_vein().sort_y(16) == 183

    def test_tile_ids_follow_stage(self):
        vein = make_vein(4)
        assert vein.tile_ids() == ORE_TYPES["IRON"].full
        vein.mine()
        assert vein.tile_ids() == ORE_TYPES["IRON"].partial

    def test_rejects_empty_vein(self):
        with pytest.raises(ValueError):
            OreVein(0, 0, ORE_TYPES["COAL"], 0)


class TestOreManager:
    def test_spawn_resources_in_range(self, tilemap):
        manager = OreManager(tilemap, OreConfig(), random.Random(1))
        for i in range(20):
            ore = manager.spawn_ore(i, 10)
            assert 5 <= ore.initial_resources <= 10

    def test_spawn_random_ores_do_not_overlap(self, tilemap):
        manager = OreManager(tilemap, rng=random.Random(4))
        veins = manager.spawn_random_ores(15)
        tiles = [pos for vein in veins for pos in vein.tile_positions()]
        assert len(tiles) == len(set(tiles))
        assert all(y >= 6 for _, y in tiles)
        assert manager.ore_count() == len(veins)

    def test_mine_ore_adds_effect(self, tilemap):
        manager = OreManager(tilemap, rng=random.Random(1))
        manager.spawn_ore(4, 8, ORE_TYPES["GOLD"])
        result = manager.mine_ore(5, 9)
        assert result.ore_yielded == "ore_gold"
        assert len(manager.mining_effects) == 1

    def test_mine_empty_tile(self, tilemap):
        manager = OreManager(tilemap, rng=random.Random(1))
        assert manager.mine_ore(4, 8) is None

    def test_update_removes_gone_veins(self, tilemap):
        manager = OreManager(tilemap, OreConfig(min_resources=1, max_resources=1), random.Random(1))
        manager.spawn_ore(4, 8)
        manager.mine_ore(4, 8)
        manager.update(500)
        assert manager.ore_veins == []
        assert manager.occupant_at(4, 8) is None
