"""Tests for resources, the inventory and the roadside stand."""

import pytest

from tick_meadow.resources import Inventory, ResourceDef, ResourceRegistry
from tick_meadow.stand import SLOT_COUNT, RoadsideStand


@pytest.fixture
def registry():
    return ResourceRegistry()


class TestResourceRegistry:
    def test_sellable_resources(self, registry):
        ids = {r.id for r in registry.sellable()}
        assert "crop_pumpkin" in ids
        assert "flower" in ids
        assert "ore_iron" not in ids
        assert "gold" not in ids
        assert len(ids) == 11

    def test_unknown_id_raises_key_error(self, registry):
        with pytest.raises(KeyError):
            registry["crop_banana"]
        assert registry.get("crop_banana") is None

    def test_duplicate_registration_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.register(ResourceDef("wood", "Wood", "wood", 753))

    def test_prices(self, registry):
        assert registry["crop_pumpkin"].sell_price == 430
        assert registry["flower"].sell_price == 2


class TestInventory:
    def test_add_and_count(self):
        inv = Inventory()
        inv.add("wood", 3)
        assert inv.count("wood") == 3
        assert inv.has("wood", 3)
        assert not inv.has("wood", 4)

    def test_remove_short_changes_nothing(self):
        inv = Inventory()
        inv.add("wood", 1)
        assert not inv.remove("wood", 2)
        assert inv.count("wood") == 1
        assert inv.remove("wood")
        assert inv.items() == {}

    def test_negative_add_rejected(self):
        with pytest.raises(ValueError):
            Inventory().add("wood", -1)


class TestRoadsideStand:
    def test_slot_centres_over_middle_tiles(self):
        stand = RoadsideStand()
        assert len(stand.slot_centers_x) == SLOT_COUNT
        assert stand.get_slot_world_x(0) == pytest.approx(40 * 16 + 16 / 6)
        assert stand.get_slot_world_x(5) == pytest.approx(41 * 16 + 2.5 * 16 / 3)

    def test_slot_tile_and_service_row(self):
        stand = RoadsideStand()
        assert stand.get_slot_tile_x(2) == 40
        assert stand.get_slot_tile_x(3) == 41
        assert stand.service_tile_y() == 65
        assert stand.traveler_stop_y() == 1016

    def test_obstacles_are_middle_tiles(self):
        stand = RoadsideStand()
        assert stand.is_obstacle(40, 64)
        assert stand.is_obstacle(41, 64)
        assert not stand.is_obstacle(39, 64)

    def test_list_and_clear(self, registry):
        stand = RoadsideStand()
        stand.list_item(1, registry["crop_carrot"], auto_replenish=True)
        stand.list_item(4, registry["crop_carrot"])
        assert stand.get_listed_resource_ids() == ["crop_carrot", "crop_carrot"]
        assert stand.has_resource("crop_carrot")
        assert stand.claimed_count("crop_carrot", excluding=1) == 1
        stand.clear_slot(1)
        assert stand.slots[1].is_empty
        assert not stand.slots[1].auto_replenish

    def test_unsellable_item_rejected(self, registry):
        with pytest.raises(ValueError):
            RoadsideStand().list_item(0, registry["ore_iron"])

    def test_slot_index_out_of_range(self, registry):
        stand = RoadsideStand()
        with pytest.raises(IndexError):
            stand.list_item(6, registry["crop_carrot"])
        with pytest.raises(IndexError):
            stand.get_slot_world_x(-1)

    def test_arrival_callback(self):
        arrived = []
        stand = RoadsideStand(on_traveler_arrived=arrived.append)
        stand.notify_arrived("traveler")
        assert arrived == ["traveler"]

    def test_sort_y_is_bottom_of_base_row(self):
        assert RoadsideStand().sort_y() == 65 * 16
