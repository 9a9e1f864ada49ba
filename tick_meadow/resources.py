"""Resource definitions and the player's inventory."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class ResourceDef:
    id: str
    name: str
    category: str
    tile_id: int
    sell_price: int | None = None

    @property
    def sellable(self) -> bool:
        return self.sell_price is not None


DEFAULT_RESOURCES: tuple[ResourceDef, ...] = (
    ResourceDef("crop_carrot", "Carrot", "crop", 691, 18),
    ResourceDef("crop_cauliflower", "Cauliflower", "crop", 692, 170),
    ResourceDef("crop_pumpkin", "Pumpkin", "crop", 693, 430),
    ResourceDef("crop_sunflower", "Sunflower", "crop", 694, 200),
    ResourceDef("crop_radish", "Radish", "crop", 695, 22),
    ResourceDef("crop_parsnip", "Parsnip", "crop", 696, 28),
    ResourceDef("crop_potato", "Potato", "crop", 697, 65),
    ResourceDef("crop_cabbage", "Cabbage", "crop", 698, 90),
    ResourceDef("crop_beetroot", "Beetroot", "crop", 699, 75),
    ResourceDef("crop_wheat", "Wheat", "crop", 700, 210),
    ResourceDef("crop_weed", "Weed", "crop", 701),
    ResourceDef("flower", "Flower", "flower", 227, 2),
    ResourceDef("ore_iron", "Iron Ore", "ore", 1463),
    ResourceDef("ore_coal", "Coal", "ore", 1591),
    ResourceDef("ore_mithril", "Mithril Ore", "ore", 1719),
    ResourceDef("ore_gold", "Gold Ore", "ore", 1847),
    ResourceDef("ore_stone", "Stone", "ore", 1975),
    ResourceDef("wood", "Wood", "wood", 753),
    ResourceDef("gold", "Gold Coin", "currency", 1961),
)

GOLD_ID = "gold"


class ResourceRegistry:
    """Lookup of resource definitions by ID, in registration order."""

    def __init__(self, resources: Iterable[ResourceDef] = DEFAULT_RESOURCES) -> None:
        self._defs: dict[str, ResourceDef] = {}
        for rdef in resources:
            self.register(rdef)

    def register(self, rdef: ResourceDef) -> None:
        if rdef.id in self._defs:
            raise ValueError(f"resource {rdef.id!r} already registered")
        self._defs[rdef.id] = rdef

    def __getitem__(self, resource_id: str) -> ResourceDef:
        try:
            return self._defs[resource_id]
        except KeyError:
            raise KeyError(f"unknown resource {resource_id!r}") from None

    def __contains__(self, resource_id: object) -> bool:
        return resource_id in self._defs

    def __iter__(self) -> Iterator[ResourceDef]:
        return iter(self._defs.values())

    def __len__(self) -> int:
        return len(self._defs)

    def get(self, resource_id: str) -> ResourceDef | None:
        return self._defs.get(resource_id)

    def sellable(self) -> list[ResourceDef]:
        return [r for r in self._defs.values() if r.sellable]


class Inventory:
    """Resource counts keyed by resource ID."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._items: dict[str, int] = {}
        self._log = logger if logger is not None else logging.getLogger(__name__)

    def add(self, resource_id: str, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        self._items[resource_id] = self._items.get(resource_id, 0) + amount
        self._log.debug("Added %d %s. Total: %d", amount, resource_id, self._items[resource_id])

    def remove(self, resource_id: str, amount: int = 1) -> bool:
        """Take *amount* out. Returns False and changes nothing when short."""
        current = self._items.get(resource_id, 0)
        if current < amount:
            return False
        self._items[resource_id] = current - amount
        return True

    def count(self, resource_id: str) -> int:
        return self._items.get(resource_id, 0)

    def has(self, resource_id: str, amount: int = 1) -> bool:
        return self.count(resource_id) >= amount

    def items(self) -> dict[str, int]:
        """Non-zero counts."""
        return {rid: n for rid, n in self._items.items() if n > 0}
