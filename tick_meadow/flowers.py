"""Wild flowers: harvestable once, then fade away."""
from __future__ import annotations

import random
from dataclasses import dataclass

from tick_meadow.lifecycle import FadingLifecycle, LifeState


@dataclass(frozen=True)
class FlowerType:
    name: str
    rarity: float
    tiles: tuple[int, ...]
    harvest_icon: int = 227
    resource_id: str = "flower"


FLOWER_TYPES: dict[str, FlowerType] = {
    "BLUE": FlowerType(name="Blue Flower", rarity=0.1, tiles=(95, 96, 97, 98)),
    "RED": FlowerType(name="Red Flower", rarity=0.3, tiles=(159, 160, 161, 162)),
    "WHITE": FlowerType(name="White Flower", rarity=0.6, tiles=(223, 224, 225, 226)),
}


def pick_flower_type(rng: random.Random) -> FlowerType:
    """Pick a flower type by cumulative rarity; white when rounding leaves a gap."""
    roll = rng.random()
    cumulative = 0.0
    for ftype in FLOWER_TYPES.values():
        cumulative += ftype.rarity
        if roll < cumulative:
            return ftype
    return FLOWER_TYPES["WHITE"]


def pick_flower_tile(rng: random.Random, ftype: FlowerType) -> int:
    return rng.choice(ftype.tiles)


class Flower(FadingLifecycle):
    HARVEST_YIELD = 1

    def __init__(
        self, tile_x: int, tile_y: int, flower_type: FlowerType, tile_id: int,
        fade_speed: float = 2.0,
    ) -> None:
        super().__init__(fade_speed)
        self.tile_x = tile_x
        self.tile_y = tile_y
        self.flower_type = flower_type
        self.tile_id = tile_id

    def __repr__(self) -> str:
        return (
            f"Flower({self.flower_type.name!r}, tile=({self.tile_x}, {self.tile_y}), "
            f"state={self.state.value})"
        )

    @property
    def is_harvested(self) -> bool:
        return self.state is not LifeState.ACTIVE

    def contains_tile(self, x: int, y: int) -> bool:
        return self.tile_x == x and self.tile_y == y

    def harvest(self) -> int:
        """Pick the flower. Returns the yield, or 0 if it was already picked."""
        if self.is_harvested:
            return 0
        self._retire(LifeState.HARVESTED)
        return self.HARVEST_YIELD

    def update(self, dt: float) -> None:
        self._update_fade(dt)

    def sort_y(self, tile_size: int) -> int:
        # Ground decoration: top of the tile keeps it behind characters.
        return self.tile_y * tile_size
