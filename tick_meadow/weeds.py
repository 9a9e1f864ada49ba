"""Weeds: grow over time and are pulled out with repeated clicks."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from tick_meadow.lifecycle import FadingLifecycle, LifeState

# Weed sprites live in the crop sheet at column 10.
_WEED_COLUMN = 10


@dataclass(frozen=True)
class WeedTile:
    tile_id: int
    offset_y: int


WEED_TILES: dict[int, tuple[WeedTile, ...]] = {
    1: (WeedTile(819 + _WEED_COLUMN, 0),),
    2: (WeedTile(883 + _WEED_COLUMN, 0),),
    3: (WeedTile(947 + _WEED_COLUMN, -1), WeedTile(1011 + _WEED_COLUMN, 0)),
    4: (WeedTile(1075 + _WEED_COLUMN, -1), WeedTile(1139 + _WEED_COLUMN, 0)),
}

TALL_STAGE = 3


class Weed(FadingLifecycle):
    """A weed at ``stage`` 1..``max_stage``.

    Clicks and the growth timer both push the stage up. A click at the
    last stage pulls the weed out, so a fresh weed needs ``max_stage``
    clicks. A weed only grows tall while ``room_above`` reports the tile
    north of it free; a click that cannot grow it pulls it out instead.
    """

    def __init__(
        self,
        tile_x: int,
        tile_y: int,
        *,
        max_stage: int = 4,
        growth_ms_per_stage: float = 40000.0,
        fade_speed: float = 2.0,
        room_above: Callable[[int, int], bool] | None = None,
    ) -> None:
        super().__init__(fade_speed)
        self.room_above = room_above
        self.tile_x = tile_x
        self.tile_y = tile_y
        self.stage = 1
        self.max_stage = max_stage
        self.growth_ms_per_stage = growth_ms_per_stage
        self.growth_timer = 0.0

    def __repr__(self) -> str:
        return f"Weed(tile=({self.tile_x}, {self.tile_y}), stage={self.stage}, state={self.state.value})"

    @property
    def is_removed(self) -> bool:
        return self.state is not LifeState.ACTIVE

    @property
    def is_tall(self) -> bool:
        return self.stage >= TALL_STAGE

    def contains_tile(self, x: int, y: int) -> bool:
        if x != self.tile_x:
            return False
        if self.is_tall:
            return y == self.tile_y or y == self.tile_y - 1
        return y == self.tile_y

    def click(self) -> bool:
        """Returns True when this click pulled the weed out."""
        if self.is_removed:
            return False
        self.growth_timer = 0.0
        if not self.advance_stage():
            self._retire(LifeState.REMOVED)
            return True
        return False

    def _can_grow_tall(self) -> bool:
        return self.room_above is None or self.room_above(self.tile_x, self.tile_y - 1)

    def advance_stage(self) -> bool:
        if self.stage >= self.max_stage:
            return False
        if self.stage + 1 == TALL_STAGE and not self._can_grow_tall():
            return False
        self.stage += 1
        return True

    def update(self, dt: float) -> None:
        if self.is_active and self.stage < self.max_stage:
            self.growth_timer += dt
            if self.growth_timer >= self.growth_ms_per_stage:
                self.growth_timer = 0.0
                self.advance_stage()
        self._update_fade(dt)

    def tile_data(self) -> tuple[WeedTile, ...]:
        if self.is_removed:
            return ()
        return WEED_TILES.get(self.stage, WEED_TILES[4])

    def sort_y(self, tile_size: int) -> int:
        return self.tile_y * tile_size
