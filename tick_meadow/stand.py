"""Roadside stand: six item slots sold to passing travelers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from tick_meadow.config import StandConfig
from tick_meadow.resources import ResourceDef
from tick_meadow.types import TilePos

if TYPE_CHECKING:
    from tick_meadow.travelers import Traveler

SLOT_COUNT = 6
SLOTS_PER_TILE = 3
STAND_WIDTH = 4  # tiles

ArrivalCallback = Callable[["Traveler"], None]


@dataclass
class StandSlot:
    resource: ResourceDef | None = None
    auto_replenish: bool = False

    @property
    def is_empty(self) -> bool:
        return self.resource is None


class RoadsideStand:
    """A four-tile stand whose two middle tiles each hold three slots.

    Slots 0-2 sit over ``tile_x + 1``, slots 3-5 over ``tile_x + 2``.
    Travelers stop on the row north of the stand, workers serve from the
    row south of it.
    """

    def __init__(
        self,
        config: StandConfig | None = None,
        on_traveler_arrived: ArrivalCallback | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config if config is not None else StandConfig()
        self.tile_x = self.config.tile_x
        self.tile_y = self.config.tile_y
        self.tile_size = self.config.tile_size
        self.width = STAND_WIDTH
        self.slots: list[StandSlot] = [StandSlot() for _ in range(SLOT_COUNT)]
        self.slot_centers_x: tuple[float, ...] = self._compute_slot_centers()
        self._obstacles: frozenset[TilePos] = frozenset({
            (self.tile_x + 1, self.tile_y),
            (self.tile_x + 2, self.tile_y),
        })
        self.on_traveler_arrived = on_traveler_arrived
        self._log = logger if logger is not None else logging.getLogger(__name__)

    def _compute_slot_centers(self) -> tuple[float, ...]:
        seg = self.tile_size / SLOTS_PER_TILE
        centers = []
        for tx in (self.tile_x + 1, self.tile_x + 2):
            for i in range(SLOTS_PER_TILE):
                centers.append(tx * self.tile_size + (i + 0.5) * seg)
        return tuple(centers)

    def _check_index(self, i: int) -> None:
        if not 0 <= i < SLOT_COUNT:
            raise IndexError(f"stand slot {i} out of range 0..{SLOT_COUNT - 1}")

    # -- Slots --

    def get_listed_resource_ids(self) -> list[str]:
        return [s.resource.id for s in self.slots if s.resource is not None]

    def has_resource(self, resource_id: str) -> bool:
        return any(s.resource is not None and s.resource.id == resource_id for s in self.slots)

    def list_item(self, i: int, resource: ResourceDef, auto_replenish: bool = False) -> None:
        self._check_index(i)
        if resource.sell_price is None:
            raise ValueError(f"{resource.id!r} has no sell price")
        self.slots[i] = StandSlot(resource, auto_replenish)
        self._log.debug("Listed %s in slot %d", resource.id, i)

    def clear_slot(self, i: int) -> None:
        self._check_index(i)
        self.slots[i] = StandSlot()

    def claimed_count(self, resource_id: str, *, excluding: int | None = None) -> int:
        """Number of slots holding *resource_id*, optionally ignoring one slot."""
        return sum(
            1 for i, s in enumerate(self.slots)
            if i != excluding and s.resource is not None and s.resource.id == resource_id
        )

    # -- Geometry --

    def get_slot_world_x(self, i: int) -> float:
        self._check_index(i)
        return self.slot_centers_x[i]

    def get_slot_tile_x(self, i: int) -> int:
        self._check_index(i)
        return self.tile_x + 1 if i < SLOTS_PER_TILE else self.tile_x + 2

    def service_tile_y(self) -> int:
        return self.tile_y + 1

    def traveler_stop_y(self) -> float:
        """Centre of the tile row just north of the stand base."""
        return (self.tile_y - 1) * self.tile_size + self.tile_size / 2

    def is_obstacle(self, x: int, y: int) -> bool:
        return (x, y) in self._obstacles

    def sort_y(self) -> int:
        return (self.tile_y + 1) * self.tile_size

    # -- Traveler hand-off --

    def notify_arrived(self, traveler: Traveler) -> None:
        if self.on_traveler_arrived is not None:
            self.on_traveler_arrived(traveler)
