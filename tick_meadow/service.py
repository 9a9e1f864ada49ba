"""Serving travelers who stop at the roadside stand."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from tick_meadow.collaborators import SelfServe, StandWorkers
from tick_meadow.config import StandConfig
from tick_meadow.resources import GOLD_ID, Inventory, ResourceDef
from tick_meadow.stand import RoadsideStand
from tick_meadow.travelers import Traveler


class ServiceState(Enum):
    IDLE = "idle"
    DISPATCHING = "dispatching"
    WAITING = "waiting"


@dataclass(frozen=True)
class Sale:
    slot_index: int
    resource_id: str
    price: int


class StandService:
    """One traveler at a time: dispatch a worker per purchase, sell, pause, repeat.

    IDLE -> DISPATCHING -> WAITING -> DISPATCHING (next slot) ... -> IDLE.
    The traveler is released with ``resume_walking`` when the plan runs
    out, when no worker is free, or when the service is already busy.
    """

    def __init__(
        self,
        stand: RoadsideStand,
        inventory: Inventory,
        workers: StandWorkers | None = None,
        config: StandConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.stand = stand
        self.inventory = inventory
        self.workers: StandWorkers = workers if workers is not None else SelfServe()
        self.config = config if config is not None else stand.config
        self._log = logger if logger is not None else logging.getLogger(__name__)
        self.sales: list[Sale] = []
        self._reset()

    def _reset(self) -> None:
        self.state = ServiceState.IDLE
        self.worker_id: str | None = None
        self.slot_index = -1
        self.traveler: Traveler | None = None
        self.wait_timer = 0.0

    @property
    def is_idle(self) -> bool:
        return self.state is ServiceState.IDLE

    def on_traveler_arrived(self, traveler: Traveler) -> None:
        slot_index = traveler.current_slot
        if self.state is not ServiceState.IDLE or slot_index is None:
            traveler.resume_walking()
            return
        self.state = ServiceState.DISPATCHING
        self.worker_id = None
        self.slot_index = slot_index
        self.traveler = traveler
        self.wait_timer = 0.0
        self._dispatch()

    def _dispatch(self) -> None:
        if self.traveler is None:
            self._log.warning("Dispatch for slot %d without a traveler", self.slot_index)
            self._reset()
            return
        slot = self.stand.slots[self.slot_index]
        if slot.resource is None:
            self._advance()
            return

        service_tile = (self.stand.get_slot_tile_x(self.slot_index), self.stand.service_tile_y())
        worker_id = self.workers.assign(self.slot_index, service_tile)
        if worker_id is None:
            self._log.debug("No worker free for slot %d; traveler moves on", self.slot_index)
            self.traveler.resume_walking()
            self._reset()
            return

        self.worker_id = worker_id
        if self.workers.completes_immediately:
            self.complete_service(self.slot_index)

    def _advance(self) -> None:
        traveler = self.traveler
        if traveler is None:
            self._reset()
            return

        traveler.current_purchase_index += 1
        next_slot = traveler.current_slot
        if next_slot is None:
            traveler.resume_walking()
            self._reset()
            return

        self.slot_index = next_slot
        self.state = ServiceState.DISPATCHING
        traveler.move_to_next_slot(self.stand.get_slot_world_x(next_slot))
        self._dispatch()

    def complete_service(self, slot_index: int) -> Sale | None:
        """Hand the item in *slot_index* to the waiting traveler.

        Called by the worker pool once its worker is at the stand. Starts
        the post-sale pause whether or not a sale went through.
        """
        if self.state is not ServiceState.DISPATCHING or slot_index != self.slot_index:
            self._log.warning(
                "complete_service(%d) ignored in state %s (slot %d)",
                slot_index, self.state.value, self.slot_index,
            )
            return None
        if self.traveler is None:
            self._log.warning("complete_service(%d) without a traveler", slot_index)
            self._release_worker()
            self._reset()
            return None

        self.state = ServiceState.WAITING
        self.wait_timer = 0.0

        slot = self.stand.slots[slot_index]
        resource = slot.resource
        if resource is None:
            return None
        price = resource.sell_price or 0
        if not self.inventory.has(resource.id) or not self.traveler.pay(price):
            self._log.debug("Sale of %s from slot %d fell through", resource.id, slot_index)
            return None

        self.inventory.remove(resource.id)
        self.inventory.add(GOLD_ID, price)
        auto_replenish = slot.auto_replenish
        self.stand.clear_slot(slot_index)
        sale = Sale(slot_index, resource.id, price)
        self.sales.append(sale)
        self._log.info("Sold %s from slot %d for %d gold", resource.name, slot_index, price)

        if auto_replenish:
            self.try_replenish(slot_index, resource)
        return sale

    def try_replenish(self, slot_index: int, resource: ResourceDef) -> bool:
        """Refill a slot if the inventory holds a unit no other slot has claimed."""
        claimed = self.stand.claimed_count(resource.id, excluding=slot_index)
        available = self.inventory.count(resource.id) - claimed
        if available > 0:
            self.stand.list_item(slot_index, resource, auto_replenish=True)
            self._log.info("Auto-replenished slot %d with %s", slot_index, resource.name)
            return True
        self._log.info("Auto-replenish slot %d: no spare %s, slot cleared", slot_index, resource.name)
        return False

    def _release_worker(self) -> None:
        if self.worker_id is not None:
            self.workers.release(self.worker_id)
            self.worker_id = None

    def update(self, dt: float) -> None:
        if self.state is not ServiceState.WAITING:
            return

        self.wait_timer += dt
        traveler = self.traveler
        if traveler is None or traveler.is_despawned:
            self._release_worker()
            self._reset()
            return

        if self.wait_timer >= self.config.wait_ms:
            self._release_worker()
            self._advance()
