"""The meadow world: every manager wired together behind one object."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable

from tick_meadow.collaborators import (
    Camera,
    ChunkSource,
    ForestSource,
    OccupancyLookup,
    OverlayLookup,
    StandWorkers,
    TileMap,
)
from tick_meadow.config import MeadowConfig
from tick_meadow.density import _monotonic_ms
from tick_meadow.ores import MineResult, OreManager
from tick_meadow.regions import SpawnRegionResolver
from tick_meadow.resources import Inventory, ResourceRegistry
from tick_meadow.service import StandService
from tick_meadow.spawning import FlowerManager, HarvestResult, WeedClickResult
from tick_meadow.stand import RoadsideStand
from tick_meadow.travelers import TravelerManager


@dataclass
class Meadow:
    tilemap: TileMap
    config: MeadowConfig
    resolver: SpawnRegionResolver
    flowers: FlowerManager
    ores: OreManager
    travelers: TravelerManager
    registry: ResourceRegistry
    inventory: Inventory
    stand: RoadsideStand | None = None
    service: StandService | None = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("tick_meadow"))

    def harvest_flower(self, tile_x: int, tile_y: int) -> HarvestResult | None:
        """Pick the flower on a tile and bank its yield."""
        result = self.flowers.try_harvest(tile_x, tile_y)
        if result is not None and result.yield_ > 0:
            self.inventory.add(result.flower_type.resource_id, result.yield_)
        return result

    def pull_weed(self, tile_x: int, tile_y: int) -> WeedClickResult | None:
        return self.flowers.try_remove_weed(tile_x, tile_y)

    def mine(self, tile_x: int, tile_y: int) -> MineResult | None:
        result = self.ores.mine_ore(tile_x, tile_y)
        if result is not None and result.ore_yielded is not None:
            self.inventory.add(result.ore_yielded)
        return result

    def tile_changed(self) -> None:
        """Call after hoeing or restoring ground so the grass count is redone."""
        self.flowers.invalidate_grass_cache()


def build_meadow(
    tilemap: TileMap,
    *,
    config: MeadowConfig | None = None,
    chunks: ChunkSource | None = None,
    forest: ForestSource | None = None,
    overlay: OverlayLookup | None = None,
    crops: OccupancyLookup | None = None,
    trees: OccupancyLookup | None = None,
    enemies: OccupancyLookup | None = None,
    camera: Camera | None = None,
    workers: StandWorkers | None = None,
    with_stand: bool = True,
    registry: ResourceRegistry | None = None,
    inventory: Inventory | None = None,
    rng: random.Random | None = None,
    logger: logging.Logger | None = None,
    now_ms: Callable[[], float] = _monotonic_ms,
) -> Meadow:
    """Assemble a :class:`Meadow` from the host game's collaborators.

    Collaborators left as None fall back to null objects. Every manager
    shares *rng*, so a seeded generator replays the same world.
    """
    config = config if config is not None else MeadowConfig()
    rng = rng if rng is not None else random.Random()
    log = logger if logger is not None else logging.getLogger("tick_meadow")
    registry = registry if registry is not None else ResourceRegistry()
    inventory = inventory if inventory is not None else Inventory(log.getChild("inventory"))

    ores = OreManager(tilemap, config.ores, rng, log.getChild("ores"))
    resolver = SpawnRegionResolver(
        tilemap,
        grass_tile_ids=config.spawn.grass_tile_ids,
        chunks=chunks,
        forest=forest,
        overlay=overlay,
        crops=crops,
        trees=trees,
        ores=ores,
        enemies=enemies,
    )
    flowers = FlowerManager(
        resolver,
        spawn_config=config.spawn,
        flower_config=config.flowers,
        weed_config=config.weeds,
        rng=rng,
        logger=log.getChild("flowers"),
        now_ms=now_ms,
    )
    travelers = TravelerManager(
        tilemap, config.traveler, registry=registry, rng=rng, logger=log.getChild("travelers"),
    )
    travelers.set_camera(camera)

    stand = None
    service = None
    if with_stand:
        stand = RoadsideStand(config.stand, logger=log.getChild("stand"))
        service = StandService(stand, inventory, workers, config.stand, log.getChild("service"))
        stand.on_traveler_arrived = service.on_traveler_arrived
        travelers.set_stand(stand)

    return Meadow(
        tilemap=tilemap,
        config=config,
        resolver=resolver,
        flowers=flowers,
        ores=ores,
        travelers=travelers,
        registry=registry,
        inventory=inventory,
        stand=stand,
        service=service,
        logger=log,
    )
