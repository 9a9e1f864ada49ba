"""tick-meadow - Tick-driven meadow simulation: wild plants, ore, travelers and a roadside stand."""

from tick_meadow.clock import Clock
from tick_meadow.config import (
    FlowerConfig,
    MeadowConfig,
    OreConfig,
    SpawnConfig,
    StandConfig,
    TravelerConfig,
    WeedConfig,
)
from tick_meadow.engine import Engine
from tick_meadow.flowers import Flower, FlowerType
from tick_meadow.ores import MineResult, MiningStage, OreManager, OreVein
from tick_meadow.preferences import PreferenceEngine, PurchasePlan
from tick_meadow.regions import SpawnRegionResolver
from tick_meadow.density import DensityController
from tick_meadow.resources import Inventory, ResourceDef, ResourceRegistry
from tick_meadow.service import StandService
from tick_meadow.spawning import FlowerManager, SpawnScheduler
from tick_meadow.stand import RoadsideStand
from tick_meadow.systems import (
    make_flower_system,
    make_meadow_systems,
    make_ore_system,
    make_stand_service_system,
    make_traveler_system,
)
from tick_meadow.travelers import MovementPhase, Traveler, TravelerManager
from tick_meadow.types import AreaOrigin, MovementPhaseError, SpawnArea, TickContext, TilePos
from tick_meadow.weeds import Weed
from tick_meadow.world import Meadow, build_meadow

__all__ = [
    "Engine",
    "Clock",
    "TickContext",
    "TilePos",
    "SpawnArea",
    "AreaOrigin",
    "MovementPhaseError",
    "SpawnConfig",
    "FlowerConfig",
    "WeedConfig",
    "OreConfig",
    "TravelerConfig",
    "StandConfig",
    "MeadowConfig",
    "SpawnRegionResolver",
    "DensityController",
    "SpawnScheduler",
    "FlowerManager",
    "Flower",
    "FlowerType",
    "Weed",
    "OreVein",
    "OreManager",
    "MineResult",
    "MiningStage",
    "PreferenceEngine",
    "PurchasePlan",
    "Traveler",
    "TravelerManager",
    "MovementPhase",
    "RoadsideStand",
    "StandService",
    "ResourceDef",
    "ResourceRegistry",
    "Inventory",
    "Meadow",
    "build_meadow",
    "make_flower_system",
    "make_ore_system",
    "make_traveler_system",
    "make_stand_service_system",
    "make_meadow_systems",
]
