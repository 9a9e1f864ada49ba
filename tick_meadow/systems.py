"""System factories adapting the meadow managers to the engine loop."""
from __future__ import annotations

from typing import TYPE_CHECKING

from tick_meadow.ores import OreManager
from tick_meadow.service import StandService
from tick_meadow.spawning import FlowerManager
from tick_meadow.travelers import TravelerManager
from tick_meadow.types import System

if TYPE_CHECKING:
    from tick_meadow.types import TickContext
    from tick_meadow.world import Meadow


def make_flower_system(manager: FlowerManager) -> System:
    def flower_system(world: Meadow, ctx: TickContext) -> None:
        manager.update(ctx.dt)

    return flower_system


def make_ore_system(manager: OreManager) -> System:
    def ore_system(world: Meadow, ctx: TickContext) -> None:
        manager.update(ctx.dt)

    return ore_system


def make_traveler_system(manager: TravelerManager) -> System:
    def traveler_system(world: Meadow, ctx: TickContext) -> None:
        manager.update(ctx.dt)

    return traveler_system


def make_stand_service_system(service: StandService) -> System:
    """Return a system that runs the stand's post-sale pause.

    Arrivals and sales happen inside the traveler system through the
    stand callback; this system only counts down the pause.
    """

    def stand_service_system(world: Meadow, ctx: TickContext) -> None:
        service.update(ctx.dt)

    return stand_service_system


def make_meadow_systems(meadow: Meadow) -> list[System]:
    """All systems for *meadow*, in the order they must run."""
    systems = [
        make_flower_system(meadow.flowers),
        make_ore_system(meadow.ores),
        make_traveler_system(meadow.travelers),
    ]
    if meadow.service is not None:
        systems.append(make_stand_service_system(meadow.service))
    return systems
