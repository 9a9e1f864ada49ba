"""Contracts for the systems the simulation reads from but does not own.

Optional collaborators default to null objects that never object to a
tile, so a missing manager disables its exclusion rule instead of
blocking every spawn.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Protocol

if TYPE_CHECKING:
    from tick_meadow.types import TilePos


class TileMap(Protocol):
    map_width: int
    map_height: int
    tile_size: int
    house_offset_y: int
    house_height: int
    # Tile position of the structure the town chunk is snapped from.
    town_anchor: TilePos

    def get_tile_at(self, x: int, y: int) -> int | None: ...

    def is_custom_tilemap_tile(self, x: int, y: int) -> bool: ...


class OverlayLookup(Protocol):
    def has_overlay(self, x: int, y: int) -> bool: ...


class OccupancyLookup(Protocol):
    """Crop, tree, ore and enemy managers: whatever stands on a tile."""

    def occupant_at(self, x: int, y: int) -> Any | None: ...


class ForestSource(Protocol):
    trunk_tiles: set[TilePos]
    pocket_occupied_tiles: set[TilePos]

    def get_forest_grass_tiles(self) -> list[TilePos]: ...

    def is_valid_forest_spawn_tile(self, x: int, y: int) -> bool: ...


class ChunkKind(Enum):
    FARM = "farm"
    TOWN = "town"
    FOREST = "forest"


@dataclass(frozen=True)
class Chunk:
    col: int
    row: int
    kind: ChunkKind


@dataclass(frozen=True)
class ChunkBounds:
    x: int
    y: int
    width: int
    height: int


class ChunkSource(Protocol):
    chunk_size: int

    def allocated_chunks(self) -> Iterable[Chunk]: ...

    def get_chunk_bounds(self, col: int, row: int) -> ChunkBounds: ...


class Camera(Protocol):
    def get_visible_bounds(self) -> tuple[float, float]:
        """Return (left, right) of the viewport in world pixels."""
        ...


class NoOverlay:
    def has_overlay(self, x: int, y: int) -> bool:
        return False


class NoOccupants:
    def occupant_at(self, x: int, y: int) -> None:
        return None


class NoForest:
    """A world without forest: no extra grass, and forest tiles never validate."""

    def __init__(self) -> None:
        self.trunk_tiles: set[TilePos] = set()
        self.pocket_occupied_tiles: set[TilePos] = set()

    def get_forest_grass_tiles(self) -> list[TilePos]:
        return []

    def is_valid_forest_spawn_tile(self, x: int, y: int) -> bool:
        return False


class StandWorkers(Protocol):
    """Whoever walks over to the stand to hand items to travelers.

    When ``completes_immediately`` is false the pool must call
    ``StandService.complete_service`` once its worker reaches the stand.
    """

    completes_immediately: bool

    def assign(self, slot_index: int, service_tile: TilePos) -> str | None: ...

    def release(self, worker_id: str) -> None: ...


class SelfServe:
    """No workers: the traveler takes the item and leaves coins on the counter."""

    completes_immediately = True
    worker_id = "counter"

    def assign(self, slot_index: int, service_tile: TilePos) -> str | None:
        return self.worker_id

    def release(self, worker_id: str) -> None:
        pass
