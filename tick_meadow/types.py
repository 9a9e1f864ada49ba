"""Shared type aliases and value types for the meadow simulation."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

# Composite occupancy key: (tile_x, tile_y).
TilePos = tuple[int, int]


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float  # milliseconds since the previous tick
    elapsed: float  # milliseconds since the first tick
    request_stop: Callable[[], None]
    random: _random.Random


class AreaOrigin(Enum):
    FARM = "farm"
    TOWN = "town"
    FOREST_CHUNK = "forest_chunk"


@dataclass(frozen=True, slots=True)
class SpawnArea:
    """Rectangle of spawnable tiles, half-open on the right and bottom edges."""

    left: int
    right: int
    top: int
    bottom: int
    origin: AreaOrigin

    @property
    def width(self) -> int:
        return max(0, self.right - self.left)

    @property
    def height(self) -> int:
        return max(0, self.bottom - self.top)

    @property
    def weight(self) -> int:
        """Sampling weight; a flat band still counts as one row."""
        return self.width * max(1, self.height)

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom


class MovementPhaseError(RuntimeError):
    """Raised when a traveler's phase payload contradicts its phase."""

    def __init__(self, phase: Any, message: str) -> None:
        self.phase = phase
        super().__init__(message)


if TYPE_CHECKING:
    from tick_meadow.world import Meadow

System = Callable[["Meadow", TickContext], None]
