"""Ore veins: 2x2 rocks mined one unit at a time, and their manager."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import IntEnum

from tick_meadow.collaborators import TileMap
from tick_meadow.config import OreConfig
from tick_meadow.effects import FloatingEffect, update_floating
from tick_meadow.types import TilePos


@dataclass(frozen=True)
class OreType:
    name: str
    resource_id: str
    icon_tile_id: int
    full: tuple[int, int, int, int]
    partial: tuple[int, int, int, int]
    depleted: tuple[int, int, int, int]


ORE_TYPES: dict[str, OreType] = {
    "IRON": OreType(
        "Iron", "ore_iron", 1463,
        (1393, 1394, 1457, 1458), (1395, 1396, 1459, 1460), (1397, 1398, 1461, 1462),
    ),
    "COAL": OreType(
        "Coal", "ore_coal", 1591,
        (1521, 1522, 1585, 1586), (1523, 1524, 1587, 1588), (1525, 1526, 1589, 1590),
    ),
    "MITHRIL": OreType(
        "Mithril", "ore_mithril", 1719,
        (1649, 1650, 1713, 1714), (1651, 1652, 1715, 1716), (1653, 1654, 1717, 1718),
    ),
    "GOLD": OreType(
        "Gold", "ore_gold", 1847,
        (1777, 1778, 1841, 1842), (1779, 1780, 1843, 1844), (1781, 1782, 1845, 1846),
    ),
    "ROCK": OreType(
        "Rock", "ore_stone", 1975,
        (1905, 1906, 1969, 1970), (1907, 1908, 1971, 1972), (1909, 1910, 1973, 1974),
    ),
}


class MiningStage(IntEnum):
    FULL = 0
    PARTIAL = 1
    DEPLETED = 2
    GONE = 3


def visual_stage(remaining: int, initial: int) -> MiningStage:
    """Stage for a remaining/initial ratio; every threshold is strict."""
    ratio = remaining / initial if initial > 0 else 0.0
    if ratio > 0.75:
        return MiningStage.FULL
    if ratio > 0.5:
        return MiningStage.PARTIAL
    if ratio > 0:
        # The last quarter reuses the depleted sprite.
        return MiningStage.DEPLETED
    return MiningStage.GONE


@dataclass(frozen=True)
class MineResult:
    stage_changed: bool
    ore_yielded: str | None
    depleted: bool = False


class OreVein:
    def __init__(
        self, tile_x: int, tile_y: int, ore_type: OreType, resources: int,
        fade_ms: float = 500.0,
    ) -> None:
        if resources < 1:
            raise ValueError(f"resources must be >= 1, got {resources}")
        self.tile_x = tile_x
        self.tile_y = tile_y
        self.ore_type = ore_type
        self.initial_resources = resources
        self.resources_remaining = resources
        self.depleted = False
        self.is_gone = False
        self.alpha = 1.0
        self.fade_timer = 0.0
        self.fade_ms = fade_ms

    def __repr__(self) -> str:
        return (
            f"OreVein({self.ore_type.name!r}, tile=({self.tile_x}, {self.tile_y}), "
            f"{self.resources_remaining}/{self.initial_resources})"
        )

    @property
    def stage(self) -> MiningStage:
        return visual_stage(self.resources_remaining, self.initial_resources)

    def tile_ids(self) -> tuple[int, ...]:
        stage = self.stage
        if stage is MiningStage.FULL:
            return self.ore_type.full
        if stage is MiningStage.PARTIAL:
            return self.ore_type.partial
        if stage is MiningStage.DEPLETED:
            return self.ore_type.depleted
        return ()

    def tile_positions(self) -> list[TilePos]:
        x, y = self.tile_x, self.tile_y
        return [(x, y), (x + 1, y), (x, y + 1), (x + 1, y + 1)]

    def contains_tile(self, x: int, y: int) -> bool:
        return self.tile_x <= x <= self.tile_x + 1 and self.tile_y <= y <= self.tile_y + 1

    def can_be_mined(self) -> bool:
        return self.resources_remaining > 0 and not self.depleted and not self.is_gone

    def is_depleted(self) -> bool:
        return self.resources_remaining <= 0 or self.depleted

    def mine(self) -> MineResult:
        if self.resources_remaining <= 0 or self.depleted:
            return MineResult(stage_changed=False, ore_yielded=None)

        before = self.stage
        self.resources_remaining -= 1
        after = self.stage

        if self.resources_remaining <= 0:
            self.depleted = True
            return MineResult(stage_changed=True, ore_yielded=self.ore_type.resource_id, depleted=True)
        return MineResult(stage_changed=before is not after, ore_yielded=self.ore_type.resource_id)

    def update(self, dt: float) -> None:
        if self.depleted and not self.is_gone:
            self.fade_timer += dt
            self.alpha = max(0.0, 1.0 - self.fade_timer / self.fade_ms)
            if self.fade_timer >= self.fade_ms:
                self.is_gone = True
                self.alpha = 0.0

    def sort_y(self, tile_size: int) -> float:
        return (self.tile_y + 1.5) * tile_size - 1


class OreManager:
    """Owns the ore veins on the map.

    Also serves as the ore occupancy lookup for flower and weed spawning.
    """

    def __init__(
        self,
        tilemap: TileMap,
        config: OreConfig | None = None,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.tilemap = tilemap
        self.config = config if config is not None else OreConfig()
        self._rng = rng if rng is not None else random.Random()
        self._log = logger if logger is not None else logging.getLogger(__name__)
        self.ore_veins: list[OreVein] = []
        self.mining_effects: list[FloatingEffect] = []

    def spawn_ore(self, tile_x: int, tile_y: int, ore_type: OreType | None = None) -> OreVein:
        if ore_type is None:
            ore_type = self._rng.choice(list(ORE_TYPES.values()))
        resources = self._rng.randint(self.config.min_resources, self.config.max_resources)
        ore = OreVein(tile_x, tile_y, ore_type, resources, fade_ms=self.config.fade_ms)
        self.ore_veins.append(ore)
        self._log.debug("Spawned %s ore at (%d, %d)", ore_type.name, tile_x, tile_y)
        return ore

    def spawn_random_ores(self, count: int = 1) -> list[OreVein]:
        """Scatter up to *count* non-overlapping veins over the grass below the house."""
        tm = self.tilemap
        grass_start = tm.house_offset_y + tm.house_height
        max_x = tm.map_width - 2
        max_y = tm.map_height - 2
        if max_x < 0 or max_y < grass_start:
            return []

        used: set[TilePos] = set()
        for ore in self.ore_veins:
            used.update(ore.tile_positions())

        spawned: list[OreVein] = []
        for _ in range(count):
            for _attempt in range(self.config.max_attempts):
                x = self._rng.randint(0, max_x)
                y = self._rng.randint(grass_start, max_y)
                footprint = [(x, y), (x + 1, y), (x, y + 1), (x + 1, y + 1)]
                if any(pos in used for pos in footprint):
                    continue
                used.update(footprint)
                spawned.append(self.spawn_ore(x, y))
                break
        self._log.debug("Spawned %d ore veins (%d total)", len(spawned), len(self.ore_veins))
        return spawned

    def get_ore_at(self, tile_x: int, tile_y: int) -> OreVein | None:
        for ore in self.ore_veins:
            if ore.is_gone:
                continue
            if ore.contains_tile(tile_x, tile_y):
                return ore
        return None

    def occupant_at(self, x: int, y: int) -> OreVein | None:
        return self.get_ore_at(x, y)

    def mine_ore(self, tile_x: int, tile_y: int) -> MineResult | None:
        ore = self.get_ore_at(tile_x, tile_y)
        if ore is None or not ore.can_be_mined():
            return None
        result = ore.mine()
        if result.ore_yielded is not None:
            ts = self.tilemap.tile_size
            self.mining_effects.append(FloatingEffect(
                x=(ore.tile_x + 1) * ts,
                y=(ore.tile_y + 1) * ts,
                tile_id=ore.ore_type.icon_tile_id,
            ))
            self._log.debug(
                "Mined %s: %d/%d remaining",
                ore.ore_type.name, ore.resources_remaining, ore.initial_resources,
            )
        if result.depleted:
            self._log.debug("%s ore depleted at (%d, %d)", ore.ore_type.name, ore.tile_x, ore.tile_y)
        return result

    def update(self, dt: float) -> None:
        for ore in self.ore_veins:
            ore.update(dt)
        self.ore_veins = [ore for ore in self.ore_veins if not ore.is_gone]
        update_floating(self.mining_effects, dt)

    def ore_count(self) -> int:
        return sum(1 for ore in self.ore_veins if not ore.is_gone)
