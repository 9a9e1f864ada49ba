"""Flower and weed spawning, and the manager that owns both populations."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable

from tick_meadow.config import FlowerConfig, SpawnConfig, WeedConfig
from tick_meadow.density import DensityController, _monotonic_ms
from tick_meadow.effects import (
    FloatingEffect,
    LeafParticle,
    leaf_splash,
    update_floating,
    update_particles,
)
from tick_meadow.flowers import Flower, FlowerType, pick_flower_tile, pick_flower_type
from tick_meadow.regions import SpawnRegionResolver
from tick_meadow.types import SpawnArea, TilePos
from tick_meadow.weeds import Weed


class SpawnScheduler:
    """Turns elapsed time into spawn attempts.

    The expected interval between attempts is ``1 / chance`` where
    ``chance = rate_per_tile * multiplier * grass_tiles``. Each elapsed
    interval passes a secondary roll against ``gate_floor + U * (1 - gate_floor)``
    before picking weed or flower, so realised spawns run below the
    nominal rate.
    """

    def __init__(self, config: SpawnConfig | None = None) -> None:
        self.config = config if config is not None else SpawnConfig()
        self.spawn_timer = 0.0

    def spawn_chance_per_ms(self, grass_tiles: int, multiplier: float) -> float:
        return self.config.spawn_rate_per_tile * multiplier * grass_tiles

    def tick(
        self,
        dt: float,
        grass_tiles: int,
        multiplier: float,
        rng: random.Random,
        spawn_weed: Callable[[], object],
        spawn_flower: Callable[[], object],
    ) -> int:
        """Advance the timer by *dt* ms. Returns the number of spawn attempts made."""
        if grass_tiles <= 0:
            self.spawn_timer = 0.0
            return 0
        chance = self.spawn_chance_per_ms(grass_tiles, multiplier)
        if chance <= 0:
            self.spawn_timer = 0.0
            return 0

        self.spawn_timer += dt
        avg_spawn_time = 1.0 / chance
        floor = self.config.gate_floor
        attempts = 0
        while self.spawn_timer >= avg_spawn_time:
            self.spawn_timer -= avg_spawn_time
            if rng.random() < floor + rng.random() * (1.0 - floor):
                attempts += 1
                if rng.random() < self.config.weed_share:
                    spawn_weed()
                else:
                    spawn_flower()
        return attempts

    def pick_tile(self, resolver: SpawnRegionResolver, rng: random.Random) -> tuple[TilePos, bool] | None:
        """Find a free spawn tile. Returns ``(pos, is_forest)`` or None after
        ``max_attempts`` misses."""
        forest_tiles = resolver.get_forest_grass_tiles()
        areas = [a for a in resolver.get_spawn_areas() if a.width > 0]
        main_tiles = sum(a.weight for a in areas)
        total = main_tiles + len(forest_tiles)

        in_forest = bool(forest_tiles) and rng.random() < len(forest_tiles) / total
        attempts = self.config.max_attempts

        if in_forest:
            for _ in range(attempts):
                x, y = forest_tiles[rng.randrange(len(forest_tiles))]
                if resolver.is_valid_spawn_tile(x, y, is_forest_tile=True):
                    return (x, y), True
            return None

        if not areas:
            return None
        for _ in range(attempts):
            area = _weighted_area(areas, main_tiles, rng)
            x = area.left + rng.randrange(area.width)
            y = area.top + rng.randrange(max(1, area.height))
            if resolver.is_valid_spawn_tile(x, y):
                return (x, y), False
        return None


def _weighted_area(areas: list[SpawnArea], total_weight: int, rng: random.Random) -> SpawnArea:
    roll = rng.random() * total_weight
    for area in areas:
        roll -= area.weight
        if roll < 0:
            return area
    return areas[-1]


@dataclass(frozen=True)
class HarvestResult:
    flower_type: FlowerType
    yield_: int


@dataclass(frozen=True)
class WeedClickResult:
    removed: bool
    stage: int
    particles: list[LeafParticle] = field(default_factory=list)


class FlowerManager:
    """Owns flowers and weeds: spawning, lookups, player actions, cleanup."""

    def __init__(
        self,
        resolver: SpawnRegionResolver,
        *,
        spawn_config: SpawnConfig | None = None,
        flower_config: FlowerConfig | None = None,
        weed_config: WeedConfig | None = None,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
        now_ms: Callable[[], float] = _monotonic_ms,
    ) -> None:
        self.spawn_config = spawn_config if spawn_config is not None else SpawnConfig()
        self.flower_config = flower_config if flower_config is not None else FlowerConfig()
        self.weed_config = weed_config if weed_config is not None else WeedConfig()
        self._rng = rng if rng is not None else random.Random()
        self._log = logger if logger is not None else logging.getLogger(__name__)

        self.resolver = resolver
        resolver.plants = self
        self.density = DensityController(
            resolver,
            self.get_active_count,
            cache_ms=self.spawn_config.grass_cache_ms,
            now_ms=now_ms,
        )
        self.scheduler = SpawnScheduler(self.spawn_config)

        self.flowers: list[Flower] = []
        self.weeds: list[Weed] = []
        self.harvest_effects: list[FloatingEffect] = []
        self.leaf_particles: list[LeafParticle] = []

    # -- Density --

    def get_grass_tile_count(self) -> int:
        return self.density.get_grass_tile_count()

    def invalidate_grass_cache(self) -> None:
        self.density.invalidate_grass_cache()

    def get_active_count(self) -> int:
        flowers = sum(1 for f in self.flowers if not f.is_gone and not f.is_harvested)
        weeds = sum(1 for w in self.weeds if not w.is_gone and not w.is_removed)
        return flowers + weeds

    def get_spawn_probability_multiplier(self) -> float:
        return self.density.get_spawn_probability_multiplier()

    def is_valid_spawn_tile(self, x: int, y: int, is_forest_tile: bool = False) -> bool:
        return self.resolver.is_valid_spawn_tile(x, y, is_forest_tile)

    # -- Spawning --

    def _at_capacity(self) -> bool:
        return len(self.flowers) + len(self.weeds) >= self.spawn_config.max_entities

    def spawn_random_flower(self) -> Flower | None:
        if self._at_capacity():
            return None
        picked = self.scheduler.pick_tile(self.resolver, self._rng)
        if picked is None:
            return None
        (x, y), _ = picked
        return self.spawn_flower(x, y)

    def spawn_random_weed(self) -> Weed | None:
        if self._at_capacity():
            return None
        picked = self.scheduler.pick_tile(self.resolver, self._rng)
        if picked is None:
            return None
        (x, y), _ = picked
        return self.spawn_weed(x, y)

    def spawn_flower(self, tile_x: int, tile_y: int) -> Flower:
        ftype = pick_flower_type(self._rng)
        flower = Flower(
            tile_x, tile_y, ftype, pick_flower_tile(self._rng, ftype),
            fade_speed=self.flower_config.fade_speed,
        )
        self.flowers.append(flower)
        self._log.debug("Spawned %s at (%d, %d)", ftype.name, tile_x, tile_y)
        return flower

    def spawn_weed(self, tile_x: int, tile_y: int) -> Weed:
        cfg = self.weed_config
        weed = Weed(
            tile_x, tile_y,
            max_stage=cfg.max_stage,
            growth_ms_per_stage=cfg.growth_ms_per_stage,
            fade_speed=cfg.fade_speed,
            room_above=self._room_above,
        )
        self.weeds.append(weed)
        self._log.debug("Spawned weed at (%d, %d)", tile_x, tile_y)
        return weed

    # -- Lookups --

    def get_flower_at(self, tile_x: int, tile_y: int) -> Flower | None:
        for flower in self.flowers:
            if flower.is_gone or flower.is_harvested:
                continue
            if flower.contains_tile(tile_x, tile_y):
                return flower
        return None

    def get_weed_at(self, tile_x: int, tile_y: int) -> Weed | None:
        for weed in self.weeds:
            if weed.is_gone or weed.is_removed:
                continue
            if weed.contains_tile(tile_x, tile_y):
                return weed
        return None

    def occupant_at(self, x: int, y: int) -> Flower | Weed | None:
        return self.get_flower_at(x, y) or self.get_weed_at(x, y)

    def _room_above(self, x: int, y: int) -> bool:
        """True when a weed below (x, y) may grow up into it."""
        return y >= 0 and not self.resolver.is_occupied(x, y)

    # -- Player actions --

    def try_harvest(self, tile_x: int, tile_y: int) -> HarvestResult | None:
        flower = self.get_flower_at(tile_x, tile_y)
        if flower is None:
            return None
        amount = flower.harvest()
        ts = self.resolver.tilemap.tile_size
        for i in range(amount):
            self.harvest_effects.append(FloatingEffect(
                x=flower.tile_x * ts + ts / 2 + (i * 8 - (amount - 1) * 4),
                y=flower.tile_y * ts,
                tile_id=flower.flower_type.harvest_icon,
                duration=self.flower_config.harvest_effect_ms,
            ))
        return HarvestResult(flower_type=flower.flower_type, yield_=amount)

    def try_remove_weed(self, tile_x: int, tile_y: int) -> WeedClickResult | None:
        weed = self.get_weed_at(tile_x, tile_y)
        if weed is None:
            return None
        removed = weed.click()
        ts = self.resolver.tilemap.tile_size
        particles = leaf_splash(
            tile_x * ts + ts / 2,
            tile_y * ts + ts / 2,
            self._rng,
            self.weed_config.particles_min,
            self.weed_config.particles_max,
        )
        self.leaf_particles.extend(particles)
        if removed:
            self._log.debug("Removed weed at (%d, %d)", weed.tile_x, weed.tile_y)
        return WeedClickResult(removed=removed, stage=weed.stage, particles=particles)

    # -- Tick --

    def update(self, dt: float) -> None:
        grass = self.get_grass_tile_count()
        multiplier = self.get_spawn_probability_multiplier() if grass > 0 else 0.0
        self.scheduler.tick(
            dt, grass, multiplier, self._rng,
            self.spawn_random_weed, self.spawn_random_flower,
        )

        for flower in self.flowers:
            flower.update(dt)
        for weed in self.weeds:
            weed.update(dt)

        self.flowers = [f for f in self.flowers if not f.is_gone]
        self.weeds = [w for w in self.weeds if not w.is_gone]

        update_floating(self.harvest_effects, dt)
        update_particles(self.leaf_particles, dt)
