"""Tuning constants for spawning, lifecycles, travelers and the stand."""
from __future__ import annotations

from dataclasses import dataclass, field

GRASS_TILE_IDS: frozenset[int] = frozenset({
    65, 66, 129, 130, 131, 132, 133, 134,
    192, 193, 194, 195, 197, 199, 257, 258,
})


@dataclass(frozen=True)
class SpawnConfig:
    """Flower/weed spawning.

    Attributes:
        spawn_rate_per_tile: Spawn events per ms per grass tile at full rate
            (one event per 5 s for every 50 tiles).
        max_entities: Cap on live flowers plus weeds.
        max_attempts: Tile samples per placement before giving up.
        grass_cache_ms: How long a grass tile count stays valid.
        weed_share: Fraction of spawn attempts that produce a weed.
        gate_floor: Lower bound of the secondary spawn roll.
        grass_tile_ids: Tile IDs counted as spawnable grass.
    """

    spawn_rate_per_tile: float = 1 / (5000 * 50)
    max_entities: int = 100
    max_attempts: int = 50
    grass_cache_ms: float = 5000.0
    weed_share: float = 0.75
    gate_floor: float = 0.5
    grass_tile_ids: frozenset[int] = GRASS_TILE_IDS

    def __post_init__(self) -> None:
        if self.spawn_rate_per_tile < 0:
            raise ValueError(f"spawn_rate_per_tile must be >= 0, got {self.spawn_rate_per_tile}")
        if self.max_entities < 0:
            raise ValueError(f"max_entities must be >= 0, got {self.max_entities}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if not 0.0 <= self.weed_share <= 1.0:
            raise ValueError(f"weed_share must be in [0, 1], got {self.weed_share}")
        if not 0.0 <= self.gate_floor <= 1.0:
            raise ValueError(f"gate_floor must be in [0, 1], got {self.gate_floor}")


@dataclass(frozen=True)
class FlowerConfig:
    fade_speed: float = 2.0  # alpha per second
    harvest_effect_ms: float = 1000.0


@dataclass(frozen=True)
class WeedConfig:
    max_stage: int = 4
    growth_ms_per_stage: float = (2 * 60 * 1000) / 3
    fade_speed: float = 2.0
    particles_min: int = 4
    particles_max: int = 6

    def __post_init__(self) -> None:
        if self.max_stage < 1:
            raise ValueError(f"max_stage must be >= 1, got {self.max_stage}")
        if self.particles_min > self.particles_max:
            raise ValueError("particles_min must not exceed particles_max")


@dataclass(frozen=True)
class OreConfig:
    min_resources: int = 5
    max_resources: int = 10
    fade_ms: float = 500.0
    max_attempts: int = 100

    def __post_init__(self) -> None:
        if self.min_resources < 1 or self.max_resources < self.min_resources:
            raise ValueError(
                f"invalid resource range {self.min_resources}..{self.max_resources}"
            )


@dataclass(frozen=True)
class TravelerConfig:
    """Traveler movement and spending.

    Attributes:
        speed: Walking speed in world pixels per second.
        spawn_interval_min: Shortest gap between spawns (ms).
        spawn_interval_max: Longest gap between spawns (ms).
        despawn_margin: Pixels beyond the visible edge where travelers appear/vanish.
        path_center_y: World pixel Y of the road travelers walk along.
        liked_item_count: Upper bound of liked items (lower bound is 2).
        hated_item_count: Upper bound of hated items (lower bound is 2).
        gold_min: Smallest spending budget.
        gold_max: Largest spending budget.
        neutral_visit_chance: Chance to stop when nothing listed is liked.
        neutral_base_probability: Chance to buy the first neutral item.
        neutral_decay_rate: Drop in that chance after each neutral purchase.
    """

    speed: float = 30.0
    spawn_interval_min: float = 15000.0
    spawn_interval_max: float = 40000.0
    despawn_margin: float = 32.0
    path_center_y: float = 992.0
    hair_styles: tuple[str, ...] = ("bowl", "curly", "long", "mop", "short", "spikey")
    liked_item_count: int = 3
    hated_item_count: int = 3
    gold_min: int = 100
    gold_max: int = 1000
    neutral_visit_chance: float = 0.35
    neutral_base_probability: float = 0.6
    neutral_decay_rate: float = 0.2

    def __post_init__(self) -> None:
        if self.speed <= 0:
            raise ValueError(f"speed must be positive, got {self.speed}")
        if self.spawn_interval_max < self.spawn_interval_min:
            raise ValueError("spawn_interval_max must be >= spawn_interval_min")
        if self.gold_max < self.gold_min:
            raise ValueError("gold_max must be >= gold_min")
        if self.liked_item_count < 2 or self.hated_item_count < 2:
            raise ValueError("liked/hated item counts must be >= 2")
        if not self.hair_styles:
            raise ValueError("hair_styles must be non-empty")


@dataclass(frozen=True)
class StandConfig:
    tile_x: int = 39
    tile_y: int = 64
    tile_size: int = 16
    wait_ms: float = 1500.0


@dataclass(frozen=True)
class MeadowConfig:
    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    flowers: FlowerConfig = field(default_factory=FlowerConfig)
    weeds: WeedConfig = field(default_factory=WeedConfig)
    ores: OreConfig = field(default_factory=OreConfig)
    traveler: TravelerConfig = field(default_factory=TravelerConfig)
    stand: StandConfig = field(default_factory=StandConfig)
