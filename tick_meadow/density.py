"""Coverage-based throttling of flower and weed spawning."""
from __future__ import annotations

import time
from typing import Callable

from tick_meadow.regions import SpawnRegionResolver


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class DensityController:
    """Counts spawnable grass and turns live-plant coverage into a rate multiplier.

    The grass count is memoised for ``cache_ms``; callers that hoe or
    restore ground must call :meth:`invalidate_grass_cache`.
    """

    def __init__(
        self,
        resolver: SpawnRegionResolver,
        count_active: Callable[[], int],
        *,
        cache_ms: float = 5000.0,
        now_ms: Callable[[], float] = _monotonic_ms,
    ) -> None:
        self._resolver = resolver
        self._count_active = count_active
        self._cache_ms = cache_ms
        self._now_ms = now_ms
        self._cached_count: int | None = None
        self._cached_at: float = 0.0

    def get_grass_tile_count(self) -> int:
        now = self._now_ms()
        if self._cached_count is not None and now - self._cached_at < self._cache_ms:
            return self._cached_count
        self._cached_count = self._count_grass()
        self._cached_at = now
        return self._cached_count

    def invalidate_grass_cache(self) -> None:
        self._cached_count = None

    def _count_grass(self) -> int:
        tm = self._resolver.tilemap
        grass = self._resolver.grass_tile_ids
        count = 0
        for area in self._resolver.get_spawn_areas():
            for y in range(area.top, area.bottom):
                for x in range(area.left, area.right):
                    if tm.get_tile_at(x, y) in grass:
                        count += 1
        return count + len(self._resolver.get_forest_grass_tiles())

    def get_active_entity_count(self) -> int:
        return self._count_active()

    def get_spawn_probability_multiplier(self) -> float:
        grass = self.get_grass_tile_count()
        if grass == 0:
            return 0.0
        coverage = min(1.0, self.get_active_entity_count() / grass)
        return max(0.0, (1.0 - coverage) ** 2)
