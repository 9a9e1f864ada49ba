"""Clock and TickContext for a variable-timestep engine."""

import random
from typing import Callable

from tick_meadow.types import TickContext


class Clock:
    def __init__(self) -> None:
        self._tick_number = 0
        self._dt = 0.0
        self._elapsed = 0.0

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def advance(self, dt_ms: float) -> int:
        if dt_ms < 0:
            raise ValueError(f"dt_ms must be >= 0, got {dt_ms}")
        self._tick_number += 1
        self._dt = float(dt_ms)
        self._elapsed += self._dt
        return self._tick_number

    def context(self, stop_fn: Callable[[], None], rng: random.Random) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=self._dt,
            elapsed=self._elapsed,
            request_stop=stop_fn,
            random=rng,
        )

    def reset(self) -> None:
        self._tick_number = 0
        self._dt = 0.0
        self._elapsed = 0.0
