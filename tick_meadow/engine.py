"""Engine - frame loop, pacing, and lifecycle hooks."""

from __future__ import annotations

import os
import random
import time
from typing import TYPE_CHECKING, Callable

from tick_meadow.clock import Clock
from tick_meadow.types import System, TickContext

if TYPE_CHECKING:
    from tick_meadow.world import Meadow

Hook = Callable[["Meadow", TickContext], None]


class Engine:
    def __init__(self, world: Meadow, seed: int | None = None) -> None:
        self._clock = Clock()
        self._world = world
        self._systems: list[System] = []
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested: bool = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8), "big")
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def world(self) -> Meadow:
        return self._world

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _fire(self, hooks: list[Hook]) -> None:
        ctx = self._clock.context(self._request_stop, self._rng)
        for hook in hooks:
            hook(self._world, ctx)

    def _tick(self, dt_ms: float) -> None:
        self._clock.advance(dt_ms)
        ctx = self._clock.context(self._request_stop, self._rng)
        for system in self._systems:
            system(self._world, ctx)
            if self._stop_requested:
                break

    def step(self, dt_ms: float) -> None:
        self._stop_requested = False
        self._tick(dt_ms)

    def run(self, n: int, dt_ms: float) -> None:
        """Run *n* ticks of a fixed *dt_ms* each."""
        self._stop_requested = False
        self._fire(self._start_hooks)

        for _ in range(n):
            self._tick(dt_ms)
            if self._stop_requested:
                break

        self._fire(self._stop_hooks)

    def run_realtime(self, fps: int = 60, max_frames: int | None = None) -> None:
        """Run against the wall clock, feeding measured frame deltas to systems.

        Stops when a system calls ``ctx.request_stop()`` or after
        *max_frames* ticks.
        """
        if fps <= 0:
            raise ValueError("fps must be positive")
        self._stop_requested = False
        self._fire(self._start_hooks)

        frame = 1.0 / fps
        frames = 0
        last = time.monotonic()
        while not self._stop_requested:
            now = time.monotonic()
            self._tick((now - last) * 1000.0)
            last = now
            frames += 1
            if self._stop_requested or (max_frames is not None and frames >= max_frames):
                break
            sleep_time = frame - (time.monotonic() - now)
            if sleep_time > 0:
                time.sleep(sleep_time)

        self._fire(self._stop_hooks)
