"""Tests for the clock, tick context and engine loop."""

import pytest

from tick_meadow.clock import Clock
from tick_meadow.engine import Engine


class TestClock:
    def test_starts_at_zero(self):
        clock = Clock()
        assert clock.tick_number == 0
        assert clock.dt == 0.0
        assert clock.elapsed == 0.0

    def test_advance_accumulates_variable_deltas(self):
        clock = Clock()
        clock.advance(16)
        clock.advance(33.5)
        assert clock.tick_number == 2
        assert clock.dt == 33.5
        assert clock.elapsed == 49.5

    def test_negative_delta_rejected(self):
        clock = Clock()
        with pytest.raises(ValueError):
            clock.advance(-1)

    def test_reset(self):
        clock = Clock()
        clock.advance(100)
        clock.reset()
        assert clock.tick_number == 0
        assert clock.elapsed == 0.0


# --- Engine ---

def test_systems_receive_dt_in_order():
    engine = Engine(world=None, seed=1)
    seen = []
    engine.add_system(lambda w, ctx: seen.append(("a", ctx.tick_number, ctx.dt)))
    engine.add_system(lambda w, ctx: seen.append(("b", ctx.tick_number, ctx.dt)))
    engine.step(250)
    assert seen == [("a", 1, 250.0), ("b", 1, 250.0)]


def test_run_fires_hooks_and_counts_ticks():
    engine = Engine(world=None, seed=1)
    events = []
    engine.on_start(lambda w, ctx: events.append("start"))
    engine.on_stop(lambda w, ctx: events.append("stop"))
    engine.add_system(lambda w, ctx: events.append(ctx.elapsed))
    engine.run(3, 100)
    assert events == ["start", 100.0, 200.0, 300.0, "stop"]


def test_request_stop_ends_run_early():
    engine = Engine(world=None, seed=1)
    ticks = []

    def stopper(world, ctx):
        ticks.append(ctx.tick_number)
        if ctx.tick_number == 2:
            ctx.request_stop()

    engine.add_system(stopper)
    engine.run(10, 16)
    assert ticks == [1, 2]


def test_request_stop_skips_later_systems_that_tick():
    engine = Engine(world=None, seed=1)
    calls = []
    engine.add_system(lambda w, ctx: ctx.request_stop())
    engine.add_system(lambda w, ctx: calls.append(ctx.tick_number))
    engine.step(16)
    assert calls == []


def test_seeded_random_is_reproducible():
    a = Engine(world=None, seed=99)
    b = Engine(world=None, seed=99)
    assert [a.random.random() for _ in range(5)] == [b.random.random() for _ in range(5)]
    assert a.seed == 99


def test_unseeded_engine_picks_a_seed():
    engine = Engine(world=None)
    assert isinstance(engine.seed, int)


def test_context_exposes_engine_random():
    engine = Engine(world=None, seed=3)
    captured = []
    engine.add_system(lambda w, ctx: captured.append(ctx.random))
    engine.step(16)
    assert captured[0] is engine.random


def test_run_realtime_respects_max_frames():
    engine = Engine(world=None, seed=1)
    dts = []
    engine.add_system(lambda w, ctx: dts.append(ctx.dt))
    engine.run_realtime(fps=1000, max_frames=3)
    assert len(dts) == 3
    assert all(dt >= 0 for dt in dts)


def test_run_realtime_rejects_bad_fps():
    engine = Engine(world=None, seed=1)
    with pytest.raises(ValueError):
        engine.run_realtime(fps=0)
