"""Shared fixtures built on the fakes in ``fakes.py``."""
from __future__ import annotations

import random

import pytest
from fakes import FakeChunks, FakeClock, FakeTileMap

from tick_meadow.collaborators import Chunk, ChunkKind


@pytest.fixture
def tilemap() -> FakeTileMap:
    return FakeTileMap()


@pytest.fixture
def chunks() -> FakeChunks:
    return FakeChunks([
        Chunk(0, 1, ChunkKind.FARM),
        Chunk(2, 0, ChunkKind.TOWN),
        Chunk(3, 2, ChunkKind.FOREST),
    ])


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)
