"""Demo tile map and camera for the meadow."""
from __future__ import annotations

import random as _random_mod

GRASS = 65
DIRT = 67
PATH = 449
HOUSE = 1

MAP_W = 64
MAP_H = 72
HOUSE_OFFSET_Y = 2
HOUSE_HEIGHT = 6
ROAD_ROW = 62  # the road travelers walk along (y = 992 px)


class DemoTileMap:
    """A farm below a house, a road across the map and scattered dirt patches."""

    tile_size = 16
    house_offset_y = HOUSE_OFFSET_Y
    house_height = HOUSE_HEIGHT
    town_anchor = (48, 4)

    def __init__(self, seed: int) -> None:
        self.map_width = MAP_W
        self.map_height = MAP_H
        rng = _random_mod.Random(seed)
        self.tiles: list[list[int]] = [[GRASS] * MAP_W for _ in range(MAP_H)]

        for y in range(HOUSE_OFFSET_Y, HOUSE_OFFSET_Y + HOUSE_HEIGHT):
            for x in range(4, 14):
                self.tiles[y][x] = HOUSE

        for x in range(MAP_W):
            self.tiles[ROAD_ROW][x] = PATH

        for _ in range(12):
            cx = rng.randrange(MAP_W)
            cy = rng.randrange(HOUSE_OFFSET_Y + HOUSE_HEIGHT, ROAD_ROW - 2)
            for y in range(cy, min(cy + rng.randint(2, 4), ROAD_ROW)):
                for x in range(cx, min(cx + rng.randint(2, 5), MAP_W)):
                    self.tiles[y][x] = DIRT

    def get_tile_at(self, x: int, y: int) -> int | None:
        if 0 <= x < self.map_width and 0 <= y < self.map_height:
            return self.tiles[y][x]
        return None

    def set_tile(self, x: int, y: int, tile_id: int) -> None:
        self.tiles[y][x] = tile_id

    def is_custom_tilemap_tile(self, x: int, y: int) -> bool:
        return False


class ScrollCamera:
    """Viewport in world pixels."""

    def __init__(self, width: int, height: int, world_w: int, world_h: int) -> None:
        self.x = 0.0
        self.y = 0.0
        self.width = width
        self.height = height
        self.world_w = world_w
        self.world_h = world_h

    def scroll(self, dx: float, dy: float) -> None:
        self.x = max(0.0, min(self.world_w - self.width, self.x + dx))
        self.y = max(0.0, min(self.world_h - self.height, self.y + dy))

    def center_on(self, wx: float, wy: float) -> None:
        self.x, self.y = 0.0, 0.0
        self.scroll(wx - self.width / 2, wy - self.height / 2)

    def get_visible_bounds(self) -> tuple[float, float]:
        return self.x, self.x + self.width

    def to_screen(self, wx: float, wy: float) -> tuple[int, int]:
        return int(wx - self.x), int(wy - self.y)

    def to_tile(self, sx: int, sy: int, tile_size: int) -> tuple[int, int]:
        return int((sx + self.x) // tile_size), int((sy + self.y) // tile_size)
