"""Spawn regions: which tiles flowers and weeds may appear on."""
from __future__ import annotations

from typing import TYPE_CHECKING

from tick_meadow.collaborators import (
    ChunkBounds,
    ChunkKind,
    ChunkSource,
    ForestSource,
    NoForest,
    NoOccupants,
    NoOverlay,
    OccupancyLookup,
    OverlayLookup,
    TileMap,
)
from tick_meadow.config import GRASS_TILE_IDS
from tick_meadow.types import AreaOrigin, SpawnArea

if TYPE_CHECKING:
    from tick_meadow.types import TilePos


class SpawnRegionResolver:
    """Computes spawn rectangles from map topology and vets candidate tiles.

    Every occupancy collaborator is optional. A missing one is replaced by
    a null object, so its exclusion rule passes every tile.
    """

    def __init__(
        self,
        tilemap: TileMap,
        *,
        grass_tile_ids: frozenset[int] = GRASS_TILE_IDS,
        chunks: ChunkSource | None = None,
        forest: ForestSource | None = None,
        overlay: OverlayLookup | None = None,
        crops: OccupancyLookup | None = None,
        trees: OccupancyLookup | None = None,
        ores: OccupancyLookup | None = None,
        enemies: OccupancyLookup | None = None,
        plants: OccupancyLookup | None = None,
    ) -> None:
        self.tilemap = tilemap
        self.grass_tile_ids = grass_tile_ids
        self.chunks = chunks
        self.forest: ForestSource = forest if forest is not None else NoForest()
        self.overlay: OverlayLookup = overlay if overlay is not None else NoOverlay()
        self.crops: OccupancyLookup = crops if crops is not None else NoOccupants()
        self.trees: OccupancyLookup = trees if trees is not None else NoOccupants()
        self.ores: OccupancyLookup = ores if ores is not None else NoOccupants()
        self.enemies: OccupancyLookup = enemies if enemies is not None else NoOccupants()
        self.plants: OccupancyLookup = plants if plants is not None else NoOccupants()

    @property
    def grass_start_y(self) -> int:
        return self.tilemap.house_offset_y + self.tilemap.house_height

    # -- Areas --

    def get_spawn_areas(self) -> list[SpawnArea]:
        areas = [self._farm_area()]
        if self.chunks is None:
            return areas

        size = self.chunks.chunk_size
        ax, ay = self.tilemap.town_anchor
        town_left = (ax // size) * size
        town_top = (ay // size) * size
        areas.append(SpawnArea(
            left=town_left,
            right=town_left + size,
            top=town_top,
            bottom=town_top + size,
            origin=AreaOrigin.TOWN,
        ))

        for chunk in self.chunks.allocated_chunks():
            if chunk.kind in (ChunkKind.FARM, ChunkKind.TOWN):
                continue
            b = self.chunks.get_chunk_bounds(chunk.col, chunk.row)
            areas.append(SpawnArea(
                left=b.x,
                right=b.x + b.width,
                top=b.y,
                bottom=b.y + b.height,
                origin=AreaOrigin.FOREST_CHUNK,
            ))
        return areas

    def _farm_area(self) -> SpawnArea:
        left, right = 0, self.tilemap.map_width
        top, bottom = self.grass_start_y, self.tilemap.map_height
        farm = self._farm_chunk_bounds()
        if farm is not None:
            left = max(left, farm.x)
            right = min(right, farm.x + farm.width)
            top = max(top, farm.y)
            bottom = min(bottom, farm.y + farm.height)
        return SpawnArea(
            left=left,
            right=max(left, right),
            top=top,
            bottom=max(top, bottom),
            origin=AreaOrigin.FARM,
        )

    def _farm_chunk_bounds(self) -> ChunkBounds | None:
        if self.chunks is None:
            return None
        for chunk in self.chunks.allocated_chunks():
            if chunk.kind is ChunkKind.FARM:
                return self.chunks.get_chunk_bounds(chunk.col, chunk.row)
        return None

    def get_forest_grass_tiles(self) -> list[TilePos]:
        return self.forest.get_forest_grass_tiles()

    # -- Tile checks --

    def is_valid_spawn_tile(self, x: int, y: int, is_forest_tile: bool = False) -> bool:
        if is_forest_tile:
            if not self.forest.is_valid_forest_spawn_tile(x, y):
                return False
            return self.plants.occupant_at(x, y) is None

        tm = self.tilemap
        if not (0 <= x < tm.map_width and 0 <= y < tm.map_height):
            return False
        if not any(area.contains(x, y) for area in self.get_spawn_areas()):
            return False
        if tm.is_custom_tilemap_tile(x, y):
            return False
        if tm.get_tile_at(x, y) not in self.grass_tile_ids:
            return False
        return not self.is_occupied(x, y)

    def is_occupied(self, x: int, y: int) -> bool:
        if self.plants.occupant_at(x, y) is not None:
            return True
        if self.overlay.has_overlay(x, y):
            return True
        for lookup in (self.crops, self.trees, self.ores, self.enemies):
            if lookup.occupant_at(x, y) is not None:
                return True
        pos = (x, y)
        return pos in self.forest.trunk_tiles or pos in self.forest.pocket_occupied_tiles
