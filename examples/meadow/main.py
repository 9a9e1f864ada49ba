"""Meadow: wild flowers, weeds, ore and a roadside stand.

Flowers and weeds spread over the farm, travelers walk the road and stop
at the stand to buy whatever they like.

Controls:
  Arrow keys  Scroll
  Space       Pause / Resume
  1-4         Speed (0.5x / 1x / 2x / 4x)
  Left-click  Harvest flower / pull weed / mine ore
  S           Restock the stand from the inventory
  Escape      Quit
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from functools import partial
from typing import Callable

import pygame

from game.terrain import DIRT, HOUSE, PATH, DemoTileMap, ScrollCamera
from tick_meadow import Engine, build_meadow, make_meadow_systems
from tick_meadow.stand import SLOT_COUNT
from ui.constants import (
    COLOR_BG,
    COLOR_DIRT,
    COLOR_GRASS,
    COLOR_HOUSE,
    COLOR_PATH,
    COLOR_SLOT,
    COLOR_STAND,
    COLOR_TEXT,
    COLOR_TEXT_DIM,
    COLOR_TRAVELER,
    COLOR_WEED,
    FLOWER_COLORS,
    FPS,
    HUD_H,
    ORE_COLORS,
    SCREEN_H,
    SCREEN_W,
    SCROLL_SPEED,
)

TILE_COLORS = {DIRT: COLOR_DIRT, PATH: COLOR_PATH, HOUSE: COLOR_HOUSE}
STARTING_STOCK = {"crop_carrot": 6, "crop_potato": 4, "crop_pumpkin": 2, "crop_wheat": 3}


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Meadow: tick-meadow visual demo")
    p.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    p.add_argument("--ores", type=int, default=6, help="Ore veins to scatter (default: 6)")
    p.add_argument("--verbose", action="store_true", help="Log debug records to stderr")
    return p.parse_args()


def restock(meadow) -> None:
    """Fill empty stand slots with spare inventory, keeping them auto-replenished."""
    stand = meadow.stand
    for i in range(SLOT_COUNT):
        if not stand.slots[i].is_empty:
            continue
        for rid in STARTING_STOCK:
            if meadow.inventory.count(rid) - stand.claimed_count(rid) > 0:
                stand.list_item(i, meadow.registry[rid], auto_replenish=True)
                break


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s %(levelname)s %(message)s",
    )

    tilemap = DemoTileMap(args.seed)
    ts = tilemap.tile_size
    view_h = SCREEN_H - HUD_H
    camera = ScrollCamera(SCREEN_W, view_h, tilemap.map_width * ts, tilemap.map_height * ts)

    meadow = build_meadow(tilemap, camera=camera, rng=random.Random(args.seed))
    engine = Engine(meadow, seed=args.seed)
    for system in make_meadow_systems(meadow):
        engine.add_system(system)

    meadow.ores.spawn_random_ores(args.ores)
    for rid, n in STARTING_STOCK.items():
        meadow.inventory.add(rid, n)
    restock(meadow)
    camera.center_on(meadow.stand.get_slot_world_x(0), meadow.stand.traveler_stop_y())

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Meadow: tick-meadow demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 12)

    paused = False
    speed = 1.0
    status = ""
    running = True

    while running:
        dt_ms = clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_1:
                    speed = 0.5
                elif event.key == pygame.K_2:
                    speed = 1.0
                elif event.key == pygame.K_3:
                    speed = 2.0
                elif event.key == pygame.K_4:
                    speed = 4.0
                elif event.key == pygame.K_s:
                    restock(meadow)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                mx, my = event.pos
                if my < view_h:
                    status = _click(meadow, *camera.to_tile(mx, my, ts))

        keys = pygame.key.get_pressed()
        camera.scroll(
            (keys[pygame.K_RIGHT] - keys[pygame.K_LEFT]) * SCROLL_SPEED,
            (keys[pygame.K_DOWN] - keys[pygame.K_UP]) * SCROLL_SPEED,
        )

        if not paused:
            engine.step(dt_ms * speed)

        screen.fill(COLOR_BG)
        _draw_world(screen, meadow, camera)
        _draw_hud(screen, font, meadow, view_h, paused, speed, status)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


def _click(meadow, tx: int, ty: int) -> str:
    harvest = meadow.harvest_flower(tx, ty)
    if harvest is not None:
        return f"Picked a {harvest.flower_type.name}"
    weed = meadow.pull_weed(tx, ty)
    if weed is not None:
        return "Pulled a weed" if weed.removed else f"Weed loosened (stage {weed.stage})"
    mined = meadow.mine(tx, ty)
    if mined is not None and mined.ore_yielded:
        return f"Mined {meadow.registry[mined.ore_yielded].name}"
    return ""


def _draw_world(screen: pygame.Surface, meadow, camera: ScrollCamera) -> None:
    tilemap = meadow.tilemap
    ts = tilemap.tile_size
    x0, y0 = int(camera.x // ts), int(camera.y // ts)
    x1 = min(tilemap.map_width, x0 + camera.width // ts + 2)
    y1 = min(tilemap.map_height, y0 + camera.height // ts + 2)

    for y in range(y0, y1):
        for x in range(x0, x1):
            color = TILE_COLORS.get(tilemap.get_tile_at(x, y), COLOR_GRASS)
            sx, sy = camera.to_screen(x * ts, y * ts)
            pygame.draw.rect(screen, color, (sx, sy, ts, ts))

    # Painter's order: whatever stands further south is drawn last.
    stand = meadow.stand
    drawables: list[tuple[float, Callable[[], None]]] = [
        (stand.sort_y(), partial(_draw_stand, screen, stand, camera)),
    ]
    drawables += [(o.sort_y(ts), partial(_draw_ore, screen, o, camera, ts)) for o in meadow.ores.ore_veins]
    drawables += [(f.sort_y(ts), partial(_draw_flower, screen, f, camera, ts)) for f in meadow.flowers.flowers]
    drawables += [(w.sort_y(ts), partial(_draw_weed, screen, w, camera, ts)) for w in meadow.flowers.weeds]
    drawables += [(t.sort_y(), partial(_draw_traveler, screen, t, camera)) for t in meadow.travelers.travelers]
    for _, draw in sorted(drawables, key=lambda d: d[0]):
        draw()

    for p in meadow.flowers.leaf_particles:
        sx, sy = camera.to_screen(p.x, p.y)
        pygame.draw.circle(screen, COLOR_WEED, (sx, sy), max(1, int(p.size * 2)))

    for effect in meadow.flowers.harvest_effects + meadow.ores.mining_effects:
        sx, sy = camera.to_screen(effect.x, effect.y)
        pygame.draw.circle(screen, COLOR_SLOT, (sx, sy), 3)


def _draw_stand(screen, stand, camera: ScrollCamera) -> None:
    ts = stand.tile_size
    sx, sy = camera.to_screen(stand.tile_x * ts, stand.tile_y * ts)
    pygame.draw.rect(screen, COLOR_STAND, (sx, sy, stand.width * ts, ts))
    for i, slot in enumerate(stand.slots):
        if not slot.is_empty:
            cx, cy = camera.to_screen(stand.get_slot_world_x(i), stand.tile_y * ts + ts / 2)
            pygame.draw.circle(screen, COLOR_SLOT, (cx, cy), 2)


def _draw_ore(screen, ore, camera: ScrollCamera, ts: int) -> None:
    sx, sy = camera.to_screen(ore.tile_x * ts, ore.tile_y * ts)
    color = ORE_COLORS.get(ore.ore_type.name, (128, 128, 128))
    inset = int(ore.stage) * 3
    surf = pygame.Surface((2 * ts - 2 * inset, 2 * ts - 2 * inset), pygame.SRCALPHA)
    surf.fill((*color, int(255 * ore.alpha)))
    screen.blit(surf, (sx + inset, sy + inset))


def _draw_flower(screen, flower, camera: ScrollCamera, ts: int) -> None:
    sx, sy = camera.to_screen(flower.tile_x * ts + ts / 2, flower.tile_y * ts + ts / 2)
    color = FLOWER_COLORS.get(flower.flower_type.name, (255, 255, 255))
    pygame.draw.circle(screen, tuple(int(c * flower.alpha) for c in color), (sx, sy), 4)


def _draw_weed(screen, weed, camera: ScrollCamera, ts: int) -> None:
    height = ts * (2 if weed.is_tall else 1) * weed.stage / weed.max_stage
    sx, sy = camera.to_screen(weed.tile_x * ts + 4, (weed.tile_y + 1) * ts - height)
    pygame.draw.rect(screen, COLOR_WEED, (sx, sy, ts - 8, int(height)))


def _draw_traveler(screen, traveler, camera: ScrollCamera) -> None:
    sx, sy = camera.to_screen(traveler.x, traveler.y)
    pygame.draw.rect(screen, COLOR_TRAVELER, (sx - 4, sy - 12, 8, 14))
    # Face marker on the side the traveler is walking towards.
    eye_x = sx - 3 if traveler.facing_left else sx + 2
    pygame.draw.rect(screen, COLOR_BG, (eye_x, sy - 10, 1, 2))


def _draw_hud(screen, font, meadow, top: int, paused: bool, speed: float, status: str) -> None:
    pygame.draw.rect(screen, COLOR_BG, (0, top, SCREEN_W, SCREEN_H - top))
    inv = meadow.inventory.items()
    lines = [
        f"gold {inv.get('gold', 0)}   flowers {len(meadow.flowers.flowers)}   "
        f"weeds {len(meadow.flowers.weeds)}   ores {meadow.ores.ore_count()}   "
        f"travelers {len(meadow.travelers.travelers)}   "
        f"stand {meadow.service.state.value}",
        "  ".join(f"{rid}:{n}" for rid, n in sorted(inv.items()) if rid != "gold"),
        ("PAUSED  " if paused else "") + f"speed {speed}x  {status}",
    ]
    for i, line in enumerate(lines):
        color = COLOR_TEXT if i == 0 else COLOR_TEXT_DIM
        screen.blit(font.render(line, True, color), (8, top + 6 + i * 18))


if __name__ == "__main__":
    main()
