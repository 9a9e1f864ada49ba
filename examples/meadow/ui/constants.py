"""Layout and color constants."""
from __future__ import annotations

SCREEN_W = 960
SCREEN_H = 640
HUD_H = 64
FPS = 60
SCROLL_SPEED = 8

COLOR_BG = (20, 20, 30)
COLOR_GRASS = (70, 130, 60)
COLOR_DIRT = (120, 90, 60)
COLOR_PATH = (170, 150, 110)
COLOR_HOUSE = (140, 70, 60)
COLOR_STAND = (150, 110, 60)
COLOR_SLOT = (230, 200, 90)
COLOR_WEED = (40, 90, 30)
COLOR_TRAVELER = (220, 190, 160)
COLOR_TEXT = (220, 220, 220)
COLOR_TEXT_DIM = (140, 140, 150)

FLOWER_COLORS: dict[str, tuple[int, int, int]] = {
    "Blue Flower": (90, 140, 230),
    "Red Flower": (220, 70, 70),
    "White Flower": (240, 240, 240),
}

ORE_COLORS: dict[str, tuple[int, int, int]] = {
    "Iron": (160, 120, 100),
    "Coal": (50, 50, 55),
    "Mithril": (120, 180, 220),
    "Gold": (230, 190, 60),
    "Rock": (130, 130, 130),
}
