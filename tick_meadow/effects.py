"""Short-lived cosmetic effects: floating "+1" icons and leaf splashes.

Both are plain records advanced by the owning manager each tick and
dropped once their timer runs out. A renderer reads them; nothing in the
simulation depends on them.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass

# Leaf physics was tuned per 60 fps frame.
_FRAME_MS = 16.0


@dataclass
class FloatingEffect:
    x: float
    y: float
    tile_id: int
    timer: float = 0.0
    duration: float = 1000.0
    alpha: float = 1.0


@dataclass
class LeafParticle:
    x: float
    y: float
    vx: float
    vy: float
    rotation: float
    rotation_speed: float
    size: float
    duration: float
    color: str
    timer: float = 0.0
    alpha: float = 1.0


def update_floating(effects: list[FloatingEffect], dt: float) -> None:
    """Rise, fade and drop finished effects in place."""
    for i in range(len(effects) - 1, -1, -1):
        e = effects[i]
        e.timer += dt
        e.y -= dt * 0.05
        e.alpha = 1.0 - e.timer / e.duration
        if e.timer >= e.duration:
            del effects[i]


def leaf_splash(
    cx: float, cy: float, rng: random.Random, count_min: int = 4, count_max: int = 6,
) -> list[LeafParticle]:
    count = rng.randint(count_min, count_max)
    particles: list[LeafParticle] = []
    for i in range(count):
        angle = (math.tau * i) / count + (rng.random() - 0.5) * 0.3
        speed = 0.75 + rng.random() * 1.25
        particles.append(LeafParticle(
            x=cx,
            y=cy,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            rotation=rng.random() * math.tau,
            rotation_speed=(rng.random() - 0.5) * 0.15,
            size=0.75 + rng.random() * 0.75,
            duration=300 + rng.random() * 150,
            color=f"hsl({100 + rng.random() * 40:.0f}, 70%, {40 + rng.random() * 20:.0f}%)",
        ))
    return particles


def update_particles(particles: list[LeafParticle], dt: float) -> None:
    frames = dt / _FRAME_MS
    for i in range(len(particles) - 1, -1, -1):
        p = particles[i]
        p.timer += dt
        p.x += p.vx * frames
        p.y += p.vy * frames
        p.vy += 0.15 * frames
        p.rotation += p.rotation_speed * frames
        p.alpha = 1.0 - p.timer / p.duration
        p.size *= 0.998
        if p.timer >= p.duration or p.alpha <= 0:
            del particles[i]
