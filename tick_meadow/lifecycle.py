"""Shared lifecycle for tile entities that fade out once retired."""
from __future__ import annotations

from enum import Enum


class LifeState(Enum):
    ACTIVE = "active"
    HARVESTED = "harvested"
    REMOVED = "removed"
    FADING = "fading"
    GONE = "gone"


class FadingLifecycle:
    """ACTIVE -> (HARVESTED | REMOVED) -> FADING -> GONE.

    The retired state lasts until the next update, which starts the fade.
    Alpha drops linearly at ``fade_speed`` per second.
    """

    def __init__(self, fade_speed: float) -> None:
        self.state = LifeState.ACTIVE
        self.alpha = 1.0
        self.fade_speed = fade_speed

    @property
    def is_active(self) -> bool:
        return self.state is LifeState.ACTIVE

    @property
    def is_gone(self) -> bool:
        return self.state is LifeState.GONE

    def _retire(self, state: LifeState) -> None:
        self.state = state

    def _update_fade(self, dt: float) -> None:
        if self.state in (LifeState.HARVESTED, LifeState.REMOVED):
            self.state = LifeState.FADING
        if self.state is LifeState.FADING:
            self.alpha -= self.fade_speed * (dt / 1000.0)
            if self.alpha <= 0:
                self.alpha = 0.0
                self.state = LifeState.GONE
