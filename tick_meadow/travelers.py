"""Travelers walking the road past the farm, and the manager that spawns them."""
from __future__ import annotations

import logging
import random
from enum import Enum

from tick_meadow.collaborators import Camera, TileMap
from tick_meadow.config import TravelerConfig
from tick_meadow.preferences import PreferenceEngine, Preferences, PurchasePlan
from tick_meadow.resources import ResourceRegistry
from tick_meadow.stand import RoadsideStand
from tick_meadow.types import MovementPhaseError


class Direction(Enum):
    EAST = 1
    WEST = -1


class MovementPhase(Enum):
    WALKING = "walking"
    APPROACH_X = "approach_x"
    APPROACH_Y = "approach_y"
    WAITING = "waiting"
    REPOSITION = "reposition"
    RETURN_TO_PATH = "return_to_path"
    DESPAWNED = "despawned"


_STAND_PHASES = frozenset({
    MovementPhase.APPROACH_X,
    MovementPhase.APPROACH_Y,
    MovementPhase.WAITING,
    MovementPhase.REPOSITION,
})


class Traveler:
    """One walker on the road.

    A visiting traveler walks to the first slot's X, steps south to the
    stand, then waits. From there only ``move_to_next_slot`` and
    ``resume_walking`` move it again.
    """

    def __init__(
        self,
        x: float,
        y: float,
        direction: Direction,
        hair_style: str,
        *,
        speed: float = 30.0,
        stand: RoadsideStand | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.x = x
        self.y = y
        self.start_y = y
        self.direction = direction
        self.hair_style = hair_style
        self.speed = speed
        self.stand = stand
        self._log = logger if logger is not None else logging.getLogger(__name__)

        self.phase = MovementPhase.WALKING
        self.reposition_x: float | None = None
        self.despawn_x: float | None = None

        self.liked_items: frozenset[str] = frozenset()
        self.hated_items: frozenset[str] = frozenset()
        self.gold = 0
        self.wanted_purchases: list[int] = []
        self.current_purchase_index = 0
        self.stand_stop_x: float | None = None
        self.stand_stop_y: float | None = None

    def __repr__(self) -> str:
        return (
            f"Traveler({self.direction.name}, x={self.x:.1f}, y={self.y:.1f}, "
            f"phase={self.phase.value})"
        )

    @property
    def facing_left(self) -> bool:
        return self.direction is Direction.WEST

    @property
    def visit_stand(self) -> bool:
        return self.phase in _STAND_PHASES

    @property
    def is_stopped(self) -> bool:
        return self.phase is MovementPhase.WAITING

    @property
    def is_despawned(self) -> bool:
        return self.phase is MovementPhase.DESPAWNED

    @property
    def current_slot(self) -> int | None:
        if self.current_purchase_index < len(self.wanted_purchases):
            return self.wanted_purchases[self.current_purchase_index]
        return None

    def apply_preferences(self, prefs: Preferences, plan: PurchasePlan) -> None:
        self.liked_items = prefs.liked
        self.hated_items = prefs.hated
        self.gold = prefs.gold
        if not plan.visit:
            return
        self.wanted_purchases = list(plan.purchases)
        self.current_purchase_index = 0
        self.stand_stop_x = plan.stop_x
        self.stand_stop_y = plan.stop_y
        self.phase = MovementPhase.APPROACH_X

    def pay(self, amount: int) -> bool:
        if amount > self.gold:
            return False
        self.gold -= amount
        return True

    # -- Movement --

    def _step(self, dt: float) -> float:
        return self.speed * dt / 1000.0

    def update(self, dt: float) -> None:
        phase = self.phase
        if phase is MovementPhase.DESPAWNED or phase is MovementPhase.WAITING:
            return

        if phase is MovementPhase.APPROACH_X:
            if self.stand_stop_x is None:
                self._log.warning("Approaching the stand without a stop x; walking on")
                self.resume_walking()
                return
            if self.direction is Direction.EAST:
                reached = self.x >= self.stand_stop_x
            else:
                reached = self.x <= self.stand_stop_x
            if not reached:
                self.x += self.direction.value * self._step(dt)
                return
            self.x = self.stand_stop_x
            self.phase = phase = MovementPhase.APPROACH_Y

        if phase is MovementPhase.APPROACH_Y:
            self._approach_stand(dt)
            return

        if phase is MovementPhase.REPOSITION:
            if self.reposition_x is None:
                self._log.warning("Repositioning without a target x; waiting in place")
                self.phase = MovementPhase.WAITING
                return
            dx = self.reposition_x - self.x
            step = self._step(dt)
            if abs(dx) <= step:
                self.x = self.reposition_x
                self.reposition_x = None
                self.phase = MovementPhase.WAITING
            else:
                self.x += step if dx > 0 else -step
            return

        if phase is MovementPhase.RETURN_TO_PATH:
            self.y = max(self.start_y, self.y - self._step(dt))
            if self.y > self.start_y:
                return
            self.phase = MovementPhase.WALKING

        self.x += self.direction.value * self._step(dt)

    def _approach_stand(self, dt: float) -> None:
        stop_y = self.stand_stop_y
        if stop_y is None or self.y >= stop_y:
            if stop_y is not None:
                self.y = stop_y
            self._arrive()
            return
        self.y += self._step(dt)
        if self.y >= stop_y:
            self.y = stop_y
            self._arrive()

    def _arrive(self) -> None:
        self.phase = MovementPhase.WAITING
        if self.stand is not None:
            self.stand.notify_arrived(self)

    # -- External signals --

    def move_to_next_slot(self, new_slot_x: float) -> None:
        if self.phase not in (MovementPhase.WAITING, MovementPhase.REPOSITION):
            self._log.warning("move_to_next_slot ignored in phase %s", self.phase.value)
            return
        self.stand_stop_x = new_slot_x
        self.reposition_x = new_slot_x
        self.phase = MovementPhase.REPOSITION

    def resume_walking(self) -> None:
        if self.phase is MovementPhase.DESPAWNED:
            self._log.warning("resume_walking ignored for a despawned traveler")
            return
        self.wanted_purchases = []
        self.reposition_x = None
        if self.y > self.start_y:
            self.phase = MovementPhase.RETURN_TO_PATH
        else:
            self.y = self.start_y
            self.phase = MovementPhase.WALKING

    def despawn(self) -> None:
        self.phase = MovementPhase.DESPAWNED
        self.reposition_x = None

    def past_despawn_line(self) -> bool:
        if self.despawn_x is None:
            return False
        if self.direction is Direction.EAST:
            return self.x > self.despawn_x
        return self.x < self.despawn_x

    def assert_consistent(self) -> None:
        """Raise MovementPhaseError if the payload contradicts the phase."""
        phase = self.phase
        if phase is MovementPhase.DESPAWNED:
            return
        if phase is MovementPhase.REPOSITION:
            if self.reposition_x is None:
                raise MovementPhaseError(phase, "repositioning without a target x")
        elif self.reposition_x is not None:
            raise MovementPhaseError(phase, f"stray reposition target {self.reposition_x}")
        if phase in _STAND_PHASES and (self.stand_stop_x is None or not self.wanted_purchases):
            raise MovementPhaseError(phase, "stand phase without a purchase plan")
        if phase in (MovementPhase.WALKING, MovementPhase.APPROACH_X) and self.y != self.start_y:
            raise MovementPhaseError(phase, f"off the path at y={self.y}")
        if phase is MovementPhase.RETURN_TO_PATH and self.y <= self.start_y:
            raise MovementPhaseError(phase, "returning while already on the path")

    def sort_y(self) -> float:
        return self.y


class TravelerManager:
    """Spawns travelers at random intervals and despawns them past the far edge."""

    def __init__(
        self,
        tilemap: TileMap,
        config: TravelerConfig | None = None,
        *,
        registry: ResourceRegistry | None = None,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.tilemap = tilemap
        self.config = config if config is not None else TravelerConfig()
        self._rng = rng if rng is not None else random.Random()
        self._log = logger if logger is not None else logging.getLogger(__name__)
        self.preferences = PreferenceEngine(
            registry if registry is not None else ResourceRegistry(),
            self.config,
            self._log,
        )
        self.travelers: list[Traveler] = []
        self.stand: RoadsideStand | None = None
        self.camera: Camera | None = None
        self.spawn_timer = 0.0
        self.spawn_interval = self._random_interval()

    def set_stand(self, stand: RoadsideStand | None) -> None:
        self.stand = stand

    def set_camera(self, camera: Camera | None) -> None:
        self.camera = camera

    def _random_interval(self) -> float:
        lo, hi = self.config.spawn_interval_min, self.config.spawn_interval_max
        return lo + self._rng.random() * (hi - lo)

    def visible_bounds(self) -> tuple[float, float]:
        """Left/right world pixel bounds; the whole map when no camera is set."""
        if self.camera is not None:
            return self.camera.get_visible_bounds()
        return 0.0, float(self.tilemap.map_width * self.tilemap.tile_size)

    def spawn_traveler(self, direction: Direction | None = None) -> Traveler:
        left, right = self.visible_bounds()
        margin = self.config.despawn_margin
        if direction is None:
            direction = Direction.EAST if self._rng.random() < 0.5 else Direction.WEST

        if direction is Direction.EAST:
            spawn_x, despawn_x = left - margin, right + margin
        else:
            spawn_x, despawn_x = right + margin, left - margin

        traveler = Traveler(
            spawn_x,
            self.config.path_center_y,
            direction,
            self._rng.choice(self.config.hair_styles),
            speed=self.config.speed,
            stand=self.stand,
            logger=self._log,
        )
        traveler.despawn_x = despawn_x
        if self.stand is not None:
            prefs = self.preferences.roll(self._rng)
            plan = self.preferences.plan(prefs, self.stand, self._rng)
            traveler.apply_preferences(prefs, plan)
        self.travelers.append(traveler)

        self._log.debug(
            "Spawned traveler dir=%s hair=%s x=%d despawn_x=%d visit_stand=%s",
            direction.name, traveler.hair_style, round(spawn_x), round(despawn_x),
            traveler.visit_stand,
        )
        return traveler

    def update(self, dt: float) -> None:
        self.spawn_timer += dt
        if self.spawn_timer >= self.spawn_interval:
            self.spawn_timer = 0.0
            self.spawn_interval = self._random_interval()
            self.spawn_traveler()

        for traveler in self.travelers:
            traveler.update(dt)
            if traveler.phase is MovementPhase.WALKING and traveler.past_despawn_line():
                traveler.despawn()
                self._log.debug("Despawned traveler at x=%d", round(traveler.x))

        self.travelers = [t for t in self.travelers if not t.is_despawned]

    def get_travelers(self) -> list[Traveler]:
        return self.travelers
