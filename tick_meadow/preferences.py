"""Traveler tastes, budgets and purchase planning at the roadside stand."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from tick_meadow.config import TravelerConfig
from tick_meadow.resources import ResourceRegistry
from tick_meadow.stand import RoadsideStand


@dataclass(frozen=True)
class Preferences:
    liked: frozenset[str]
    hated: frozenset[str]
    gold: int


@dataclass(frozen=True)
class PurchasePlan:
    visit: bool
    purchases: tuple[int, ...] = ()
    stop_x: float | None = None
    stop_y: float | None = None


NO_VISIT = PurchasePlan(visit=False)


@dataclass
class _SlotOffer:
    index: int
    price: int


@dataclass
class PreferenceEngine:
    """Rolls a traveler's likes, hates and gold, then decides what they buy.

    Liked and hated sets are disjoint: hates are drawn from what is left
    of the shuffled pool after likes are taken.
    """

    registry: ResourceRegistry
    config: TravelerConfig = field(default_factory=TravelerConfig)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def roll(self, rng: random.Random) -> Preferences:
        pool = [r.id for r in self.registry.sellable()]
        rng.shuffle(pool)

        liked_count = rng.randint(2, self.config.liked_item_count)
        liked = pool[:liked_count]
        remaining = pool[len(liked):]
        hated_count = rng.randint(2, self.config.hated_item_count)
        hated = remaining[:hated_count]

        gold = rng.randint(self.config.gold_min, self.config.gold_max)
        return Preferences(liked=frozenset(liked), hated=frozenset(hated), gold=gold)

    def wants_to_visit(self, prefs: Preferences, stand: RoadsideStand, rng: random.Random) -> bool:
        listed = stand.get_listed_resource_ids()
        if not listed:
            return False
        if any(rid in prefs.liked for rid in listed):
            return True
        if all(rid in prefs.hated for rid in listed):
            return False
        return rng.random() < self.config.neutral_visit_chance

    def plan(self, prefs: Preferences, stand: RoadsideStand, rng: random.Random) -> PurchasePlan:
        """Decide whether to stop and which slots to buy, in order."""
        if not self.wants_to_visit(prefs, stand, rng):
            return NO_VISIT

        liked: list[_SlotOffer] = []
        neutral: list[_SlotOffer] = []
        for i, slot in enumerate(stand.slots):
            resource = slot.resource
            if resource is None:
                continue
            price = resource.sell_price or 0
            if resource.id in prefs.liked:
                # A liked item the traveler cannot afford is never bought.
                if price <= prefs.gold:
                    liked.append(_SlotOffer(i, price))
            elif resource.id not in prefs.hated:
                neutral.append(_SlotOffer(i, price))

        liked.sort(key=lambda offer: offer.price, reverse=True)

        purchases: list[int] = []
        gold = prefs.gold
        for offer in liked:
            if gold >= offer.price:
                purchases.append(offer.index)
                gold -= offer.price

        prob = self.config.neutral_base_probability
        for offer in neutral:
            if gold >= offer.price and rng.random() < prob:
                purchases.append(offer.index)
                gold -= offer.price
                prob -= self.config.neutral_decay_rate
                if prob <= 0:
                    break

        if not purchases:
            return NO_VISIT

        plan = PurchasePlan(
            visit=True,
            purchases=tuple(purchases),
            stop_x=stand.get_slot_world_x(purchases[0]),
            stop_y=stand.traveler_stop_y(),
        )
        self.logger.debug(
            "Traveler will stop at stand, purchases=%s, stop=(%d, %d)",
            list(plan.purchases), round(plan.stop_x), round(plan.stop_y),
        )
        return plan
