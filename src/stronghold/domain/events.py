"""Random event catalog, cooldown gate and effect handlers."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from stronghold.utils.rng import KingdomRandom

from . import army as army_rules
from .enums import EventType
from .models import EventScheduler, King, Kingdom
from .results import EventOutcome

logger = logging.getLogger(__name__)

EVENT_CATALOG: tuple[EventType, ...] = tuple(EventType)


def check_for_event(
    scheduler: EventScheduler,
    rng: KingdomRandom,
    now: float | None = None,
) -> bool:
    """Decide whether an event fires now.

    Nothing is rolled while the cooldown is running.  A successful roll
    stamps ``last_event_time`` with ``now``.
    """

    current = time.monotonic() if now is None else now
    if current - scheduler.last_event_time < scheduler.cooldown_seconds:
        return False
    if not rng.chance(scheduler.event_chance):
        return False
    scheduler.last_event_time = current
    return True


def generate_event(rng: KingdomRandom) -> EventType:
    return rng.choice(EVENT_CATALOG)


Handler = Callable[[Kingdom, KingdomRandom], tuple[str, str, dict[str, object]]]


def apply_event(event: EventType, kingdom: Kingdom, rng: KingdomRandom) -> EventOutcome:
    """Apply ``event`` to the kingdom, record it in the chronicle and describe it."""

    handler = _EVENT_HANDLERS[event]
    title, description, details = handler(kingdom, rng)
    kingdom.record(event, description, details)
    logger.info("event %s: %s", event, description)
    return EventOutcome(event=event, title=title, description=description, details=details)


def _handle_plague(kingdom: Kingdom, rng: KingdomRandom) -> tuple[str, str, dict[str, object]]:
    population = kingdom.population
    loss = population.total // 10
    population.set_peasants(population.peasants - loss * 8 // 10)
    population.set_merchants(int(population.merchants - loss * 1.5 / 10))
    population.set_nobles(int(population.nobles - loss * 0.5 / 10))
    population.adjust_happiness(-0.2)
    return "Plague", f"A terrible plague claims {loss} lives", {"population_loss": loss}


def _handle_good_harvest(kingdom: Kingdom, rng: KingdomRandom) -> tuple[str, str, dict[str, object]]:
    gain = kingdom.population.peasants * 2
    kingdom.market.food.change_amount(gain)
    kingdom.population.adjust_happiness(0.15)
    return "Good Harvest", f"A bountiful harvest adds {gain} food", {"food_gain": gain}


def _handle_drought(kingdom: Kingdom, rng: KingdomRandom) -> tuple[str, str, dict[str, object]]:
    food = kingdom.market.food
    loss = food.amount // 3
    food.change_amount(-loss)
    kingdom.population.adjust_happiness(-0.1)
    return "Drought", f"A severe drought destroys {loss} food", {"food_loss": loss}


def _handle_foreign_invasion(kingdom: Kingdom, rng: KingdomRandom) -> tuple[str, str, dict[str, object]]:
    army = kingdom.army
    loss = army_rules.apply_battle_losses(army)
    army.set_war_status(True)
    army.adjust_morale(-0.15)
    return (
        "Foreign Invasion",
        f"A neighbouring kingdom invades; the army loses {loss} troops and the kingdom is at war",
        {"army_loss": loss},
    )


def _handle_rebellion(kingdom: Kingdom, rng: KingdomRandom) -> tuple[str, str, dict[str, object]]:
    population = kingdom.population
    army = kingdom.army
    population_loss = population.total // 10
    army_loss = army.total // 10
    population.set_peasants(population.peasants - population_loss)
    army.set_infantry(army.infantry - army_loss)
    population.adjust_happiness(-0.2)
    army.adjust_morale(-0.2)
    return (
        "Rebellion",
        f"The people rise up; {population_loss} citizens and {army_loss} soldiers are lost",
        {"population_loss": population_loss, "army_loss": army_loss},
    )


def _handle_assassination(kingdom: Kingdom, rng: KingdomRandom) -> tuple[str, str, dict[str, object]]:
    if rng.below(2) == 0:
        kingdom.population.adjust_happiness(-0.1)
        return (
            "Assassination Attempt",
            "An assassin strikes at the ruler but fails",
            {"ruler_replaced": False},
        )

    previous = kingdom.ruler.name
    kingdom.set_ruler(King("New King", 50, 50, 50, 50))
    kingdom.population.adjust_happiness(-0.3)
    return (
        "Assassination Attempt",
        f"{previous} is gravely wounded and replaced by a new king",
        {"ruler_replaced": True, "previous_ruler": previous},
    )


def _handle_discovery(kingdom: Kingdom, rng: KingdomRandom) -> tuple[str, str, dict[str, object]]:
    market = kingdom.market
    roll = rng.below(3)
    if roll == 0:
        resource, gain = market.iron, 100 + rng.below(100)
        description = f"A new iron mine yields {gain} iron"
    elif roll == 1:
        resource, gain = market.wood, 200 + rng.below(200)
        description = f"A lush forest provides {gain} wood"
    else:
        resource, gain = market.stone, 150 + rng.below(150)
        description = f"A quarry yields {gain} stone"
    resource.change_amount(gain)
    kingdom.population.adjust_happiness(0.1)
    return "Discovery", description, {"resource": resource.name, "gain": gain}


def _handle_festival(kingdom: Kingdom, rng: KingdomRandom) -> tuple[str, str, dict[str, object]]:
    kingdom.population.adjust_happiness(0.2)
    kingdom.economy.set_treasury(kingdom.economy.treasury - 100)
    return "Festival", "A grand festival costs 100 gold and delights the people", {"cost": 100}


def _handle_fire(kingdom: Kingdom, rng: KingdomRandom) -> tuple[str, str, dict[str, object]]:
    market = kingdom.market
    wood_loss = market.wood.amount // 4
    food_loss = market.food.amount // 5
    market.wood.change_amount(-wood_loss)
    market.food.change_amount(-food_loss)
    kingdom.population.adjust_happiness(-0.15)
    return (
        "Fire",
        f"A massive fire burns {wood_loss} wood and {food_loss} food",
        {"wood_loss": wood_loss, "food_loss": food_loss},
    )


def _handle_earthquake(kingdom: Kingdom, rng: KingdomRandom) -> tuple[str, str, dict[str, object]]:
    market = kingdom.market
    population = kingdom.population
    stone_loss = market.stone.amount // 3
    population_loss = population.total // 20
    market.stone.change_amount(-stone_loss)
    population.set_peasants(population.peasants - population_loss)
    population.adjust_happiness(-0.2)
    return (
        "Earthquake",
        f"An earthquake destroys {stone_loss} stone and kills {population_loss} people",
        {"stone_loss": stone_loss, "population_loss": population_loss},
    )


_EVENT_HANDLERS: dict[EventType, Handler] = {
    EventType.PLAGUE: _handle_plague,
    EventType.GOOD_HARVEST: _handle_good_harvest,
    EventType.DROUGHT: _handle_drought,
    EventType.FOREIGN_INVASION: _handle_foreign_invasion,
    EventType.REBELLION: _handle_rebellion,
    EventType.ASSASSINATION: _handle_assassination,
    EventType.DISCOVERY: _handle_discovery,
    EventType.FESTIVAL: _handle_festival,
    EventType.FIRE: _handle_fire,
    EventType.EARTHQUAKE: _handle_earthquake,
}
