"""Unit tests for the random event catalog."""

from __future__ import annotations

import pytest

from stronghold.domain import events
from stronghold.domain import models as dm
from stronghold.domain.enums import EventType


def _kingdom() -> dm.Kingdom:
    return dm.Kingdom(name="Avalon", ruler=dm.King("Arthur", 50, 50, 50, 50))


def test_catalog_order():
    assert events.EVENT_CATALOG[0] is EventType.PLAGUE
    assert events.EVENT_CATALOG[-1] is EventType.EARTHQUAKE
    assert len(events.EVENT_CATALOG) == 10


def test_cooldown_blocks_without_rolling(scripted):
    scheduler = dm.EventScheduler(event_chance=100, cooldown_seconds=5.0, last_event_time=100.0)
    rng = scripted([])
    assert not events.check_for_event(scheduler, rng, now=104.9)
    assert rng.calls == []


def test_event_fires_and_stamps_time(scripted):
    scheduler = dm.EventScheduler(event_chance=15, cooldown_seconds=5.0, last_event_time=100.0)
    assert events.check_for_event(scheduler, scripted([14]), now=105.0)
    assert scheduler.last_event_time == 105.0


def test_failed_roll_keeps_last_time(scripted):
    scheduler = dm.EventScheduler(event_chance=15, cooldown_seconds=5.0, last_event_time=100.0)
    assert not events.check_for_event(scheduler, scripted([15]), now=200.0)
    assert scheduler.last_event_time == 100.0


def test_generate_event_uses_catalog_order(scripted):
    assert events.generate_event(scripted([0])) is EventType.PLAGUE
    assert events.generate_event(scripted([7])) is EventType.FESTIVAL
    assert events.generate_event(scripted([9])) is EventType.EARTHQUAKE


def test_plague(scripted):
    kingdom = _kingdom()
    outcome = events.apply_event(EventType.PLAGUE, kingdom, scripted([]))

    population = kingdom.population
    assert (population.peasants, population.merchants, population.nobles) == (91, 18, 4)
    assert population.happiness == pytest.approx(0.3)
    assert outcome.details == {"population_loss": 12}
    assert kingdom.chronicle[-1].kind == "plague"
    assert kingdom.chronicle[-1].description == outcome.description


def test_good_harvest(scripted):
    kingdom = _kingdom()
    events.apply_event(EventType.GOOD_HARVEST, kingdom, scripted([]))
    assert kingdom.market.food.amount == 1200
    assert kingdom.population.happiness == pytest.approx(0.65)


def test_drought(scripted):
    kingdom = _kingdom()
    events.apply_event(EventType.DROUGHT, kingdom, scripted([]))
    assert kingdom.market.food.amount == 667
    assert kingdom.population.happiness == pytest.approx(0.4)


def test_foreign_invasion(scripted):
    kingdom = _kingdom()
    events.apply_event(EventType.FOREIGN_INVASION, kingdom, scripted([]))
    army = kingdom.army
    assert (army.infantry, army.cavalry, army.archers) == (46, 9, 19)
    assert army.at_war
    assert army.morale == pytest.approx(0.55)


def test_rebellion(scripted):
    kingdom = _kingdom()
    outcome = events.apply_event(EventType.REBELLION, kingdom, scripted([]))
    assert kingdom.population.peasants == 88
    assert kingdom.army.infantry == 42
    assert kingdom.population.happiness == pytest.approx(0.3)
    assert kingdom.army.morale == pytest.approx(0.5)
    assert outcome.details == {"population_loss": 12, "army_loss": 8}


def test_assassination_attempt_fails(scripted):
    kingdom = _kingdom()
    outcome = events.apply_event(EventType.ASSASSINATION, kingdom, scripted([0]))
    assert kingdom.ruler.name == "Arthur"
    assert kingdom.population.happiness == pytest.approx(0.4)
    assert outcome.details["ruler_replaced"] is False


def test_assassination_replaces_ruler(scripted):
    kingdom = _kingdom()
    outcome = events.apply_event(EventType.ASSASSINATION, kingdom, scripted([1]))
    assert isinstance(kingdom.ruler, dm.King)
    assert kingdom.ruler.name == "New King"
    assert kingdom.population.happiness == pytest.approx(0.2)
    assert outcome.details["previous_ruler"] == "Arthur"


@pytest.mark.parametrize(
    ("rolls", "resource", "expected"),
    [
        ([0, 50], "iron", 350),
        ([1, 0], "wood", 700),
        ([2, 149], "stone", 599),
    ],
)
def test_discovery(scripted, rolls, resource, expected):
    kingdom = _kingdom()
    events.apply_event(EventType.DISCOVERY, kingdom, scripted(rolls))
    assert getattr(kingdom.market, resource).amount == expected
    assert kingdom.population.happiness == pytest.approx(0.6)


def test_festival(scripted):
    kingdom = _kingdom()
    events.apply_event(EventType.FESTIVAL, kingdom, scripted([]))
    assert kingdom.economy.treasury == 900
    assert kingdom.population.happiness == pytest.approx(0.7)


def test_festival_with_empty_treasury(scripted):
    kingdom = _kingdom()
    kingdom.economy.set_treasury(50)
    events.apply_event(EventType.FESTIVAL, kingdom, scripted([]))
    assert kingdom.economy.treasury == 0


def test_fire(scripted):
    kingdom = _kingdom()
    events.apply_event(EventType.FIRE, kingdom, scripted([]))
    assert kingdom.market.wood.amount == 375
    assert kingdom.market.food.amount == 800
    assert kingdom.population.happiness == pytest.approx(0.35)


def test_earthquake(scripted):
    kingdom = _kingdom()
    events.apply_event(EventType.EARTHQUAKE, kingdom, scripted([]))
    assert kingdom.market.stone.amount == 200
    assert kingdom.population.peasants == 94
    assert kingdom.population.happiness == pytest.approx(0.3)


def test_every_event_is_recorded(scripted):
    kingdom = _kingdom()
    for event in events.EVENT_CATALOG:
        events.apply_event(event, kingdom, scripted([1, 1]))
    assert [entry.kind for entry in kingdom.chronicle] == [str(event) for event in events.EVENT_CATALOG]
