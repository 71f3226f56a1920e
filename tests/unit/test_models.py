"""Range invariants of the domain dataclasses."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from stronghold.domain import models as dm
from stronghold.domain.enums import EventType, LeaderKind, RelationStanding, ResourceKind

floats = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False)
ints = st.integers(min_value=-10**9, max_value=10**9)


@given(value=floats, low=st.floats(-10, 0), high=st.floats(0, 10))
def test_clamp_bounds(value, low, high):
    result = dm.clamp(value, low, high)
    assert low <= result <= high


@given(start=st.integers(min_value=0, max_value=10_000), delta=ints)
def test_resource_amount_never_negative(start, delta):
    resource = dm.Resource(ResourceKind.FOOD, start)
    resource.change_amount(delta)
    assert resource.amount >= 0


@given(happiness=floats, growth=floats, peasants=ints)
def test_population_setters_clamp(happiness, growth, peasants):
    population = dm.Population()
    population.set_happiness(happiness)
    population.set_growth_rate(growth)
    population.set_peasants(peasants)
    assert 0.0 <= population.happiness <= 1.0
    assert 0.01 <= population.growth_rate <= 0.2
    assert population.peasants >= 0


@given(morale=floats, level=ints, infantry=ints)
def test_army_setters_clamp(morale, level, infantry):
    army = dm.Army()
    army.set_morale(morale)
    army.set_training_level(level)
    army.set_infantry(infantry)
    assert 0.0 <= army.morale <= 1.0
    assert army.training_level >= 1
    assert army.infantry >= 0


@given(rate=floats, inflation=floats, treasury=ints, debt=ints)
def test_economy_setters_clamp(rate, inflation, treasury, debt):
    economy = dm.Economy()
    economy.set_peasant_tax_rate(rate)
    economy.set_merchant_tax_rate(rate)
    economy.set_noble_tax_rate(rate)
    economy.set_inflation(inflation)
    economy.set_treasury(treasury)
    economy.set_debt(debt)
    for value in (economy.peasant_tax_rate, economy.merchant_tax_rate, economy.noble_tax_rate):
        assert 0.0 <= value <= 0.5
    assert 0.01 <= economy.inflation <= 0.2
    assert economy.treasury >= 0
    assert economy.debt >= 0


@given(rate=floats, limit=ints, corruption=ints)
def test_bank_setters_clamp(rate, limit, corruption):
    bank = dm.Bank()
    bank.set_interest_rate(rate)
    bank.set_max_loan_amount(limit)
    bank.set_corruption_level(corruption)
    assert 0.01 <= bank.interest_rate <= 0.2
    assert bank.max_loan_amount >= 100
    assert 0 <= bank.corruption_level <= 100


@given(delta=st.integers(min_value=-100, max_value=100))
def test_relation_level_clamped(delta):
    entry = dm.ForeignKingdom("Northlands", 500)
    entry.change_relation(delta)
    assert -10 <= entry.relation_level <= 10


def test_constructor_values_are_clamped():
    population = dm.Population(peasants=-5, happiness=3.0)
    assert population.peasants == 0
    assert population.happiness == 1.0
    assert dm.Commander("Rex", loyalty=250).loyalty == 100


def test_relation_standing_labels():
    entry = dm.ForeignKingdom("Northlands", 500)
    expected = {
        10: RelationStanding.FRIENDLY,
        7: RelationStanding.FRIENDLY,
        6: RelationStanding.CORDIAL,
        3: RelationStanding.CORDIAL,
        2: RelationStanding.NEUTRAL,
        0: RelationStanding.NEUTRAL,
        -1: RelationStanding.SUSPICIOUS,
        -3: RelationStanding.SUSPICIOUS,
        -4: RelationStanding.HOSTILE,
        -10: RelationStanding.HOSTILE,
    }
    for level, standing in expected.items():
        entry.set_relation_level(level)
        assert entry.standing is standing, level


def test_foreign_status_prefers_war():
    entry = dm.ForeignKingdom("Northlands", 500)
    assert entry.status == "Peaceful"
    entry.is_ally = True
    assert entry.status == "Allied"
    entry.at_war = True
    assert entry.status == "At War"


def test_diplomacy_refuses_duplicates_and_keeps_order():
    diplomacy = dm.Diplomacy()
    assert diplomacy.add_kingdom("B", 100)
    assert diplomacy.add_kingdom("A", 200)
    assert not diplomacy.add_kingdom("B", 999)
    assert [entry.name for entry in diplomacy.roster()] == ["B", "A"]
    assert diplomacy.find("B").strength == 100
    assert diplomacy.find("C") is None


def test_market_lookup_by_kind():
    market = dm.Market()
    assert market.get(ResourceKind.IRON) is market.iron
    assert [resource.name for resource in market.resources()] == ["Food", "Gold", "Wood", "Stone", "Iron"]
    assert market.food.amount == 1000
    assert market.gold.amount == 500


def test_kingdom_defaults_and_score_clamp():
    kingdom = dm.Kingdom(name="Avalon")
    assert kingdom.ruler.kind is LeaderKind.KING
    assert kingdom.population.total == 125
    assert kingdom.army.total == 80
    kingdom.set_score(-50)
    assert kingdom.score == 0
    kingdom.set_year(0)
    assert kingdom.year == 1


def test_kingdom_record_appends_chronicle():
    kingdom = dm.Kingdom(name="Avalon", year=4)
    entry = kingdom.record(EventType.FIRE, "Smoke over the keep", {"wood_loss": 3})
    assert kingdom.chronicle == [entry]
    assert entry.year == 4
    assert entry.kind == "fire"
