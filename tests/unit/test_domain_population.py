"""Unit tests for population rules."""

from __future__ import annotations

import pytest

from stronghold.domain import models as dm
from stronghold.domain import population


def test_food_security_ratio_and_cap():
    people = dm.Population()
    assert population.food_security(people, 50) == pytest.approx(0.4)
    assert population.food_security(people, 10_000) == 1.0
    assert population.food_security(dm.Population(0, 0, 0), 0) == 1.0


def test_update_population_uses_growth_rate(scripted):
    people = dm.Population(peasants=1000, merchants=100, nobles=10, happiness=0.5)
    economy = dm.Economy()
    rng = scripted([99, 99])

    population.update_population(people, economy, dm.Army(), rng, food_security=1.0)

    rate = people.growth_rate
    assert rate == pytest.approx(0.05 + 0.5 * 0.05 - 0.45 * 0.1 + 0.02)
    assert people.peasants == 1000 + int(1000 * rate)
    assert people.merchants == 100 + int(100 * rate * 0.8)
    assert people.nobles == 10 + int(10 * rate * 0.5)
    assert rng.calls == [100, 100]


def test_growth_rate_clamped_and_mobility_moves_people(scripted):
    people = dm.Population(peasants=1000, merchants=100, nobles=10, happiness=0.0)
    economy = dm.Economy(peasant_tax_rate=0.5, merchant_tax_rate=0.5, noble_tax_rate=0.5)

    population.update_population(people, economy, dm.Army(), scripted([0, 0]), food_security=0.0)

    assert people.growth_rate == 0.01
    # 1010 peasants after growth, 10 move up; 110 merchants, 1 moves up.
    assert people.peasants == 1000
    assert people.merchants == 109
    assert people.nobles == 11


def test_mobility_moves_at_least_one(scripted):
    people = dm.Population(peasants=20, merchants=3, nobles=0, happiness=0.0)
    economy = dm.Economy(peasant_tax_rate=0.5, merchant_tax_rate=0.5, noble_tax_rate=0.5)

    population.update_population(people, economy, dm.Army(), scripted([0, 0]), food_security=0.0)

    assert people.peasants == 19
    assert people.merchants == 3
    assert people.nobles == 1


def test_calculate_happiness_blend():
    people = dm.Population()
    result = population.calculate_happiness(people, dm.Economy(), dm.Army())

    expected = 0.5 * 0.7 + (1 - (0.2 + 0.225 + 0.1)) * 0.1 + (80 / 125 * 0.5) * 0.1 + (1 - 0.04) * 0.1
    assert result == pytest.approx(expected)
    assert people.happiness == result


def test_calculate_happiness_with_no_people_counts_full_presence():
    people = dm.Population(0, 0, 0, happiness=0.5)
    result = population.calculate_happiness(people, dm.Economy(), dm.Army())
    assert result == pytest.approx(0.35 + 0.0475 + 0.1 + 0.096)


def test_check_rebellion_content_people_never_roll(scripted):
    rng = scripted([])
    assert not population.check_rebellion(dm.Population(happiness=0.3), rng)
    assert rng.calls == []


def test_check_rebellion_probability(scripted):
    miserable = dm.Population(happiness=0.0)
    assert population.check_rebellion(miserable, scripted([39]))
    assert not population.check_rebellion(miserable, scripted([45]))

    unhappy = dm.Population(happiness=0.1)
    assert population.check_rebellion(unhappy, scripted([10]))
    assert not population.check_rebellion(unhappy, scripted([25]))
