"""Population growth, happiness and rebellion rules."""

from __future__ import annotations

from stronghold.utils.rng import KingdomRandom

from .models import Army, Economy, Population, clamp
from .rules_config import DEFAULT_RULES, RulesConfig


def food_security(population: Population, food_amount: int) -> float:
    """Share of the population that current food stocks can feed, capped at 1."""

    if population.total <= 0:
        return 1.0
    return min(1.0, food_amount / population.total)


def update_population(
    population: Population,
    economy: Economy,
    army: Army,
    rng: KingdomRandom,
    *,
    food_security: float = 1.0,
    rules: RulesConfig = DEFAULT_RULES,
) -> None:
    """Recompute the growth rate, grow every cohort and roll social mobility."""

    cfg = rules.population
    rate = (
        cfg.base_growth
        + population.happiness * cfg.happiness_growth_weight
        - economy.tax_burden * cfg.tax_burden_growth_weight
        + food_security * cfg.food_security_growth_weight
    )
    population.set_growth_rate(clamp(rate, cfg.min_growth_rate, cfg.max_growth_rate))
    rate = population.growth_rate

    population.set_peasants(population.peasants + int(population.peasants * rate))
    population.set_merchants(
        population.merchants + int(population.merchants * rate * cfg.merchant_growth_factor)
    )
    population.set_nobles(population.nobles + int(population.nobles * rate * cfg.noble_growth_factor))

    if rng.chance(cfg.peasant_mobility_chance):
        moved = min(population.peasants, max(1, int(population.peasants * cfg.mobility_fraction)))
        population.set_peasants(population.peasants - moved)
        population.set_merchants(population.merchants + moved)

    if rng.chance(cfg.merchant_mobility_chance):
        moved = min(population.merchants, max(1, int(population.merchants * cfg.mobility_fraction)))
        population.set_merchants(population.merchants - moved)
        population.set_nobles(population.nobles + moved)


def calculate_happiness(
    population: Population,
    economy: Economy,
    army: Army,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> float:
    """Blend current happiness with tax, garrison and inflation factors."""

    cfg = rules.population
    tax_factor = 1.0 - (
        economy.peasant_tax_rate * 2 + economy.merchant_tax_rate * 1.5 + economy.noble_tax_rate * 0.5
    )
    if population.total > 0:
        army_presence = min(1.0, army.total / population.total * 0.5)
    else:
        army_presence = 1.0
    inflation_factor = 1.0 - economy.inflation * 2.0

    weight = cfg.happiness_factor_weight
    population.set_happiness(
        population.happiness * cfg.happiness_inertia
        + tax_factor * weight
        + army_presence * weight
        + inflation_factor * weight
    )
    return population.happiness


def check_rebellion(
    population: Population,
    rng: KingdomRandom,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> bool:
    """Very unhappy subjects may rise up; no die is rolled otherwise."""

    cfg = rules.population
    if population.happiness >= cfg.rebellion_threshold:
        return False
    return rng.chance((cfg.rebellion_threshold - population.happiness) * cfg.rebellion_multiplier)
