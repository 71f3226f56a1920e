"""Taxation, upkeep, inflation and unrest rules."""

from __future__ import annotations

from stronghold.utils.rng import KingdomRandom

from .models import Army, Economy, Population, clamp
from .rules_config import DEFAULT_RULES, RulesConfig


def collect_taxes(
    economy: Economy,
    population: Population,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Tax every cohort at its own rate and deposit the revenue."""

    cfg = rules.economy
    peasant_tax = int(population.peasants * cfg.peasant_tax_base * economy.peasant_tax_rate)
    merchant_tax = int(population.merchants * cfg.merchant_tax_base * economy.merchant_tax_rate)
    noble_tax = int(population.nobles * cfg.noble_tax_base * economy.noble_tax_rate)

    total = peasant_tax + merchant_tax + noble_tax
    economy.set_treasury(economy.treasury + total)
    return total


def update_economy(
    economy: Economy,
    population: Population,
    army: Army,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Pay upkeep, drift inflation and accrue interest on outstanding debt.

    Returns the upkeep actually paid.  Neither charge can push the treasury
    below zero; whatever cannot be paid is simply not paid.
    """

    cfg = rules.economy
    army_cost = min(economy.treasury, army.total * cfg.upkeep_per_soldier)
    economy.set_treasury(economy.treasury - army_cost)

    bureaucracy_cost = min(economy.treasury, population.total // cfg.bureaucracy_divisor)
    economy.set_treasury(economy.treasury - bureaucracy_cost)

    activity = population.total / cfg.activity_scale
    treasury_ratio = min(1.0, economy.treasury / cfg.treasury_scale)
    inflation = (
        economy.inflation * cfg.inflation_inertia
        + activity * cfg.activity_weight
        - treasury_ratio * cfg.treasury_weight
    )
    economy.set_inflation(clamp(inflation, cfg.min_inflation, cfg.max_inflation))

    if economy.debt > 0:
        economy.set_debt(economy.debt + int(economy.debt * cfg.debt_interest))

    return army_cost + bureaucracy_cost


def calculate_unrest(economy: Economy, population: Population) -> float:
    """Economic instability score, capped at 1 (may go negative)."""

    average_tax = economy.tax_burden / 3.0
    inflation_impact = economy.inflation * 5.0
    return min(1.0, average_tax * 0.5 + inflation_impact * 0.3 - population.happiness * 0.5)


def check_riots(
    economy: Economy,
    population: Population,
    rng: KingdomRandom,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> bool:
    unrest = calculate_unrest(economy, population)
    if unrest <= rules.economy.riot_threshold:
        return False
    return rng.chance(unrest * 100)


def set_tax_rates(
    economy: Economy,
    *,
    peasant: float | None = None,
    merchant: float | None = None,
    noble: float | None = None,
) -> None:
    """Update any subset of the tax rates; each is clamped to [0, 0.5]."""

    if peasant is not None:
        economy.set_peasant_tax_rate(peasant)
    if merchant is not None:
        economy.set_merchant_tax_rate(merchant)
    if noble is not None:
        economy.set_noble_tax_rate(noble)
