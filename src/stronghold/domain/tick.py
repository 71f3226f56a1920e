"""Yearly tick orchestration for Stronghold kingdoms."""

from __future__ import annotations

import logging

from stronghold.utils.rng import KingdomRandom

from . import army as army_rules
from . import bank as bank_rules
from . import diplomacy as diplomacy_rules
from . import economy as economy_rules
from . import events as event_rules
from . import market as market_rules
from . import population as population_rules
from . import rulers
from .enums import EventType
from .kingdom import calculate_score, is_game_over
from .models import Kingdom
from .resources import apply_resource_effects
from .results import YearReport
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


def advance_year(
    kingdom: Kingdom,
    rng: KingdomRandom,
    *,
    now: float | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> YearReport:
    """Advance the kingdom by one year.

    The subsystem updates run in a fixed order and every random draw comes
    from ``rng``, so a seeded stream and a fixed ``now`` replay exactly.
    """

    report = YearReport(year=kingdom.year)

    _update_subsystems(kingdom, rng, report, rules)
    _apply_ruler_and_resources(kingdom, rng, report, rules)

    if event_rules.check_for_event(kingdom.events, rng, now):
        event = event_rules.generate_event(rng)
        report.event = event_rules.apply_event(event, kingdom, rng)
        report.messages.append(report.event.description)

    if _unrest(kingdom, rng, rules):
        report.messages.append("Unrest threatens the stability of your kingdom!")
        report.unrest = event_rules.apply_event(EventType.REBELLION, kingdom, rng)

    report.taxes_collected = economy_rules.collect_taxes(kingdom.economy, kingdom.population, rules=rules)
    report.messages.append(f"Collected {report.taxes_collected} gold in taxes")

    kingdom.set_year(kingdom.year + 1)
    score = calculate_score(kingdom, rules=rules)
    kingdom.set_score(score)

    report.year = kingdom.year
    report.score = score
    report.game_over = is_game_over(kingdom, rules=rules)
    logger.info("kingdom %s advanced to year %d (score %d)", kingdom.name, kingdom.year, kingdom.score)
    return report


def _update_subsystems(
    kingdom: Kingdom,
    rng: KingdomRandom,
    report: YearReport,
    rules: RulesConfig,
) -> None:
    population = kingdom.population
    army = kingdom.army
    economy = kingdom.economy
    market = kingdom.market

    security = population_rules.food_security(population, market.food.amount)
    population_rules.update_population(population, economy, army, rng, food_security=security, rules=rules)
    population_rules.calculate_happiness(population, economy, army, rules=rules)
    army_rules.update_morale(army, economy, population, rules=rules)
    economy_rules.update_economy(economy, population, army, rules=rules)
    market_rules.update_prices(market, economy, rng, rules=rules)
    market_rules.produce_resources(market, population, rules=rules)
    market_rules.consume_resources(market, population, army)
    report.messages.extend(diplomacy_rules.update_diplomacy(kingdom.diplomacy, army, rng, rules=rules))
    bank_rules.update_interest(kingdom.bank, economy)
    skimmed = bank_rules.attempt_corruption(kingdom.bank, economy, population, rng, rules=rules)
    if skimmed:
        report.messages.append(f"A corruption scandal has cost the treasury {skimmed} gold")


def _apply_ruler_and_resources(
    kingdom: Kingdom,
    rng: KingdomRandom,
    report: YearReport,
    rules: RulesConfig,
) -> None:
    outcome = rulers.apply_leader_effects(kingdom, rng, rules=rules)
    if outcome.message:
        report.messages.append(outcome.message)

    apply_resource_effects(kingdom.market.food, kingdom)
    apply_resource_effects(kingdom.market.iron, kingdom)


def _unrest(kingdom: Kingdom, rng: KingdomRandom, rules: RulesConfig) -> bool:
    population = kingdom.population
    return (
        population_rules.check_rebellion(population, rng, rules=rules)
        or army_rules.check_rebellion(kingdom.army, population, rng, rules=rules)
        or economy_rules.check_riots(kingdom.economy, population, rng, rules=rules)
    )
