"""Kingdom-level operations: creation, scoring, elections and ruler actions."""

from __future__ import annotations

import logging

from stronghold.utils.rng import KingdomRandom

from . import events as event_rules
from . import rulers
from .diplomacy import build_default_diplomacy
from .models import EventScheduler, King, Kingdom, Leader
from .results import ActionResult, EventOutcome
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


def new_kingdom(
    name: str,
    rng: KingdomRandom,
    *,
    ruler: Leader | None = None,
    event_chance: int | None = None,
    event_cooldown_seconds: float | None = None,
    now: float | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> Kingdom:
    """Create a kingdom with default subsystems and the standard foreign roster."""

    scheduler = EventScheduler(
        event_chance=rules.events.default_chance if event_chance is None else event_chance,
        cooldown_seconds=(
            rules.events.cooldown_seconds if event_cooldown_seconds is None else event_cooldown_seconds
        ),
    )
    if now is not None:
        scheduler.last_event_time = now

    kingdom = Kingdom(
        name=name,
        ruler=ruler if ruler is not None else King("Default King", 50, 50, 50, 50),
        diplomacy=build_default_diplomacy(rng),
        events=scheduler,
    )
    kingdom.bank.set_interest_rate(rules.bank.default_interest_rate)
    kingdom.bank.set_max_loan_amount(rules.bank.default_max_loan)
    logger.info("kingdom %s founded under %s", name, kingdom.ruler.name)
    return kingdom


def calculate_score(kingdom: Kingdom, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Raw score for the current state; debt and inflation can push it below zero."""

    cfg = rules.score
    population = kingdom.population
    economy = kingdom.economy
    score = (
        population.total * cfg.population_weight
        + kingdom.army.total * cfg.army_weight
        + economy.treasury // cfg.treasury_divisor
        + int(population.happiness * cfg.happiness_weight)
        + kingdom.year * cfg.year_weight
    )
    score -= economy.debt // cfg.debt_divisor
    score -= int(economy.inflation * cfg.inflation_weight)
    return score


def is_game_over(kingdom: Kingdom, *, rules: RulesConfig = DEFAULT_RULES) -> bool:
    cfg = rules.score
    economy = kingdom.economy
    return (
        kingdom.population.total < cfg.min_population
        or (economy.treasury <= 0 and economy.debt > cfg.bankruptcy_debt)
        or (
            kingdom.population.happiness < cfg.collapse_happiness
            and kingdom.army.morale < cfg.collapse_morale
        )
    )


def hold_elections(
    kingdom: Kingdom,
    rng: KingdomRandom,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Replace the ruler with one of the three elected presets."""

    winner = rulers.elect_ruler(rng)
    kingdom.set_ruler(winner)
    kingdom.population.adjust_happiness(rules.score.election_happiness_boost)
    kingdom.record("election", f"{winner.name} rises to power")
    logger.info("elections won by %s (%s)", winner.name, winner.kind)
    return ActionResult.ok(f"{winner.name} rises to power", ruler_kind=str(winner.kind))


def perform_ruler_action(
    kingdom: Kingdom,
    rng: KingdomRandom,
    *,
    pacing_seconds: float = 1.0,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    return rulers.special_action(kingdom, rng, pacing_seconds=pacing_seconds, rules=rules)


def trigger_event(kingdom: Kingdom, rng: KingdomRandom) -> EventOutcome:
    """Apply a freshly generated event now, ignoring cooldown and chance."""

    event = event_rules.generate_event(rng)
    return event_rules.apply_event(event, kingdom, rng)
