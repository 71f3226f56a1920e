"""Military strength, morale, desertion and recruitment rules."""

from __future__ import annotations

import logging

from stronghold.utils.rng import KingdomRandom

from .enums import FailureReason, UnitType
from .models import Army, Economy, Population, clamp
from .results import ActionResult, PacingDelay
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


def calculate_strength(army: Army, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Weighted head count scaled by morale and training."""

    cfg = rules.army
    base = army.infantry + army.cavalry * cfg.cavalry_weight + army.archers * cfg.archer_weight
    morale_multiplier = 0.5 + army.morale * 0.5
    training_multiplier = 0.8 + army.training_level * 0.2
    return int(base * morale_multiplier * training_multiplier)


def update_morale(
    army: Army,
    economy: Economy,
    population: Population,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> float:
    """Blend morale with pay, popular support and the war situation."""

    cfg = rules.army
    if army.total > 0:
        pay_factor = min(1.0, economy.treasury / (army.total * cfg.pay_per_soldier))
    else:
        pay_factor = 1.0
    war_effect = cfg.war_morale_effect if army.at_war else cfg.peace_morale_effect

    morale = (
        army.morale * cfg.morale_inertia
        + pay_factor * cfg.morale_factor_weight
        + population.happiness * cfg.morale_factor_weight
        + war_effect
    )
    army.set_morale(clamp(morale, cfg.morale_floor, 1.0))
    return army.morale


def calculate_desertion(army: Army, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Remove deserters from a demoralised army and return how many left."""

    cfg = rules.army
    if army.morale >= cfg.desertion_threshold:
        return 0

    rate = (cfg.desertion_threshold - army.morale) * cfg.desertion_multiplier
    deserters = int(army.total * rate)

    infantry = min(army.infantry, int(deserters * 0.6))
    cavalry = min(army.cavalry, int(deserters * 0.2))
    archers = min(army.archers, int(deserters * 0.2))

    army.set_infantry(army.infantry - infantry)
    army.set_cavalry(army.cavalry - cavalry)
    army.set_archers(army.archers - archers)
    return infantry + cavalry + archers


def check_rebellion(
    army: Army,
    population: Population,
    rng: KingdomRandom,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> bool:
    """Troops only turn on the crown when both they and the people are miserable."""

    cfg = rules.army
    if army.morale >= cfg.rebellion_morale_threshold:
        return False
    if population.happiness >= cfg.rebellion_happiness_threshold:
        return False
    return rng.chance((cfg.rebellion_morale_threshold - army.morale) * cfg.rebellion_multiplier)


def apply_battle_losses(army: Army) -> int:
    """Lose a tenth of the army, split 60/20/20 across the unit types."""

    loss = army.total // 10
    infantry = loss * 6 // 10
    cavalry = loss * 2 // 10
    archers = loss * 2 // 10
    army.set_infantry(army.infantry - infantry)
    army.set_cavalry(army.cavalry - cavalry)
    army.set_archers(army.archers - archers)
    return loss


def train_army(
    army: Army,
    *,
    pacing_seconds: float = 1.0,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Drill the troops: one training level and a little morale."""

    cfg = rules.army
    army.set_training_level(army.training_level + 1)
    army.adjust_morale(cfg.training_morale_boost)
    logger.info("army trained to level %d", army.training_level)
    return ActionResult.ok(
        f"Army training level increased to {army.training_level}; "
        f"morale improved to {int(army.morale * 100)}%",
        delay=PacingDelay("Training army units", cfg.pacing_steps, pacing_seconds),
        training_level=army.training_level,
        morale=army.morale,
    )


def recruitment_cost(unit: UnitType, count: int, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    cfg = rules.army
    per_unit = {
        UnitType.INFANTRY: cfg.infantry_cost,
        UnitType.CAVALRY: cfg.cavalry_cost,
        UnitType.ARCHERS: cfg.archer_cost,
    }[unit]
    return per_unit * count


def recruit(
    army: Army,
    economy: Economy,
    unit: UnitType,
    count: int,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Hire ``count`` soldiers of one type, paid up front from the treasury."""

    if count <= 0:
        return ActionResult.fail(FailureReason.INVALID_AMOUNT, "Recruit count must be positive")

    cost = recruitment_cost(unit, count, rules=rules)
    if economy.treasury < cost:
        return ActionResult.fail(
            FailureReason.INSUFFICIENT_FUNDS,
            f"Recruiting {count} {unit} costs {cost} gold; the treasury holds {economy.treasury}",
            cost=cost,
        )

    economy.set_treasury(economy.treasury - cost)
    if unit is UnitType.INFANTRY:
        army.set_infantry(army.infantry + count)
    elif unit is UnitType.CAVALRY:
        army.set_cavalry(army.cavalry + count)
    else:
        army.set_archers(army.archers + count)
    return ActionResult.ok(f"Recruited {count} {unit}", cost=cost, unit=str(unit), count=count)
