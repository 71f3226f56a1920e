"""Foreign relations: the roster state machine, wars, treaties and trade.

Every entry moves between three states (peaceful, allied, at war) through
the player operations below; the yearly :func:`update_diplomacy` drifts
relation levels and resolves skirmishes on active fronts.  Operations on a
name that is not on the roster fail with ``UNKNOWN_ENTITY``.
"""

from __future__ import annotations

import logging

from stronghold.utils.rng import KingdomRandom

from . import army as army_rules
from .enums import FailureReason
from .models import Army, Diplomacy, Economy, ForeignKingdom, Market
from .results import ActionResult
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)

DEFAULT_ROSTER: tuple[tuple[str, int], ...] = (
    ("Northlands", 500),
    ("Eastern Empire", 600),
    ("Southern Realms", 400),
)


def build_default_diplomacy(rng: KingdomRandom) -> Diplomacy:
    """Create the standard three-realm roster; each base strength gets up to +base jitter."""

    diplomacy = Diplomacy()
    for name, base in DEFAULT_ROSTER:
        diplomacy.add_kingdom(name, base + rng.below(base))
    return diplomacy


def _unknown(name: str) -> ActionResult:
    return ActionResult.fail(FailureReason.UNKNOWN_ENTITY, f"Kingdom '{name}' not found")


def relation_level(diplomacy: Diplomacy, name: str) -> int:
    entry = diplomacy.find(name)
    return entry.relation_level if entry is not None else 0


def improve_relations(
    diplomacy: Diplomacy,
    name: str,
    economy: Economy,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Pay envoys to warm relations by two steps."""

    entry = diplomacy.find(name)
    if entry is None:
        return _unknown(name)

    cfg = rules.diplomacy
    cost = max(0, cfg.improve_base_cost + entry.relation_level * cfg.improve_cost_per_level)
    if economy.treasury < cost:
        return ActionResult.fail(
            FailureReason.INSUFFICIENT_FUNDS, f"Not enough gold; need {cost} gold", cost=cost
        )

    economy.set_treasury(economy.treasury - cost)
    entry.change_relation(cfg.improve_step)
    return ActionResult.ok(
        f"Spent {cost} gold to improve relations with {name}",
        cost=cost,
        relation_level=entry.relation_level,
    )


def declare_war(
    diplomacy: Diplomacy,
    name: str,
    army: Army,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    entry = diplomacy.find(name)
    if entry is None:
        return _unknown(name)
    if entry.at_war:
        return ActionResult.fail(FailureReason.INVALID_STATE, f"Already at war with {name}")

    entry.at_war = True
    entry.is_ally = False
    entry.change_relation(-rules.diplomacy.war_relation_penalty)
    army.set_war_status(True)
    logger.info("war declared on %s", name)
    return ActionResult.ok(f"War declared on {name}", relation_level=entry.relation_level)


def sign_peace(
    diplomacy: Diplomacy,
    name: str,
    economy: Economy,
    army: Army,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Pay reparations to end a war.

    The army only stands down once no front remains open.
    """

    entry = diplomacy.find(name)
    if entry is None:
        return _unknown(name)
    if not entry.at_war:
        return ActionResult.fail(FailureReason.INVALID_STATE, f"Not at war with {name}")

    cfg = rules.diplomacy
    cost = cfg.peace_base_cost + entry.strength // cfg.peace_strength_divisor
    if economy.treasury < cost:
        return ActionResult.fail(
            FailureReason.INSUFFICIENT_FUNDS,
            f"Reparations of {cost} gold are required",
            cost=cost,
        )

    economy.set_treasury(economy.treasury - cost)
    entry.at_war = False
    entry.set_relation_level(0)
    if not diplomacy.any_at_war():
        army.set_war_status(False)
    logger.info("peace signed with %s for %d gold", name, cost)
    return ActionResult.ok(f"Peace signed with {name}", cost=cost, army_at_war=army.at_war)


def form_alliance(
    diplomacy: Diplomacy,
    name: str,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    entry = diplomacy.find(name)
    if entry is None:
        return _unknown(name)

    threshold = rules.diplomacy.alliance_threshold
    if entry.at_war or entry.relation_level < threshold:
        return ActionResult.fail(
            FailureReason.INVALID_STATE,
            f"Cannot ally with {name}: relations must be {threshold}+ and at peace",
        )

    entry.is_ally = True
    entry.change_relation(1)
    return ActionResult.ok(f"{name} is now your ally", relation_level=entry.relation_level)


def establish_trade(
    diplomacy: Diplomacy,
    name: str,
    market: Market,
    economy: Economy,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Exchange goods with a friendly realm; the haul grows with relations."""

    entry = diplomacy.find(name)
    if entry is None:
        return _unknown(name)

    threshold = rules.diplomacy.trade_threshold
    if entry.at_war or entry.relation_level < threshold:
        return ActionResult.fail(
            FailureReason.INVALID_STATE,
            f"Cannot trade with {name}: relations must be {threshold}+ and at peace",
        )

    level = entry.relation_level
    food = 100 + level * 20
    wood = 50 + level * 10
    iron = 30 + level * 5
    gold = 200 + level * 50
    market.food.change_amount(food)
    market.wood.change_amount(wood)
    market.iron.change_amount(iron)
    economy.set_treasury(economy.treasury + gold)
    return ActionResult.ok(
        f"Trade with {name} boosts resources and treasury",
        food=food,
        wood=wood,
        iron=iron,
        gold=gold,
    )


def _weaken(entry: ForeignKingdom, army_strength: int, rules: RulesConfig) -> None:
    cfg = rules.diplomacy
    entry.strength = max(cfg.min_foreign_strength, entry.strength - army_strength // cfg.battle_damage_divisor)


def battle(
    diplomacy: Diplomacy,
    name: str,
    army: Army,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Commit the army to a pitched battle against a realm we are at war with."""

    entry = diplomacy.find(name)
    if entry is None:
        return _unknown(name)
    if not entry.at_war:
        return ActionResult.fail(FailureReason.INVALID_STATE, f"Not at war with {name}")

    player_strength = army_rules.calculate_strength(army, rules=rules)
    enemy_strength = entry.strength
    swing = rules.diplomacy.battle_morale_swing

    if player_strength > enemy_strength:
        _weaken(entry, player_strength, rules)
        army.adjust_morale(swing)
        logger.info("victory against %s (%d vs %d)", name, player_strength, enemy_strength)
        return ActionResult.ok(
            f"Victory! Your forces crush {name}",
            victory=True,
            player_strength=player_strength,
            enemy_strength=enemy_strength,
        )

    losses = army_rules.apply_battle_losses(army)
    army.adjust_morale(-swing)
    logger.info("defeat against %s, %d soldiers lost", name, losses)
    return ActionResult.ok(
        f"Defeat! Your army suffers heavy losses against {name}",
        victory=False,
        losses=losses,
        player_strength=player_strength,
        enemy_strength=enemy_strength,
    )


def update_diplomacy(
    diplomacy: Diplomacy,
    army: Army,
    rng: KingdomRandom,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[str]:
    """Yearly drift of every relation; returns battle reports for the year."""

    cfg = rules.diplomacy
    reports: list[str] = []
    for entry in diplomacy.roster():
        if entry.at_war:
            entry.change_relation(-1)
            player_strength = army_rules.calculate_strength(army, rules=rules)
            if rng.chance(cfg.battle_chance):
                if player_strength > entry.strength:
                    _weaken(entry, player_strength, rules)
                    reports.append(f"Your forces defeat {entry.name} in battle!")
                else:
                    reports.append(f"Your forces suffer defeat against {entry.name}!")
        else:
            entry.change_relation(rng.below(3) - 1)
    for report in reports:
        logger.info(report)
    return reports
