"""Ruler variants: special actions, passive yearly effects and presets.

Each :class:`~stronghold.domain.models.Leader` subclass has one entry in the
special-action table and one in the passive-effect table.  Both return an
:class:`ActionResult`; the passive result's ``message`` is empty unless the
ruler produced something worth reporting (e.g. a plotting commander).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import cast

from stronghold.utils.rng import KingdomRandom

from .enums import GuildType, LeaderKind
from .models import Commander, GuildLeader, King, Kingdom, Leader
from .results import ActionResult, PacingDelay
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)

Handler = Callable[[Kingdom, KingdomRandom, RulesConfig, float], ActionResult]


def make_commander(
    name: str,
    charisma: int,
    intelligence: int,
    strength: int,
    tactical_skill: int,
    rng: KingdomRandom,
) -> Commander:
    """Create a commander whose loyalty is drawn from 50..100."""

    return Commander(
        name,
        charisma,
        intelligence,
        strength,
        tactical_skill=tactical_skill,
        loyalty=50 + rng.below(51),
    )


def _elected_king(rng: KingdomRandom) -> Leader:
    return King("Elected King", 60, 50, 50, royal_bloodline=60)


def _elected_commander(rng: KingdomRandom) -> Leader:
    return make_commander("Elected Commander", 50, 50, 70, 60, rng)


def _elected_guild_leader(rng: KingdomRandom) -> Leader:
    return GuildLeader(
        "Elected Guild Leader",
        50,
        60,
        50,
        guild_type=GuildType.MERCHANTS,
        business_acumen=60,
    )


_ELECTION_PRESETS: tuple[Callable[[KingdomRandom], Leader], ...] = (
    _elected_king,
    _elected_commander,
    _elected_guild_leader,
)


def elect_ruler(rng: KingdomRandom) -> Leader:
    """Pick the election winner, then build only that candidate.

    The pick is drawn first; a commander's loyalty is drawn only when a
    commander wins.
    """

    preset = _ELECTION_PRESETS[rng.below(len(_ELECTION_PRESETS))]
    return preset(rng)


def special_action(
    kingdom: Kingdom,
    rng: KingdomRandom,
    *,
    pacing_seconds: float = 1.0,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Perform the active ruler's special action."""

    handler = _SPECIAL_ACTIONS[kingdom.ruler.kind]
    return handler(kingdom, rng, rules, pacing_seconds)


def apply_leader_effects(
    kingdom: Kingdom,
    rng: KingdomRandom,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Apply the active ruler's passive yearly effect."""

    handler = _PASSIVE_EFFECTS[kingdom.ruler.kind]
    return handler(kingdom, rng, rules, 0.0)


# --- King ------------------------------------------------------------------------


def _king_decree(kingdom: Kingdom, rng: KingdomRandom, rules: RulesConfig, pacing: float) -> ActionResult:
    ruler = kingdom.ruler
    choice = rng.below(3)
    if choice == 0:
        kingdom.economy.set_treasury(int(kingdom.economy.treasury * 1.1))
        outcome = "stimulates the economy, increasing the treasury by 10%"
    elif choice == 1:
        kingdom.population.adjust_happiness(0.1)
        outcome = "grants minor tax relief, improving happiness"
    else:
        kingdom.army.adjust_morale(0.15)
        outcome = "honours the military, boosting army morale"
    return ActionResult.ok(f"King {ruler.name} issues a Royal Decree that {outcome}", decree=choice)


def _king_passive(kingdom: Kingdom, rng: KingdomRandom, rules: RulesConfig, pacing: float) -> ActionResult:
    ruler = cast(King, kingdom.ruler)

    # Computed but never applied to relations.
    diplomacy_bonus = ruler.charisma * 0.01

    economy = kingdom.economy
    economy.set_inflation(max(economy.MIN_INFLATION, economy.inflation - ruler.intelligence * 0.01))
    kingdom.army.adjust_morale(ruler.strength * 0.01)
    kingdom.population.adjust_happiness(ruler.royal_bloodline * 0.02)
    ruler.years_in_power += 1
    return ActionResult.ok("", diplomacy_bonus=diplomacy_bonus, years_in_power=ruler.years_in_power)


# --- Commander -------------------------------------------------------------------


def _commander_operations(
    kingdom: Kingdom, rng: KingdomRandom, rules: RulesConfig, pacing: float
) -> ActionResult:
    ruler = cast(Commander, kingdom.ruler)

    delay = PacingDelay("Training troops", rules.army.pacing_steps, pacing)
    army = kingdom.army
    if rng.below(2) == 0:
        army.set_training_level(army.training_level + 1 + ruler.tactical_skill // 20)
        outcome = f"the army's training level rises to {army.training_level}"
    else:
        army.adjust_morale(0.2 + ruler.charisma * 0.01)
        outcome = "troop morale is significantly improved"
    return ActionResult.ok(
        f"Commander {ruler.name} conducts special military operations: {outcome}",
        delay=delay,
    )


def _commander_passive(
    kingdom: Kingdom, rng: KingdomRandom, rules: RulesConfig, pacing: float
) -> ActionResult:
    ruler = cast(Commander, kingdom.ruler)

    kingdom.army.adjust_morale(ruler.tactical_skill * 0.02 * 0.1)

    if ruler.loyalty < 30 and rng.chance(30 - ruler.loyalty):
        warning = f"WARNING: Commander {ruler.name} is plotting against you!"
        logger.warning("commander %s (loyalty %d) is plotting", ruler.name, ruler.loyalty)
        return ActionResult.ok(warning, plotting=True)
    return ActionResult.ok("", plotting=False)


# --- Guild leader ----------------------------------------------------------------


def _guild_project(kingdom: Kingdom, rng: KingdomRandom, rules: RulesConfig, pacing: float) -> ActionResult:
    ruler = cast(GuildLeader, kingdom.ruler)

    acumen = ruler.business_acumen
    market = kingdom.market
    if ruler.guild_type is GuildType.MERCHANTS:
        kingdom.economy.set_treasury(kingdom.economy.treasury + 100 + acumen * 5)
        outcome = "new trade deals bring increased revenue"
    elif ruler.guild_type is GuildType.CRAFTSMEN:
        market.wood.change_amount(50 + acumen * 2)
        market.iron.change_amount(20 + acumen)
        outcome = "improved crafting techniques boost wood and iron"
    else:
        market.food.change_amount(100 + acumen * 5)
        outcome = "agricultural innovations increase food stocks"
    return ActionResult.ok(
        f"Guild Leader {ruler.name} of the {ruler.guild_type} Guild starts a project: {outcome}"
    )


def _guild_passive(kingdom: Kingdom, rng: KingdomRandom, rules: RulesConfig, pacing: float) -> ActionResult:
    ruler = cast(GuildLeader, kingdom.ruler)

    acumen = ruler.business_acumen
    economy = kingdom.economy
    economy.set_inflation(max(economy.MIN_INFLATION, economy.inflation - acumen * 0.02 * 0.01))

    if ruler.guild_type is GuildType.MERCHANTS:
        economy.set_treasury(economy.treasury + kingdom.population.merchants * acumen // 100)
    elif ruler.guild_type is GuildType.FARMERS:
        kingdom.market.food.change_amount(acumen // 10 + 5)
    return ActionResult.ok("")


_SPECIAL_ACTIONS: dict[LeaderKind, Handler] = {
    LeaderKind.KING: _king_decree,
    LeaderKind.COMMANDER: _commander_operations,
    LeaderKind.GUILD_LEADER: _guild_project,
}

_PASSIVE_EFFECTS: dict[LeaderKind, Handler] = {
    LeaderKind.KING: _king_passive,
    LeaderKind.COMMANDER: _commander_passive,
    LeaderKind.GUILD_LEADER: _guild_passive,
}
