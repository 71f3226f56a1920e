"""Market pricing, trade, production and consumption rules."""

from __future__ import annotations

from stronghold.utils.rng import KingdomRandom

from .enums import FailureReason, ResourceKind
from .models import Army, Economy, Market, Population, Resource
from .results import ActionResult
from .rules_config import DEFAULT_RULES, RulesConfig

TRADEABLE_KINDS: tuple[ResourceKind, ...] = (
    ResourceKind.FOOD,
    ResourceKind.WOOD,
    ResourceKind.STONE,
    ResourceKind.IRON,
)


def base_values(rules: RulesConfig = DEFAULT_RULES) -> dict[ResourceKind, float]:
    cfg = rules.market
    return {
        ResourceKind.FOOD: cfg.food_base_value,
        ResourceKind.WOOD: cfg.wood_base_value,
        ResourceKind.STONE: cfg.stone_base_value,
        ResourceKind.IRON: cfg.iron_base_value,
    }


def update_prices(
    market: Market,
    economy: Economy,
    rng: KingdomRandom,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> None:
    """Reprice every tradeable good from its base value, inflation and noise."""

    inflation_factor = 1.0 + economy.inflation
    span = rules.market.noise_span
    for kind, base in base_values(rules).items():
        noise = 1.0 + (rng.below(span) - span // 2) * 0.01
        market.get(kind).set_value(base * inflation_factor * noise)


def _tradeable(market: Market, resource_name: str) -> Resource | None:
    kind = ResourceKind.parse(resource_name)
    if kind is None or kind not in TRADEABLE_KINDS:
        return None
    return market.get(kind)


def buy_resource(
    market: Market,
    resource_name: str,
    amount: int,
    economy: Economy,
) -> ActionResult:
    """Buy ``amount`` units at the current price, or change nothing."""

    resource = _tradeable(market, resource_name)
    if resource is None:
        return ActionResult.fail(
            FailureReason.UNKNOWN_ENTITY, f"'{resource_name}' is not traded on the market"
        )
    if amount <= 0:
        return ActionResult.fail(FailureReason.INVALID_AMOUNT, "Amount must be positive")

    cost = int(amount * resource.value)
    if economy.treasury < cost:
        return ActionResult.fail(
            FailureReason.INSUFFICIENT_FUNDS,
            f"{amount} {resource.name} costs {cost} gold; the treasury holds {economy.treasury}",
            cost=cost,
        )

    economy.set_treasury(economy.treasury - cost)
    resource.change_amount(amount)
    return ActionResult.ok(f"Purchased {amount} {resource.name}", cost=cost)


def sell_resource(
    market: Market,
    resource_name: str,
    amount: int,
    economy: Economy,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Sell ``amount`` units from stock minus the market fee, or change nothing."""

    resource = _tradeable(market, resource_name)
    if resource is None:
        return ActionResult.fail(
            FailureReason.UNKNOWN_ENTITY, f"'{resource_name}' is not traded on the market"
        )
    if amount <= 0:
        return ActionResult.fail(FailureReason.INVALID_AMOUNT, "Amount must be positive")
    if resource.amount < amount:
        return ActionResult.fail(
            FailureReason.INSUFFICIENT_STOCK,
            f"Only {resource.amount} {resource.name} in stock",
            stock=resource.amount,
        )

    revenue = int(amount * resource.value * (1.0 - rules.market.sell_fee))
    resource.change_amount(-amount)
    economy.set_treasury(economy.treasury + revenue)
    return ActionResult.ok(f"Sold {amount} {resource.name}", revenue=revenue)


def produce_resources(
    market: Market,
    population: Population,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> None:
    """Peasants work the land and mines; merchants bring in gold."""

    peasant_output = population.peasants // rules.market.peasant_output_divisor
    merchant_output = population.merchants // rules.market.merchant_output_divisor

    market.food.change_amount(peasant_output * 2)
    market.wood.change_amount(peasant_output)
    market.stone.change_amount(peasant_output // 2)
    market.iron.change_amount(peasant_output // 4)
    market.gold.change_amount(merchant_output * 2)


def consume_resources(market: Market, population: Population, army: Army) -> None:
    """Feed, heat and equip the kingdom; consumption never exceeds stock."""

    people = population.total
    soldiers = army.total

    food_needed = people + soldiers * 2
    market.food.change_amount(-min(market.food.amount, food_needed))

    wood_needed = people // 10
    market.wood.change_amount(-min(market.wood.amount, wood_needed))

    iron_needed = people // 50 + soldiers // 20
    market.iron.change_amount(-min(market.iron.amount, iron_needed))
