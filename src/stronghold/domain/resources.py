"""Yearly side effects of resource stocks on the rest of the kingdom."""

from __future__ import annotations

from collections.abc import Callable

from .enums import ResourceKind
from .models import Kingdom, Resource

Effect = Callable[[Resource, Kingdom], None]


def apply_resource_effects(resource: Resource, kingdom: Kingdom) -> None:
    _RESOURCE_EFFECTS[resource.kind](resource, kingdom)


def food_happiness_modifier(food_per_person: float) -> float:
    """Happiness change for a given per-capita food supply."""

    if food_per_person > 1.5:
        return 0.1
    if food_per_person > 1.0:
        return 0.05
    if food_per_person < 0.25:
        return -0.4
    if food_per_person < 0.5:
        return -0.2
    return 0.0


def _food_effect(resource: Resource, kingdom: Kingdom) -> None:
    people = kingdom.population.total
    if people <= 0:
        return
    kingdom.population.adjust_happiness(food_happiness_modifier(resource.amount / people))


def _iron_effect(resource: Resource, kingdom: Kingdom) -> None:
    # Well stocked armouries improve equipment.
    if resource.amount > 100:
        kingdom.army.set_training_level(kingdom.army.training_level + 1)


def _no_effect(resource: Resource, kingdom: Kingdom) -> None:
    return None


_RESOURCE_EFFECTS: dict[ResourceKind, Effect] = {
    ResourceKind.FOOD: _food_effect,
    ResourceKind.GOLD: _no_effect,
    ResourceKind.WOOD: _no_effect,
    ResourceKind.STONE: _no_effect,
    ResourceKind.IRON: _iron_effect,
}
