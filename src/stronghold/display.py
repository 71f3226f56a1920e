"""Plain-text renderings of kingdom state for the console."""

from __future__ import annotations

from stronghold.domain.models import Bank, Diplomacy, Kingdom
from stronghold.domain.results import ActionResult, EventOutcome, YearReport


def _percent(value: float) -> int:
    return int(value * 100)


def describe_status(kingdom: Kingdom) -> str:
    """Full status sheet: ruler, population, army, economy and market."""

    population = kingdom.population
    army = kingdom.army
    economy = kingdom.economy
    lines = [
        f"===== Kingdom Status: {kingdom.name} (Year {kingdom.year}) =====",
        f"Ruler: {kingdom.ruler.name}",
        f"Score: {kingdom.score}",
        "",
        "Population:",
        f"  Peasants: {population.peasants}",
        f"  Merchants: {population.merchants}",
        f"  Nobles: {population.nobles}",
        f"  Happiness: {_percent(population.happiness)}%",
        "",
        "Army:",
        f"  Infantry: {army.infantry}",
        f"  Cavalry: {army.cavalry}",
        f"  Archers: {army.archers}",
        f"  Morale: {_percent(army.morale)}%",
        f"  Training Level: {army.training_level}",
        f"  Status: {'At War' if army.at_war else 'At Peace'}",
        "",
        "Economy:",
        f"  Treasury: {economy.treasury} gold",
        f"  Debt: {economy.debt} gold",
        f"  Inflation: {_percent(economy.inflation)}%",
        "",
        "Market:",
    ]
    for resource in kingdom.market.resources():
        if resource is kingdom.market.gold:
            continue
        lines.append(f"  {resource.name}: {resource.amount} (Value: {resource.value:.2f})")
    return "\n".join(lines)


def describe_roster(diplomacy: Diplomacy) -> str:
    lines = ["===== Foreign Kingdoms ====="]
    for index, entry in enumerate(diplomacy.roster(), start=1):
        lines.append(f"{index}. {entry.name}:")
        lines.append(f"   Relation: {entry.standing} ({entry.relation_level})")
        lines.append(f"   Status: {entry.status}")
        lines.append(f"   Military Strength: {entry.strength}")
    return "\n".join(lines)


def describe_bank(bank: Bank) -> str:
    return "\n".join(
        [
            "Bank Status:",
            f"  Interest Rate: {bank.interest_rate * 100:g}%",
            f"  Current Loans: {bank.current_loans} gold",
            f"  Corruption Level: {bank.corruption_level}",
        ]
    )


def describe_event(outcome: EventOutcome) -> str:
    return f"===== EVENT: {outcome.title.upper()} =====\n{outcome.description}"


def describe_result(result: ActionResult) -> str:
    return result.message if result else f"Failed: {result.message}"


def describe_report(report: YearReport) -> str:
    lines = [f"Advanced to year {report.year}."]
    if report.event is not None:
        lines.append(describe_event(report.event))
    if report.unrest is not None:
        lines.append(describe_event(report.unrest))
    lines.extend(message for message in report.messages if message)
    lines.append(f"Score: {report.score}")
    return "\n".join(lines)
