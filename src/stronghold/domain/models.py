"""Dataclasses describing every Stronghold game entity.

Each subsystem is a plain slots dataclass.  Fields carry documented ranges
and every ``set_*`` method clamps its input into that range, so rule
functions can apply raw deltas without worrying about overshoot.  The rules
themselves live in the sibling modules (:mod:`population`, :mod:`army`,
:mod:`economy`, ...) and operate on these types.

The :class:`Kingdom` aggregate owns exactly one instance of each subsystem
plus the active :class:`Leader`.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import ClassVar

from .enums import EventType, GuildType, LeaderKind, RelationStanding, ResourceKind


def clamp(value: float, low: float, high: float) -> float:
    """Bound ``value`` to the closed interval ``[low, high]``."""

    return max(low, min(high, value))


# --- Resources -------------------------------------------------------------------


@dataclass(slots=True)
class Resource:
    """Stock of one good with its current unit value."""

    kind: ResourceKind
    amount: int = 0
    value: float = 1.0

    def __post_init__(self) -> None:
        self.set_amount(self.amount)
        self.set_value(self.value)

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def total_value(self) -> float:
        return self.amount * self.value

    def set_amount(self, amount: int) -> None:
        self.amount = max(0, amount)

    def change_amount(self, delta: int) -> None:
        self.amount = max(0, self.amount + delta)

    def set_value(self, value: float) -> None:
        self.value = max(0.0, value)


@dataclass(slots=True)
class Market:
    """Owns the five kingdom resources."""

    food: Resource = field(default_factory=lambda: Resource(ResourceKind.FOOD, 1000))
    gold: Resource = field(default_factory=lambda: Resource(ResourceKind.GOLD, 500))
    wood: Resource = field(default_factory=lambda: Resource(ResourceKind.WOOD, 500))
    stone: Resource = field(default_factory=lambda: Resource(ResourceKind.STONE, 300))
    iron: Resource = field(default_factory=lambda: Resource(ResourceKind.IRON, 200))
    price_fluctuation: float = 0.1

    def get(self, kind: ResourceKind) -> Resource:
        return getattr(self, kind.name.lower())

    def resources(self) -> list[Resource]:
        return [self.food, self.gold, self.wood, self.stone, self.iron]


# --- Leaders ---------------------------------------------------------------------


@dataclass(slots=True)
class Leader:
    """Common ruler statistics."""

    kind: ClassVar[LeaderKind]

    name: str
    charisma: int = 50
    intelligence: int = 50
    strength: int = 50


@dataclass(slots=True)
class King(Leader):
    """Hereditary monarch."""

    kind: ClassVar[LeaderKind] = LeaderKind.KING

    royal_bloodline: int = 50
    years_in_power: int = 0


@dataclass(slots=True)
class Commander(Leader):
    """Military ruler whose loyalty is never guaranteed."""

    kind: ClassVar[LeaderKind] = LeaderKind.COMMANDER

    tactical_skill: int = 50
    loyalty: int = 75

    def __post_init__(self) -> None:
        self.set_loyalty(self.loyalty)

    def set_loyalty(self, loyalty: int) -> None:
        self.loyalty = int(clamp(loyalty, 0, 100))


@dataclass(slots=True)
class GuildLeader(Leader):
    """Head of one of the trade guilds."""

    kind: ClassVar[LeaderKind] = LeaderKind.GUILD_LEADER

    guild_type: GuildType = GuildType.MERCHANTS
    business_acumen: int = 50


# --- Subsystems ------------------------------------------------------------------


@dataclass(slots=True)
class Population:
    """Demographic cohorts of the kingdom."""

    peasants: int = 100
    merchants: int = 20
    nobles: int = 5
    growth_rate: float = 0.05
    happiness: float = 0.5

    MIN_GROWTH_RATE: ClassVar[float] = 0.01
    MAX_GROWTH_RATE: ClassVar[float] = 0.2

    def __post_init__(self) -> None:
        self.set_peasants(self.peasants)
        self.set_merchants(self.merchants)
        self.set_nobles(self.nobles)
        self.set_growth_rate(self.growth_rate)
        self.set_happiness(self.happiness)

    @property
    def total(self) -> int:
        return self.peasants + self.merchants + self.nobles

    def set_peasants(self, count: int) -> None:
        self.peasants = max(0, int(count))

    def set_merchants(self, count: int) -> None:
        self.merchants = max(0, int(count))

    def set_nobles(self, count: int) -> None:
        self.nobles = max(0, int(count))

    def set_growth_rate(self, rate: float) -> None:
        self.growth_rate = clamp(rate, self.MIN_GROWTH_RATE, self.MAX_GROWTH_RATE)

    def set_happiness(self, value: float) -> None:
        self.happiness = clamp(value, 0.0, 1.0)

    def adjust_happiness(self, delta: float) -> None:
        self.set_happiness(self.happiness + delta)


@dataclass(slots=True)
class Army:
    """Standing royal army."""

    infantry: int = 50
    cavalry: int = 10
    archers: int = 20
    morale: float = 0.7
    training_level: int = 1
    at_war: bool = False

    def __post_init__(self) -> None:
        self.set_infantry(self.infantry)
        self.set_cavalry(self.cavalry)
        self.set_archers(self.archers)
        self.set_morale(self.morale)
        self.set_training_level(self.training_level)

    @property
    def total(self) -> int:
        return self.infantry + self.cavalry + self.archers

    def set_infantry(self, count: int) -> None:
        self.infantry = max(0, int(count))

    def set_cavalry(self, count: int) -> None:
        self.cavalry = max(0, int(count))

    def set_archers(self, count: int) -> None:
        self.archers = max(0, int(count))

    def set_morale(self, value: float) -> None:
        self.morale = clamp(value, 0.0, 1.0)

    def adjust_morale(self, delta: float) -> None:
        self.set_morale(self.morale + delta)

    def set_training_level(self, level: int) -> None:
        self.training_level = max(1, int(level))

    def set_war_status(self, at_war: bool) -> None:
        self.at_war = bool(at_war)


@dataclass(slots=True)
class Economy:
    """Royal finances."""

    peasant_tax_rate: float = 0.10
    merchant_tax_rate: float = 0.15
    noble_tax_rate: float = 0.20
    inflation: float = 0.02
    treasury: int = 1000
    debt: int = 0

    MAX_TAX_RATE: ClassVar[float] = 0.5
    MIN_INFLATION: ClassVar[float] = 0.01
    MAX_INFLATION: ClassVar[float] = 0.2

    def __post_init__(self) -> None:
        self.set_peasant_tax_rate(self.peasant_tax_rate)
        self.set_merchant_tax_rate(self.merchant_tax_rate)
        self.set_noble_tax_rate(self.noble_tax_rate)
        self.set_inflation(self.inflation)
        self.set_treasury(self.treasury)
        self.set_debt(self.debt)

    @property
    def tax_burden(self) -> float:
        return self.peasant_tax_rate + self.merchant_tax_rate + self.noble_tax_rate

    def set_peasant_tax_rate(self, rate: float) -> None:
        self.peasant_tax_rate = clamp(rate, 0.0, self.MAX_TAX_RATE)

    def set_merchant_tax_rate(self, rate: float) -> None:
        self.merchant_tax_rate = clamp(rate, 0.0, self.MAX_TAX_RATE)

    def set_noble_tax_rate(self, rate: float) -> None:
        self.noble_tax_rate = clamp(rate, 0.0, self.MAX_TAX_RATE)

    def set_inflation(self, value: float) -> None:
        self.inflation = clamp(value, self.MIN_INFLATION, self.MAX_INFLATION)

    def set_treasury(self, amount: int) -> None:
        self.treasury = max(0, int(amount))

    def set_debt(self, amount: int) -> None:
        self.debt = max(0, int(amount))


@dataclass(slots=True)
class ForeignKingdom:
    """Relation state machine with one neighbouring realm."""

    name: str
    strength: int
    relation_level: int = 0
    is_ally: bool = False
    at_war: bool = False

    MIN_RELATION: ClassVar[int] = -10
    MAX_RELATION: ClassVar[int] = 10

    def set_relation_level(self, level: int) -> None:
        self.relation_level = int(clamp(level, self.MIN_RELATION, self.MAX_RELATION))

    def change_relation(self, delta: int) -> None:
        self.set_relation_level(self.relation_level + delta)

    @property
    def standing(self) -> RelationStanding:
        level = self.relation_level
        if level >= 7:
            return RelationStanding.FRIENDLY
        if level >= 3:
            return RelationStanding.CORDIAL
        if level >= 0:
            return RelationStanding.NEUTRAL
        if level >= -3:
            return RelationStanding.SUSPICIOUS
        return RelationStanding.HOSTILE

    @property
    def status(self) -> str:
        if self.at_war:
            return "At War"
        if self.is_ally:
            return "Allied"
        return "Peaceful"


@dataclass(slots=True)
class Diplomacy:
    """Insertion ordered roster of foreign kingdoms keyed by name."""

    kingdoms: dict[str, ForeignKingdom] = field(default_factory=dict)

    def add_kingdom(self, name: str, strength: int) -> bool:
        """Register a realm; duplicates are refused."""

        if name in self.kingdoms:
            return False
        self.kingdoms[name] = ForeignKingdom(name=name, strength=strength)
        return True

    def find(self, name: str) -> ForeignKingdom | None:
        return self.kingdoms.get(name)

    def roster(self) -> list[ForeignKingdom]:
        return list(self.kingdoms.values())

    def any_at_war(self) -> bool:
        return any(entry.at_war for entry in self.kingdoms.values())


@dataclass(slots=True)
class Bank:
    """Royal bank issuing loans."""

    interest_rate: float = 0.05
    max_loan_amount: int = 1000
    current_loans: int = 0
    corruption_level: int = 0

    MIN_INTEREST_RATE: ClassVar[float] = 0.01
    MAX_INTEREST_RATE: ClassVar[float] = 0.2
    MIN_MAX_LOAN: ClassVar[int] = 100

    def __post_init__(self) -> None:
        self.set_interest_rate(self.interest_rate)
        self.set_max_loan_amount(self.max_loan_amount)
        self.set_current_loans(self.current_loans)
        self.set_corruption_level(self.corruption_level)

    def set_interest_rate(self, rate: float) -> None:
        self.interest_rate = clamp(rate, self.MIN_INTEREST_RATE, self.MAX_INTEREST_RATE)

    def set_max_loan_amount(self, amount: int) -> None:
        self.max_loan_amount = max(self.MIN_MAX_LOAN, int(amount))

    def set_current_loans(self, amount: int) -> None:
        self.current_loans = max(0, int(amount))

    def set_corruption_level(self, level: int) -> None:
        self.corruption_level = int(clamp(level, 0, 100))


@dataclass(slots=True)
class EventScheduler:
    """Cooldown gate for random events.

    ``last_event_time`` is measured on the same clock the caller passes to
    :func:`stronghold.domain.events.check_for_event` (``time.monotonic`` by
    default) and starts at creation time.
    """

    event_chance: int = 15
    cooldown_seconds: float = 5.0
    last_event_time: float = field(default_factory=time.monotonic)


@dataclass(slots=True)
class ChronicleEntry:
    """Notable happening recorded against a game year."""

    year: int
    kind: str
    description: str
    details: dict[str, object] | None = None


# --- Aggregate -------------------------------------------------------------------


@dataclass(slots=True)
class Kingdom:
    """Root aggregate representing one game session."""

    name: str
    ruler: Leader = field(default_factory=lambda: King("Default King"))
    population: Population = field(default_factory=Population)
    army: Army = field(default_factory=Army)
    economy: Economy = field(default_factory=Economy)
    market: Market = field(default_factory=Market)
    diplomacy: Diplomacy = field(default_factory=Diplomacy)
    bank: Bank = field(default_factory=Bank)
    events: EventScheduler = field(default_factory=EventScheduler)
    year: int = 1
    score: int = 0
    chronicle: list[ChronicleEntry] = field(default_factory=list)

    def set_year(self, year: int) -> None:
        self.year = max(1, int(year))

    def set_score(self, score: int) -> None:
        self.score = max(0, int(score))

    def set_ruler(self, ruler: Leader) -> None:
        self.ruler = ruler

    def record(
        self,
        kind: EventType | str,
        description: str,
        details: dict[str, object] | None = None,
    ) -> ChronicleEntry:
        entry = ChronicleEntry(year=self.year, kind=str(kind), description=description, details=details)
        self.chronicle.append(entry)
        return entry
