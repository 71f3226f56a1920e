"""Declarative rule configuration for the Stronghold domain."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PopulationRules:
    """Growth, mobility and happiness weights."""

    base_growth: float = 0.05
    happiness_growth_weight: float = 0.05
    tax_burden_growth_weight: float = 0.1
    food_security_growth_weight: float = 0.02
    min_growth_rate: float = 0.01
    max_growth_rate: float = 0.2
    merchant_growth_factor: float = 0.8
    noble_growth_factor: float = 0.5
    peasant_mobility_chance: int = 5  # percent per year
    merchant_mobility_chance: int = 2  # percent per year
    mobility_fraction: float = 0.01
    happiness_inertia: float = 0.7
    happiness_factor_weight: float = 0.1
    rebellion_threshold: float = 0.2
    rebellion_multiplier: float = 200.0


@dataclass(frozen=True, slots=True)
class ArmyRules:
    """Military strength, morale and recruitment constants."""

    cavalry_weight: int = 3
    archer_weight: int = 2
    pay_per_soldier: int = 5
    morale_inertia: float = 0.7
    morale_factor_weight: float = 0.1
    war_morale_effect: float = -0.1
    peace_morale_effect: float = 0.05
    morale_floor: float = 0.1
    desertion_threshold: float = 0.4
    desertion_multiplier: float = 0.5
    rebellion_morale_threshold: float = 0.2
    rebellion_happiness_threshold: float = 0.3
    rebellion_multiplier: float = 300.0
    infantry_cost: int = 10
    cavalry_cost: int = 20
    archer_cost: int = 15
    training_morale_boost: float = 0.1
    pacing_steps: int = 3


@dataclass(frozen=True, slots=True)
class EconomyRules:
    """Taxation, upkeep and inflation constants."""

    peasant_tax_base: int = 2
    merchant_tax_base: int = 10
    noble_tax_base: int = 50
    upkeep_per_soldier: int = 2
    bureaucracy_divisor: int = 10
    inflation_inertia: float = 0.8
    activity_weight: float = 0.05
    activity_scale: float = 1000.0
    treasury_weight: float = 0.03
    treasury_scale: float = 10000.0
    min_inflation: float = 0.01
    max_inflation: float = 0.2
    debt_interest: float = 0.1
    riot_threshold: float = 0.6


@dataclass(frozen=True, slots=True)
class MarketRules:
    """Prices, fees and production ratios."""

    food_base_value: float = 1.0
    wood_base_value: float = 2.0
    stone_base_value: float = 3.0
    iron_base_value: float = 5.0
    noise_span: int = 20  # percent points, centred on zero
    sell_fee: float = 0.1
    peasant_output_divisor: int = 5
    merchant_output_divisor: int = 2


@dataclass(frozen=True, slots=True)
class DiplomacyRules:
    """Relation costs, thresholds and war dynamics."""

    improve_base_cost: int = 20
    improve_cost_per_level: int = 5
    improve_step: int = 2
    war_relation_penalty: int = 5
    peace_base_cost: int = 200
    peace_strength_divisor: int = 10
    alliance_threshold: int = 5
    trade_threshold: int = 2
    battle_chance: int = 20  # percent per year while at war
    min_foreign_strength: int = 100
    battle_damage_divisor: int = 10
    battle_morale_swing: float = 0.1


@dataclass(frozen=True, slots=True)
class BankRules:
    """Loan limits and corruption scaling."""

    default_interest_rate: float = 0.05
    default_max_loan: int = 1000
    corruption_divisor: int = 1000
    scandal_base_penalty: float = 0.05


@dataclass(frozen=True, slots=True)
class EventRules:
    """Random event gating."""

    default_chance: int = 15  # percent
    cooldown_seconds: float = 5.0


@dataclass(frozen=True, slots=True)
class ScoreRules:
    """Score weights and game-over thresholds."""

    population_weight: int = 10
    army_weight: int = 20
    treasury_divisor: int = 10
    happiness_weight: int = 1000
    year_weight: int = 100
    debt_divisor: int = 5
    inflation_weight: int = 2000
    min_population: int = 10
    bankruptcy_debt: int = 5000
    collapse_happiness: float = 0.1
    collapse_morale: float = 0.1
    election_happiness_boost: float = 0.1


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    population: PopulationRules = PopulationRules()
    army: ArmyRules = ArmyRules()
    economy: EconomyRules = EconomyRules()
    market: MarketRules = MarketRules()
    diplomacy: DiplomacyRules = DiplomacyRules()
    bank: BankRules = BankRules()
    events: EventRules = EventRules()
    score: ScoreRules = ScoreRules()


DEFAULT_RULES = RulesConfig()
