"""Royal bank: loans, interest and corruption scandals."""

from __future__ import annotations

import logging

from stronghold.utils.rng import KingdomRandom

from .enums import FailureReason
from .models import Bank, Economy, Population
from .results import ActionResult
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


def take_loan(bank: Bank, amount: int, economy: Economy) -> ActionResult:
    """Borrow up to the bank's limit; the sum lands in treasury and debt alike."""

    if amount <= 0 or amount > bank.max_loan_amount:
        return ActionResult.fail(
            FailureReason.INVALID_AMOUNT,
            f"Loan must be between 1 and {bank.max_loan_amount} gold",
        )

    economy.set_debt(economy.debt + amount)
    economy.set_treasury(economy.treasury + amount)
    bank.set_current_loans(bank.current_loans + amount)
    return ActionResult.ok(f"Loan of {amount} gold taken", debt=economy.debt)


def repay_loan(bank: Bank, amount: int, economy: Economy) -> ActionResult:
    if amount <= 0:
        return ActionResult.fail(FailureReason.INVALID_AMOUNT, "Repayment must be positive")
    if amount > economy.debt:
        return ActionResult.fail(
            FailureReason.INVALID_AMOUNT, f"Outstanding debt is only {economy.debt} gold"
        )
    if amount > economy.treasury:
        return ActionResult.fail(
            FailureReason.INSUFFICIENT_FUNDS, f"The treasury holds only {economy.treasury} gold"
        )

    economy.set_treasury(economy.treasury - amount)
    economy.set_debt(economy.debt - amount)
    bank.set_current_loans(bank.current_loans - amount)
    return ActionResult.ok(f"Repaid {amount} gold", debt=economy.debt)


def update_interest(bank: Bank, economy: Economy) -> int:
    """Add the bank's interest to outstanding debt and return the amount charged."""

    interest = int(economy.debt * bank.interest_rate)
    economy.set_debt(economy.debt + interest)
    return interest


def attempt_corruption(
    bank: Bank,
    economy: Economy,
    population: Population,
    rng: KingdomRandom,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Roll for a corruption scandal and return the gold it skimmed.

    An honest bank (corruption level 0) never rolls.
    """

    level = bank.corruption_level
    if level <= 0:
        return 0
    if not rng.chance(level):
        return 0

    cfg = rules.bank
    skimmed = economy.treasury * level // cfg.corruption_divisor
    economy.set_treasury(economy.treasury - skimmed)
    population.adjust_happiness(-(cfg.scandal_base_penalty + level / cfg.corruption_divisor))
    logger.warning("corruption scandal cost the treasury %d gold", skimmed)
    return skimmed
