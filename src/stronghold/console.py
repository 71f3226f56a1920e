"""Interactive text menu for playing a single kingdom."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from stronghold import display, savegame
from stronghold.config import Settings, get_settings
from stronghold.domain import army as army_rules
from stronghold.domain import bank as bank_rules
from stronghold.domain import diplomacy as diplomacy_rules
from stronghold.domain import economy as economy_rules
from stronghold.domain import market as market_rules
from stronghold.domain.enums import UnitType
from stronghold.domain.kingdom import (
    hold_elections,
    is_game_over,
    new_kingdom,
    perform_ruler_action,
    trigger_event,
)
from stronghold.domain.models import King, Kingdom
from stronghold.domain.results import ActionResult, PacingDelay
from stronghold.domain.rules_config import DEFAULT_RULES, RulesConfig
from stronghold.domain.tick import advance_year
from stronghold.utils.rng import KingdomRandom

logger = logging.getLogger(__name__)

MAIN_MENU = (
    "Advance Year",
    "Display Status",
    "Manage Resources",
    "Manage Army",
    "Manage Economy",
    "Manage Diplomacy",
    "Manage Bank",
    "Hold Elections",
    "Perform Ruler Action",
    "Trigger Random Event",
    "Save Game",
    "Load Game",
    "Exit",
)

RECRUIT_LIMITS: dict[UnitType, int] = {
    UnitType.INFANTRY: 100,
    UnitType.CAVALRY: 50,
    UnitType.ARCHERS: 50,
}

MAX_TRADE_AMOUNT = 1000


class ConsoleGame:
    """Menu-driven session over one kingdom.

    Input, output and sleeping are injectable so the menu can be driven by a
    script in tests.
    """

    def __init__(
        self,
        kingdom: Kingdom,
        rng: KingdomRandom,
        *,
        settings: Settings | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        sleep_fn: Callable[[float], None] = time.sleep,
    ) -> None:
        self.kingdom = kingdom
        self.rng = rng
        self.settings = settings or get_settings()
        self.rules = rules
        self._input = input_fn
        self._print = output_fn
        self._sleep = sleep_fn

    # --- prompts ---------------------------------------------------------------

    def prompt_text(self, prompt: str, *, min_length: int = 1, max_length: int = 64) -> str:
        while True:
            value = self._input(prompt).strip()
            if min_length <= len(value) <= max_length:
                return value
            self._print(f"Invalid input! Length must be between {min_length} and {max_length}.")

    def prompt_int(self, prompt: str, low: int, high: int) -> int:
        while True:
            raw = self._input(prompt).strip()
            try:
                value = int(raw)
            except ValueError:
                value = None
            if value is not None and low <= value <= high:
                return value
            self._print(f"Invalid input! Must be between {low} and {high}.")

    def prompt_float(self, prompt: str, low: float, high: float) -> float:
        while True:
            raw = self._input(prompt).strip()
            try:
                value = float(raw)
            except ValueError:
                value = None
            if value is not None and low <= value <= high:
                return value
            self._print(f"Invalid input! Must be between {low} and {high}.")

    def menu(self, title: str, entries: tuple[str, ...]) -> int:
        self._print(f"\n===== {title} =====")
        for index, entry in enumerate(entries, start=1):
            self._print(f"{index}. {entry}")
        return self.prompt_int("Enter choice: ", 1, len(entries))

    # --- output helpers --------------------------------------------------------

    def animate(self, delay: PacingDelay) -> None:
        """Show a pacing delay as a row of dots; Ctrl-C skips the rest."""

        self._print(f"{delay.label}...")
        try:
            for _ in range(delay.steps):
                self._sleep(delay.seconds_per_step)
                self._print(".")
        except KeyboardInterrupt:
            self._print("(skipped)")
            return
        self._print("Complete!")

    def report(self, result: ActionResult) -> None:
        if result.delay is not None:
            self.animate(result.delay)
        self._print(display.describe_result(result))

    # --- main loop -------------------------------------------------------------

    def run(self) -> int:
        """Play until the player exits or the kingdom falls; return the final score."""

        try:
            while not is_game_over(self.kingdom, rules=self.rules):
                choice = self.menu("Stronghold: Kingdom Management", MAIN_MENU)
                if not self.dispatch(choice):
                    self._print("Thank you for playing Stronghold!")
                    return self.kingdom.score
        except EOFError:
            self._print("Input closed; leaving the throne room.")
            return self.kingdom.score

        self._print("\n===== GAME OVER =====")
        self._print("Your kingdom has fallen!")
        self._print(f"Final Score: {self.kingdom.score}")
        self._print(f"Years Ruled: {self.kingdom.year - 1}")
        return self.kingdom.score

    def dispatch(self, choice: int) -> bool:
        """Run one main-menu entry; returns False when the player exits."""

        handlers: dict[int, Callable[[], None]] = {
            1: self.do_advance_year,
            2: lambda: self._print(display.describe_status(self.kingdom)),
            3: self.resource_menu,
            4: self.army_menu,
            5: self.economy_menu,
            6: self.diplomacy_menu,
            7: self.bank_menu,
            8: lambda: self.report(hold_elections(self.kingdom, self.rng, rules=self.rules)),
            9: lambda: self.report(
                perform_ruler_action(
                    self.kingdom,
                    self.rng,
                    pacing_seconds=self.settings.pacing_seconds,
                    rules=self.rules,
                )
            ),
            10: lambda: self._print(display.describe_event(trigger_event(self.kingdom, self.rng))),
            11: self.save_menu,
            12: self.load_menu,
        }
        if choice == len(MAIN_MENU):
            self._print("Exiting game...")
            return False
        handlers[choice]()
        return True

    def do_advance_year(self) -> None:
        self._print(f"\nAdvancing to year {self.kingdom.year + 1}...")
        report = advance_year(self.kingdom, self.rng, rules=self.rules)
        self._print(display.describe_report(report))

    # --- sub menus -------------------------------------------------------------

    def resource_menu(self) -> None:
        kingdom = self.kingdom
        while True:
            choice = self.menu("Resource Management", ("Buy Resources", "Sell Resources", "View Market", "Back"))
            if choice == 4:
                return
            if choice == 3:
                self._print(display.describe_status(kingdom))
                continue
            name = self.prompt_text("Enter resource type (Food/Wood/Stone/Iron): ")
            if choice == 1:
                amount = self.prompt_int("Enter amount to buy: ", 1, MAX_TRADE_AMOUNT)
                self.report(market_rules.buy_resource(kingdom.market, name, amount, kingdom.economy))
            else:
                amount = self.prompt_int("Enter amount to sell: ", 1, MAX_TRADE_AMOUNT)
                self.report(
                    market_rules.sell_resource(kingdom.market, name, amount, kingdom.economy, rules=self.rules)
                )

    def army_menu(self) -> None:
        kingdom = self.kingdom
        units = (UnitType.INFANTRY, UnitType.CAVALRY, UnitType.ARCHERS)
        while True:
            choice = self.menu(
                "Army Management",
                ("Train Army", "Recruit Infantry", "Recruit Cavalry", "Recruit Archers", "Back"),
            )
            if choice == 5:
                return
            if choice == 1:
                self.report(
                    army_rules.train_army(
                        kingdom.army, pacing_seconds=self.settings.pacing_seconds, rules=self.rules
                    )
                )
                continue
            unit = units[choice - 2]
            count = self.prompt_int(f"Enter number of {unit} to recruit: ", 1, RECRUIT_LIMITS[unit])
            self.report(army_rules.recruit(kingdom.army, kingdom.economy, unit, count, rules=self.rules))

    def economy_menu(self) -> None:
        economy = self.kingdom.economy
        cohorts = ("peasant", "merchant", "noble")
        while True:
            choice = self.menu(
                "Economy Management",
                ("Adjust Peasant Tax Rate", "Adjust Merchant Tax Rate", "Adjust Noble Tax Rate", "Back"),
            )
            if choice == 4:
                return
            cohort = cohorts[choice - 1]
            rate = self.prompt_float(f"Enter new {cohort} tax rate (0.0-0.5): ", 0.0, economy.MAX_TAX_RATE)
            economy_rules.set_tax_rates(economy, **{cohort: rate})
            self._print(f"{cohort.capitalize()} tax rate set to {rate}!")

    def diplomacy_menu(self) -> None:
        kingdom = self.kingdom
        roster = kingdom.diplomacy
        entries = (
            "List Foreign Kingdoms",
            "Improve Relations",
            "Declare War",
            "Sign Peace Treaty",
            "Form Alliance",
            "Establish Trade",
            "Engage in Battle",
            "Back",
        )
        actions: dict[int, Callable[[str], ActionResult]] = {
            2: lambda name: diplomacy_rules.improve_relations(roster, name, kingdom.economy, rules=self.rules),
            3: lambda name: diplomacy_rules.declare_war(roster, name, kingdom.army, rules=self.rules),
            4: lambda name: diplomacy_rules.sign_peace(
                roster, name, kingdom.economy, kingdom.army, rules=self.rules
            ),
            5: lambda name: diplomacy_rules.form_alliance(roster, name, rules=self.rules),
            6: lambda name: diplomacy_rules.establish_trade(
                roster, name, kingdom.market, kingdom.economy, rules=self.rules
            ),
            7: lambda name: diplomacy_rules.battle(roster, name, kingdom.army, rules=self.rules),
        }
        while True:
            choice = self.menu("Diplomacy Management", entries)
            if choice == len(entries):
                return
            self._print(display.describe_roster(roster))
            if choice == 1:
                continue
            name = self.prompt_text("Enter kingdom name: ")
            self.report(actions[choice](name))

    def bank_menu(self) -> None:
        kingdom = self.kingdom
        bank = kingdom.bank
        while True:
            choice = self.menu("Bank Management", ("Take Loan", "Repay Loan", "View Bank Status", "Back"))
            if choice == 4:
                return
            if choice == 3:
                self._print(display.describe_bank(bank))
            elif choice == 1:
                amount = self.prompt_int("Enter loan amount: ", 1, bank.max_loan_amount)
                self.report(bank_rules.take_loan(bank, amount, kingdom.economy))
            elif kingdom.economy.debt <= 0:
                self._print("There is no debt to repay.")
            else:
                amount = self.prompt_int("Enter amount to repay: ", 1, kingdom.economy.debt)
                self.report(bank_rules.repay_loan(bank, amount, kingdom.economy))

    def save_menu(self) -> None:
        filename = self.prompt_text("Enter save file name (e.g., savegame.txt): ", max_length=255)
        fmt = savegame.SaveFormat.JSON if filename.endswith(".json") else savegame.SaveFormat.TEXT
        try:
            path = savegame.save_game(self.kingdom, Path(filename), fmt=fmt)
        except savegame.SaveGameError as exc:
            self._print(f"Error: {exc}")
            return
        self._print(f"Game saved to {path}")

    def load_menu(self) -> None:
        filename = self.prompt_text("Enter load file name (e.g., savegame.txt): ", max_length=255)
        try:
            savegame.load_game(self.kingdom, Path(filename))
        except savegame.SaveGameError as exc:
            self._print(f"Error: {exc}")
            return
        kingdom = self.kingdom
        self._print(f"Game loaded. Kingdom: {kingdom.name}, Year: {kingdom.year}, Score: {kingdom.score}")


def start_console(
    *,
    settings: Settings | None = None,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> int:
    """Ask for the kingdom and king names, then run the menu."""

    settings = settings or get_settings()
    output_fn("Welcome to Stronghold: Rule Your Medieval Kingdom!")
    kingdom_name = input_fn("Enter your kingdom's name: ").strip() or "Default Kingdom"
    king_name = input_fn("Enter your king's name: ").strip() or "King Ali"

    rng = KingdomRandom(settings.rng_seed)
    kingdom = new_kingdom(
        kingdom_name,
        rng,
        ruler=King(king_name, 70, 60, 50, royal_bloodline=80),
        event_chance=settings.event_chance,
        event_cooldown_seconds=settings.event_cooldown_seconds,
    )
    logger.info("console session started for %s", kingdom_name)
    game = ConsoleGame(
        kingdom,
        rng,
        settings=settings,
        input_fn=input_fn,
        output_fn=output_fn,
        sleep_fn=sleep_fn,
    )
    return game.run()
