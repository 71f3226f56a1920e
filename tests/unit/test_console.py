"""Tests for the interactive console driven by scripted input."""

from __future__ import annotations

import pytest

from stronghold.config import Settings
from stronghold.console import ConsoleGame, start_console
from stronghold.domain import models as dm
from stronghold.domain.kingdom import new_kingdom
from stronghold.utils.rng import KingdomRandom


class Script:
    """Feeds canned answers to prompts and records everything printed."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.output: list[str] = []
        self.sleeps: list[float] = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def print(self, text: str = "") -> None:
        self.output.append(text)

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


def _game(script: Script, tmp_path, *, kingdom: dm.Kingdom | None = None) -> ConsoleGame:
    settings = Settings(_env_file=None, data_dir=tmp_path, event_chance=0, pacing_seconds=0.2)
    rng = KingdomRandom("console")
    kingdom = kingdom or new_kingdom("Avalon", rng, ruler=dm.King("Arthur", 70, 60, 50, 80), event_chance=0)
    return ConsoleGame(
        kingdom,
        rng,
        settings=settings,
        input_fn=script.input,
        output_fn=script.print,
        sleep_fn=script.sleep,
    )


def test_invalid_choice_reprompts_then_exits(tmp_path):
    script = Script("abc", "0", "2", "13")
    game = _game(script, tmp_path)

    game.run()

    assert script.text.count("Invalid input! Must be between 1 and 13.") == 2
    assert "Kingdom Status: Avalon (Year 1)" in script.text
    assert "Thank you for playing Stronghold!" in script.text


def test_closed_input_ends_session(tmp_path):
    script = Script()
    assert _game(script, tmp_path).run() == 0
    assert "Input closed" in script.text


def test_advance_year_from_menu(tmp_path):
    script = Script("1", "13")
    game = _game(script, tmp_path)

    game.run()

    assert game.kingdom.year == 2
    assert "Advanced to year 2." in script.text


def test_recruit_cavalry(tmp_path):
    script = Script("4", "3", "5", "5", "13")
    game = _game(script, tmp_path)

    game.run()

    assert game.kingdom.army.cavalry == 15
    assert game.kingdom.economy.treasury == 900
    assert "Recruited 5 cavalry" in script.text


def test_recruit_limit_enforced(tmp_path):
    script = Script("4", "3", "51", "50", "5", "13")
    game = _game(script, tmp_path)

    game.run()

    assert "Invalid input! Must be between 1 and 50." in script.text
    assert game.kingdom.army.cavalry == 60


def test_training_animates_pacing_delay(tmp_path):
    script = Script("4", "1", "5", "13")
    game = _game(script, tmp_path)

    game.run()

    assert game.kingdom.army.training_level == 2
    assert script.sleeps == [0.2, 0.2, 0.2]
    assert "Training army units..." in script.text
    assert "Complete!" in script.text


def test_interrupted_animation_is_skipped(tmp_path):
    script = Script("4", "1", "5", "13")
    game = _game(script, tmp_path)

    def interrupt(seconds: float) -> None:
        raise KeyboardInterrupt

    game._sleep = interrupt
    game.run()

    assert "(skipped)" in script.text
    assert game.kingdom.army.training_level == 2


def test_buy_and_failed_sell(tmp_path):
    script = Script("3", "1", "Food", "100", "2", "Iron", "1000", "4", "13")
    game = _game(script, tmp_path)

    game.run()

    assert game.kingdom.market.food.amount == 1100
    assert game.kingdom.market.iron.amount == 200
    assert "Purchased 100 Food" in script.text
    assert "Failed: Only 200 Iron in stock" in script.text


def test_tax_rate_adjustment(tmp_path):
    script = Script("5", "1", "0.9", "0.3", "4", "13")
    game = _game(script, tmp_path)

    game.run()

    assert game.kingdom.economy.peasant_tax_rate == 0.3
    assert "Peasant tax rate set to 0.3!" in script.text


def test_diplomacy_war_and_unknown_kingdom(tmp_path):
    script = Script("6", "3", "Northlands", "3", "Atlantis", "8", "13")
    game = _game(script, tmp_path)

    game.run()

    assert game.kingdom.diplomacy.find("Northlands").at_war
    assert game.kingdom.army.at_war
    assert "Failed: Kingdom 'Atlantis' not found" in script.text


def test_bank_loan_and_repayment(tmp_path):
    script = Script("7", "2", "1", "500", "2", "200", "3", "4", "13")
    game = _game(script, tmp_path)

    game.run()

    assert "There is no debt to repay." in script.text
    assert game.kingdom.economy.debt == 300
    assert game.kingdom.economy.treasury == 1300
    assert "Current Loans: 300 gold" in script.text


def test_save_and_load_round_trip(tmp_path):
    target = tmp_path / "avalon.txt"
    script = Script("11", str(target), "1", "12", str(target), "13")
    game = _game(script, tmp_path)

    game.run()

    assert target.exists()
    assert f"Game saved to {target}" in script.text
    assert game.kingdom.year == 1
    assert "Game loaded. Kingdom: Avalon, Year: 1" in script.text


def test_json_save_by_extension(tmp_path):
    target = tmp_path / "avalon.json"
    script = Script("11", str(target), "13")
    _game(script, tmp_path).run()
    assert target.read_text(encoding="utf-8").lstrip().startswith("{")


def test_load_missing_file_reports_error(tmp_path):
    script = Script("12", str(tmp_path / "nothing.txt"), "13")
    game = _game(script, tmp_path)

    game.run()

    assert "Error: could not open save file" in script.text
    assert game.kingdom.year == 1


def test_trigger_event_and_election(tmp_path):
    script = Script("10", "8", "13")
    game = _game(script, tmp_path)

    game.run()

    assert "===== EVENT:" in script.text
    assert "rises to power" in script.text
    assert len(game.kingdom.chronicle) == 2


def test_fallen_kingdom_ends_game(tmp_path):
    kingdom = dm.Kingdom(name="Ruin", population=dm.Population(1, 0, 0), score=42)
    script = Script()
    game = _game(script, tmp_path, kingdom=kingdom)

    assert game.run() == 42
    assert "Your kingdom has fallen!" in script.text
    assert "Final Score: 42" in script.text
    assert script.prompts == []


@pytest.mark.parametrize(
    ("answers", "kingdom_name", "ruler_name"),
    [
        (("", "", "2", "13"), "Default Kingdom", "King Ali"),
        (("Avalon", "Arthur", "2", "13"), "Avalon", "Arthur"),
    ],
)
def test_start_console_names(tmp_path, answers, kingdom_name, ruler_name):
    script = Script(*answers)
    settings = Settings(_env_file=None, data_dir=tmp_path, event_chance=0, rng_seed="start")

    start_console(settings=settings, input_fn=script.input, output_fn=script.print, sleep_fn=script.sleep)

    assert script.output[0] == "Welcome to Stronghold: Rule Your Medieval Kingdom!"
    assert f"Kingdom Status: {kingdom_name} (Year 1)" in script.text
    assert f"Ruler: {ruler_name}" in script.text
    assert "Thank you for playing Stronghold!" in script.text
