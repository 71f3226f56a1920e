"""Tests for the console renderings."""

from __future__ import annotations

from stronghold import display
from stronghold.domain import models as dm
from stronghold.domain.enums import EventType, FailureReason
from stronghold.domain.results import ActionResult, EventOutcome, YearReport


def test_status_sheet():
    kingdom = dm.Kingdom(name="Avalon", ruler=dm.King("Arthur"))
    text = display.describe_status(kingdom)

    assert "Kingdom Status: Avalon (Year 1)" in text
    assert "Ruler: Arthur" in text
    assert "Happiness: 50%" in text
    assert "Status: At Peace" in text
    assert "Food: 1000 (Value: 1.00)" in text
    assert "Gold:" not in text


def test_roster_listing():
    roster = dm.Diplomacy()
    roster.add_kingdom("Northlands", 640)
    roster.find("Northlands").set_relation_level(8)
    text = display.describe_roster(roster)

    assert "1. Northlands:" in text
    assert "Relation: Friendly (8)" in text
    assert "Status: Peaceful" in text
    assert "Military Strength: 640" in text


def test_bank_status():
    text = display.describe_bank(dm.Bank(current_loans=300, corruption_level=7))
    assert "Interest Rate: 5%" in text
    assert "Current Loans: 300 gold" in text
    assert "Corruption Level: 7" in text


def test_results_and_reports():
    assert display.describe_result(ActionResult.ok("Done")) == "Done"
    failed = ActionResult.fail(FailureReason.INVALID_AMOUNT, "Nope")
    assert display.describe_result(failed) == "Failed: Nope"

    outcome = EventOutcome(EventType.FIRE, "Fire", "Smoke everywhere")
    report = YearReport(year=3, event=outcome, messages=["Collected 10 gold in taxes"], score=99)
    text = display.describe_report(report)

    assert text.splitlines()[0] == "Advanced to year 3."
    assert "===== EVENT: FIRE =====" in text
    assert "Collected 10 gold in taxes" in text
    assert text.splitlines()[-1] == "Score: 99"
