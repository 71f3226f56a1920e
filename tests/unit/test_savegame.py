"""Tests for the savegame import/export helpers."""

from __future__ import annotations

import json
import logging

import pytest

from stronghold import savegame
from stronghold.domain import models as dm
from stronghold.domain.enums import GuildType, LeaderKind
from stronghold.domain.kingdom import new_kingdom
from stronghold.domain.tick import advance_year
from stronghold.utils.rng import KingdomRandom


def _sample_kingdom() -> dm.Kingdom:
    kingdom = dm.Kingdom(
        name="Avalon of the West",
        ruler=dm.King("Arthur Pendragon", 70, 60, 50, royal_bloodline=80, years_in_power=7),
        population=dm.Population(peasants=321, merchants=45, nobles=9, growth_rate=0.0723, happiness=0.6123456789),
        army=dm.Army(infantry=61, cavalry=12, archers=25, morale=0.777, training_level=4, at_war=True),
        economy=dm.Economy(
            peasant_tax_rate=0.12,
            merchant_tax_rate=0.18,
            noble_tax_rate=0.33,
            inflation=0.0451,
            treasury=2345,
            debt=600,
        ),
        year=12,
        score=4567,
    )
    kingdom.market.food.set_amount(1111)
    kingdom.market.wood.set_amount(222)
    kingdom.market.stone.set_amount(333)
    kingdom.market.iron.set_amount(44)
    return kingdom


def test_text_layout_has_one_field_per_line():
    text = savegame.dumps(_sample_kingdom())
    lines = text.splitlines()

    assert len(lines) == len(savegame.TEXT_FIELDS) == 27
    assert lines[0] == "Avalon of the West"
    assert lines[1] == "12"
    assert lines[13] == "1"
    assert lines[24] == "Arthur Pendragon"
    assert lines[26] == "7"


@pytest.mark.parametrize("fmt", [savegame.SaveFormat.TEXT, savegame.SaveFormat.JSON])
def test_round_trip_restores_every_field(tmp_path, fmt):
    original = _sample_kingdom()
    path = savegame.save_game(original, tmp_path / "kingdom.sav", fmt=fmt)

    restored = dm.Kingdom(name="Blank")
    savegame.load_game(restored, path)

    assert savegame.snapshot_kingdom(restored) == savegame.snapshot_kingdom(original)
    assert restored.population.happiness == 0.6123456789
    assert restored.ruler.years_in_power == 7
    assert restored.ruler.royal_bloodline == 80


def test_json_save_is_versioned(tmp_path):
    path = savegame.save_game(_sample_kingdom(), tmp_path / "kingdom.json", fmt=savegame.SaveFormat.JSON)
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["format_version"] == savegame.FORMAT_VERSION
    assert payload["ruler_kind"] == "king"
    assert payload["at_war"] is True


def test_non_king_ruler_is_restored_as_king(tmp_path, caplog):
    kingdom = _sample_kingdom()
    kingdom.set_ruler(dm.GuildLeader("Hilda", guild_type=GuildType.FARMERS))
    path = savegame.save_game(kingdom, tmp_path / "guild.json", fmt=savegame.SaveFormat.JSON)

    restored = dm.Kingdom(name="Blank")
    with caplog.at_level(logging.WARNING, logger="stronghold.savegame"):
        snapshot = savegame.load_game(restored, path)

    assert snapshot.ruler_kind is LeaderKind.GUILD_LEADER
    assert isinstance(restored.ruler, dm.King)
    assert restored.ruler.name == "Hilda"
    assert restored.ruler.royal_bloodline == 50
    assert restored.ruler.years_in_power == 0
    assert "restoring Hilda as a king" in caplog.text


def test_text_save_of_commander_keeps_name(tmp_path):
    kingdom = _sample_kingdom()
    kingdom.set_ruler(dm.Commander("Rex", tactical_skill=80, loyalty=20))
    path = savegame.save_game(kingdom, tmp_path / "commander.sav")

    restored = dm.Kingdom(name="Blank")
    savegame.load_game(restored, path)

    assert restored.ruler.kind is LeaderKind.KING
    assert restored.ruler.name == "Rex"


@pytest.mark.parametrize("name", ["Avalon\u2028West", "Avalon\x0bWest", "Avalon\x85West"])
def test_unicode_line_breaks_in_names_survive_text_round_trip(tmp_path, name):
    kingdom = _sample_kingdom()
    kingdom.name = name
    kingdom.set_ruler(dm.King(f"{name} I", 70, 60, 50, royal_bloodline=80))
    path = savegame.save_game(kingdom, tmp_path / "unicode.sav")

    restored = dm.Kingdom(name="Blank")
    savegame.load_game(restored, path)

    assert restored.name == name
    assert restored.ruler.name == f"{name} I"
    assert savegame.snapshot_kingdom(restored) == savegame.snapshot_kingdom(kingdom)


def test_windows_line_endings_are_accepted():
    text = savegame.dumps(_sample_kingdom()).replace("\n", "\r\n")
    snapshot = savegame.loads(text)
    assert snapshot.name == "Avalon of the West"
    assert snapshot.years_in_power == 7


def test_kingdom_deep_in_debt_round_trips_after_a_year(tmp_path):
    rng = KingdomRandom("debt")
    kingdom = new_kingdom("Avalon", rng, event_chance=0, now=0.0)
    kingdom.economy.set_debt(1_000_000)
    report = advance_year(kingdom, rng, now=1.0)
    assert report.score < 0

    path = savegame.save_game(kingdom, tmp_path / "debt.sav")
    restored = dm.Kingdom(name="Blank")
    savegame.load_game(restored, path)

    assert restored.score == kingdom.score == 0
    assert savegame.snapshot_kingdom(restored) == savegame.snapshot_kingdom(kingdom)


def test_loaded_values_are_clamped():
    text = savegame.dumps(_sample_kingdom()).splitlines()
    text[6] = "7.5"  # happiness
    text[15] = "-40"  # debt

    kingdom = dm.Kingdom(name="Blank")
    savegame.apply_snapshot(kingdom, savegame.loads("\n".join(text)))

    assert kingdom.population.happiness == 1.0
    assert kingdom.economy.debt == 0


def test_missing_file_raises(tmp_path):
    with pytest.raises(savegame.SaveGameError, match="could not open"):
        savegame.load_game(dm.Kingdom(name="Blank"), tmp_path / "absent.sav")


@pytest.mark.parametrize(
    "content",
    [
        "Avalon\n12\n",
        "Avalon\ntwelve\n" + "1\n" * 25,
        '{"name": "Avalon"}',
    ],
)
def test_corrupt_file_leaves_kingdom_untouched(tmp_path, content):
    path = tmp_path / "broken.sav"
    path.write_text(content, encoding="utf-8")
    kingdom = _sample_kingdom()
    before = savegame.snapshot_kingdom(kingdom)

    with pytest.raises(savegame.SaveGameError, match="corrupt"):
        savegame.load_game(kingdom, path)

    assert savegame.snapshot_kingdom(kingdom) == before


def test_unwritable_target_raises(tmp_path):
    with pytest.raises(savegame.SaveGameError, match="could not write"):
        savegame.save_game(_sample_kingdom(), tmp_path / "missing-dir" / "kingdom.sav")
