"""Import and export helpers for Stronghold save files.

A save captures a fixed subset of the kingdom.  Two encodings exist:

* ``text``: the default, one field per line in a fixed order.  Floats are
  written with :func:`repr` so they round-trip exactly.
* ``json``: the same record as a :class:`KingdomSnapshot` document carrying
  ``format_version`` and ``ruler_kind``.

Loading sniffs the encoding, parses the whole file and only then writes the
values into the kingdom through its clamping setters.  The ruler always comes
back as a :class:`~stronghold.domain.models.King`.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ValidationError

from stronghold.domain import models as dm
from stronghold.domain.enums import LeaderKind

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class SaveGameError(Exception):
    """A save file could not be written, read or understood."""


class SaveFormat(StrEnum):
    """Supported on-disk encodings."""

    TEXT = "text"
    JSON = "json"


class KingdomSnapshot(BaseModel):
    """Persisted subset of a kingdom."""

    format_version: int = FORMAT_VERSION
    ruler_kind: LeaderKind = LeaderKind.KING

    name: str
    year: int
    score: int
    peasants: int
    merchants: int
    nobles: int
    happiness: float
    growth_rate: float
    infantry: int
    cavalry: int
    archers: int
    morale: float
    training_level: int
    at_war: bool
    treasury: int
    debt: int
    peasant_tax_rate: float
    merchant_tax_rate: float
    noble_tax_rate: float
    inflation: float
    food: int
    wood: int
    stone: int
    iron: int
    ruler_name: str
    royal_bloodline: int
    years_in_power: int


# Positional layout of the text encoding; ruler_kind and format_version are JSON only.
TEXT_FIELDS: tuple[str, ...] = (
    "name",
    "year",
    "score",
    "peasants",
    "merchants",
    "nobles",
    "happiness",
    "growth_rate",
    "infantry",
    "cavalry",
    "archers",
    "morale",
    "training_level",
    "at_war",
    "treasury",
    "debt",
    "peasant_tax_rate",
    "merchant_tax_rate",
    "noble_tax_rate",
    "inflation",
    "food",
    "wood",
    "stone",
    "iron",
    "ruler_name",
    "royal_bloodline",
    "years_in_power",
)

_STRING_FIELDS = frozenset({"name", "ruler_name"})
_FLOAT_FIELDS = frozenset(
    {
        "happiness",
        "growth_rate",
        "morale",
        "peasant_tax_rate",
        "merchant_tax_rate",
        "noble_tax_rate",
        "inflation",
    }
)


def snapshot_kingdom(kingdom: dm.Kingdom) -> KingdomSnapshot:
    """Capture the persisted subset of ``kingdom``."""

    ruler = kingdom.ruler
    if isinstance(ruler, dm.King):
        bloodline, years = ruler.royal_bloodline, ruler.years_in_power
    else:
        bloodline, years = 50, 0

    population = kingdom.population
    army = kingdom.army
    economy = kingdom.economy
    market = kingdom.market
    return KingdomSnapshot(
        ruler_kind=ruler.kind,
        name=kingdom.name,
        year=kingdom.year,
        score=kingdom.score,
        peasants=population.peasants,
        merchants=population.merchants,
        nobles=population.nobles,
        happiness=population.happiness,
        growth_rate=population.growth_rate,
        infantry=army.infantry,
        cavalry=army.cavalry,
        archers=army.archers,
        morale=army.morale,
        training_level=army.training_level,
        at_war=army.at_war,
        treasury=economy.treasury,
        debt=economy.debt,
        peasant_tax_rate=economy.peasant_tax_rate,
        merchant_tax_rate=economy.merchant_tax_rate,
        noble_tax_rate=economy.noble_tax_rate,
        inflation=economy.inflation,
        food=market.food.amount,
        wood=market.wood.amount,
        stone=market.stone.amount,
        iron=market.iron.amount,
        ruler_name=ruler.name,
        royal_bloodline=bloodline,
        years_in_power=years,
    )


def apply_snapshot(kingdom: dm.Kingdom, snapshot: KingdomSnapshot) -> None:
    """Write a snapshot into ``kingdom`` through the clamping setters."""

    if snapshot.ruler_kind is not LeaderKind.KING:
        logger.warning(
            "save of %s had a %s ruler; restoring %s as a king",
            snapshot.name,
            snapshot.ruler_kind,
            snapshot.ruler_name,
        )

    kingdom.name = snapshot.name
    kingdom.set_year(snapshot.year)
    kingdom.set_score(snapshot.score)

    population = kingdom.population
    population.set_peasants(snapshot.peasants)
    population.set_merchants(snapshot.merchants)
    population.set_nobles(snapshot.nobles)
    population.set_happiness(snapshot.happiness)
    population.set_growth_rate(snapshot.growth_rate)

    army = kingdom.army
    army.set_infantry(snapshot.infantry)
    army.set_cavalry(snapshot.cavalry)
    army.set_archers(snapshot.archers)
    army.set_morale(snapshot.morale)
    army.set_training_level(snapshot.training_level)
    army.set_war_status(snapshot.at_war)

    economy = kingdom.economy
    economy.set_treasury(snapshot.treasury)
    economy.set_debt(snapshot.debt)
    economy.set_peasant_tax_rate(snapshot.peasant_tax_rate)
    economy.set_merchant_tax_rate(snapshot.merchant_tax_rate)
    economy.set_noble_tax_rate(snapshot.noble_tax_rate)
    economy.set_inflation(snapshot.inflation)

    market = kingdom.market
    market.food.set_amount(snapshot.food)
    market.wood.set_amount(snapshot.wood)
    market.stone.set_amount(snapshot.stone)
    market.iron.set_amount(snapshot.iron)

    king = dm.King(snapshot.ruler_name, 50, 50, 50, royal_bloodline=snapshot.royal_bloodline)
    king.years_in_power = snapshot.years_in_power
    kingdom.set_ruler(king)


def render_text(snapshot: KingdomSnapshot) -> str:
    lines: list[str] = []
    for name in TEXT_FIELDS:
        value = getattr(snapshot, name)
        if isinstance(value, bool):
            lines.append("1" if value else "0")
        elif isinstance(value, float):
            lines.append(repr(value))
        else:
            lines.append(str(value))
    return "\n".join(lines) + "\n"


def parse_text(text: str) -> KingdomSnapshot:
    """Parse the positional encoding.

    Raises:
        ValueError: If a line is missing or does not hold the expected type
    """

    # Only "\n" separates fields; other Unicode line breaks may appear in names.
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    if len(lines) < len(TEXT_FIELDS):
        raise ValueError(f"expected {len(TEXT_FIELDS)} lines, found {len(lines)}")

    values: dict[str, object] = {}
    for name, raw in zip(TEXT_FIELDS, lines):
        if name in _STRING_FIELDS:
            values[name] = raw
        elif name in _FLOAT_FIELDS:
            values[name] = float(raw.strip())
        elif name == "at_war":
            values[name] = int(raw.strip()) != 0
        else:
            values[name] = int(raw.strip())
    return KingdomSnapshot.model_validate(values)


def dumps(kingdom: dm.Kingdom, fmt: SaveFormat = SaveFormat.TEXT) -> str:
    snapshot = snapshot_kingdom(kingdom)
    if fmt is SaveFormat.JSON:
        return snapshot.model_dump_json(indent=2)
    return render_text(snapshot)


def loads(text: str) -> KingdomSnapshot:
    """Parse either encoding, sniffing JSON by its leading brace."""

    if text.lstrip().startswith("{"):
        return KingdomSnapshot.model_validate_json(text)
    return parse_text(text)


def save_game(
    kingdom: dm.Kingdom,
    path: Path | str,
    *,
    fmt: SaveFormat = SaveFormat.TEXT,
) -> Path:
    """Write ``kingdom`` to ``path`` and return the path written."""

    target = Path(path)
    payload = dumps(kingdom, fmt)
    try:
        target.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise SaveGameError(f"could not write save file {target}: {exc}") from exc
    logger.info("saved %s (year %d) to %s", kingdom.name, kingdom.year, target)
    return target


def read_snapshot(path: Path | str) -> KingdomSnapshot:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise SaveGameError(f"could not open save file {source}: {exc}") from exc
    try:
        return loads(text)
    except (ValueError, ValidationError) as exc:
        raise SaveGameError(f"save file {source} is corrupt: {exc}") from exc


def load_game(kingdom: dm.Kingdom, path: Path | str) -> KingdomSnapshot:
    """Load ``path`` into ``kingdom``; nothing changes if the file is unusable."""

    snapshot = read_snapshot(path)
    apply_snapshot(kingdom, snapshot)
    logger.info("loaded %s (year %d) from %s", kingdom.name, kingdom.year, path)
    return snapshot
