"""File-based repository of named save slots."""

from __future__ import annotations

import re
from pathlib import Path

from stronghold.domain import models as dm
from stronghold.savegame import KingdomSnapshot, SaveFormat, read_snapshot, save_game

_SLOT_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]{0,63}$")
SLOT_SUFFIX = ".sav"


class SaveSlotRepository:
    """Persist kingdom snapshots as one file per slot under ``base_path``."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def validate_slot(slot: str) -> str:
        """Return ``slot`` if it is a safe file stem, else raise ValueError."""

        if not _SLOT_PATTERN.match(slot):
            raise ValueError(f"invalid slot name {slot!r}")
        return slot

    def _path_for(self, slot: str) -> Path:
        return self.base_path / f"{self.validate_slot(slot)}{SLOT_SUFFIX}"

    def save(self, slot: str, kingdom: dm.Kingdom, *, fmt: SaveFormat = SaveFormat.TEXT) -> Path:
        """Serialize a kingdom into the slot and return the file path."""

        return save_game(kingdom, self._path_for(slot), fmt=fmt)

    def load(self, slot: str) -> KingdomSnapshot:
        """Read a previously saved slot.

        Raises:
            FileNotFoundError: If the slot does not exist
            SaveGameError: If the slot cannot be read or parsed
        """

        path = self._path_for(slot)
        if not path.exists():
            raise FileNotFoundError(f"save slot {slot!r} not found")
        return read_snapshot(path)

    def list_slots(self) -> list[str]:
        """Return all slot names currently persisted, sorted."""

        slots = [
            path.name[: -len(SLOT_SUFFIX)]
            for path in self.base_path.glob(f"*{SLOT_SUFFIX}")
            if _SLOT_PATTERN.match(path.name[: -len(SLOT_SUFFIX)])
        ]
        return sorted(slots)

    def delete(self, slot: str) -> bool:
        """Remove a slot if it exists; report whether anything was removed."""

        path = self._path_for(slot)
        if path.exists():
            path.unlink()
            return True
        return False
