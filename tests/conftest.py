"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`stronghold` package (e.g., `from stronghold.api.app import create_app`)
without requiring an editable install in CI.  It also provides a scripted
random stream for tests that need to force specific rolls.
"""

import sys
from collections.abc import Iterable
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from stronghold.utils.rng import KingdomRandom  # noqa: E402


class ScriptedRandom(KingdomRandom):
    """Random stream that replays a fixed list of ``below`` results.

    Every scripted value is reduced modulo the requested bound so a script can
    be reused for different draws.  Running out of values raises, which makes
    unexpected extra draws visible in tests.
    """

    def __init__(self, values: Iterable[int]) -> None:
        super().__init__(0)
        self._values = list(values)
        self.calls: list[int] = []

    def below(self, upper: int) -> int:
        if upper <= 0:
            raise ValueError(f"upper must be positive, got {upper}")
        if not self._values:
            raise AssertionError(f"unexpected draw below({upper})")
        self.calls.append(upper)
        return self._values.pop(0) % upper

    @property
    def remaining(self) -> int:
        return len(self._values)


@pytest.fixture
def scripted():
    """Factory for :class:`ScriptedRandom` streams."""

    return ScriptedRandom
