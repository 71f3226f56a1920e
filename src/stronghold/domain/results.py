"""Result structures returned by the Stronghold rules.

Player actions never raise on a failed precondition.  They return an
:class:`ActionResult` whose truth value tells whether the action was applied;
a refused action leaves every piece of state untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import EventType, FailureReason


@dataclass(frozen=True, slots=True)
class PacingDelay:
    """Cosmetic wait the caller may animate before showing an outcome.

    The delay has no effect on the simulation; it is already applied when the
    caller receives it.  Callers are free to skip or interrupt it.
    """

    label: str
    steps: int = 3
    seconds_per_step: float = 1.0

    @property
    def total_seconds(self) -> float:
        return self.steps * self.seconds_per_step


@dataclass(slots=True)
class ActionResult:
    """Outcome of a player-triggered action."""

    success: bool
    message: str
    reason: FailureReason | None = None
    details: dict[str, object] = field(default_factory=dict)
    delay: PacingDelay | None = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(
        cls,
        message: str,
        *,
        delay: PacingDelay | None = None,
        **details: object,
    ) -> ActionResult:
        return cls(success=True, message=message, details=dict(details), delay=delay)

    @classmethod
    def fail(cls, reason: FailureReason, message: str, **details: object) -> ActionResult:
        return cls(success=False, message=message, reason=reason, details=dict(details))


@dataclass(slots=True)
class EventOutcome:
    """Summary of a random event applied to a kingdom."""

    event: EventType
    title: str
    description: str
    details: dict[str, object] = field(default_factory=dict)


@dataclass(slots=True)
class YearReport:
    """What happened during one call to ``advance_year``."""

    year: int
    taxes_collected: int = 0
    event: EventOutcome | None = None
    unrest: EventOutcome | None = None
    messages: list[str] = field(default_factory=list)
    score: int = 0
    game_over: bool = False
