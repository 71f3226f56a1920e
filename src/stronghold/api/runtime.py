"""Runtime primitives backing the Stronghold HTTP API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from stronghold import savegame
from stronghold.config import Settings, get_settings
from stronghold.domain import army as army_rules
from stronghold.domain import models as dm
from stronghold.domain.kingdom import is_game_over, new_kingdom
from stronghold.domain.results import ActionResult, EventOutcome, YearReport
from stronghold.domain.rules_config import DEFAULT_RULES, RulesConfig
from stronghold.repository import SaveSlotRepository
from stronghold.utils.rng import KingdomRandom

logger = logging.getLogger(__name__)


class GameOverError(Exception):
    """The kingdom has fallen; no further moves are accepted."""


class SessionNotFoundError(LookupError):
    """No session is registered under the requested identifier."""


@dataclass(slots=True)
class GameSession:
    """One in-memory kingdom with its random stream.

    Mutations must hold ``lock`` so that concurrent requests never interleave
    inside a single operation.
    """

    id: int
    kingdom: dm.Kingdom
    rng: KingdomRandom
    rules: RulesConfig = DEFAULT_RULES
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def game_over(self) -> bool:
        return is_game_over(self.kingdom, rules=self.rules)

    def ensure_active(self) -> None:
        if self.game_over:
            raise GameOverError(
                f"{self.kingdom.name} has fallen in year {self.kingdom.year}; "
                f"final score {self.kingdom.score}"
            )


class SessionService:
    """Registry of active sessions plus JSON-friendly renderers."""

    def __init__(self, settings: Settings, *, rules: RulesConfig = DEFAULT_RULES) -> None:
        self._settings = settings
        self._rules = rules
        self._sessions: dict[int, GameSession] = {}
        self._next_id = 1

    def create(self, name: str, *, ruler_name: str | None = None, seed: str | None = None) -> GameSession:
        """Found a new kingdom and register its session."""

        session_id = self._next_id
        self._next_id += 1
        rng = KingdomRandom(seed if seed is not None else self._settings.rng_seed)
        ruler = dm.King(ruler_name, 70, 60, 50, royal_bloodline=80) if ruler_name else None
        kingdom = new_kingdom(
            name,
            rng,
            ruler=ruler,
            event_chance=self._settings.event_chance,
            event_cooldown_seconds=self._settings.event_cooldown_seconds,
            rules=self._rules,
        )
        session = GameSession(id=session_id, kingdom=kingdom, rng=rng, rules=self._rules)
        self._sessions[session_id] = session
        logger.info("session %d created for %s", session_id, name)
        return session

    def get(self, session_id: int) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"kingdom {session_id} not found")
        return session

    def list_ids(self) -> list[int]:
        return sorted(self._sessions)

    def clear(self) -> None:
        self._sessions.clear()

    @staticmethod
    def to_ruler_dict(ruler: dm.Leader) -> dict[str, object]:
        details: dict[str, object]
        if isinstance(ruler, dm.King):
            details = {"royal_bloodline": ruler.royal_bloodline, "years_in_power": ruler.years_in_power}
        elif isinstance(ruler, dm.Commander):
            details = {"tactical_skill": ruler.tactical_skill, "loyalty": ruler.loyalty}
        elif isinstance(ruler, dm.GuildLeader):
            details = {"guild_type": str(ruler.guild_type), "business_acumen": ruler.business_acumen}
        else:  # pragma: no cover - closed set of variants
            details = {}
        return {
            "name": ruler.name,
            "kind": str(ruler.kind),
            "charisma": ruler.charisma,
            "intelligence": ruler.intelligence,
            "strength": ruler.strength,
            "details": details,
        }

    @staticmethod
    def to_kingdom_dict(session: GameSession) -> dict[str, object]:
        """Return a JSON-compatible representation of the session's kingdom."""

        kingdom = session.kingdom
        population = kingdom.population
        army = kingdom.army
        economy = kingdom.economy
        bank = kingdom.bank
        return {
            "id": session.id,
            "name": kingdom.name,
            "year": kingdom.year,
            "score": kingdom.score,
            "game_over": session.game_over,
            "ruler": SessionService.to_ruler_dict(kingdom.ruler),
            "population": {
                "peasants": population.peasants,
                "merchants": population.merchants,
                "nobles": population.nobles,
                "total": population.total,
                "growth_rate": population.growth_rate,
                "happiness": population.happiness,
            },
            "army": {
                "infantry": army.infantry,
                "cavalry": army.cavalry,
                "archers": army.archers,
                "total": army.total,
                "morale": army.morale,
                "training_level": army.training_level,
                "at_war": army.at_war,
                "strength": army_rules.calculate_strength(army, rules=session.rules),
            },
            "economy": {
                "peasant_tax_rate": economy.peasant_tax_rate,
                "merchant_tax_rate": economy.merchant_tax_rate,
                "noble_tax_rate": economy.noble_tax_rate,
                "inflation": economy.inflation,
                "treasury": economy.treasury,
                "debt": economy.debt,
            },
            "market": [
                {"name": resource.name, "amount": resource.amount, "value": resource.value}
                for resource in kingdom.market.resources()
            ],
            "bank": {
                "interest_rate": bank.interest_rate,
                "max_loan_amount": bank.max_loan_amount,
                "current_loans": bank.current_loans,
                "corruption_level": bank.corruption_level,
            },
        }

    @staticmethod
    def to_foreign_dict(entry: dm.ForeignKingdom) -> dict[str, object]:
        return {
            "name": entry.name,
            "strength": entry.strength,
            "relation_level": entry.relation_level,
            "standing": str(entry.standing),
            "status": entry.status,
            "is_ally": entry.is_ally,
            "at_war": entry.at_war,
        }

    @staticmethod
    def to_result_dict(result: ActionResult) -> dict[str, object]:
        delay = result.delay
        return {
            "success": result.success,
            "message": result.message,
            "details": dict(result.details),
            "delay": (
                {
                    "label": delay.label,
                    "steps": delay.steps,
                    "seconds_per_step": delay.seconds_per_step,
                }
                if delay is not None
                else None
            ),
        }

    @staticmethod
    def to_event_dict(outcome: EventOutcome) -> dict[str, object]:
        return {
            "event": str(outcome.event),
            "title": outcome.title,
            "description": outcome.description,
            "details": dict(outcome.details),
        }

    @staticmethod
    def to_report_dict(report: YearReport) -> dict[str, object]:
        return {
            "year": report.year,
            "taxes_collected": report.taxes_collected,
            "event": SessionService.to_event_dict(report.event) if report.event else None,
            "unrest": SessionService.to_event_dict(report.unrest) if report.unrest else None,
            "messages": list(report.messages),
            "score": report.score,
            "game_over": report.game_over,
        }


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules
        self.repository = SaveSlotRepository(self.settings.data_dir)
        self.sessions = SessionService(self.settings, rules=rules)

    def load_slot(self, session: GameSession, slot: str) -> savegame.KingdomSnapshot:
        """Apply a saved slot to ``session``; the kingdom is untouched on failure."""

        snapshot = self.repository.load(slot)
        savegame.apply_snapshot(session.kingdom, snapshot)
        return snapshot

    async def shutdown(self) -> None:
        logger.info("shutting down with %d active sessions", len(self.sessions.list_ids()))
        self.sessions.clear()
