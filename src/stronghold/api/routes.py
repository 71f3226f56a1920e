"""HTTP routes for the Stronghold API."""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Request, status

from stronghold.api.runtime import (
    ApiState,
    GameOverError,
    GameSession,
    SessionNotFoundError,
    SessionService,
)
from stronghold.domain import army as army_rules
from stronghold.domain import bank as bank_rules
from stronghold.domain import diplomacy as diplomacy_rules
from stronghold.domain import economy as economy_rules
from stronghold.domain import market as market_rules
from stronghold.domain.enums import FailureReason
from stronghold.domain.kingdom import hold_elections, perform_ruler_action, trigger_event
from stronghold.domain.results import ActionResult
from stronghold.domain.tick import advance_year
from stronghold.savegame import SaveGameError
from stronghold.schemas import (
    ActionResultRead,
    ChronicleEntryRead,
    EventOutcomeRead,
    ForeignKingdomRead,
    KingdomCreate,
    KingdomRead,
    LoadRequest,
    LoanRequest,
    RecruitRequest,
    SaveRequest,
    SaveSlotRead,
    TaxUpdate,
    TradeRequest,
    YearReportRead,
)

router = APIRouter()

DiplomacyAction = Literal["improve", "war", "peace", "alliance", "trade", "battle"]

_FAILURE_STATUS: dict[FailureReason, int] = {
    FailureReason.INSUFFICIENT_FUNDS: status.HTTP_409_CONFLICT,
    FailureReason.INSUFFICIENT_STOCK: status.HTTP_409_CONFLICT,
    FailureReason.INVALID_STATE: status.HTTP_409_CONFLICT,
    FailureReason.UNKNOWN_ENTITY: status.HTTP_404_NOT_FOUND,
    FailureReason.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
}


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


def _session(state: ApiState, kingdom_id: int) -> GameSession:
    try:
        return state.sessions.get(kingdom_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


def _active(session: GameSession) -> None:
    try:
        session.ensure_active()
    except GameOverError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


def _respond(result: ActionResult) -> ActionResultRead:
    if not result:
        code = _FAILURE_STATUS.get(result.reason, status.HTTP_400_BAD_REQUEST)
        raise HTTPException(
            status_code=code,
            detail={"reason": str(result.reason), "message": result.message, **result.details},
        )
    return ActionResultRead.model_validate(SessionService.to_result_dict(result))


async def _run_action(
    state: ApiState,
    kingdom_id: int,
    action: Callable[[GameSession], ActionResult],
) -> ActionResultRead:
    session = _session(state, kingdom_id)
    async with session.lock:
        _active(session)
        result = action(session)
    return _respond(result)


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "rules_version": state.settings.rules_version,
        "sessions": len(state.sessions.list_ids()),
    }


@router.post("/kingdoms", response_model=KingdomRead, status_code=status.HTTP_201_CREATED)
async def create_kingdom(request: KingdomCreate, state: ApiStateDep) -> KingdomRead:
    session = state.sessions.create(request.name, ruler_name=request.ruler_name, seed=request.seed)
    return KingdomRead.model_validate(state.sessions.to_kingdom_dict(session))


@router.get("/kingdoms/{kingdom_id}", response_model=KingdomRead)
async def get_kingdom(kingdom_id: int, state: ApiStateDep) -> KingdomRead:
    session = _session(state, kingdom_id)
    return KingdomRead.model_validate(state.sessions.to_kingdom_dict(session))


@router.post("/kingdoms/{kingdom_id}/advance", response_model=YearReportRead)
async def advance(kingdom_id: int, state: ApiStateDep) -> YearReportRead:
    session = _session(state, kingdom_id)
    async with session.lock:
        _active(session)
        report = advance_year(session.kingdom, session.rng, rules=session.rules)
    return YearReportRead.model_validate(state.sessions.to_report_dict(report))


@router.post("/kingdoms/{kingdom_id}/market/{side}", response_model=ActionResultRead)
async def trade(
    kingdom_id: int,
    side: Literal["buy", "sell"],
    request: TradeRequest,
    state: ApiStateDep,
) -> ActionResultRead:
    def action(session: GameSession) -> ActionResult:
        kingdom = session.kingdom
        if side == "buy":
            return market_rules.buy_resource(kingdom.market, request.resource, request.amount, kingdom.economy)
        return market_rules.sell_resource(
            kingdom.market, request.resource, request.amount, kingdom.economy, rules=session.rules
        )

    return await _run_action(state, kingdom_id, action)


@router.post("/kingdoms/{kingdom_id}/army/recruit", response_model=ActionResultRead)
async def recruit(kingdom_id: int, request: RecruitRequest, state: ApiStateDep) -> ActionResultRead:
    def action(session: GameSession) -> ActionResult:
        kingdom = session.kingdom
        return army_rules.recruit(
            kingdom.army, kingdom.economy, request.unit, request.count, rules=session.rules
        )

    return await _run_action(state, kingdom_id, action)


@router.post("/kingdoms/{kingdom_id}/army/train", response_model=ActionResultRead)
async def train(kingdom_id: int, state: ApiStateDep) -> ActionResultRead:
    return await _run_action(
        state,
        kingdom_id,
        lambda session: army_rules.train_army(
            session.kingdom.army,
            pacing_seconds=state.settings.pacing_seconds,
            rules=session.rules,
        ),
    )


@router.put("/kingdoms/{kingdom_id}/taxes", response_model=KingdomRead)
async def update_taxes(kingdom_id: int, request: TaxUpdate, state: ApiStateDep) -> KingdomRead:
    session = _session(state, kingdom_id)
    async with session.lock:
        _active(session)
        economy_rules.set_tax_rates(
            session.kingdom.economy,
            peasant=request.peasant,
            merchant=request.merchant,
            noble=request.noble,
        )
    return KingdomRead.model_validate(state.sessions.to_kingdom_dict(session))


@router.get("/kingdoms/{kingdom_id}/diplomacy", response_model=list[ForeignKingdomRead])
async def list_foreign_kingdoms(kingdom_id: int, state: ApiStateDep) -> list[ForeignKingdomRead]:
    session = _session(state, kingdom_id)
    return [
        ForeignKingdomRead.model_validate(state.sessions.to_foreign_dict(entry))
        for entry in session.kingdom.diplomacy.roster()
    ]


@router.post("/kingdoms/{kingdom_id}/diplomacy/{name}/{verb}", response_model=ActionResultRead)
async def diplomacy_action(
    kingdom_id: int,
    name: str,
    verb: DiplomacyAction,
    state: ApiStateDep,
) -> ActionResultRead:
    def action(session: GameSession) -> ActionResult:
        kingdom = session.kingdom
        roster = kingdom.diplomacy
        rules = session.rules
        if verb == "improve":
            return diplomacy_rules.improve_relations(roster, name, kingdom.economy, rules=rules)
        if verb == "war":
            return diplomacy_rules.declare_war(roster, name, kingdom.army, rules=rules)
        if verb == "peace":
            return diplomacy_rules.sign_peace(roster, name, kingdom.economy, kingdom.army, rules=rules)
        if verb == "alliance":
            return diplomacy_rules.form_alliance(roster, name, rules=rules)
        if verb == "trade":
            return diplomacy_rules.establish_trade(roster, name, kingdom.market, kingdom.economy, rules=rules)
        return diplomacy_rules.battle(roster, name, kingdom.army, rules=rules)

    return await _run_action(state, kingdom_id, action)


@router.post("/kingdoms/{kingdom_id}/bank/{operation}", response_model=ActionResultRead)
async def bank_operation(
    kingdom_id: int,
    operation: Literal["loan", "repay"],
    request: LoanRequest,
    state: ApiStateDep,
) -> ActionResultRead:
    def action(session: GameSession) -> ActionResult:
        kingdom = session.kingdom
        if operation == "loan":
            return bank_rules.take_loan(kingdom.bank, request.amount, kingdom.economy)
        return bank_rules.repay_loan(kingdom.bank, request.amount, kingdom.economy)

    return await _run_action(state, kingdom_id, action)


@router.post("/kingdoms/{kingdom_id}/elections", response_model=ActionResultRead)
async def elections(kingdom_id: int, state: ApiStateDep) -> ActionResultRead:
    return await _run_action(
        state,
        kingdom_id,
        lambda session: hold_elections(session.kingdom, session.rng, rules=session.rules),
    )


@router.post("/kingdoms/{kingdom_id}/ruler/action", response_model=ActionResultRead)
async def ruler_action(kingdom_id: int, state: ApiStateDep) -> ActionResultRead:
    return await _run_action(
        state,
        kingdom_id,
        lambda session: perform_ruler_action(
            session.kingdom,
            session.rng,
            pacing_seconds=state.settings.pacing_seconds,
            rules=session.rules,
        ),
    )


@router.post("/kingdoms/{kingdom_id}/events/trigger", response_model=EventOutcomeRead)
async def trigger(kingdom_id: int, state: ApiStateDep) -> EventOutcomeRead:
    session = _session(state, kingdom_id)
    async with session.lock:
        _active(session)
        outcome = trigger_event(session.kingdom, session.rng)
    return EventOutcomeRead.model_validate(state.sessions.to_event_dict(outcome))


@router.get("/kingdoms/{kingdom_id}/chronicle", response_model=list[ChronicleEntryRead])
async def chronicle(kingdom_id: int, state: ApiStateDep) -> list[ChronicleEntryRead]:
    session = _session(state, kingdom_id)
    return [
        ChronicleEntryRead(
            year=entry.year,
            kind=entry.kind,
            description=entry.description,
            details=entry.details,
        )
        for entry in session.kingdom.chronicle
    ]


@router.get("/saves", response_model=list[str])
async def list_saves(state: ApiStateDep) -> list[str]:
    return state.repository.list_slots()


@router.delete("/saves/{slot}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_save(slot: str, state: ApiStateDep) -> None:
    try:
        removed = state.repository.delete(slot)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"save slot {slot!r} not found")


@router.post("/kingdoms/{kingdom_id}/save", response_model=SaveSlotRead)
async def save_kingdom(kingdom_id: int, request: SaveRequest, state: ApiStateDep) -> SaveSlotRead:
    session = _session(state, kingdom_id)
    async with session.lock:
        try:
            path = state.repository.save(request.slot, session.kingdom, fmt=request.format)
        except SaveGameError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
            ) from exc
    return SaveSlotRead(slot=request.slot, path=str(path))


@router.post("/kingdoms/{kingdom_id}/load", response_model=KingdomRead)
async def load_kingdom(kingdom_id: int, request: LoadRequest, state: ApiStateDep) -> KingdomRead:
    session = _session(state, kingdom_id)
    async with session.lock:
        try:
            state.load_slot(session, request.slot)
        except FileNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        except SaveGameError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return KingdomRead.model_validate(state.sessions.to_kingdom_dict(session))
