from __future__ import annotations

from pydantic import BaseModel, Field

from stronghold.domain.enums import UnitType
from stronghold.savegame import SaveFormat


class TradeRequest(BaseModel):
    resource: str = Field(..., min_length=1, description="Food, Wood, Stone or Iron")
    amount: int = Field(..., description="Units to buy or sell")


class RecruitRequest(BaseModel):
    unit: UnitType
    count: int = Field(..., description="Soldiers to hire")


class TaxUpdate(BaseModel):
    peasant: float | None = Field(None, ge=0.0, le=0.5)
    merchant: float | None = Field(None, ge=0.0, le=0.5)
    noble: float | None = Field(None, ge=0.0, le=0.5)


class LoanRequest(BaseModel):
    amount: int = Field(..., description="Gold to borrow or repay")


class SaveRequest(BaseModel):
    slot: str = Field(..., min_length=1, max_length=64, pattern=r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
    format: SaveFormat = SaveFormat.TEXT


class LoadRequest(BaseModel):
    slot: str = Field(..., min_length=1, max_length=64, pattern=r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


class PacingDelayRead(BaseModel):
    label: str
    steps: int
    seconds_per_step: float


class ActionResultRead(BaseModel):
    success: bool
    message: str
    details: dict[str, object] = Field(default_factory=dict)
    delay: PacingDelayRead | None = None


class EventOutcomeRead(BaseModel):
    event: str
    title: str
    description: str
    details: dict[str, object] = Field(default_factory=dict)


class YearReportRead(BaseModel):
    year: int
    taxes_collected: int
    event: EventOutcomeRead | None = None
    unrest: EventOutcomeRead | None = None
    messages: list[str] = Field(default_factory=list)
    score: int
    game_over: bool


class SaveSlotRead(BaseModel):
    slot: str
    path: str
