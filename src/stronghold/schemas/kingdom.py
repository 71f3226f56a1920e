from __future__ import annotations

from pydantic import BaseModel, Field


class KingdomCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=64, pattern=r"^[^\r\n]+$", description="Kingdom name")
    ruler_name: str | None = Field(
        None,
        min_length=1,
        max_length=64,
        pattern=r"^[^\r\n]+$",
        description="Name of the founding king; the default king rules when omitted",
    )
    seed: str | None = Field(None, description="Seed for the session's random stream")


class RulerRead(BaseModel):
    name: str = Field(..., description="Ruler name")
    kind: str = Field(..., description="king, commander or guild_leader")
    charisma: int
    intelligence: int
    strength: int
    details: dict[str, object] = Field(default_factory=dict, description="Variant specific statistics")


class PopulationRead(BaseModel):
    peasants: int = Field(..., ge=0)
    merchants: int = Field(..., ge=0)
    nobles: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    growth_rate: float
    happiness: float = Field(..., ge=0.0, le=1.0)


class ArmyRead(BaseModel):
    infantry: int = Field(..., ge=0)
    cavalry: int = Field(..., ge=0)
    archers: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    morale: float = Field(..., ge=0.0, le=1.0)
    training_level: int = Field(..., ge=1)
    at_war: bool
    strength: int = Field(..., description="Weighted battle strength")


class EconomyRead(BaseModel):
    peasant_tax_rate: float
    merchant_tax_rate: float
    noble_tax_rate: float
    inflation: float
    treasury: int = Field(..., ge=0)
    debt: int = Field(..., ge=0)


class ResourceRead(BaseModel):
    name: str
    amount: int = Field(..., ge=0)
    value: float = Field(..., ge=0.0)


class BankRead(BaseModel):
    interest_rate: float
    max_loan_amount: int
    current_loans: int
    corruption_level: int


class KingdomRead(BaseModel):
    id: int = Field(..., description="Session identifier")
    name: str
    year: int = Field(..., ge=1)
    score: int = Field(..., description="Score as of the last yearly recompute")
    game_over: bool
    ruler: RulerRead
    population: PopulationRead
    army: ArmyRead
    economy: EconomyRead
    market: list[ResourceRead]
    bank: BankRead


class ChronicleEntryRead(BaseModel):
    year: int
    kind: str
    description: str
    details: dict[str, object] | None = None
