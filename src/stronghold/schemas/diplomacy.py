from __future__ import annotations

from pydantic import BaseModel, Field


class ForeignKingdomRead(BaseModel):
    name: str = Field(..., description="Realm name, used as its identifier")
    strength: int
    relation_level: int = Field(..., ge=-10, le=10)
    standing: str = Field(..., description="Friendly, Cordial, Neutral, Suspicious or Hostile")
    status: str = Field(..., description="At War, Allied or Peaceful")
    is_ally: bool
    at_war: bool
