from .actions import (
    ActionResultRead,
    EventOutcomeRead,
    LoadRequest,
    LoanRequest,
    PacingDelayRead,
    RecruitRequest,
    SaveRequest,
    SaveSlotRead,
    TaxUpdate,
    TradeRequest,
    YearReportRead,
)
from .diplomacy import ForeignKingdomRead
from .kingdom import (
    ArmyRead,
    BankRead,
    ChronicleEntryRead,
    EconomyRead,
    KingdomCreate,
    KingdomRead,
    PopulationRead,
    ResourceRead,
    RulerRead,
)

__all__ = [
    "ActionResultRead",
    "ArmyRead",
    "BankRead",
    "ChronicleEntryRead",
    "EconomyRead",
    "EventOutcomeRead",
    "ForeignKingdomRead",
    "KingdomCreate",
    "KingdomRead",
    "LoadRequest",
    "LoanRequest",
    "PacingDelayRead",
    "PopulationRead",
    "RecruitRequest",
    "ResourceRead",
    "RulerRead",
    "SaveRequest",
    "SaveSlotRead",
    "TaxUpdate",
    "TradeRequest",
    "YearReportRead",
]
