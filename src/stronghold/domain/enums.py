"""Enumerations used across the Stronghold domain."""

from __future__ import annotations

from enum import StrEnum


class ResourceKind(StrEnum):
    """Goods held by the kingdom market."""

    FOOD = "Food"
    GOLD = "Gold"
    WOOD = "Wood"
    STONE = "Stone"
    IRON = "Iron"

    @classmethod
    def parse(cls, name: str) -> ResourceKind | None:
        """Resolve a player supplied resource name, ignoring case and padding."""

        wanted = name.strip().lower()
        for kind in cls:
            if kind.value.lower() == wanted:
                return kind
        return None


class LeaderKind(StrEnum):
    """Ruler variants."""

    KING = "king"
    COMMANDER = "commander"
    GUILD_LEADER = "guild_leader"


class GuildType(StrEnum):
    """Guilds a guild leader may represent."""

    MERCHANTS = "Merchants"
    CRAFTSMEN = "Craftsmen"
    FARMERS = "Farmers"


class UnitType(StrEnum):
    """Troop categories of the royal army."""

    INFANTRY = "infantry"
    CAVALRY = "cavalry"
    ARCHERS = "archers"


class EventType(StrEnum):
    """Catalog of random events, in roll order."""

    PLAGUE = "plague"
    GOOD_HARVEST = "good_harvest"
    DROUGHT = "drought"
    FOREIGN_INVASION = "foreign_invasion"
    REBELLION = "rebellion"
    ASSASSINATION = "assassination"
    DISCOVERY = "discovery"
    FESTIVAL = "festival"
    FIRE = "fire"
    EARTHQUAKE = "earthquake"


class RelationStanding(StrEnum):
    """Human readable label for a relation level."""

    FRIENDLY = "Friendly"
    CORDIAL = "Cordial"
    NEUTRAL = "Neutral"
    SUSPICIOUS = "Suspicious"
    HOSTILE = "Hostile"


class FailureReason(StrEnum):
    """Why a player action was refused."""

    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_STOCK = "insufficient_stock"
    UNKNOWN_ENTITY = "unknown_entity"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_STATE = "invalid_state"
