from .slot_store import SaveSlotRepository

__all__ = ["SaveSlotRepository"]
