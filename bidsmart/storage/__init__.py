"""Persistent key-value store for project and case lists."""

from bidsmart.storage.store import (
    LoadResult,
    MemorySlotBackend,
    SlotBackend,
    SqlSlotBackend,
    StoreAdapter,
)

__all__ = [
    "LoadResult",
    "MemorySlotBackend",
    "SlotBackend",
    "SqlSlotBackend",
    "StoreAdapter",
]
