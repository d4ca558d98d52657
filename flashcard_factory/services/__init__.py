"""Services layer for business logic separation."""

from .word_bank import WordBank, WordEntry
from .sampler import CardSampler, normalize_counts
from .repository import (
    BaseKeyValueStore,
    JSONFileStore,
    MemoryStore,
    SQLiteStore,
    StorageBackend,
    create_store,
)
from .card_store import CardStore

__all__ = [
    "WordBank",
    "WordEntry",
    "CardSampler",
    "normalize_counts",
    "BaseKeyValueStore",
    "JSONFileStore",
    "MemoryStore",
    "SQLiteStore",
    "StorageBackend",
    "create_store",
    "CardStore",
]
