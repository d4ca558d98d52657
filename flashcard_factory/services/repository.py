"""
Repository Pattern - key-value persistence port.

The card store only needs "read a text value by key" and "write a text value
by key". Backends implement that contract so the storage can be swapped
(in-memory, JSON file, SQLite) without touching business logic.
"""

import json
import logging
import os
import sqlite3
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Generator, List, Optional

from ..config import Config, SettingsManager
from ..exceptions import PersistenceWriteError

logger = logging.getLogger(__name__)


class StorageBackend(Enum):
    """Available storage backends."""
    MEMORY = "memory"
    JSON = "json"
    SQLITE = "sqlite"


class BaseKeyValueStore(ABC):
    """
    Abstract base class for key-value stores.

    Values are opaque text. Writes that the backend rejects raise
    PersistenceWriteError; reads of a missing key return None.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key; no-op when absent."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """All stored keys."""
        pass

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class MemoryStore(BaseKeyValueStore):
    """In-process store. Contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class JSONFileStore(BaseKeyValueStore):
    """
    JSON file store.

    The whole file is one JSON object mapping keys to text values. Every
    write goes to a temp file that replaces the original atomically.
    """

    def __init__(self, file_path: Optional[str] = None):
        """
        Initialize JSON store.

        Args:
            file_path: Path to JSON file
        """
        self.file_path = Path(file_path or Config.STORAGE_FILE)

    def _read_all(self) -> Dict[str, str]:
        """Load the whole file; a missing or corrupt file reads as empty."""
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not read %s: %s", self.file_path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", self.file_path)
            return {}
        return data

    def _write_all(self, key: str, data: Dict[str, str]) -> None:
        """Atomic write: temp file + rename."""
        temp_file = self.file_path.with_name(f"{self.file_path.name}.{uuid.uuid4().hex[:8]}.tmp")
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_file, self.file_path)
        except OSError as e:
            if temp_file.exists():
                try:
                    temp_file.unlink()
                except OSError:
                    logger.debug("Could not remove temp file %s", temp_file)
            raise PersistenceWriteError(key, e) from e

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(key, data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(key, data)

    def keys(self) -> List[str]:
        return list(self._read_all())


class SQLiteStore(BaseKeyValueStore):
    """
    SQLite-based store.

    One row per key in a kv_store table; each write is its own transaction.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize SQLite store.

        Args:
            db_path: Path to SQLite database file
        """
        if db_path is None:
            db_path = str(Path(Config.DATA_DIR) / "flashcards.db")

        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get database connection with context manager."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT
                )
            """)
            conn.commit()

    def get(self, key: str) -> Optional[str]:
        try:
            with self._get_connection() as conn:
                row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
                return row["value"] if row else None
        except sqlite3.Error as e:
            logger.warning("Could not read '%s' from %s: %s", key, self.db_path, e)
            return None

    def set(self, key: str, value: str) -> None:
        try:
            with self._get_connection() as conn:
                conn.execute(
                    "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                    (key, value, datetime.now().isoformat()),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise PersistenceWriteError(key, e) from e

    def delete(self, key: str) -> None:
        try:
            with self._get_connection() as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                conn.commit()
        except sqlite3.Error as e:
            raise PersistenceWriteError(key, e) from e

    def keys(self) -> List[str]:
        try:
            with self._get_connection() as conn:
                return [row["key"] for row in conn.execute("SELECT key FROM kv_store ORDER BY key")]
        except sqlite3.Error as e:
            logger.warning("Could not list keys in %s: %s", self.db_path, e)
            return []


def create_store(
    backend: Optional[StorageBackend] = None,
    path: Optional[str] = None,
) -> BaseKeyValueStore:
    """
    Build the configured store.

    Args:
        backend: Backend to use (defaults to the STORAGE_BACKEND setting)
        path: File or database path (defaults to the STORAGE_PATH setting)

    Returns:
        A ready-to-use store
    """
    settings = SettingsManager()
    if backend is None:
        backend = StorageBackend(settings.get("STORAGE_BACKEND", StorageBackend.JSON.value))

    if backend == StorageBackend.MEMORY:
        return MemoryStore()
    if backend == StorageBackend.SQLITE:
        return SQLiteStore(path)
    return JSONFileStore(path or settings.get("STORAGE_PATH", Config.STORAGE_FILE))
