from __future__ import annotations

from pathlib import Path

import pytest

from flashcard_factory.config import SettingsManager
from flashcard_factory.exceptions import PersistenceWriteError
from flashcard_factory.services import (
    JSONFileStore,
    MemoryStore,
    SQLiteStore,
    StorageBackend,
    create_store,
)


def test_memory_store_basics() -> None:
    store = MemoryStore({"a": "1"})
    store.set("b", "2")
    store.delete("a")
    store.delete("missing")

    assert store.get("a") is None
    assert store.get("b") == "2"
    assert "b" in store
    assert store.keys() == ["b"]


def test_json_store_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "store.json"
    JSONFileStore(str(path)).set("flashcard-sets", "[]")

    reopened = JSONFileStore(str(path))
    assert reopened.get("flashcard-sets") == "[]"
    assert reopened.keys() == ["flashcard-sets"]
    assert not list(path.parent.glob("*.tmp"))


def test_json_store_delete(tmp_path: Path) -> None:
    store = JSONFileStore(str(tmp_path / "store.json"))
    store.set("a", "1")
    store.set("b", "2")
    store.delete("a")
    assert store.keys() == ["b"]


@pytest.mark.parametrize("content", ["{broken", "[1, 2, 3]"])
def test_json_store_unreadable_file_reads_empty(tmp_path: Path, content: str) -> None:
    path = tmp_path / "store.json"
    path.write_text(content, encoding="utf-8")

    store = JSONFileStore(str(path))
    assert store.get("anything") is None
    assert store.keys() == []


def test_json_store_write_failure_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = JSONFileStore(str(blocker / "store.json"))

    with pytest.raises(PersistenceWriteError) as excinfo:
        store.set("flashcard-sets", "[]")
    assert excinfo.value.key == "flashcard-sets"


def test_sqlite_store_upsert_and_delete(tmp_path: Path) -> None:
    store = SQLiteStore(str(tmp_path / "cards.db"))
    store.set("b", "first")
    store.set("b", "second")
    store.set("a", "other")

    assert store.get("b") == "second"
    assert store.keys() == ["a", "b"]

    store.delete("b")
    assert store.get("b") is None
    assert "a" in SQLiteStore(str(tmp_path / "cards.db"))


def test_create_store_explicit_backends(tmp_path: Path) -> None:
    assert isinstance(create_store(StorageBackend.MEMORY), MemoryStore)

    sqlite_store = create_store(StorageBackend.SQLITE, str(tmp_path / "x.db"))
    assert isinstance(sqlite_store, SQLiteStore)
    assert sqlite_store.db_path == tmp_path / "x.db"


def test_create_store_uses_settings(isolated_settings: SettingsManager, tmp_path: Path) -> None:
    store = create_store()
    assert isinstance(store, JSONFileStore)
    assert store.file_path == tmp_path / "sets.json"

    isolated_settings.set("STORAGE_BACKEND", "memory")
    assert isinstance(create_store(), MemoryStore)
