from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from flashcard_factory.config import CATEGORY_ORDER, Config, SettingsManager, get_category_label
from flashcard_factory.utils import setup_logger


def fresh_settings(path: Path) -> SettingsManager:
    SettingsManager.reset_instance()
    return SettingsManager(str(path))


def test_defaults(isolated_settings: SettingsManager) -> None:
    assert isolated_settings.get("STORAGE_BACKEND") == "json"
    assert isolated_settings.get("COLUMNS_PER_PAGE") == 2
    assert isolated_settings.get("ROWS_PER_COLUMN") == 4
    assert isolated_settings.get("AVOID_DUPLICATES") is True
    assert isolated_settings.get("GENERATION_DELAY") == 1.5
    assert isolated_settings.get("DEFAULT_COUNTS") == {"noun": 3, "adjective": 3, "verb": 2, "adverb": 2}


def test_singleton(isolated_settings: SettingsManager) -> None:
    assert SettingsManager() is isolated_settings


def test_env_overrides_are_typed(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AVOID_DUPLICATES", "no")
    monkeypatch.setenv("COLUMNS_PER_PAGE", "3")
    monkeypatch.setenv("ROWS_PER_COLUMN", "not-a-number")
    monkeypatch.setenv("GENERATION_DELAY", "0.25")
    monkeypatch.setenv("DEFAULT_COUNTS", '{"noun": 5}')
    monkeypatch.setenv("STORAGE_BACKEND", "sqlite")

    settings = fresh_settings(tmp_path / "env.json")

    assert settings.get("AVOID_DUPLICATES") is False
    assert settings.get("COLUMNS_PER_PAGE") == 3
    assert settings.get("ROWS_PER_COLUMN") == 4
    assert settings.get("GENERATION_DELAY") == 0.25
    assert settings.get("DEFAULT_COUNTS") == {"noun": 5}
    assert settings.get("STORAGE_BACKEND") == "sqlite"


def test_settings_persist_to_file(tmp_path: Path) -> None:
    path = tmp_path / "persist.json"
    fresh_settings(path).set("LOG_LEVEL", "DEBUG")

    assert json.loads(path.read_text(encoding="utf-8"))["LOG_LEVEL"] == "DEBUG"
    assert fresh_settings(path).get("LOG_LEVEL") == "DEBUG"


def test_corrupt_settings_file_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "corrupt.json"
    path.write_text("{oops", encoding="utf-8")
    assert fresh_settings(path).get("OUTPUT_DIR") == Config.OUTPUT_DIR


def test_get_returns_copies(isolated_settings: SettingsManager) -> None:
    counts = isolated_settings.get("DEFAULT_COUNTS")
    counts["noun"] = 99
    assert isolated_settings.get("DEFAULT_COUNTS")["noun"] == 3


def test_reset_single_key_and_all(isolated_settings: SettingsManager) -> None:
    isolated_settings.set("AVOID_DUPLICATES", False)
    isolated_settings.set("LOG_LEVEL", "ERROR")

    isolated_settings.reset("AVOID_DUPLICATES")
    assert isolated_settings.get("AVOID_DUPLICATES") is True
    assert isolated_settings.get("LOG_LEVEL") == "ERROR"

    isolated_settings.reset()
    assert isolated_settings.get_all() == SettingsManager.DEFAULTS


def test_category_labels() -> None:
    assert CATEGORY_ORDER == ["noun", "adjective", "verb", "adverb"]
    assert get_category_label("adverb") == "Adverbs"
    assert get_category_label("mystery") == "mystery"


def test_setup_logger_installs_one_handler(isolated_settings: SettingsManager) -> None:
    name = "flashcard_factory.test_logger"
    isolated_settings.set("LOG_LEVEL", "WARNING")

    logger = setup_logger(name)
    setup_logger(name, level="debug")

    handlers = [h for h in logger.handlers if getattr(h, "_flashcard_handler", False)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG


def test_reload_picks_up_file_edits(isolated_settings: SettingsManager) -> None:
    path = isolated_settings.settings_file
    data = json.loads(path.read_text(encoding="utf-8"))
    data["ROWS_PER_COLUMN"] = 5
    path.write_text(json.dumps(data), encoding="utf-8")

    isolated_settings.reload()
    assert isolated_settings.get("ROWS_PER_COLUMN") == 5
