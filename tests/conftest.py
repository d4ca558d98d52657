from __future__ import annotations

import random
from pathlib import Path
from typing import Iterator

import pytest

from flashcard_factory.config import SettingsManager
from flashcard_factory.models import Category
from flashcard_factory.services import CardStore, MemoryStore, WordBank, WordEntry


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[SettingsManager]:
    """Fresh settings singleton backed by a temp file, with no env overrides."""
    for key in SettingsManager.DEFAULTS:
        monkeypatch.delenv(key, raising=False)

    SettingsManager.reset_instance()
    settings = SettingsManager(str(tmp_path / "settings.json"))
    settings.set("STORAGE_PATH", str(tmp_path / "sets.json"))
    settings.set("OUTPUT_DIR", str(tmp_path / "output"))
    yield settings
    SettingsManager.reset_instance()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture(scope="session")
def word_bank() -> WordBank:
    return WordBank.load()


def make_entry(word: str, category: Category, definition: str = "") -> WordEntry:
    return WordEntry(
        word=word,
        definition=definition or f"meaning of {word}",
        example=f"An example with {word}.",
        category=category,
    )


@pytest.fixture
def tiny_bank() -> WordBank:
    """Small hand-made bank: 4 nouns, 3 adjectives, 2 verbs, 1 adverb."""
    return WordBank(
        [make_entry(w, Category.NOUN) for w in ("apple", "Banana", "cherry", "date")]
        + [make_entry(w, Category.ADJECTIVE) for w in ("brave", "calm", "eager")]
        + [make_entry(w, Category.VERB) for w in ("run", "swim")]
        + [make_entry("quickly", Category.ADVERB)]
    )


@pytest.fixture
def card_store(memory_store: MemoryStore, rng: random.Random) -> CardStore:
    return CardStore(memory_store, rng=rng)
