from __future__ import annotations

from pathlib import Path

import pytest

from flashcard_factory.exceptions import WordBankError
from flashcard_factory.models import Category
from flashcard_factory.services import WordBank


def write_csv(path: Path, text: str) -> str:
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_bundled_word_bank_counts(word_bank: WordBank) -> None:
    assert len(word_bank) == 163
    assert word_bank.counts() == {
        Category.NOUN: 51,
        Category.ADJECTIVE: 41,
        Category.VERB: 51,
        Category.ADVERB: 20,
    }


def test_bundled_entries_are_complete(word_bank: WordBank) -> None:
    for entry in word_bank:
        assert entry.word
        assert entry.definition
        assert entry.example


def test_bundled_headwords_are_unique(word_bank: WordBank) -> None:
    words = [entry.word for entry in word_bank]
    assert len(words) == len(set(words))


def test_find_and_to_card(word_bank: WordBank) -> None:
    entry = word_bank.find("acumen")
    assert entry is not None
    assert entry.category is Category.NOUN

    card = entry.to_card("abc")
    assert card.id == "abc"
    assert card.word == "acumen"
    assert card.level == "ISEE"
    assert word_bank.find("not-a-word") is None


def test_words_accepts_text_category(word_bank: WordBank) -> None:
    assert word_bank.words("verbs") == word_bank.words(Category.VERB)


def test_load_skips_blank_rows_and_strips_header(tmp_path: Path) -> None:
    path = write_csv(
        tmp_path / "bank.csv",
        " Word |Definition|Example|Category\n"
        "serene|calm and peaceful||adjective\n"
        "|orphan definition||noun\n",
    )
    bank = WordBank.load(path)
    assert len(bank) == 1
    entry = bank.find("serene")
    assert entry.example == ""
    assert entry.category is Category.ADJECTIVE


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(WordBankError):
        WordBank.load(str(tmp_path / "absent.csv"))


def test_load_missing_column_raises(tmp_path: Path) -> None:
    path = write_csv(tmp_path / "bank.csv", "word|definition\nserene|calm\n")
    with pytest.raises(WordBankError, match="category"):
        WordBank.load(path)


def test_load_unknown_category_raises(tmp_path: Path) -> None:
    path = write_csv(
        tmp_path / "bank.csv",
        "word|definition|example|category\nthey|some people||pronoun\n",
    )
    with pytest.raises(WordBankError, match="they"):
        WordBank.load(path)


def test_categories_keep_fixed_order(tiny_bank: WordBank) -> None:
    assert tiny_bank.categories() == (Category.NOUN, Category.ADJECTIVE, Category.VERB, Category.ADVERB)
    assert [entry.word for entry in tiny_bank.words("noun")] == ["apple", "Banana", "cherry", "date"]
