from __future__ import annotations

import dataclasses
import random

import pytest

from flashcard_factory.models import CardRecord, Category, SavedSet, new_card_id


def test_category_parse_accepts_value_plural_and_member() -> None:
    assert Category.parse("noun") is Category.NOUN
    assert Category.parse("Adverbs") is Category.ADVERB
    assert Category.parse(" verb ") is Category.VERB
    assert Category.parse(Category.ADJECTIVE) is Category.ADJECTIVE
    assert str(Category.NOUN) == "noun"


def test_category_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        Category.parse("pronoun")


def test_new_card_id_is_reproducible_with_seeded_rng() -> None:
    first = new_card_id(random.Random(7))
    second = new_card_id(random.Random(7))
    assert first == second
    assert len(first) == 32
    int(first, 16)


def test_new_card_id_without_rng_is_unique() -> None:
    assert len({new_card_id() for _ in range(100)}) == 100


def test_card_record_cleans_fields() -> None:
    card = CardRecord(
        id="c1",
        word="  café ",
        definition="a   small\nrestaurant",
        example=None,
        category="Nouns",
        level="",
    )
    assert card.word == "café"
    assert card.definition == "a small restaurant"
    assert card.example == ""
    assert card.category is Category.NOUN
    assert card.level == "medium"
    assert card.is_valid


@pytest.mark.parametrize("word", ["null", "None", "nan", "NaN"])
def test_card_record_keeps_words_that_look_like_empty_values(word: str) -> None:
    card = CardRecord(id="c1", word=word, definition=word, example=word, level="none")
    assert card.word == word
    assert card.definition == word
    assert card.example == word
    assert card.level == "none"
    assert card.is_valid


def test_card_record_is_immutable() -> None:
    card = CardRecord(id="c1", word="laconic", definition="brief")
    with pytest.raises(dataclasses.FrozenInstanceError):
        card.word = ""  # type: ignore[misc]

    changed = card.with_changes(word="  terse ")
    assert changed.word == "terse"
    assert card.word == "laconic"


def test_card_record_without_definition_is_invalid() -> None:
    assert not CardRecord(id="c1", word="lonely", definition=" ").is_valid


def test_with_changes_keeps_id() -> None:
    card = CardRecord(id="keep", word="old", definition="d")
    changed = card.with_changes(id="other", word="new", category="verb")
    assert changed.id == "keep"
    assert changed.word == "new"
    assert changed.category is Category.VERB
    assert card.word == "old"


def test_to_dict_uses_plain_category_text() -> None:
    card = CardRecord(id="c1", word="w", definition="d", category=Category.ADVERB, level="ISEE")
    assert card.to_dict() == {
        "id": "c1",
        "word": "w",
        "definition": "d",
        "example": "",
        "category": "adverb",
        "level": "ISEE",
    }


def test_from_dict_accepts_legacy_keys() -> None:
    card = CardRecord.from_dict({
        "id": "42",
        "word": "ebullient",
        "definition": "cheerful and full of energy",
        "partOfSpeech": "adjective",
        "difficulty": "hard",
    })
    assert card.category is Category.ADJECTIVE
    assert card.level == "hard"


def test_saved_set_round_trip_preserves_order() -> None:
    cards = [
        CardRecord(id=str(i), word=f"w{i}", definition=f"d{i}", category=cat)
        for i, cat in enumerate(Category)
    ]
    restored = SavedSet.from_dict(SavedSet(name="Week 1", cards=cards).to_dict())
    assert restored.name == "Week 1"
    assert restored.cards == cards
