from __future__ import annotations

import random
from collections import Counter

import pytest

from flashcard_factory.config import get_recommended_counts
from flashcard_factory.exceptions import EmptySelectionError, InsufficientWordsError
from flashcard_factory.models import Category
from flashcard_factory.services import CardSampler, WordBank, normalize_counts


def test_recommended_mix_yields_ten_cards(word_bank: WordBank, rng: random.Random) -> None:
    deck = CardSampler(word_bank, rng=rng).sample({"noun": 3, "adjective": 3, "verb": 2, "adverb": 2})

    assert len(deck) == 10
    counts = Counter(card.category for card in deck)
    assert counts == {Category.NOUN: 3, Category.ADJECTIVE: 3, Category.VERB: 2, Category.ADVERB: 2}
    assert len({card.id for card in deck}) == 10
    assert len({card.word for card in deck}) == 10
    assert all(card.level == "ISEE" for card in deck)
    assert all(word_bank.find(card.word) is not None for card in deck)


def test_recommended_counts_match_default_mix() -> None:
    assert get_recommended_counts() == {"noun": 3, "adjective": 3, "verb": 2, "adverb": 2}


def test_same_seed_gives_same_deck(word_bank: WordBank) -> None:
    request = {"noun": 4, "verb": 4}
    first = CardSampler(word_bank, rng=random.Random(99)).sample(request)
    second = CardSampler(word_bank, rng=random.Random(99)).sample(request)
    assert [c.to_dict() for c in first] == [c.to_dict() for c in second]


def test_zero_total_raises_empty_selection(word_bank: WordBank) -> None:
    with pytest.raises(EmptySelectionError):
        CardSampler(word_bank).sample({"noun": 0, "adjective": 0, "verb": 0, "adverb": 0})


def test_empty_mapping_raises_empty_selection(word_bank: WordBank) -> None:
    with pytest.raises(EmptySelectionError):
        CardSampler(word_bank).sample({})


def test_short_pool_draws_everything_by_default(tiny_bank: WordBank, rng: random.Random) -> None:
    deck = CardSampler(tiny_bank, rng=rng).sample({"adverb": 5, "verb": 1})
    words = Counter(card.category for card in deck)
    assert words == {Category.ADVERB: 1, Category.VERB: 1}
    assert len(deck) <= 6


def test_short_pool_raises_when_fewer_not_accepted(tiny_bank: WordBank) -> None:
    with pytest.raises(InsufficientWordsError) as excinfo:
        CardSampler(tiny_bank).sample({"adjective": 5}, accept_fewer=False)
    assert excinfo.value.category == "adjective"
    assert excinfo.value.requested == 5
    assert excinfo.value.available == 3


def test_everything_excluded_raises_empty_selection(tiny_bank: WordBank) -> None:
    with pytest.raises(EmptySelectionError, match="No suitable words"):
        CardSampler(tiny_bank).sample({"adverb": 1}, exclude_words=["quickly"])


def test_exclusion_is_case_sensitive(tiny_bank: WordBank, rng: random.Random) -> None:
    # "banana" does not exclude "Banana"; "apple" excludes "apple"
    deck = CardSampler(tiny_bank, rng=rng).sample(
        {"noun": 4}, exclude_words=["banana", "apple", "cherry", "date"]
    )
    assert [card.word for card in deck] == ["Banana"]


def test_exclusion_ignored_without_avoid_duplicates(tiny_bank: WordBank, rng: random.Random) -> None:
    deck = CardSampler(tiny_bank, rng=rng).sample(
        {"noun": 4}, exclude_words=["apple", "Banana", "cherry", "date"], avoid_duplicates=False
    )
    assert sorted(card.word for card in deck) == ["Banana", "apple", "cherry", "date"]


def test_result_never_exceeds_request(tiny_bank: WordBank) -> None:
    for seed in range(20):
        deck = CardSampler(tiny_bank, rng=random.Random(seed)).sample(
            {"noun": 2, "adjective": 2, "verb": 2, "adverb": 2}
        )
        assert len(deck) == 7
        assert len({card.word for card in deck}) == len(deck)


def test_normalize_counts_validation() -> None:
    assert normalize_counts({"nouns": 2}) == {
        Category.NOUN: 2,
        Category.ADJECTIVE: 0,
        Category.VERB: 0,
        Category.ADVERB: 0,
    }
    with pytest.raises(ValueError):
        normalize_counts({"noun": -1})
    with pytest.raises(ValueError):
        normalize_counts({"noun": 1.5})
    with pytest.raises(ValueError):
        normalize_counts({"pronoun": 1})
    assert normalize_counts({"verb": 2.0})[Category.VERB] == 2


@pytest.mark.parametrize("value", [None, "three", "3", float("nan"), float("inf"), True])
def test_normalize_counts_rejects_non_numbers(value: object) -> None:
    with pytest.raises(ValueError, match="must be an integer"):
        normalize_counts({"noun": value})
