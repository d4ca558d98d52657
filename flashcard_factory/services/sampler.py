"""Card Sampler - random draws from the word bank."""

import logging
import random
from typing import Dict, Iterable, List, Mapping, Optional

from ..config import CATEGORY_ORDER, Config
from ..exceptions import EmptySelectionError, InsufficientWordsError
from ..models import CardRecord, Category, new_card_id
from .word_bank import WordBank

logger = logging.getLogger(__name__)


def normalize_counts(requested_counts: Mapping) -> Dict[Category, int]:
    """
    Validate per-category counts.

    Keys may be Category members or their text tags. Categories that are
    not mentioned count as 0.

    Raises:
        ValueError: on an unknown category or a negative / non-integer count
    """
    counts = {Category(key): 0 for key in CATEGORY_ORDER}
    for key, value in requested_counts.items():
        category = Category.parse(key)
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        if not is_number or (isinstance(value, float) and not value.is_integer()):
            raise ValueError(f"Count for {category} must be an integer, got {value!r}")
        if value < 0:
            raise ValueError(f"Count for {category} must be >= 0, got {value}")
        counts[category] = int(value)
    return counts


class CardSampler:
    """
    Selects random, duplicate-free cards from a WordBank.

    The random source is injected so draws are reproducible under test:

        sampler = CardSampler(WordBank.load(), rng=random.Random(7))
        deck = sampler.sample({"noun": 3, "adjective": 3, "verb": 2, "adverb": 2})
    """

    def __init__(self, word_bank: WordBank, rng: Optional[random.Random] = None):
        self.word_bank = word_bank
        self.rng = rng or random.Random()

    def sample(
        self,
        requested_counts: Mapping,
        exclude_words: Iterable[str] = (),
        avoid_duplicates: bool = True,
        accept_fewer: bool = True,
    ) -> List[CardRecord]:
        """
        Draw a shuffled deck.

        Args:
            requested_counts: {category: count}
            exclude_words: Headwords to skip when ``avoid_duplicates`` is set.
                Matching is case-sensitive on the raw headword.
            avoid_duplicates: Apply ``exclude_words``
            accept_fewer: Draw the whole pool when it is smaller than the
                request; otherwise raise InsufficientWordsError

        Returns:
            New CardRecords with fresh ids, in random order

        Raises:
            EmptySelectionError: nothing requested, or nothing could be drawn
            InsufficientWordsError: a pool is too small and accept_fewer is False
        """
        counts = normalize_counts(requested_counts)
        total_requested = sum(counts.values())
        if total_requested == 0:
            raise EmptySelectionError()

        excluded = set(exclude_words) if avoid_duplicates else set()
        drawn_words = set()
        selected = []

        for category, count in counts.items():
            if count == 0:
                continue

            pool = [
                entry for entry in self.word_bank.words(category)
                if entry.word not in excluded and entry.word not in drawn_words
            ]
            if len(pool) < count:
                if not accept_fewer:
                    raise InsufficientWordsError(category.value, count, len(pool))
                logger.info(
                    "Only %d eligible %s word(s) for %d requested; drawing all",
                    len(pool), category.value, count,
                )

            draw = self.rng.sample(pool, min(count, len(pool)))
            drawn_words.update(entry.word for entry in draw)
            selected.extend(draw)

        if not selected:
            raise EmptySelectionError(
                "No suitable words found. Try adjusting your selection or allowing duplicate words."
            )

        # Hide category order in the final deck
        self.rng.shuffle(selected)

        ids = set()
        cards = []
        for entry in selected:
            card_id = new_card_id(self.rng)
            while card_id in ids:
                card_id = new_card_id(self.rng)
            ids.add(card_id)
            cards.append(entry.to_card(card_id, level=Config.GENERATED_LEVEL))

        logger.info("Sampled %d of %d requested card(s)", len(cards), total_requested)
        return cards
