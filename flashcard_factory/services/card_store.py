"""
Card Store - the working deck plus named snapshot persistence.

The deck lives in memory and is owned by the active session. Saved sets are
kept in the injected key-value store as one JSON list under a single key;
every snapshot mutation rewrites that whole list.
"""

import json
import logging
import random
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..config import Config
from ..exceptions import (
    CardNotFoundError,
    InvalidCardError,
    NoAvailableWordsError,
    SnapshotNotFoundError,
)
from ..models import EDITABLE_FIELDS, CardRecord, Category, SavedSet, new_card_id
from ..utils.parsing import TextParser
from .repository import BaseKeyValueStore
from .word_bank import WordBank

logger = logging.getLogger(__name__)


class CardStore:
    """
    Ordered deck with append / update / remove / regenerate and snapshots.

    Usage:
        store = CardStore(JSONFileStore())
        store.create("laconic", "using very few words", category="adjective")
        store.save_snapshot("Week 1")
    """

    def __init__(
        self,
        store: BaseKeyValueStore,
        rng: Optional[random.Random] = None,
        cards: Optional[Iterable[CardRecord]] = None,
        storage_key: str = Config.STORAGE_KEY,
    ):
        """
        Initialize card store.

        Args:
            store: Key-value backend for saved sets
            rng: Random source for ids and regeneration
            cards: Initial deck
            storage_key: Key holding the serialized saved sets
        """
        self.store = store
        self.rng = rng or random.Random()
        self.storage_key = storage_key
        self._cards: List[CardRecord] = []
        self._change_callbacks: List[Callable[[], None]] = []
        if cards:
            self.replace_all(cards)

    # ==================== Change notification ====================

    def on_change(self, callback: Callable[[], None]) -> None:
        """
        Register a callback for deck changes.

        Args:
            callback: Function to call when the deck changes
        """
        self._change_callbacks.append(callback)

    def _notify_change(self) -> None:
        for callback in self._change_callbacks:
            callback()

    # ==================== Deck access ====================

    @property
    def cards(self) -> Tuple[CardRecord, ...]:
        """Snapshot of the current deck, in order."""
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[CardRecord]:
        return iter(tuple(self._cards))

    def _index_of(self, card_id: str) -> int:
        for index, card in enumerate(self._cards):
            if card.id == card_id:
                return index
        raise CardNotFoundError(card_id)

    def get(self, card_id: str) -> CardRecord:
        """
        Get a card by id.

        Raises:
            CardNotFoundError: if no card has this id
        """
        return self._cards[self._index_of(card_id)]

    def words(self) -> List[str]:
        """Headwords of the current deck, in order."""
        return [card.word for card in self._cards]

    @staticmethod
    def _validate(card: CardRecord) -> None:
        if not card.word:
            raise InvalidCardError("A card needs a word.", field="word")
        if not card.definition:
            raise InvalidCardError("A card needs a definition.", field="definition")

    # ==================== Deck mutation ====================

    def append(self, record: CardRecord) -> CardRecord:
        """
        Add a card to the end of the deck.

        Raises:
            InvalidCardError: blank word/definition, or id already in the deck
        """
        self._validate(record)
        if any(card.id == record.id for card in self._cards):
            raise InvalidCardError(f"Duplicate card id: {record.id}", field="id")
        self._cards.append(record)
        self._notify_change()
        return record

    def create(
        self,
        word: str,
        definition: str,
        example: str = "",
        category: Any = Category.NOUN,
        level: str = Config.DEFAULT_LEVEL,
    ) -> CardRecord:
        """Build a new card with a fresh id and append it."""
        card = CardRecord(
            id=new_card_id(self.rng),
            word=word,
            definition=definition,
            example=example,
            category=category,
            level=level,
        )
        return self.append(card)

    def update(self, card_id: str, patch: Mapping[str, Any]) -> CardRecord:
        """
        Apply field changes to one card.

        The patched card is validated before it replaces the old one, so a
        failed update leaves the deck untouched.

        Args:
            card_id: Card to change
            patch: {field: value} limited to word, definition, example,
                category, level

        Returns:
            The updated card

        Raises:
            CardNotFoundError: if no card has this id
            InvalidCardError: unknown field, bad category, or blank word/definition
        """
        index = self._index_of(card_id)
        unknown = [key for key in patch if key not in EDITABLE_FIELDS]
        if unknown:
            raise InvalidCardError(f"Cannot edit field(s): {', '.join(unknown)}")

        try:
            updated = self._cards[index].with_changes(**dict(patch))
        except ValueError as e:
            raise InvalidCardError(str(e), field="category") from e
        self._validate(updated)

        self._cards[index] = updated
        self._notify_change()
        return updated

    def remove(self, card_id: str) -> None:
        """Remove a card; no-op when the id is not in the deck."""
        before = len(self._cards)
        self._cards = [card for card in self._cards if card.id != card_id]
        if len(self._cards) != before:
            self._notify_change()

    def replace_all(self, records: Iterable[CardRecord]) -> None:
        """
        Replace the whole deck.

        Raises:
            InvalidCardError: if any record is invalid or ids repeat
        """
        records = list(records)
        seen = set()
        for record in records:
            self._validate(record)
            if record.id in seen:
                raise InvalidCardError(f"Duplicate card id: {record.id}", field="id")
            seen.add(record.id)
        self._cards = records
        self._notify_change()

    def clear(self) -> None:
        """Empty the deck."""
        self.replace_all([])

    def regenerate(self, card_id: str, word_bank: WordBank) -> CardRecord:
        """
        Swap a card for a random unused word of the same category.

        Every headword already in the deck is excluded, compared
        case-insensitively. The card keeps its id and category.

        Raises:
            CardNotFoundError: if no card has this id
            NoAvailableWordsError: every word of the category is in the deck
        """
        index = self._index_of(card_id)
        current = self._cards[index]

        in_deck = {TextParser.fold_word(card.word) for card in self._cards}
        available = [
            entry for entry in word_bank.words(current.category)
            if TextParser.fold_word(entry.word) not in in_deck
        ]
        if not available:
            raise NoAvailableWordsError(current.category.value)

        entry = self.rng.choice(available)
        regenerated = entry.to_card(current.id, level=Config.GENERATED_LEVEL)
        self._cards[index] = regenerated
        self._notify_change()
        logger.info("Regenerated %s card: %s -> %s", current.category.value, current.word, entry.word)
        return regenerated

    # ==================== Snapshot persistence ====================

    def _read_sets(self) -> List[Dict[str, Any]]:
        raw = self.store.get(self.storage_key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Saved sets under '%s' are corrupt, ignoring: %s", self.storage_key, e)
            return []
        if not isinstance(data, list):
            logger.warning("Saved sets under '%s' are not a list, ignoring", self.storage_key)
            return []
        return [item for item in data if isinstance(item, dict)]

    def _write_sets(self, sets: List[Dict[str, Any]]) -> None:
        self.store.set(self.storage_key, json.dumps(sets, ensure_ascii=False))

    def save_snapshot(self, name: str, deck: Optional[Iterable[CardRecord]] = None) -> SavedSet:
        """
        Append a named snapshot of a deck (the current deck by default).

        Saving under an existing name adds a second entry; nothing is
        overwritten.

        Raises:
            ValueError: blank name
            PersistenceWriteError: the store rejected the write
        """
        name = TextParser.clean_field(name)
        if not name:
            raise ValueError("Please enter a name for your set.")

        cards = list(self._cards if deck is None else deck)
        saved = SavedSet(name=name, cards=cards)

        sets = self._read_sets()
        sets.append(saved.to_dict())
        self._write_sets(sets)
        logger.info("Saved set '%s' with %d card(s)", name, len(cards))
        return saved

    def list_snapshots(self) -> List[SavedSet]:
        """All saved sets, oldest first."""
        snapshots = []
        for item in self._read_sets():
            try:
                snapshots.append(SavedSet.from_dict(item))
            except ValueError as e:
                logger.warning("Skipping unreadable saved set %r: %s", item.get("name"), e)
        return snapshots

    def load_snapshot(self, name: str, index: Optional[int] = None) -> List[CardRecord]:
        """
        Make a saved set the current deck.

        Args:
            name: Set name
            index: Position in list_snapshots() of the exact set to load.
                Without it the first set with this name is loaded.

        Returns:
            The loaded cards

        Raises:
            SnapshotNotFoundError: no set has this name, or the set at
                ``index`` has a different name
        """
        name = TextParser.clean_field(name)
        snapshots = self.list_snapshots()
        if index is not None:
            candidates = snapshots[index:index + 1] if 0 <= index < len(snapshots) else []
        else:
            candidates = snapshots

        for saved in candidates:
            if saved.name == name:
                self.replace_all(saved.cards)
                logger.info("Loaded set '%s' with %d card(s)", name, len(saved.cards))
                return list(saved.cards)
        raise SnapshotNotFoundError(name)

    def delete_snapshot(self, name: str) -> None:
        """Remove every saved set with this name; no-op when none match."""
        name = TextParser.clean_field(name)
        sets = self._read_sets()
        remaining = [item for item in sets if item.get("name") != name]
        if len(remaining) != len(sets):
            self._write_sets(remaining)
            logger.info("Deleted set '%s'", name)

    def saved_words(self) -> List[str]:
        """Headwords across all saved sets."""
        return [card.word for saved in self.list_snapshots() for card in saved.cards]
