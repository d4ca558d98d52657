"""
Word Bank - the static vocabulary catalog used by the auto generator.

The catalog ships with the package as a pipe-delimited CSV
(word|definition|example|category) and is read once with pandas.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Tuple

import pandas as pd

from ..config import CATEGORY_ORDER, Config
from ..exceptions import WordBankError
from ..models import CardRecord, Category
from ..utils.parsing import TextParser

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["word", "definition", "example", "category"]


@dataclass(frozen=True)
class WordEntry:
    """One catalog entry."""

    word: str
    definition: str
    example: str
    category: Category

    def to_card(self, card_id: str, level: str = Config.GENERATED_LEVEL) -> CardRecord:
        """Create a deck card from this entry."""
        return CardRecord(
            id=card_id,
            word=self.word,
            definition=self.definition,
            example=self.example,
            category=self.category,
            level=level,
        )


class WordBank:
    """
    Immutable catalog of vocabulary entries grouped by category.

    Usage:
        bank = WordBank.load()
        nouns = bank.words(Category.NOUN)
    """

    def __init__(self, entries: Iterable[WordEntry]):
        grouped: Dict[Category, list] = {Category(key): [] for key in CATEGORY_ORDER}
        for entry in entries:
            grouped[entry.category].append(entry)
        self._entries: Dict[Category, Tuple[WordEntry, ...]] = {
            category: tuple(items) for category, items in grouped.items()
        }

    @classmethod
    def load(cls, path: Optional[str] = None) -> "WordBank":
        """
        Load the catalog from a pipe-delimited CSV file.

        Args:
            path: CSV path (defaults to the bundled word list)

        Returns:
            Loaded WordBank

        Raises:
            WordBankError: if the file is missing, malformed, or has an
                unknown category
        """
        csv_path = Path(path or Config.WORD_BANK_FILE)
        if not csv_path.exists():
            raise WordBankError(f"Word bank not found: {csv_path}")

        try:
            df = pd.read_csv(
                csv_path,
                sep='|',
                encoding='utf-8-sig',
                quoting=3,  # csv.QUOTE_NONE
                dtype=str,
                keep_default_na=False,
            )
        except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
            raise WordBankError(f"Could not read word bank {csv_path}: {e}") from e

        df.columns = df.columns.str.strip().str.lower()
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise WordBankError(f"Word bank is missing columns: {', '.join(missing)}")

        entries = []
        for row in df.itertuples(index=False):
            word = TextParser.clean_field(row.word)
            if not word:
                continue
            try:
                category = Category.parse(row.category)
            except ValueError as e:
                raise WordBankError(f"Bad category for '{word}': {e}") from e
            entries.append(WordEntry(
                word=word,
                definition=TextParser.clean_field(row.definition),
                example=TextParser.clean_field(row.example),
                category=category,
            ))

        bank = cls(entries)
        logger.debug("Loaded %d words from %s", len(bank), csv_path)
        return bank

    def words(self, category) -> Tuple[WordEntry, ...]:
        """All entries of one category, in catalog order."""
        return self._entries.get(Category.parse(category), ())

    def categories(self) -> Tuple[Category, ...]:
        return tuple(self._entries)

    def counts(self) -> Dict[Category, int]:
        """Number of entries per category."""
        return {category: len(items) for category, items in self._entries.items()}

    def find(self, word: str) -> Optional[WordEntry]:
        """Exact headword lookup."""
        for entry in self:
            if entry.word == word:
                return entry
        return None

    def __iter__(self) -> Iterator[WordEntry]:
        for items in self._entries.values():
            yield from items

    def __len__(self) -> int:
        return sum(len(items) for items in self._entries.values())
