"""Text parsing utilities for consistent text processing across the application."""

import re
import unicodedata


class TextParser:
    """
    Centralized text cleanup for card fields.

    Every value that ends up on a card (typed by the user, read from the
    word bank CSV, or loaded from a saved set) passes through here.
    """

    # Whitespace normalization pattern
    WHITESPACE_PATTERN = re.compile(r'\s+')

    @classmethod
    def normalize_unicode(cls, text: str) -> str:
        """
        Normalize text to NFC form for consistent Unicode handling.

        Prevents issues with characters like é being represented as
        either a single codepoint (NFC) or base + combining accent (NFD).

        Args:
            text: Input text

        Returns:
            NFC-normalized text
        """
        if not text:
            return ""
        return unicodedata.normalize('NFC', str(text))

    @classmethod
    def clean_field(cls, value) -> str:
        """
        Clean a single card field.

        Strips surrounding whitespace and collapses internal runs of
        whitespace. None becomes "". Text such as "null" or "nan" is kept
        as written.

        Args:
            value: Raw field value (any type)

        Returns:
            Cleaned text
        """
        if value is None:
            return ""
        text = cls.normalize_unicode(str(value))
        return cls.WHITESPACE_PATTERN.sub(' ', text).strip()

    @classmethod
    def fold_word(cls, word: str) -> str:
        """Case-insensitive comparison key for a headword."""
        return cls.clean_field(word).lower()

    @classmethod
    def truncate(cls, text: str, max_length: int = 80) -> str:
        """Shorten text for compact previews, adding an ellipsis."""
        text = cls.clean_field(text)
        if len(text) <= max_length:
            return text
        return text[: max(max_length - 1, 0)].rstrip() + "…"
