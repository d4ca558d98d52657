"""Error taxonomy for Flashcard Factory.

Every error here is recoverable: the UI catches ``FlashcardError`` and shows
it as a snackbar. No error leaves a deck or a saved set half-updated.
"""

from typing import Optional


class FlashcardError(Exception):
    """Base class for all application errors."""


class EmptySelectionError(FlashcardError):
    """Nothing was requested, or nothing could be drawn."""

    def __init__(self, message: str = "Select at least one word from any part of speech."):
        super().__init__(message)


class InsufficientWordsError(FlashcardError):
    """A category pool holds fewer eligible words than requested."""

    def __init__(self, category: str, requested: int, available: int):
        self.category = category
        self.requested = requested
        self.available = available
        super().__init__(
            f"Only {available} {category} word(s) available, {requested} requested."
        )


class NoAvailableWordsError(FlashcardError):
    """Regenerate found no unused word of the card's category."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"No more {category} words available in the word bank.")


class CardNotFoundError(FlashcardError):
    """No card with the given id in the deck."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Card not found: {card_id}")


class SnapshotNotFoundError(CardNotFoundError):
    """No saved set with the given name."""

    def __init__(self, name: str):
        self.name = name
        FlashcardError.__init__(self, f"Saved set not found: {name}")
        self.card_id = None


class InvalidCardError(FlashcardError, ValueError):
    """A card is missing its word or definition, or reuses an id."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class WordBankError(FlashcardError):
    """The bundled word list could not be loaded."""


class PersistenceWriteError(FlashcardError):
    """The backing key-value store rejected a write."""

    def __init__(self, key: str, reason: Exception):
        self.key = key
        self.reason = reason
        super().__init__(f"Could not write '{key}': {reason}")


class RenderError(FlashcardError):
    """PDF generation failed; no file was written."""
