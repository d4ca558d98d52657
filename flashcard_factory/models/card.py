"""Data models for Flashcard Factory."""

import random
import uuid
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config import Config
from ..utils.parsing import TextParser


class Category(str, Enum):
    """Grammatical category of a card."""
    NOUN = "noun"
    ADJECTIVE = "adjective"
    VERB = "verb"
    ADVERB = "adverb"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "Category":
        """Accept a Category, its value, or its plural form ('nouns')."""
        if isinstance(value, cls):
            return value
        text = TextParser.clean_field(value).lower()
        if text.endswith("s") and text[:-1] in cls._value2member_map_:
            text = text[:-1]
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown category: {value!r}") from None


def new_card_id(rng: Optional[random.Random] = None) -> str:
    """
    Generate an opaque card id.

    Draws from ``rng`` when given so seeded sessions are reproducible.
    """
    if rng is None:
        return uuid.uuid4().hex
    return uuid.UUID(int=rng.getrandbits(128), version=4).hex


# Fields a user may change on an existing card
EDITABLE_FIELDS = ("word", "definition", "example", "category", "level")


@dataclass(frozen=True)
class CardRecord:
    """A single two-sided flashcard. Change it with with_changes()."""

    id: str
    word: str
    definition: str
    example: str = ""
    category: Category = Category.NOUN
    level: str = Config.DEFAULT_LEVEL

    def __post_init__(self) -> None:
        # Frozen, so cleaned values go through object.__setattr__
        object.__setattr__(self, "word", TextParser.clean_field(self.word))
        object.__setattr__(self, "definition", TextParser.clean_field(self.definition))
        object.__setattr__(self, "example", TextParser.clean_field(self.example))
        object.__setattr__(self, "category", Category.parse(self.category))
        object.__setattr__(self, "level", TextParser.clean_field(self.level) or Config.DEFAULT_LEVEL)

    @property
    def is_valid(self) -> bool:
        """Word and definition are both present."""
        return bool(self.word) and bool(self.definition)

    def with_changes(self, **changes: Any) -> "CardRecord":
        """Return a copy with the given fields replaced; the id never changes."""
        changes.pop("id", None)
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data["category"] = self.category.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CardRecord":
        """Build a record from stored data, accepting legacy browser keys."""
        return cls(
            id=str(data.get("id") or new_card_id()),
            word=data.get("word", ""),
            definition=data.get("definition", ""),
            example=data.get("example", ""),
            category=data.get("category", data.get("partOfSpeech", Category.NOUN)),
            level=data.get("level", data.get("difficulty", Config.DEFAULT_LEVEL)),
        )


@dataclass
class SavedSet:
    """A named deck snapshot."""

    name: str
    cards: List[CardRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "cards": [card.to_dict() for card in self.cards]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedSet":
        return cls(
            name=str(data.get("name", "")),
            cards=[CardRecord.from_dict(card) for card in data.get("cards", [])],
        )
