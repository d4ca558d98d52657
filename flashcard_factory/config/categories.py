"""Grammatical category configuration."""

CATEGORY_CONFIG = {
    "noun": {
        "label": "Nouns",
        "plural": "nouns",
        "recommended": 3,
        "color": "#64B5F6",
    },
    "adjective": {
        "label": "Adjectives",
        "plural": "adjectives",
        "recommended": 3,
        "color": "#81C784",
    },
    "verb": {
        "label": "Verbs",
        "plural": "verbs",
        "recommended": 2,
        "color": "#FFB74D",
    },
    "adverb": {
        "label": "Adverbs",
        "plural": "adverbs",
        "recommended": 2,
        "color": "#BA68C8",
    },
}

# Fixed display order (matches the generator screen)
CATEGORY_ORDER = ["noun", "adjective", "verb", "adverb"]


def get_recommended_counts() -> dict:
    """Recommended mix: 3 nouns, 3 adjectives, 2 verbs, 2 adverbs."""
    return {key: CATEGORY_CONFIG[key]["recommended"] for key in CATEGORY_ORDER}


def get_category_label(category: str) -> str:
    """Human readable plural label, falls back to the raw tag."""
    return CATEGORY_CONFIG.get(str(category), {}).get("label", str(category))
