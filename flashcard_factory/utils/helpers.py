"""Utility functions."""

from pathlib import Path


def ensure_dir(path: str) -> None:
    """Ensure directory exists."""
    Path(path).mkdir(parents=True, exist_ok=True)


def get_file_size_kb(path: str) -> float:
    """Get file size in kilobytes."""
    if not Path(path).exists():
        return 0.0
    return Path(path).stat().st_size / 1024


def pluralize(count: int, noun: str) -> str:
    """'1 flashcard', '3 flashcards'."""
    return f"{count} {noun}{'' if count == 1 else 's'}"
