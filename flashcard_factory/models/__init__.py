"""Data models."""

from .card import EDITABLE_FIELDS, CardRecord, Category, SavedSet, new_card_id

__all__ = [
    'EDITABLE_FIELDS',
    'CardRecord',
    'Category',
    'SavedSet',
    'new_card_id',
]
