"""Configuration module for Flashcard Factory."""

from .settings import Config
from .categories import (
    CATEGORY_CONFIG,
    CATEGORY_ORDER,
    get_category_label,
    get_recommended_counts,
)
from .config_manager import SettingsManager

__all__ = [
    'Config',
    'CATEGORY_CONFIG',
    'CATEGORY_ORDER',
    'get_category_label',
    'get_recommended_counts',
    'SettingsManager',
]
