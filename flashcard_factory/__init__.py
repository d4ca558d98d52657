"""Flashcard Factory - vocabulary flashcards for double-sided printing"""

__version__ = "1.0.0"
__author__ = "Flashcard Factory Team"

from .config import Config, SettingsManager
from .models import CardRecord, Category, SavedSet
from .services import CardSampler, CardStore, WordBank, create_store
from .deck import PDFRenderer, PrintPaginator

__all__ = [
    'Config',
    'SettingsManager',
    'CardRecord',
    'Category',
    'SavedSet',
    'CardSampler',
    'CardStore',
    'WordBank',
    'create_store',
    'PDFRenderer',
    'PrintPaginator',
]
