"""UI components for Flashcard Factory."""

from .common import DesignTokens, show_snackbar
from .home import GENERATOR_VIEW, HOME_VIEW, MANUAL_VIEW, PREVIEW_VIEW, HomeView
from .manual_entry import ManualEntryView
from .auto_generator import AutoGeneratorView
from .preview import PreviewView
from .print_preview import build_print_preview

__all__ = [
    'DesignTokens',
    'show_snackbar',
    'HOME_VIEW',
    'MANUAL_VIEW',
    'GENERATOR_VIEW',
    'PREVIEW_VIEW',
    'HomeView',
    'ManualEntryView',
    'AutoGeneratorView',
    'PreviewView',
    'build_print_preview',
]
