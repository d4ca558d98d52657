"""
Home view: pick manual entry or auto generation.
"""

from typing import Callable, Optional

import flet as ft

from ..services import CardStore
from ..utils import pluralize
from .common import DesignTokens, section_title

HOME_VIEW = 0
MANUAL_VIEW = 1
GENERATOR_VIEW = 2
PREVIEW_VIEW = 3


class HomeView:
    """Landing screen with the two creation modes and a shortcut to the deck."""

    def __init__(self, page: ft.Page, card_store: CardStore, navigate: Callable[[int], None]) -> None:
        self.page = page
        self.card_store = card_store
        self.navigate = navigate

        self._ready_text: Optional[ft.Text] = None
        self._ready_button: Optional[ft.ElevatedButton] = None

        self._container = self._build_view()
        self.card_store.on_change(self.refresh)
        self.refresh()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def _build_view(self) -> ft.Container:
        header = section_title(
            "Flashcard Factory",
            "Create vocabulary cards by hand or draw them from the ISEE word bank, then print them double-sided.",
        )

        mode_row = ft.Row(
            controls=[
                self._build_mode_tile(
                    icon=ft.Icons.EDIT_NOTE_ROUNDED,
                    title="Manual Entry",
                    description="Type your own words, definitions and example sentences.",
                    target=MANUAL_VIEW,
                ),
                self._build_mode_tile(
                    icon=ft.Icons.AUTO_AWESOME,
                    title="Auto Generate",
                    description="Pick how many nouns, adjectives, verbs and adverbs to draw at random.",
                    target=GENERATOR_VIEW,
                ),
            ],
            spacing=DesignTokens.SPACING_LG,
        )

        self._ready_text = ft.Text("", size=14, color=DesignTokens.TEXT_SECONDARY)
        self._ready_button = ft.ElevatedButton(
            "Open Preview",
            icon=ft.Icons.VIEW_MODULE_ROUNDED,
            on_click=lambda _: self.navigate(PREVIEW_VIEW),
            style=ft.ButtonStyle(
                bgcolor=DesignTokens.ACCENT_SECONDARY,
                color=DesignTokens.TEXT_PRIMARY,
            ),
        )
        ready_row = ft.Row(
            controls=[
                ft.Icon(ft.Icons.STYLE_ROUNDED, color=DesignTokens.ACCENT_SUCCESS, size=22),
                self._ready_text,
                self._ready_button,
            ],
            spacing=DesignTokens.SPACING_MD,
            vertical_alignment=ft.CrossAxisAlignment.CENTER,
        )

        return ft.Container(
            content=ft.Column(
                controls=[
                    header,
                    ft.Container(height=DesignTokens.SPACING_LG),
                    mode_row,
                    ft.Container(height=DesignTokens.SPACING_LG),
                    ready_row,
                ],
                spacing=0,
            ),
            expand=True,
        )

    def _build_mode_tile(self, icon: str, title: str, description: str, target: int) -> ft.Container:
        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Icon(icon, size=40, color=ft.Colors.INDIGO_200),
                    ft.Text(title, size=18, weight=ft.FontWeight.W_600, color=DesignTokens.TEXT_PRIMARY),
                    ft.Text(description, size=13, color=DesignTokens.TEXT_TERTIARY),
                ],
                spacing=DesignTokens.SPACING_SM,
            ),
            width=320,
            padding=DesignTokens.SPACING_LG,
            bgcolor=DesignTokens.BG_CARD,
            border_radius=DesignTokens.RADIUS_LG,
            border=ft.border.all(1, ft.Colors.WHITE10),
            ink=True,
            on_click=lambda _: self.navigate(target),
        )

    def refresh(self) -> None:
        """Sync the deck counter; the caller is responsible for page.update()."""
        count = len(self.card_store)
        self._ready_text.value = (
            f"{pluralize(count, 'flashcard')} ready" if count else "No flashcards yet"
        )
        self._ready_button.visible = count > 0
