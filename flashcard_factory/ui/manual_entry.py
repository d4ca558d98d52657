"""
Manual Entry view: type cards one at a time.

Cards are appended straight to the working deck; the list on the right
mirrors the deck and lets the user drop entries before finishing.
"""

import logging
from typing import Callable, Optional

import flet as ft

from ..config import CATEGORY_CONFIG, CATEGORY_ORDER, Config
from ..exceptions import FlashcardError
from ..models import CardRecord
from ..services import CardStore
from ..utils import TextParser, pluralize
from .common import DesignTokens, field_style, primary_button_style, section_title, show_snackbar
from .home import PREVIEW_VIEW

logger = logging.getLogger(__name__)


class ManualEntryView:
    """Form for hand-written flashcards."""

    def __init__(self, page: ft.Page, card_store: CardStore, navigate: Callable[[int], None]) -> None:
        self.page = page
        self.card_store = card_store
        self.navigate = navigate

        self._word_field: Optional[ft.TextField] = None
        self._definition_field: Optional[ft.TextField] = None
        self._example_field: Optional[ft.TextField] = None
        self._level_dropdown: Optional[ft.Dropdown] = None
        self._category_dropdown: Optional[ft.Dropdown] = None
        self._card_list: Optional[ft.ListView] = None
        self._count_text: Optional[ft.Text] = None

        self._container = self._build_view()
        self.card_store.on_change(self.refresh)
        self.refresh()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def _build_view(self) -> ft.Container:
        style = field_style()
        self._word_field = ft.TextField(label="Word", autofocus=True, **style)
        self._definition_field = ft.TextField(
            label="Definition", multiline=True, min_lines=2, max_lines=4, **style
        )
        self._example_field = ft.TextField(
            label="Example sentence (optional)", multiline=True, min_lines=2, max_lines=4, **style
        )
        self._level_dropdown = ft.Dropdown(
            label="Level",
            value=Config.DEFAULT_LEVEL,
            options=[ft.dropdown.Option(level) for level in Config.LEVELS],
            width=200,
            **style,
        )
        self._category_dropdown = ft.Dropdown(
            label="Part of speech",
            value=CATEGORY_ORDER[0],
            options=[
                ft.dropdown.Option(key=key, text=key.capitalize())
                for key in CATEGORY_ORDER
            ],
            width=200,
            **style,
        )

        form = ft.Container(
            content=ft.Column(
                controls=[
                    self._word_field,
                    self._definition_field,
                    self._example_field,
                    ft.Row(
                        controls=[self._level_dropdown, self._category_dropdown],
                        spacing=DesignTokens.SPACING_MD,
                    ),
                    ft.Row(
                        controls=[
                            ft.ElevatedButton(
                                "Add Card",
                                icon=ft.Icons.ADD_ROUNDED,
                                on_click=lambda _: self._add_card(),
                                style=primary_button_style(),
                                height=DesignTokens.BUTTON_HEIGHT_MD,
                            ),
                            ft.TextButton("Clear Form", on_click=lambda _: self._clear_form()),
                        ],
                        spacing=DesignTokens.SPACING_MD,
                    ),
                ],
                spacing=DesignTokens.SPACING_MD,
            ),
            padding=DesignTokens.SPACING_LG,
            bgcolor=DesignTokens.BG_CARD,
            border_radius=DesignTokens.RADIUS_LG,
            expand=3,
        )

        self._count_text = ft.Text("", size=14, weight=ft.FontWeight.W_600, color=DesignTokens.TEXT_PRIMARY)
        self._card_list = ft.ListView(spacing=DesignTokens.SPACING_SM, expand=True)

        deck_panel = ft.Container(
            content=ft.Column(
                controls=[
                    self._count_text,
                    self._card_list,
                    ft.ElevatedButton(
                        "Finish & Preview",
                        icon=ft.Icons.CHECK_ROUNDED,
                        on_click=lambda _: self._finish(),
                        style=ft.ButtonStyle(
                            bgcolor=DesignTokens.ACCENT_SUCCESS,
                            color=DesignTokens.BG_PRIMARY,
                        ),
                        height=DesignTokens.BUTTON_HEIGHT_MD,
                    ),
                ],
                spacing=DesignTokens.SPACING_MD,
                expand=True,
            ),
            padding=DesignTokens.SPACING_LG,
            bgcolor=DesignTokens.BG_CARD,
            border_radius=DesignTokens.RADIUS_LG,
            expand=2,
        )

        return ft.Container(
            content=ft.Column(
                controls=[
                    section_title("Manual Entry", "Add as many cards as you like, then preview and print."),
                    ft.Row(
                        controls=[form, deck_panel],
                        spacing=DesignTokens.SPACING_LG,
                        vertical_alignment=ft.CrossAxisAlignment.START,
                        expand=True,
                    ),
                ],
                spacing=DesignTokens.SPACING_LG,
                expand=True,
            ),
            expand=True,
        )

    def _build_card_row(self, card: CardRecord) -> ft.Container:
        color = CATEGORY_CONFIG.get(card.category.value, {}).get("color", DesignTokens.TEXT_SECONDARY)
        return ft.Container(
            content=ft.Row(
                controls=[
                    ft.Column(
                        controls=[
                            ft.Text(card.word, size=14, weight=ft.FontWeight.W_600, color=DesignTokens.TEXT_PRIMARY),
                            ft.Text(
                                f"{card.category.value} · {card.level} · {TextParser.truncate(card.definition, 48)}",
                                size=12,
                                color=color,
                            ),
                        ],
                        spacing=2,
                        expand=True,
                    ),
                    ft.IconButton(
                        icon=ft.Icons.DELETE_OUTLINE,
                        icon_color=DesignTokens.ACCENT_DANGER,
                        icon_size=18,
                        tooltip="Remove",
                        on_click=lambda _, card_id=card.id: self._remove_card(card_id),
                    ),
                ],
            ),
            padding=ft.Padding.symmetric(horizontal=12, vertical=8),
            bgcolor=DesignTokens.BG_ELEVATED,
            border_radius=DesignTokens.RADIUS_SM,
        )

    # ==================== Actions ====================

    def _add_card(self) -> None:
        try:
            card = self.card_store.create(
                word=self._word_field.value or "",
                definition=self._definition_field.value or "",
                example=self._example_field.value or "",
                category=self._category_dropdown.value or CATEGORY_ORDER[0],
                level=self._level_dropdown.value or Config.DEFAULT_LEVEL,
            )
        except FlashcardError as e:
            show_snackbar(self.page, str(e), error=True, icon=ft.Icons.WARNING_AMBER)
            return

        logger.info("Added manual card '%s'", card.word)
        self._clear_form()
        show_snackbar(self.page, f"Added '{card.word}'")

    def _remove_card(self, card_id: str) -> None:
        self.card_store.remove(card_id)
        self.page.update()

    def _clear_form(self) -> None:
        self._word_field.value = ""
        self._definition_field.value = ""
        self._example_field.value = ""
        self.page.update()

    def _finish(self) -> None:
        if not len(self.card_store):
            show_snackbar(self.page, "Add at least one card first.", error=True, icon=ft.Icons.INFO_OUTLINE)
            return
        self.navigate(PREVIEW_VIEW)

    def refresh(self) -> None:
        """Rebuild the deck list; the caller is responsible for page.update()."""
        self._count_text.value = f"Your deck: {pluralize(len(self.card_store), 'card')}"
        self._card_list.controls = [self._build_card_row(card) for card in self.card_store]
