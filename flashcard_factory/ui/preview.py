"""
Preview view.

Shows the working deck as a grid of flip cards and hosts every deck-level
action: edit, regenerate, remove, flip all, save / load / delete sets,
print preview and PDF export. Every FlashcardError is surfaced as a
snackbar; none of them leaves the deck half-changed.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, Optional, Set

import flet as ft

from ..config import CATEGORY_CONFIG, CATEGORY_ORDER, Config
from ..deck import PDFRenderer
from ..exceptions import FlashcardError
from ..models import CardRecord
from ..services import CardStore, WordBank
from ..utils import get_file_size_kb, pluralize
from .common import (
    DesignTokens,
    close_dialog,
    field_style,
    open_dialog,
    open_folder,
    primary_button_style,
    section_title,
    show_snackbar,
)
from .home import GENERATOR_VIEW, MANUAL_VIEW
from .print_preview import build_print_preview

logger = logging.getLogger(__name__)


class PreviewView:
    """Flip-card grid with deck actions."""

    def __init__(
        self,
        page: ft.Page,
        card_store: CardStore,
        word_bank: WordBank,
        renderer: PDFRenderer,
        navigate: Callable[[int], None],
    ) -> None:
        self.page = page
        self.card_store = card_store
        self.word_bank = word_bank
        self.renderer = renderer
        self.navigate = navigate

        self._flipped: Set[str] = set()
        self._all_flipped: bool = False
        self.is_exporting: bool = False

        # UI References
        self._grid: Optional[ft.GridView] = None
        self._count_text: Optional[ft.Text] = None
        self._empty_state: Optional[ft.Container] = None
        self._export_button: Optional[ft.ElevatedButton] = None
        self._flip_all_button: Optional[ft.OutlinedButton] = None

        self._container = self._build_view()
        self.card_store.on_change(self.refresh)
        self.refresh()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    # ==================== Layout ====================

    def _build_view(self) -> ft.Container:
        self._count_text = ft.Text("", size=14, color=DesignTokens.TEXT_SECONDARY)
        self._flip_all_button = ft.OutlinedButton(
            "Flip All",
            icon=ft.Icons.FLIP_ROUNDED,
            on_click=lambda _: self._flip_all(),
        )
        self._export_button = ft.ElevatedButton(
            "Export PDF",
            icon=ft.Icons.PICTURE_AS_PDF_ROUNDED,
            on_click=self._on_export_click,
            style=primary_button_style(),
        )

        toolbar = ft.Row(
            controls=[
                self._flip_all_button,
                ft.OutlinedButton("Save Set", icon=ft.Icons.SAVE_OUTLINED, on_click=lambda _: self._show_save_dialog()),
                ft.OutlinedButton("Load Set", icon=ft.Icons.FOLDER_OPEN_OUTLINED, on_click=lambda _: self._show_load_dialog()),
                ft.OutlinedButton("Print Preview", icon=ft.Icons.PRINT_OUTLINED, on_click=lambda _: self._show_print_preview()),
                self._export_button,
            ],
            spacing=DesignTokens.SPACING_SM,
            wrap=True,
        )

        self._grid = ft.GridView(
            expand=True,
            max_extent=300,
            child_aspect_ratio=1.35,
            spacing=DesignTokens.SPACING_MD,
            run_spacing=DesignTokens.SPACING_MD,
        )

        self._empty_state = ft.Container(
            content=ft.Column(
                controls=[
                    ft.Icon(ft.Icons.STYLE_OUTLINED, size=48, color=DesignTokens.TEXT_MUTED),
                    ft.Text("No flashcards yet", size=16, color=DesignTokens.TEXT_SECONDARY),
                    ft.Row(
                        controls=[
                            ft.TextButton("Enter manually", on_click=lambda _: self.navigate(MANUAL_VIEW)),
                            ft.TextButton("Auto generate", on_click=lambda _: self.navigate(GENERATOR_VIEW)),
                        ],
                        alignment=ft.MainAxisAlignment.CENTER,
                    ),
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=DesignTokens.SPACING_SM,
            ),
            alignment=ft.Alignment(0, 0),
            expand=True,
        )

        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Row(
                        controls=[
                            section_title("Preview", "Click a card to flip it. Edit or regenerate any card before printing."),
                            self._count_text,
                        ],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                        vertical_alignment=ft.CrossAxisAlignment.END,
                    ),
                    toolbar,
                    self._empty_state,
                    self._grid,
                ],
                spacing=DesignTokens.SPACING_MD,
                expand=True,
            ),
            expand=True,
        )

    def _build_card_tile(self, card: CardRecord) -> ft.Container:
        flipped = card.id in self._flipped
        color = CATEGORY_CONFIG.get(card.category.value, {}).get("color", DesignTokens.TEXT_SECONDARY)

        if flipped:
            face_controls = [
                ft.Text(card.definition, size=14, color=DesignTokens.TEXT_PRIMARY),
            ]
            if card.example:
                face_controls.append(
                    ft.Text(f'"{card.example}"', size=12, italic=True, color=DesignTokens.TEXT_SECONDARY)
                )
            face = ft.Column(controls=face_controls, spacing=DesignTokens.SPACING_SM, scroll=ft.ScrollMode.AUTO)
        else:
            face = ft.Column(
                controls=[
                    ft.Text(card.word, size=22, weight=ft.FontWeight.BOLD,
                            color=DesignTokens.TEXT_PRIMARY, text_align=ft.TextAlign.CENTER),
                    ft.Text(card.category.value, size=13, color=color),
                ],
                alignment=ft.MainAxisAlignment.CENTER,
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=DesignTokens.SPACING_XS,
            )

        actions = ft.Row(
            controls=[
                ft.Container(
                    content=ft.Text(card.level, size=11, color=DesignTokens.TEXT_TERTIARY),
                    padding=ft.Padding.symmetric(horizontal=8, vertical=2),
                    border=ft.border.all(1, ft.Colors.WHITE24),
                    border_radius=10,
                ),
                ft.Row(
                    controls=[
                        ft.IconButton(
                            icon=ft.Icons.EDIT_OUTLINED,
                            icon_size=18,
                            tooltip="Edit",
                            on_click=lambda _, card_id=card.id: self._show_edit_dialog(card_id),
                        ),
                        ft.IconButton(
                            icon=ft.Icons.REFRESH_ROUNDED,
                            icon_size=18,
                            tooltip="Regenerate from word bank",
                            on_click=lambda _, card_id=card.id: self._regenerate(card_id),
                        ),
                        ft.IconButton(
                            icon=ft.Icons.DELETE_OUTLINE,
                            icon_size=18,
                            icon_color=DesignTokens.ACCENT_DANGER,
                            tooltip="Remove",
                            on_click=lambda _, card_id=card.id: self._remove(card_id),
                        ),
                    ],
                    spacing=0,
                ),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        )

        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Container(content=face, expand=True, alignment=ft.Alignment(0, 0), on_click=lambda _, card_id=card.id: self._flip(card_id)),
                    actions,
                ],
                spacing=DesignTokens.SPACING_XS,
            ),
            padding=ft.Padding.only(left=16, right=8, top=16, bottom=4),
            bgcolor=DesignTokens.BG_CARD_BACK if flipped else DesignTokens.BG_CARD,
            border_radius=DesignTokens.RADIUS_MD,
            border=ft.border.only(left=ft.BorderSide(3, color)),
        )

    def refresh(self) -> None:
        """Rebuild the grid from the deck; the caller is responsible for page.update()."""
        cards = self.card_store.cards
        ids = {card.id for card in cards}
        self._flipped &= ids
        if not cards:
            self._all_flipped = False

        self._count_text.value = pluralize(len(cards), "flashcard")
        self._grid.controls = [self._build_card_tile(card) for card in cards]
        self._grid.visible = bool(cards)
        self._empty_state.visible = not cards
        self._flip_all_button.content = "Show Fronts" if self._all_flipped else "Flip All"
        self._export_button.disabled = not cards or self.is_exporting

    # ==================== Card actions ====================

    def _flip(self, card_id: str) -> None:
        if card_id in self._flipped:
            self._flipped.discard(card_id)
        else:
            self._flipped.add(card_id)
        self.refresh()
        self.page.update()

    def _flip_all(self) -> None:
        self._all_flipped = not self._all_flipped
        self._flipped = {card.id for card in self.card_store} if self._all_flipped else set()
        self.refresh()
        self.page.update()

    def _remove(self, card_id: str) -> None:
        self.card_store.remove(card_id)
        self.page.update()

    def _regenerate(self, card_id: str) -> None:
        try:
            card = self.card_store.regenerate(card_id, self.word_bank)
        except FlashcardError as e:
            show_snackbar(self.page, str(e), error=True, icon=ft.Icons.WARNING_AMBER)
            return
        self._flipped.discard(card_id)
        self.refresh()
        show_snackbar(self.page, f"Replaced with '{card.word}'", icon=ft.Icons.REFRESH_ROUNDED)

    def _show_edit_dialog(self, card_id: str) -> None:
        try:
            card = self.card_store.get(card_id)
        except FlashcardError as e:
            show_snackbar(self.page, str(e), error=True)
            return

        style = field_style()
        word_field = ft.TextField(label="Word", value=card.word, **style)
        definition_field = ft.TextField(
            label="Definition", value=card.definition, multiline=True, min_lines=2, max_lines=4, **style
        )
        example_field = ft.TextField(
            label="Example", value=card.example, multiline=True, min_lines=2, max_lines=4, **style
        )
        levels = list(Config.LEVELS)
        if card.level not in levels:
            levels.append(card.level)
        level_dropdown = ft.Dropdown(
            label="Level",
            value=card.level,
            options=[ft.dropdown.Option(level) for level in levels],
            width=180,
            **style,
        )
        category_dropdown = ft.Dropdown(
            label="Part of speech",
            value=card.category.value,
            options=[ft.dropdown.Option(key=key, text=key.capitalize()) for key in CATEGORY_ORDER],
            width=180,
            **style,
        )

        def save(e):
            patch = {
                "word": word_field.value or "",
                "definition": definition_field.value or "",
                "example": example_field.value or "",
                "category": category_dropdown.value,
                "level": level_dropdown.value or card.level,
            }
            try:
                updated = self.card_store.update(card_id, patch)
            except FlashcardError as err:
                show_snackbar(self.page, str(err), error=True, icon=ft.Icons.WARNING_AMBER)
                return
            close_dialog(self.page, dialog)
            show_snackbar(self.page, f"Updated '{updated.word}'")

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Edit Flashcard", weight=ft.FontWeight.W_700, size=18),
            content=ft.Column(
                controls=[
                    word_field,
                    definition_field,
                    example_field,
                    ft.Row(controls=[level_dropdown, category_dropdown], spacing=DesignTokens.SPACING_MD),
                ],
                spacing=DesignTokens.SPACING_MD,
                width=420,
                tight=True,
            ),
            actions=[
                ft.TextButton("Cancel", on_click=lambda _: close_dialog(self.page, dialog)),
                ft.ElevatedButton("Save", on_click=save, style=primary_button_style()),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        open_dialog(self.page, dialog)

    # ==================== Saved sets ====================

    def _show_save_dialog(self) -> None:
        if not len(self.card_store):
            show_snackbar(self.page, "Create some flashcards before saving a set.", error=True, icon=ft.Icons.INFO_OUTLINE)
            return

        name_field = ft.TextField(label="Set name", autofocus=True, **field_style())

        def save(e):
            try:
                saved = self.card_store.save_snapshot(name_field.value or "")
            except (FlashcardError, ValueError) as err:
                show_snackbar(self.page, str(err), error=True, icon=ft.Icons.WARNING_AMBER)
                return
            close_dialog(self.page, dialog)
            show_snackbar(self.page, f"Saved '{saved.name}' ({pluralize(len(saved.cards), 'card')})")

        name_field.on_submit = save
        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Save Flashcard Set", weight=ft.FontWeight.W_700, size=18),
            content=ft.Column(
                controls=[
                    ft.Text(
                        f"Saves the current {pluralize(len(self.card_store), 'card')}. "
                        "Saving under an existing name keeps both sets.",
                        size=13,
                        color=DesignTokens.TEXT_SECONDARY,
                    ),
                    name_field,
                ],
                width=380,
                tight=True,
            ),
            actions=[
                ft.TextButton("Cancel", on_click=lambda _: close_dialog(self.page, dialog)),
                ft.ElevatedButton("Save", icon=ft.Icons.SAVE_ROUNDED, on_click=save, style=primary_button_style()),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        open_dialog(self.page, dialog)

    def _show_load_dialog(self) -> None:
        set_list = ft.Column(spacing=DesignTokens.SPACING_SM, scroll=ft.ScrollMode.AUTO, height=320, width=420)

        def populate():
            snapshots = self.card_store.list_snapshots()
            if not snapshots:
                set_list.controls = [ft.Text("No saved sets yet.", color=DesignTokens.TEXT_TERTIARY)]
                return
            set_list.controls = [
                ft.Container(
                    content=ft.Row(
                        controls=[
                            ft.Column(
                                controls=[
                                    ft.Text(saved.name, size=14, weight=ft.FontWeight.W_600),
                                    ft.Text(pluralize(len(saved.cards), "card"), size=12, color=DesignTokens.TEXT_TERTIARY),
                                ],
                                spacing=2,
                                expand=True,
                            ),
                            ft.TextButton("Load", on_click=lambda _, name=saved.name, i=index: load(name, i)),
                            ft.IconButton(
                                icon=ft.Icons.DELETE_OUTLINE,
                                icon_color=DesignTokens.ACCENT_DANGER,
                                tooltip="Delete every set with this name",
                                on_click=lambda _, name=saved.name: delete(name),
                            ),
                        ],
                    ),
                    padding=ft.Padding.symmetric(horizontal=12, vertical=6),
                    bgcolor=DesignTokens.BG_ELEVATED,
                    border_radius=DesignTokens.RADIUS_SM,
                )
                for index, saved in enumerate(snapshots)
            ]

        def load(name: str, index: int):
            try:
                cards = self.card_store.load_snapshot(name, index=index)
            except FlashcardError as err:
                show_snackbar(self.page, str(err), error=True)
                return
            self._flipped.clear()
            self._all_flipped = False
            self.refresh()
            close_dialog(self.page, dialog)
            show_snackbar(self.page, f"Loaded '{name}' ({pluralize(len(cards), 'card')})")

        def delete(name: str):
            try:
                self.card_store.delete_snapshot(name)
            except FlashcardError as err:
                show_snackbar(self.page, str(err), error=True)
                return
            populate()
            show_snackbar(self.page, f"Deleted '{name}'", icon=ft.Icons.DELETE_OUTLINE)

        populate()
        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Saved Sets", weight=ft.FontWeight.W_700, size=18),
            content=set_list,
            actions=[ft.TextButton("Close", on_click=lambda _: close_dialog(self.page, dialog))],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        open_dialog(self.page, dialog)

    # ==================== Print & export ====================

    def _show_print_preview(self) -> None:
        if not len(self.card_store):
            show_snackbar(self.page, "No cards to preview.", error=True, icon=ft.Icons.INFO_OUTLINE)
            return

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Print Preview", weight=ft.FontWeight.W_700, size=18),
            content=build_print_preview(self.card_store.cards, self.renderer.paginator),
            actions=[
                ft.TextButton("Close", on_click=lambda _: close_dialog(self.page, dialog)),
                ft.ElevatedButton(
                    "Export PDF",
                    icon=ft.Icons.PICTURE_AS_PDF_ROUNDED,
                    on_click=lambda e: (close_dialog(self.page, dialog), self._on_export_click(e)),
                    style=primary_button_style(),
                ),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        open_dialog(self.page, dialog)

    def _on_export_click(self, e) -> None:
        if self.is_exporting:
            return
        if not len(self.card_store):
            show_snackbar(self.page, "No cards to export. Please create some flashcards first.", error=True)
            return
        self.page.run_task(self._export_async)

    async def _export_async(self) -> None:
        """Render in a worker thread so the UI keeps repainting."""
        self.is_exporting = True
        self._export_button.disabled = True
        self.page.update()

        try:
            path = await asyncio.to_thread(self.renderer.export, list(self.card_store.cards))
        except FlashcardError as err:
            logger.error("PDF export failed: %s", err)
            show_snackbar(self.page, str(err), error=True)
            return
        finally:
            self.is_exporting = False
            self._export_button.disabled = not len(self.card_store)
            self.page.update()

        self._show_export_dialog(path)

    def _show_export_dialog(self, path: Path) -> None:
        pages = self.renderer.paginator.page_count(len(self.card_store))

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Row(
                controls=[
                    ft.Icon(ft.Icons.CHECK_CIRCLE, color=DesignTokens.ACCENT_SUCCESS, size=28),
                    ft.Text("PDF Ready", weight=ft.FontWeight.W_700, size=18),
                ],
                spacing=12,
            ),
            content=ft.Column(
                controls=[
                    ft.Text(
                        f"{pages * 2} pages ({get_file_size_kb(str(path)):.1f} KB)",
                        size=14,
                        color=DesignTokens.TEXT_SECONDARY,
                    ),
                    ft.Text(str(path), size=12, selectable=True, color=DesignTokens.TEXT_TERTIARY),
                    ft.Text(
                        "Print double-sided and flip on the long edge so each definition lands behind its word.",
                        size=12,
                        color=DesignTokens.TEXT_TERTIARY,
                    ),
                ],
                tight=True,
                width=420,
            ),
            actions=[
                ft.TextButton(
                    "Open Folder",
                    icon=ft.Icons.FOLDER_OPEN,
                    on_click=lambda _: (open_folder(os.path.dirname(str(path))), close_dialog(self.page, dialog)),
                ),
                ft.ElevatedButton("Done", on_click=lambda _: close_dialog(self.page, dialog), style=primary_button_style()),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        open_dialog(self.page, dialog)
