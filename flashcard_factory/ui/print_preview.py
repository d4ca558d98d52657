"""
On-screen print preview.

Draws each PrintPage as a front sheet and a back sheet side by side. Slot
positions come straight from PrintPaginator, so the preview always agrees
with the exported PDF.
"""

from typing import List, Sequence

import flet as ft

from ..config import CATEGORY_CONFIG
from ..deck import PrintPage, PrintPaginator, Side, SlotPlacement
from ..models import CardRecord
from ..utils import TextParser
from .common import DesignTokens

SHEET_WIDTH = 220
CELL_HEIGHT = 64


def _cell(slot: SlotPlacement, side: Side) -> ft.Container:
    card = slot.card
    if side == Side.FRONT:
        color = CATEGORY_CONFIG.get(card.category.value, {}).get("color", DesignTokens.TEXT_SECONDARY)
        content = ft.Column(
            controls=[
                ft.Text(card.word, size=12, weight=ft.FontWeight.BOLD, color=ft.Colors.BLACK,
                        text_align=ft.TextAlign.CENTER),
                ft.Text(card.category.value, size=9, color=color, text_align=ft.TextAlign.CENTER),
            ],
            spacing=2,
            alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        )
    else:
        content = ft.Text(
            TextParser.truncate(card.definition, 60),
            size=9,
            color=ft.Colors.BLACK87,
        )
    return ft.Container(
        content=content,
        height=CELL_HEIGHT,
        expand=True,
        padding=4,
        border=ft.border.all(1, ft.Colors.BLACK38),
        alignment=ft.Alignment(0, 0),
        tooltip=f"#{slot.card_index + 1} {card.word}",
    )


def _empty_cell() -> ft.Container:
    return ft.Container(
        height=CELL_HEIGHT,
        expand=True,
        border=ft.border.all(1, ft.Colors.BLACK12),
    )


def build_sheet(page: PrintPage, side: Side, paginator: PrintPaginator) -> ft.Container:
    """One physical sheet: grid cells in column-major order."""
    columns = []
    for column in range(paginator.columns_per_page):
        cells = []
        for row in range(paginator.rows_per_column):
            slot = page.slot_at(side, column, row)
            cells.append(_cell(slot, side) if slot else _empty_cell())
        columns.append(ft.Column(controls=cells, spacing=0, expand=True))

    title = "Front" if side == Side.FRONT else "Back (print on reverse)"
    return ft.Container(
        content=ft.Column(
            controls=[
                ft.Text(f"Page {page.number} - {title}", size=11, color=ft.Colors.BLACK54),
                ft.Row(controls=columns, spacing=0),
            ],
            spacing=4,
        ),
        width=SHEET_WIDTH,
        padding=8,
        bgcolor=ft.Colors.WHITE,
        border_radius=4,
    )


def build_print_preview(deck: Sequence[CardRecord], paginator: PrintPaginator) -> ft.Control:
    """Scrollable column of front/back sheet pairs for the whole deck."""
    pages: List[PrintPage] = paginator.paginate(list(deck))
    rows = [
        ft.Row(
            controls=[
                build_sheet(page, Side.FRONT, paginator),
                build_sheet(page, Side.BACK, paginator),
            ],
            spacing=DesignTokens.SPACING_MD,
        )
        for page in pages
    ]
    summary = ft.Text(
        f"{len(deck)} cards on {len(pages)} page(s), {len(pages) * 2} sheets. "
        "Print double-sided, flipping on the long edge.",
        size=12,
        color=DesignTokens.TEXT_SECONDARY,
    )
    return ft.Column(
        controls=[summary, *rows],
        spacing=DesignTokens.SPACING_MD,
        scroll=ft.ScrollMode.AUTO,
        height=520,
        width=2 * SHEET_WIDTH + DesignTokens.SPACING_MD + 16,
    )
