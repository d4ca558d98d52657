"""
Print Paginator - duplex page layout.

Splits a deck into fixed-size pages and assigns every card a grid slot on
the front sheet and on the back sheet. Columns fill top to bottom, left to
right. The back sheet mirrors the column (row unchanged) so that after a
left-right flip of the printed sheet each card's back lands behind its front.

Both the on-screen print preview and the PDF export use this module; neither
computes slot positions on its own.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from ..config import Config
from ..models import CardRecord


class Side(Enum):
    """Which face of the printed sheet."""
    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class SlotPlacement:
    """A card placed at a (column, row) cell of one side of a page."""

    card: CardRecord
    card_index: int
    column: int
    row: int
    side: Side


@dataclass
class PrintPage:
    """One logical page: up to cards_per_page cards, front and back."""

    index: int
    cards: List[CardRecord]
    front: List[SlotPlacement] = field(default_factory=list)
    back: List[SlotPlacement] = field(default_factory=list)

    @property
    def number(self) -> int:
        """1-based page number for display."""
        return self.index + 1

    def slots(self, side: Side) -> List[SlotPlacement]:
        return self.front if side == Side.FRONT else self.back

    def slot_at(self, side: Side, column: int, row: int) -> Optional[SlotPlacement]:
        """The placement occupying a cell, or None when the cell is empty."""
        for slot in self.slots(side):
            if slot.column == column and slot.row == row:
                return slot
        return None


class PrintPaginator:
    """
    Lays out a deck for double-sided printing.

    Usage:
        paginator = PrintPaginator()            # 2 columns x 4 rows
        pages = paginator.paginate(deck)
        for slot in pages[0].back:
            print(slot.card.word, slot.column, slot.row)
    """

    def __init__(
        self,
        columns_per_page: int = Config.COLUMNS_PER_PAGE,
        rows_per_column: int = Config.ROWS_PER_COLUMN,
    ):
        if columns_per_page < 1 or rows_per_column < 1:
            raise ValueError(
                f"Layout needs at least one column and one row, "
                f"got {columns_per_page}x{rows_per_column}"
            )
        self.columns_per_page = columns_per_page
        self.rows_per_column = rows_per_column

    @property
    def cards_per_page(self) -> int:
        return self.columns_per_page * self.rows_per_column

    def page_count(self, card_count: int) -> int:
        """ceil(card_count / cards_per_page); 0 for an empty deck."""
        return math.ceil(max(card_count, 0) / self.cards_per_page)

    def place(self, card_index: int, side: Side) -> tuple:
        """
        Grid cell of the card_index-th card on a page.

        Returns:
            (column, row); the back side mirrors the column
        """
        column = card_index // self.rows_per_column
        row = card_index % self.rows_per_column
        if side == Side.BACK:
            column = self.columns_per_page - 1 - column
        return column, row

    def paginate(self, deck: Sequence[CardRecord]) -> List[PrintPage]:
        """
        Split a deck into print pages.

        Args:
            deck: Cards in print order

        Returns:
            One PrintPage per cards_per_page cards; the last may be partial.
            An empty deck gives an empty list.
        """
        pages = []
        per_page = self.cards_per_page
        for page_index in range(self.page_count(len(deck))):
            start = page_index * per_page
            page_cards = list(deck[start:min(start + per_page, len(deck))])
            page = PrintPage(index=page_index, cards=page_cards)

            for card_index, card in enumerate(page_cards):
                for side in (Side.FRONT, Side.BACK):
                    column, row = self.place(card_index, side)
                    page.slots(side).append(
                        SlotPlacement(card=card, card_index=card_index, column=column, row=row, side=side)
                    )
            pages.append(page)
        return pages
