from __future__ import annotations

from typing import List

import pytest

from flashcard_factory.deck import PrintPaginator, Side
from flashcard_factory.models import CardRecord


def make_deck(size: int) -> List[CardRecord]:
    return [CardRecord(id=f"id-{i}", word=f"word{i}", definition=f"definition {i}") for i in range(size)]


@pytest.mark.parametrize(
    "size, pages",
    [(0, 0), (1, 1), (8, 1), (9, 2), (16, 2), (17, 3), (80, 10)],
)
def test_page_count_is_ceiling_of_eight(size: int, pages: int) -> None:
    paginator = PrintPaginator()
    assert paginator.page_count(size) == pages
    assert len(paginator.paginate(make_deck(size))) == pages


def test_seventeen_cards_leave_one_on_the_last_page() -> None:
    deck = make_deck(17)
    pages = PrintPaginator().paginate(deck)

    last = pages[2]
    assert last.number == 3
    assert last.cards == [deck[16]]
    assert [(s.column, s.row) for s in last.front] == [(0, 0)]
    assert [(s.column, s.row) for s in last.back] == [(1, 0)]
    assert last.slot_at(Side.BACK, 0, 0) is None


def test_columns_fill_top_to_bottom_then_left_to_right() -> None:
    page = PrintPaginator().paginate(make_deck(8))[0]
    assert [(s.column, s.row) for s in page.front] == [
        (0, 0), (0, 1), (0, 2), (0, 3),
        (1, 0), (1, 1), (1, 2), (1, 3),
    ]
    assert page.slot_at(Side.FRONT, 1, 1).card.word == "word5"
    assert page.slot_at(Side.BACK, 0, 1).card.word == "word5"


@pytest.mark.parametrize("columns, rows", [(2, 4), (3, 3), (1, 5)])
def test_back_mirrors_column_and_keeps_row(columns: int, rows: int) -> None:
    paginator = PrintPaginator(columns, rows)
    for page in paginator.paginate(make_deck(2 * columns * rows + 1)):
        for front, back in zip(page.front, page.back):
            assert front.card is back.card
            assert back.row == front.row
            assert back.column == columns - 1 - front.column


def test_pages_keep_deck_order() -> None:
    deck = make_deck(20)
    pages = PrintPaginator().paginate(deck)
    assert [card for page in pages for card in page.cards] == deck


def test_place_for_single_slot() -> None:
    paginator = PrintPaginator()
    assert paginator.place(5, Side.FRONT) == (1, 1)
    assert paginator.place(5, Side.BACK) == (0, 1)


@pytest.mark.parametrize("columns, rows", [(0, 4), (2, 0), (-1, 1)])
def test_rejects_empty_grid(columns: int, rows: int) -> None:
    with pytest.raises(ValueError):
        PrintPaginator(columns, rows)
