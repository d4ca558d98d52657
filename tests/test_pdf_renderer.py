from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pytest

from flashcard_factory.config import SettingsManager
from flashcard_factory.deck import PageLayout, PDFRenderer, PrintPaginator
from flashcard_factory.deck import pdf_renderer
from flashcard_factory.exceptions import RenderError
from flashcard_factory.models import CardRecord, Category


def make_deck(size: int) -> List[CardRecord]:
    return [
        CardRecord(
            id=f"id-{i}",
            word=f"perspicacious{i}",
            definition="Having a ready insight into and understanding of things " * 3,
            example="Her perspicacious remarks impressed the whole committee.",
            category=list(Category)[i % 4],
        )
        for i in range(size)
    ]


def test_layout_geometry_for_letter_page() -> None:
    layout = PageLayout()
    assert layout.card_width == pytest.approx(288.0)
    assert layout.card_height == pytest.approx(181.5)
    assert layout.slot_rect(0, 0) == pytest.approx((18.0, 562.5, 288.0, 181.5))
    assert layout.slot_rect(1, 3) == pytest.approx((306.0, 18.0, 288.0, 181.5))


def test_mirrored_back_slot_lines_up_after_flip() -> None:
    layout = PageLayout()
    paginator = PrintPaginator()
    page = paginator.paginate(make_deck(8))[0]
    for front, back in zip(page.front, page.back):
        fx, fy, w, _ = layout.slot_rect(front.column, front.row)
        bx, by, _, _ = layout.slot_rect(back.column, back.row)
        # flipping left-right maps x to page_width - x - w
        assert bx == pytest.approx(layout.page_width - fx - w)
        assert by == pytest.approx(fy)


def test_render_returns_pdf_bytes() -> None:
    data = PDFRenderer().render(make_deck(9))
    assert data.startswith(b"%PDF")
    assert data.rstrip().endswith(b"%%EOF")


def test_render_reports_progress() -> None:
    events: List[Dict[str, Any]] = []
    PDFRenderer(progress_callback=events.append).render(make_deck(17))

    progress = [e for e in events if e["event"] == "progress"]
    assert [round(e["value"]) for e in progress] == [33, 67, 100]
    assert events[-1]["event"] == "log"
    assert "17 cards on 6 pages" in events[-1]["message"]


def test_render_empty_deck_raises() -> None:
    with pytest.raises(RenderError):
        PDFRenderer().render([])


def test_export_writes_to_configured_output_dir(tmp_path: Path) -> None:
    path = PDFRenderer().export(make_deck(3))
    assert path == tmp_path / "output" / "flashcards-double-sided.pdf"
    assert path.read_bytes().startswith(b"%PDF")


def test_export_to_explicit_path(tmp_path: Path) -> None:
    target = tmp_path / "print" / "deck.pdf"
    assert PDFRenderer().export(make_deck(1), str(target)) == target
    assert target.exists()


def test_failed_write_leaves_no_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_replace(src: str, dst: str) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(pdf_renderer.os, "replace", failing_replace)
    target = tmp_path / "deck.pdf"

    with pytest.raises(RenderError, match="disk full"):
        PDFRenderer().export(make_deck(2), str(target))

    assert list(tmp_path.iterdir()) == [tmp_path / "settings.json"]


def test_backend_failure_is_wrapped_and_writes_nothing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_show_page(self) -> None:
        raise RuntimeError("font table missing")

    monkeypatch.setattr(pdf_renderer.canvas.Canvas, "showPage", broken_show_page)
    target = tmp_path / "print" / "deck.pdf"

    with pytest.raises(RenderError, match="font table missing") as excinfo:
        PDFRenderer().export(make_deck(3), str(target))

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert not target.exists()
    assert not any(path.suffix in {".pdf", ".tmp"} for path in tmp_path.rglob("*"))


def test_empty_deck_export_writes_nothing(isolated_settings: SettingsManager) -> None:
    with pytest.raises(RenderError):
        PDFRenderer().export([])
    assert not Path(isolated_settings.get("OUTPUT_DIR")).exists()


def test_custom_grid_must_match_layout() -> None:
    with pytest.raises(ValueError):
        PDFRenderer(layout=PageLayout(columns=3, rows=3), paginator=PrintPaginator(2, 4))

    renderer = PDFRenderer(layout=PageLayout(columns=3, rows=3))
    assert renderer.paginator.cards_per_page == 9
    assert renderer.render(make_deck(10)).startswith(b"%PDF")
