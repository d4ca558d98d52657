"""Double-sided PDF export."""

import io
import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from ..config import Config, SettingsManager
from ..exceptions import RenderError
from ..models import CardRecord
from ..utils import ensure_dir, get_file_size_kb
from .paginator import PrintPage, PrintPaginator, Side, SlotPlacement

logger = logging.getLogger(__name__)

BLACK = (0, 0, 0)
HEADER_GREY = (100 / 255, 100 / 255, 100 / 255)
CUT_GREY = (128 / 255, 128 / 255, 128 / 255)
EXAMPLE_GREY = (80 / 255, 80 / 255, 80 / 255)


@dataclass(frozen=True)
class PageLayout:
    """Physical page geometry in points (origin bottom-left, as in PDF)."""

    page_width: float = Config.PAGE_WIDTH
    page_height: float = Config.PAGE_HEIGHT
    margin: float = Config.MARGIN
    header_height: float = Config.HEADER_HEIGHT
    columns: int = Config.COLUMNS_PER_PAGE
    rows: int = Config.ROWS_PER_COLUMN

    @property
    def grid_top(self) -> float:
        """Y of the top edge of the card grid."""
        return self.page_height - self.margin - self.header_height

    @property
    def card_width(self) -> float:
        return (self.page_width - 2 * self.margin) / self.columns

    @property
    def card_height(self) -> float:
        return (self.page_height - 2 * self.margin - self.header_height) / self.rows

    def slot_rect(self, column: int, row: int) -> Tuple[float, float, float, float]:
        """Return (x, y, w, h) of a grid cell, y measured from the bottom."""
        x = self.margin + column * self.card_width
        y = self.grid_top - (row + 1) * self.card_height
        return x, y, self.card_width, self.card_height


class PDFRenderer:
    """
    Draws paginated flashcards into a print-ready PDF.

    Each PrintPage becomes two physical pages: the fronts (word + category),
    then the backs (definition + example) at mirrored columns.
    """

    def __init__(
        self,
        layout: Optional[PageLayout] = None,
        paginator: Optional[PrintPaginator] = None,
        progress_callback: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> None:
        """
        Initialize renderer.

        Args:
            layout: Page geometry (Letter, 2x4 grid by default)
            paginator: Paginator to use; built from the layout when omitted
            progress_callback: Optional callback for progress updates.
                              Payload schema: {"event": "log"|"progress", "message": str, "value": float}
        """
        self.layout = layout or PageLayout()
        self.paginator = paginator or PrintPaginator(self.layout.columns, self.layout.rows)
        if (self.paginator.columns_per_page, self.paginator.rows_per_column) != (self.layout.columns, self.layout.rows):
            raise ValueError("Paginator grid does not match the page layout")
        self.progress_callback = progress_callback or self._default_callback

    @staticmethod
    def _default_callback(payload: Dict[str, Any]) -> None:
        """Send progress to the module logger."""
        if payload.get("event") == "log":
            logger.info(payload.get("message", ""))
        elif payload.get("event") == "progress":
            logger.debug("[%.1f%%] %s", payload.get("value", 0), payload.get("message", ""))

    def _emit(self, event: str, message: str = "", value: float = 0.0) -> None:
        """
        Emit a progress event via the callback.

        Args:
            event: Event type ('log' or 'progress')
            message: Human-readable message
            value: Progress value (0-100 for progress events)
        """
        self.progress_callback({"event": event, "message": message, "value": value})

    # ==================== Public API ====================

    def render(self, deck: Sequence[CardRecord]) -> bytes:
        """
        Render the deck to PDF bytes entirely in memory.

        Raises:
            RenderError: empty deck, or the PDF backend failed
        """
        cards = list(deck)
        pages = self.paginator.paginate(cards)
        if not pages:
            raise RenderError("No cards to export. Please create some flashcards first.")

        buffer = io.BytesIO()
        try:
            pdf = canvas.Canvas(buffer, pagesize=(self.layout.page_width, self.layout.page_height))
            pdf.setTitle("Flashcards - double-sided")

            for page in pages:
                self._draw_side(pdf, page, Side.FRONT)
                pdf.showPage()
                self._draw_side(pdf, page, Side.BACK)
                pdf.showPage()
                self._emit(
                    "progress",
                    f"Page {page.number}/{len(pages)}",
                    page.number / len(pages) * 100,
                )

            pdf.save()
        except Exception as e:
            raise RenderError(f"PDF generation failed: {e}") from e

        self._emit("log", f"Rendered {len(cards)} cards on {len(pages) * 2} pages")
        return buffer.getvalue()

    def export(self, deck: Sequence[CardRecord], output_path: Optional[str] = None) -> Path:
        """
        Render and write the PDF; either the complete file is written or none.

        Args:
            deck: Cards in print order
            output_path: Target file (defaults to OUTPUT_DIR/EXPORT_FILENAME)

        Returns:
            Path of the written file

        Raises:
            RenderError: rendering or writing failed
        """
        if output_path is None:
            output_dir = SettingsManager().get("OUTPUT_DIR", Config.OUTPUT_DIR)
            output_path = str(Path(output_dir) / Config.EXPORT_FILENAME)
        target = Path(output_path)

        data = self.render(deck)

        temp_file = target.with_name(f"{target.name}.{uuid.uuid4().hex[:8]}.tmp")
        try:
            ensure_dir(str(target.parent))
            with open(temp_file, "wb") as f:
                f.write(data)
            os.replace(temp_file, target)
        except OSError as e:
            if temp_file.exists():
                try:
                    temp_file.unlink()
                except OSError:
                    logger.debug("Could not remove temp file %s", temp_file)
            raise RenderError(f"Could not write {target}: {e}") from e

        self._emit("log", f"Exported {target} ({get_file_size_kb(str(target)):.1f} KB)")
        return target

    # ==================== Drawing ====================

    def _draw_side(self, pdf: canvas.Canvas, page: PrintPage, side: Side) -> None:
        count = len(page.cards)
        if side == Side.FRONT:
            header = f"Flashcards - Front Side (Page {page.number}) - {count} cards"
        else:
            header = f"Flashcards - Back Side (Page {page.number}) - Print on reverse - {count} cards"

        pdf.setFont("Helvetica", 10)
        pdf.setFillColorRGB(*HEADER_GREY)
        pdf.drawString(self.layout.margin, self.layout.page_height - self.layout.margin - 10, header)

        self._draw_cut_lines(pdf)

        for slot in page.slots(side):
            if side == Side.FRONT:
                self._draw_front(pdf, slot)
            else:
                self._draw_back(pdf, slot)

    def _draw_cut_lines(self, pdf: canvas.Canvas) -> None:
        """Straight guides on every column and row boundary."""
        layout = self.layout
        bottom = layout.grid_top - layout.rows * layout.card_height
        pdf.setStrokeColorRGB(*CUT_GREY)
        pdf.setLineWidth(0.5)

        for column in range(1, layout.columns):
            x = layout.margin + column * layout.card_width
            pdf.line(x, layout.grid_top, x, bottom)

        for row in range(1, layout.rows):
            y = layout.grid_top - row * layout.card_height
            pdf.line(layout.margin, y, layout.page_width - layout.margin, y)

    def _draw_border(self, pdf: canvas.Canvas, x: float, y: float, w: float, h: float) -> None:
        pdf.setStrokeColorRGB(*BLACK)
        pdf.setLineWidth(1)
        pdf.rect(x + 2, y + 2, w - 4, h - 4, stroke=1, fill=0)

    def _draw_front(self, pdf: canvas.Canvas, slot: SlotPlacement) -> None:
        x, y, w, h = self.layout.slot_rect(slot.column, slot.row)
        self._draw_border(pdf, x, y, w, h)

        word_size, word_leading = 22, 24
        word_lines: List[str] = simpleSplit(slot.card.word, "Helvetica-Bold", word_size, w - 40)
        block_height = len(word_lines) * word_leading + 20
        baseline = y + (h + block_height) / 2 - word_size

        pdf.setFillColorRGB(*BLACK)
        pdf.setFont("Helvetica-Bold", word_size)
        for line in word_lines:
            pdf.drawCentredString(x + w / 2, baseline, line)
            baseline -= word_leading

        pdf.setFont("Helvetica", 14)
        pdf.setFillColorRGB(*HEADER_GREY)
        pdf.drawCentredString(x + w / 2, baseline - 4, slot.card.category.value)

    def _draw_back(self, pdf: canvas.Canvas, slot: SlotPlacement) -> None:
        x, y, w, h = self.layout.slot_rect(slot.column, slot.row)
        self._draw_border(pdf, x, y, w, h)

        text_x = x + 12
        text_width = w - 24
        floor = y + 12
        baseline = y + h - 24

        pdf.setFillColorRGB(*BLACK)
        pdf.setFont("Helvetica", 14)
        for line in simpleSplit(slot.card.definition, "Helvetica", 14, text_width):
            if baseline < floor:
                break
            pdf.drawString(text_x, baseline, line)
            baseline -= 16

        if not slot.card.example:
            return

        baseline -= 6
        if baseline < floor + 12:
            return
        pdf.setFont("Helvetica-Oblique", 12)
        pdf.setFillColorRGB(*EXAMPLE_GREY)
        for line in simpleSplit(f'"{slot.card.example}"', "Helvetica-Oblique", 12, text_width):
            if baseline < floor:
                break
            pdf.drawString(text_x, baseline, line)
            baseline -= 14
