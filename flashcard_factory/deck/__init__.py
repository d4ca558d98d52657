"""Print layout and PDF export."""

from .paginator import PrintPage, PrintPaginator, Side, SlotPlacement
from .pdf_renderer import PageLayout, PDFRenderer

__all__ = [
    'PrintPage',
    'PrintPaginator',
    'Side',
    'SlotPlacement',
    'PageLayout',
    'PDFRenderer',
]
