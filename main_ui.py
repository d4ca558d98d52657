"""
Flashcard Factory: Desktop GUI
------------------------------

A flet interface for creating vocabulary flashcards and exporting them as a
double-sided, print-ready PDF.
"""

import logging
import traceback
from typing import Callable, Dict

import flet as ft

from flashcard_factory import __version__
from flashcard_factory.config import SettingsManager
from flashcard_factory.deck import PageLayout, PDFRenderer, PrintPaginator
from flashcard_factory.services import CardSampler, CardStore, WordBank, create_store
from flashcard_factory.ui import (
    AutoGeneratorView,
    GENERATOR_VIEW,
    HomeView,
    ManualEntryView,
    PreviewView,
)
from flashcard_factory.utils import setup_logger

logger = logging.getLogger("flashcard_factory.app")


# =============================================================================
# NAVIGATION RAIL (SIDEBAR)
# =============================================================================

def create_navigation_rail(
    on_change: Callable[[int], None],
    selected_index: int = 0
) -> ft.NavigationRail:
    """
    Create the main navigation sidebar.

    Args:
        on_change: Callback when navigation selection changes
        selected_index: Currently selected index
    """
    destinations = [
        (ft.Icons.HOME_OUTLINED, ft.Icons.HOME_ROUNDED, "Home"),
        (ft.Icons.EDIT_NOTE_OUTLINED, ft.Icons.EDIT_NOTE_ROUNDED, "Manual Entry"),
        (ft.Icons.AUTO_AWESOME_OUTLINED, ft.Icons.AUTO_AWESOME, "Auto Generate"),
        (ft.Icons.STYLE_OUTLINED, ft.Icons.STYLE_ROUNDED, "Preview"),
    ]
    return ft.NavigationRail(
        selected_index=selected_index,
        label_type=ft.NavigationRailLabelType.ALL,
        min_width=100,
        min_extended_width=200,
        extended=True,
        group_alignment=-0.9,
        destinations=[
            ft.NavigationRailDestination(
                icon=icon,
                selected_icon=selected_icon,
                label=label,
                padding=ft.Padding.symmetric(vertical=8),
            )
            for icon, selected_icon, label in destinations
        ],
        on_change=lambda e: on_change(e.control.selected_index),
        bgcolor="transparent",
    )


# =============================================================================
# MAIN APPLICATION
# =============================================================================

class FlashcardFactoryApp:
    """Main application controller."""

    def __init__(self, page: ft.Page) -> None:
        """
        Initialize the application.

        Args:
            page: Flet page instance
        """
        self.page = page
        self._setup_page()
        self._init_services()
        self._init_views()
        self._build_ui()

    def _setup_page(self) -> None:
        """Configure page settings and theme."""
        self.page.title = "Flashcard Factory"
        self.page.theme_mode = ft.ThemeMode.DARK
        self.page.bgcolor = "#121212"
        self.page.theme = ft.Theme(
            color_scheme_seed="#7C4DFF",
            font_family="Inter, Roboto, Segoe UI, sans-serif",
        )
        self.page.padding = 0
        self.page.spacing = 0
        self.page.window.min_width = 1000
        self.page.window.min_height = 650
        self.page.window.width = 1280
        self.page.window.height = 850

    def _init_services(self) -> None:
        """Wire the word bank, deck, sampler and renderer for this session."""
        settings = SettingsManager()
        columns = int(settings.get("COLUMNS_PER_PAGE"))
        rows = int(settings.get("ROWS_PER_COLUMN"))

        self.word_bank = WordBank.load()
        self.card_store = CardStore(create_store())
        self.sampler = CardSampler(self.word_bank)
        self.renderer = PDFRenderer(
            layout=PageLayout(columns=columns, rows=rows),
            paginator=PrintPaginator(columns, rows),
        )
        logger.info(
            "Loaded %d words (%s); print grid %dx%d",
            len(self.word_bank),
            ", ".join(f"{c.value}={n}" for c, n in self.word_bank.counts().items()),
            columns,
            rows,
        )

    def _init_views(self) -> None:
        """Initialize all view containers."""
        self.home = HomeView(self.page, self.card_store, self.navigate_to)
        self.manual_entry = ManualEntryView(self.page, self.card_store, self.navigate_to)
        self.generator = AutoGeneratorView(self.page, self.card_store, self.sampler, self.navigate_to)
        self.preview = PreviewView(
            self.page, self.card_store, self.word_bank, self.renderer, self.navigate_to
        )

        self.views: Dict[int, ft.Container] = {
            0: self.home.container,
            1: self.manual_entry.container,
            2: self.generator.container,
            3: self.preview.container,
        }
        self.current_view_index: int = 0

    def _build_ui(self) -> None:
        """Build the main UI layout."""
        self.content_area = ft.Container(
            content=self.views[0],
            expand=True,
            padding=24,
            border_radius=ft.BorderRadius.only(
                top_left=16,
                bottom_left=16,
            ),
            bgcolor="#1A1A1B",
            shadow=ft.BoxShadow(
                spread_radius=-2,
                blur_radius=24,
                color=ft.Colors.with_opacity(0.2, ft.Colors.BLACK),
                offset=ft.Offset(-6, 0),
            ),
        )

        self.nav_rail = create_navigation_rail(
            on_change=self._on_nav_change,
            selected_index=0,
        )

        sidebar = ft.Container(
            content=ft.Column(
                controls=[
                    ft.Container(
                        content=ft.Row(
                            controls=[
                                ft.Icon(ft.Icons.STYLE_ROUNDED, color=ft.Colors.INDIGO_200, size=28),
                                ft.Text(
                                    "Flashcards",
                                    size=20,
                                    weight=ft.FontWeight.BOLD,
                                    color=ft.Colors.WHITE,
                                ),
                            ],
                            alignment=ft.MainAxisAlignment.CENTER,
                            spacing=10,
                        ),
                        padding=ft.Padding.only(top=20, bottom=10),
                    ),
                    ft.Divider(height=1, color=ft.Colors.WHITE10),
                    ft.Container(
                        content=self.nav_rail,
                        expand=True,
                    ),
                    ft.Container(
                        content=ft.Text(
                            f"v{__version__}",
                            size=11,
                            color=ft.Colors.WHITE24,
                            text_align=ft.TextAlign.CENTER,
                        ),
                        padding=ft.Padding.only(bottom=20),
                        alignment=ft.Alignment(0, 0),
                    ),
                ],
                spacing=0,
            ),
            width=220,
            bgcolor="#161617",
        )

        main_layout = ft.Row(
            controls=[
                sidebar,
                ft.VerticalDivider(width=1, color=ft.Colors.WHITE10),
                self.content_area,
            ],
            spacing=0,
            expand=True,
        )

        self.page.add(main_layout)

    def _on_nav_change(self, index: int) -> None:
        """
        Handle navigation selection change.

        Args:
            index: Selected navigation index
        """
        if index == self.current_view_index:
            return

        if index == GENERATOR_VIEW:
            self.generator.on_show()
        self.current_view_index = index
        self.content_area.content = self.views[index]
        self.page.update()

    def navigate_to(self, index: int) -> None:
        """
        Programmatically navigate to a view.

        Args:
            index: View index to navigate to
        """
        if 0 <= index < len(self.views):
            self.nav_rail.selected_index = index
            self._on_nav_change(index)


def main(page: ft.Page) -> None:
    """
    Main entry point for the flet application.

    Args:
        page: Flet page instance
    """
    setup_logger()

    try:
        FlashcardFactoryApp(page)
    except Exception:
        logger.exception("UI failed to start")
        error_text = traceback.format_exc()
        page.add(
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Text("UI failed to start", size=20, weight=ft.FontWeight.BOLD, color=ft.Colors.RED_400),
                        ft.Text("Details:", size=12, color=ft.Colors.WHITE70),
                        ft.Container(
                            content=ft.Text(error_text, size=11, selectable=True, color=ft.Colors.WHITE70),
                            padding=10,
                            bgcolor=ft.Colors.with_opacity(0.08, ft.Colors.WHITE),
                            border_radius=8,
                        ),
                    ],
                    spacing=10,
                ),
                padding=20,
            )
        )
        page.update()


def run() -> None:
    """Console entry point."""
    ft.run(main)


if __name__ == "__main__":
    run()
