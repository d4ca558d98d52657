"""
Auto Generator view.

Four sliders choose how many words to draw per part of speech. Generation
waits GENERATION_DELAY seconds as a UX pause, then samples the word bank
and replaces the working deck.

Key Pattern: page.run_task() schedules the async generation so the UI stays
responsive while the button shows its busy state.
"""

import asyncio
import logging
from typing import Callable, Dict, Optional

import flet as ft

from ..config import (
    CATEGORY_CONFIG,
    CATEGORY_ORDER,
    Config,
    SettingsManager,
    get_category_label,
    get_recommended_counts,
)
from ..exceptions import FlashcardError
from ..services import CardSampler, CardStore
from ..utils import pluralize
from .common import DesignTokens, primary_button_style, section_title, show_snackbar
from .home import PREVIEW_VIEW

logger = logging.getLogger(__name__)


class AutoGeneratorView:
    """Category sliders plus the generate action."""

    def __init__(
        self,
        page: ft.Page,
        card_store: CardStore,
        sampler: CardSampler,
        navigate: Callable[[int], None],
    ) -> None:
        self.page = page
        self.card_store = card_store
        self.sampler = sampler
        self.navigate = navigate
        self.is_generating: bool = False

        settings = SettingsManager()
        self._counts: Dict[str, int] = self._initial_counts(settings.get("DEFAULT_COUNTS") or {})
        self._avoid_duplicates: bool = bool(settings.get("AVOID_DUPLICATES", True))
        self._delay: float = float(settings.get("GENERATION_DELAY", Config.GENERATION_DELAY))

        # UI References
        self._sliders: Dict[str, ft.Slider] = {}
        self._slider_labels: Dict[str, ft.Text] = {}
        self._total_text: Optional[ft.Text] = None
        self._avoid_checkbox: Optional[ft.Checkbox] = None
        self._saved_words_text: Optional[ft.Text] = None
        self._generate_button: Optional[ft.ElevatedButton] = None
        self._busy_ring: Optional[ft.ProgressRing] = None

        self._container = self._build_view()
        self._sync_controls()
        self._refresh_saved_words()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    @staticmethod
    def _initial_counts(defaults: Dict[str, int]) -> Dict[str, int]:
        counts = get_recommended_counts()
        for key, value in defaults.items():
            if key in counts:
                counts[key] = max(0, min(int(value), Config.MAX_COUNT_PER_CATEGORY))
        return counts

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def _build_view(self) -> ft.Container:
        slider_rows = [self._build_slider_row(key) for key in CATEGORY_ORDER]

        self._avoid_checkbox = ft.Checkbox(
            label="Avoid words from previously saved sets",
            value=self._avoid_duplicates,
            on_change=self._on_avoid_change,
        )
        self._saved_words_text = ft.Text("", size=12, color=DesignTokens.TEXT_TERTIARY)

        self._total_text = ft.Text("", size=16, weight=ft.FontWeight.W_600, color=DesignTokens.TEXT_PRIMARY)
        self._busy_ring = ft.ProgressRing(width=22, height=22, stroke_width=2.5, visible=False)
        self._generate_button = ft.ElevatedButton(
            "Generate Flashcards",
            icon=ft.Icons.AUTO_AWESOME,
            on_click=self._on_generate_click,
            style=primary_button_style(),
            height=DesignTokens.BUTTON_HEIGHT_MD,
        )

        panel = ft.Container(
            content=ft.Column(
                controls=[
                    *slider_rows,
                    ft.Row(
                        controls=[
                            ft.OutlinedButton(
                                "Use recommended ({})".format(
                                    " / ".join(str(n) for n in get_recommended_counts().values())
                                ),
                                icon=ft.Icons.TUNE_ROUNDED,
                                on_click=lambda _: self._apply_recommended(),
                            ),
                        ],
                    ),
                    ft.Divider(height=1, color=ft.Colors.WHITE10),
                    ft.Column(controls=[self._avoid_checkbox, self._saved_words_text], spacing=2),
                    ft.Row(
                        controls=[self._total_text, self._busy_ring, self._generate_button],
                        spacing=DesignTokens.SPACING_MD,
                        vertical_alignment=ft.CrossAxisAlignment.CENTER,
                    ),
                ],
                spacing=DesignTokens.SPACING_MD,
            ),
            padding=DesignTokens.SPACING_LG,
            bgcolor=DesignTokens.BG_CARD,
            border_radius=DesignTokens.RADIUS_LG,
            width=640,
        )

        return ft.Container(
            content=ft.Column(
                controls=[
                    section_title(
                        "Auto Generate",
                        f"Draw up to {Config.MAX_COUNT_PER_CATEGORY} words per part of speech from the ISEE word bank.",
                    ),
                    panel,
                ],
                spacing=DesignTokens.SPACING_LG,
                scroll=ft.ScrollMode.AUTO,
            ),
            expand=True,
        )

    def _build_slider_row(self, key: str) -> ft.Row:
        meta = CATEGORY_CONFIG[key]
        label = ft.Text("", size=14, color=meta["color"], width=140)
        slider = ft.Slider(
            min=0,
            max=Config.MAX_COUNT_PER_CATEGORY,
            divisions=Config.MAX_COUNT_PER_CATEGORY,
            value=self._counts[key],
            label="{value}",
            active_color=meta["color"],
            inactive_color=ft.Colors.WHITE24,
            on_change=lambda e, k=key: self._on_slider_change(k, e.control.value),
            expand=True,
        )
        self._sliders[key] = slider
        self._slider_labels[key] = label
        return ft.Row(controls=[label, slider], vertical_alignment=ft.CrossAxisAlignment.CENTER)

    # ==================== State sync ====================

    def _sync_controls(self) -> None:
        for key in CATEGORY_ORDER:
            self._sliders[key].value = self._counts[key]
            self._slider_labels[key].value = f"{get_category_label(key)}: {self._counts[key]}"
        self._total_text.value = f"Total: {pluralize(self.total, 'card')}"
        self._generate_button.disabled = self.total == 0 or self.is_generating
        self._busy_ring.visible = self.is_generating

    def _refresh_saved_words(self) -> None:
        saved = set(self.card_store.saved_words())
        self._saved_words_text.value = (
            f"{pluralize(len(saved), 'word')} in your saved sets" if saved else "No saved sets yet"
        )

    def on_show(self) -> None:
        """Called by the app shell whenever this view is shown."""
        self._refresh_saved_words()

    def _on_slider_change(self, key: str, value: float) -> None:
        self._counts[key] = int(round(value))
        self._sync_controls()
        self.page.update()

    def _on_avoid_change(self, e) -> None:
        self._avoid_duplicates = bool(e.control.value)
        self.page.update()

    def _apply_recommended(self) -> None:
        self._counts = get_recommended_counts()
        self._sync_controls()
        self.page.update()

    # ==================== Generation ====================

    def _on_generate_click(self, e) -> None:
        if self.is_generating:
            return
        if self.total == 0:
            show_snackbar(self.page, "Select at least one word from any part of speech.", error=True)
            return
        self.page.run_task(self._generate_async)

    async def _generate_async(self) -> None:
        self.is_generating = True
        self._sync_controls()
        self.page.update()

        try:
            await asyncio.sleep(self._delay)
            exclude = self.card_store.saved_words() if self._avoid_duplicates else []
            cards = self.sampler.sample(
                dict(self._counts),
                exclude_words=exclude,
                avoid_duplicates=self._avoid_duplicates,
            )
            self.card_store.replace_all(cards)
        except FlashcardError as e:
            logger.warning("Generation failed: %s", e)
            show_snackbar(self.page, str(e), error=True, icon=ft.Icons.WARNING_AMBER)
            return
        finally:
            self.is_generating = False
            self._sync_controls()
            self.page.update()

        if len(cards) < self.total:
            show_snackbar(
                self.page,
                f"Generated {pluralize(len(cards), 'flashcard')}; not enough unused words for the rest.",
                icon=ft.Icons.INFO_OUTLINE,
            )
        else:
            show_snackbar(self.page, f"Generated {pluralize(len(cards), 'flashcard')}")
        self.navigate(PREVIEW_VIEW)
