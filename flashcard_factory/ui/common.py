"""
Shared styling and feedback helpers for the flet views.
"""

import logging
import os
import platform
import subprocess
from typing import Optional

import flet as ft

logger = logging.getLogger(__name__)


class DesignTokens:
    """Centralized design tokens for consistent styling."""
    # Colors - Deep dark theme
    BG_PRIMARY = "#121212"
    BG_SURFACE = "#1A1A1B"
    BG_CARD = "#242426"
    BG_CARD_BACK = "#1E2A38"
    BG_ELEVATED = "#2D2D30"

    # Text colors
    TEXT_PRIMARY = "#FFFFFF"
    TEXT_SECONDARY = "#B3B3B3"
    TEXT_TERTIARY = "#808080"
    TEXT_MUTED = "#5C5C5C"

    # Accent colors
    ACCENT_PRIMARY = "#7C4DFF"
    ACCENT_SECONDARY = "#536DFE"
    ACCENT_DANGER = "#E57373"
    ACCENT_SUCCESS = "#81C784"
    ACCENT_WARNING = "#FFB74D"

    # Spacing
    SPACING_XS = 4
    SPACING_SM = 8
    SPACING_MD = 16
    SPACING_LG = 24
    SPACING_XL = 32

    # Border radius
    RADIUS_SM = 8
    RADIUS_MD = 12
    RADIUS_LG = 16

    BUTTON_HEIGHT_MD = 44


def field_style() -> dict:
    """Common TextField / Dropdown styling kwargs."""
    return {
        "border_color": ft.Colors.WHITE24,
        "focused_border_color": ft.Colors.INDIGO_200,
        "label_style": ft.TextStyle(color=ft.Colors.WHITE54),
        "text_style": ft.TextStyle(color=ft.Colors.WHITE),
    }


def primary_button_style(danger: bool = False) -> ft.ButtonStyle:
    return ft.ButtonStyle(
        bgcolor=DesignTokens.ACCENT_DANGER if danger else DesignTokens.ACCENT_PRIMARY,
        color=DesignTokens.TEXT_PRIMARY,
        shape=ft.RoundedRectangleBorder(radius=DesignTokens.RADIUS_SM),
    )


def section_title(text: str, subtitle: Optional[str] = None) -> ft.Column:
    controls = [ft.Text(text, size=24, weight=ft.FontWeight.BOLD, color=DesignTokens.TEXT_PRIMARY)]
    if subtitle:
        controls.append(ft.Text(subtitle, size=13, color=DesignTokens.TEXT_TERTIARY))
    return ft.Column(controls=controls, spacing=DesignTokens.SPACING_XS)


def show_snackbar(page: ft.Page, message: str, error: bool = False, icon: Optional[str] = None) -> None:
    """Show a snackbar notification, replacing any previous one."""
    snackbar = ft.SnackBar(
        content=ft.Row(
            controls=[
                ft.Icon(
                    icon or (ft.Icons.ERROR_OUTLINE if error else ft.Icons.CHECK_CIRCLE_OUTLINE),
                    color=DesignTokens.TEXT_PRIMARY,
                    size=20,
                ),
                ft.Text(message, color=DesignTokens.TEXT_PRIMARY, size=14),
            ],
            spacing=12,
        ),
        bgcolor=DesignTokens.ACCENT_DANGER if error else DesignTokens.ACCENT_SUCCESS,
        duration=3500,
    )
    for ctrl in list(page.overlay):
        if isinstance(ctrl, ft.SnackBar):
            page.overlay.remove(ctrl)
    page.overlay.append(snackbar)
    snackbar.open = True
    page.update()


def open_dialog(page: ft.Page, dialog: ft.AlertDialog) -> None:
    page.overlay.append(dialog)
    dialog.open = True
    page.update()


def close_dialog(page: ft.Page, dialog: ft.AlertDialog) -> None:
    dialog.open = False
    page.update()
    if dialog in page.overlay:
        page.overlay.remove(dialog)
    page.update()


def open_folder(folder: str) -> None:
    """Reveal a folder in the platform file manager."""
    try:
        system = platform.system()
        if system == "Windows":
            os.startfile(folder)
        elif system == "Darwin":
            subprocess.run(["open", folder], check=False)
        else:
            subprocess.run(["xdg-open", folder], check=False)
    except OSError as e:
        logger.warning("Could not open folder %s: %s", folder, e)
