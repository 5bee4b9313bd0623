"""Design tokens and small shared widgets for all views."""

import flet as ft


class DesignTokens:
    """Centralized design tokens for consistent styling."""
    # Colors - Deep dark theme
    BG_PRIMARY = "#121212"
    BG_SURFACE = "#1A1A1B"
    BG_CARD = "#242426"
    BG_SIDEBAR = "#161617"
    
    # Text colors
    TEXT_PRIMARY = "#FFFFFF"
    TEXT_SECONDARY = "#B3B3B3"
    TEXT_TERTIARY = "#808080"
    TEXT_MUTED = "#5C5C5C"
    
    # Accent colors (desaturated)
    ACCENT_PRIMARY = "#7C4DFF"
    ACCENT_PRIMARY_HOVER = "#9E7AFF"
    ACCENT_DANGER = "#E57373"
    ACCENT_SUCCESS = "#81C784"
    
    # Spacing
    SPACING_XS = 4
    SPACING_SM = 8
    SPACING_MD = 16
    SPACING_LG = 24
    
    # Border radius
    RADIUS_SM = 8
    RADIUS_MD = 12
    
    # Button heights
    BUTTON_HEIGHT_MD = 44
    
    # Typography
    FONT_MONO = "JetBrains Mono, Consolas, Monaco, monospace"
    FONT_SANS = "Inter, Roboto, Segoe UI, sans-serif"


def build_header(title: str, subtitle: str) -> ft.Container:
    """Page title with a muted subtitle."""
    return ft.Container(
        content=ft.Column(
            controls=[
                ft.Text(title, size=32, weight=ft.FontWeight.W_700, color=DesignTokens.TEXT_PRIMARY),
                ft.Text(subtitle, size=14, color=DesignTokens.TEXT_TERTIARY),
            ],
            spacing=6,
        ),
        padding=ft.Padding.only(bottom=DesignTokens.SPACING_SM),
    )


def primary_button(label: str, icon: str, on_click) -> ft.ElevatedButton:
    """Main call-to-action button."""
    return ft.ElevatedButton(
        content=ft.Row(
            controls=[
                ft.Icon(icon, size=18),
                ft.Text(label, size=14, weight=ft.FontWeight.W_600),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            spacing=8,
            tight=True,
        ),
        style=ft.ButtonStyle(
            color=DesignTokens.TEXT_PRIMARY,
            bgcolor={
                ft.ControlState.DEFAULT: DesignTokens.ACCENT_PRIMARY,
                ft.ControlState.HOVERED: DesignTokens.ACCENT_PRIMARY_HOVER,
                ft.ControlState.DISABLED: ft.Colors.with_opacity(0.3, DesignTokens.ACCENT_PRIMARY),
            },
            padding=ft.Padding.symmetric(horizontal=24, vertical=12),
            shape=ft.RoundedRectangleBorder(radius=DesignTokens.RADIUS_MD),
        ),
        height=DesignTokens.BUTTON_HEIGHT_MD,
        on_click=on_click,
    )


def show_snackbar(page: ft.Page, message: str, error: bool = False, icon: str = None) -> None:
    """Show a snackbar notification."""
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
    # Clean up old snackbars
    for ctrl in list(page.overlay):
        if isinstance(ctrl, ft.SnackBar):
            page.overlay.remove(ctrl)
    page.overlay.append(snackbar)
    snackbar.open = True
    page.update()
