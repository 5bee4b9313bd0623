"""
Wordbook: Desktop Application
-----------------------------

A Flet interface for adding, reviewing and extending your vocabulary.
"""

import traceback
from typing import Callable, Dict, Optional

import flet as ft

from wordbook import __version__
from wordbook.config import Config
from wordbook.controllers import FormMode
from wordbook.routes import NAV_ROUTES, parse_route
from wordbook.services import SuggestionService, VocabularyService, WordStore
from wordbook.ui import StatsView, SuggestionsView, VocabularyFormView, WordListView
from wordbook.ui.theme import DesignTokens
from wordbook.utils.logger import setup_logger

logger = setup_logger(__name__)


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

    Returns:
        Configured NavigationRail control
    """
    destinations = [
        (ft.Icons.LIST_ALT_OUTLINED, ft.Icons.LIST_ALT_ROUNDED, "Words"),
        (ft.Icons.ADD_CIRCLE_OUTLINE, ft.Icons.ADD_CIRCLE_ROUNDED, "Add"),
        (ft.Icons.BAR_CHART_OUTLINED, ft.Icons.BAR_CHART_ROUNDED, "Stats"),
        (ft.Icons.AUTO_AWESOME_OUTLINED, ft.Icons.AUTO_AWESOME, "Suggest"),
    ]
    return ft.NavigationRail(
        selected_index=selected_index,
        label_type=ft.NavigationRailLabelType.ALL,
        min_width=100,
        min_extended_width=200,
        extended=True,
        group_alignment=-0.9,  # Align items toward top
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

class WordbookApp:
    """Main application controller."""

    def __init__(
        self,
        page: ft.Page,
        store: Optional[WordStore] = None,
        suggestion_service: Optional[SuggestionService] = None,
    ) -> None:
        """
        Initialize the application.

        Args:
            page: Flet page instance
            store: Word store (configured from settings if None)
            suggestion_service: Suggestion client (configured from settings if None)
        """
        self.page = page
        self.store = store or VocabularyService.from_settings()
        self.suggestion_service = suggestion_service or SuggestionService()
        self.current_route: str = "/words"
        self._current_view = None
        self._setup_page()
        self._build_ui()
        self.navigate("/words")

    def _setup_page(self) -> None:
        """Configure page settings and theme."""
        self.page.title = Config.APP_TITLE
        self.page.theme_mode = ft.ThemeMode.DARK
        self.page.bgcolor = DesignTokens.BG_PRIMARY
        self.page.theme = ft.Theme(
            color_scheme_seed=DesignTokens.ACCENT_PRIMARY,
            font_family=DesignTokens.FONT_SANS,
        )
        self.page.padding = 0
        self.page.spacing = 0
        self.page.window.min_width = 900
        self.page.window.min_height = 600
        self.page.window.width = 1180
        self.page.window.height = 820

    def _build_view(self, route: str):
        """Create a fresh view for a route so each visit reloads its data."""
        target = parse_route(route)
        if target.name == "update":
            return VocabularyFormView(self.page, self.store, mode=FormMode.UPDATE, word_id=target.word_id)

        builders: Dict[str, Callable[[], object]] = {
            "words": lambda: WordListView(self.page, self.store, on_navigate=self.navigate),
            "add": lambda: VocabularyFormView(self.page, self.store, mode=FormMode.CREATE),
            "stats": lambda: StatsView(self.page, self.store),
            "suggestions": lambda: SuggestionsView(self.page, self.store, self.suggestion_service),
        }
        return builders[target.name]()

    def _build_ui(self) -> None:
        """Build the main UI layout."""
        self.content_area = ft.Container(
            expand=True,
            padding=8,
            border_radius=ft.BorderRadius.only(
                top_left=16,
                bottom_left=16,
            ),
            bgcolor=DesignTokens.BG_SURFACE,
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
                                ft.Icon(ft.Icons.MENU_BOOK_ROUNDED, color=ft.Colors.INDIGO_200, size=28),
                                ft.Text(
                                    Config.APP_TITLE,
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
            bgcolor=DesignTokens.BG_SIDEBAR,
        )

        self.page.add(
            ft.Row(
                controls=[
                    sidebar,
                    ft.VerticalDivider(width=1, color=ft.Colors.WHITE10),
                    self.content_area,
                ],
                spacing=0,
                expand=True,
            )
        )

    def _on_nav_change(self, index: int) -> None:
        """Handle navigation selection change."""
        self.navigate(NAV_ROUTES[index])

    def navigate(self, route: str) -> None:
        """
        Show the view for a route.

        Args:
            route: "/words", "/add", "/stats", "/suggestions" or "/update/<id>"
        """
        self.current_route = route
        target = parse_route(route)
        nav_route = f"/{target.name}"
        self.nav_rail.selected_index = NAV_ROUTES.index(nav_route) if nav_route in NAV_ROUTES else None

        self._current_view = self._build_view(route)
        self.content_area.content = self._current_view.container
        self.page.update()
        self._current_view.did_mount()

    async def close(self) -> None:
        await self.suggestion_service.close()
        await self.store.close()


def main(page: ft.Page) -> None:
    """
    Main entry point for Flet application.

    Args:
        page: Flet page instance
    """
    try:
        app = WordbookApp(page)
    except Exception:
        logger.exception("UI failed to start")
        page.add(
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Text("UI failed to start", size=20, weight=ft.FontWeight.BOLD, color=ft.Colors.RED_400),
                        ft.Container(
                            content=ft.Text(traceback.format_exc(), size=11, selectable=True, color=ft.Colors.WHITE70),
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
        return

    async def _on_disconnect(e) -> None:
        await app.close()

    page.on_disconnect = _on_disconnect


def run() -> None:
    """Console script entry point."""
    ft.run(main)


if __name__ == "__main__":
    run()
