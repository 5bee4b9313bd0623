"""
Suggestions View
----------------

Sends the current word list to the LLM and shows its answer verbatim.
"""

from typing import Optional

import flet as ft

from ..controllers import SuggestionPresenter
from ..services import SuggestionService, WordStore
from ..utils.parsing import TextParser
from .theme import DesignTokens, build_header, primary_button

PREVIEW_COUNT = 5


class SuggestionsView:
    def __init__(self, page: ft.Page, store: WordStore, service: SuggestionService) -> None:
        self.page = page
        self.presenter = SuggestionPresenter(store, service)

        self._words_title: Optional[ft.Text] = None
        self._words_column: Optional[ft.Column] = None
        self._error_text: Optional[ft.Text] = None
        self._fetch_button: Optional[ft.ElevatedButton] = None
        self._result_text: Optional[ft.Text] = None
        self._result_card: Optional[ft.Container] = None

        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def did_mount(self) -> None:
        self.page.run_task(self._load_words)

    def _build_view(self) -> ft.Container:
        self._words_title = ft.Text("Current words (0)", size=18, weight=ft.FontWeight.W_700)
        self._words_column = ft.Column(spacing=DesignTokens.SPACING_XS)
        self._error_text = ft.Text("", color=DesignTokens.ACCENT_DANGER, visible=False)
        self._fetch_button = primary_button("Get suggestions", ft.Icons.AUTO_AWESOME, self._on_fetch_click)
        self._result_text = ft.Text("", selectable=True, color=DesignTokens.TEXT_PRIMARY)
        self._result_card = ft.Container(
            content=ft.Column(
                controls=[
                    ft.Text("Recommended words", size=18, weight=ft.FontWeight.W_700),
                    self._result_text,
                ],
                spacing=DesignTokens.SPACING_SM,
            ),
            padding=DesignTokens.SPACING_MD,
            border_radius=DesignTokens.RADIUS_MD,
            bgcolor=DesignTokens.BG_CARD,
            visible=False,
        )

        return ft.Container(
            content=ft.Column(
                controls=[
                    build_header("Suggestions", "AI picks the next words to learn"),
                    self._error_text,
                    ft.Container(
                        content=ft.Column(
                            controls=[self._words_title, self._words_column, self._fetch_button],
                            spacing=DesignTokens.SPACING_SM,
                        ),
                        padding=DesignTokens.SPACING_MD,
                        border_radius=DesignTokens.RADIUS_MD,
                        bgcolor=DesignTokens.BG_CARD,
                    ),
                    self._result_card,
                ],
                spacing=DesignTokens.SPACING_MD,
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            ),
            expand=True,
            padding=DesignTokens.SPACING_LG,
        )

    async def _load_words(self) -> None:
        await self.presenter.load_words()
        words = self.presenter.words
        self._words_title.value = f"Current words ({len(words)})"
        rows = [
            ft.Text(TextParser.truncate(f"{w.vocabulary} - {w.translate} ({w.category or 'uncategorized'})"), size=13)
            for w in words[:PREVIEW_COUNT]
        ]
        if len(words) > PREVIEW_COUNT:
            rows.append(ft.Text(f"...and {len(words) - PREVIEW_COUNT} more", size=13, color=DesignTokens.TEXT_TERTIARY))
        if not words:
            rows.append(ft.Text("No words found", color=DesignTokens.TEXT_TERTIARY))
        self._words_column.controls = rows
        self._render_status()

    def _on_fetch_click(self, e: ft.ControlEvent) -> None:
        self.page.run_task(self._fetch)

    def _set_loading(self, loading: bool) -> None:
        self._fetch_button.disabled = loading
        if loading:
            self._fetch_button.content = ft.Row(
                controls=[
                    ft.ProgressRing(width=18, height=18, stroke_width=2, color=DesignTokens.TEXT_PRIMARY),
                    ft.Text("Fetching suggestions...", size=14, weight=ft.FontWeight.W_600),
                ],
                alignment=ft.MainAxisAlignment.CENTER,
                spacing=10,
                tight=True,
            )
        else:
            self._fetch_button.content = ft.Row(
                controls=[
                    ft.Icon(ft.Icons.AUTO_AWESOME, size=18),
                    ft.Text("Get suggestions", size=14, weight=ft.FontWeight.W_600),
                ],
                alignment=ft.MainAxisAlignment.CENTER,
                spacing=8,
                tight=True,
            )
        self.page.update()

    async def _fetch(self) -> None:
        self._set_loading(True)
        try:
            await self.presenter.fetch()
        finally:
            self._set_loading(False)
            self._render_status()

    def _render_status(self) -> None:
        self._error_text.value = self.presenter.error or ""
        self._error_text.visible = bool(self.presenter.error)

        text = self.presenter.display_text
        self._result_card.visible = text is not None
        self._result_text.value = text or ""
        self._result_text.font_family = DesignTokens.FONT_MONO if self.presenter.is_raw else None
        self.page.update()
