"""
Word List View
--------------

Shows every stored word as a card with delete and update actions.
"""

from typing import Callable, Optional

import flet as ft

from ..controllers import WordListPresenter
from ..models import WordRecord
from ..services import WordStore
from ..utils.parsing import TextParser
from .theme import DesignTokens, build_header, show_snackbar


class WordListView:
    """
    Word list with per-card actions.

    The list is fetched once when the view is shown; deletes update the
    local copy without re-fetching.
    """

    def __init__(
        self,
        page: ft.Page,
        store: WordStore,
        on_navigate: Callable[[str], None],
    ) -> None:
        """
        Args:
            page: Flet page instance for updates
            store: Word store
            on_navigate: Router callback taking a route such as "/update/3"
        """
        self.page = page
        self.presenter = WordListPresenter(store)
        self._on_navigate = on_navigate

        self._title: Optional[ft.Text] = None
        self._error_text: Optional[ft.Text] = None
        self._list_view: Optional[ft.ListView] = None

        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def did_mount(self) -> None:
        """Load words once the view is on screen."""
        self.page.run_task(self._load)

    def _build_view(self) -> ft.Container:
        self._title = ft.Text(
            "Word list (0)",
            size=18,
            weight=ft.FontWeight.W_700,
            color=DesignTokens.TEXT_PRIMARY,
        )
        self._error_text = ft.Text("", color=DesignTokens.ACCENT_DANGER, visible=False)
        self._list_view = ft.ListView(expand=True, spacing=DesignTokens.SPACING_SM)

        return ft.Container(
            content=ft.Column(
                controls=[
                    build_header("Words", "Review, edit and remove your vocabulary"),
                    self._error_text,
                    self._title,
                    self._list_view,
                ],
                spacing=DesignTokens.SPACING_MD,
                expand=True,
            ),
            expand=True,
            padding=DesignTokens.SPACING_LG,
        )

    async def _load(self) -> None:
        await self.presenter.load()
        self._render()

    def _render(self) -> None:
        self._title.value = f"Word list ({self.presenter.count})"
        self._error_text.value = self.presenter.error or ""
        self._error_text.visible = bool(self.presenter.error)

        if self.presenter.words:
            self._list_view.controls = [self._build_word_card(w) for w in self.presenter.words]
        else:
            self._list_view.controls = [self._build_empty_state()]
        self.page.update()

    def _build_empty_state(self) -> ft.Control:
        return ft.Row(
            controls=[
                ft.Text("No words yet.", color=DesignTokens.TEXT_SECONDARY),
                ft.TextButton("Add a word", on_click=lambda e: self._on_navigate("/add")),
            ],
        )

    def _build_word_card(self, word: WordRecord) -> ft.Container:
        details = [
            ft.Text(f"Meaning: {word.meaning}", color=DesignTokens.TEXT_SECONDARY),
            ft.Text(f"Translation: {word.translate}", color=DesignTokens.TEXT_SECONDARY),
        ]
        if word.example:
            details.append(ft.Text(f"e.g. {word.example}", italic=True, size=13, color=DesignTokens.TEXT_TERTIARY))
        if word.part_of_speech:
            labels = ", ".join(sorted(TextParser.split_camel_case(p.value) for p in word.part_of_speech))
            details.append(ft.Text(labels, size=12, color=DesignTokens.TEXT_MUTED))

        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Text(
                        f"{word.vocabulary} (id: {word.id})",
                        size=16,
                        weight=ft.FontWeight.W_600,
                        color=DesignTokens.TEXT_PRIMARY,
                    ),
                    ft.Text(f"Category: {word.category}", size=12, color=DesignTokens.TEXT_TERTIARY),
                    *details,
                    ft.Row(
                        controls=[
                            ft.OutlinedButton(
                                "Delete",
                                icon=ft.Icons.DELETE_OUTLINE,
                                icon_color=DesignTokens.ACCENT_DANGER,
                                on_click=lambda e, wid=word.id: self._on_delete_click(wid),
                            ),
                            ft.TextButton(
                                "Update",
                                icon=ft.Icons.EDIT_OUTLINED,
                                on_click=lambda e, wid=word.id: self._on_navigate(
                                    self.presenter.update_route(wid)
                                ),
                            ),
                        ],
                        spacing=DesignTokens.SPACING_SM,
                    ),
                ],
                spacing=DesignTokens.SPACING_XS,
            ),
            padding=DesignTokens.SPACING_MD,
            border_radius=DesignTokens.RADIUS_MD,
            bgcolor=DesignTokens.BG_CARD,
        )

    def _on_delete_click(self, word_id: int) -> None:
        self.page.run_task(self._delete, word_id)

    async def _delete(self, word_id: int) -> None:
        if await self.presenter.delete(word_id):
            show_snackbar(self.page, f"Deleted word {word_id}")
        self._render()
