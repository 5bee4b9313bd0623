"""
Vocabulary Form View
--------------------

Add and update pages share this view; the controller decides which store
call a submit makes.
"""

from typing import Dict, Optional, Type

import flet as ft

from ..controllers import FormMode, VocabularyFormController
from ..models import PartOfSpeech, QuickWordFormSchema, WordFormSchema
from ..services import WordStore
from ..utils.parsing import TextParser
from .theme import DesignTokens, build_header, primary_button, show_snackbar

# (field, label, multiline)
FIELDS = (
    ("vocabulary", "Word", False),
    ("meaning", "Meaning", True),
    ("translate", "Translation", False),
    ("example_sentence", "Example sentence", True),
    ("category", "Category", False),
)


class VocabularyFormView:
    """Form bound to a VocabularyFormController."""

    def __init__(
        self,
        page: ft.Page,
        store: WordStore,
        mode: FormMode = FormMode.CREATE,
        word_id: Optional[int] = None,
        schema: Type[QuickWordFormSchema] = WordFormSchema,
    ) -> None:
        self.page = page
        self.controller = VocabularyFormController(
            store,
            mode=mode,
            word_id=word_id,
            schema=schema,
            notify=lambda message, error: show_snackbar(self.page, message, error=error),
        )

        self._fields: Dict[str, ft.TextField] = {}
        self._pos_checkboxes: Dict[PartOfSpeech, ft.Checkbox] = {}
        self._pos_error: Optional[ft.Text] = None
        self._submit_button: Optional[ft.ElevatedButton] = None

        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def did_mount(self) -> None:
        """Prefill the form in update mode."""
        if self.controller.mode is FormMode.UPDATE:
            self.page.run_task(self._initialize)

    def _build_view(self) -> ft.Container:
        mode = self.controller.mode
        subtitle = "Add a new word" if mode is FormMode.CREATE else f"Update word {self.controller.word_id}"

        controls = [build_header(self.controller.title, subtitle)]
        for key, label, multiline in FIELDS:
            controls.append(self._create_field(label, key, multiline))

        if self.controller.includes_part_of_speech:
            controls.append(self._build_part_of_speech())

        self._submit_button = primary_button("Submit", ft.Icons.SAVE_ROUNDED, self._on_submit_click)
        controls.append(ft.Row([self._submit_button]))

        return ft.Container(
            content=ft.Column(
                controls=controls,
                spacing=DesignTokens.SPACING_SM,
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            ),
            expand=True,
            padding=DesignTokens.SPACING_LG,
        )

    def _create_field(self, label: str, key: str, multiline: bool) -> ft.TextField:
        field = ft.TextField(
            value=getattr(self.controller.values, key),
            label=label,
            multiline=multiline,
            min_lines=2 if multiline else 1,
            max_lines=4 if multiline else 1,
            border_color=ft.Colors.WHITE24,
            focused_border_color=ft.Colors.INDIGO_200,
            label_style=ft.TextStyle(color=ft.Colors.WHITE54),
            text_style=ft.TextStyle(color=ft.Colors.WHITE),
            cursor_color=ft.Colors.INDIGO_200,
            on_change=lambda e, k=key: self.controller.set_field(k, e.control.value),
        )
        self._fields[key] = field
        return field

    def _build_part_of_speech(self) -> ft.Column:
        for pos in PartOfSpeech:
            self._pos_checkboxes[pos] = ft.Checkbox(
                label=TextParser.split_camel_case(pos.value),
                value=pos in self.controller.values.part_of_speech,
                active_color=DesignTokens.ACCENT_PRIMARY,
                check_color=ft.Colors.WHITE,
                on_change=lambda e, p=pos: self.controller.toggle_part_of_speech(p, bool(e.control.value)),
            )
        self._pos_error = ft.Text("", size=12, color=DesignTokens.ACCENT_DANGER, visible=False)

        return ft.Column(
            controls=[
                ft.Text("Part of speech", size=13, color=DesignTokens.TEXT_SECONDARY),
                ft.GridView(
                    controls=list(self._pos_checkboxes.values()),
                    runs_count=2,
                    child_aspect_ratio=6,
                    height=220,
                ),
                self._pos_error,
            ],
            spacing=DesignTokens.SPACING_XS,
        )

    def _sync_from_controller(self) -> None:
        """Copy controller values and errors into the controls."""
        values = self.controller.values
        errors = self.controller.errors
        for key, field in self._fields.items():
            field.value = getattr(values, key)
            field.error_text = errors.get(key)
        for pos, checkbox in self._pos_checkboxes.items():
            checkbox.value = pos in values.part_of_speech
        if self._pos_error is not None:
            self._pos_error.value = errors.get("part_of_speech", "")
            self._pos_error.visible = "part_of_speech" in errors
        self.page.update()

    async def _initialize(self) -> None:
        await self.controller.initialize()
        self._sync_from_controller()

    def _on_submit_click(self, e: ft.ControlEvent) -> None:
        self.page.run_task(self._submit)

    async def _submit(self) -> None:
        self._submit_button.disabled = True
        self.page.update()
        try:
            await self.controller.submit()
        finally:
            self._submit_button.disabled = False
            self._sync_from_controller()
