"""
Vocabulary form controller.

One controller serves both the add page and the update page; the mode tag
and the optional target id decide which store call a submit issues. The
controller holds no Flet references so it can be driven from tests.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Set, Type

from pydantic import ValidationError

from ..models import PartOfSpeech, QuickWordFormSchema, WordFormSchema, WordRecord, field_errors
from ..services import StoreError, WordStore
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

# (message, is_error)
Notifier = Callable[[str, bool], None]


class FormMode(Enum):
    """What a submit does."""
    CREATE = "create"
    UPDATE = "update"

    @property
    def verb(self) -> str:
        return "add" if self is FormMode.CREATE else "update"

    @property
    def past_tense(self) -> str:
        return "added" if self is FormMode.CREATE else "updated"


@dataclass
class FormValues:
    """Current content of the form fields."""
    vocabulary: str = ""
    meaning: str = ""
    translate: str = ""
    example_sentence: str = ""
    category: str = ""
    part_of_speech: Set[PartOfSpeech] = field(default_factory=set)

    @classmethod
    def from_record(cls, record: WordRecord) -> "FormValues":
        return cls(
            vocabulary=record.vocabulary,
            meaning=record.meaning,
            translate=record.translate,
            example_sentence=record.example or "",
            category=record.category,
            part_of_speech=set(record.part_of_speech),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "vocabulary": self.vocabulary,
            "meaning": self.meaning,
            "translate": self.translate,
            "example_sentence": self.example_sentence,
            "category": self.category,
            "part_of_speech": set(self.part_of_speech),
        }


TEXT_FIELDS = ("vocabulary", "meaning", "translate", "example_sentence", "category")


class VocabularyFormController:
    """
    Validates and submits a single word.

    Usage:
        form = VocabularyFormController(store, FormMode.UPDATE, word_id=3, notify=show)
        await form.initialize()
        form.set_field("meaning", "existing everywhere")
        await form.submit()
    """

    def __init__(
        self,
        store: WordStore,
        mode: FormMode = FormMode.CREATE,
        word_id: Optional[int] = None,
        schema: Type[QuickWordFormSchema] = WordFormSchema,
        notify: Optional[Notifier] = None,
    ) -> None:
        """
        Args:
            store: Word store that receives create/update calls
            mode: CREATE or UPDATE
            word_id: Target word; required for UPDATE
            schema: Validation schema (WordFormSchema or QuickWordFormSchema)
            notify: Callback receiving (message, is_error)
        """
        self.store = store
        self.mode = mode
        self.word_id = word_id
        self.schema = schema
        self._notify = notify
        self.values = FormValues()
        self.errors: Dict[str, str] = {}
        self.submitting: bool = False

    @property
    def includes_part_of_speech(self) -> bool:
        return self.schema.includes_part_of_speech()

    @property
    def title(self) -> str:
        return "Add word" if self.mode is FormMode.CREATE else "Update word"

    def notify(self, message: str, error: bool = False) -> None:
        if self._notify is not None:
            self._notify(message, error)

    async def initialize(self) -> bool:
        """
        Populate the fields from the stored word in update mode.

        A failed fetch leaves the defaults in place and is only logged.

        Returns:
            True if fields were populated
        """
        if self.mode is not FormMode.UPDATE or self.word_id is None:
            return False

        try:
            record = await self.store.read_by_id(self.word_id)
        except StoreError as e:
            logger.error("Failed to load word %s for editing: %s", self.word_id, e)
            return False

        self.values = FormValues.from_record(record)
        self.errors = {}
        return True

    def set_field(self, name: str, value: str) -> None:
        """Update a text field and clear its error."""
        if name not in TEXT_FIELDS:
            raise KeyError(name)
        setattr(self.values, name, value or "")
        self.errors.pop(name, None)

    def toggle_part_of_speech(self, pos: PartOfSpeech, checked: bool) -> None:
        if checked:
            self.values.part_of_speech.add(pos)
        else:
            self.values.part_of_speech.discard(pos)
        self.errors.pop("part_of_speech", None)

    def validate(self) -> Optional[QuickWordFormSchema]:
        """
        Run the schema over the current values.

        Returns:
            The validated form, or None with per-field messages in errors
        """
        try:
            form = self.schema.model_validate(self.values.as_dict())
        except ValidationError as e:
            self.errors = field_errors(e)
            return None
        self.errors = {}
        return form

    def reset(self) -> None:
        """Reset all fields to empty defaults."""
        self.values = FormValues()
        self.errors = {}

    async def submit(self) -> bool:
        """
        Validate and send the form to the store.

        Issues at most one store call. On success the form is reset; on
        failure the entered values are kept.

        Returns:
            True if the store accepted the word
        """
        form = self.validate()
        if form is None:
            return False

        if self.mode is FormMode.UPDATE and self.word_id is None:
            self.notify("Cannot update: no word selected", error=True)
            return False

        draft = form.to_draft()
        self.submitting = True
        try:
            if self.mode is FormMode.CREATE:
                await self.store.create(draft)
            else:
                await self.store.update(self.word_id, draft)
        except StoreError as e:
            logger.error("Failed to %s word: %s", self.mode.verb, e)
            self.notify(f"Failed to {self.mode.verb} word: {e}", error=True)
            return False
        finally:
            self.submitting = False

        self.reset()
        self.notify(f"Word {self.mode.past_tense}: \"{draft.vocabulary}\"")
        return True
