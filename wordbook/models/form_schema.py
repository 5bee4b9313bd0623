"""Pydantic schemas for the vocabulary form."""

from typing import Dict, Set

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from .word import PartOfSpeech, WordDraft


class QuickWordFormSchema(BaseModel):
    """Short form without part-of-speech tags."""

    vocabulary: str = Field(min_length=2, max_length=100)
    meaning: str = Field(min_length=2, max_length=100)
    translate: str = Field(min_length=2, max_length=100)
    example_sentence: str = Field(min_length=2, max_length=1000)
    category: str = ""

    model_config = ConfigDict(str_strip_whitespace=False, extra="ignore")

    @classmethod
    def includes_part_of_speech(cls) -> bool:
        return "part_of_speech" in cls.model_fields

    def to_draft(self) -> WordDraft:
        return WordDraft(
            vocabulary=self.vocabulary,
            meaning=self.meaning,
            translate=self.translate,
            category=self.category,
            example=self.example_sentence,
            part_of_speech=set(getattr(self, "part_of_speech", set())),
        )


class WordFormSchema(QuickWordFormSchema):
    """Canonical vocabulary form."""

    meaning: str = Field(min_length=2, max_length=1000)
    part_of_speech: Set[PartOfSpeech] = Field(default_factory=set)

    @field_validator("part_of_speech")
    @classmethod
    def _require_selection(cls, value: Set[PartOfSpeech]) -> Set[PartOfSpeech]:
        if not value:
            raise PydanticCustomError(
                "part_of_speech_empty",
                "You have to select at least one item.",
            )
        return value


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """Collapse a ValidationError into the first message per field."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("__root__",)
        errors.setdefault(str(loc[0]), error["msg"])
    return errors
