"""Data models for Wordbook."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Set


class PartOfSpeech(Enum):
    """Grammatical categories a word can be tagged with."""
    NOUN = "Noun"
    VERB = "Verb"
    ADJECTIVE = "Adjective"
    ADVERB = "Adverb"
    PRONOUN = "Pronoun"
    AUXILIARY_VERB = "AuxiliaryVerb"
    ARTICLE = "Article"
    CONJUNCTION = "Conjunction"
    PREPOSITION = "Preposition"
    INTERJECTION = "Interjection"
    OTHER = "Other"
    
    @classmethod
    def parse_many(cls, values: Optional[Iterable[Any]]) -> Set["PartOfSpeech"]:
        """Parse stored values into a set, dropping unknown entries."""
        result: Set[PartOfSpeech] = set()
        for value in values or []:
            if isinstance(value, cls):
                result.add(value)
                continue
            try:
                result.add(cls(str(value)))
            except ValueError:
                continue
        return result


def _sorted_pos(values: Iterable[PartOfSpeech]) -> list:
    """Serialize a part-of-speech set in enum declaration order."""
    order = list(PartOfSpeech)
    return [pos.value for pos in sorted(values, key=order.index)]


@dataclass
class WordDraft:
    """Editable fields of a word, as sent to create and update."""
    
    vocabulary: str
    meaning: str
    translate: str
    category: str = ""
    example: Optional[str] = None
    part_of_speech: Set[PartOfSpeech] = field(default_factory=set)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire form."""
        return {
            "vocabulary": self.vocabulary,
            "meaning": self.meaning,
            "translate": self.translate,
            "example": self.example,
            "category": self.category,
            "partOfSpeech": _sorted_pos(self.part_of_speech),
        }


@dataclass
class WordRecord:
    """A stored vocabulary entry. The id is assigned by the store."""
    
    id: int
    vocabulary: str
    meaning: str
    translate: str
    category: str = ""
    example: Optional[str] = None
    part_of_speech: Set[PartOfSpeech] = field(default_factory=set)
    
    @classmethod
    def from_draft(cls, word_id: int, draft: WordDraft) -> "WordRecord":
        return cls(
            id=word_id,
            vocabulary=draft.vocabulary,
            meaning=draft.meaning,
            translate=draft.translate,
            category=draft.category,
            example=draft.example,
            part_of_speech=set(draft.part_of_speech),
        )
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordRecord":
        """Build a record from the camelCase wire form."""
        return cls(
            id=int(data["id"]),
            vocabulary=str(data.get("vocabulary", "")),
            meaning=str(data.get("meaning", "")),
            translate=str(data.get("translate", "")),
            category=str(data.get("category") or ""),
            example=data.get("example") or None,
            part_of_speech=PartOfSpeech.parse_many(data.get("partOfSpeech")),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire form."""
        return {"id": self.id, **self.to_draft().to_dict()}
    
    def to_draft(self) -> WordDraft:
        return WordDraft(
            vocabulary=self.vocabulary,
            meaning=self.meaning,
            translate=self.translate,
            category=self.category,
            example=self.example,
            part_of_speech=set(self.part_of_speech),
        )


@dataclass
class DateStats:
    """Per-date activity counts as aggregated by the store."""
    
    date: str
    add: int = 0
    update: int = 0
    quiz: Optional[int] = None
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DateStats":
        quiz = data.get("quiz")
        return cls(
            date=str(data["date"]),
            add=int(data.get("add", 0)),
            update=int(data.get("update", 0)),
            quiz=int(quiz) if quiz is not None else None,
        )
