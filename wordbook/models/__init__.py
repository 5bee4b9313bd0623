"""Data models for Wordbook."""

from .word import DateStats, PartOfSpeech, WordDraft, WordRecord
from .form_schema import QuickWordFormSchema, WordFormSchema, field_errors

__all__ = [
    'DateStats',
    'PartOfSpeech',
    'WordDraft',
    'WordRecord',
    'QuickWordFormSchema',
    'WordFormSchema',
    'field_errors',
]
