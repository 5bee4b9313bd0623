"""Wordbook - vocabulary flashcards with AI word suggestions"""

__version__ = "0.3.0"
__author__ = "Wordbook Team"

from .config import Config, SettingsManager
from .models import PartOfSpeech, WordDraft, WordRecord
from .services import VocabularyService, WordStore

__all__ = [
    'Config',
    'SettingsManager',
    'PartOfSpeech',
    'WordDraft',
    'WordRecord',
    'VocabularyService',
    'WordStore',
]
