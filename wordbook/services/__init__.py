"""Services layer for business logic separation."""

from .errors import AIProviderError, StoreError, SuggestionError, WordNotFoundError
from .word_store import WordStore
from .vocabulary_service import VocabularyService, StorageBackend
from .repository import BaseWordRepository, JSONWordRepository, SQLiteWordRepository
from .ai_service import AIService, AIProvider, AIConfig, extract_text
from .suggestion_service import SuggestionService, build_prompt

__all__ = [
    "AIProviderError",
    "StoreError",
    "SuggestionError",
    "WordNotFoundError",
    "WordStore",
    "VocabularyService",
    "StorageBackend",
    "BaseWordRepository",
    "JSONWordRepository",
    "SQLiteWordRepository",
    "AIService",
    "AIProvider",
    "AIConfig",
    "extract_text",
    "SuggestionService",
    "build_prompt",
]
