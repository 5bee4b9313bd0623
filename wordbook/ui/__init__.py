"""UI components for Wordbook."""

from .word_list import WordListView
from .vocabulary_form import VocabularyFormView
from .stats import StatsView
from .suggestions import SuggestionsView
from .theme import DesignTokens, show_snackbar

__all__ = [
    'WordListView',
    'VocabularyFormView',
    'StatsView',
    'SuggestionsView',
    'DesignTokens',
    'show_snackbar',
]
