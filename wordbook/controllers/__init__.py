"""Controllers driving the views; no Flet imports here."""

from .vocabulary_form import FormMode, FormValues, VocabularyFormController
from .word_list import WordListPresenter
from .stats import StatsPresenter
from .suggestions import SuggestionPresenter

__all__ = [
    "FormMode",
    "FormValues",
    "VocabularyFormController",
    "WordListPresenter",
    "StatsPresenter",
    "SuggestionPresenter",
]
