"""Typed failures raised by the service layer."""


class StoreError(Exception):
    """A word store operation failed."""


class WordNotFoundError(StoreError):
    """No word exists with the requested id."""
    
    def __init__(self, word_id: int):
        super().__init__(f"Word {word_id} not found")
        self.word_id = word_id


class AIProviderError(Exception):
    """The LLM provider returned an error or could not be reached."""


class SuggestionError(Exception):
    """Fetching word suggestions failed."""
