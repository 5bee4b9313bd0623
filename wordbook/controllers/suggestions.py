"""Suggestion presenter: the word list, the pending flag and the raw answer."""

import json
from typing import Any, List, Optional

from ..models import WordRecord
from ..services import StoreError, SuggestionError, SuggestionService, WordStore, extract_text
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


class SuggestionPresenter:
    def __init__(self, store: WordStore, service: SuggestionService) -> None:
        self.store = store
        self.service = service
        self.words: List[WordRecord] = []
        self.result: Optional[Any] = None
        self.error: Optional[str] = None
        self.loading: bool = False

    async def load_words(self) -> bool:
        try:
            self.words = list(await self.store.read_all() or [])
        except StoreError as e:
            logger.error("Failed to get words: %s", e)
            self.error = f"Error: {e}"
            return False
        return True

    async def fetch(self) -> bool:
        """
        Request suggestions for the loaded words.

        The loading flag is cleared whatever the outcome; a failure keeps
        no partial result.
        """
        self.loading = True
        try:
            self.result = await self.service.request(self.words)
            self.error = None
            return True
        except SuggestionError as e:
            self.result = None
            self.error = f"Failed to get suggestions: {e}"
            return False
        finally:
            self.loading = False

    @property
    def display_text(self) -> Optional[str]:
        """Free text from the answer, or the raw structure as JSON."""
        if self.result is None:
            return None
        text = extract_text(self.result)
        if text is not None:
            return text
        return json.dumps(self.result, indent=2, ensure_ascii=False)

    @property
    def is_raw(self) -> bool:
        """True when the answer carried no free text and is shown as JSON."""
        return self.result is not None and extract_text(self.result) is None
