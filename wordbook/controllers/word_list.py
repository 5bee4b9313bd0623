"""Word list presenter: load, delete and link to the update form."""

from typing import List, Optional

from ..models import WordRecord
from ..services import StoreError, WordStore
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

UPDATE_ROUTE = "/update/{word_id}"


class WordListPresenter:
    """Holds the locally displayed copy of the word list."""

    def __init__(self, store: WordStore) -> None:
        self.store = store
        self.words: List[WordRecord] = []
        self.error: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.words)

    async def load(self) -> bool:
        """Fetch all words. On failure the list is left empty."""
        try:
            words = await self.store.read_all()
        except StoreError as e:
            logger.error("Failed to get words: %s", e)
            self.words = []
            self.error = f"Error: {e}"
            return False

        self.words = list(words or [])
        self.error = None
        return True

    async def delete(self, word_id: int) -> bool:
        """
        Delete a word and drop it from the local list.

        The local list only changes after the store confirms the delete.
        """
        try:
            await self.store.delete(word_id)
        except StoreError as e:
            logger.error("Failed to delete word %s: %s", word_id, e)
            self.error = f"Error: {e}"
            return False

        self.words = [word for word in self.words if word.id != word_id]
        self.error = None
        return True

    @staticmethod
    def update_route(word_id: int) -> str:
        """Route that opens the vocabulary form in update mode."""
        return UPDATE_ROUTE.format(word_id=word_id)
