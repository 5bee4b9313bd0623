"""
Word Store port.

The UI talks to persistence only through this interface. Every method is a
single awaitable round trip and raises StoreError (or WordNotFoundError) on
failure; nothing else leaks out of an implementation.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import DateStats, WordDraft, WordRecord


class WordStore(ABC):
    """Asynchronous CRUD and stats operations over vocabulary records."""
    
    @abstractmethod
    async def create(self, draft: WordDraft) -> int:
        """Store a new word and return the id assigned to it."""
    
    @abstractmethod
    async def read_all(self) -> List[WordRecord]:
        """Return every stored word."""
    
    @abstractmethod
    async def read_by_id(self, word_id: int) -> WordRecord:
        """Return the word with the given id."""
    
    @abstractmethod
    async def update(self, word_id: int, draft: WordDraft) -> None:
        """Replace all editable fields of an existing word."""
    
    @abstractmethod
    async def delete(self, word_id: int) -> None:
        """Remove the word with the given id."""
    
    @abstractmethod
    async def stats_by_date(self) -> List[DateStats]:
        """Return per-date add/update (and optionally quiz) counts."""
    
    async def close(self) -> None:
        """Release any resources held by the store."""
