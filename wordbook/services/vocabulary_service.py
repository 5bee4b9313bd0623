"""
Vocabulary Service - the application's Word Store.

Adapts a synchronous repository to the asynchronous WordStore port,
enabling:
- A responsive UI (blocking I/O runs on a worker thread)
- Swappable storage backends (JSON, SQLite)
- Testable controllers (they only see WordStore)
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from functools import partial
from typing import Any, List, Optional, TYPE_CHECKING

from ..config import SettingsManager
from ..models import DateStats, WordDraft, WordRecord
from ..utils.logger import setup_logger
from .errors import StoreError
from .word_store import WordStore

if TYPE_CHECKING:
    from .repository import BaseWordRepository

logger = setup_logger(__name__)


class StorageBackend(Enum):
    """Available storage backends."""
    JSON = "json"
    SQLITE = "sqlite"


class VocabularyService(WordStore):
    """
    Word Store backed by a local repository.

    Usage:
        # JSON backend (default)
        store = VocabularyService()

        # SQLite backend
        store = VocabularyService(backend=StorageBackend.SQLITE)

        words = await store.read_all()
    """

    def __init__(
        self,
        backend: StorageBackend = StorageBackend.JSON,
        path: Optional[str] = None,
        repository: Optional["BaseWordRepository"] = None,
    ):
        """
        Initialize vocabulary service.

        Args:
            backend: Storage backend to use (JSON or SQLite)
            path: Path to the words file or database (backend default if None)
            repository: Pre-built repository; overrides backend and path
        """
        self.backend = backend
        self.path = path
        self._repository = repository
        self._executor: Optional[ThreadPoolExecutor] = None

    def _get_repository(self) -> "BaseWordRepository":
        """Get or create the appropriate repository."""
        if self._repository is None:
            if self.backend == StorageBackend.SQLITE:
                from .repository import SQLiteWordRepository
                repository = SQLiteWordRepository(self.path)
            else:
                from .repository import JSONWordRepository
                repository = JSONWordRepository(self.path)
            # Cached only once loaded; a failed load is retried on the next call
            repository.load()
            self._repository = repository
        return self._repository

    def _get_executor(self) -> ThreadPoolExecutor:
        # Single worker keeps repository access serialized
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="wordstore")
        return self._executor

    async def _run(self, method: str, *args: Any) -> Any:
        """Run a repository method on the worker thread."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(self._get_executor(), partial(self._call, method, *args))
        except StoreError:
            raise
        except Exception as e:
            logger.exception("Unexpected store failure")
            raise StoreError(str(e)) from e

    def _call(self, method: str, *args: Any) -> Any:
        return getattr(self._get_repository(), method)(*args)

    async def create(self, draft: WordDraft) -> int:
        word_id = await self._run("add", draft)
        logger.info("Created word %d (%s)", word_id, draft.vocabulary)
        return word_id

    async def read_all(self) -> List[WordRecord]:
        return await self._run("get_all")

    async def read_by_id(self, word_id: int) -> WordRecord:
        return await self._run("get_by_id", word_id)

    async def update(self, word_id: int, draft: WordDraft) -> None:
        await self._run("update", word_id, draft)
        logger.info("Updated word %d (%s)", word_id, draft.vocabulary)

    async def delete(self, word_id: int) -> None:
        await self._run("delete", word_id)
        logger.info("Deleted word %d", word_id)

    async def stats_by_date(self) -> List[DateStats]:
        return await self._run("stats_by_date")

    async def close(self) -> None:
        """Shut down the worker thread."""
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    @classmethod
    def from_settings(cls, settings: Optional[SettingsManager] = None) -> "VocabularyService":
        """
        Factory method building the store selected in settings.

        Args:
            settings: Settings manager (the shared instance if None)

        Returns:
            VocabularyService for the configured backend
        """
        settings = settings or SettingsManager()
        name = str(settings.get("STORAGE_BACKEND", "json")).lower()
        try:
            backend = StorageBackend(name)
        except ValueError:
            logger.warning("Unknown STORAGE_BACKEND %r, falling back to json", name)
            backend = StorageBackend.JSON

        path_key = "DB_FILE" if backend == StorageBackend.SQLITE else "WORDS_FILE"
        return cls(backend=backend, path=settings.get(path_key))
