"""Shared fixtures for the Wordbook test suite."""

from typing import Dict, List, Optional

import pytest

from wordbook.config import SettingsManager
from wordbook.models import DateStats, PartOfSpeech, WordDraft, WordRecord
from wordbook.services import StoreError, WordNotFoundError, WordStore

SETTING_ENV_KEYS = list(SettingsManager.DEFAULTS) + [
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "GROQ_API_KEY",
    "AI_BASE_URL",
]


class FakeStore(WordStore):
    """In-memory WordStore that records every call and can be told to fail."""

    def __init__(self, words: Optional[List[WordRecord]] = None, stats: Optional[List[DateStats]] = None):
        self.words: Dict[int, WordRecord] = {w.id: w for w in words or []}
        self.stats = list(stats or [])
        self.calls: List[tuple] = []
        self.fail_with: Optional[StoreError] = None
        self._next_id = max(self.words, default=0) + 1

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def create(self, draft: WordDraft) -> int:
        self.calls.append(("create", draft))
        self._check()
        word_id = self._next_id
        self._next_id += 1
        self.words[word_id] = WordRecord.from_draft(word_id, draft)
        return word_id

    async def read_all(self) -> List[WordRecord]:
        self.calls.append(("read_all",))
        self._check()
        return [self.words[k] for k in sorted(self.words)]

    async def read_by_id(self, word_id: int) -> WordRecord:
        self.calls.append(("read_by_id", word_id))
        self._check()
        if word_id not in self.words:
            raise WordNotFoundError(word_id)
        return self.words[word_id]

    async def update(self, word_id: int, draft: WordDraft) -> None:
        self.calls.append(("update", word_id, draft))
        self._check()
        if word_id not in self.words:
            raise WordNotFoundError(word_id)
        self.words[word_id] = WordRecord.from_draft(word_id, draft)

    async def delete(self, word_id: int) -> None:
        self.calls.append(("delete", word_id))
        self._check()
        if word_id not in self.words:
            raise WordNotFoundError(word_id)
        del self.words[word_id]

    async def stats_by_date(self) -> List[DateStats]:
        self.calls.append(("stats_by_date",))
        self._check()
        return list(self.stats)

    def calls_named(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Give every test a fresh settings singleton backed by a temp file."""
    for key in SETTING_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    SettingsManager.reset_instance()
    settings = SettingsManager(str(tmp_path / "settings.json"))
    yield settings
    SettingsManager.reset_instance()


@pytest.fixture
def sample_words() -> List[WordRecord]:
    return [
        WordRecord(
            id=1,
            vocabulary="ubiquitous",
            meaning="present everywhere",
            translate="どこにでもある",
            category="adjectives",
            example="Smartphones are ubiquitous.",
            part_of_speech={PartOfSpeech.ADJECTIVE},
        ),
        WordRecord(
            id=2,
            vocabulary="run",
            meaning="move fast on foot",
            translate="走る",
            category="",
            example=None,
            part_of_speech={PartOfSpeech.VERB, PartOfSpeech.NOUN},
        ),
    ]


@pytest.fixture
def store(sample_words) -> FakeStore:
    return FakeStore(sample_words)


@pytest.fixture
def empty_store() -> FakeStore:
    return FakeStore()
