"""
Repository Pattern - Abstract data access layer.

Enables switching between JSON and SQLite backends without changing the
service or UI code. Repositories are synchronous; VocabularyService moves
their calls off the UI event loop.
"""

import json
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Generator, List, Optional, Tuple

import pandas as pd

from ..config import Config
from ..models import DateStats, PartOfSpeech, WordDraft, WordRecord
from ..utils.logger import setup_logger
from ..utils.parsing import TextParser
from .errors import StoreError, WordNotFoundError

logger = setup_logger(__name__)

ACTIVITY_KINDS = ("add", "update", "quiz")


def _normalize_draft(draft: WordDraft) -> WordDraft:
    """NFC-normalize every text field of a draft."""
    return WordDraft(
        vocabulary=TextParser.normalize_unicode(draft.vocabulary),
        meaning=TextParser.normalize_unicode(draft.meaning),
        translate=TextParser.normalize_unicode(draft.translate),
        category=TextParser.normalize_unicode(draft.category),
        example=TextParser.normalize_optional(draft.example),
        part_of_speech=set(draft.part_of_speech),
    )


class BaseWordRepository(ABC):
    """
    Abstract base class for vocabulary repositories.

    Defines the contract for all data access operations. Every failure is
    raised as StoreError so callers never see backend-specific exceptions.
    """

    @abstractmethod
    def load(self) -> None:
        """Open or initialize storage."""
        pass

    @abstractmethod
    def get_all(self) -> List[WordRecord]:
        """Get all words ordered by id."""
        pass

    @abstractmethod
    def get_by_id(self, word_id: int) -> WordRecord:
        """Get a single word by id."""
        pass

    @abstractmethod
    def add(self, draft: WordDraft) -> int:
        """Add a new word. Returns the new id."""
        pass

    @abstractmethod
    def update(self, word_id: int, draft: WordDraft) -> None:
        """Replace the editable fields of a word."""
        pass

    @abstractmethod
    def delete(self, word_id: int) -> None:
        """Delete a word by id."""
        pass

    @abstractmethod
    def get_activity(self) -> pd.DataFrame:
        """Get the activity log as a DataFrame with 'date' and 'kind' columns."""
        pass

    def stats_by_date(self) -> List[DateStats]:
        """
        Aggregate the activity log into per-date counts.

        Returns:
            One DateStats per date, ascending. quiz is only set when the
            log contains quiz events.
        """
        df = self.get_activity()
        if df.empty:
            return []

        counts = df.groupby(["date", "kind"]).size().unstack(fill_value=0).sort_index()
        has_quiz = "quiz" in counts.columns

        stats = []
        for day, row in counts.iterrows():
            stats.append(DateStats(
                date=str(day),
                add=int(row.get("add", 0)),
                update=int(row.get("update", 0)),
                quiz=int(row["quiz"]) if has_quiz else None,
            ))
        return stats


class JSONWordRepository(BaseWordRepository):
    """
    JSON file repository.

    Keeps the whole word list in memory and rewrites the file after every
    mutation. Accepts the legacy format (a bare list of words) on read.
    """

    def __init__(self, json_path: Optional[str] = None):
        """
        Initialize JSON repository.

        Args:
            json_path: Path to the words file
        """
        self.json_path = Path(json_path or Config.WORDS_FILE)
        self._words: Optional[List[WordRecord]] = None
        self._activity: List[Dict[str, Any]] = []
        self._next_id: int = 1
        self._lock = Lock()

    def load(self) -> None:
        """
        Load words from the JSON file. A missing file means an empty store.

        State is only replaced after the whole file parsed, so a failed load
        leaves the repository unloaded and the file untouched.
        """
        with self._lock:
            words, activity, next_id = self._read_file()
            self._words, self._activity, self._next_id = words, activity, next_id

        logger.info("Loaded %d words from %s", len(words), self.json_path)

    def _read_file(self) -> Tuple[List[WordRecord], List[Dict[str, Any]], int]:
        if not self.json_path.exists():
            return [], [], 1

        try:
            with open(self.json_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read {self.json_path.name}: {e}") from e

        try:
            if isinstance(data, list):
                raw_words, activity, stored_next = data, [], 1
            else:
                raw_words = data.get("words", [])
                activity = list(data.get("activity", []))
                stored_next = int(data.get("next_id", 1))
            words = [WordRecord.from_dict(item) for item in raw_words]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed data in {self.json_path.name}: {e}") from e

        last_id = max((w.id for w in words), default=0)
        return words, activity, max(stored_next, last_id + 1)

    def _ensure_loaded(self) -> List[WordRecord]:
        if self._words is None:
            self.load()
        return self._words

    def _save(self) -> None:
        """Write the current state to disk. Caller holds the lock."""
        payload = {
            "next_id": self._next_id,
            "words": [w.to_dict() for w in self._words],
            "activity": self._activity,
        }
        try:
            self.json_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.json_path.with_suffix(".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            tmp_path.replace(self.json_path)
        except OSError as e:
            raise StoreError(f"Failed to write {self.json_path.name}: {e}") from e

    def _index_of(self, word_id: int) -> int:
        for index, word in enumerate(self._words):
            if word.id == word_id:
                return index
        raise WordNotFoundError(word_id)

    def _log(self, kind: str, word_id: int) -> None:
        self._activity.append({
            "date": date.today().isoformat(),
            "kind": kind,
            "word_id": word_id,
        })

    def get_all(self) -> List[WordRecord]:
        """Get all words."""
        words = self._ensure_loaded()
        return [WordRecord.from_dict(w.to_dict()) for w in words]

    def get_by_id(self, word_id: int) -> WordRecord:
        """Get a word by id."""
        words = self._ensure_loaded()
        return WordRecord.from_dict(words[self._index_of(word_id)].to_dict())

    def add(self, draft: WordDraft) -> int:
        """Add a new word."""
        self._ensure_loaded()
        with self._lock:
            word_id = self._next_id
            self._words.append(WordRecord.from_draft(word_id, _normalize_draft(draft)))
            self._next_id += 1
            self._log("add", word_id)
            try:
                self._save()
            except StoreError:
                self._words.pop()
                self._activity.pop()
                self._next_id -= 1
                raise
        return word_id

    def update(self, word_id: int, draft: WordDraft) -> None:
        """Replace a word's editable fields."""
        self._ensure_loaded()
        with self._lock:
            index = self._index_of(word_id)
            previous = self._words[index]
            self._words[index] = WordRecord.from_draft(word_id, _normalize_draft(draft))
            self._log("update", word_id)
            try:
                self._save()
            except StoreError:
                self._words[index] = previous
                self._activity.pop()
                raise

    def delete(self, word_id: int) -> None:
        """Delete a word."""
        self._ensure_loaded()
        with self._lock:
            index = self._index_of(word_id)
            removed = self._words.pop(index)
            try:
                self._save()
            except StoreError:
                self._words.insert(index, removed)
                raise

    def get_activity(self) -> pd.DataFrame:
        """Get the activity log."""
        self._ensure_loaded()
        if not self._activity:
            return pd.DataFrame(columns=["date", "kind"])
        return pd.DataFrame(self._activity)[["date", "kind"]]


class SQLiteWordRepository(BaseWordRepository):
    """
    SQLite-based repository implementation.

    Provides:
    - Transactional updates (no full-file rewrites)
    - AUTOINCREMENT ids, never reused after a delete
    - An activity table that feeds stats_by_date
    """

    # Schema version for migrations
    SCHEMA_VERSION = 1

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize SQLite repository.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path or Config.DB_FILE)
        self._schema_ready = False
        self._ensure_db_dir()

    def _ensure_db_dir(self) -> None:
        """Ensure database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get database connection with context manager."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database: {e}") from e
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Database error: {e}") from e
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY,
                    applied_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS words (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    vocabulary TEXT NOT NULL,
                    meaning TEXT NOT NULL,
                    translate TEXT NOT NULL,
                    example TEXT,
                    category TEXT NOT NULL DEFAULT '',
                    part_of_speech TEXT NOT NULL DEFAULT '[]',
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    updated_at TEXT
                )
            """)

            # No foreign key: history outlives deleted words
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS activity (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    word_id INTEGER,
                    kind TEXT CHECK(kind IN ('add', 'update', 'quiz')),
                    occurred_on TEXT NOT NULL
                )
            """)

            cursor.execute("CREATE INDEX IF NOT EXISTS idx_words_vocabulary ON words(vocabulary)")
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_activity_date ON activity(occurred_on)")

            cursor.execute("INSERT OR IGNORE INTO schema_version (version, applied_at) VALUES (?, ?)",
                          (self.SCHEMA_VERSION, datetime.now().isoformat()))

            conn.commit()
        self._schema_ready = True

    def load(self) -> None:
        """Initialize database and schema."""
        self._init_schema()

    def _ensure_schema(self) -> None:
        if not self._schema_ready:
            self._init_schema()

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> WordRecord:
        try:
            pos_values = json.loads(row["part_of_speech"] or "[]")
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed part_of_speech for word %s", row["id"])
            pos_values = []
        return WordRecord(
            id=row["id"],
            vocabulary=row["vocabulary"],
            meaning=row["meaning"],
            translate=row["translate"],
            category=row["category"] or "",
            example=row["example"] or None,
            part_of_speech=PartOfSpeech.parse_many(pos_values),
        )

    @staticmethod
    def _draft_columns(draft: WordDraft) -> Dict[str, Any]:
        draft = _normalize_draft(draft)
        data = draft.to_dict()
        return {
            "vocabulary": data["vocabulary"],
            "meaning": data["meaning"],
            "translate": data["translate"],
            "example": data["example"],
            "category": data["category"],
            "part_of_speech": json.dumps(data["partOfSpeech"]),
        }

    @staticmethod
    def _log(cursor: sqlite3.Cursor, kind: str, word_id: int) -> None:
        cursor.execute(
            "INSERT INTO activity (word_id, kind, occurred_on) VALUES (?, ?, ?)",
            (word_id, kind, date.today().isoformat()),
        )

    def get_all(self) -> List[WordRecord]:
        """Get all words ordered by id."""
        self._ensure_schema()
        with self._get_connection() as conn:
            rows = conn.execute("SELECT * FROM words ORDER BY id").fetchall()
            return [self._row_to_record(row) for row in rows]

    def get_by_id(self, word_id: int) -> WordRecord:
        """Get a word by id."""
        self._ensure_schema()
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM words WHERE id = ?", (word_id,)).fetchone()
            if row is None:
                raise WordNotFoundError(word_id)
            return self._row_to_record(row)

    def add(self, draft: WordDraft) -> int:
        """Add a new word. Returns the new row id."""
        self._ensure_schema()
        columns = self._draft_columns(draft)
        columns["created_at"] = datetime.now().isoformat()

        placeholders = ", ".join("?" for _ in columns)
        column_names = ", ".join(columns.keys())

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"INSERT INTO words ({column_names}) VALUES ({placeholders})",
                list(columns.values())
            )
            word_id = cursor.lastrowid
            self._log(cursor, "add", word_id)
            conn.commit()
            return word_id

    def update(self, word_id: int, draft: WordDraft) -> None:
        """Replace a word's editable fields."""
        self._ensure_schema()
        columns = self._draft_columns(draft)
        columns["updated_at"] = datetime.now().isoformat()

        set_clause = ", ".join(f"{k} = ?" for k in columns.keys())
        values = list(columns.values()) + [word_id]

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"UPDATE words SET {set_clause} WHERE id = ?", values)
            if cursor.rowcount == 0:
                conn.rollback()
                raise WordNotFoundError(word_id)
            self._log(cursor, "update", word_id)
            conn.commit()

    def delete(self, word_id: int) -> None:
        """Delete a word by id."""
        self._ensure_schema()
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM words WHERE id = ?", (word_id,))
            if cursor.rowcount == 0:
                conn.rollback()
                raise WordNotFoundError(word_id)
            conn.commit()

    def get_activity(self) -> pd.DataFrame:
        """Get the activity log as a DataFrame."""
        self._ensure_schema()
        with self._get_connection() as conn:
            try:
                return pd.read_sql_query(
                    "SELECT occurred_on AS date, kind FROM activity ORDER BY occurred_on",
                    conn,
                )
            except (pd.errors.DatabaseError, sqlite3.Error) as e:
                raise StoreError(f"Failed to read activity: {e}") from e
