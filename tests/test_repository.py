"""Tests for the JSON and SQLite word repositories."""

import json
from datetime import date

import pytest

from wordbook.models import DateStats, PartOfSpeech, WordDraft
from wordbook.services import (
    JSONWordRepository,
    SQLiteWordRepository,
    StoreError,
    WordNotFoundError,
)


def _draft(vocabulary: str = "ubiquitous", **overrides) -> WordDraft:
    data = {
        "vocabulary": vocabulary,
        "meaning": "present everywhere",
        "translate": "どこにでもある",
        "category": "adjectives",
        "example": "Smartphones are ubiquitous.",
        "part_of_speech": {PartOfSpeech.ADJECTIVE},
    }
    data.update(overrides)
    return WordDraft(**data)


@pytest.fixture(params=["json", "sqlite"])
def repository(request, tmp_path):
    if request.param == "json":
        repo = JSONWordRepository(str(tmp_path / "words.json"))
    else:
        repo = SQLiteWordRepository(str(tmp_path / "wordbook.db"))
    repo.load()
    return repo


class TestRepositoryContract:
    def test_add_then_get(self, repository) -> None:
        word_id = repository.add(_draft())

        record = repository.get_by_id(word_id)
        assert record.id == word_id
        assert record.vocabulary == "ubiquitous"
        assert record.translate == "どこにでもある"
        assert record.example == "Smartphones are ubiquitous."
        assert record.part_of_speech == {PartOfSpeech.ADJECTIVE}

    def test_ids_increase_and_are_not_reused(self, repository) -> None:
        first = repository.add(_draft("alpha"))
        second = repository.add(_draft("beta"))
        assert second > first

        repository.delete(second)
        third = repository.add(_draft("gamma"))
        assert third > second

    def test_get_all_ordered_by_id(self, repository) -> None:
        for name in ("alpha", "beta", "gamma"):
            repository.add(_draft(name))
        assert [w.vocabulary for w in repository.get_all()] == ["alpha", "beta", "gamma"]

    def test_update_replaces_fields(self, repository) -> None:
        word_id = repository.add(_draft())

        repository.update(word_id, _draft(meaning="found everywhere", example=None, part_of_speech=set()))

        record = repository.get_by_id(word_id)
        assert record.meaning == "found everywhere"
        assert record.example is None
        assert record.part_of_speech == set()

    def test_delete_removes_word(self, repository) -> None:
        word_id = repository.add(_draft())
        repository.delete(word_id)
        assert repository.get_all() == []

    @pytest.mark.parametrize("operation", ["get", "update", "delete"])
    def test_unknown_id(self, repository, operation: str) -> None:
        with pytest.raises(WordNotFoundError) as exc_info:
            if operation == "get":
                repository.get_by_id(404)
            elif operation == "update":
                repository.update(404, _draft())
            else:
                repository.delete(404)
        assert exc_info.value.word_id == 404
        assert isinstance(exc_info.value, StoreError)

    def test_stats_by_date(self, repository) -> None:
        first = repository.add(_draft("alpha"))
        repository.add(_draft("beta"))
        repository.update(first, _draft("alpha"))

        today = date.today().isoformat()
        assert repository.stats_by_date() == [DateStats(date=today, add=2, update=1, quiz=None)]

    def test_stats_empty(self, repository) -> None:
        assert repository.stats_by_date() == []

    def test_activity_survives_delete(self, repository) -> None:
        word_id = repository.add(_draft())
        repository.delete(word_id)
        assert repository.stats_by_date()[0].add == 1

    def test_unicode_is_nfc_normalized(self, repository) -> None:
        decomposed = "cafe\u0301"
        word_id = repository.add(_draft(decomposed))
        assert repository.get_by_id(word_id).vocabulary == "caf\u00e9"


class TestJSONWordRepository:
    def test_missing_file_is_empty(self, tmp_path) -> None:
        repo = JSONWordRepository(str(tmp_path / "absent.json"))
        repo.load()
        assert repo.get_all() == []

    def test_persists_across_instances(self, tmp_path) -> None:
        path = str(tmp_path / "words.json")
        repo = JSONWordRepository(path)
        repo.load()
        repo.add(_draft())

        reopened = JSONWordRepository(path)
        reopened.load()
        assert [w.vocabulary for w in reopened.get_all()] == ["ubiquitous"]

    def test_file_uses_camel_case_keys(self, tmp_path) -> None:
        path = tmp_path / "words.json"
        repo = JSONWordRepository(str(path))
        repo.load()
        repo.add(_draft(part_of_speech={PartOfSpeech.VERB, PartOfSpeech.NOUN}))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["words"][0]["partOfSpeech"] == ["Noun", "Verb"]
        assert data["next_id"] == 2

    def test_reads_legacy_list(self, tmp_path) -> None:
        path = tmp_path / "words.json"
        path.write_text(json.dumps([
            {"id": 3, "vocabulary": "run", "meaning": "move fast", "translate": "走る",
             "category": "", "example": "", "partOfSpeech": ["Verb", "Gerund"]},
        ]), encoding="utf-8")
        repo = JSONWordRepository(str(path))
        repo.load()

        record = repo.get_by_id(3)
        assert record.example is None
        assert record.part_of_speech == {PartOfSpeech.VERB}
        assert repo.add(_draft()) == 4

    def test_corrupt_file_raises_store_error(self, tmp_path) -> None:
        path = tmp_path / "words.json"
        path.write_text("{not json", encoding="utf-8")
        repo = JSONWordRepository(str(path))
        with pytest.raises(StoreError):
            repo.load()


class TestSQLiteWordRepository:
    def test_quiz_column_when_logged(self, tmp_path) -> None:
        repo = SQLiteWordRepository(str(tmp_path / "wordbook.db"))
        repo.load()
        word_id = repo.add(_draft())
        with repo._get_connection() as conn:
            conn.execute(
                "INSERT INTO activity (word_id, kind, occurred_on) VALUES (?, 'quiz', '2024-01-01')",
                (word_id,),
            )
            conn.commit()

        stats = repo.stats_by_date()
        assert stats[0] == DateStats(date="2024-01-01", add=0, update=0, quiz=1)
        assert stats[-1].quiz == 0
        assert stats[-1].add == 1


class TestJSONFailedLoad:
    def test_repository_stays_unloaded(self, tmp_path) -> None:
        path = tmp_path / "words.json"
        path.write_text('{"words": [{"id": 1, "vocabulary": "run"},]}', encoding="utf-8")
        repo = JSONWordRepository(str(path))

        with pytest.raises(StoreError):
            repo.load()
        with pytest.raises(StoreError):
            repo.get_all()
        with pytest.raises(StoreError):
            repo.add(_draft())

        assert path.read_text(encoding="utf-8") == '{"words": [{"id": 1, "vocabulary": "run"},]}'

    def test_entry_without_id_is_rejected(self, tmp_path) -> None:
        path = tmp_path / "words.json"
        path.write_text(json.dumps({"words": [{"vocabulary": "run"}]}), encoding="utf-8")
        repo = JSONWordRepository(str(path))

        with pytest.raises(StoreError, match="Malformed data"):
            repo.load()
        with pytest.raises(StoreError):
            repo.get_all()
