"""Tests for the word list presenter."""

from wordbook.controllers import WordListPresenter
from wordbook.services import StoreError

from tests.conftest import FakeStore


class TestWordListPresenter:
    async def test_load(self, store: FakeStore) -> None:
        presenter = WordListPresenter(store)

        assert await presenter.load() is True

        assert [w.vocabulary for w in presenter.words] == ["ubiquitous", "run"]
        assert presenter.count == 2
        assert presenter.error is None

    async def test_load_failure_leaves_empty_list(self, store: FakeStore) -> None:
        presenter = WordListPresenter(store)
        store.fail_with = StoreError("file unreadable")

        assert await presenter.load() is False

        assert presenter.words == []
        assert presenter.error == "Error: file unreadable"

    async def test_delete_drops_word_locally(self, store: FakeStore) -> None:
        presenter = WordListPresenter(store)
        await presenter.load()

        assert await presenter.delete(1) is True

        assert [w.id for w in presenter.words] == [2]
        assert store.calls_named("delete") == [("delete", 1)]
        assert len(store.calls_named("read_all")) == 1

    async def test_delete_failure_keeps_list(self, store: FakeStore) -> None:
        presenter = WordListPresenter(store)
        await presenter.load()

        assert await presenter.delete(42) is False

        assert [w.id for w in presenter.words] == [1, 2]
        assert presenter.error == "Error: Word 42 not found"

    def test_update_route(self) -> None:
        assert WordListPresenter.update_route(7) == "/update/7"
