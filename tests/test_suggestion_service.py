"""Tests for prompt building, the suggestion client and its presenter."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from wordbook.controllers import SuggestionPresenter
from wordbook.services import (
    AIConfig,
    AIProvider,
    AIProviderError,
    AIService,
    SuggestionError,
    SuggestionService,
    build_prompt,
    extract_text,
)

from tests.conftest import FakeStore

ANTHROPIC_MESSAGE = {
    "id": "msg_01",
    "type": "message",
    "role": "assistant",
    "content": [{"type": "text", "text": "{\"recommendations\": []}"}],
}


def _ai_service(return_value=None, side_effect=None) -> MagicMock:
    ai = MagicMock(spec=AIService)
    ai.complete_raw = AsyncMock(return_value=return_value, side_effect=side_effect)
    ai.close = AsyncMock()
    return ai


class TestBuildPrompt:
    def test_describes_every_word(self, sample_words) -> None:
        prompt = build_prompt(sample_words, count=5)

        assert "<total_words> 2 </total_words>" in prompt
        assert '["adjectives", ""]' in prompt
        assert "vocabulary: ubiquitous" in prompt
        assert "example: Smartphones are ubiquitous." in prompt
        assert "example: there is no example" in prompt
        assert "category: uncategorized" in prompt
        assert "exactly 5 recommendations" in prompt
        assert "learningAdvice" in prompt

    def test_count(self, sample_words) -> None:
        assert "recommend 3 new English words" in build_prompt(sample_words, count=3)

    def test_empty_list(self) -> None:
        assert "<total_words> 0 </total_words>" in build_prompt([])


class TestExtractText:
    def test_anthropic(self) -> None:
        assert extract_text(ANTHROPIC_MESSAGE) == "{\"recommendations\": []}"

    def test_openai(self) -> None:
        message = {"choices": [{"message": {"role": "assistant", "content": "hello"}}]}
        assert extract_text(message) == "hello"

    def test_ollama(self) -> None:
        assert extract_text({"response": "hi"}) == "hi"

    @pytest.mark.parametrize("message", [None, "text", {}, {"content": []}, {"content": [{"type": "tool_use"}]}])
    def test_nothing_found(self, message) -> None:
        assert extract_text(message) is None


class TestSuggestionService:
    async def test_returns_raw_message(self, sample_words) -> None:
        ai = _ai_service(return_value=ANTHROPIC_MESSAGE)
        service = SuggestionService(ai_service=ai, endpoint_url="", count=4)

        result = await service.request(sample_words)

        assert result == ANTHROPIC_MESSAGE
        prompt = ai.complete_raw.await_args.args[0]
        assert "exactly 4 recommendations" in prompt

    async def test_provider_error_is_wrapped(self, sample_words) -> None:
        ai = _ai_service(side_effect=AIProviderError("Anthropic API error 529: overloaded"))
        service = SuggestionService(ai_service=ai, endpoint_url="")

        with pytest.raises(SuggestionError, match="overloaded"):
            await service.request(sample_words)

    async def test_missing_api_key(self, sample_words) -> None:
        ai = AIService(AIConfig(provider=AIProvider.ANTHROPIC, api_key=None))
        service = SuggestionService(ai_service=ai, endpoint_url="")

        with pytest.raises(SuggestionError, match="ANTHROPIC_API_KEY is not set"):
            await service.request(sample_words)

    async def test_remote_endpoint(self, sample_words) -> None:
        received = {}

        async def handler(request: web.Request) -> web.Response:
            received.update(await request.json())
            return web.json_response(ANTHROPIC_MESSAGE)

        app = web.Application()
        app.router.add_post("/api/suggestion-word", handler)
        async with TestServer(app) as server:
            url = str(server.make_url("/api/suggestion-word"))
            result = await SuggestionService(endpoint_url=url).request(sample_words)

        assert result == ANTHROPIC_MESSAGE
        assert [w["vocabulary"] for w in received["vocabulary"]] == ["ubiquitous", "run"]
        assert received["vocabulary"][1]["partOfSpeech"] == ["Noun", "Verb"]

    async def test_remote_endpoint_error_status(self, sample_words) -> None:
        async def handler(request: web.Request) -> web.Response:
            return web.json_response({"error": "Failed to process request: boom"}, status=500)

        app = web.Application()
        app.router.add_post("/api/suggestion-word", handler)
        async with TestServer(app) as server:
            service = SuggestionService(endpoint_url=str(server.make_url("/api/suggestion-word")))
            with pytest.raises(SuggestionError, match="API responded with status: 500"):
                await service.request(sample_words)

    async def test_malformed_provider_body(self, sample_words) -> None:
        async def handler(request: web.Request) -> web.Response:
            return web.Response(text="{oops", content_type="application/json")

        app = web.Application()
        app.router.add_post("/v1/messages", handler)
        async with TestServer(app) as server:
            ai = AIService(AIConfig(
                provider=AIProvider.ANTHROPIC,
                api_key="test-key",
                base_url=str(server.make_url("/v1")),
            ))
            service = SuggestionService(ai_service=ai, endpoint_url="")
            try:
                with pytest.raises(SuggestionError, match="invalid JSON"):
                    await service.request(sample_words)
            finally:
                await service.close()

    def test_settings(self, isolated_settings) -> None:
        isolated_settings.set("SUGGESTION_ENDPOINT_URL", "http://localhost:8787/api/suggestion-word")
        isolated_settings.set("SUGGESTION_COUNT", 8)
        service = SuggestionService()
        assert service.endpoint_url == "http://localhost:8787/api/suggestion-word"
        assert service.count == 8


class TestSuggestionPresenter:
    async def test_fetch_success(self, store: FakeStore) -> None:
        service = SuggestionService(ai_service=_ai_service(return_value=ANTHROPIC_MESSAGE), endpoint_url="")
        presenter = SuggestionPresenter(store, service)
        await presenter.load_words()

        assert await presenter.fetch() is True

        assert presenter.loading is False
        assert presenter.result == ANTHROPIC_MESSAGE
        assert presenter.display_text == "{\"recommendations\": []}"
        assert presenter.is_raw is False

    async def test_fetch_failure_clears_loading(self, store: FakeStore) -> None:
        service = SuggestionService(ai_service=_ai_service(side_effect=AIProviderError("timeout")), endpoint_url="")
        presenter = SuggestionPresenter(store, service)

        assert await presenter.fetch() is False

        assert presenter.loading is False
        assert presenter.result is None
        assert presenter.error == "Failed to get suggestions: timeout"

    async def test_unrecognized_answer_shown_as_json(self, store: FakeStore) -> None:
        service = SuggestionService(ai_service=_ai_service(return_value={"foo": 1}), endpoint_url="")
        presenter = SuggestionPresenter(store, service)
        await presenter.fetch()

        assert presenter.is_raw is True
        assert json.loads(presenter.display_text) == {"foo": 1}
