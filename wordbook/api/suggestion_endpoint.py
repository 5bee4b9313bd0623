"""
Suggestion endpoint.

A small aiohttp web app that accepts the learner's word list and returns
the LLM's raw message, so the desktop client never needs an API key.

    POST /api/suggestion-word   {"vocabulary": [WordRecord, ...]}
"""

import json
from typing import Any, Dict, List, Optional

from aiohttp import web

from ..config import Config, SettingsManager
from ..models import WordRecord
from ..services import AIProviderError, AIService, build_prompt
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

SUGGESTION_ROUTE = "/api/suggestion-word"

AI_SERVICE_KEY = web.AppKey("ai_service", AIService)
COUNT_KEY = web.AppKey("suggestion_count", int)


def _error(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


def _parse_words(items: List[Any]) -> List[WordRecord]:
    """Parse posted words; entries without an id get their list position."""
    words = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"entry {index} is not an object")
        data: Dict[str, Any] = {"id": index + 1, **item}
        words.append(WordRecord.from_dict(data))
    return words


async def handle_suggestion(request: web.Request) -> web.Response:
    """Build the prompt from the posted words and relay the LLM answer."""
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return _error("Request body must be JSON", 400)

    vocabulary = body.get("vocabulary") if isinstance(body, dict) else None
    if not isinstance(vocabulary, list):
        return _error("'vocabulary' must be a list of words", 400)

    try:
        words = _parse_words(vocabulary)
    except (TypeError, ValueError) as e:
        return _error(f"Invalid word entry: {e}", 400)

    prompt = build_prompt(words, request.app[COUNT_KEY])
    try:
        message = await request.app[AI_SERVICE_KEY].complete_raw(prompt)
    except AIProviderError as e:
        logger.error("Error processing suggestion request: %s", e)
        return _error(f"Failed to process request: {e}", 500)

    return web.json_response(message)


def create_app(ai_service: Optional[AIService] = None, count: Optional[int] = None) -> web.Application:
    """
    Build the endpoint application.

    Args:
        ai_service: LLM client (configured from settings if None)
        count: Number of words to request (SUGGESTION_COUNT if None)
    """
    app = web.Application()
    app[AI_SERVICE_KEY] = ai_service or AIService()
    app[COUNT_KEY] = count or int(SettingsManager().get("SUGGESTION_COUNT", Config.SUGGESTION_COUNT))
    app.router.add_post(SUGGESTION_ROUTE, handle_suggestion)

    async def _close_ai(app: web.Application) -> None:
        await app[AI_SERVICE_KEY].close()

    app.on_cleanup.append(_close_ai)
    return app


def main() -> None:
    """Run the endpoint on the configured host and port."""
    web.run_app(create_app(), host=Config.SUGGESTION_API_HOST, port=Config.SUGGESTION_API_PORT)


if __name__ == "__main__":
    main()
