"""
Suggestion Service - asks an LLM for the next words to learn.

The prompt describes the learner's current vocabulary and requests a fixed
JSON shape, but the response is never validated: the raw message object is
handed back to the caller untouched.
"""

import asyncio
import json
from typing import Any, Dict, Iterable, List, Optional

import aiohttp

from ..config import SettingsManager
from ..models import WordRecord
from ..utils.logger import setup_logger
from .ai_service import AIService
from .errors import AIProviderError, SuggestionError

logger = setup_logger(__name__)

NO_EXAMPLE = "there is no example"
UNCATEGORIZED = "uncategorized"


def build_prompt(words: Iterable[WordRecord], count: int = 5) -> str:
    """
    Build the suggestion prompt for a word list.

    Args:
        words: Every word the learner currently has
        count: Number of new words to request

    Returns:
        Prompt text
    """
    words = list(words)
    categories = [word.category for word in words]

    existing = "\n".join(
        f"""
    vocabulary: {word.vocabulary},
    meaning: {word.meaning},
    translate: {word.translate},
    example: {word.example or NO_EXAMPLE}
    category: {word.category or UNCATEGORIZED}"""
        for word in words
    )

    return f"""<task>
Analyse the user's vocabulary and recommend {count} new English words for a beginner Japanese learner.
</task>

<current_status>
  <total_words> {len(words)} </total_words>
  <category_distribution> {json.dumps(categories, ensure_ascii=False)} </category_distribution>
</current_status>

<existing_words>
{existing}
</existing_words>

<criteria>
1. No duplicates from existing words
2. Appropriate difficulty (slightly challenging is good)
3. High practical value for daily/business use
4. Related to existing words for systematic vocabulary building
5. Memorable and distinctive
</criteria>

<output_format>
Respond in this exact JSON format with exactly {count} recommendations:

```json
{{
  "recommendations": [
    {{
      "vocabulary": "word",
      "meaning": "why recommended (connection to existing words)",
      "translate": "日本語意味",
      "category": "category_name",
      "example": "Example sentence in English"
    }}
  ],
  "learningAdvice": "Overall learning advice in Japanese"
}}
```
</output_format>

<instruction>
Focus on words that build upon existing vocabulary and maintain learning motivation.
</instruction>
"""


class SuggestionService:
    """
    Requests new-word suggestions for the current vocabulary.

    Talks to the LLM directly through AIService, or posts the word list to a
    remote suggestion endpoint when endpoint_url is set.
    """

    def __init__(
        self,
        ai_service: Optional[AIService] = None,
        endpoint_url: Optional[str] = None,
        count: Optional[int] = None,
        timeout: Optional[int] = None,
    ):
        settings = SettingsManager()
        self.endpoint_url = endpoint_url if endpoint_url is not None else settings.get("SUGGESTION_ENDPOINT_URL", "")
        self.count = count or int(settings.get("SUGGESTION_COUNT", 5))
        self.timeout = timeout or int(settings.get("AI_TIMEOUT", 60))
        self._ai_service = ai_service

    @property
    def ai_service(self) -> AIService:
        """Lazy-load the AI service."""
        if self._ai_service is None:
            self._ai_service = AIService()
        return self._ai_service

    async def request(self, words: List[WordRecord]) -> Dict[str, Any]:
        """
        Fetch suggestions for the given words.

        Returns:
            The LLM's raw message object

        Raises:
            SuggestionError: Any network, API or provider failure
        """
        if self.endpoint_url:
            return await self._request_remote(words)

        try:
            return await self.ai_service.complete_raw(build_prompt(words, self.count))
        except AIProviderError as e:
            logger.error("Suggestion request failed: %s", e)
            raise SuggestionError(str(e)) from e

    async def _request_remote(self, words: List[WordRecord]) -> Dict[str, Any]:
        """POST the word list to the suggestion endpoint."""
        payload = {"vocabulary": [word.to_dict() for word in words]}
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.endpoint_url, json=payload) as response:
                    if response.status != 200:
                        raise SuggestionError(f"API responded with status: {response.status}")
                    return await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise SuggestionError("Suggestion endpoint timeout") from e
        except (aiohttp.ClientError, json.JSONDecodeError) as e:
            logger.error("Suggestion endpoint request failed: %s", e)
            raise SuggestionError(f"Suggestion endpoint request failed: {e}") from e

    async def close(self) -> None:
        if self._ai_service is not None:
            await self._ai_service.close()
