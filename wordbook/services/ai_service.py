"""
AI Service - LLM Integration for word suggestions.

Provides abstraction over multiple LLM providers (Anthropic, OpenAI, Groq,
local Ollama models). Providers return the raw response object; callers
decide how much of it to interpret.
"""

import asyncio
import json
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import aiohttp

from ..config import SettingsManager
from ..utils.logger import setup_logger
from .errors import AIProviderError

logger = setup_logger(__name__)


class AIProvider(Enum):
    """Supported AI providers."""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    OLLAMA = "ollama"  # Local models
    GROQ = "groq"  # Fast inference


DEFAULT_MODELS = {
    AIProvider.ANTHROPIC: "claude-3-5-haiku-20241022",
    AIProvider.OPENAI: "gpt-4o-mini",
    AIProvider.OLLAMA: "llama3.2",
    AIProvider.GROQ: "llama-3.1-8b-instant",
}

API_KEY_ENV = {
    AIProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
    AIProvider.OPENAI: "OPENAI_API_KEY",
    AIProvider.GROQ: "GROQ_API_KEY",
}


@dataclass
class AIConfig:
    """Configuration for AI service."""
    provider: AIProvider = AIProvider.ANTHROPIC
    model: str = DEFAULT_MODELS[AIProvider.ANTHROPIC]
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = 512
    timeout: int = 60


def extract_text(message: Any) -> Optional[str]:
    """
    Pull the free-text answer out of a raw provider response.

    Understands Anthropic messages (content[0].text), OpenAI-style chat
    completions (choices[0].message.content) and Ollama (response).
    Returns None when no text is found.
    """
    if not isinstance(message, dict):
        return None

    content = message.get("content")
    if isinstance(content, list) and content:
        first = content[0]
        if isinstance(first, dict) and isinstance(first.get("text"), str):
            return first["text"]

    choices = message.get("choices")
    if isinstance(choices, list) and choices:
        inner = choices[0].get("message") if isinstance(choices[0], dict) else None
        if isinstance(inner, dict) and isinstance(inner.get("content"), str):
            return inner["content"]

    if isinstance(message.get("response"), str):
        return message["response"]

    return None


class BaseAIProvider(ABC):
    """Abstract base class for AI providers."""

    def __init__(self, config: AIConfig):
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def _post_json(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """POST a JSON payload and return the decoded response body."""
        session = await self._get_session()
        name = type(self).__name__.replace("Provider", "")
        try:
            async with session.post(url, headers=headers, json=payload) as response:
                if response.status == 200:
                    return await response.json()
                error = await response.text()
                raise AIProviderError(f"{name} API error {response.status}: {error[:200]}")
        except asyncio.TimeoutError as e:
            raise AIProviderError(f"{name} API timeout") from e
        except aiohttp.ClientError as e:
            raise AIProviderError(f"{name} API request failed: {e}") from e
        except json.JSONDecodeError as e:
            raise AIProviderError(f"{name} API returned invalid JSON: {e}") from e

    @abstractmethod
    async def complete_raw(self, prompt: str, system_prompt: Optional[str] = None) -> Dict[str, Any]:
        """Send the prompt and return the provider's raw response object."""
        pass


class AnthropicProvider(BaseAIProvider):
    """Anthropic Claude API provider."""

    BASE_URL = "https://api.anthropic.com/v1"

    async def complete_raw(self, prompt: str, system_prompt: Optional[str] = None) -> Dict[str, Any]:
        """Create a message using the Anthropic Messages API."""
        url = f"{self.config.base_url or self.BASE_URL}/messages"

        headers = {
            "x-api-key": self.config.api_key or "",
            "anthropic-version": "2023-06-01",
            "Content-Type": "application/json",
        }

        payload = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

        if system_prompt:
            payload["system"] = system_prompt

        return await self._post_json(url, payload, headers)


class OpenAIProvider(BaseAIProvider):
    """OpenAI API provider (also works with compatible APIs)."""

    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    async def complete_raw(self, prompt: str, system_prompt: Optional[str] = None) -> Dict[str, Any]:
        """Create a chat completion."""
        base_url = self.config.base_url or self.DEFAULT_BASE_URL
        url = f"{base_url}/chat/completions"

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

        payload = {
            "model": self.config.model,
            "messages": messages,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

        return await self._post_json(url, payload, headers)


class GroqProvider(OpenAIProvider):
    """Groq fast inference provider (OpenAI-compatible)."""

    DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"


class OllamaProvider(BaseAIProvider):
    """Ollama local model provider."""

    DEFAULT_BASE_URL = "http://localhost:11434"

    async def complete_raw(self, prompt: str, system_prompt: Optional[str] = None) -> Dict[str, Any]:
        """Generate using local Ollama."""
        base_url = self.config.base_url or self.DEFAULT_BASE_URL
        url = f"{base_url}/api/generate"

        full_prompt = f"{system_prompt}\n\n{prompt}" if system_prompt else prompt

        payload = {
            "model": self.config.model,
            "prompt": full_prompt,
            "stream": False,
            "options": {
                "temperature": self.config.temperature,
            },
        }

        try:
            return await self._post_json(url, payload)
        except AIProviderError as e:
            if isinstance(e.__cause__, aiohttp.ClientConnectorError):
                raise AIProviderError("Cannot connect to Ollama. Is it running?") from e
            raise


PROVIDER_CLASSES = {
    AIProvider.ANTHROPIC: AnthropicProvider,
    AIProvider.OPENAI: OpenAIProvider,
    AIProvider.OLLAMA: OllamaProvider,
    AIProvider.GROQ: GroqProvider,
}


class AIService:
    """High-level entry point to the configured LLM provider."""

    def __init__(self, config: Optional[AIConfig] = None):
        """
        Initialize AI service.

        Args:
            config: AI configuration. If None, built from settings and environment.
        """
        self.config = config or self._config_from_settings()
        self._provider: Optional[BaseAIProvider] = None

    @staticmethod
    def _config_from_settings() -> AIConfig:
        """Create config from SettingsManager and API key environment variables."""
        settings = SettingsManager()
        provider_name = str(settings.get("AI_PROVIDER", "anthropic")).lower()
        try:
            provider = AIProvider(provider_name)
        except ValueError:
            logger.warning("Unknown AI_PROVIDER %r, using anthropic", provider_name)
            provider = AIProvider.ANTHROPIC

        model = settings.get("AI_MODEL") or DEFAULT_MODELS[provider]
        if provider != AIProvider.ANTHROPIC and model == DEFAULT_MODELS[AIProvider.ANTHROPIC]:
            model = DEFAULT_MODELS[provider]

        key_env = API_KEY_ENV.get(provider)
        return AIConfig(
            provider=provider,
            model=model,
            api_key=os.environ.get(key_env) if key_env else None,
            base_url=os.environ.get("AI_BASE_URL"),
            temperature=float(settings.get("AI_TEMPERATURE", 0.7)),
            max_tokens=int(settings.get("AI_MAX_TOKENS", 512)),
            timeout=int(settings.get("AI_TIMEOUT", 60)),
        )

    def _get_provider(self) -> BaseAIProvider:
        """Get or create the appropriate provider."""
        if self._provider is None:
            provider_class = PROVIDER_CLASSES.get(self.config.provider, AnthropicProvider)
            self._provider = provider_class(self.config)
        return self._provider

    async def close(self) -> None:
        """Close the AI service and release resources."""
        if self._provider:
            await self._provider.close()
            self._provider = None

    async def complete_raw(self, prompt: str, system_prompt: Optional[str] = None) -> Dict[str, Any]:
        """
        Send a prompt to the configured provider.

        Returns:
            The provider's raw response object

        Raises:
            AIProviderError: The provider is not configured or the call failed
        """
        if not self.is_configured:
            key_env = API_KEY_ENV.get(self.config.provider, "API key")
            raise AIProviderError(f"{key_env} is not set")
        logger.info("Requesting completion from %s (%s)", self.config.provider.value, self.config.model)
        return await self._get_provider().complete_raw(prompt, system_prompt)

    @property
    def is_configured(self) -> bool:
        """Check if AI service is properly configured."""
        if self.config.provider == AIProvider.OLLAMA:
            return True  # Ollama doesn't need API key
        return bool(self.config.api_key)
