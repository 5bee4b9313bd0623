"""Persistent settings manager with JSON storage and environment fallback."""

import json
import os
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

from .settings import Config
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


class SettingsManager:
    """
    Layered application settings.

    Lookup order is environment, then the user's settings file, then
    DEFAULTS. Only values set through set() are written back to the file;
    environment overrides never reach disk.

    Usage:
        settings = SettingsManager()
        backend = settings.get("STORAGE_BACKEND")
        settings.set("SUGGESTION_COUNT", 8)
    """

    _instance: Optional["SettingsManager"] = None
    _instance_lock = Lock()

    DEFAULT_SETTINGS_FILE: str = Config.SETTINGS_FILE

    # API keys are read from the environment by AIService and never stored here
    DEFAULTS: Dict[str, Any] = {
        "STORAGE_BACKEND": Config.STORAGE_BACKEND,
        "WORDS_FILE": Config.WORDS_FILE,
        "DB_FILE": Config.DB_FILE,
        "AI_PROVIDER": Config.AI_PROVIDER,
        "AI_MODEL": Config.AI_MODEL,
        "AI_MAX_TOKENS": Config.AI_MAX_TOKENS,
        "AI_TEMPERATURE": 0.7,
        "AI_TIMEOUT": Config.AI_TIMEOUT,
        "SUGGESTION_COUNT": Config.SUGGESTION_COUNT,
        "SUGGESTION_ENDPOINT_URL": Config.SUGGESTION_ENDPOINT_URL,
    }

    CHOICES: Dict[str, tuple] = {
        "STORAGE_BACKEND": ("json", "sqlite"),
        "AI_PROVIDER": ("anthropic", "openai", "groq", "ollama"),
    }

    def __new__(cls, settings_file: Optional[str] = None) -> "SettingsManager":
        with cls._instance_lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._ready = False
                cls._instance = instance
        return cls._instance

    def __init__(self, settings_file: Optional[str] = None) -> None:
        """
        Args:
            settings_file: JSON file holding user choices
                           (settings.json in the project root by default)
        """
        if self._ready:
            return

        self.path = Path(settings_file or self.DEFAULT_SETTINGS_FILE)
        self._user: Dict[str, Any] = {}
        self._env: Dict[str, Any] = {}
        self._write_lock = Lock()
        self.reload()
        self._ready = True

    def reload(self) -> None:
        """Re-read the settings file and the environment."""
        self._user = self._read_file()
        self._env = {
            key: self._coerce(key, os.environ[key])
            for key in self.DEFAULTS
            if key in os.environ
        }
        if self._env:
            logger.debug("Settings overridden by environment: %s", ", ".join(sorted(self._env)))

    def _read_file(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: expected an object", self.path)
            return {}
        return {key: self._coerce(key, value) for key, value in data.items() if key in self.DEFAULTS}

    def _coerce(self, key: str, value: Any) -> Any:
        """Convert a raw value to the type of its default; bad values fall back to the default."""
        default = self.DEFAULTS[key]
        try:
            if isinstance(default, bool):
                value = str(value).lower() in ("true", "1", "yes", "on")
            elif isinstance(default, int):
                value = int(value)
            elif isinstance(default, float):
                value = float(value)
            else:
                value = str(value)
        except (TypeError, ValueError):
            logger.warning("Invalid value %r for %s, using %r", value, key, default)
            return default

        choices = self.CHOICES.get(key)
        if choices and str(value).lower() not in choices:
            logger.warning("Unknown %s %r, using %r", key, value, default)
            return default
        return value

    def _write_file(self) -> None:
        with self._write_lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text(json.dumps(self._user, indent=2, ensure_ascii=False), encoding="utf-8")
            except OSError as e:
                logger.warning("Could not save settings to %s: %s", self.path, e)

    def get(self, key: str, default: Any = None) -> Any:
        for layer in (self._env, self._user, self.DEFAULTS):
            if key in layer:
                return layer[key]
        return default

    def set(self, key: str, value: Any, persist: bool = True) -> None:
        """Store a user choice. Unknown keys are rejected."""
        if key not in self.DEFAULTS:
            raise KeyError(key)
        self._user[key] = self._coerce(key, value)
        if persist:
            self._write_file()

    def get_all(self) -> Dict[str, Any]:
        return {key: self.get(key) for key in self.DEFAULTS}

    def reset(self, key: Optional[str] = None) -> None:
        """Forget one user choice, or all of them."""
        if key is None:
            self._user.clear()
        else:
            self._user.pop(key, None)
        self._write_file()

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the shared instance (tests use this to isolate settings)."""
        with cls._instance_lock:
            cls._instance = None
