"""Global settings and configuration."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Source checkout root (parent of wordbook/)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# A .env in the working directory takes precedence over one in the checkout
load_dotenv(Path.cwd() / ".env")
load_dotenv(PROJECT_ROOT / ".env")


def resolve_home() -> Path:
    """
    Directory holding data/ and settings.json.

    Lookup order:
        WORDBOOK_HOME environment variable
        the source checkout, when running from one
        ~/.wordbook for an installed package
    """
    override = os.environ.get("WORDBOOK_HOME")
    if override:
        return Path(override).expanduser().resolve()
    if (PROJECT_ROOT / "pyproject.toml").exists():
        return PROJECT_ROOT
    return Path.home() / ".wordbook"


@dataclass
class Config:
    """Application-wide configuration."""

    APP_TITLE: str = "Wordbook"

    # Storage backend: "json" or "sqlite"
    STORAGE_BACKEND: str = os.environ.get("STORAGE_BACKEND", "json")

    # AI suggestion settings
    # Store the key in environment variable or .env file: ANTHROPIC_API_KEY
    AI_PROVIDER: str = os.environ.get("AI_PROVIDER", "anthropic")
    AI_MODEL: str = os.environ.get("AI_MODEL", "claude-3-5-haiku-20241022")
    AI_MAX_TOKENS: int = 512
    AI_TIMEOUT: int = 60
    SUGGESTION_COUNT: int = 5

    # Optional remote suggestion endpoint; empty means call the provider directly
    SUGGESTION_ENDPOINT_URL: str = os.environ.get("SUGGESTION_ENDPOINT_URL", "")
    SUGGESTION_API_HOST: str = "127.0.0.1"
    SUGGESTION_API_PORT: int = 8787

    # Cross-platform paths using pathlib
    BASE_DIR: Path = resolve_home()

    DATA_DIR: str = str(BASE_DIR / "data")
    WORDS_FILE: str = str(BASE_DIR / "data" / "words.json")
    DB_FILE: str = str(BASE_DIR / "data" / "wordbook.db")
    SETTINGS_FILE: str = str(BASE_DIR / "settings.json")
