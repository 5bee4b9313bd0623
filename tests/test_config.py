"""Tests for settings persistence and text helpers."""

import json

from wordbook.config import SettingsManager
from wordbook.config import settings as settings_module
from wordbook.utils import TextParser


class TestSettingsManager:
    def test_defaults(self, isolated_settings) -> None:
        assert isolated_settings.get("STORAGE_BACKEND") == "json"
        assert isolated_settings.get("SUGGESTION_COUNT") == 5

    def test_is_singleton(self, isolated_settings) -> None:
        assert SettingsManager() is isolated_settings

    def test_set_persists(self, isolated_settings, tmp_path) -> None:
        isolated_settings.set("AI_PROVIDER", "ollama")
        data = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
        assert data["AI_PROVIDER"] == "ollama"

    def test_environment_wins(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "other.json"
        path.write_text(json.dumps({"SUGGESTION_COUNT": 7, "AI_TIMEOUT": 10}), encoding="utf-8")
        monkeypatch.setenv("SUGGESTION_COUNT", "9")
        SettingsManager.reset_instance()

        settings = SettingsManager(str(path))

        assert settings.get("SUGGESTION_COUNT") == 9
        assert settings.get("AI_TIMEOUT") == 10

    def test_environment_is_not_persisted(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("AI_PROVIDER", "groq")
        SettingsManager.reset_instance()
        settings = SettingsManager(str(tmp_path / "env.json"))

        settings.set("SUGGESTION_COUNT", 3)

        assert settings.get("AI_PROVIDER") == "groq"
        data = json.loads((tmp_path / "env.json").read_text(encoding="utf-8"))
        assert data == {"SUGGESTION_COUNT": 3}

    def test_unknown_choice_uses_default(self, isolated_settings) -> None:
        isolated_settings.set("STORAGE_BACKEND", "mongo")
        assert isolated_settings.get("STORAGE_BACKEND") == "json"

    def test_bad_env_number_keeps_default(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("AI_MAX_TOKENS", "lots")
        SettingsManager.reset_instance()
        assert SettingsManager(str(tmp_path / "s.json")).get("AI_MAX_TOKENS") == 512

    def test_reset(self, isolated_settings) -> None:
        isolated_settings.set("STORAGE_BACKEND", "sqlite")
        isolated_settings.reset("STORAGE_BACKEND")
        assert isolated_settings.get("STORAGE_BACKEND") == "json"


class TestTextParser:
    def test_normalize_unicode(self) -> None:
        assert TextParser.normalize_unicode("cafe\u0301") == "caf\u00e9"
        assert TextParser.normalize_unicode("") == ""

    def test_normalize_optional(self) -> None:
        assert TextParser.normalize_optional(None) is None
        assert TextParser.normalize_optional("") is None
        assert TextParser.normalize_optional("x") == "x"

    def test_split_camel_case(self) -> None:
        assert TextParser.split_camel_case("AuxiliaryVerb") == "Auxiliary Verb"
        assert TextParser.split_camel_case("Noun") == "Noun"

    def test_truncate(self) -> None:
        assert TextParser.truncate("a  b") == "a b"
        assert TextParser.truncate("abcdef", max_length=4) == "abc…"


class TestResolveHome:
    def test_environment_override(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("WORDBOOK_HOME", str(tmp_path / "wb"))
        assert settings_module.resolve_home() == (tmp_path / "wb").resolve()

    def test_checkout_keeps_data_beside_code(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv("WORDBOOK_HOME", raising=False)
        (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
        monkeypatch.setattr(settings_module, "PROJECT_ROOT", tmp_path)
        assert settings_module.resolve_home() == tmp_path

    def test_installed_package_uses_home_directory(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv("WORDBOOK_HOME", raising=False)
        monkeypatch.setattr(settings_module, "PROJECT_ROOT", tmp_path / "site-packages")
        monkeypatch.setattr(settings_module.Path, "home", classmethod(lambda cls: tmp_path / "home"))
        assert settings_module.resolve_home() == tmp_path / "home" / ".wordbook"
