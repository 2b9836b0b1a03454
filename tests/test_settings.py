"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from verba_mcp.config.settings import (
    DEFAULT_API_URL,
    ConfigurationError,
    Settings,
    load_settings,
)


class TestLoadSettings:
    """Environment parsing."""

    def test_missing_api_key(self):
        with pytest.raises(ConfigurationError, match="VERBA_API_KEY"):
            load_settings({})

    def test_empty_api_key(self):
        with pytest.raises(ConfigurationError):
            load_settings({"VERBA_API_KEY": ""})

    def test_defaults(self):
        settings = load_settings({"VERBA_API_KEY": "vb_123"})

        assert settings.api_key == "vb_123"
        assert settings.api_url == DEFAULT_API_URL
        assert settings.log_level == "INFO"

    def test_trailing_slash_stripped_once(self):
        settings = load_settings({
            "VERBA_API_KEY": "vb_123",
            "VERBA_API_URL": "https://staging.verba.dev/",
        })
        assert settings.api_url == "https://staging.verba.dev"

        settings = load_settings({
            "VERBA_API_KEY": "vb_123",
            "VERBA_API_URL": "https://staging.verba.dev//",
        })
        assert settings.api_url == "https://staging.verba.dev/"

    def test_log_level_normalized(self):
        settings = load_settings({"VERBA_API_KEY": "vb_123", "VERBA_LOG_LEVEL": "debug"})
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError, match="Unknown log level"):
            load_settings({"VERBA_API_KEY": "vb_123", "VERBA_LOG_LEVEL": "loud"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("VERBA_API_KEY", "from-env")
        monkeypatch.delenv("VERBA_API_URL", raising=False)

        assert load_settings().api_key == "from-env"


def test_settings_are_immutable():
    settings = Settings(api_key="vb_123")

    with pytest.raises(ValidationError):
        settings.api_url = "https://elsewhere.test"


def test_api_key_hidden_from_repr():
    assert "vb_secret" not in repr(Settings(api_key="vb_secret"))
