"""
Unit tests for news_relay.app.core.config module.

Tests the Settings class, environment loading and the --check helper.
"""

import pytest
from pydantic import ValidationError
from unittest.mock import patch

from news_relay.app.core.config import Settings, get_settings, validate_env_cli

ENV_VARS = (
    "HOST", "PORT", "NEWS_API_KEY", "NEWSAPI", "TOP_HEADLINES_URL", "EVERYTHING_URL",
    "UPSTREAM_TIMEOUT_SECONDS", "LOG_LEVEL", "LOG_JSON", "CORS_ALLOW_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("NewsAPI", raising=False)


class TestSettings:
    """Test cases for the Settings class."""

    def test_settings_default_values(self):
        """Settings loads with default values when no env vars are set."""
        settings = Settings(_env_file=None)

        assert settings.host == "0.0.0.0"
        assert settings.port == 3000
        assert settings.news_api_key is None
        assert settings.top_headlines_url == "https://newsapi.org/v2/top-headlines"
        assert settings.everything_url == "https://newsapi.org/v2/everything"
        assert settings.upstream_timeout_seconds == 5.0
        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.allowed_origins == ["*"]

    def test_settings_with_environment_variables(self, monkeypatch):
        """Settings loads custom values from environment variables."""
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("NEWS_API_KEY", "env-key")
        monkeypatch.setenv("TOP_HEADLINES_URL", "https://proxy.example/top")
        monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "12.5")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_JSON", "true")

        settings = Settings(_env_file=None)

        assert settings.port == 8080
        assert settings.news_api_key == "env-key"
        assert settings.top_headlines_url == "https://proxy.example/top"
        assert settings.upstream_timeout_seconds == 12.5
        assert settings.log_level == "DEBUG"
        assert settings.log_json is True

    def test_legacy_newsapi_variable_is_accepted(self, monkeypatch):
        """The key can also be provided as NewsAPI."""
        monkeypatch.setenv("NewsAPI", "legacy-key")

        settings = Settings(_env_file=None)

        assert settings.news_api_key == "legacy-key"
        assert settings.has_news_api_key

    def test_settings_port_validation(self, monkeypatch):
        """Port must be a valid TCP port."""
        monkeypatch.setenv("PORT", "65535")
        assert Settings(_env_file=None).port == 65535

        monkeypatch.setenv("PORT", "0")
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)
        assert "greater than or equal to 1" in str(exc_info.value)

        monkeypatch.setenv("PORT", "not-a-number")
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)
        assert "Input should be a valid integer" in str(exc_info.value)

    def test_settings_are_immutable(self):
        """Settings cannot be changed after construction."""
        settings = Settings(_env_file=None, news_api_key="k")

        with pytest.raises(ValidationError):
            settings.port = 9999

    def test_api_key_not_in_repr(self):
        settings = Settings(_env_file=None, news_api_key="super-secret")

        assert "super-secret" not in repr(settings)

    def test_allowed_origins_with_custom_values(self, monkeypatch):
        """allowed_origins splits and strips the comma-separated value."""
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://localhost:8080, https://example.com ,")

        settings = Settings(_env_file=None)

        assert settings.allowed_origins == ["http://localhost:8080", "https://example.com"]

    def test_empty_api_key_counts_as_missing(self, monkeypatch):
        monkeypatch.setenv("NEWS_API_KEY", "")

        assert not Settings(_env_file=None).has_news_api_key


class TestGetSettings:
    """Test cases for the get_settings function."""

    def test_get_settings_success(self):
        settings = get_settings()

        assert isinstance(settings, Settings)

    @patch('news_relay.app.core.config.Settings')
    def test_get_settings_validation_error(self, mock_settings, capsys):
        """get_settings reports and re-raises ValidationError."""
        error_detail = [{"type": "missing", "loc": ("port",), "msg": "Field required", "input": {}}]
        mock_settings.side_effect = ValidationError.from_exception_data("Settings", error_detail)

        with pytest.raises(ValidationError):
            get_settings()

        assert "Configuration validation error" in capsys.readouterr().err


class TestValidateEnvCli:
    def test_reports_valid_configuration(self, monkeypatch, capsys):
        monkeypatch.setenv("NEWS_API_KEY", "cli-key")

        validate_env_cli()

        output = capsys.readouterr().out
        assert "Environment configuration is valid" in output
        assert "NewsAPI key: ✅ Set" in output
        assert "cli-key" not in output

    def test_exits_on_invalid_configuration(self, monkeypatch, capsys):
        monkeypatch.setenv("PORT", "70000")

        with pytest.raises(SystemExit) as exc_info:
            validate_env_cli()

        assert exc_info.value.code == 1
        assert "port" in capsys.readouterr().out
