"""Tests for application configuration."""

import pytest

from app.config import Settings


class TestSettings:
    """Tests for Settings class."""

    def test_settings_loads_from_env(self, monkeypatch):
        """Settings reads environment variables."""
        monkeypatch.setenv("API_TITLE", "Test API")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("MONGO_URL", "mongodb://db:27017")

        test_settings = Settings()
        assert test_settings.api_title == "Test API"
        assert test_settings.debug is True
        assert test_settings.port == 9000
        assert test_settings.mongo_url == "mongodb://db:27017"

    def test_settings_debug_parses_boolean(self, monkeypatch):
        """Boolean flags are parsed case-insensitively."""
        monkeypatch.setenv("DEBUG", "True")
        assert Settings().debug is True

        monkeypatch.setenv("DEBUG", "false")
        assert Settings().debug is False

    def test_defaults_keep_legacy_behaviour(self, monkeypatch):
        """Without overrides errors are not strict and dangling users are dropped."""
        monkeypatch.delenv("STRICT_ERRORS", raising=False)
        monkeypatch.delenv("UNRESOLVED_USERS", raising=False)

        test_settings = Settings()
        assert test_settings.strict_errors is False
        assert test_settings.unresolved_users == "drop"

    def test_unknown_unresolved_policy_rejected(self, monkeypatch):
        """UNRESOLVED_USERS only accepts known policies."""
        monkeypatch.setenv("UNRESOLVED_USERS", "warn")

        with pytest.raises(ValueError):
            Settings()

    def test_is_production(self, monkeypatch):
        """ENVIRONMENT=production enables production mode."""
        monkeypatch.setenv("ENVIRONMENT", "Production")
        assert Settings().is_production is True

        monkeypatch.setenv("ENVIRONMENT", "development")
        assert Settings().is_production is False
