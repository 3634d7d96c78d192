"""Tests for environment-driven configuration."""

import pytest
from pydantic import ValidationError

from ledger_valuation.config import (
    LoggingSettings,
    ValuationSettings,
    get_settings,
    validate_all_settings,
)


class TestSettings:
    """Tests for settings loading."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("VALUATION_DEFAULT_SNAPSHOT", raising=False)
        settings = ValuationSettings()
        assert settings.default_snapshot == "today"
        assert settings.flag_unmatched_categories is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("VALUATION_DEFAULT_SNAPSHOT", "2023")
        assert ValuationSettings().default_snapshot == "2023"

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", " debug ")
        assert LoggingSettings().level == "DEBUG"

    def test_invalid_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "loud")
        with pytest.raises(ValidationError):
            LoggingSettings()

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        results = validate_all_settings()
        assert results == {"valuation": True, "logging": True, "app": True}

    def test_validate_all_settings_reports_failures(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "loud")
        results = validate_all_settings()
        assert results["logging"] is False
        assert "logging_error" in results
