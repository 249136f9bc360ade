"""Tests for environment configuration."""

import logging
from pathlib import Path

from src.config import DEFAULT_CACHE_DIR, DEFAULT_RECORD_ID, configure_logging, get_settings


class TestGetSettings:
    """Tests for reading settings from the environment."""

    def test_defaults(self, monkeypatch):
        """Test defaults with no variables set."""
        for name in [
            "MORTGAGE_COMPARE_CACHE_DIR",
            "MORTGAGE_COMPARE_REMOTE_URL",
            "MORTGAGE_COMPARE_REMOTE_KEY",
            "MORTGAGE_COMPARE_RECORD_ID",
            "MORTGAGE_COMPARE_LOG_LEVEL",
        ]:
            monkeypatch.delenv(name, raising=False)

        settings = get_settings()

        assert settings.cache_dir == DEFAULT_CACHE_DIR
        assert settings.record_id == DEFAULT_RECORD_ID
        assert settings.log_level == "INFO"
        assert not settings.remote_enabled

    def test_overrides(self, monkeypatch, tmp_path):
        """Test values taken from the environment."""
        monkeypatch.setenv("MORTGAGE_COMPARE_CACHE_DIR", str(tmp_path))
        monkeypatch.setenv("MORTGAGE_COMPARE_REMOTE_URL", "https://example.test")
        monkeypatch.setenv("MORTGAGE_COMPARE_REMOTE_KEY", "secret")
        monkeypatch.setenv("MORTGAGE_COMPARE_LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.cache_dir == Path(tmp_path)
        assert settings.remote_enabled
        assert settings.log_level == "DEBUG"

    def test_url_without_key_disables_remote(self, monkeypatch):
        """Test that remote storage needs both URL and key."""
        monkeypatch.setenv("MORTGAGE_COMPARE_REMOTE_URL", "https://example.test")
        monkeypatch.delenv("MORTGAGE_COMPARE_REMOTE_KEY", raising=False)

        assert not get_settings().remote_enabled


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_configure_logging(self, monkeypatch):
        """Test that configuration does not fail on unknown levels."""
        monkeypatch.setenv("MORTGAGE_COMPARE_LOG_LEVEL", "NOT_A_LEVEL")

        configure_logging()

        assert logging.getLogger().handlers
