"""
Tests for application settings.
"""

import pytest
from pydantic import ValidationError

from catalog_search.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the caller's environment and .env file."""
    monkeypatch.chdir(tmp_path)
    for name in Settings.model_fields:
        monkeypatch.delenv(name, raising=False)


class TestSettingsDefaults:
    """Test default configuration."""

    def test_retrieval_defaults(self):
        """Test retrieval caps match the documented defaults."""
        settings = Settings()

        assert settings.PRECISE_CANDIDATE_LIMIT == 100
        assert settings.FALLBACK_MIN_CANDIDATES == 20
        assert settings.FALLBACK_SCAN_LIMIT == 500
        assert settings.FUZZY_THRESHOLD == 2
        assert settings.SEARCH_DEADLINE_SECONDS == 2.0

    def test_paging_defaults(self):
        """Test paging defaults and maximums."""
        settings = Settings()

        assert settings.DEFAULT_PAGE_SIZE == 20
        assert settings.MAX_PAGE_SIZE == 100
        assert settings.DEFAULT_SUGGESTION_LIMIT == 10
        assert settings.MAX_SUGGESTION_LIMIT == 50

    def test_store_defaults(self):
        """Test SQL backend is the default."""
        settings = Settings()

        assert settings.STORE_BACKEND == "sql"
        assert settings.DATABASE_URL.startswith("sqlite")


class TestSettingsFromEnvironment:
    """Test environment overrides and validation."""

    def test_env_override(self, monkeypatch):
        """Test values are read from the environment."""
        monkeypatch.setenv("FUZZY_THRESHOLD", "1")
        monkeypatch.setenv("STORE_BACKEND", "memory")
        monkeypatch.setenv("SEARCH_DEADLINE_SECONDS", "0")

        settings = Settings()

        assert settings.FUZZY_THRESHOLD == 1
        assert settings.STORE_BACKEND == "memory"
        assert settings.SEARCH_DEADLINE_SECONDS == 0

    def test_env_file(self, tmp_path):
        """Test values are read from a .env file."""
        (tmp_path / ".env").write_text("FALLBACK_SCAN_LIMIT=250\n")

        assert Settings().FALLBACK_SCAN_LIMIT == 250

    def test_invalid_database_url(self, monkeypatch):
        """Test URL without a scheme is rejected."""
        monkeypatch.setenv("DATABASE_URL", "catalog.db")

        with pytest.raises(ValidationError):
            Settings()

    def test_unknown_backend(self, monkeypatch):
        """Test unsupported store backend is rejected."""
        monkeypatch.setenv("STORE_BACKEND", "mongo")

        with pytest.raises(ValidationError):
            Settings()

    def test_negative_threshold(self, monkeypatch):
        """Test negative fuzzy threshold is rejected."""
        monkeypatch.setenv("FUZZY_THRESHOLD", "-1")

        with pytest.raises(ValidationError):
            Settings()

    def test_default_above_max(self, monkeypatch):
        """Test default page size cannot exceed the maximum."""
        monkeypatch.setenv("DEFAULT_PAGE_SIZE", "50")
        monkeypatch.setenv("MAX_PAGE_SIZE", "40")

        with pytest.raises(ValidationError):
            Settings()

    def test_cors_origins_split(self, monkeypatch):
        """Test comma-separated origins become a list."""
        monkeypatch.setenv("CORS_ORIGINS", "https://shop.example, https://admin.example ,")

        assert Settings().cors_origins == ["https://shop.example", "https://admin.example"]
