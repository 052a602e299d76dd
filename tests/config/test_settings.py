"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from src.config import get_settings, reset_settings
from src.config.settings import AuthSettings, Settings, StorageSettings


class TestAuthSettings:
    def test_admin_emails_from_comma_list(self, monkeypatch):
        monkeypatch.setenv("AUTH_ADMIN_EMAILS", " Boss@Example.com, ,ops@example.com ")
        assert AuthSettings().admin_emails == ["boss@example.com", "ops@example.com"]

    def test_admin_emails_from_list(self):
        assert AuthSettings(admin_emails=["A@B.io"]).admin_emails == ["a@b.io"]

    def test_cookie_defaults(self, monkeypatch):
        monkeypatch.delenv("AUTH_SECRET_KEY", raising=False)
        auth = AuthSettings()
        assert auth.session_cookie == "SESSION"
        assert auth.cookie_secure is True
        assert auth.cookie_samesite == "none"
        assert auth.trusted_login_enabled is False


class TestStorageSettings:
    def test_db_path_joins_dir_and_name(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("STORAGE_DB_NAME", "stock.db")
        assert StorageSettings().db_path == tmp_path / "stock.db"


class TestSettings:
    def test_singleton_until_reset(self):
        first = get_settings()
        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first

    def test_nested_env_prefixes(self, monkeypatch):
        monkeypatch.setenv("INVENTORY_MAX_PAGE_SIZE", "75")
        monkeypatch.setenv("API_PORT", "9001")
        settings = Settings()
        assert settings.inventory.max_page_size == 75
        assert settings.api.port == 9001

    def test_rejects_unknown_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "moon")
        with pytest.raises(ValueError):
            Settings()
