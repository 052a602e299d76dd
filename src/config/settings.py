"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "inventory.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms
    backup_before_migrate: bool = True

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:5173"]


class AuthSettings(BaseSettings):
    """Session and role configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    session_cookie: str = "SESSION"
    session_ttl_minutes: int = 8 * 60
    cookie_secure: bool = True
    cookie_samesite: Literal["lax", "strict", "none"] = "none"
    # Accept identity assertions on /api/auth/login (development and tests only)
    trusted_login_enabled: bool = False

    # Emails granted ADMIN on first login
    admin_emails: Annotated[list[str], NoDecode] = []

    @field_validator("admin_emails", mode="before")
    @classmethod
    def parse_admin_emails(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [e.strip().lower() for e in v.split(",") if e.strip()]
        return [str(e).lower() for e in v]


class InventorySettings(BaseSettings):
    """Inventory business defaults."""

    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    default_minimum_quantity: int = 10
    default_page_size: int = 50
    max_page_size: int = 200
    analytics_default_window_days: int = 30


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "SmartSupply Inventory Service"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
