"""Settings and logging for the inventory service."""

from src.config.logging import configure_logging, get_logger
from src.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "configure_logging",
    "get_logger",
    "get_settings",
    "reset_settings",
]
