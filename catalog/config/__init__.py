"""Configuration module."""

from catalog.config.logging import configure_logging, get_logger
from catalog.config.settings import (
    CatalogSettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "CatalogSettings",
    "StorageSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
