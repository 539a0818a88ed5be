"""
Storage infrastructure implementations.

get_catalog_repository() returns the repository selected by
``settings.storage.backend``.
"""

from catalog.config import get_logger, get_settings
from catalog.core.exceptions import ConfigurationError
from catalog.core.interfaces.catalog_repository import ICatalogRepository
from catalog.infrastructure.storage import sqlite as sqlite_storage
from catalog.infrastructure.storage.memory import InMemoryCatalogRepository
from catalog.infrastructure.storage.sqlite import SQLiteCatalogRepository

logger = get_logger(__name__)

_memory_repository: InMemoryCatalogRepository | None = None


async def get_catalog_repository() -> ICatalogRepository:
    """Get the configured catalog repository singleton."""
    global _memory_repository
    backend = get_settings().storage.backend

    if backend == "memory":
        if _memory_repository is None:
            _memory_repository = InMemoryCatalogRepository()
            logger.info("catalog_repository_selected", backend=backend)
        return _memory_repository

    if backend == "sqlite":
        return await sqlite_storage.get_catalog_repository()

    raise ConfigurationError(f"Unknown storage backend: {backend}")


def reset_catalog_repository() -> None:
    """Forget cached repositories (for testing)."""
    global _memory_repository
    _memory_repository = None
    sqlite_storage.reset_catalog_repository()


__all__ = [
    "InMemoryCatalogRepository",
    "SQLiteCatalogRepository",
    "get_catalog_repository",
    "reset_catalog_repository",
]
