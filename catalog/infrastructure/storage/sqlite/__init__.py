"""SQLite storage implementations."""

from catalog.infrastructure.storage.sqlite.catalog_repository import (
    SQLiteCatalogRepository,
)
from catalog.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from catalog.infrastructure.storage.sqlite.migrations import initialize_database

# Singleton instances
_catalog_repository: SQLiteCatalogRepository | None = None


async def get_catalog_repository() -> SQLiteCatalogRepository:
    """Get singleton SQLite catalog repository, migrating the schema first."""
    global _catalog_repository
    if _catalog_repository is None:
        await initialize_database()
        _catalog_repository = SQLiteCatalogRepository()
    return _catalog_repository


def reset_catalog_repository() -> None:
    """Forget the singleton (for testing)."""
    global _catalog_repository
    _catalog_repository = None


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteCatalogRepository",
    # Factory functions
    "get_catalog_repository",
    "reset_catalog_repository",
    "initialize_database",
]
