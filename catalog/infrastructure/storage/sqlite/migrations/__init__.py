"""Database migrations module."""

from catalog.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    MigrationResult,
    discover_migrations,
    get_applied_migrations,
    initialize_database,
)

__all__ = [
    "MigrationInfo",
    "MigrationResult",
    "discover_migrations",
    "get_applied_migrations",
    "initialize_database",
]
