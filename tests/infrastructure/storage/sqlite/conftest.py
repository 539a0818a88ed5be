"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from catalog.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteCatalogRepository,
    initialize_database,
)


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> Path:
    """Temporary database with every migration applied."""
    await initialize_database(temp_db_path)
    return temp_db_path


@pytest.fixture
async def pool(initialized_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Single-connection pool over the migrated database."""
    pool = ConnectionPool(db_path=initialized_db, pool_size=1)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def repository(pool: ConnectionPool) -> SQLiteCatalogRepository:
    return SQLiteCatalogRepository(pool)
