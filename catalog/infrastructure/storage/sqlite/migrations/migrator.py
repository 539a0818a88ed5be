"""
Database schema migrator with versioned migrations.

Migration files live next to this module and are named ``vNNN_name.sql``.
Applied versions are tracked in the schema_migrations table together with a
checksum of the file content.
"""

import hashlib
import re
import time
from dataclasses import dataclass
from pathlib import Path

import aiosqlite

from catalog.config import get_logger, get_settings
from catalog.core.exceptions import DatabaseError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_MIGRATIONS_TABLE = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT,
    applied_at TEXT DEFAULT (datetime('now')),
    execution_time_ms INTEGER
)
"""


@dataclass
class MigrationInfo:
    """Information about a migration file."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        """Parse migration info from filename."""
        match = re.match(r"v(\d+)_(.+)\.sql", path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")

        content = path.read_text(encoding="utf-8")
        checksum = hashlib.sha256(content.encode()).hexdigest()[:16]
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=checksum,
        )


@dataclass
class MigrationResult:
    """Result of applying one migration."""

    version: str
    name: str
    execution_time_ms: int


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Discover all migration files in version order."""
    migrations = []
    for path in sorted(directory.glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Map applied migration versions to their checksums."""
    try:
        cursor = await conn.execute(
            "SELECT version, checksum FROM schema_migrations ORDER BY version"
        )
        rows = await cursor.fetchall()
        return {row[0]: row[1] for row in rows}
    except aiosqlite.OperationalError:
        # Table doesn't exist yet
        return {}


async def apply_migration(
    conn: aiosqlite.Connection, migration: MigrationInfo
) -> MigrationResult:
    """Run one migration script in a single transaction and record it."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    start = time.monotonic()

    try:
        # executescript() autocommits; wrap the script so a failure rolls it back whole
        script = migration.path.read_text(encoding="utf-8")
        await conn.executescript(f"BEGIN;\n{script}\nCOMMIT;")
        elapsed_ms = int((time.monotonic() - start) * 1000)
        await conn.execute(
            """
            INSERT OR REPLACE INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed_ms),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error(
            "migration_failed",
            version=migration.version,
            name=migration.name,
            error=str(e),
        )
        raise DatabaseError(f"migration v{migration.version}", str(e)) from e

    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=elapsed_ms,
    )
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        execution_time_ms=elapsed_ms,
    )


async def initialize_database(db_path: Path | None = None) -> list[MigrationResult]:
    """
    Apply every pending migration to the database.

    Args:
        db_path: Path to database file (default from settings)

    Returns:
        Results for the migrations applied by this call.

    Raises:
        DatabaseError: if a migration fails; later migrations are not run.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    results = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute(_MIGRATIONS_TABLE)
        await conn.commit()

        applied = await get_applied_migrations(conn)
        for migration in discover_migrations():
            if migration.version in applied:
                if applied[migration.version] != migration.checksum:
                    logger.warning(
                        "migration_checksum_changed",
                        version=migration.version,
                    )
                continue
            results.append(await apply_migration(conn, migration))

    logger.info("database_ready", db_path=str(db_path), applied=len(results))
    return results

