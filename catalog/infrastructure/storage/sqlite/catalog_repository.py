"""
SQLite implementation of catalog storage.

Tags are stored as a JSON array and matched with json_each(); timestamps are
ISO-8601 text with microseconds so they sort correctly as strings.
Case-insensitive matching goes through the casefold() SQL function that
ConnectionPool registers on every connection.
"""

import json
import uuid
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from catalog.config import get_logger
from catalog.core.entities.catalog_item import CatalogItem
from catalog.core.interfaces.catalog_repository import (
    CatalogFilters,
    ICatalogRepository,
    Page,
    PageInfo,
    Pagination,
    check_bulk_fields,
    check_sort_field,
)
from catalog.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)

_COLUMNS = (
    "id",
    "name",
    "description",
    "price",
    "category",
    "stock",
    "seller_id",
    "image_url",
    "tags",
    "is_active",
    "rating",
    "review_count",
    "created_at",
    "updated_at",
)


def _generate_id() -> str:
    """Generate a new UUID text ID."""
    return str(uuid.uuid4())


def _timestamp(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_column(field: str, value: Any) -> Any:
    """Convert a domain value into its column representation."""
    if field == "tags":
        return json.dumps(list(value))
    if field == "is_active":
        return int(value)
    if isinstance(value, datetime):
        return _timestamp(value)
    return value


def _build_where(filters: CatalogFilters) -> tuple[str, list[Any]]:
    clauses: list[str] = []
    params: list[Any] = []

    if filters.is_active is not None:
        clauses.append("is_active = ?")
        params.append(int(filters.is_active))

    if filters.search:
        pattern = f"%{_escape_like(filters.search.casefold())}%"
        clauses.append(
            "(casefold(name) LIKE ? ESCAPE '\\'"
            " OR casefold(description) LIKE ? ESCAPE '\\'"
            " OR EXISTS (SELECT 1 FROM json_each(catalog_items.tags)"
            " WHERE casefold(json_each.value) LIKE ? ESCAPE '\\'))"
        )
        params.extend([pattern, pattern, pattern])

    if filters.category:
        clauses.append("casefold(category) = ?")
        params.append(filters.category.casefold())

    if filters.seller_id:
        clauses.append("seller_id = ?")
        params.append(filters.seller_id)

    if filters.min_price is not None:
        clauses.append("price >= ?")
        params.append(filters.min_price)

    if filters.max_price is not None:
        clauses.append("price <= ?")
        params.append(filters.max_price)

    if filters.tags:
        placeholders = ", ".join("?" for _ in filters.tags)
        clauses.append(
            "EXISTS (SELECT 1 FROM json_each(catalog_items.tags)"
            f" WHERE json_each.value IN ({placeholders}))"
        )
        params.extend(filters.tags)

    where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


class SQLiteCatalogRepository(ICatalogRepository):
    """
    SQLite implementation of catalog item storage.

    Uses the global connection pool unless a pool is passed in.
    The catalog_items table must exist; see migrations.initialize_database().
    """

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    @asynccontextmanager
    async def _read(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._pool is not None:
            async with self._pool.acquire() as conn:
                yield conn
        else:
            async with get_connection() as conn:
                yield conn

    @asynccontextmanager
    async def _write(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._pool is not None:
            async with self._pool.transaction() as conn:
                yield conn
        else:
            async with get_transaction() as conn:
                yield conn

    # --- Queries --------------------------------------------------------------

    async def find_by_id(self, item_id: str) -> CatalogItem | None:
        async with self._read() as conn:
            return await self._fetch_one(conn, item_id)

    async def find_all(
        self,
        filters: CatalogFilters | None = None,
        pagination: Pagination | None = None,
    ) -> Page:
        filters = filters or CatalogFilters()
        pagination = pagination or Pagination()
        check_sort_field(pagination.sort_by)

        where, params = _build_where(filters)
        direction = "ASC" if pagination.sort_order == "asc" else "DESC"

        async with self._read() as conn:
            cursor = await conn.execute(
                f"SELECT COUNT(*) FROM catalog_items{where}", params
            )
            total = (await cursor.fetchone())[0]

            cursor = await conn.execute(
                f"""
                SELECT * FROM catalog_items{where}
                ORDER BY {pagination.sort_by} {direction}, rowid {direction}
                LIMIT ? OFFSET ?
                """,
                [*params, pagination.limit, pagination.offset],
            )
            rows = await cursor.fetchall()

        return Page(
            items=[self._row_to_item(row) for row in rows],
            page_info=PageInfo.for_total(pagination, total),
        )

    async def find_by_seller(
        self, seller_id: str, pagination: Pagination | None = None
    ) -> Page:
        return await self.find_all(
            CatalogFilters(seller_id=seller_id, is_active=True), pagination
        )

    async def find_by_category(
        self, category: str, pagination: Pagination | None = None
    ) -> Page:
        return await self.find_all(
            CatalogFilters(category=category, is_active=True), pagination
        )

    async def count(self, filters: CatalogFilters | None = None) -> int:
        where, params = _build_where(filters or CatalogFilters())
        async with self._read() as conn:
            cursor = await conn.execute(
                f"SELECT COUNT(*) FROM catalog_items{where}", params
            )
            return (await cursor.fetchone())[0]

    async def exists(self, item_id: str) -> bool:
        async with self._read() as conn:
            cursor = await conn.execute(
                "SELECT 1 FROM catalog_items WHERE id = ?", (item_id,)
            )
            return await cursor.fetchone() is not None

    async def find_featured(self, limit: int = 10) -> list[CatalogItem]:
        async with self._read() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM catalog_items
                WHERE is_active = 1
                ORDER BY review_count DESC, rating DESC, created_at DESC
                LIMIT ?
                """,
                (limit,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_item(row) for row in rows]

    async def search(
        self, query: str, pagination: Pagination | None = None
    ) -> Page:
        return await self.find_all(
            CatalogFilters(search=query, is_active=True), pagination
        )

    # --- Commands -------------------------------------------------------------

    async def save(self, item: CatalogItem) -> CatalogItem:
        record = item.to_record()
        record["id"] = _generate_id()
        placeholders = ", ".join("?" for _ in _COLUMNS)

        async with self._write() as conn:
            await conn.execute(
                f"INSERT INTO catalog_items ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                [_to_column(col, record[col]) for col in _COLUMNS],
            )

        logger.info("catalog_item_saved", item_id=record["id"], backend="sqlite")
        return CatalogItem.reconstruct(record)

    async def update(self, item_id: str, item: CatalogItem) -> CatalogItem | None:
        record = item.to_record()
        # id and created_at are never rewritten
        columns = [c for c in _COLUMNS if c not in ("id", "created_at")]
        assignments = ", ".join(f"{col} = ?" for col in columns)

        async with self._write() as conn:
            cursor = await conn.execute(
                f"UPDATE catalog_items SET {assignments} WHERE id = ?",
                [*(_to_column(col, record[col]) for col in columns), item_id],
            )
            if cursor.rowcount == 0:
                return None
            return await self._fetch_one(conn, item_id)

    async def soft_delete(self, item_id: str) -> bool:
        async with self._write() as conn:
            cursor = await conn.execute(
                "UPDATE catalog_items SET is_active = 0, updated_at = ? WHERE id = ?",
                (_timestamp(datetime.now(UTC)), item_id),
            )
            return cursor.rowcount > 0

    async def hard_delete(self, item_id: str) -> bool:
        async with self._write() as conn:
            cursor = await conn.execute(
                "DELETE FROM catalog_items WHERE id = ?", (item_id,)
            )
            return cursor.rowcount > 0

    async def bulk_update(
        self, item_ids: Sequence[str], changes: Mapping[str, Any]
    ) -> int:
        changes = check_bulk_fields(changes)
        ids = list(dict.fromkeys(item_ids))
        if not ids or not changes:
            return 0

        fields = sorted(changes)
        assignments = ", ".join(f"{field} = ?" for field in [*fields, "updated_at"])
        placeholders = ", ".join("?" for _ in ids)
        params = [
            *(_to_column(field, changes[field]) for field in fields),
            _timestamp(datetime.now(UTC)),
            *ids,
        ]

        async with self._write() as conn:
            cursor = await conn.execute(
                f"UPDATE catalog_items SET {assignments} WHERE id IN ({placeholders})",
                params,
            )
            modified = cursor.rowcount

        logger.info("catalog_items_bulk_updated", requested=len(ids), modified=modified)
        return modified

    async def adjust_stock(self, item_id: str, delta: int) -> CatalogItem | None:
        async with self._write() as conn:
            cursor = await conn.execute(
                """
                UPDATE catalog_items
                SET stock = stock + ?, updated_at = ?
                WHERE id = ? AND stock + ? >= 0
                """,
                (delta, _timestamp(datetime.now(UTC)), item_id, delta),
            )
            if cursor.rowcount == 0:
                return None
            return await self._fetch_one(conn, item_id)

    # --- Row mapping ----------------------------------------------------------

    async def _fetch_one(
        self, conn: aiosqlite.Connection, item_id: str
    ) -> CatalogItem | None:
        cursor = await conn.execute(
            "SELECT * FROM catalog_items WHERE id = ?", (item_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_item(row)

    def _row_to_item(self, row: aiosqlite.Row) -> CatalogItem:
        """Convert database row to CatalogItem entity."""
        return CatalogItem.reconstruct(
            {
                "id": row["id"],
                "name": row["name"],
                "description": row["description"],
                "price": row["price"],
                "category": row["category"],
                "stock": row["stock"],
                "seller_id": row["seller_id"],
                "image_url": row["image_url"],
                "tags": json.loads(row["tags"] or "[]"),
                "is_active": bool(row["is_active"]),
                "rating": row["rating"],
                "review_count": row["review_count"],
                "created_at": datetime.fromisoformat(row["created_at"]),
                "updated_at": datetime.fromisoformat(row["updated_at"]),
            }
        )
