"""
In-memory implementation of catalog storage.

Keeps plain records in a dict keyed by ID. Used by tests and by the default
"memory" storage backend.
"""

import asyncio
import uuid
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

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

logger = get_logger(__name__)


def _generate_id() -> str:
    """Generate a new UUID text ID."""
    return str(uuid.uuid4())


def _matches(record: Mapping[str, Any], filters: CatalogFilters) -> bool:
    if filters.is_active is not None and record["is_active"] != filters.is_active:
        return False

    if filters.search:
        needle = filters.search.casefold()
        if not (
            needle in record["name"].casefold()
            or needle in record["description"].casefold()
            or any(needle in tag.casefold() for tag in record["tags"])
        ):
            return False

    if filters.category and record["category"].casefold() != filters.category.casefold():
        return False

    if filters.seller_id and record["seller_id"] != filters.seller_id:
        return False

    if filters.min_price is not None and record["price"] < filters.min_price:
        return False

    if filters.max_price is not None and record["price"] > filters.max_price:
        return False

    if filters.tags and not any(tag in record["tags"] for tag in filters.tags):
        return False

    return True


class InMemoryCatalogRepository(ICatalogRepository):
    """Dict-backed catalog repository."""

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    # --- Test helpers ---------------------------------------------------------

    def reset(self) -> None:
        """Drop every stored record."""
        self._records.clear()

    def seed(self, items: Iterable[CatalogItem]) -> list[CatalogItem]:
        """Store items as-is, assigning IDs to those that have none."""
        seeded = []
        for item in items:
            record = item.to_record()
            record["id"] = item.id or _generate_id()
            self._records[record["id"]] = record
            seeded.append(CatalogItem.reconstruct(record))
        return seeded

    # --- Queries --------------------------------------------------------------

    async def find_by_id(self, item_id: str) -> CatalogItem | None:
        record = self._records.get(item_id)
        if record is None:
            return None
        return CatalogItem.reconstruct(record)

    async def find_all(
        self,
        filters: CatalogFilters | None = None,
        pagination: Pagination | None = None,
    ) -> Page:
        filters = filters or CatalogFilters()
        pagination = pagination or Pagination()
        check_sort_field(pagination.sort_by)

        records = [r for r in self._records.values() if _matches(r, filters)]
        records.sort(
            key=lambda r: r[pagination.sort_by],
            reverse=pagination.sort_order == "desc",
        )

        start = pagination.offset
        window = records[start : start + pagination.limit]
        return Page(
            items=[CatalogItem.reconstruct(r) for r in window],
            page_info=PageInfo.for_total(pagination, len(records)),
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
        filters = filters or CatalogFilters()
        return sum(1 for r in self._records.values() if _matches(r, filters))

    async def exists(self, item_id: str) -> bool:
        return item_id in self._records

    async def find_featured(self, limit: int = 10) -> list[CatalogItem]:
        active = [r for r in self._records.values() if r["is_active"]]
        active.sort(
            key=lambda r: (r["review_count"], r["rating"], r["created_at"]),
            reverse=True,
        )
        return [CatalogItem.reconstruct(r) for r in active[:limit]]

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
        self._records[record["id"]] = record
        logger.info("catalog_item_saved", item_id=record["id"], backend="memory")
        return CatalogItem.reconstruct(record)

    async def update(self, item_id: str, item: CatalogItem) -> CatalogItem | None:
        existing = self._records.get(item_id)
        if existing is None:
            return None

        record = item.to_record()
        record["id"] = item_id
        record["created_at"] = existing["created_at"]
        self._records[item_id] = record
        return CatalogItem.reconstruct(record)

    async def soft_delete(self, item_id: str) -> bool:
        record = self._records.get(item_id)
        if record is None:
            return False
        record["is_active"] = False
        record["updated_at"] = datetime.now(UTC)
        return True

    async def hard_delete(self, item_id: str) -> bool:
        return self._records.pop(item_id, None) is not None

    async def bulk_update(
        self, item_ids: Sequence[str], changes: Mapping[str, Any]
    ) -> int:
        changes = check_bulk_fields(changes)
        modified = 0
        for item_id in dict.fromkeys(item_ids):
            record = self._records.get(item_id)
            if record is None:
                continue
            record.update(changes)
            if "tags" in changes:
                record["tags"] = list(changes["tags"])
            record["updated_at"] = datetime.now(UTC)
            modified += 1
        logger.info("catalog_items_bulk_updated", requested=len(item_ids), modified=modified)
        return modified

    async def adjust_stock(self, item_id: str, delta: int) -> CatalogItem | None:
        async with self._lock:
            record = self._records.get(item_id)
            if record is None or record["stock"] + delta < 0:
                return None
            record["stock"] += delta
            record["updated_at"] = datetime.now(UTC)
            return CatalogItem.reconstruct(record)
