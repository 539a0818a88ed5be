"""
Abstract interface for catalog item storage.

Defines the contract every storage adapter (in-memory, SQLite, ...) must
fulfill. Only plain domain values cross this boundary: "not found" is
reported as None/False, and exceptions are reserved for infrastructure
failures.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from catalog.core.entities.catalog_item import CatalogItem, validate_changes

SortOrder = Literal["asc", "desc"]

SORTABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "price",
        "category",
        "stock",
        "seller_id",
        "is_active",
        "rating",
        "review_count",
        "created_at",
        "updated_at",
    }
)

BULK_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "price",
        "category",
        "stock",
        "image_url",
        "tags",
        "is_active",
        "rating",
        "review_count",
    }
)


@dataclass
class CatalogFilters:
    """Filter criteria for catalog listings. None means "don't filter"."""

    search: str | None = None
    category: str | None = None
    seller_id: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    is_active: bool | None = None
    tags: list[str] | None = None


@dataclass
class Pagination:
    """Page selection and ordering."""

    page: int = 1
    limit: int = 20
    sort_by: str = "created_at"
    sort_order: SortOrder = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class PageInfo:
    """Pagination metadata returned with every page."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def for_total(cls, pagination: Pagination, total: int) -> "PageInfo":
        return cls(
            page=pagination.page,
            limit=pagination.limit,
            total=total,
            pages=math.ceil(total / pagination.limit) if pagination.limit else 0,
        )


@dataclass
class Page:
    """One page of catalog items."""

    items: list[CatalogItem] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=lambda: PageInfo(1, 20, 0, 0))


class ICatalogRepository(ABC):
    """
    Abstract interface for catalog item persistence.

    Implementations: InMemoryCatalogRepository, SQLiteCatalogRepository
    """

    @abstractmethod
    async def find_by_id(self, item_id: str) -> CatalogItem | None:
        """Get an item by ID, or None if it does not exist."""

    @abstractmethod
    async def find_all(
        self,
        filters: CatalogFilters | None = None,
        pagination: Pagination | None = None,
    ) -> Page:
        """
        List items matching the filters.

        search matches name, description and tags case-insensitively;
        category is a case-insensitive exact match; tags match if any
        requested tag is present.
        """

    @abstractmethod
    async def find_by_seller(
        self, seller_id: str, pagination: Pagination | None = None
    ) -> Page:
        """List active items owned by a seller."""

    @abstractmethod
    async def find_by_category(
        self, category: str, pagination: Pagination | None = None
    ) -> Page:
        """List active items in a category."""

    @abstractmethod
    async def save(self, item: CatalogItem) -> CatalogItem:
        """Persist a new item and return it with its assigned ID."""

    @abstractmethod
    async def update(self, item_id: str, item: CatalogItem) -> CatalogItem | None:
        """Persist changes to an existing item; None if the ID is unknown."""

    @abstractmethod
    async def soft_delete(self, item_id: str) -> bool:
        """Mark an item inactive. Returns False if the ID is unknown."""

    @abstractmethod
    async def hard_delete(self, item_id: str) -> bool:
        """Permanently remove an item. Returns False if the ID is unknown."""

    @abstractmethod
    async def count(self, filters: CatalogFilters | None = None) -> int:
        """Count items matching the filters."""

    @abstractmethod
    async def exists(self, item_id: str) -> bool:
        """Check whether an item with this ID is stored."""

    @abstractmethod
    async def bulk_update(
        self, item_ids: Sequence[str], changes: Mapping[str, Any]
    ) -> int:
        """
        Apply the same field changes to many items.

        Each record is updated on its own; the return value is the number of
        records modified. Keys outside BULK_UPDATABLE_FIELDS raise ValueError;
        values breaking an entity invariant raise ValidationError before
        anything is written.
        """

    @abstractmethod
    async def find_featured(self, limit: int = 10) -> list[CatalogItem]:
        """Active items ranked by review_count, then rating, then recency."""

    @abstractmethod
    async def search(
        self, query: str, pagination: Pagination | None = None
    ) -> Page:
        """Text search over active items."""

    @abstractmethod
    async def adjust_stock(self, item_id: str, delta: int) -> CatalogItem | None:
        """
        Atomically change stock by delta.

        Returns None when the ID is unknown or the change would make stock
        negative; the stored record is left untouched in both cases.
        """


def check_bulk_fields(changes: Mapping[str, Any]) -> dict[str, Any]:
    """
    Vet a bulk change set before an adapter writes it.

    Fields outside BULK_UPDATABLE_FIELDS raise ValueError; values breaking an
    entity invariant raise ValidationError. Returns the normalized values.
    """
    unknown = set(changes) - BULK_UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot bulk update fields: {', '.join(sorted(unknown))}")
    return validate_changes(changes)


def check_sort_field(sort_by: str) -> None:
    if sort_by not in SORTABLE_FIELDS:
        raise ValueError(f"Cannot sort by '{sort_by}'")
