"""Core interfaces (ports) for dependency injection."""

from catalog.core.interfaces.catalog_repository import (
    BULK_UPDATABLE_FIELDS,
    SORTABLE_FIELDS,
    CatalogFilters,
    ICatalogRepository,
    Page,
    PageInfo,
    Pagination,
    SortOrder,
    check_bulk_fields,
    check_sort_field,
)

__all__ = [
    # Storage interfaces
    "ICatalogRepository",
    # Value types
    "CatalogFilters",
    "Pagination",
    "PageInfo",
    "Page",
    "SortOrder",
    "SORTABLE_FIELDS",
    "BULK_UPDATABLE_FIELDS",
    # Helpers for adapters
    "check_bulk_fields",
    "check_sort_field",
]
