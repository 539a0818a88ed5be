"""Core domain entities."""

from catalog.core.entities.catalog_item import (
    UPDATABLE_FIELDS,
    CatalogItem,
    validate_changes,
)

__all__ = [
    "CatalogItem",
    "UPDATABLE_FIELDS",
    "validate_changes",
]
