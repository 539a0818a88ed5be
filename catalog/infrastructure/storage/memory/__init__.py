"""In-memory storage implementations."""

from catalog.infrastructure.storage.memory.catalog_repository import (
    InMemoryCatalogRepository,
)

__all__ = ["InMemoryCatalogRepository"]
