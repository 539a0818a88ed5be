"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator
from typing import Any

import pytest

from catalog.config import reset_settings
from catalog.core.entities import CatalogItem
from catalog.infrastructure.storage import reset_catalog_repository


@pytest.fixture(autouse=True)
def clean_globals() -> Generator[None, None, None]:
    """Start every test with fresh settings and repository singletons."""
    reset_settings()
    reset_catalog_repository()
    yield
    reset_settings()
    reset_catalog_repository()


@pytest.fixture
def sample_item_data() -> dict[str, Any]:
    """Valid creation data for a catalog item."""
    return {
        "name": "Test Laptop",
        "description": "A powerful laptop for developers",
        "price": 1299.99,
        "category": "Electronics",
        "stock": 50,
        "seller_id": "seller123",
        "tags": ["laptop", "computer"],
    }


@pytest.fixture
def make_item(sample_item_data) -> Callable[..., CatalogItem]:
    """Factory building valid, unsaved catalog items."""

    def _make(**overrides: Any) -> CatalogItem:
        return CatalogItem.create(**{**sample_item_data, **overrides})

    return _make
