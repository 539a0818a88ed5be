"""Tests for the catalog repository contract helpers."""

import pytest

from catalog.core.exceptions import ValidationError
from catalog.core.interfaces import (
    BULK_UPDATABLE_FIELDS,
    SORTABLE_FIELDS,
    CatalogFilters,
    ICatalogRepository,
    Page,
    PageInfo,
    Pagination,
    check_bulk_fields,
    check_sort_field,
)


class TestPagination:
    def test_defaults(self):
        pagination = Pagination()
        assert pagination.page == 1
        assert pagination.limit == 20
        assert pagination.sort_by == "created_at"
        assert pagination.sort_order == "desc"

    def test_offset(self):
        assert Pagination(page=1, limit=20).offset == 0
        assert Pagination(page=3, limit=2).offset == 4


class TestPageInfo:
    @pytest.mark.parametrize(
        "total,limit,pages",
        [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (4, 2, 2), (5, 2, 3)],
    )
    def test_pages_rounds_up(self, total, limit, pages):
        info = PageInfo.for_total(Pagination(page=1, limit=limit), total)
        assert info.pages == pages
        assert info.total == total
        assert info.limit == limit

    def test_empty_page(self):
        page = Page()
        assert page.items == []
        assert page.page_info.total == 0


class TestFilters:
    def test_defaults_do_not_filter(self):
        filters = CatalogFilters()
        assert filters.is_active is None
        assert filters.tags is None


class TestHelpers:
    def test_sortable_fields(self):
        assert "price" in SORTABLE_FIELDS
        assert "tags" not in SORTABLE_FIELDS
        check_sort_field("price")

    def test_unknown_sort_field(self):
        with pytest.raises(ValueError):
            check_sort_field("price; DROP TABLE catalog_items")

    def test_bulk_fields(self):
        assert "seller_id" not in BULK_UPDATABLE_FIELDS
        check_bulk_fields({"is_active": False, "category": "Sale"})

    def test_bulk_unknown_field(self):
        with pytest.raises(ValueError):
            check_bulk_fields({"seller_id": "someone-else"})

    def test_bulk_values_validated(self):
        with pytest.raises(ValidationError) as exc_info:
            check_bulk_fields({"rating": 42})
        assert exc_info.value.field == "rating"

    def test_bulk_values_normalized(self):
        changes = check_bulk_fields({"tags": [" a ", "a"], "stock": 3.0})
        assert changes == {"tags": ("a",), "stock": 3}


class TestInterface:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            ICatalogRepository()
