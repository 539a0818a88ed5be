"""Integration tests: use cases over real repositories."""

from collections.abc import AsyncGenerator

import pytest

from catalog.application.dto.requests import (
    AdjustStockRequest,
    CatalogItemChanges,
    CreateCatalogItemRequest,
    DeleteCatalogItemRequest,
    GetCatalogItemRequest,
    ListCatalogItemsRequest,
    ListFilters,
    ListPagination,
    UpdateCatalogItemRequest,
    UpdateRatingRequest,
)
from catalog.application.use_cases import (
    AdjustStockUseCase,
    CreateCatalogItemUseCase,
    DeleteCatalogItemUseCase,
    ErrorCode,
    GetCatalogItemUseCase,
    ListCatalogItemsUseCase,
    ListFeaturedCatalogItemsUseCase,
    UpdateCatalogItemUseCase,
    UpdateRatingUseCase,
)
from catalog.infrastructure.storage import get_catalog_repository
from catalog.infrastructure.storage.memory import InMemoryCatalogRepository
from catalog.infrastructure.storage.sqlite import (
    SQLiteCatalogRepository,
    close_pool,
)


@pytest.fixture(params=["memory", "sqlite"])
async def repository(request, tmp_path, monkeypatch) -> AsyncGenerator:
    """The settings-selected repository for each backend."""
    monkeypatch.setenv("STORAGE_BACKEND", request.param)
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STORAGE_POOL_SIZE", "1")
    yield await get_catalog_repository()
    await close_pool()


async def _create(repository, **overrides) -> str:
    data = {
        "name": "Test Laptop",
        "description": "A powerful laptop for developers",
        "price": 1299.99,
        "category": "Electronics",
        "stock": 50,
        "seller_id": "seller123",
        **overrides,
    }
    result = await CreateCatalogItemUseCase(repository).execute(CreateCatalogItemRequest(**data))
    assert result.success is True
    return result.data.id


class TestCatalogLifecycle:
    async def test_create_get_update_delete(self, repository):
        item_id = await _create(repository)

        fetched = await GetCatalogItemUseCase(repository).execute(GetCatalogItemRequest(id=item_id))
        assert fetched.success is True
        assert fetched.data.name == "Test Laptop"
        assert fetched.data.price == 1299.99

        updated = await UpdateCatalogItemUseCase(repository).execute(
            UpdateCatalogItemRequest(
                id=item_id, data=CatalogItemChanges(price=1199.99, stock=45)
            )
        )
        assert updated.success is True
        assert updated.data.price == 1199.99
        assert updated.data.stock == 45
        assert updated.data.name == "Test Laptop"

        deleted = await DeleteCatalogItemUseCase(repository).execute(
            DeleteCatalogItemRequest(id=item_id)
        )
        assert deleted.success is True

        gone = await GetCatalogItemUseCase(repository).execute(GetCatalogItemRequest(id=item_id))
        assert gone.success is False
        assert gone.error.code == ErrorCode.NOT_FOUND

        # Soft-deleted items are still stored, just inactive
        stored = await repository.find_by_id(item_id)
        assert stored is not None
        assert stored.is_active is False

    async def test_reactivate_after_soft_delete(self, repository):
        item_id = await _create(repository)
        await DeleteCatalogItemUseCase(repository).execute(DeleteCatalogItemRequest(id=item_id))

        result = await UpdateCatalogItemUseCase(repository).execute(
            UpdateCatalogItemRequest(id=item_id, data=CatalogItemChanges(is_active=True))
        )

        assert result.success is True
        fetched = await GetCatalogItemUseCase(repository).execute(GetCatalogItemRequest(id=item_id))
        assert fetched.success is True

    async def test_hard_delete_removes_record(self, repository):
        item_id = await _create(repository)
        result = await DeleteCatalogItemUseCase(repository).execute(
            DeleteCatalogItemRequest(id=item_id, hard_delete=True)
        )

        assert result.data.message == "Catalog item permanently deleted"
        assert await repository.find_by_id(item_id) is None


class TestAuthorization:
    async def test_only_owner_can_update(self, repository):
        item_id = await _create(repository, seller_id="seller123")
        before = await repository.find_by_id(item_id)

        denied = await UpdateCatalogItemUseCase(repository).execute(
            UpdateCatalogItemRequest(
                id=item_id, seller_id="seller999", data=CatalogItemChanges(price=1.0)
            )
        )
        assert denied.error.code == ErrorCode.UNAUTHORIZED
        assert await repository.find_by_id(item_id) == before

        allowed = await UpdateCatalogItemUseCase(repository).execute(
            UpdateCatalogItemRequest(
                id=item_id, seller_id="seller123", data=CatalogItemChanges(price=1.0)
            )
        )
        assert allowed.success is True
        assert allowed.data.price == 1.0


class TestListing:
    @pytest.fixture
    async def four_items(self, repository) -> list[str]:
        return [
            await _create(repository, name="Gaming Laptop"),
            await _create(repository, name="Office Mouse"),
            await _create(repository, name="Headphones", category="electronics"),
            await _create(repository, name="Desktop Tower", category="Computers"),
        ]

    async def test_category_filter(self, repository, four_items):
        result = await ListCatalogItemsUseCase(repository).execute(
            ListCatalogItemsRequest(filters=ListFilters(category="Electronics"))
        )

        assert len(result.data.items) == 3
        assert all(i.category.lower() == "electronics" for i in result.data.items)

    async def test_pages_cover_everything_once(self, repository, four_items):
        use_case = ListCatalogItemsUseCase(repository)
        first = await use_case.execute(
            ListCatalogItemsRequest(pagination=ListPagination(page=1, limit=2))
        )
        second = await use_case.execute(
            ListCatalogItemsRequest(pagination=ListPagination(page=2, limit=2))
        )

        first_ids = {i.id for i in first.data.items}
        second_ids = {i.id for i in second.data.items}
        assert len(first_ids) == 2
        assert len(second_ids) == 2
        assert first_ids | second_ids == set(four_items)
        assert first.data.pagination.pages == 2

    async def test_limit_capped(self, repository, four_items):
        result = await ListCatalogItemsUseCase(repository).execute(
            ListCatalogItemsRequest(pagination=ListPagination(limit=500))
        )
        assert result.data.pagination.limit == 100
        assert result.data.pagination.total == 4

    async def test_inactive_hidden_by_default(self, repository, four_items):
        await DeleteCatalogItemUseCase(repository).execute(
            DeleteCatalogItemRequest(id=four_items[0])
        )
        use_case = ListCatalogItemsUseCase(repository)

        active = await use_case.execute(ListCatalogItemsRequest())
        inactive = await use_case.execute(
            ListCatalogItemsRequest(filters=ListFilters(is_active=False))
        )

        assert active.data.pagination.total == 3
        assert [i.id for i in inactive.data.items] == [four_items[0]]

    async def test_featured_follows_ratings(self, repository, four_items):
        rate = UpdateRatingUseCase(repository)
        await rate.execute(UpdateRatingRequest(id=four_items[1], rating=4.8, review_count=30))
        await rate.execute(UpdateRatingRequest(id=four_items[3], rating=4.1, review_count=12))

        result = await ListFeaturedCatalogItemsUseCase(repository).execute()

        assert [i.id for i in result.data][:2] == [four_items[1], four_items[3]]


class TestStock:
    async def test_adjust_until_empty(self, repository):
        item_id = await _create(repository, stock=2)
        use_case = AdjustStockUseCase(repository)

        assert (await use_case.execute(AdjustStockRequest(id=item_id, delta=-2))).data.stock == 0
        rejected = await use_case.execute(AdjustStockRequest(id=item_id, delta=-1))

        assert rejected.error.code == ErrorCode.VALIDATION_ERROR
        assert (await repository.find_by_id(item_id)).stock == 0


class TestBackendSelection:
    async def test_backend_type(self, repository):
        assert isinstance(repository, InMemoryCatalogRepository | SQLiteCatalogRepository)
        assert await get_catalog_repository() is repository

    async def test_use_case_resolves_configured_repository(self, repository):
        """Use cases built without a repository use the configured one."""
        item_id = await _create(None)
        assert await repository.find_by_id(item_id) is not None
