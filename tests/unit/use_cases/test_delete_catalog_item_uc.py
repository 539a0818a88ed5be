"""Tests for DeleteCatalogItemUseCase."""

from unittest.mock import AsyncMock

import pytest

from catalog.application.dto.requests import DeleteCatalogItemRequest
from catalog.application.use_cases.base import ErrorCode
from catalog.application.use_cases.delete_catalog_item import DeleteCatalogItemUseCase


@pytest.fixture
def mock_repository(make_item):
    repository = AsyncMock()
    repository.find_by_id.return_value = make_item().model_copy(update={"id": "item-1"})
    repository.soft_delete.return_value = True
    repository.hard_delete.return_value = True
    return repository


@pytest.fixture
def use_case(mock_repository):
    return DeleteCatalogItemUseCase(repository=mock_repository)


class TestDeleteCatalogItemUseCase:
    async def test_soft_delete_by_default(self, use_case, mock_repository):
        result = await use_case.execute(DeleteCatalogItemRequest(id="item-1"))

        assert result.success is True
        assert result.data.deleted is True
        assert result.data.message == "Catalog item deleted successfully"
        mock_repository.soft_delete.assert_awaited_once_with("item-1")
        mock_repository.hard_delete.assert_not_called()

    async def test_hard_delete(self, use_case, mock_repository):
        result = await use_case.execute(
            DeleteCatalogItemRequest(id="item-1", seller_id="seller123", hard_delete=True)
        )

        assert result.success is True
        assert result.data.message == "Catalog item permanently deleted"
        mock_repository.hard_delete.assert_awaited_once_with("item-1")
        mock_repository.soft_delete.assert_not_called()

    async def test_wrong_seller(self, use_case, mock_repository):
        result = await use_case.execute(
            DeleteCatalogItemRequest(id="item-1", seller_id="seller999")
        )

        assert result.error.code == ErrorCode.UNAUTHORIZED
        mock_repository.soft_delete.assert_not_called()
        mock_repository.hard_delete.assert_not_called()

    async def test_not_found(self, use_case, mock_repository):
        mock_repository.find_by_id.return_value = None

        result = await use_case.execute(DeleteCatalogItemRequest(id="missing"))

        assert result.error.code == ErrorCode.NOT_FOUND
        mock_repository.soft_delete.assert_not_called()

    async def test_blank_id(self, use_case, mock_repository):
        result = await use_case.execute(DeleteCatalogItemRequest(id=""))

        assert result.error.code == ErrorCode.INVALID_INPUT
        mock_repository.find_by_id.assert_not_called()

    @pytest.mark.parametrize("hard_delete", [False, True])
    async def test_delete_failed(self, use_case, mock_repository, hard_delete):
        mock_repository.soft_delete.return_value = False
        mock_repository.hard_delete.return_value = False

        result = await use_case.execute(
            DeleteCatalogItemRequest(id="item-1", hard_delete=hard_delete)
        )

        assert result.success is False
        assert result.error.code == ErrorCode.DELETE_FAILED
