"""Get Catalog Item Use Case. Inactive items are reported as not found."""

from catalog.application.dto.requests import GetCatalogItemRequest
from catalog.application.dto.responses import CatalogItemResponse
from catalog.application.use_cases.base import (
    RepositoryUseCase,
    UseCaseResult,
    is_blank,
    missing_id,
    not_found,
)
from catalog.config import get_logger

logger = get_logger(__name__)


class GetCatalogItemUseCase(RepositoryUseCase):
    """Fetch a single active catalog item."""

    async def execute(
        self, request: GetCatalogItemRequest
    ) -> UseCaseResult[CatalogItemResponse]:
        """Execute get catalog item use case."""
        if is_blank(request.id):
            return missing_id()

        repository = await self._get_repository()
        item = await repository.find_by_id(request.id)

        if item is None or not item.is_active:
            logger.debug("get_catalog_item_not_found", item_id=request.id)
            return not_found()

        return UseCaseResult.ok(CatalogItemResponse.from_entity(item))
