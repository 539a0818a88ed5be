"""Create Catalog Item Use Case."""

from catalog.application.dto.requests import CreateCatalogItemRequest
from catalog.application.dto.responses import CatalogItemResponse
from catalog.application.use_cases.base import RepositoryUseCase, UseCaseResult
from catalog.config import get_logger
from catalog.core.entities.catalog_item import CatalogItem
from catalog.core.exceptions import ValidationError

logger = get_logger(__name__)


class CreateCatalogItemUseCase(RepositoryUseCase):
    """Create a new catalog item for a seller."""

    async def execute(
        self, request: CreateCatalogItemRequest
    ) -> UseCaseResult[CatalogItemResponse]:
        """Execute create catalog item use case."""
        logger.info(
            "create_catalog_item_started",
            seller_id=request.seller_id,
            category=request.category,
        )

        try:
            item = CatalogItem.create(
                name=request.name,
                description=request.description,
                price=request.price,
                category=request.category,
                stock=request.stock,
                seller_id=request.seller_id,
                tags=request.tags,
                image_url=request.image_url,
            )
        except ValidationError as e:
            logger.info("create_catalog_item_rejected", field=e.field, reason=e.reason)
            return UseCaseResult.from_validation_error(e)

        repository = await self._get_repository()
        saved = await repository.save(item)

        logger.info("create_catalog_item_complete", item_id=saved.id)
        return UseCaseResult.ok(CatalogItemResponse.from_entity(saved))
