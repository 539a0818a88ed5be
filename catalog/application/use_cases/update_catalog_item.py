"""Update Catalog Item Use Case."""

from catalog.application.dto.requests import UpdateCatalogItemRequest
from catalog.application.dto.responses import CatalogItemResponse
from catalog.application.use_cases.base import (
    ErrorCode,
    RepositoryUseCase,
    UseCaseResult,
    is_blank,
    missing_id,
    not_found,
    unauthorized,
)
from catalog.config import get_logger
from catalog.core.exceptions import ValidationError

logger = get_logger(__name__)


class UpdateCatalogItemUseCase(RepositoryUseCase):
    """
    Apply a partial update to a catalog item.

    Flow:
    1. Load the item by ID
    2. Reject if a seller ID is given and does not own the item
    3. Validate and merge the changes through the entity
    4. Persist; a miss here means the item vanished in between
    """

    async def execute(
        self, request: UpdateCatalogItemRequest
    ) -> UseCaseResult[CatalogItemResponse]:
        """Execute update catalog item use case."""
        if is_blank(request.id):
            return missing_id()

        changes = request.data.to_changes()
        logger.info(
            "update_catalog_item_started",
            item_id=request.id,
            fields=sorted(changes),
        )

        repository = await self._get_repository()

        # 1. Load
        existing = await repository.find_by_id(request.id)
        if existing is None:
            return not_found()

        # 2. Authorize
        if request.seller_id is not None and not existing.is_owned_by(request.seller_id):
            logger.warning(
                "update_catalog_item_unauthorized",
                item_id=request.id,
                seller_id=request.seller_id,
            )
            return unauthorized("update")

        # 3. Validate + merge
        try:
            updated = existing.update(**changes)
        except ValidationError as e:
            logger.info("update_catalog_item_rejected", field=e.field, reason=e.reason)
            return UseCaseResult.from_validation_error(e)

        # 4. Persist
        saved = await repository.update(request.id, updated)
        if saved is None:
            logger.warning("update_catalog_item_lost", item_id=request.id)
            return UseCaseResult.fail(
                ErrorCode.UPDATE_FAILED, "Failed to update catalog item"
            )

        logger.info("update_catalog_item_complete", item_id=saved.id)
        return UseCaseResult.ok(CatalogItemResponse.from_entity(saved))
