"""Delete Catalog Item Use Case.

Soft delete by default; hard delete removes the record.
"""

from catalog.application.dto.requests import DeleteCatalogItemRequest
from catalog.application.dto.responses import DeleteCatalogItemResponse
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

logger = get_logger(__name__)


class DeleteCatalogItemUseCase(RepositoryUseCase):
    """Deactivate or permanently remove a catalog item."""

    async def execute(
        self, request: DeleteCatalogItemRequest
    ) -> UseCaseResult[DeleteCatalogItemResponse]:
        """Execute delete catalog item use case."""
        if is_blank(request.id):
            return missing_id()

        logger.info(
            "delete_catalog_item_started",
            item_id=request.id,
            hard_delete=request.hard_delete,
        )

        repository = await self._get_repository()

        existing = await repository.find_by_id(request.id)
        if existing is None:
            return not_found()

        if request.seller_id is not None and not existing.is_owned_by(request.seller_id):
            logger.warning(
                "delete_catalog_item_unauthorized",
                item_id=request.id,
                seller_id=request.seller_id,
            )
            return unauthorized("delete")

        if request.hard_delete:
            deleted = await repository.hard_delete(request.id)
        else:
            deleted = await repository.soft_delete(request.id)

        if not deleted:
            logger.warning("delete_catalog_item_lost", item_id=request.id)
            return UseCaseResult.fail(
                ErrorCode.DELETE_FAILED, "Failed to delete catalog item"
            )

        logger.info(
            "delete_catalog_item_complete",
            item_id=request.id,
            hard_delete=request.hard_delete,
        )
        return UseCaseResult.ok(
            DeleteCatalogItemResponse(
                deleted=True,
                message=(
                    "Catalog item permanently deleted"
                    if request.hard_delete
                    else "Catalog item deleted successfully"
                ),
            )
        )
