"""
Adjust Stock Use Case.

Checks the change against the current snapshot for a clear error, then
applies it with the repository's atomic conditional update so concurrent
decrements can never drive stock below zero.
"""

from catalog.application.dto.requests import AdjustStockRequest
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


class AdjustStockUseCase(RepositoryUseCase):
    """Add or remove units of stock."""

    async def execute(
        self, request: AdjustStockRequest
    ) -> UseCaseResult[CatalogItemResponse]:
        """Execute adjust stock use case."""
        if is_blank(request.id):
            return missing_id()

        repository = await self._get_repository()

        item = await repository.find_by_id(request.id)
        if item is None:
            return not_found()

        if request.seller_id is not None and not item.is_owned_by(request.seller_id):
            logger.warning(
                "adjust_stock_unauthorized",
                item_id=request.id,
                seller_id=request.seller_id,
            )
            return unauthorized("adjust stock of")

        try:
            item.adjust_stock(request.delta)
        except ValidationError as e:
            logger.info(
                "adjust_stock_rejected",
                item_id=request.id,
                stock=item.stock,
                delta=request.delta,
                reason=e.reason,
            )
            return UseCaseResult.from_validation_error(e)

        adjusted = await repository.adjust_stock(request.id, request.delta)
        if adjusted is None:
            logger.warning("adjust_stock_lost", item_id=request.id, delta=request.delta)
            return UseCaseResult.fail(
                ErrorCode.UPDATE_FAILED, "Failed to adjust stock"
            )

        logger.info(
            "adjust_stock_complete",
            item_id=request.id,
            delta=request.delta,
            stock=adjusted.stock,
        )
        return UseCaseResult.ok(CatalogItemResponse.from_entity(adjusted))
