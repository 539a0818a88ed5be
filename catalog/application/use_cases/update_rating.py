"""Update Rating Use Case: aggregates pushed by the review subsystem."""

from catalog.application.dto.requests import UpdateRatingRequest
from catalog.application.dto.responses import CatalogItemResponse
from catalog.application.use_cases.base import (
    ErrorCode,
    RepositoryUseCase,
    UseCaseResult,
    is_blank,
    missing_id,
    not_found,
)
from catalog.config import get_logger
from catalog.core.exceptions import ValidationError

logger = get_logger(__name__)


class UpdateRatingUseCase(RepositoryUseCase):
    """Replace an item's average rating and review count."""

    async def execute(
        self, request: UpdateRatingRequest
    ) -> UseCaseResult[CatalogItemResponse]:
        if is_blank(request.id):
            return missing_id()

        repository = await self._get_repository()

        item = await repository.find_by_id(request.id)
        if item is None:
            return not_found()

        try:
            rated = item.update_rating(request.rating, request.review_count)
        except ValidationError as e:
            return UseCaseResult.from_validation_error(e)

        saved = await repository.update(request.id, rated)
        if saved is None:
            return UseCaseResult.fail(ErrorCode.UPDATE_FAILED, "Failed to update rating")

        logger.info(
            "catalog_item_rating_updated",
            item_id=saved.id,
            rating=saved.rating,
            review_count=saved.review_count,
        )
        return UseCaseResult.ok(CatalogItemResponse.from_entity(saved))
