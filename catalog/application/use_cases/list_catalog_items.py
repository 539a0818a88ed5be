"""List Catalog Items Use Cases: paginated listing and featured items."""

from catalog.application.dto.requests import (
    ListCatalogItemsRequest,
    ListFeaturedCatalogItemsRequest,
    ListFilters,
    ListPagination,
)
from catalog.application.dto.responses import (
    CatalogItemListResponse,
    CatalogItemResponse,
    PaginationResponse,
)
from catalog.application.use_cases.base import (
    ErrorCode,
    RepositoryUseCase,
    UseCaseResult,
)
from catalog.config import get_logger, get_settings
from catalog.core.interfaces.catalog_repository import (
    SORTABLE_FIELDS,
    CatalogFilters,
    Pagination,
)

logger = get_logger(__name__)

_SORT_ORDERS = ("asc", "desc")


def _to_filters(filters: ListFilters | None) -> CatalogFilters:
    filters = filters or ListFilters()
    return CatalogFilters(
        search=filters.search,
        category=filters.category,
        seller_id=filters.seller_id,
        min_price=filters.min_price,
        max_price=filters.max_price,
        is_active=True if filters.is_active is None else filters.is_active,
        tags=filters.tags,
    )


class ListCatalogItemsUseCase(RepositoryUseCase):
    """
    List catalog items one page at a time.

    Unset pagination values fall back to the configured page size; an
    oversized limit is capped rather than rejected. Only active items are
    listed unless the caller asks for is_active explicitly.
    """

    async def execute(
        self, request: ListCatalogItemsRequest | None = None
    ) -> UseCaseResult[CatalogItemListResponse]:
        """Execute list catalog items use case."""
        request = request or ListCatalogItemsRequest()
        pagination = request.pagination or ListPagination()
        config = get_settings().catalog

        page = 1 if pagination.page is None else pagination.page
        limit = config.default_page_size if pagination.limit is None else pagination.limit
        sort_by = pagination.sort_by or "created_at"
        sort_order = pagination.sort_order or "desc"

        if page < 1:
            return UseCaseResult.fail(
                ErrorCode.INVALID_INPUT, "Page must be at least 1", field="page"
            )
        if limit < 1:
            return UseCaseResult.fail(
                ErrorCode.INVALID_INPUT, "Limit must be at least 1", field="limit"
            )
        if sort_by not in SORTABLE_FIELDS:
            return UseCaseResult.fail(
                ErrorCode.INVALID_INPUT,
                f"Cannot sort by '{sort_by}'",
                field="sort_by",
            )
        if sort_order not in _SORT_ORDERS:
            return UseCaseResult.fail(
                ErrorCode.INVALID_INPUT,
                "Sort order must be 'asc' or 'desc'",
                field="sort_order",
            )

        limit = min(limit, config.max_page_size)
        filters = _to_filters(request.filters)

        logger.debug(
            "list_catalog_items_started",
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )

        repository = await self._get_repository()
        result = await repository.find_all(
            filters,
            Pagination(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order),
        )

        logger.debug(
            "list_catalog_items_complete",
            returned=len(result.items),
            total=result.page_info.total,
        )
        return UseCaseResult.ok(
            CatalogItemListResponse(
                items=[CatalogItemResponse.from_entity(item) for item in result.items],
                pagination=PaginationResponse.from_page_info(result.page_info),
            )
        )


class ListFeaturedCatalogItemsUseCase(RepositoryUseCase):
    """Most-reviewed active items, best rated first among equals."""

    async def execute(
        self, request: ListFeaturedCatalogItemsRequest | None = None
    ) -> UseCaseResult[list[CatalogItemResponse]]:
        request = request or ListFeaturedCatalogItemsRequest()
        config = get_settings().catalog

        limit = config.featured_limit if request.limit is None else request.limit
        if limit < 1:
            return UseCaseResult.fail(
                ErrorCode.INVALID_INPUT, "Limit must be at least 1", field="limit"
            )
        limit = min(limit, config.max_page_size)

        repository = await self._get_repository()
        items = await repository.find_featured(limit)
        return UseCaseResult.ok([CatalogItemResponse.from_entity(item) for item in items])
