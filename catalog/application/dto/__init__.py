"""Data Transfer Objects for the use-case boundary.

Request DTOs: inputs transport adapters pass to execute().
Response DTOs: payloads carried in successful results.
"""

from catalog.application.dto.requests import (
    AdjustStockRequest,
    CatalogItemChanges,
    CreateCatalogItemRequest,
    DeleteCatalogItemRequest,
    GetCatalogItemRequest,
    ListCatalogItemsRequest,
    ListFeaturedCatalogItemsRequest,
    ListFilters,
    ListPagination,
    UpdateCatalogItemRequest,
    UpdateRatingRequest,
)
from catalog.application.dto.responses import (
    CatalogItemListResponse,
    CatalogItemResponse,
    DeleteCatalogItemResponse,
    PaginationResponse,
)

__all__ = [
    # Requests
    "CreateCatalogItemRequest",
    "GetCatalogItemRequest",
    "CatalogItemChanges",
    "UpdateCatalogItemRequest",
    "DeleteCatalogItemRequest",
    "ListFilters",
    "ListPagination",
    "ListCatalogItemsRequest",
    "ListFeaturedCatalogItemsRequest",
    "AdjustStockRequest",
    "UpdateRatingRequest",
    # Responses
    "CatalogItemResponse",
    "CatalogItemListResponse",
    "PaginationResponse",
    "DeleteCatalogItemResponse",
]
