"""
Application layer - use cases and DTOs.

This layer orchestrates catalog logic by:
1. Defining request/response DTOs for the use-case boundary
2. Implementing use cases that coordinate the entity and the repository

Use cases are the only entry point for transport adapters.
"""

from catalog.application.dto.requests import (
    AdjustStockRequest,
    CreateCatalogItemRequest,
    DeleteCatalogItemRequest,
    GetCatalogItemRequest,
    ListCatalogItemsRequest,
    ListFeaturedCatalogItemsRequest,
    UpdateCatalogItemRequest,
    UpdateRatingRequest,
)
from catalog.application.dto.responses import (
    CatalogItemListResponse,
    CatalogItemResponse,
    DeleteCatalogItemResponse,
)
from catalog.application.use_cases import (
    AdjustStockUseCase,
    CreateCatalogItemUseCase,
    DeleteCatalogItemUseCase,
    GetCatalogItemUseCase,
    ListCatalogItemsUseCase,
    ListFeaturedCatalogItemsUseCase,
    UpdateCatalogItemUseCase,
    UpdateRatingUseCase,
    UseCaseResult,
)

__all__ = [
    # Request DTOs
    "CreateCatalogItemRequest",
    "GetCatalogItemRequest",
    "UpdateCatalogItemRequest",
    "DeleteCatalogItemRequest",
    "ListCatalogItemsRequest",
    "ListFeaturedCatalogItemsRequest",
    "AdjustStockRequest",
    "UpdateRatingRequest",
    # Response DTOs
    "CatalogItemResponse",
    "CatalogItemListResponse",
    "DeleteCatalogItemResponse",
    # Use Cases
    "CreateCatalogItemUseCase",
    "GetCatalogItemUseCase",
    "UpdateCatalogItemUseCase",
    "DeleteCatalogItemUseCase",
    "ListCatalogItemsUseCase",
    "ListFeaturedCatalogItemsUseCase",
    "AdjustStockUseCase",
    "UpdateRatingUseCase",
    "UseCaseResult",
]
