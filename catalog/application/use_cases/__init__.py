"""Application use cases for the catalog."""

from catalog.application.use_cases.adjust_stock import AdjustStockUseCase
from catalog.application.use_cases.base import (
    ErrorCode,
    UseCaseError,
    UseCaseResult,
)
from catalog.application.use_cases.create_catalog_item import CreateCatalogItemUseCase
from catalog.application.use_cases.delete_catalog_item import DeleteCatalogItemUseCase
from catalog.application.use_cases.get_catalog_item import GetCatalogItemUseCase
from catalog.application.use_cases.list_catalog_items import (
    ListCatalogItemsUseCase,
    ListFeaturedCatalogItemsUseCase,
)
from catalog.application.use_cases.update_catalog_item import UpdateCatalogItemUseCase
from catalog.application.use_cases.update_rating import UpdateRatingUseCase

__all__ = [
    "ErrorCode",
    "UseCaseError",
    "UseCaseResult",
    "CreateCatalogItemUseCase",
    "GetCatalogItemUseCase",
    "UpdateCatalogItemUseCase",
    "DeleteCatalogItemUseCase",
    "ListCatalogItemsUseCase",
    "ListFeaturedCatalogItemsUseCase",
    "AdjustStockUseCase",
    "UpdateRatingUseCase",
]
