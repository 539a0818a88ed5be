"""Request DTOs for catalog use cases.

Pydantic v2 models that transport adapters build and hand to use cases.
Field types are deliberately loose: business rules (lengths, ranges, stock
integrality) are enforced by the CatalogItem entity, not here, so that
violations come back as VALIDATION_ERROR results.
"""

from typing import Any

from pydantic import BaseModel, Field


class CreateCatalogItemRequest(BaseModel):
    """Request to create a catalog item."""

    name: str = Field(..., description="Display name (3-200 chars)")
    description: str = Field(..., description="Description (10-2000 chars)")
    price: float = Field(..., description="Unit price, zero allowed")
    category: str = Field(..., description="Category name (2-100 chars)")
    stock: int | float = Field(..., description="Units in stock")
    seller_id: str = Field(..., description="Owning seller ID")
    tags: list[str] | None = Field(default=None, description="Free-form tags")
    image_url: str | None = Field(default=None, description="Primary image URL")


class GetCatalogItemRequest(BaseModel):
    """Request to fetch one active catalog item."""

    id: str = Field(..., description="Catalog item ID")


class CatalogItemChanges(BaseModel):
    """Partial change set. Only explicitly set fields are applied."""

    name: str | None = None
    description: str | None = None
    price: float | None = None
    category: str | None = None
    stock: int | float | None = None
    image_url: str | None = None
    tags: list[str] | None = None
    is_active: bool | None = None

    def to_changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class UpdateCatalogItemRequest(BaseModel):
    """Request to update a catalog item."""

    id: str = Field(..., description="Catalog item ID")
    seller_id: str | None = Field(
        default=None,
        description="When given, the item must be owned by this seller",
    )
    data: CatalogItemChanges = Field(default_factory=CatalogItemChanges)


class DeleteCatalogItemRequest(BaseModel):
    """Request to delete a catalog item."""

    id: str = Field(..., description="Catalog item ID")
    seller_id: str | None = Field(
        default=None,
        description="When given, the item must be owned by this seller",
    )
    hard_delete: bool = Field(
        default=False,
        description="Remove permanently instead of marking inactive",
    )


class ListFilters(BaseModel):
    """Listing filters. is_active defaults to True in the use case."""

    search: str | None = None
    category: str | None = None
    seller_id: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    is_active: bool | None = None
    tags: list[str] | None = None


class ListPagination(BaseModel):
    """Listing page selection. Unset values fall back to configured defaults."""

    page: int | None = None
    limit: int | None = None
    sort_by: str | None = None
    sort_order: str | None = None


class ListCatalogItemsRequest(BaseModel):
    """Request to list catalog items."""

    filters: ListFilters | None = None
    pagination: ListPagination | None = None


# --- Supplementary operations ---


class AdjustStockRequest(BaseModel):
    """Request to change stock by a signed delta."""

    id: str = Field(..., description="Catalog item ID")
    delta: int = Field(..., description="Units to add (positive) or remove (negative)")
    seller_id: str | None = Field(
        default=None,
        description="When given, the item must be owned by this seller",
    )


class UpdateRatingRequest(BaseModel):
    """Aggregate rating pushed by the review subsystem."""

    id: str = Field(..., description="Catalog item ID")
    rating: float = Field(..., description="Average rating, 0-5")
    review_count: int = Field(..., description="Number of reviews")


class ListFeaturedCatalogItemsRequest(BaseModel):
    """Request for the featured listing."""

    limit: int | None = Field(default=None, description="Defaults to the featured limit")
