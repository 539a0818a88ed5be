"""Response DTOs for catalog use cases.

Pydantic v2 models carried in UseCaseResult.data.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from catalog.core.entities.catalog_item import CatalogItem
from catalog.core.interfaces.catalog_repository import PageInfo


class CatalogItemResponse(BaseModel):
    """A persisted catalog item."""

    id: str
    name: str
    description: str
    price: float
    category: str
    stock: int
    seller_id: str
    image_url: str | None = None
    is_active: bool
    tags: list[str] = Field(default_factory=list)
    rating: float
    review_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, item: CatalogItem) -> "CatalogItemResponse":
        return cls(
            id=item.id or "",
            name=item.name,
            description=item.description,
            price=item.price,
            category=item.category,
            stock=item.stock,
            seller_id=item.seller_id,
            image_url=item.image_url,
            is_active=item.is_active,
            tags=list(item.tags),
            rating=item.rating,
            review_count=item.review_count,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class PaginationResponse(BaseModel):
    """Pagination metadata for list responses."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def from_page_info(cls, info: PageInfo) -> "PaginationResponse":
        return cls(page=info.page, limit=info.limit, total=info.total, pages=info.pages)


class CatalogItemListResponse(BaseModel):
    """One page of catalog items."""

    items: list[CatalogItemResponse]
    pagination: PaginationResponse


class DeleteCatalogItemResponse(BaseModel):
    """Outcome of a delete."""

    deleted: bool
    message: str
