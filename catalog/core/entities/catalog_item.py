"""
Catalog item domain entity.

A catalog item is an immutable snapshot of one sellable product. Every
mutation returns a new snapshot and leaves the receiver untouched, so callers
holding an older snapshot never see it change underneath them.
"""

import math
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from catalog.core.exceptions import ValidationError

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 200
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 2000
CATEGORY_MIN_LENGTH = 2
CATEGORY_MAX_LENGTH = 100
MAX_RATING = 5.0

# Fields a seller may change through CatalogItem.update().
UPDATABLE_FIELDS = (
    "name",
    "description",
    "price",
    "category",
    "stock",
    "image_url",
    "tags",
    "is_active",
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return not (isinstance(value, float) and not math.isfinite(value))


def _validate_text(
    field: str, label: str, value: Any, min_length: int, max_length: int
) -> str:
    if not isinstance(value, str) or len(value.strip()) < min_length:
        raise ValidationError(
            field, f"{label} must be at least {min_length} characters", value
        )
    trimmed = value.strip()
    if len(trimmed) > max_length:
        raise ValidationError(
            field, f"{label} cannot exceed {max_length} characters", value
        )
    return trimmed


def _validate_name(value: Any) -> str:
    return _validate_text("name", "Name", value, NAME_MIN_LENGTH, NAME_MAX_LENGTH)


def _validate_description(value: Any) -> str:
    return _validate_text(
        "description",
        "Description",
        value,
        DESCRIPTION_MIN_LENGTH,
        DESCRIPTION_MAX_LENGTH,
    )


def _validate_category(value: Any) -> str:
    return _validate_text(
        "category", "Category", value, CATEGORY_MIN_LENGTH, CATEGORY_MAX_LENGTH
    )


def _validate_price(value: Any) -> float:
    if not _is_number(value):
        raise ValidationError("price", "Price must be a valid number", value)
    if value < 0:
        raise ValidationError("price", "Price cannot be negative", value)
    return float(value)


def _validate_stock(value: Any) -> int:
    if not _is_number(value):
        raise ValidationError("stock", "Stock must be a valid number", value)
    if value < 0:
        raise ValidationError("stock", "Stock cannot be negative", value)
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError("stock", "Stock must be a whole number", value)
    return int(value)


def _validate_seller_id(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("seller_id", "Seller ID is required", value)
    return value.strip()


def _validate_tags(value: Any) -> tuple[str, ...]:
    """Trim tags, drop blanks and duplicates, keep first-seen order."""
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ValidationError("tags", "Tags must be a list of strings", value)
    tags: list[str] = []
    for tag in value:
        if not isinstance(tag, str):
            raise ValidationError("tags", "Tags must be a list of strings", value)
        tag = tag.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def _validate_image_url(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("image_url", "Image URL must be a string", value)
    return value.strip() or None


def _validate_is_active(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError("is_active", "Active flag must be a boolean", value)
    return value


def _validate_rating(value: Any) -> float:
    if not _is_number(value):
        raise ValidationError("rating", "Rating must be a valid number", value)
    if value < 0 or value > MAX_RATING:
        raise ValidationError("rating", "Rating must be between 0 and 5", value)
    return float(value)


def _validate_review_count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(
            "review_count", "Review count must be a non-negative whole number", value
        )
    return value


_FIELD_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    "name": _validate_name,
    "description": _validate_description,
    "price": _validate_price,
    "category": _validate_category,
    "stock": _validate_stock,
    "image_url": _validate_image_url,
    "tags": _validate_tags,
    "is_active": _validate_is_active,
}

# Stored fields a storage adapter may overwrite directly.
_STORED_FIELD_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    **_FIELD_VALIDATORS,
    "rating": _validate_rating,
    "review_count": _validate_review_count,
}


def validate_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    """
    Validate raw field changes against the entity invariants.

    Returns the normalized values. Raises ValidationError naming the first
    offending field, including fields with no validator.
    """
    validated = {}
    for field, value in changes.items():
        validator = _STORED_FIELD_VALIDATORS.get(field)
        if validator is None:
            raise ValidationError(field, "Field cannot be updated", value)
        validated[field] = validator(value)
    return validated


class CatalogItem(BaseModel):
    """
    A sellable product in the catalog.

    Build new items with create(), rebuild stored ones with reconstruct().
    Rating and review_count are aggregates owned by the review subsystem and
    only change through update_rating().
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    description: str
    price: float
    category: str
    stock: int
    seller_id: str
    image_url: str | None = None
    tags: tuple[str, ...] = ()
    is_active: bool = True
    rating: float = 0.0
    review_count: int = 0
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    # --- Factories ------------------------------------------------------------

    @classmethod
    def create(
        cls,
        *,
        name: Any,
        description: Any,
        price: Any,
        category: Any,
        stock: Any,
        seller_id: Any,
        tags: Any = None,
        image_url: Any = None,
    ) -> "CatalogItem":
        """
        Validate a creation request and build a new, unsaved item.

        Raises:
            ValidationError: naming the first field that breaks an invariant.
        """
        validated = {
            "name": _validate_name(name),
            "description": _validate_description(description),
            "price": _validate_price(price),
            "category": _validate_category(category),
            "stock": _validate_stock(stock),
            "seller_id": _validate_seller_id(seller_id),
            "tags": _validate_tags(tags),
            "image_url": _validate_image_url(image_url),
        }
        now = _utcnow()
        return cls(**validated, created_at=now, updated_at=now)

    @classmethod
    def reconstruct(cls, record: Mapping[str, Any]) -> "CatalogItem":
        """Rebuild an item from persisted state without invariant checks."""
        return cls.model_validate(dict(record))

    # --- Mutations (each returns a new snapshot) ------------------------------

    def update(self, **changes: Any) -> "CatalogItem":
        """
        Apply a partial change set.

        Only the fields present in ``changes`` are validated and replaced.
        """
        for field in changes:
            if field not in _FIELD_VALIDATORS:
                raise ValidationError(field, "Field cannot be updated", changes[field])

        validated = {
            field: _FIELD_VALIDATORS[field](changes[field])
            for field in UPDATABLE_FIELDS
            if field in changes
        }
        return self._evolve(**validated)

    def activate(self) -> "CatalogItem":
        return self._evolve(is_active=True)

    def deactivate(self) -> "CatalogItem":
        return self._evolve(is_active=False)

    def adjust_stock(self, delta: int) -> "CatalogItem":
        """Return a snapshot with ``stock + delta``; never clamps at zero."""
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError(
                "stock", "Stock adjustment must be a whole number", delta
            )
        new_stock = self.stock + delta
        if new_stock < 0:
            raise ValidationError("stock", "Insufficient stock", delta)
        return self._evolve(stock=new_stock)

    def increase_stock(self, quantity: int) -> "CatalogItem":
        self._check_quantity(quantity)
        return self.adjust_stock(quantity)

    def decrease_stock(self, quantity: int) -> "CatalogItem":
        self._check_quantity(quantity)
        return self.adjust_stock(-quantity)

    def update_rating(self, rating: float, review_count: int) -> "CatalogItem":
        return self._evolve(
            rating=_validate_rating(rating),
            review_count=_validate_review_count(review_count),
        )

    # --- Queries --------------------------------------------------------------

    def is_in_stock(self) -> bool:
        return self.stock > 0

    def has_sufficient_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def is_owned_by(self, seller_id: str) -> bool:
        return self.seller_id == seller_id

    # --- Serialization --------------------------------------------------------

    def to_record(self) -> dict[str, Any]:
        """Plain snapshot for persistence; reconstruct() accepts it back."""
        record = self.model_dump()
        record["tags"] = list(self.tags)
        return record

    # --- Internal helpers -----------------------------------------------------

    def _evolve(self, **updates: Any) -> "CatalogItem":
        return self.model_copy(update={**updates, "updated_at": _utcnow()})

    @staticmethod
    def _check_quantity(quantity: Any) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise ValidationError(
                "stock", "Quantity must be a non-negative whole number", quantity
            )
