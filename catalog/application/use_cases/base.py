"""
Result type shared by catalog use cases.

Business rejections come back as ``UseCaseResult.fail(...)``; only
infrastructure failures are raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from catalog.core.exceptions import ValidationError
from catalog.core.interfaces.catalog_repository import ICatalogRepository

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Business error codes returned in failed results."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    UPDATE_FAILED = "UPDATE_FAILED"
    DELETE_FAILED = "DELETE_FAILED"


@dataclass(frozen=True)
class UseCaseError:
    """Why a use case rejected its input."""

    code: ErrorCode
    message: str
    field: str | None = None

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.field is not None:
            error["field"] = self.field
        return error


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [_dump(entry) for entry in data]
    return data


@dataclass(frozen=True)
class UseCaseResult(Generic[T]):
    """Either ``success`` with ``data`` or a failure with ``error``."""

    success: bool
    data: T | None = None
    error: UseCaseError | None = None

    @classmethod
    def ok(cls, data: T) -> "UseCaseResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls, code: ErrorCode, message: str, field: str | None = None
    ) -> "UseCaseResult[T]":
        return cls(success=False, error=UseCaseError(code, message, field))

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "UseCaseResult[T]":
        return cls.fail(ErrorCode.VALIDATION_ERROR, exc.reason, field=exc.field)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success}
        if self.success:
            result["data"] = _dump(self.data)
        else:
            result["error"] = self.error.to_dict() if self.error else None
        return result


def not_found(message: str = "Catalog item not found") -> UseCaseResult[Any]:
    return UseCaseResult.fail(ErrorCode.NOT_FOUND, message)


def missing_id() -> UseCaseResult[Any]:
    return UseCaseResult.fail(
        ErrorCode.INVALID_INPUT, "Catalog item ID is required", field="id"
    )


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def unauthorized(action: str) -> UseCaseResult[Any]:
    return UseCaseResult.fail(
        ErrorCode.UNAUTHORIZED,
        f"You are not authorized to {action} this catalog item",
    )


class RepositoryUseCase:
    """Base for use cases that talk to the catalog repository."""

    def __init__(self, repository: ICatalogRepository | None = None):
        self._repository = repository

    async def _get_repository(self) -> ICatalogRepository:
        if self._repository is None:
            from catalog.infrastructure.storage import get_catalog_repository

            self._repository = await get_catalog_repository()
        return self._repository
