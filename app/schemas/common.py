"""Common Pydantic schemas."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class BaseResponse(BaseModel):
    """Base response model."""

    model_config = {"extra": "allow"}

    success: bool = True
    message: str | None = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class ErrorResponse(BaseResponse):
    """Error response model."""

    success: bool = False
    error_code: str | None = None
    details: dict[str, Any] | None = None


class PaginationMeta(BaseModel):
    """Pagination metadata."""

    total: int = Field(ge=0, description="Total number of items")
    page: int = Field(ge=1, description="Current page number")
    limit: int = Field(ge=1, le=100, description="Items per page")
    pages: int = Field(ge=0, description="Total number of pages")


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields."""

    created_at: datetime
    updated_at: datetime
