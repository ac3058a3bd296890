"""User schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.user import Language, UserRole
from app.utils.validators import validate_password, validate_phone_number

from .common import BaseResponse, TimestampMixin


class UserUpdate(BaseModel):
    """Schema for updating user information. At least one field is required."""

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None)
    language: Language | None = Field(None)
    password: str | None = Field(None)
    role: UserRole | None = Field(None)

    @field_validator("phone")
    @classmethod
    def validate_phone_format(cls, v):
        if v:
            validate_phone_number(v)
        return v

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v):
        if v is not None:
            validate_password(v)
        return v

    @model_validator(mode="after")
    def require_any_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


class UserResponse(TimestampMixin):
    """Schema for user response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    full_name: str
    phone: str | None
    role: UserRole
    language: Language


class UserDetailResponse(BaseResponse):
    """Single user response."""

    user: UserResponse


class UserListResponse(BaseResponse):
    """Paginated user list for administrators."""

    users: list[UserResponse]
    total: int
    page: int
    per_page: int
    pages: int


class SavedSearchCreate(BaseModel):
    """Schema for saving a set of listing filters."""

    name: str = Field(..., min_length=1, max_length=100)
    criteria: dict[str, Any] = Field(default_factory=dict)


class SavedSearchResponse(BaseModel):
    """Saved search response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    criteria: dict[str, Any]
    created_at: datetime


class SavedSearchDetailResponse(BaseResponse):
    """Single saved search response."""

    saved_search: SavedSearchResponse


class SavedSearchListResponse(BaseResponse):
    """List of a user's saved searches."""

    saved_searches: list[SavedSearchResponse]
