"""Pydantic schemas for request/response models."""

from .auth import *
from .common import *
from .media import *
from .property import *
from .user import *

__all__ = [
    # Common
    "BaseResponse",
    "ErrorResponse",
    "PaginationMeta",
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "AuthResponse",
    "MeResponse",
    # User
    "UserUpdate",
    "UserResponse",
    "UserDetailResponse",
    "UserListResponse",
    "SavedSearchCreate",
    "SavedSearchResponse",
    "SavedSearchDetailResponse",
    "SavedSearchListResponse",
    # Property
    "PropertyCreate",
    "PropertyUpdate",
    "PropertySearchParams",
    "PropertySummary",
    "PropertyResponse",
    "PropertyListResponse",
    "PropertyDetailResponse",
    "FavoriteResponse",
    "FavoriteListResponse",
    "FavoriteDetailResponse",
    # Media
    "MediaUpdate",
    "MediaResponse",
    "MediaListResponse",
    "MediaDetailResponse",
]
