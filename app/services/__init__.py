"""Service layer for business logic."""

from .auth_service import AuthService
from .jwt_service import JWTService
from .media_service import MediaService
from .property_service import PropertyService
from .storage import LocalMediaStorage
from .user_service import UserService

__all__ = [
    "AuthService",
    "JWTService",
    "LocalMediaStorage",
    "MediaService",
    "PropertyService",
    "UserService",
]
