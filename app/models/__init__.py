"""Database models."""

from .base import Base, TimestampMixin
from .favorite import Favorite, SavedSearch
from .media import Media, MediaType
from .property import Address, Currency, Property, PropertyFeature, PropertyStatus, PropertyType
from .user import Language, User, UserRole

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "UserRole",
    "Language",
    "Property",
    "PropertyType",
    "PropertyStatus",
    "Currency",
    "Address",
    "PropertyFeature",
    "Media",
    "MediaType",
    "Favorite",
    "SavedSearch",
]
