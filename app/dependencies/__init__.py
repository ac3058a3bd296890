"""FastAPI dependencies."""

from .auth import *
from .database import *
from .services import *

__all__ = [
    "get_current_user",
    "get_current_principal",
    "get_db",
    "get_media_storage",
    "get_auth_service",
    "get_user_service",
    "get_property_service",
    "get_media_service",
]
