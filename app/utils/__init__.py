"""Utility functions and classes."""

from .exceptions import *
from .security import *
from .validators import *

__all__ = [
    # Security
    "hash_password",
    "verify_password",
    "generate_file_token",
    # Exceptions
    "BaseAPIException",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "StorageError",
    "InsufficientPermissionsError",
    # Validators
    "validate_password",
    "validate_phone_number",
    "validate_price_range",
]
