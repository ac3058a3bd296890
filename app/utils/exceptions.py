"""Custom exceptions for the application."""

from typing import Any, Dict, Optional


class BaseAPIException(Exception):
    """Base exception for all handled API errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationError(BaseAPIException):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed", **kwargs):
        kwargs.setdefault("error_code", "AUTHENTICATION_FAILED")
        super().__init__(message, **kwargs)


class AuthorizationError(BaseAPIException):
    """Raised when authorization fails."""

    def __init__(self, message: str = "Access denied", **kwargs):
        kwargs.setdefault("error_code", "ACCESS_DENIED")
        super().__init__(message, **kwargs)


class ValidationError(BaseAPIException, ValueError):
    """
    Raised when validation fails.

    Also a ValueError so pydantic validators reject the field with a 422.
    """

    def __init__(self, message: str = "Validation failed", **kwargs):
        kwargs.setdefault("error_code", "VALIDATION_ERROR")
        super().__init__(message, **kwargs)


class NotFoundError(BaseAPIException):
    """Raised when a resource is not found."""

    def __init__(self, message: str = "Resource not found", **kwargs):
        kwargs.setdefault("error_code", "NOT_FOUND")
        super().__init__(message, **kwargs)


class StorageError(BaseAPIException):
    """Raised when the media store fails to read or write a file."""

    def __init__(self, message: str = "Storage operation failed", **kwargs):
        kwargs.setdefault("error_code", "STORAGE_ERROR")
        super().__init__(message, **kwargs)


class TokenExpiredError(AuthenticationError):
    """Raised when a token has expired."""

    def __init__(self, message: str = "Token has expired", **kwargs):
        kwargs.setdefault("error_code", "TOKEN_EXPIRED")
        super().__init__(message, **kwargs)


class InvalidTokenError(AuthenticationError):
    """Raised when a token is invalid."""

    def __init__(self, message: str = "Invalid token", **kwargs):
        kwargs.setdefault("error_code", "INVALID_TOKEN")
        super().__init__(message, **kwargs)


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user doesn't have sufficient permissions."""

    def __init__(self, message: str = "Insufficient permissions", **kwargs):
        kwargs.setdefault("error_code", "INSUFFICIENT_PERMISSIONS")
        super().__init__(message, **kwargs)


class UploadRejectedError(ValidationError):
    """Raised when uploaded files fail type, size or count checks."""

    def __init__(self, message: str = "Upload rejected", **kwargs):
        kwargs.setdefault("error_code", "UPLOAD_REJECTED")
        super().__init__(message, **kwargs)


class UserNotFoundError(NotFoundError):
    """Raised when user is not found."""

    def __init__(self, message: str = "User not found", **kwargs):
        kwargs.setdefault("error_code", "USER_NOT_FOUND")
        super().__init__(message, **kwargs)


class PropertyNotFoundError(NotFoundError):
    """Raised when property is not found."""

    def __init__(self, message: str = "Property not found", **kwargs):
        kwargs.setdefault("error_code", "PROPERTY_NOT_FOUND")
        super().__init__(message, **kwargs)


class MediaNotFoundError(NotFoundError):
    """Raised when media is not found."""

    def __init__(self, message: str = "Media not found", **kwargs):
        kwargs.setdefault("error_code", "MEDIA_NOT_FOUND")
        super().__init__(message, **kwargs)


class FavoriteNotFoundError(NotFoundError):
    """Raised when a property is not in the user's favorites."""

    def __init__(self, message: str = "Property not in favorites", **kwargs):
        kwargs.setdefault("error_code", "FAVORITE_NOT_FOUND")
        super().__init__(message, **kwargs)


class SavedSearchNotFoundError(NotFoundError):
    """Raised when saved search is not found."""

    def __init__(self, message: str = "Saved search not found", **kwargs):
        kwargs.setdefault("error_code", "SAVED_SEARCH_NOT_FOUND")
        super().__init__(message, **kwargs)
