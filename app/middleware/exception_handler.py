"""Global exception handler middleware."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.constants import get_error_code, messages
from app.schemas.common import ErrorResponse
from app.utils.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BaseAPIException,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Map exception types to HTTP status codes, most specific base first
STATUS_MAPPING = {
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: BaseAPIException) -> int:
    """Resolve the HTTP status by walking the exception's class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in STATUS_MAPPING:
            return STATUS_MAPPING[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(message: str, error_code: str | None, details: Any = None) -> dict:
    return ErrorResponse(message=message, error_code=error_code, details=details or {}).model_dump()


class ExceptionHandlers:
    """Centralized exception handlers for the application."""

    @staticmethod
    async def api_exception_handler(request: Request, exc: BaseAPIException) -> JSONResponse:
        """Handle all custom API exceptions."""

        status_code = status_code_for(exc)
        log = logger.error if status_code >= 500 else logger.warning
        log(
            f"API exception in {request.method} {request.url.path}: {exc.message}",
            extra={
                "error_code": exc.error_code,
                "details": exc.details,
                "path": str(request.url.path),
                "method": request.method,
                "status_code": status_code,
            },
        )

        headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None

        return JSONResponse(
            status_code=status_code,
            content=error_body(exc.message, exc.error_code, exc.details),
            headers=headers,
        )

    @staticmethod
    async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle request and pydantic validation errors."""

        errors = exc.errors() if hasattr(exc, "errors") else str(exc)

        logger.warning(
            f"Validation error in {request.method} {request.url.path}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__,
            },
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_body(
                "Validation failed",
                "VALIDATION_ERROR",
                {"validation_errors": jsonable_errors(errors)},
            ),
        )

    @staticmethod
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        """Handle database integrity errors."""

        logger.error(
            f"Database integrity error in {request.method} {request.url.path}: {str(exc.orig)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
            },
        )

        # Parse common integrity violations
        error_message = "Database constraint violation"
        error_code = "INTEGRITY_ERROR"
        text = str(exc.orig).lower()

        if "unique" in text or "duplicate key" in text:
            error_message = "Resource already exists"
            error_code = "DUPLICATE_RESOURCE"
        elif "foreign key" in text:
            error_message = "Referenced resource not found"
            error_code = "FOREIGN_KEY_VIOLATION"
        elif "not null" in text:
            error_message = "Required field is missing"
            error_code = "REQUIRED_FIELD_MISSING"

        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=error_body(error_message, error_code),
        )

    @staticmethod
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle HTTP exceptions, including unknown routes, with consistent format."""

        message = exc.detail
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = messages.RESOURCE_NOT_FOUND

        logger.warning(
            f"HTTP exception in {request.method} {request.url.path}: {message}",
            extra={
                "status_code": exc.status_code,
                "path": str(request.url.path),
                "method": request.method,
            },
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message, get_error_code(exc.status_code)),
            headers=getattr(exc, "headers", None),
        )

    @staticmethod
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""

        logger.error(
            f"Unexpected error in {request.method} {request.url.path}: {str(exc)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__,
            },
            exc_info=True,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(messages.INTERNAL_ERROR, "INTERNAL_ERROR"),
        )


def jsonable_errors(errors: Any) -> Any:
    """Strip non-serializable context (such as exception instances) from pydantic errors."""
    if not isinstance(errors, list):
        return errors
    return [
        {key: (str(value) if key == "ctx" else value) for key, value in error.items() if key != "input"}
        for error in errors
    ]


def register_exception_handlers(app: Any) -> None:
    """Register all exception handlers with the FastAPI app."""

    handlers = ExceptionHandlers()

    # Custom API exceptions
    app.add_exception_handler(BaseAPIException, handlers.api_exception_handler)

    # Database errors
    app.add_exception_handler(IntegrityError, handlers.integrity_error_handler)

    # HTTP exceptions, also raised by the router for unknown paths
    app.add_exception_handler(StarletteHTTPException, handlers.http_exception_handler)

    # Request and pydantic validation errors
    app.add_exception_handler(RequestValidationError, handlers.validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, handlers.validation_exception_handler)

    # Catch-all for unexpected errors
    app.add_exception_handler(Exception, handlers.general_exception_handler)
