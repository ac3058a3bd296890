"""HTTP status code constants with semantic names."""

from enum import IntEnum


class APIStatus(IntEnum):
    """Semantic HTTP status codes for API responses."""

    # Success
    SUCCESS = 200
    CREATED = 201

    # Client errors
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    VALIDATION_ERROR = 422

    # Server errors
    INTERNAL_ERROR = 500


ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    413: "PAYLOAD_TOO_LARGE",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
}


def get_error_code(status_code: int) -> str:
    """Get error code string for an HTTP status."""
    return ERROR_CODES.get(status_code, "HTTP_ERROR")
