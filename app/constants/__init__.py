"""Constants package."""

from . import messages
from .status_codes import ERROR_CODES, APIStatus, get_error_code

__all__ = [
    "APIStatus",
    "ERROR_CODES",
    "get_error_code",
    "messages",
]
