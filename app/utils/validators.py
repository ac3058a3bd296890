"""Validation utilities."""

import re

from app.config.settings import settings

from .exceptions import ValidationError


def validate_password(password: str) -> None:
    """Validate password length against configured bounds."""
    errors = []

    if len(password) < settings.PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long")

    # bcrypt only looks at the first 72 bytes
    if len(password.encode("utf-8")) > settings.PASSWORD_MAX_LENGTH:
        errors.append(f"Password must be at most {settings.PASSWORD_MAX_LENGTH} bytes long")

    if errors:
        raise ValidationError("Password validation failed", details={"errors": errors})


def validate_phone_number(phone: str | None) -> None:
    """Validate phone number format."""
    if not phone:
        return  # Phone is optional

    # Remove all non-digit characters
    digits_only = re.sub(r"\D", "", phone)

    # Check length (7-15 digits is standard for international numbers)
    if len(digits_only) < 7 or len(digits_only) > 15:
        raise ValidationError("Phone number must be between 7 and 15 digits")


def validate_price_range(min_price: float | None, max_price: float | None) -> None:
    """Ensure a max price filter is greater than the min price filter."""
    if min_price is not None and max_price is not None and max_price <= min_price:
        raise ValidationError("max_price must be greater than min_price")
