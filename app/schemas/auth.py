"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.user import Language
from app.utils.validators import validate_password, validate_phone_number

from .common import BaseResponse
from .user import UserResponse


class RegisterRequest(BaseModel):
    """Registration request schema."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")
    phone: str | None = Field(None, description="Phone number")
    language: Language = Field(default=Language.SPANISH, description="Preferred language")

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v):
        validate_password(v)
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone_format(cls, v):
        if v:
            validate_phone_number(v)
        return v or None


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class TokenResponse(BaseResponse):
    """Bearer token response schema."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration in seconds")


class AuthResponse(TokenResponse):
    """Register and login response schema."""

    user: UserResponse


class MeResponse(BaseResponse):
    """Current user response schema."""

    user: UserResponse
