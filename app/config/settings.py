"""Application configuration using Pydantic settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # API Configuration
    API_TITLE: str = "Property Listings API"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "Real estate listings with users, favorites and media"
    API_PREFIX: str = "/api"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    TESTING: bool = False

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./listings.db", description="Async database URL"
    )

    # JWT Configuration
    JWT_SECRET_KEY: str = Field(
        default="dev-jwt-secret-key-super-long-for-local-use-only-change-me",
        min_length=32,
        description="Secret key for JWT tokens",
    )
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    JWT_ISSUER: str = "listings-api"
    JWT_AUDIENCE: str = "listings-api"

    # Password Policy
    PASSWORD_MIN_LENGTH: int = 6
    PASSWORD_MAX_LENGTH: int = 72  # bcrypt limit

    # Media uploads
    UPLOAD_DIR: str = "uploads"
    MEDIA_BASE_URL: str = "http://localhost:3001"
    MEDIA_URL_PATH: str = "/uploads"
    MAX_FILE_SIZE: int = 5 * 1024 * 1024  # 5MB
    MAX_FILES_PER_UPLOAD: int = 10
    ALLOWED_MEDIA_TYPES: list[str] = [
        "image/jpeg",
        "image/png",
        "image/gif",
        "application/pdf",
    ]

    # CORS
    ALLOWED_ORIGINS: list[str] = ["http://localhost:3000"]
    ALLOWED_METHODS: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    ALLOWED_HEADERS: list[str] = ["*"]

    # Monitoring
    LOG_LEVEL: str = "INFO"
    SLOW_REQUEST_THRESHOLD: float = 2.0

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed = ["development", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


# Global settings instance
settings = Settings()
