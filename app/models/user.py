"""User model."""

from enum import Enum

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class UserRole(str, Enum):
    """Platform-wide user roles."""

    USER = "USER"  # Browses, saves favorites and searches
    AGENT = "AGENT"  # Publishes listings
    ADMIN = "ADMIN"  # Full access, verifies listings, manages roles


class Language(str, Enum):
    """Preferred interface language."""

    SPANISH = "SPANISH"
    ENGLISH = "ENGLISH"


class User(Base, TimestampMixin):
    """User model representing system users."""

    __tablename__ = "users"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Basic info
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30))

    # Authentication
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        String(20), default=UserRole.USER.value, nullable=False, index=True
    )

    # Preferences
    language: Mapped[Language] = mapped_column(
        String(20), default=Language.SPANISH.value, nullable=False
    )

    @property
    def full_name(self) -> str:
        """Get full name."""
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
