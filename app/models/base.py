"""Base model classes and mixins."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, as_declarative, declared_attr, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@as_declarative()
class Base:
    """Base model class."""

    id: Any
    __name__: str

    # Generate __tablename__ automatically
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


class TimestampMixin:
    """
    Mixin for created_at and updated_at timestamps.

    Values are set client side so they are available on the instance after a
    flush without another round trip to the database.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )
