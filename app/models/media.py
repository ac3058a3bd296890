"""Media model for property images, floor plans and videos."""

from enum import Enum

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class MediaType(str, Enum):
    """Kinds of media attached to a listing."""

    IMAGE = "IMAGE"
    FLOOR_PLAN = "FLOOR_PLAN"
    VIDEO = "VIDEO"


class Media(Base, TimestampMixin):
    """Media file or external URL belonging to a property."""

    __tablename__ = "media"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    type: Mapped[MediaType] = mapped_column(
        String(20), default=MediaType.IMAGE.value, nullable=False
    )
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    # Relative path inside the upload directory, only for files we stored
    storage_path: Mapped[str | None] = mapped_column(String(500))
    is_main: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    property: Mapped["Property"] = relationship("Property", back_populates="media")

    def __repr__(self) -> str:
        return f"<Media(id={self.id}, property_id={self.property_id}, type='{self.type}')>"
