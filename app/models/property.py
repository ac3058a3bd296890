"""Property listing models."""

from enum import Enum

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class PropertyType(str, Enum):
    """Kind of real estate being listed."""

    HOUSE = "HOUSE"
    APARTMENT = "APARTMENT"
    LAND = "LAND"
    COMMERCIAL = "COMMERCIAL"


class PropertyStatus(str, Enum):
    """Listing lifecycle status."""

    ACTIVE = "ACTIVE"
    SOLD = "SOLD"
    RENTED = "RENTED"
    INACTIVE = "INACTIVE"


class Currency(str, Enum):
    """Supported listing currencies."""

    MXN = "MXN"
    USD = "USD"


class Property(Base, TimestampMixin):
    """Property listing owned by a user (usually an agent)."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Listing copy (Spanish first, optional English)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    title_en: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text, nullable=False)
    description_en: Mapped[str | None] = mapped_column(Text)

    # Pricing
    price: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[Currency] = mapped_column(
        String(3), default=Currency.MXN.value, nullable=False
    )

    # Classification
    type: Mapped[PropertyType] = mapped_column(String(20), nullable=False, index=True)
    status: Mapped[PropertyStatus] = mapped_column(
        String(20), default=PropertyStatus.ACTIVE.value, nullable=False, index=True
    )

    # Characteristics
    bedrooms: Mapped[int | None] = mapped_column(Integer)
    bathrooms: Mapped[int | None] = mapped_column(Integer)
    building_size: Mapped[float | None] = mapped_column(Float)
    land_size: Mapped[float | None] = mapped_column(Float)
    construction_year: Mapped[int | None] = mapped_column(Integer)

    # Moderation and stats
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Ownership
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    owner: Mapped["User"] = relationship("User")
    address: Mapped["Address"] = relationship(
        "Address",
        back_populates="property",
        cascade="all, delete-orphan",
        uselist=False,
    )
    features: Mapped[list["PropertyFeature"]] = relationship(
        "PropertyFeature",
        back_populates="property",
        cascade="all, delete-orphan",
    )
    media: Mapped[list["Media"]] = relationship(
        "Media",
        back_populates="property",
        cascade="all, delete-orphan",
    )

    @property
    def main_image(self) -> "Media | None":
        """Main image among the loaded media, if any."""
        return next((m for m in self.media if m.is_main), None)

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title='{self.title}', owner_id={self.owner_id})>"


class Address(Base):
    """Postal address and coordinates of a property."""

    __tablename__ = "addresses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    street: Mapped[str | None] = mapped_column(String(255))
    street_number: Mapped[str | None] = mapped_column(String(50))
    neighborhood: Mapped[str] = mapped_column(String(255), nullable=False)
    postal_code: Mapped[str | None] = mapped_column(String(20))
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)

    property: Mapped["Property"] = relationship("Property", back_populates="address")


class PropertyFeature(Base):
    """Amenity or feature attached to a property."""

    __tablename__ = "property_features"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_en: Mapped[str | None] = mapped_column(String(255))

    property: Mapped["Property"] = relationship("Property", back_populates="features")
