"""Property listing schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.media import MediaType
from app.models.property import Currency, PropertyStatus, PropertyType
from app.utils.validators import validate_price_range

from .common import BaseResponse, PaginationMeta, TimestampMixin


def _check_construction_year(v):
    if v is not None and v > date.today().year:
        raise ValueError("construction_year cannot be in the future")
    return v


class AddressCreate(BaseModel):
    """Address supplied when creating a property."""

    street: str | None = None
    street_number: str | None = None
    neighborhood: str = Field(..., min_length=1)
    postal_code: str | None = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)


class AddressUpdate(BaseModel):
    """Partial address used to upsert a property's address."""

    street: str | None = None
    street_number: str | None = None
    neighborhood: str | None = Field(None, min_length=1)
    postal_code: str | None = None
    city: str | None = Field(None, min_length=1)
    state: str | None = Field(None, min_length=1)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)


class FeatureCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    name_en: str | None = Field(None, max_length=255)


class MediaLink(BaseModel):
    """External media URL attached at creation time."""

    type: MediaType
    url: str = Field(..., pattern=r"^https?://\S+$", max_length=1000)
    is_main: bool = False


class PropertyCreate(BaseModel):
    """Schema for creating a property listing. Verification cannot be set here."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=255)
    title_en: str | None = Field(None, max_length=255)
    description: str = Field(..., min_length=1)
    description_en: str | None = None
    price: float = Field(..., gt=0)
    currency: Currency = Currency.MXN
    type: PropertyType
    status: PropertyStatus = PropertyStatus.ACTIVE
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: int | None = Field(None, ge=0)
    building_size: float | None = Field(None, gt=0)
    land_size: float | None = Field(None, gt=0)
    construction_year: int | None = Field(None, ge=1800)
    address: AddressCreate | None = None
    features: list[FeatureCreate] = Field(default_factory=list)
    media: list[MediaLink] = Field(default_factory=list)

    @field_validator("construction_year")
    @classmethod
    def validate_construction_year(cls, v):
        return _check_construction_year(v)


class PropertyUpdate(BaseModel):
    """Schema for updating a property. At least one field is required."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=255)
    title_en: str | None = Field(None, max_length=255)
    description: str | None = Field(None, min_length=1)
    description_en: str | None = None
    price: float | None = Field(None, gt=0)
    currency: Currency | None = None
    type: PropertyType | None = None
    status: PropertyStatus | None = None
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: int | None = Field(None, ge=0)
    building_size: float | None = Field(None, gt=0)
    land_size: float | None = Field(None, gt=0)
    construction_year: int | None = Field(None, ge=1800)
    verified: bool | None = None
    address: AddressUpdate | None = None
    features: list[FeatureCreate] | None = None

    @field_validator("construction_year")
    @classmethod
    def validate_construction_year(cls, v):
        return _check_construction_year(v)

    @model_validator(mode="after")
    def require_any_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


class PropertySearchParams(BaseModel):
    """Query filters for the public listing search."""

    type: PropertyType | None = None
    min_price: float | None = Field(None, gt=0)
    max_price: float | None = Field(None, gt=0)
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: int | None = Field(None, ge=0)
    city: str | None = None
    state: str | None = None
    status: PropertyStatus = PropertyStatus.ACTIVE
    verified: bool | None = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)

    @model_validator(mode="after")
    def check_price_range(self):
        validate_price_range(self.min_price, self.max_price)
        return self


class AddressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    street: str | None
    street_number: str | None
    neighborhood: str
    postal_code: str | None
    city: str
    state: str
    latitude: float | None
    longitude: float | None


class FeatureResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    name_en: str | None


class MediaResponse(BaseModel):
    """Media item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    property_id: int
    type: MediaType
    url: str
    is_main: bool
    created_at: datetime


class OwnerSummary(BaseModel):
    """Public contact details of a listing owner."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None


class PropertySummary(TimestampMixin):
    """Listing as shown in search results: main image only."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    title_en: str | None
    price: float
    currency: Currency
    type: PropertyType
    status: PropertyStatus
    bedrooms: int | None
    bathrooms: int | None
    building_size: float | None
    land_size: float | None
    verified: bool
    views: int
    owner_id: int
    address: AddressResponse | None
    main_image: MediaResponse | None = None


class PropertyResponse(PropertySummary):
    """Full listing with owner, features and all media."""

    description: str
    description_en: str | None
    construction_year: int | None
    owner: OwnerSummary
    features: list[FeatureResponse]
    media: list[MediaResponse]


class PropertyListResponse(BaseResponse):
    properties: list[PropertySummary]
    pagination: PaginationMeta


class PropertyDetailResponse(BaseResponse):
    property: PropertyResponse


class FavoriteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    property_id: int
    created_at: datetime
    property: PropertySummary


class FavoriteListResponse(BaseResponse):
    favorites: list[FavoriteResponse]


class FavoriteDetailResponse(BaseResponse):
    favorite: FavoriteResponse
