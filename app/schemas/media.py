"""Media upload schemas."""

from pydantic import BaseModel, Field

from .common import BaseResponse
from .property import MediaResponse


class MediaUpdate(BaseModel):
    """Only the main flag can be changed after upload."""

    is_main: bool = Field(..., description="Make this the property's main image")


class MediaListResponse(BaseResponse):
    media: list[MediaResponse]


class MediaDetailResponse(BaseResponse):
    media: MediaResponse
