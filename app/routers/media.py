"""Property media routes."""

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.constants import APIStatus
from app.dependencies.auth import get_current_principal
from app.dependencies.services import get_media_service
from app.models.media import MediaType
from app.policies import Principal
from app.schemas.common import BaseResponse
from app.schemas.media import MediaDetailResponse, MediaListResponse, MediaUpdate
from app.schemas.property import MediaResponse
from app.services.media_service import MediaService

router = APIRouter()


@router.post(
    "/properties/{property_id}/media",
    response_model=MediaListResponse,
    status_code=APIStatus.CREATED,
)
async def upload_media(
    property_id: int,
    files: list[UploadFile] | None = File(None, description="Up to 10 files"),
    type: MediaType = Form(MediaType.IMAGE),
    is_main: bool | None = Form(None),
    principal: Principal = Depends(get_current_principal),
    media_service: MediaService = Depends(get_media_service),
):
    """Upload images, floor plans or videos for a listing."""

    media = await media_service.upload_media(
        principal,
        property_id,
        files or [],
        media_type=type,
        is_main=is_main,
    )

    return MediaListResponse(
        message="Media uploaded successfully",
        media=[MediaResponse.model_validate(item) for item in media],
    )


@router.get("/properties/{property_id}/media", response_model=MediaListResponse)
async def get_property_media(
    property_id: int,
    media_service: MediaService = Depends(get_media_service),
):
    """List a listing's media. Public."""

    media = await media_service.list_media(property_id)

    return MediaListResponse(
        message="Property media retrieved successfully",
        media=[MediaResponse.model_validate(item) for item in media],
    )


@router.put("/media/{media_id}", response_model=MediaDetailResponse)
async def update_media(
    media_id: int,
    media_update: MediaUpdate,
    principal: Principal = Depends(get_current_principal),
    media_service: MediaService = Depends(get_media_service),
):
    """Set or clear the main image flag."""

    media = await media_service.update_media(principal, media_id, media_update.is_main)

    return MediaDetailResponse(
        message="Media updated successfully",
        media=MediaResponse.model_validate(media),
    )


@router.delete("/media/{media_id}", response_model=BaseResponse)
async def delete_media(
    media_id: int,
    principal: Principal = Depends(get_current_principal),
    media_service: MediaService = Depends(get_media_service),
):
    """Delete media and its stored file."""

    await media_service.delete_media(principal, media_id)

    return BaseResponse(message="Media deleted successfully")
