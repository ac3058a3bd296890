"""Property listing routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.constants import APIStatus
from app.dependencies.auth import get_current_principal
from app.dependencies.services import get_property_service
from app.policies import Principal
from app.schemas.common import BaseResponse, PaginationMeta
from app.schemas.property import (
    FavoriteDetailResponse,
    FavoriteResponse,
    PropertyCreate,
    PropertyDetailResponse,
    PropertyListResponse,
    PropertyResponse,
    PropertySearchParams,
    PropertySummary,
    PropertyUpdate,
)
from app.services.property_service import PropertyService

router = APIRouter()


@router.get("", response_model=PropertyListResponse)
async def get_properties(
    params: Annotated[PropertySearchParams, Query()],
    property_service: PropertyService = Depends(get_property_service),
):
    """Search listings. Public."""

    properties, total = await property_service.search_properties(params)

    return PropertyListResponse(
        message="Properties retrieved successfully",
        properties=[PropertySummary.model_validate(prop) for prop in properties],
        pagination=PaginationMeta(**property_service.pagination(total, params.page, params.limit)),
    )


@router.get("/{property_id}", response_model=PropertyDetailResponse)
async def get_property(
    property_id: int,
    property_service: PropertyService = Depends(get_property_service),
):
    """Get a listing and count the view. Public."""

    prop = await property_service.view_property(property_id)

    return PropertyDetailResponse(
        message="Property retrieved successfully",
        property=PropertyResponse.model_validate(prop),
    )


@router.post("", response_model=PropertyDetailResponse, status_code=APIStatus.CREATED)
async def create_property(
    property_data: PropertyCreate,
    principal: Principal = Depends(get_current_principal),
    property_service: PropertyService = Depends(get_property_service),
):
    """Create a listing owned by the caller."""

    prop = await property_service.create_property(principal, property_data)

    return PropertyDetailResponse(
        message="Property created successfully",
        property=PropertyResponse.model_validate(prop),
    )


@router.put("/{property_id}", response_model=PropertyDetailResponse)
async def update_property(
    property_id: int,
    property_update: PropertyUpdate,
    principal: Principal = Depends(get_current_principal),
    property_service: PropertyService = Depends(get_property_service),
):
    """Update a listing. Owner or administrator; verification is administrator only."""

    prop = await property_service.update_property(principal, property_id, property_update)

    return PropertyDetailResponse(
        message="Property updated successfully",
        property=PropertyResponse.model_validate(prop),
    )


@router.delete("/{property_id}", response_model=BaseResponse)
async def delete_property(
    property_id: int,
    principal: Principal = Depends(get_current_principal),
    property_service: PropertyService = Depends(get_property_service),
):
    """Delete a listing. Owner or administrator."""

    await property_service.delete_property(principal, property_id)

    return BaseResponse(message="Property deleted successfully")


@router.post(
    "/{property_id}/favorite",
    response_model=FavoriteDetailResponse,
    status_code=APIStatus.CREATED,
)
async def add_to_favorites(
    property_id: int,
    principal: Principal = Depends(get_current_principal),
    property_service: PropertyService = Depends(get_property_service),
):
    """Add a listing to the caller's favorites."""

    favorite = await property_service.add_favorite(principal, property_id)

    return FavoriteDetailResponse(
        message="Property added to favorites",
        favorite=FavoriteResponse.model_validate(favorite),
    )


@router.delete("/{property_id}/favorite", response_model=BaseResponse)
async def remove_from_favorites(
    property_id: int,
    principal: Principal = Depends(get_current_principal),
    property_service: PropertyService = Depends(get_property_service),
):
    """Remove a listing from the caller's favorites."""

    await property_service.remove_favorite(principal, property_id)

    return BaseResponse(message="Property removed from favorites")
