"""User management routes."""

from fastapi import APIRouter, Depends, Query

from app.constants import APIStatus
from app.dependencies.auth import get_current_principal
from app.dependencies.services import get_user_service
from app.policies import Principal
from app.schemas.common import BaseResponse
from app.schemas.property import FavoriteListResponse, FavoriteResponse
from app.schemas.user import (
    SavedSearchCreate,
    SavedSearchDetailResponse,
    SavedSearchListResponse,
    SavedSearchResponse,
    UserDetailResponse,
    UserListResponse,
    UserResponse,
    UserUpdate,
)
from app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=UserListResponse)
async def get_users(
    principal: Principal = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
):
    """Get users list. Administrators only."""

    users, total = await user_service.get_users(principal, page=page, per_page=per_page)

    return UserListResponse(
        message="Users retrieved successfully",
        users=[UserResponse.model_validate(user) for user in users],
        total=total,
        page=page,
        per_page=per_page,
        pages=user_service.page_count(total, per_page),
    )


@router.get("/{user_id}", response_model=UserDetailResponse)
async def get_user(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
):
    """Get user by ID."""

    user = await user_service.get_user(principal, user_id)

    return UserDetailResponse(
        message="User retrieved successfully",
        user=UserResponse.model_validate(user),
    )


@router.put("/{user_id}", response_model=UserDetailResponse)
async def update_user(
    user_id: int,
    user_update: UserUpdate,
    principal: Principal = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
):
    """Update user."""

    user = await user_service.update_user(principal, user_id, user_update)

    return UserDetailResponse(
        message="User updated successfully",
        user=UserResponse.model_validate(user),
    )


@router.delete("/{user_id}", response_model=BaseResponse)
async def delete_user(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
):
    """Delete user and everything they own."""

    await user_service.delete_user(principal, user_id)

    return BaseResponse(message="User deleted successfully")


@router.get("/{user_id}/favorites", response_model=FavoriteListResponse)
async def get_user_favorites(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
):
    """Get a user's favorite listings."""

    favorites = await user_service.get_favorites(principal, user_id)

    return FavoriteListResponse(
        message="User favorites retrieved successfully",
        favorites=[FavoriteResponse.model_validate(favorite) for favorite in favorites],
    )


@router.get("/{user_id}/saved-searches", response_model=SavedSearchListResponse)
async def get_user_saved_searches(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
):
    """Get a user's saved searches."""

    saved_searches = await user_service.get_saved_searches(principal, user_id)

    return SavedSearchListResponse(
        message="User saved searches retrieved successfully",
        saved_searches=[SavedSearchResponse.model_validate(s) for s in saved_searches],
    )


@router.post(
    "/{user_id}/saved-searches",
    response_model=SavedSearchDetailResponse,
    status_code=APIStatus.CREATED,
)
async def create_saved_search(
    user_id: int,
    search_data: SavedSearchCreate,
    principal: Principal = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
):
    """Save a set of listing filters for a user."""

    saved_search = await user_service.create_saved_search(principal, user_id, search_data)

    return SavedSearchDetailResponse(
        message="Saved search created successfully",
        saved_search=SavedSearchResponse.model_validate(saved_search),
    )


@router.delete("/{user_id}/saved-searches/{search_id}", response_model=BaseResponse)
async def delete_saved_search(
    user_id: int,
    search_id: int,
    principal: Principal = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
):
    """Delete one of a user's saved searches."""

    await user_service.delete_saved_search(principal, user_id, search_id)

    return BaseResponse(message="Saved search deleted successfully")
