"""Authentication routes."""

from fastapi import APIRouter, Depends

from app.constants import APIStatus, messages
from app.dependencies.auth import get_current_user
from app.dependencies.services import get_auth_service
from app.models.user import User
from app.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, TokenResponse
from app.schemas.user import UserResponse
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=APIStatus.CREATED)
async def register(
    user_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user and sign them in."""

    user = await auth_service.register_user(
        email=user_data.email,
        password=user_data.password,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        phone=user_data.phone,
        language=user_data.language,
    )
    token, expires_in = auth_service.issue_token(user)

    return AuthResponse(
        message=messages.REGISTER_SUCCESSFUL,
        user=UserResponse.model_validate(user),
        token=token,
        expires_in=expires_in,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Exchange email and password for a bearer token."""

    user = await auth_service.authenticate_user(email=login_data.email, password=login_data.password)
    token, expires_in = auth_service.issue_token(user)

    return AuthResponse(
        message=messages.LOGIN_SUCCESSFUL,
        user=UserResponse.model_validate(user),
        token=token,
        expires_in=expires_in,
    )


@router.post("/refresh-token", response_model=TokenResponse)
async def refresh_token(
    current_user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Issue a fresh token for a still valid one."""

    token, expires_in = auth_service.issue_token(current_user)

    return TokenResponse(
        message="Token refreshed successfully",
        token=token,
        expires_in=expires_in,
    )


@router.get("/me", response_model=MeResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""

    return MeResponse(
        message="User profile retrieved successfully",
        user=UserResponse.model_validate(current_user),
    )
