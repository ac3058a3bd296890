"""Authentication dependencies for FastAPI."""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import messages
from app.models.user import User
from app.policies import Principal
from app.services.jwt_service import JWTService
from app.utils.exceptions import AuthenticationError

from .database import get_db

logger = logging.getLogger(__name__)

# Security scheme for Bearer tokens
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to a stored user.

    Raises AuthenticationError for a missing credential, TokenExpiredError or
    InvalidTokenError for a bad token, and AuthenticationError when the user
    in the token no longer exists.
    """
    if not credentials:
        raise AuthenticationError(messages.AUTHENTICATION_REQUIRED, error_code="AUTHENTICATION_REQUIRED")

    user_id = JWTService().get_user_id_from_token(credentials.credentials)

    user = await db.get(User, user_id)
    if not user:
        logger.info("Token for unknown user", extra={"user_id": user_id})
        raise AuthenticationError("User not found", error_code="USER_NOT_FOUND")

    request.state.user_id = user.id
    return user


async def get_current_principal(
    current_user: User = Depends(get_current_user),
) -> Principal:
    """Principal for policy checks. The role comes from the stored user, not the token."""
    return Principal.from_user(current_user)
