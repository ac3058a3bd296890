"""Authentication service: registration, credential checks and token issue."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import messages
from app.models.user import Language, User, UserRole
from app.utils.exceptions import AuthenticationError, ValidationError
from app.utils.security import hash_password, verify_password

from .jwt_service import JWTService

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service for email and password logins."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.jwt_service = JWTService()

    async def register_user(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: str | None = None,
        language: Language = Language.SPANISH,
    ) -> User:
        """Register a new user. Self registration always yields the USER role."""
        email = email.lower()

        # Check if user already exists
        result = await self.db.execute(select(User).where(User.email == email))
        existing_user = result.scalar_one_or_none()

        if existing_user:
            raise ValidationError(messages.USER_EXISTS, error_code="USER_EXISTS")

        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=UserRole.USER.value,
            language=Language(language).value,
        )

        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def authenticate_user(self, email: str, password: str) -> User:
        """Authenticate user with email and password."""

        result = await self.db.execute(select(User).where(User.email == email.lower()))
        user = result.scalar_one_or_none()

        # Same error for unknown email and wrong password
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt", extra={"email": email})
            raise AuthenticationError(messages.INVALID_CREDENTIALS, error_code="INVALID_CREDENTIALS")

        logger.info("User logged in", extra={"user_id": user.id})
        return user

    def issue_token(self, user: User) -> tuple[str, int]:
        """Create an access token for the user; returns token and lifetime in seconds."""
        token = self.jwt_service.create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role,
        )
        return token, self.jwt_service.expires_in
