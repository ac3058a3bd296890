"""JWT service for token generation and validation."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from jwt.exceptions import DecodeError, ExpiredSignatureError, InvalidTokenError

from app.config.settings import settings
from app.utils.exceptions import InvalidTokenError as CustomInvalidTokenError
from app.utils.exceptions import TokenExpiredError


class JWTService:
    """Service for JWT token operations."""

    def __init__(self):
        self.algorithm = settings.JWT_ALGORITHM
        self.access_token_expire_minutes = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        self.issuer = settings.JWT_ISSUER
        self.audience = settings.JWT_AUDIENCE

    def _get_secret_key(self) -> str:
        """Get key for signing and verifying tokens."""
        return settings.JWT_SECRET_KEY

    @property
    def expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return self.access_token_expire_minutes * 60

    def create_access_token(
        self,
        user_id: int,
        email: str,
        role: str,
        extra_claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a JWT access token.

        The role claim is informational only; authorization always uses the
        role stored on the user row.
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.access_token_expire_minutes))

        payload = {
            "sub": str(user_id),  # Subject (user ID)
            "email": email,
            "role": role,
            "type": "access",
            "iat": now,  # Issued at
            "exp": expire,  # Expiration time
            "iss": self.issuer,  # Issuer
            "aud": self.audience,  # Audience
        }

        if extra_claims:
            payload.update(extra_claims)

        return jwt.encode(
            payload,
            self._get_secret_key(),
            algorithm=self.algorithm,
        )

    def decode_token(self, token: str) -> Dict[str, Any]:
        """Decode and validate a JWT token."""
        try:
            payload = jwt.decode(
                token,
                self._get_secret_key(),
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
            return payload

        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")

        except (DecodeError, InvalidTokenError) as e:
            raise CustomInvalidTokenError(f"Invalid token: {e}")

    def decode_access_token(self, token: str) -> Dict[str, Any]:
        """Decode and validate an access token."""
        payload = self.decode_token(token)

        if payload.get("type") != "access":
            raise CustomInvalidTokenError("Invalid token type")

        return payload

    def get_user_id_from_token(self, token: str) -> int:
        """Extract user ID from an access token."""
        payload = self.decode_access_token(token)
        user_id = payload.get("sub")

        if not user_id:
            raise CustomInvalidTokenError("Token missing user ID")

        try:
            return int(user_id)
        except ValueError:
            raise CustomInvalidTokenError("Invalid user ID in token")
