"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ValidationError, field_validator

from rediscover.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    email: str | None = None
    exp: datetime

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        """Reject empty user ids."""
        if not v or not v.strip():
            raise ValueError("user_id claim must not be empty")
        return v


class JWTError(Exception):
    """JWT-related error."""

    pass


class InvalidTokenError(JWTError):
    """Token is malformed, badly signed, expired, or lacks a user id."""

    pass


def create_token(user_id: str, email: str, settings: AuthSettings) -> str:
    """Create a JWT token for the user.

    Args:
        user_id: User ID
        email: User email
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    now = datetime.now(timezone.utc)

    payload = {
        "user_id": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expiry_days),
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        InvalidTokenError: If token is invalid, expired, or has no user id
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "user_id"]},
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("Token has expired")
    except jwt.PyJWTError:
        raise InvalidTokenError("Invalid token")
    except (ValidationError, TypeError):
        raise InvalidTokenError("Invalid token claims")
