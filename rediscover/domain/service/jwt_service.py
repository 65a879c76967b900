"""JWT token domain service."""

import logfire

from rediscover.config import AuthSettings
from rediscover.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, email: str) -> str:
        """Create session token for user.

        Args:
            user_id: User ID
            email: User email

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, email, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify session token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            InvalidTokenError: If token is malformed, badly signed, expired,
                or has no user id
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
            logfire.info("JWT token verified", user_id=payload.user_id)
            return payload
