"""Request authentication use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from rediscover.domain.error import UnauthorizedError
from rediscover.domain.model import User
from rediscover.domain.service import JWTService, UserService
from rediscover.domain.value import UnauthorizedReason, UserId
from rediscover.util.jwt import JWTError

BEARER_SCHEME = "Bearer"


class AuthenticateRequest(BaseModel):
    """Raw Authorization header, if the request carried one."""

    authorization: str | None = None


class AuthenticateRequestUseCase:
    """Use case resolving an Authorization header to a user.

    Reasons are checked in order: missing header, token does not verify,
    user id claim is not a UUID, user no longer exists.
    """

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize authenticate use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    @staticmethod
    def extract_token(authorization: str | None) -> str | None:
        """Strip an optional `Bearer ` prefix from the header value."""
        if not authorization:
            return None
        token = authorization.strip()
        scheme, _, rest = token.partition(" ")
        if scheme == BEARER_SCHEME:
            token = rest.strip()
        return token or None

    async def execute(self, request: AuthenticateRequest) -> User:
        """Authenticate a request.

        Args:
            request: Request with the Authorization header value

        Returns:
            The authenticated user

        Raises:
            UnauthorizedError: With the first reason that applies
        """
        token = self.extract_token(request.authorization)
        if not token:
            raise UnauthorizedError(UnauthorizedReason.MISSING_HEADER)

        try:
            payload = self.jwt_service.verify_token(token)
        except JWTError:
            raise UnauthorizedError(UnauthorizedReason.INVALID_TOKEN)

        try:
            user_id = UserId(UUID(payload.user_id))
        except ValueError:
            logfire.warn("Token user id is not a UUID")
            raise UnauthorizedError(UnauthorizedReason.INVALID_CLAIMS)

        user = await self.user_service.find_by_id(user_id)
        if not user:
            logfire.warn("Token refers to missing user", user_id=str(user_id))
            raise UnauthorizedError(UnauthorizedReason.USER_NOT_FOUND)

        return user
