"""Get user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from rediscover.domain.service import UserService
from rediscover.domain.value import UserId


class GetUserRequest(BaseModel):
    """Get user request."""

    user_id: UUID


class GetUserResponse(BaseModel):
    """User account summary.

    Never includes the password credential.
    """

    id: str
    email: str
    has_password: bool
    created_at: datetime


class GetUserUseCase:
    """Use case for reading a user by ID."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserRequest) -> GetUserResponse:
        """Get a user.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_service.get_by_id(UserId(request.user_id))
        return GetUserResponse(
            id=str(user.id),
            email=user.email,
            has_password=user.has_password,
            created_at=user.created_at,
        )
