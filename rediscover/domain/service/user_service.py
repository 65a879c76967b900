"""User domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from rediscover.domain.error import DuplicateRecordError, EmailTakenError, NotFoundError
from rediscover.domain.model import User
from rediscover.domain.repository import UserRepository
from rediscover.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id))
            return user

    async def find_by_id(self, user_id: UserId) -> User | None:
        """Get user by ID without raising.

        Args:
            user_id: User ID

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.find_by_id", user_id=str(user_id)):
            return await self.user_repository.find_by_id(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email.

        Args:
            email: User email

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_email", email=email):
            user = await self.user_repository.find_by_email(email)
            if user:
                logfire.info("User found", email=email, user_id=str(user.id))
            else:
                logfire.info("User not found", email=email)
            return user

    async def create_user(self, email: str, password_hash: str | None = None) -> User:
        """Insert a new user.

        The store's unique constraint on email decides; a violation is
        reported as EmailTakenError whether or not a pre-check ran.

        Args:
            email: User email
            password_hash: Encoded password credential, None for provider accounts

        Returns:
            Created user

        Raises:
            EmailTakenError: If the email already belongs to a user
        """
        with logfire.span(
            "user_service.create_user",
            email=email,
            with_password=password_hash is not None,
        ):
            now = datetime.now(timezone.utc)
            user = User(
                id=UserId(uuid4()),
                email=email,
                password_hash=password_hash,
                created_at=now,
                updated_at=now,
            )
            try:
                saved = await self.user_repository.insert(user)
            except DuplicateRecordError:
                logfire.warn("User insert hit unique email constraint", email=email)
                raise EmailTakenError(email)

            logfire.info("User created", user_id=str(saved.id), email=email)
            return saved
