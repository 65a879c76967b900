"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from rediscover.domain.model.user import User
from rediscover.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email (exact match).

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: The user to insert

        Returns:
            The inserted user

        Raises:
            DuplicateRecordError: If a user with the same email already exists
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update an existing user.

        Args:
            user: The user with updated fields

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user does not exist
        """
        pass
