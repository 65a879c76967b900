"""In-memory user repository for testing."""

from typing import Optional

from rediscover.domain.error import DuplicateRecordError, NotFoundError
from rediscover.domain.model.user import User
from rediscover.domain.repository.user import UserRepository
from rediscover.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces the unique email constraint the way the database does.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def insert(self, user: User) -> User:
        """Insert a user."""
        if user.id in self._users:
            raise DuplicateRecordError("user", "id")
        if any(u.email == user.email for u in self._users.values()):
            raise DuplicateRecordError("user", "uq_users_email")
        self._users[user.id] = user
        return user

    async def update(self, user: User) -> User:
        """Update a user."""
        if user.id not in self._users:
            raise NotFoundError("User", str(user.id))
        self._users[user.id] = user
        return user
