"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rediscover.domain.error import NotFoundError
from rediscover.domain.model import User
from rediscover.domain.repository import UserRepository
from rediscover.domain.value import UserId
from rediscover.persistence.database import savepoint, translate_store_errors
from rediscover.persistence.mappers import row_to_user, user_to_dict
from rediscover.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        async with translate_store_errors("user"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email)
        async with translate_store_errors("user"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def insert(self, user: User) -> User:
        """Insert a user.

        Args:
            user: User to insert

        Returns:
            Inserted user

        Raises:
            DuplicateRecordError: If the email is already taken
        """
        stmt = users_table.insert().values(**user_to_dict(user))
        async with savepoint(self.session, "user"):
            await self.session.execute(stmt)
        return user

    async def update(self, user: User) -> User:
        """Update a user's mutable fields.

        Args:
            user: User with updated fields

        Returns:
            Updated user
        """
        stmt = (
            users_table.update()
            .where(users_table.c.id == user.id)
            .values(
                email=user.email,
                password_hash=user.password_hash,
                updated_at=user.updated_at,
            )
        )
        async with savepoint(self.session, "user"):
            result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError("User", str(user.id))
        return user
