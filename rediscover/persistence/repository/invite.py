"""PostgreSQL implementation of Invite repository."""

from typing import Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from rediscover.domain.model import Invite
from rediscover.domain.repository import InviteRepository
from rediscover.domain.value import InviteCode
from rediscover.persistence.database import savepoint, translate_store_errors
from rediscover.persistence.mappers import invite_to_dict, row_to_invite
from rediscover.persistence.tables import invites_table


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _find_one(self, stmt) -> Optional[Invite]:
        async with translate_store_errors("invite"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[Invite]:
        """Find the invite for an email.

        Args:
            email: Invitee email

        Returns:
            Invite if found, None otherwise
        """
        return await self._find_one(
            select(invites_table).where(invites_table.c.email == email)
        )

    async def find_by_code(self, code: InviteCode) -> Optional[Invite]:
        """Find an invite by its code.

        Args:
            code: Invite code

        Returns:
            Invite if found, None otherwise
        """
        return await self._find_one(
            select(invites_table).where(invites_table.c.code == code.root)
        )

    async def find_by_email_and_code(self, email: str, code: str) -> Optional[Invite]:
        """Find an invite matching both email and code.

        Args:
            email: Invitee email
            code: Lowercase invite code

        Returns:
            Invite if both match, None otherwise
        """
        return await self._find_one(
            select(invites_table).where(
                and_(invites_table.c.email == email, invites_table.c.code == code)
            )
        )

    async def insert(self, invite: Invite) -> Invite:
        """Insert an invite.

        Args:
            invite: Invite to insert

        Returns:
            Inserted invite

        Raises:
            DuplicateRecordError: If the email or code is already taken
        """
        stmt = invites_table.insert().values(**invite_to_dict(invite))
        async with savepoint(self.session, "invite"):
            await self.session.execute(stmt)
        return invite

    async def delete_by_email(self, email: str) -> None:
        """Delete the invite for an email.

        Args:
            email: Invitee email
        """
        stmt = delete(invites_table).where(invites_table.c.email == email)
        async with savepoint(self.session, "invite"):
            await self.session.execute(stmt)
