"""PostgreSQL implementation of IdentityLink repository."""

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rediscover.domain.error import NotFoundError
from rediscover.domain.model import IdentityLink
from rediscover.domain.repository import IdentityLinkRepository
from rediscover.domain.value import AuthProvider, UserId
from rediscover.persistence.database import savepoint, translate_store_errors
from rediscover.persistence.mappers import identity_link_to_dict, row_to_identity_link
from rediscover.persistence.tables import identity_links_table


class PostgresIdentityLinkRepository(IdentityLinkRepository):
    """PostgreSQL implementation of IdentityLinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_provider_subject(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[IdentityLink]:
        """Find a link by provider and provider subject id."""
        stmt = select(identity_links_table).where(
            and_(
                identity_links_table.c.provider == provider.value,
                identity_links_table.c.provider_user_id == provider_user_id,
            )
        )
        async with translate_store_errors("identity_link"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_identity_link(dict(row)) if row else None

    async def find_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> Optional[IdentityLink]:
        """Find a user's link for a provider."""
        stmt = select(identity_links_table).where(
            and_(
                identity_links_table.c.user_id == user_id,
                identity_links_table.c.provider == provider.value,
            )
        )
        async with translate_store_errors("identity_link"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_identity_link(dict(row)) if row else None

    async def insert(self, link: IdentityLink) -> IdentityLink:
        """Insert a link.

        Raises:
            DuplicateRecordError: If either unique constraint is violated
        """
        stmt = identity_links_table.insert().values(**identity_link_to_dict(link))
        async with savepoint(self.session, "identity_link"):
            await self.session.execute(stmt)
        return link

    async def update(self, link: IdentityLink) -> IdentityLink:
        """Update a link's provider-reported attributes and tokens."""
        stmt = (
            identity_links_table.update()
            .where(identity_links_table.c.id == link.id)
            .values(
                email=link.email,
                display_name=link.display_name,
                avatar_url=link.avatar_url,
                access_token=link.access_token,
                refresh_token=link.refresh_token,
                updated_at=link.updated_at,
            )
        )
        async with savepoint(self.session, "identity_link"):
            result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError("IdentityLink", str(link.id))
        return link
