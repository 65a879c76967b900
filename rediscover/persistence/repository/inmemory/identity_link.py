"""In-memory identity link repository for testing."""

from typing import Optional

from rediscover.domain.error import DuplicateRecordError, NotFoundError
from rediscover.domain.model.identity_link import IdentityLink
from rediscover.domain.repository.identity_link import IdentityLinkRepository
from rediscover.domain.value import AuthProvider, UserId


class InMemoryIdentityLinkRepository(IdentityLinkRepository):
    """In-memory implementation of IdentityLinkRepository for testing."""

    def __init__(self) -> None:
        self._links: list[IdentityLink] = []

    async def find_by_provider_subject(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[IdentityLink]:
        """Find a link by provider and provider subject id."""
        for link in self._links:
            if link.provider == provider and link.provider_user_id == provider_user_id:
                return link
        return None

    async def find_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> Optional[IdentityLink]:
        """Find a user's link for a provider."""
        for link in self._links:
            if link.user_id == user_id and link.provider == provider:
                return link
        return None

    async def insert(self, link: IdentityLink) -> IdentityLink:
        """Insert a link, enforcing both unique constraints."""
        for existing in self._links:
            if (
                existing.provider == link.provider
                and existing.provider_user_id == link.provider_user_id
            ):
                raise DuplicateRecordError(
                    "identity_link", "uq_identity_links_provider_subject"
                )
            if existing.user_id == link.user_id and existing.provider == link.provider:
                raise DuplicateRecordError(
                    "identity_link", "uq_identity_links_user_provider"
                )
        self._links.append(link)
        return link

    async def update(self, link: IdentityLink) -> IdentityLink:
        """Replace a stored link by ID."""
        for i, existing in enumerate(self._links):
            if existing.id == link.id:
                self._links[i] = link
                return link
        raise NotFoundError("IdentityLink", str(link.id))
