"""Identity link repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from rediscover.domain.model.identity_link import IdentityLink
from rediscover.domain.value import AuthProvider, UserId


class IdentityLinkRepository(ABC):
    """Repository for IdentityLink entity.

    Manages the relationship between users and their third-party
    provider accounts.
    """

    @abstractmethod
    async def find_by_provider_subject(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[IdentityLink]:
        """Find a link by provider and provider subject id.

        Args:
            provider: The authentication provider
            provider_user_id: The user's subject id on that provider

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> Optional[IdentityLink]:
        """Find a user's link for a given provider.

        Args:
            user_id: The user's unique identifier
            provider: The authentication provider

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, link: IdentityLink) -> IdentityLink:
        """Insert a new link.

        Args:
            link: The link to insert

        Returns:
            The inserted link

        Raises:
            DuplicateRecordError: If (provider, provider_user_id) or
                (user_id, provider) is already linked
        """
        pass

    @abstractmethod
    async def update(self, link: IdentityLink) -> IdentityLink:
        """Update an existing link.

        Args:
            link: The link with updated fields

        Returns:
            The updated link
        """
        pass
