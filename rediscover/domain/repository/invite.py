"""Invite repository interface."""

from abc import ABC, abstractmethod

from rediscover.domain.model.invite import Invite
from rediscover.domain.value import InviteCode


class InviteRepository(ABC):
    """Repository for Invite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_email(self, email: str) -> Invite | None:
        """Find the live invite for an email.

        Args:
            email: The invitee's email address

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_code(self, code: InviteCode) -> Invite | None:
        """Find an invite by its code.

        Used to detect collisions while generating codes.

        Args:
            code: The invite code

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email_and_code(self, email: str, code: str) -> Invite | None:
        """Find an invite matching both email and code.

        Args:
            email: The invitee's email address
            code: Normalized (lowercase) code

        Returns:
            The invite if both match, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Args:
            invite: The invite to insert

        Returns:
            The inserted invite

        Raises:
            DuplicateRecordError: If the email or the code is already taken
        """
        pass

    @abstractmethod
    async def delete_by_email(self, email: str) -> None:
        """Delete the invite for an email, if any.

        Args:
            email: The invitee's email address
        """
        pass
