"""In-memory invite repository for testing."""

from typing import Optional

from rediscover.domain.error import DuplicateRecordError
from rediscover.domain.model.invite import Invite
from rediscover.domain.repository.invite import InviteRepository
from rediscover.domain.value import InviteCode


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing."""

    def __init__(self) -> None:
        self._invites: list[Invite] = []

    async def find_by_email(self, email: str) -> Optional[Invite]:
        """Find the invite for an email."""
        for invite in self._invites:
            if invite.email == email:
                return invite
        return None

    async def find_by_code(self, code: InviteCode) -> Optional[Invite]:
        """Find an invite by its code."""
        for invite in self._invites:
            if invite.code == code:
                return invite
        return None

    async def find_by_email_and_code(self, email: str, code: str) -> Optional[Invite]:
        """Find an invite matching both email and code."""
        for invite in self._invites:
            if invite.email == email and invite.code.root == code:
                return invite
        return None

    async def insert(self, invite: Invite) -> Invite:
        """Insert an invite, enforcing unique email and code."""
        for existing in self._invites:
            if existing.email == invite.email:
                raise DuplicateRecordError("invite", "uq_invites_email")
            if existing.code == invite.code:
                raise DuplicateRecordError("invite", "uq_invites_code")
        self._invites.append(invite)
        return invite

    async def delete_by_email(self, email: str) -> None:
        """Delete the invite for an email."""
        self._invites = [i for i in self._invites if i.email != email]
