"""Invite domain service."""

import secrets
from datetime import datetime, timezone
from uuid import uuid4

import logfire

from rediscover.config import InvitationSettings
from rediscover.domain.error import (
    CodeGenerationExhaustedError,
    DuplicateInviteError,
    DuplicateRecordError,
)
from rediscover.domain.model.invite import Invite
from rediscover.domain.repository import InviteRepository
from rediscover.domain.value import (
    INVITE_CODE_ALPHABET,
    INVITE_CODE_LENGTH,
    InviteCode,
    InviteId,
)

from .base import Service


def _masked(code: str) -> str:
    return code[:2] + "..."


class InviteService(Service):
    """Domain service owning the invite lifecycle: create, validate, consume."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        invitation_settings: InvitationSettings,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            invitation_settings: Invitation settings
        """
        self.invite_repository = invite_repository
        self.settings = invitation_settings

    @staticmethod
    def generate_code() -> InviteCode:
        """Draw a random 8-character lowercase alphanumeric code.

        Returns:
            Fresh invite code (not checked for uniqueness)
        """
        return InviteCode(
            "".join(
                secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH)
            )
        )

    async def create_invite(self, email: str) -> Invite:
        """Create an invite for an email address.

        Codes that collide with an existing invite are redrawn, up to
        `max_code_attempts` times. The store's unique constraints are the
        final word: a concurrent insert for the same email surfaces as
        DuplicateInviteError, a concurrent insert with the same code as
        another retry.

        Args:
            email: Invitee email

        Returns:
            Created invite

        Raises:
            DuplicateInviteError: If a live invite already exists for the email
            CodeGenerationExhaustedError: If every attempt collided
        """
        with logfire.span("invite_service.create_invite", email=email):
            existing = await self.invite_repository.find_by_email(email)
            if existing:
                logfire.warn("Invite already exists", email=email)
                raise DuplicateInviteError(email)

            attempts = self.settings.max_code_attempts
            for attempt in range(1, attempts + 1):
                code = self.generate_code()

                if await self.invite_repository.find_by_code(code):
                    logfire.info("Invite code collision", attempt=attempt)
                    continue

                invite = Invite(
                    id=InviteId(uuid4()),
                    email=email,
                    code=code,
                    created_at=datetime.now(timezone.utc),
                )
                try:
                    saved = await self.invite_repository.insert(invite)
                except DuplicateRecordError:
                    # Lost a race: either the email or the code was taken meanwhile
                    if await self.invite_repository.find_by_email(email):
                        logfire.warn("Invite created concurrently", email=email)
                        raise DuplicateInviteError(email)
                    logfire.info("Invite code collision on insert", attempt=attempt)
                    continue

                logfire.info(
                    "Invite created",
                    invite_id=str(saved.id),
                    email=email,
                    attempts=attempt,
                )
                return saved

            logfire.error("Invite code generation exhausted", email=email, attempts=attempts)
            raise CodeGenerationExhaustedError(attempts)

    async def validate_invite(self, email: str, code: str) -> bool:
        """Check that a live invite exists for exactly this email and code.

        The code is compared case-insensitively. Unknown email, wrong code
        and a code belonging to another email are indistinguishable.

        Args:
            email: Invitee email
            code: Invite code as supplied by the user

        Returns:
            True if the pair matches a live invite
        """
        normalized = InviteCode.normalize(code)
        with logfire.span(
            "invite_service.validate_invite", email=email, code=_masked(normalized)
        ):
            if len(normalized) != INVITE_CODE_LENGTH:
                logfire.info("Invite validation failed", email=email)
                return False

            invite = await self.invite_repository.find_by_email_and_code(
                email, normalized
            )
            valid = invite is not None
            logfire.info("Invite validation", email=email, valid=valid)
            return valid

    async def consume_invite(self, email: str) -> None:
        """Delete the invite for an email. Idempotent.

        Args:
            email: Invitee email
        """
        with logfire.span("invite_service.consume_invite", email=email):
            await self.invite_repository.delete_by_email(email)
            logfire.info("Invite consumed", email=email)

    async def get_invite_by_email(self, email: str) -> Invite | None:
        """Get the live invite for an email (administrative lookup).

        Args:
            email: Invitee email

        Returns:
            Invite if found, None otherwise
        """
        with logfire.span("invite_service.get_invite_by_email", email=email):
            invite = await self.invite_repository.find_by_email(email)
            if invite:
                logfire.info("Invite found", invite_id=str(invite.id), email=email)
            else:
                logfire.warn("Invite not found", email=email)
            return invite
