"""Create invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from rediscover.application.usecase.base import BaseUseCase
from rediscover.domain.service import InviteService


class CreateInviteRequest(BaseModel):
    """Request to create an invite."""

    email: str


class CreateInviteResponse(BaseModel):
    """Created invite."""

    id: str
    email: str
    code: str
    created_at: datetime


class CreateInviteUseCase(BaseUseCase):
    """Use case for issuing an invite to an email address.

    Invites are issued by operators (see `scripts/create_invite.py`); there
    is no public endpoint for it.
    """

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize create invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: CreateInviteRequest) -> CreateInviteResponse:
        """Create the invite.

        Raises:
            DuplicateInviteError: If the email already has a live invite
            CodeGenerationExhaustedError: If no unique code could be drawn
        """
        with logfire.span("create_invite.execute", email=request.email):
            invite = await self.invite_service.create_invite(request.email)
            return CreateInviteResponse(
                id=str(invite.id),
                email=invite.email,
                code=invite.code.root,
                created_at=invite.created_at,
            )
