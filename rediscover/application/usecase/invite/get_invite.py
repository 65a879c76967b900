"""Get invite by email use case."""

from pydantic import BaseModel

from rediscover.application.usecase.base import BaseUseCase
from rediscover.domain.error import NotFoundError
from rediscover.domain.service import InviteService

from .create_invite import CreateInviteResponse


class GetInviteRequest(BaseModel):
    """Request for an email's invite."""

    email: str


class GetInviteUseCase(BaseUseCase):
    """Administrative lookup of the live invite for an email."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: GetInviteRequest) -> CreateInviteResponse:
        """Look up the invite.

        Raises:
            NotFoundError: If there is no live invite for the email
        """
        invite = await self.invite_service.get_invite_by_email(request.email)
        if not invite:
            raise NotFoundError("Invite", request.email)
        return CreateInviteResponse(
            id=str(invite.id),
            email=invite.email,
            code=invite.code.root,
            created_at=invite.created_at,
        )
