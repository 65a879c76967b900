"""Validate invite use case."""

from pydantic import BaseModel

from rediscover.domain.service import InviteService


class ValidateInviteRequest(BaseModel):
    """Validate invite request."""

    email: str
    code: str


class ValidateInviteResponse(BaseModel):
    """Validate invite response.

    Carries no detail about why an invite is invalid.
    """

    valid: bool


class ValidateInviteUseCase:
    """Use case for checking an (email, code) pair before registration.

    This allows the frontend to check an invite before showing the
    password form.
    """

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize validate invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: ValidateInviteRequest) -> ValidateInviteResponse:
        """Validate an invite.

        Args:
            request: Email and code to check

        Returns:
            Whether the pair matches a live invite
        """
        valid = await self.invite_service.validate_invite(request.email, request.code)
        return ValidateInviteResponse(valid=valid)
