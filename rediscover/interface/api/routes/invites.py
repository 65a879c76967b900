"""Invite routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from rediscover.application.usecase.invite import (
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)

router = APIRouter(prefix="/v1/invites", tags=["invites"], route_class=DishkaRoute)


@router.post("/validate", response_model=ValidateInviteResponse)
async def validate_invite(
    request: ValidateInviteRequest,
    validate_invite_use_case: FromDishka[ValidateInviteUseCase],
) -> ValidateInviteResponse:
    """Check an email and invite code before registering.

    Always 200; `valid` is false for an unknown email, a wrong code, or a
    code issued to a different email alike.
    """
    return await validate_invite_use_case.execute(request)
