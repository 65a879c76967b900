"""Invite use cases."""

from rediscover.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
)
from rediscover.application.usecase.invite.get_invite import (
    GetInviteRequest,
    GetInviteUseCase,
)
from rediscover.application.usecase.invite.validate_invite import (
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)

__all__ = [
    "CreateInviteRequest",
    "CreateInviteResponse",
    "CreateInviteUseCase",
    "GetInviteRequest",
    "GetInviteUseCase",
    "ValidateInviteRequest",
    "ValidateInviteResponse",
    "ValidateInviteUseCase",
]
