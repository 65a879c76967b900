"""Domain value objects for Rediscover City identity."""

from rediscover.domain.value.identifiers import IdentityLinkId, InviteId, UserId
from rediscover.domain.value.types import (
    INVITE_CODE_ALPHABET,
    INVITE_CODE_LENGTH,
    MAX_EMAIL_LENGTH,
    AuthProvider,
    InviteCode,
    ProviderProfile,
    ProviderTokens,
    UnauthorizedReason,
)

__all__ = [
    # Identifiers
    "UserId",
    "InviteId",
    "IdentityLinkId",
    # Types
    "AuthProvider",
    "InviteCode",
    "ProviderProfile",
    "ProviderTokens",
    "UnauthorizedReason",
    "INVITE_CODE_ALPHABET",
    "INVITE_CODE_LENGTH",
    "MAX_EMAIL_LENGTH",
]
