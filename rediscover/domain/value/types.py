"""Domain value objects for identity and access control.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import Field, field_validator

from rediscover.domain.value.common import RootValueObject, ValueObject

INVITE_CODE_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
INVITE_CODE_LENGTH = 8
MAX_EMAIL_LENGTH = 255


class AuthProvider(str, Enum):
    """Supported third-party authentication providers."""

    GOOGLE = "google"


class UnauthorizedReason(str, Enum):
    """Why a request could not be authenticated.

    Reported to callers for diagnostics; every reason maps to the same
    401 response class.
    """

    MISSING_HEADER = "missing_header"
    INVALID_TOKEN = "invalid_token"
    INVALID_CLAIMS = "invalid_claims"
    USER_NOT_FOUND = "user_not_found"


class InviteCode(RootValueObject[str]):
    """Single-use invite code.

    Always exactly 8 characters from [a-z0-9]. Use `normalize` for
    user-supplied input, which may arrive in any case.
    """

    @field_validator("root")
    @classmethod
    def validate_code_format(cls, v: str) -> str:
        """Validate code is 8 lowercase alphanumeric characters."""
        if not re.fullmatch(r"[a-z0-9]{8}", v):
            raise ValueError("Invite code must be 8 lowercase alphanumeric characters")
        return v

    @staticmethod
    def normalize(raw: str | None) -> str:
        """Lowercase a user-supplied code for lookup."""
        if not raw:
            return ""
        return raw.strip().lower()


class ProviderTokens(ValueObject):
    """Tokens returned by a provider's authorization code exchange."""

    access_token: str
    refresh_token: str | None = None


class ProviderProfile(ValueObject):
    """Profile returned by a provider for an access token.

    `subject_id` is the provider's permanent account identifier.
    Lengths match the identity_links columns.
    """

    provider: AuthProvider
    subject_id: str = Field(max_length=255)
    email: str = Field(max_length=MAX_EMAIL_LENGTH)
    display_name: str | None = Field(default=None, max_length=255)
    avatar_url: str | None = None

    @field_validator("subject_id", "email")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty identifiers so no sparse rows are ever written."""
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v
