"""User aggregate root.

A user signs in with a password, with one or more linked third-party
identities, or with both.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from rediscover.domain.model.common import DomainModel
from rediscover.domain.value import UserId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(DomainModel):
    """User identity record.

    `email` is unique and compared exactly as stored. `password_hash` holds
    a `salt_hex:derived_hex` credential and is None for accounts created
    through a third-party provider.
    """

    id: UserId
    email: str
    password_hash: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def has_password(self) -> bool:
        """Whether the user can sign in with a password."""
        return bool(self.password_hash)
