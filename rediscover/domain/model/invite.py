"""Invite entity.

Invites gate password registration. Each one is scoped to a single email
address and is deleted once the account it authorized has been created.
"""

from datetime import datetime, timezone

from pydantic import Field

from rediscover.domain.model.common import DomainModel
from rediscover.domain.value import InviteCode, InviteId


class Invite(DomainModel):
    """Single-use registration grant.

    Business rules:
    - At most one live invite per email
    - Codes are unique across all invites
    - Invites never expire and are never updated
    - Consumed (deleted) right after the user it authorized is created
    """

    id: InviteId
    email: str
    code: InviteCode
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
