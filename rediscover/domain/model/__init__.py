"""Domain model entities for Rediscover City identity."""

from rediscover.domain.model.identity_link import IdentityLink
from rediscover.domain.model.invite import Invite
from rediscover.domain.model.user import User

__all__ = [
    "User",
    "Invite",
    "IdentityLink",
]
