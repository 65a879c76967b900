"""Repository interfaces for the identity domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from rediscover.domain.repository.identity_link import IdentityLinkRepository
from rediscover.domain.repository.invite import InviteRepository
from rediscover.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "InviteRepository",
    "IdentityLinkRepository",
]
