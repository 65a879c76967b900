"""PostgreSQL repository implementations."""

from rediscover.persistence.repository.identity_link import (
    PostgresIdentityLinkRepository,
)
from rediscover.persistence.repository.invite import PostgresInviteRepository
from rediscover.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresInviteRepository",
    "PostgresIdentityLinkRepository",
]
