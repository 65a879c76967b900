"""In-memory repository implementations for testing."""

from .identity_link import InMemoryIdentityLinkRepository
from .invite import InMemoryInviteRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryIdentityLinkRepository",
    "InMemoryInviteRepository",
    "InMemoryUserRepository",
]
