"""Test configuration and helpers."""

from datetime import datetime, timezone
from uuid import uuid4

from rediscover.config import CredentialSettings
from rediscover.domain.model import User
from rediscover.domain.value import AuthProvider, ProviderProfile, ProviderTokens, UserId

# Lowest strength the settings accept; keeps hashing fast in tests
FAST_CREDENTIALS = CredentialSettings(iterations=100_000, digest="sha512")


def make_user(email: str = "user@example.com", password_hash: str | None = None) -> User:
    """Build a user that has not been stored."""
    now = datetime.now(timezone.utc)
    return User(
        id=UserId(uuid4()),
        email=email,
        password_hash=password_hash,
        created_at=now,
        updated_at=now,
    )


def make_profile(
    subject_id: str = "google-sub-1",
    email: str = "walker@example.com",
    display_name: str | None = "City Walker",
    avatar_url: str | None = "https://example.com/a.png",
) -> ProviderProfile:
    """Build a Google profile as the OAuth client would return it."""
    return ProviderProfile(
        provider=AuthProvider.GOOGLE,
        subject_id=subject_id,
        email=email,
        display_name=display_name,
        avatar_url=avatar_url,
    )


def make_tokens(access: str = "access-1", refresh: str | None = "refresh-1") -> ProviderTokens:
    """Build provider tokens."""
    return ProviderTokens(access_token=access, refresh_token=refresh)
