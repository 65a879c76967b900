"""External identity link entity.

Binds a local user to an account on a third-party provider.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from rediscover.domain.model.common import DomainModel
from rediscover.domain.value import AuthProvider, IdentityLinkId, UserId


class IdentityLink(DomainModel):
    """Third-party identity linked to a user account.

    At most one link exists per (provider, provider_user_id), and a user
    holds at most one link per provider. Email, display name and avatar are
    whatever the provider reported on the most recent sign-in.
    """

    id: IdentityLinkId
    user_id: UserId
    provider: AuthProvider
    provider_user_id: str  # Provider subject id, permanent
    email: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    access_token: str
    refresh_token: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
