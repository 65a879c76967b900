"""Identity link domain service.

Resolves a third-party sign-in to a local user. Resolution order:

1. A link for (provider, subject id) exists: refresh its tokens and
   display attributes, return the linked user untouched.
2. Otherwise a user with the same email exists: reuse it (account merge).
3. Otherwise create a user without a password.

In cases 2 and 3 a new link is written. Unique constraints on user email
and on (provider, subject id) settle concurrent first sign-ins: the loser
re-reads and continues with whatever the winner wrote.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

import logfire

from rediscover.domain.error import (
    DuplicateRecordError,
    EmailTakenError,
    NotFoundError,
    ProviderAuthFailedError,
)
from rediscover.domain.model import IdentityLink, User
from rediscover.domain.repository import IdentityLinkRepository
from rediscover.domain.value import (
    IdentityLinkId,
    ProviderProfile,
    ProviderTokens,
)

from .base import Service
from .user_service import UserService


@dataclass
class LinkResult:
    """Outcome of resolving a provider sign-in.

    `is_new_user` is True only when this call created the user row; a newly
    created link on an existing user does not count.
    """

    user: User
    link: IdentityLink
    is_new_user: bool


class IdentityLinkService(Service):
    """Domain service for third-party identity links."""

    def __init__(
        self,
        identity_link_repository: IdentityLinkRepository,
        user_service: UserService,
    ) -> None:
        """Initialize identity link service.

        Args:
            identity_link_repository: Identity link repository
            user_service: User domain service
        """
        self.identity_link_repository = identity_link_repository
        self.user_service = user_service

    async def get_link_by_provider_subject(
        self, profile: ProviderProfile
    ) -> IdentityLink | None:
        """Get the link for a provider account, if any.

        Args:
            profile: Provider profile

        Returns:
            Link if found, None otherwise
        """
        return await self.identity_link_repository.find_by_provider_subject(
            profile.provider, profile.subject_id
        )

    async def link_or_create(
        self, profile: ProviderProfile, tokens: ProviderTokens
    ) -> LinkResult:
        """Resolve a provider sign-in into a local user.

        Args:
            profile: Profile reported by the provider
            tokens: Tokens from the code exchange

        Returns:
            Resolved user, its link, and whether the user was created

        Raises:
            ProviderAuthFailedError: If the matching user already has a
                different account linked for this provider
        """
        with logfire.span(
            "identity_link_service.link_or_create",
            provider=profile.provider.value,
            subject_id=profile.subject_id,
        ):
            existing = await self.get_link_by_provider_subject(profile)
            if existing:
                return await self._refresh(existing, profile, tokens)

            user, is_new_user = await self._resolve_user(profile)

            other = await self.identity_link_repository.find_by_user_and_provider(
                user.id, profile.provider
            )
            if other and other.provider_user_id == profile.subject_id:
                # Written by a concurrent sign-in after our first lookup
                return await self._refresh(other, profile, tokens)
            if other:
                logfire.warn(
                    "User already linked to another provider account",
                    user_id=str(user.id),
                    provider=profile.provider.value,
                )
                raise ProviderAuthFailedError(
                    f"Account already linked to a different {profile.provider.value} identity"
                )

            now = datetime.now(timezone.utc)
            link = IdentityLink(
                id=IdentityLinkId(uuid4()),
                user_id=user.id,
                provider=profile.provider,
                provider_user_id=profile.subject_id,
                email=profile.email,
                display_name=profile.display_name,
                avatar_url=profile.avatar_url,
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                created_at=now,
                updated_at=now,
            )
            try:
                saved = await self.identity_link_repository.insert(link)
            except DuplicateRecordError as e:
                winner = await self.get_link_by_provider_subject(profile)
                if not winner:
                    # The (user, provider) slot was taken by another subject id
                    raise ProviderAuthFailedError(
                        f"Account already linked to a different {profile.provider.value} identity"
                    ) from e
                logfire.info(
                    "Identity link created concurrently, updating instead",
                    provider=profile.provider.value,
                    subject_id=profile.subject_id,
                )
                return await self._refresh(winner, profile, tokens)

            logfire.info(
                "Identity link created",
                user_id=str(user.id),
                provider=profile.provider.value,
                is_new_user=is_new_user,
            )
            return LinkResult(user=user, link=saved, is_new_user=is_new_user)

    async def _refresh(
        self,
        link: IdentityLink,
        profile: ProviderProfile,
        tokens: ProviderTokens,
    ) -> LinkResult:
        # Returning sign-in: only the link changes, never the user row
        updated = link.model_copy(
            update={
                "email": profile.email,
                "display_name": profile.display_name,
                "avatar_url": profile.avatar_url,
                "access_token": tokens.access_token,
                "refresh_token": tokens.refresh_token or link.refresh_token,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        saved = await self.identity_link_repository.update(updated)

        user = await self.user_service.find_by_id(link.user_id)
        if not user:
            logfire.error(
                "Identity link points to missing user", user_id=str(link.user_id)
            )
            raise NotFoundError("User", str(link.user_id))

        logfire.info(
            "Identity link refreshed",
            user_id=str(user.id),
            provider=profile.provider.value,
        )
        return LinkResult(user=user, link=saved, is_new_user=False)

    async def _resolve_user(self, profile: ProviderProfile) -> tuple[User, bool]:
        user = await self.user_service.get_user_by_email(profile.email)
        if user:
            logfire.info(
                "Merging provider identity onto existing user",
                user_id=str(user.id),
                provider=profile.provider.value,
            )
            return user, False

        try:
            return await self.user_service.create_user(profile.email), True
        except EmailTakenError:
            # Created by a concurrent sign-in or registration
            user = await self.user_service.get_user_by_email(profile.email)
            if not user:
                raise
            return user, False
