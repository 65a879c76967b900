"""Unit tests for IdentityLinkService."""

import pytest

from rediscover.domain.error import ProviderAuthFailedError
from rediscover.domain.repository import IdentityLinkRepository, UserRepository
from rediscover.domain.service import IdentityLinkService, UserService
from rediscover.domain.value import AuthProvider
from rediscover.persistence.repository.inmemory import (
    InMemoryIdentityLinkRepository,
    InMemoryUserRepository,
)
from tests.conftest import make_profile, make_tokens
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _service(
    link_repo: IdentityLinkRepository | None = None,
    user_repo: UserRepository | None = None,
) -> tuple[IdentityLinkService, IdentityLinkRepository, UserRepository]:
    link_repo = link_repo or InMemoryIdentityLinkRepository()
    user_repo = user_repo or InMemoryUserRepository()
    return IdentityLinkService(link_repo, UserService(user_repo)), link_repo, user_repo


class TestLinkOrCreate:
    """Tests for link_or_create resolution paths."""

    @pytest.mark.asyncio
    async def test_first_sign_in_creates_user_and_link(self, unit_env):
        """Unknown subject and unknown email should create both rows."""
        service = await unit_env.get(IdentityLinkService)
        user_repo = await unit_env.get(UserRepository)

        result = await service.link_or_create(make_profile(), make_tokens())

        assert result.is_new_user is True
        assert result.user.email == "walker@example.com"
        assert result.user.password_hash is None
        assert result.link.user_id == result.user.id
        assert result.link.provider == AuthProvider.GOOGLE
        assert result.link.provider_user_id == "google-sub-1"
        assert await user_repo.find_by_id(result.user.id) == result.user

    @pytest.mark.asyncio
    async def test_returning_sign_in_updates_link_only(self):
        """Same subject again should refresh tokens and leave the user untouched."""
        service, link_repo, user_repo = _service()
        first = await service.link_or_create(make_profile(), make_tokens("access-1"))

        second = await service.link_or_create(
            make_profile(email="renamed@example.com", display_name="New Name"),
            make_tokens("access-2", "refresh-2"),
        )

        assert second.is_new_user is False
        assert second.user == first.user
        assert second.link.id == first.link.id
        stored = await link_repo.find_by_provider_subject(
            AuthProvider.GOOGLE, "google-sub-1"
        )
        assert stored.access_token == "access-2"
        assert stored.refresh_token == "refresh-2"
        assert stored.email == "renamed@example.com"
        assert stored.display_name == "New Name"
        assert stored.updated_at >= first.link.updated_at
        # User identity fields keep their original values
        assert (await user_repo.find_by_id(first.user.id)).email == "walker@example.com"

    @pytest.mark.asyncio
    async def test_missing_refresh_token_keeps_previous(self):
        service, link_repo, _ = _service()
        await service.link_or_create(make_profile(), make_tokens("access-1", "keep-me"))

        await service.link_or_create(make_profile(), make_tokens("access-2", None))

        stored = await link_repo.find_by_provider_subject(
            AuthProvider.GOOGLE, "google-sub-1"
        )
        assert stored.access_token == "access-2"
        assert stored.refresh_token == "keep-me"

    @pytest.mark.asyncio
    async def test_email_match_merges_onto_password_user(self):
        """A password user with the same email should gain the link."""
        service, link_repo, user_repo = _service()
        password_user = await UserService(user_repo).create_user(
            "walker@example.com", "salt:key"
        )

        result = await service.link_or_create(make_profile(), make_tokens())

        assert result.is_new_user is False
        assert result.user.id == password_user.id
        assert result.user.password_hash == "salt:key"
        assert result.link.user_id == password_user.id

    @pytest.mark.asyncio
    async def test_second_subject_for_linked_user_fails(self):
        """A user holds at most one link per provider."""
        service, _, _ = _service()
        await service.link_or_create(make_profile(subject_id="sub-a"), make_tokens())

        with pytest.raises(ProviderAuthFailedError):
            await service.link_or_create(make_profile(subject_id="sub-b"), make_tokens())


class TestLinkOrCreateRaces:
    """Concurrent first sign-ins resolved through unique constraints."""

    @pytest.mark.asyncio
    async def test_link_insert_race_falls_back_to_update(self):
        """Losing the (provider, subject) insert should update the winner's link."""

        class LinkRaceRepository(InMemoryIdentityLinkRepository):
            def __init__(self):
                super().__init__()
                self.hide_subject = False

            async def find_by_provider_subject(self, provider, provider_user_id):
                if self.hide_subject:
                    self.hide_subject = False
                    return None
                return await super().find_by_provider_subject(
                    provider, provider_user_id
                )

        link_repo = LinkRaceRepository()
        service, _, user_repo = _service(link_repo=link_repo)
        winner = await service.link_or_create(make_profile(), make_tokens("access-1"))

        link_repo.hide_subject = True
        loser = await service.link_or_create(make_profile(), make_tokens("access-2"))

        assert loser.is_new_user is False
        assert loser.user.id == winner.user.id
        assert loser.link.id == winner.link.id
        assert len(link_repo._links) == 1
        assert link_repo._links[0].access_token == "access-2"

    @pytest.mark.asyncio
    async def test_user_insert_race_reuses_winner(self):
        """Losing the user email insert should reuse the winner's user."""

        class EmailRaceRepository(InMemoryUserRepository):
            def __init__(self):
                super().__init__()
                self.hide_email = False

            async def find_by_email(self, email):
                if self.hide_email:
                    self.hide_email = False
                    return None
                return await super().find_by_email(email)

        user_repo = EmailRaceRepository()
        service, link_repo, _ = _service(user_repo=user_repo)
        existing = await UserService(user_repo).create_user("walker@example.com")

        user_repo.hide_email = True
        result = await service.link_or_create(make_profile(), make_tokens())

        assert result.is_new_user is False
        assert result.user.id == existing.id
        assert len(user_repo._users) == 1
        assert result.link.user_id == existing.id
