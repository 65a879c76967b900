"""Tests for in-memory repositories.

These stand in for PostgreSQL in unit tests, so they must report unique
violations the same way the real repositories do.
"""

from uuid import uuid4

import pytest

from rediscover.domain.error import DuplicateRecordError, NotFoundError
from rediscover.domain.model import IdentityLink, Invite
from rediscover.domain.value import AuthProvider, IdentityLinkId, InviteCode, InviteId
from rediscover.persistence.repository.inmemory import (
    InMemoryIdentityLinkRepository,
    InMemoryInviteRepository,
    InMemoryUserRepository,
)
from tests.conftest import make_user


def make_invite(email: str, code: str) -> Invite:
    return Invite(id=InviteId(uuid4()), email=email, code=InviteCode(code))


def make_link(user_id, subject_id: str = "sub-1") -> IdentityLink:
    return IdentityLink(
        id=IdentityLinkId(uuid4()),
        user_id=user_id,
        provider=AuthProvider.GOOGLE,
        provider_user_id=subject_id,
        email="walker@example.com",
        access_token="access-1",
    )


class TestInMemoryUserRepository:
    @pytest.mark.asyncio
    async def test_email_is_unique(self):
        repo = InMemoryUserRepository()
        await repo.insert(make_user("a@example.com"))

        with pytest.raises(DuplicateRecordError) as exc_info:
            await repo.insert(make_user("a@example.com"))

        assert exc_info.value.field == "uq_users_email"

    @pytest.mark.asyncio
    async def test_email_lookup_is_exact(self):
        repo = InMemoryUserRepository()
        await repo.insert(make_user("a@example.com"))

        assert await repo.find_by_email("A@example.com") is None
        assert await repo.find_by_email("a@example.com") is not None

    @pytest.mark.asyncio
    async def test_update_missing_user(self):
        repo = InMemoryUserRepository()

        with pytest.raises(NotFoundError):
            await repo.update(make_user())


class TestInMemoryInviteRepository:
    @pytest.mark.asyncio
    async def test_email_and_code_are_unique(self):
        repo = InMemoryInviteRepository()
        await repo.insert(make_invite("a@example.com", "aaaa1111"))

        with pytest.raises(DuplicateRecordError) as email_exc:
            await repo.insert(make_invite("a@example.com", "bbbb2222"))
        with pytest.raises(DuplicateRecordError) as code_exc:
            await repo.insert(make_invite("b@example.com", "aaaa1111"))

        assert email_exc.value.field == "uq_invites_email"
        assert code_exc.value.field == "uq_invites_code"

    @pytest.mark.asyncio
    async def test_find_by_email_and_code(self):
        repo = InMemoryInviteRepository()
        await repo.insert(make_invite("a@example.com", "aaaa1111"))
        await repo.insert(make_invite("b@example.com", "bbbb2222"))

        assert await repo.find_by_email_and_code("a@example.com", "aaaa1111")
        assert await repo.find_by_email_and_code("a@example.com", "bbbb2222") is None

    @pytest.mark.asyncio
    async def test_delete_by_email_is_idempotent(self):
        repo = InMemoryInviteRepository()
        await repo.insert(make_invite("a@example.com", "aaaa1111"))

        await repo.delete_by_email("a@example.com")
        await repo.delete_by_email("a@example.com")

        assert await repo.find_by_email("a@example.com") is None
        assert await repo.find_by_code(InviteCode("aaaa1111")) is None


class TestInMemoryIdentityLinkRepository:
    @pytest.mark.asyncio
    async def test_provider_subject_is_unique(self):
        repo = InMemoryIdentityLinkRepository()
        await repo.insert(make_link(uuid4(), "sub-1"))

        with pytest.raises(DuplicateRecordError) as exc_info:
            await repo.insert(make_link(uuid4(), "sub-1"))

        assert exc_info.value.field == "uq_identity_links_provider_subject"

    @pytest.mark.asyncio
    async def test_one_link_per_user_and_provider(self):
        repo = InMemoryIdentityLinkRepository()
        user_id = uuid4()
        await repo.insert(make_link(user_id, "sub-1"))

        with pytest.raises(DuplicateRecordError) as exc_info:
            await repo.insert(make_link(user_id, "sub-2"))

        assert exc_info.value.field == "uq_identity_links_user_provider"

    @pytest.mark.asyncio
    async def test_update_replaces_link(self):
        repo = InMemoryIdentityLinkRepository()
        user_id = uuid4()
        link = await repo.insert(make_link(user_id))

        await repo.update(link.model_copy(update={"access_token": "access-2"}))

        found = await repo.find_by_user_and_provider(user_id, AuthProvider.GOOGLE)
        assert found.access_token == "access-2"
