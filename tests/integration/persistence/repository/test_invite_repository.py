"""Integration tests for the PostgreSQL repositories.

These tests verify value object handling and that unique violations are
reported as DuplicateRecordError without poisoning the session.
"""

from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from rediscover.domain.error import DuplicateRecordError
from rediscover.domain.model import IdentityLink, Invite
from rediscover.domain.repository import (
    IdentityLinkRepository,
    InviteRepository,
    UserRepository,
)
from rediscover.domain.value import AuthProvider, IdentityLinkId, InviteCode, InviteId
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    session = await integration_env.get(AsyncSession)
    await session.execute(
        text("TRUNCATE TABLE identity_links, invites, users CASCADE")
    )
    await session.commit()

    yield


class TestInviteRepositoryIntegration:
    """Integration tests for PostgresInviteRepository."""

    @pytest.mark.asyncio
    async def test_find_by_code_extracts_root_value(self, integration_env):
        """find_by_code must query with the string inside InviteCode."""
        # Arrange
        invite_repo = await integration_env.get(InviteRepository)
        invite = Invite(
            id=InviteId(uuid4()), email="a@example.com", code=InviteCode("abcd1234")
        )
        await invite_repo.insert(invite)

        # Act
        found = await invite_repo.find_by_code(InviteCode("abcd1234"))

        # Assert
        assert found is not None
        assert found.id == invite.id
        assert found.code.root == "abcd1234"

    @pytest.mark.asyncio
    async def test_duplicate_email_then_session_still_usable(self, integration_env):
        invite_repo = await integration_env.get(InviteRepository)
        await invite_repo.insert(
            Invite(id=InviteId(uuid4()), email="a@example.com", code=InviteCode("abcd1234"))
        )

        with pytest.raises(DuplicateRecordError) as exc_info:
            await invite_repo.insert(
                Invite(
                    id=InviteId(uuid4()),
                    email="a@example.com",
                    code=InviteCode("wxyz9876"),
                )
            )

        assert exc_info.value.field == "uq_invites_email"
        assert await invite_repo.find_by_email("a@example.com") is not None

    @pytest.mark.asyncio
    async def test_delete_by_email(self, integration_env):
        invite_repo = await integration_env.get(InviteRepository)
        await invite_repo.insert(
            Invite(id=InviteId(uuid4()), email="a@example.com", code=InviteCode("abcd1234"))
        )

        await invite_repo.delete_by_email("a@example.com")
        await invite_repo.delete_by_email("a@example.com")

        assert await invite_repo.find_by_email_and_code("a@example.com", "abcd1234") is None


class TestUserAndLinkRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_duplicate_user_email(self, integration_env):
        user_repo = await integration_env.get(UserRepository)
        await user_repo.insert(make_user("a@example.com"))

        with pytest.raises(DuplicateRecordError) as exc_info:
            await user_repo.insert(make_user("a@example.com"))

        assert exc_info.value.field == "uq_users_email"

    @pytest.mark.asyncio
    async def test_duplicate_provider_subject(self, integration_env):
        user_repo = await integration_env.get(UserRepository)
        link_repo = await integration_env.get(IdentityLinkRepository)
        first = await user_repo.insert(make_user("a@example.com"))
        second = await user_repo.insert(make_user("b@example.com"))

        def link(user_id):
            return IdentityLink(
                id=IdentityLinkId(uuid4()),
                user_id=user_id,
                provider=AuthProvider.GOOGLE,
                provider_user_id="sub-1",
                email="a@example.com",
                access_token="access-1",
            )

        await link_repo.insert(link(first.id))
        with pytest.raises(DuplicateRecordError) as exc_info:
            await link_repo.insert(link(second.id))

        assert exc_info.value.field == "uq_identity_links_provider_subject"
        found = await link_repo.find_by_provider_subject(AuthProvider.GOOGLE, "sub-1")
        assert found.user_id == first.id
