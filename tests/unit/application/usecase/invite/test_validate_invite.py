"""Tests for validate invite use case."""

import pytest

from rediscover.application.usecase.invite import (
    ValidateInviteRequest,
    ValidateInviteUseCase,
)
from rediscover.domain.service import InviteService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestValidateInviteUseCase:
    """Tests for ValidateInviteUseCase."""

    @pytest.mark.asyncio
    async def test_validate_matching_invite(self, unit_env):
        """Test validating the exact (email, code) pair."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        use_case = await unit_env.get(ValidateInviteUseCase)
        invite = await invite_service.create_invite("alice@example.com")

        # Act
        response = await use_case.execute(
            ValidateInviteRequest(email="alice@example.com", code=invite.code.root)
        )

        # Assert
        assert response.valid is True

    @pytest.mark.asyncio
    async def test_validate_uppercase_code(self, unit_env):
        """Test that codes are compared case-insensitively."""
        invite_service = await unit_env.get(InviteService)
        use_case = await unit_env.get(ValidateInviteUseCase)
        invite = await invite_service.create_invite("alice@example.com")

        response = await use_case.execute(
            ValidateInviteRequest(
                email="alice@example.com", code=invite.code.root.upper()
            )
        )

        assert response.valid is True

    @pytest.mark.asyncio
    async def test_validate_code_of_other_email(self, unit_env):
        """Test that a real code paired with another email is rejected."""
        invite_service = await unit_env.get(InviteService)
        use_case = await unit_env.get(ValidateInviteUseCase)
        invite = await invite_service.create_invite("alice@example.com")

        response = await use_case.execute(
            ValidateInviteRequest(email="bob@example.com", code=invite.code.root)
        )

        assert response.valid is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["", "short", "waytoolongcode", "zzzzzzzz"])
    async def test_validate_bad_code(self, unit_env, code):
        """Test malformed and unknown codes."""
        invite_service = await unit_env.get(InviteService)
        use_case = await unit_env.get(ValidateInviteUseCase)
        await invite_service.create_invite("alice@example.com")

        response = await use_case.execute(
            ValidateInviteRequest(email="alice@example.com", code=code)
        )

        assert response.valid is False

    @pytest.mark.asyncio
    async def test_validate_consumed_invite(self, unit_env):
        """Test that a consumed invite no longer validates."""
        invite_service = await unit_env.get(InviteService)
        use_case = await unit_env.get(ValidateInviteUseCase)
        invite = await invite_service.create_invite("alice@example.com")
        await invite_service.consume_invite("alice@example.com")

        response = await use_case.execute(
            ValidateInviteRequest(email="alice@example.com", code=invite.code.root)
        )

        assert response.valid is False
