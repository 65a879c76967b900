"""End-to-end tests for the authentication API."""

import asyncio

import pytest
from dishka import Provider, Scope, provide
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from rediscover.application.usecase.invite import (
    CreateInviteRequest,
    CreateInviteUseCase,
)
from rediscover.domain.error import InvalidRecordError, StoreUnavailableError
from rediscover.domain.repository import UserRepository
from rediscover.interface.api.app import create_app
from rediscover.persistence.repository.inmemory import InMemoryUserRepository
from tests.di import build_test_container


@pytest.fixture
def container():
    """Mocked container shared by every request of one test."""
    return build_test_container(extra_providers=(FastapiProvider(),))


@pytest.fixture
def client(container):
    """Create test client."""
    return TestClient(create_app(container, instrument=False))


@pytest.fixture
def invite(container):
    """Issue an invite through the same container the app serves from."""

    async def _create(email: str) -> str:
        async with container() as request_container:
            use_case = await request_container.get(CreateInviteUseCase)
            response = await use_case.execute(CreateInviteRequest(email=email))
            return response.code

    return lambda email: asyncio.run(_create(email))


def _register(client, email="alice@example.com", password="secret1", code=""):
    return client.post(
        "/v1/auth/register",
        json={"email": email, "password": password, "code": code},
    )


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestPasswordFlow:
    """Register, authenticate and log in with email and password."""

    def test_register_then_me_then_login(self, client, invite):
        # Arrange
        code = invite("alice@example.com")

        # Act
        registered = _register(client, code=code.upper())
        me = client.get(
            "/v1/auth/me",
            headers={"Authorization": f"Bearer {registered.json()['token']}"},
        )
        login = client.post(
            "/v1/auth/login",
            json={"email": "alice@example.com", "password": "secret1"},
        )

        # Assert
        assert registered.status_code == 201
        user = registered.json()["user"]
        assert user["email"] == "alice@example.com"
        assert me.status_code == 200
        assert me.json()["id"] == user["id"]
        assert me.json()["has_password"] is True
        assert "password_hash" not in me.json()
        assert login.status_code == 200
        assert login.json()["user"]["id"] == user["id"]

    def test_invite_is_single_use(self, client, invite):
        code = invite("alice@example.com")
        assert _register(client, code=code).status_code == 201

        validate = client.post(
            "/v1/invites/validate", json={"email": "alice@example.com", "code": code}
        )

        assert validate.json() == {"valid": False}

    def test_register_taken_email(self, client, invite):
        code = invite("alice@example.com")
        _register(client, code=code)

        response = _register(client, code=code)

        assert response.status_code == 409

    def test_register_wrong_code(self, client, invite):
        invite("alice@example.com")

        response = _register(client, code="zzzzzzzz")

        assert response.status_code == 400

    def test_register_code_for_other_email(self, client, invite):
        code = invite("alice@example.com")

        response = _register(client, email="bob@example.com", code=code)

        assert response.status_code == 400

    def test_register_short_password(self, client, invite):
        code = invite("alice@example.com")

        response = _register(client, password="12345", code=code)

        assert response.status_code == 422

    def test_login_wrong_password(self, client, invite):
        code = invite("alice@example.com")
        _register(client, code=code)

        response = client.post(
            "/v1/auth/login",
            json={"email": "alice@example.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"


    def test_login_with_non_utf8_password(self, client, invite):
        """A lone surrogate in the JSON body is just a wrong password."""
        code = invite("alice@example.com")
        _register(client, code=code)

        response = client.post(
            "/v1/auth/login",
            content='{"email": "alice@example.com", "password": "\\ud800"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"


class TestInviteValidation:
    def test_validate_invite(self, client, invite):
        code = invite("alice@example.com")

        response = client.post(
            "/v1/invites/validate", json={"email": "alice@example.com", "code": code}
        )

        assert response.status_code == 200
        assert response.json() == {"valid": True}

    def test_validate_unknown_invite(self, client):
        response = client.post(
            "/v1/invites/validate",
            json={"email": "nobody@example.com", "code": "abcd1234"},
        )

        assert response.status_code == 200
        assert response.json() == {"valid": False}


class TestGoogleFlow:
    def test_initiate_redirects_to_google(self, client):
        response = client.get("/v1/auth/google", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"].startswith(
            "https://accounts.google.com/"
        )
        assert "state=" in response.headers["location"]

    def test_callback_creates_then_signs_in(self, client):
        first = client.post("/v1/auth/google", json={"code": "sub-1|g@example.com"})
        second = client.post("/v1/auth/google", json={"code": "sub-1|g@example.com"})

        assert first.status_code == 200
        assert first.json()["is_new_user"] is True
        assert second.json()["is_new_user"] is False
        assert second.json()["user"]["id"] == first.json()["user"]["id"]

        me = client.get(
            "/v1/auth/me", headers={"Authorization": second.json()["token"]}
        )
        assert me.status_code == 200
        assert me.json()["has_password"] is False

    def test_callback_merges_onto_password_account(self, client, invite):
        code = invite("alice@example.com")
        registered = _register(client, code=code)

        response = client.post(
            "/v1/auth/google", json={"code": "sub-9|alice@example.com"}
        )

        assert response.status_code == 200
        assert response.json()["is_new_user"] is False
        assert response.json()["user"]["id"] == registered.json()["user"]["id"]

    def test_callback_upstream_failure(self, client):
        response = client.post("/v1/auth/google", json={"code": "fail"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Google authentication failed"


class TestMe:
    def test_missing_header(self, client):
        response = client.get("/v1/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert "missing_header" in response.json()["detail"]

    def test_garbage_token(self, client):
        response = client.get(
            "/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401
        assert "invalid_token" in response.json()["detail"]


class UnreachableUserRepository(InMemoryUserRepository):
    async def find_by_email(self, email):
        raise StoreUnavailableError("connection refused")


class UnreachableStoreProvider(Provider):
    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        return UnreachableUserRepository()


class TestStoreUnavailable:
    def test_login_reports_generic_server_error(self):
        container = build_test_container(
            extra_providers=(FastapiProvider(), UnreachableStoreProvider())
        )
        client = TestClient(create_app(container, instrument=False))

        response = client.post(
            "/v1/auth/login", json={"email": "a@example.com", "password": "secret1"}
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}


class OverflowingUserRepository(InMemoryUserRepository):
    async def insert(self, user):
        raise InvalidRecordError("user", "value too long for type character varying(255)")


class OverflowingUserProvider(Provider):
    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        return OverflowingUserRepository()


class TestInvalidRecord:
    def test_rejected_value_reports_bad_request(self):
        container = build_test_container(
            extra_providers=(FastapiProvider(), OverflowingUserProvider())
        )
        client = TestClient(create_app(container, instrument=False))

        async def _create_invite() -> str:
            async with container() as request_container:
                use_case = await request_container.get(CreateInviteUseCase)
                response = await use_case.execute(
                    CreateInviteRequest(email="alice@example.com")
                )
                return response.code

        code = asyncio.run(_create_invite())

        response = _register(client, code=code)

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid user"}
