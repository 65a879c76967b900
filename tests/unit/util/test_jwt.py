"""Unit tests for session token issuing and verification."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from rediscover.config import AuthSettings
from rediscover.domain.service import JWTService
from rediscover.util.jwt import InvalidTokenError, JWTError

SETTINGS = AuthSettings(jwt_secret="test-secret-that-is-long-enough-for-hs256")


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(SETTINGS)


def _encode(payload: dict, secret: str = SETTINGS.jwt_secret) -> str:
    return jwt.encode(payload, secret, algorithm="HS256")


class TestJWTService:
    def test_round_trip(self, jwt_service):
        user_id = str(uuid4())

        token = jwt_service.create_token(user_id, "a@b.com")
        payload = jwt_service.verify_token(token)

        assert payload.user_id == user_id
        assert payload.email == "a@b.com"
        assert payload.exp > datetime.now(timezone.utc) + timedelta(days=29)

    def test_invalid_token_error_is_jwt_error(self):
        assert issubclass(InvalidTokenError, JWTError)

    @pytest.mark.parametrize(
        "token",
        [
            "garbage",
            "",
            "a.b.c",
        ],
    )
    def test_malformed_token(self, jwt_service, token):
        with pytest.raises(InvalidTokenError):
            jwt_service.verify_token(token)

    def test_bad_signature(self, jwt_service):
        token = JWTService(
            AuthSettings(jwt_secret="another-secret-that-is-long-enough-too")
        ).create_token(str(uuid4()), "a@b.com")

        with pytest.raises(InvalidTokenError):
            jwt_service.verify_token(token)

    def test_expired(self, jwt_service):
        token = _encode(
            {
                "user_id": str(uuid4()),
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            }
        )

        with pytest.raises(InvalidTokenError):
            jwt_service.verify_token(token)

    @pytest.mark.parametrize("user_id", [None, "", "   ", 42])
    def test_missing_or_empty_user_id(self, jwt_service, user_id):
        payload = {"exp": datetime.now(timezone.utc) + timedelta(hours=1)}
        if user_id is not None:
            payload["user_id"] = user_id

        with pytest.raises(InvalidTokenError):
            jwt_service.verify_token(_encode(payload))

    def test_missing_exp(self, jwt_service):
        with pytest.raises(InvalidTokenError):
            jwt_service.verify_token(_encode({"user_id": str(uuid4())}))
