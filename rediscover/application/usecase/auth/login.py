"""Email/password login use case."""

import logfire
from pydantic import BaseModel

from rediscover.domain.error import InvalidCredentialsError
from rediscover.domain.service import CredentialService, JWTService, UserService

from .register import SessionUser


class LoginRequest(BaseModel):
    """Login request."""

    email: str
    password: str


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    user: SessionUser


class LoginUseCase:
    """Use case for email/password login.

    Unknown email, provider-only account and wrong password all raise the
    same InvalidCredentialsError; only the log records which one it was.
    """

    def __init__(
        self,
        user_service: UserService,
        credential_service: CredentialService,
        jwt_service: JWTService,
    ) -> None:
        self.user_service = user_service
        self.credential_service = credential_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Authenticate with email and password.

        Args:
            request: Login credentials

        Returns:
            Session token and user summary

        Raises:
            InvalidCredentialsError: If the credentials do not match an account
        """
        with logfire.span("login.execute", email=request.email):
            user = await self.user_service.get_user_by_email(request.email)
            if not user:
                logfire.info("Login failed", email=request.email, reason="no_user")
                raise InvalidCredentialsError()

            if not user.has_password:
                logfire.info(
                    "Login failed", email=request.email, reason="no_password"
                )
                raise InvalidCredentialsError()

            if not self.credential_service.verify_password(
                request.password, user.password_hash
            ):
                logfire.info(
                    "Login failed", email=request.email, reason="wrong_password"
                )
                raise InvalidCredentialsError()

            token = self.jwt_service.create_token(str(user.id), user.email)
            logfire.info("User logged in", user_id=str(user.id))
            return LoginResponse(
                token=token, user=SessionUser(id=str(user.id), email=user.email)
            )
