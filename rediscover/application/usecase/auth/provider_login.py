"""Third-party provider login use case."""

import logfire
from pydantic import BaseModel

from rediscover.domain.service import AuthService, IdentityLinkService, JWTService
from rediscover.domain.value import AuthProvider

from .register import SessionUser


class ProviderLoginRequest(BaseModel):
    """Provider login request from the OAuth callback."""

    provider: AuthProvider = AuthProvider.GOOGLE
    code: str  # OAuth authorization code


class ProviderLoginResponse(BaseModel):
    """Provider login response."""

    token: str
    user: SessionUser
    is_new_user: bool


class ProviderLoginUseCase:
    """Use case for signing in through a third-party provider.

    Steps:
    1. Exchange the code and fetch the profile (AuthService)
    2. Resolve or create the local user and its link (IdentityLinkService)
    3. Issue a session token
    """

    def __init__(
        self,
        auth_service: AuthService,
        identity_link_service: IdentityLinkService,
        jwt_service: JWTService,
    ) -> None:
        self.auth_service = auth_service
        self.identity_link_service = identity_link_service
        self.jwt_service = jwt_service

    async def execute(self, request: ProviderLoginRequest) -> ProviderLoginResponse:
        """Complete a provider sign-in.

        Raises:
            ProviderAuthFailedError: If the provider exchange fails or the
                account cannot be linked
        """
        with logfire.span("provider_login.execute", provider=request.provider.value):
            tokens, profile = await self.auth_service.complete_login(
                request.provider, request.code
            )
            result = await self.identity_link_service.link_or_create(profile, tokens)

            token = self.jwt_service.create_token(
                str(result.user.id), result.user.email
            )
            logfire.info(
                "Provider login completed",
                user_id=str(result.user.id),
                provider=request.provider.value,
                is_new_user=result.is_new_user,
            )
            return ProviderLoginResponse(
                token=token,
                user=SessionUser(id=str(result.user.id), email=result.user.email),
                is_new_user=result.is_new_user,
            )
