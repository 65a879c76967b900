"""Application layer DI providers."""

from dishka import Scope, provide

from rediscover.application.usecase.auth import (
    AuthenticateRequestUseCase,
    LoginUseCase,
    ProviderLoginUseCase,
    RegisterUseCase,
)
from rediscover.application.usecase.invite import (
    CreateInviteUseCase,
    GetInviteUseCase,
    ValidateInviteUseCase,
)
from rediscover.application.usecase.user import GetUserUseCase
from rediscover.domain.service import (
    AuthService,
    CredentialService,
    IdentityLinkService,
    InviteService,
    JWTService,
    UserService,
)
from rediscover.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self,
        user_service: UserService,
        invite_service: InviteService,
        credential_service: CredentialService,
        jwt_service: JWTService,
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(
            user_service=user_service,
            invite_service=invite_service,
            credential_service=credential_service,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        user_service: UserService,
        credential_service: CredentialService,
        jwt_service: JWTService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            user_service=user_service,
            credential_service=credential_service,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_authenticate_request_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> AuthenticateRequestUseCase:
        """Provide authenticate request use case."""
        return AuthenticateRequestUseCase(
            jwt_service=jwt_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_provider_login_use_case(
        self,
        auth_service: AuthService,
        identity_link_service: IdentityLinkService,
        jwt_service: JWTService,
    ) -> ProviderLoginUseCase:
        """Provide provider login use case."""
        return ProviderLoginUseCase(
            auth_service=auth_service,
            identity_link_service=identity_link_service,
            jwt_service=jwt_service,
        )

    # Invite use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invite_use_case(
        self, invite_service: InviteService
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_get_invite_use_case(self, invite_service: InviteService) -> GetInviteUseCase:
        """Provide get invite use case."""
        return GetInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_validate_invite_use_case(
        self, invite_service: InviteService
    ) -> ValidateInviteUseCase:
        """Provide validate invite use case."""
        return ValidateInviteUseCase(invite_service=invite_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_get_user_use_case(self, user_service: UserService) -> GetUserUseCase:
        """Provide get user use case."""
        return GetUserUseCase(user_service=user_service)
