"""Domain layer DI providers."""

from dishka import Scope, provide

from rediscover.config import AuthSettings, CredentialSettings, InvitationSettings
from rediscover.domain.repository import (
    IdentityLinkRepository,
    InviteRepository,
    UserRepository,
)
from rediscover.domain.service import (
    AuthService,
    CredentialService,
    IdentityLinkService,
    InviteService,
    JWTService,
    OAuthClient,
    UserService,
)
from rediscover.domain.value import AuthProvider
from rediscover.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients

        Returns:
            AuthService configured with all available OAuth clients
        """
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_credential_service(
        self, credential_settings: CredentialSettings
    ) -> CredentialService:
        """Provide password hashing service (stateless, shared)."""
        return CredentialService(credential_settings=credential_settings)

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        invitation_settings: InvitationSettings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            invitation_settings=invitation_settings,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_identity_link_service(
        self,
        identity_link_repository: IdentityLinkRepository,
        user_service: UserService,
    ) -> IdentityLinkService:
        """Provide identity link domain service."""
        return IdentityLinkService(
            identity_link_repository=identity_link_repository,
            user_service=user_service,
        )
