"""Third-party authentication domain service."""

import logfire

from rediscover.adapter.error import AdapterError
from rediscover.domain.error import ProviderAuthFailedError
from rediscover.domain.value import AuthProvider, ProviderProfile, ProviderTokens

from .base import Service


class OAuthClient:
    """Generic OAuth client interface for all providers."""

    def authorization_url(self, state: str) -> str:
        """Build the provider URL the user is redirected to.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL
        """
        raise NotImplementedError

    async def exchange_code(self, code: str) -> ProviderTokens:
        """Exchange an authorization code for tokens.

        Args:
            code: Authorization code from the OAuth callback

        Returns:
            Access and refresh tokens
        """
        raise NotImplementedError

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        """Fetch the signed-in account's profile.

        Args:
            access_token: Access token from `exchange_code`

        Returns:
            Provider profile
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for multi-provider authentication operations.

    Talks to providers through OAuthClient implementations and turns any
    upstream failure into ProviderAuthFailedError.
    """

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    def _client(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise ProviderAuthFailedError(f"Unsupported provider: {provider.value}")
        return client

    def initiate_login(self, provider: AuthProvider, state: str) -> str:
        """Build the authorization URL for a provider.

        Args:
            provider: Authentication provider to use
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect the user to

        Raises:
            ProviderAuthFailedError: If provider not supported
        """
        return self._client(provider).authorization_url(state)

    async def complete_login(
        self, provider: AuthProvider, code: str
    ) -> tuple[ProviderTokens, ProviderProfile]:
        """Exchange the callback code and fetch the profile.

        Args:
            provider: Authentication provider used
            code: Authorization code from the OAuth callback

        Returns:
            Tokens and profile for the signed-in account

        Raises:
            ProviderAuthFailedError: If the provider is unsupported or any
                upstream call fails
        """
        client = self._client(provider)
        with logfire.span("auth_service.complete_login", provider=provider.value):
            try:
                tokens = await client.exchange_code(code)
                profile = await client.fetch_profile(tokens.access_token)
            except AdapterError as e:
                logfire.error(
                    "Provider authentication failed",
                    provider=provider.value,
                    error=str(e),
                )
                raise ProviderAuthFailedError(str(e)) from e

            if profile.provider != provider:
                raise ProviderAuthFailedError(
                    f"Profile from {profile.provider.value}, expected {provider.value}"
                )

            logfire.info(
                "Provider authentication completed",
                provider=provider.value,
                subject_id=profile.subject_id,
            )
            return tokens, profile
