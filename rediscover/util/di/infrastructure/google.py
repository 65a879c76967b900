"""Google infrastructure providers."""

from dishka import Scope, provide

from rediscover.adapter.google import GoogleOAuthClient, RealGoogleOAuthClient
from rediscover.config import Settings
from rediscover.util.di.base import ProviderBase


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self, settings: Settings) -> GoogleOAuthClient:
        """Provide Google OAuth client.

        Returns:
            Google OAuth 2.0 client

        Raises:
            ValueError: If Google OAuth credentials are not configured
        """
        if not settings.google.client_id:
            raise ValueError("Google OAuth client ID must be configured")
        if not settings.google.client_secret:
            raise ValueError("Google OAuth client secret must be configured")

        return RealGoogleOAuthClient(
            client_id=settings.google.client_id,
            client_secret=settings.google.client_secret,
            redirect_uri=settings.google.redirect_uri,
        )
