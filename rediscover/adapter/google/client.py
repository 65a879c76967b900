"""Google OAuth 2.0 client implementation.

Implements the authorization code flow against Google's token and
userinfo endpoints.
"""

from urllib.parse import urlencode

import httpx
import logfire
from pydantic import ValidationError

from rediscover.adapter.error import ProviderError
from rediscover.domain.service.auth_service import OAuthClient
from rediscover.domain.value import AuthProvider, ProviderProfile, ProviderTokens


class GoogleOAuthError(ProviderError):
    """Google OAuth error."""

    pass


class GoogleOAuthClient(OAuthClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleOAuthClient(GoogleOAuthClient):
    """Google OAuth 2.0 client."""

    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    user_info_url = "https://www.googleapis.com/oauth2/v2/userinfo"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 30.0,
    ) -> None:
        """Initialize Google OAuth client.

        Args:
            client_id: Google OAuth client ID
            client_secret: Google OAuth client secret
            redirect_uri: Callback URL registered with Google
            timeout: Per-request timeout in seconds
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout

    def authorization_url(self, state: str) -> str:
        """Build the Google consent screen URL.

        Requests offline access so Google issues a refresh token.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "access_type": "offline",
            "prompt": "consent",
            "state": state,
        }
        return f"{self.authorize_url}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> ProviderTokens:
        """Exchange authorization code for tokens.

        Args:
            code: Authorization code from callback

        Returns:
            Access token and optional refresh token

        Raises:
            GoogleOAuthError: If token exchange fails
        """
        data = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Google token exchange HTTP error", error=str(e))
            raise GoogleOAuthError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "Google token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GoogleOAuthError(f"Token exchange failed: {response.status_code}")

        try:
            result = response.json()
            return ProviderTokens(
                access_token=result["access_token"],
                refresh_token=result.get("refresh_token"),
            )
        except (ValueError, KeyError, ValidationError) as e:
            raise GoogleOAuthError(f"Malformed token response: {e}")

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        """Get user information from Google.

        Args:
            access_token: OAuth access token

        Returns:
            Google account profile

        Raises:
            GoogleOAuthError: If API request fails or the profile lacks id/email
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.user_info_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Google user info HTTP error", error=str(e))
            raise GoogleOAuthError(f"HTTP error fetching user info: {e}")

        if response.status_code != 200:
            logfire.error(
                "Google user info request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GoogleOAuthError(f"User info request failed: {response.status_code}")

        try:
            result = response.json()
            return ProviderProfile(
                provider=AuthProvider.GOOGLE,
                subject_id=str(result["id"]),
                email=result["email"],
                display_name=result.get("name"),
                avatar_url=result.get("picture"),
            )
        except (ValueError, KeyError, ValidationError) as e:
            raise GoogleOAuthError(f"Malformed user info response: {e}")


class MockGoogleOAuthClient(GoogleOAuthClient):
    """Mock Google OAuth client for testing.

    Returns deterministic data without network calls. The authorization
    code selects the account: ``"<subject>|<email>"`` signs in as that
    subject and email, ``"fail"`` simulates an upstream error, anything
    else signs in as the default mock account.
    """

    default_subject_id = "mockgoogle123"
    default_email = "mock@gmail.com"

    def __init__(self) -> None:
        self.exchanged_codes: list[str] = []

    def authorization_url(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://accounts.google.com/o/oauth2/v2/auth?state={state}&mock=true"

    async def exchange_code(self, code: str) -> ProviderTokens:
        """Return mock tokens embedding the code."""
        if code == "fail":
            raise GoogleOAuthError("Token exchange failed: 400")
        self.exchanged_codes.append(code)
        return ProviderTokens(
            access_token=f"access:{code}",
            refresh_token=f"refresh:{code}",
        )

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        """Return mock profile derived from the access token."""
        code = access_token.removeprefix("access:")
        subject_id, _, email = code.partition("|")
        if not email:
            subject_id, email = self.default_subject_id, self.default_email
        return ProviderProfile(
            provider=AuthProvider.GOOGLE,
            subject_id=subject_id,
            email=email,
            display_name="Mock Google User",
            avatar_url="https://example.com/avatar.jpg",
        )
