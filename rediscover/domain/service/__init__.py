"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .base import Service
from .credential_service import CredentialService
from .identity_link_service import IdentityLinkService, LinkResult
from .invite_service import InviteService
from .jwt_service import JWTService
from .user_service import UserService

__all__ = [
    "AuthService",
    "CredentialService",
    "IdentityLinkService",
    "InviteService",
    "JWTService",
    "LinkResult",
    "OAuthClient",
    "Service",
    "UserService",
]
