"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from rediscover.domain.model import IdentityLink, Invite, User
from rediscover.domain.value import (
    AuthProvider,
    IdentityLinkId,
    InviteCode,
    InviteId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        password_hash=row.get("password_hash"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return user.model_dump()


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model."""
    return Invite(
        id=InviteId(_uuid(row["id"])),
        email=row["email"],
        code=InviteCode(row["code"]),
        created_at=row["created_at"],
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict."""
    return {
        "id": invite.id,
        "email": invite.email,
        "code": invite.code.root,
        "created_at": invite.created_at,
    }


def row_to_identity_link(row: Dict[str, Any]) -> IdentityLink:
    """Convert database row to IdentityLink domain model."""
    return IdentityLink(
        id=IdentityLinkId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        provider=AuthProvider(row["provider"]),
        provider_user_id=row["provider_user_id"],
        email=row["email"],
        display_name=row.get("display_name"),
        avatar_url=row.get("avatar_url"),
        access_token=row["access_token"],
        refresh_token=row.get("refresh_token"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def identity_link_to_dict(link: IdentityLink) -> Dict[str, Any]:
    """Convert IdentityLink domain model to database dict."""
    data = link.model_dump()
    data["provider"] = link.provider.value
    return data
