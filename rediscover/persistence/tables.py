"""SQLAlchemy table definitions for Rediscover City identity.

These table definitions are used with SQLAlchemy Core; rows are mapped to
domain models by hand in `mappers`. They match the schema defined in the
Alembic migrations.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("email", String(255), nullable=False),
    Column("password_hash", Text, nullable=True),  # NULL for provider-only accounts
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("email", name="uq_users_email"),
)

# ============================================================================
# INVITES TABLE
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("email", String(255), nullable=False),
    Column("code", String(8), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("email", name="uq_invites_email"),
    UniqueConstraint("code", name="uq_invites_code"),
)

# ============================================================================
# IDENTITY LINKS TABLE
# ============================================================================
identity_links_table = Table(
    "identity_links",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("provider", String(50), nullable=False),  # 'google'
    Column("provider_user_id", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("display_name", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("access_token", Text, nullable=False),
    Column("refresh_token", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "provider", "provider_user_id", name="uq_identity_links_provider_subject"
    ),
    UniqueConstraint("user_id", "provider", name="uq_identity_links_user_provider"),
)

Index("idx_identity_links_user_id", identity_links_table.c.user_id)
