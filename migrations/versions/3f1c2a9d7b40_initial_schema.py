"""initial_schema

Create the verification schema for AEOBRO:
- Profiles (verification status cache, billing input, lifecycle)
- Domain claims (one per domain, DNS TXT and email proofs)
- Platform accounts (unique per provider identity)
- Bio codes (transient code-in-bio challenges)
- Change log (append-only audit)

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-16 09:12:44.510232

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("legal_name", sa.String(255), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column(
            "verification_status",
            sa.String(32),
            nullable=False,
            server_default="UNVERIFIED",
        ),
        sa.Column("verify_method", sa.String(16), nullable=True),
        sa.Column("verify_marker", sa.String(128), nullable=True),
        sa.Column("verify_domain", sa.String(253), nullable=True),
        sa.Column("domain_verified_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("platform_verified_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("verify_checked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "verified_platforms",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("plan", sa.String(32), nullable=False, server_default="LITE"),
        sa.Column("plan_status", sa.String(32), nullable=True),
        sa.Column(
            "visibility", sa.String(16), nullable=False, server_default="PUBLISHED"
        ),
        sa.Column(
            "unpublish_reason", sa.String(32), nullable=False, server_default="NONE"
        ),
        sa.Column("unpublished_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("retention_until", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "deletion_job_locked_at", sa.TIMESTAMP(timezone=True), nullable=True
        ),
        sa.Column("deletion_job_lock_holder", sa.String(64), nullable=True),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", name="uq_profiles_user_id"),
        sa.UniqueConstraint("slug", name="uq_profiles_slug"),
        sa.CheckConstraint(
            "verification_status IN ('UNVERIFIED', 'PLATFORM_VERIFIED', 'DOMAIN_VERIFIED')",
            name="ck_profiles_verification_status",
        ),
        sa.CheckConstraint(
            "visibility IN ('PUBLISHED', 'UNPUBLISHED', 'DELETED')",
            name="ck_profiles_visibility",
        ),
    )
    op.create_index(
        "idx_profiles_retention",
        "profiles",
        ["visibility", "unpublish_reason", "retention_until"],
    )

    # ========================================================================
    # DOMAIN_CLAIMS table
    # ========================================================================
    op.create_table(
        "domain_claims",
        _uuid_pk(),
        sa.Column("domain", sa.String(253), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("txt_token", sa.String(128), nullable=False),
        sa.Column("dns_verified", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("status", sa.String(16), nullable=False, server_default="PENDING"),
        sa.Column("email_issued", sa.String(320), nullable=True),
        sa.Column("email_token", sa.String(64), nullable=True),
        sa.Column(
            "email_verified", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("verified_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("last_checked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("domain", name="uq_domain_claims_domain"),
        sa.CheckConstraint(
            "status IN ('PENDING', 'PARTIAL', 'VERIFIED')",
            name="ck_domain_claims_status",
        ),
    )
    op.create_index("idx_domain_claims_user_id", "domain_claims", ["user_id"])
    op.create_index("idx_domain_claims_email_token", "domain_claims", ["email_token"])

    # ========================================================================
    # PLATFORM_ACCOUNTS table
    # ========================================================================
    op.create_table(
        "platform_accounts",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("profile_id", sa.UUID(), nullable=True),
        sa.Column("provider", sa.String(32), nullable=False),
        sa.Column("external_id", sa.String(255), nullable=False),
        sa.Column("handle", sa.String(255), nullable=True),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="PENDING"),
        sa.Column("method", sa.String(16), nullable=False),
        sa.Column("platform_context", sa.String(64), nullable=True),
        sa.Column(
            "scopes",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        sa.Column("verified_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "provider", "external_id", name="uq_platform_accounts_identity"
        ),
    )
    op.create_index("idx_platform_accounts_user_id", "platform_accounts", ["user_id"])

    # ========================================================================
    # BIO_CODES table
    # ========================================================================
    op.create_table(
        "bio_codes",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("platform", sa.String(32), nullable=False),
        sa.Column("code", sa.String(64), nullable=False),
        sa.Column("profile_url", sa.Text(), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="PENDING"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_bio_codes_user_platform",
        "bio_codes",
        ["user_id", "platform", "expires_at"],
    )

    # ========================================================================
    # CHANGE_LOG table (append-only)
    # ========================================================================
    op.create_table(
        "change_log",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("profile_id", sa.UUID(), nullable=True),
        sa.Column("entity", sa.String(32), nullable=False),
        sa.Column("entity_id", sa.String(64), nullable=False),
        sa.Column("action", sa.String(16), nullable=False),
        sa.Column("field", sa.String(64), nullable=True),
        sa.Column("before", postgresql.JSONB(), nullable=True),
        sa.Column("after", postgresql.JSONB(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_change_log_profile_id", "change_log", ["profile_id"])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("change_log")
    op.drop_table("bio_codes")
    op.drop_table("platform_accounts")
    op.drop_table("domain_claims")
    op.drop_table("profiles")
