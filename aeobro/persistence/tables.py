"""SQLAlchemy table definitions for AEOBRO verification.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PROFILES TABLE
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False, unique=True),  # One profile per user
    Column("slug", String(100), nullable=False, unique=True),
    Column("display_name", String(255), nullable=False),
    Column("legal_name", String(255), nullable=True),
    Column("website", Text, nullable=True),
    # Verification (cache of proofs, written by reconcile only)
    Column(
        "verification_status",
        String(32),
        nullable=False,
        server_default="UNVERIFIED",
    ),
    Column("verify_method", String(16), nullable=True),
    Column("verify_marker", String(128), nullable=True),
    Column("verify_domain", String(253), nullable=True),
    Column("domain_verified_at", TIMESTAMP(timezone=True), nullable=True),
    Column("platform_verified_at", TIMESTAMP(timezone=True), nullable=True),
    Column("verify_checked_at", TIMESTAMP(timezone=True), nullable=True),
    Column("verified_platforms", JSONB, nullable=False, server_default="{}"),
    # Billing (read-only input)
    Column("plan", String(32), nullable=False, server_default="LITE"),
    Column("plan_status", String(32), nullable=True),
    # Lifecycle
    Column("visibility", String(16), nullable=False, server_default="PUBLISHED"),
    Column("unpublish_reason", String(32), nullable=False, server_default="NONE"),
    Column("unpublished_at", TIMESTAMP(timezone=True), nullable=True),
    Column("retention_until", TIMESTAMP(timezone=True), nullable=True),
    Column("deletion_job_locked_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deletion_job_lock_holder", String(64), nullable=True),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "verification_status IN ('UNVERIFIED', 'PLATFORM_VERIFIED', 'DOMAIN_VERIFIED')",
        name="ck_profiles_verification_status",
    ),
    CheckConstraint(
        "visibility IN ('PUBLISHED', 'UNPUBLISHED', 'DELETED')",
        name="ck_profiles_visibility",
    ),
)

Index(
    "idx_profiles_retention",
    profiles_table.c.visibility,
    profiles_table.c.unpublish_reason,
    profiles_table.c.retention_until,
)

# ============================================================================
# DOMAIN CLAIMS TABLE (one claim per domain)
# ============================================================================
domain_claims_table = Table(
    "domain_claims",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("domain", String(253), nullable=False),
    Column("user_id", UUID, nullable=False),
    Column("txt_token", String(128), nullable=False),
    Column("dns_verified", Boolean, nullable=False, server_default="false"),
    Column("status", String(16), nullable=False, server_default="PENDING"),
    Column("email_issued", String(320), nullable=True),
    Column("email_token", String(64), nullable=True),
    Column("email_verified", Boolean, nullable=False, server_default="false"),
    Column("verified_at", TIMESTAMP(timezone=True), nullable=True),
    Column("last_checked_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("domain", name="uq_domain_claims_domain"),
    CheckConstraint(
        "status IN ('PENDING', 'PARTIAL', 'VERIFIED')",
        name="ck_domain_claims_status",
    ),
)

Index("idx_domain_claims_user_id", domain_claims_table.c.user_id)
Index("idx_domain_claims_email_token", domain_claims_table.c.email_token)

# ============================================================================
# PLATFORM ACCOUNTS TABLE (unique per provider identity)
# ============================================================================
platform_accounts_table = Table(
    "platform_accounts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column(
        "profile_id",
        UUID,
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("provider", String(32), nullable=False),
    Column("external_id", String(255), nullable=False),
    Column("handle", String(255), nullable=True),
    Column("url", Text, nullable=True),
    Column("status", String(16), nullable=False, server_default="PENDING"),
    Column("method", String(16), nullable=False),
    Column("platform_context", String(64), nullable=True),
    Column("scopes", ARRAY(Text), nullable=False, server_default="{}"),
    Column("verified_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("provider", "external_id", name="uq_platform_accounts_identity"),
)

Index("idx_platform_accounts_user_id", platform_accounts_table.c.user_id)

# ============================================================================
# BIO CODES TABLE (transient)
# ============================================================================
bio_codes_table = Table(
    "bio_codes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column("platform", String(32), nullable=False),
    Column("code", String(64), nullable=False),
    Column("profile_url", Text, nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("status", String(16), nullable=False, server_default="PENDING"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_bio_codes_user_platform",
    bio_codes_table.c.user_id,
    bio_codes_table.c.platform,
    bio_codes_table.c.expires_at,
)

# ============================================================================
# CHANGE LOG TABLE (append-only)
# ============================================================================
change_log_table = Table(
    "change_log",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column("profile_id", UUID, nullable=True),
    Column("entity", String(32), nullable=False),
    Column("entity_id", String(64), nullable=False),
    Column("action", String(16), nullable=False),
    Column("field", String(64), nullable=True),
    Column("before", JSONB, nullable=True),
    Column("after", JSONB, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_change_log_profile_id", change_log_table.c.profile_id)
