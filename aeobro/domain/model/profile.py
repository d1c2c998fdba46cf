"""Profile entity.

The published entity of an account holder. Its verification status is a
cache of the proofs held in domain claims and platform accounts.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from aeobro.domain.model.common import DomainModel, utcnow
from aeobro.domain.value import (
    Plan,
    PlanStatus,
    ProfileId,
    UnpublishReason,
    UserId,
    VerificationStatus,
    VerifiedPlatformEntry,
    VerifyMethod,
    Visibility,
)


class Profile(DomainModel):
    """Profile entity - one per user.

    Business rules:
    - verification_status is only written by the verification status service
    - verified_platforms is merged per provider, never replaced wholesale
    - A DELETED profile keeps its row (soft delete)
    """

    id: ProfileId
    user_id: UserId
    slug: str
    display_name: str
    legal_name: Optional[str] = None
    website: Optional[str] = None

    verification_status: VerificationStatus = VerificationStatus.UNVERIFIED
    verify_method: Optional[VerifyMethod] = None
    verify_marker: Optional[str] = None  # Pending code-in-bio marker
    verify_domain: Optional[str] = None
    domain_verified_at: Optional[datetime] = None
    platform_verified_at: Optional[datetime] = None
    verify_checked_at: Optional[datetime] = None
    verified_platforms: dict[str, VerifiedPlatformEntry] = Field(default_factory=dict)

    plan: Plan = Plan.LITE
    plan_status: Optional[PlanStatus] = None

    visibility: Visibility = Visibility.PUBLISHED
    unpublish_reason: UnpublishReason = UnpublishReason.NONE
    unpublished_at: Optional[datetime] = None
    retention_until: Optional[datetime] = None
    deletion_job_locked_at: Optional[datetime] = None
    deletion_job_lock_holder: Optional[str] = None
    deleted_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
