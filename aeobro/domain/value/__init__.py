"""Domain value objects for AEOBRO."""

from aeobro.domain.value.identifiers import (
    BioCodeId,
    ChangeLogId,
    DomainClaimId,
    PlatformAccountId,
    ProfileId,
    UserId,
)
from aeobro.domain.value.plan import (
    PAID_PLANS,
    PLANS,
    Plan,
    PlanDefinition,
    get_plan,
    normalize_plan,
)
from aeobro.domain.value.types import (
    ChangeAction,
    ChangeEntity,
    ClaimStatus,
    DomainName,
    Lease,
    Platform,
    PlatformAccountStatus,
    PlatformIdentity,
    PlanStatus,
    UnpublishReason,
    VerificationContext,
    VerificationMethod,
    VerificationStatus,
    VerificationToken,
    VerifiedPlatformEntry,
    VerifyMethod,
    Visibility,
)

__all__ = [
    # Identifiers
    "UserId",
    "ProfileId",
    "DomainClaimId",
    "PlatformAccountId",
    "BioCodeId",
    "ChangeLogId",
    # Plans
    "Plan",
    "PlanDefinition",
    "PLANS",
    "PAID_PLANS",
    "get_plan",
    "normalize_plan",
    # Types
    "ChangeAction",
    "ChangeEntity",
    "ClaimStatus",
    "DomainName",
    "Lease",
    "Platform",
    "PlatformAccountStatus",
    "PlatformIdentity",
    "PlanStatus",
    "UnpublishReason",
    "VerificationContext",
    "VerificationMethod",
    "VerificationStatus",
    "VerificationToken",
    "VerifiedPlatformEntry",
    "VerifyMethod",
    "Visibility",
]
