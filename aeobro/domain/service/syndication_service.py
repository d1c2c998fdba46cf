"""Syndication eligibility gate.

Export surfaces (JSON-LD, feeds) ask this gate before publishing a profile
outside AEOBRO. Any one satisfied condition grants access.
"""

from typing import Literal

from aeobro.domain.model.profile import Profile
from aeobro.domain.value import (
    PAID_PLANS,
    PLANS,
    PlanStatus,
    VerificationStatus,
    normalize_plan,
)
from aeobro.domain.value.common import ValueObject

DENIED_REASON = (
    "Syndication disabled. Verify your domain or connect a platform "
    "(or activate an eligible plan)."
)

# Billing states that keep a paid plan in force
ACTIVE_PLAN_STATUSES = frozenset({PlanStatus.ACTIVE, PlanStatus.TRIALING})

Requirement = Literal["DOMAIN_VERIFIED", "PLATFORM_VERIFIED", "PAID_PLAN"]


class SyndicationOptions(ValueObject):
    """Gate switches.

    Attributes:
        enforce_plan: An active paid plan is sufficient on its own
        allow_platform_verified: PLATFORM_VERIFIED is sufficient on its own
    """

    enforce_plan: bool = True
    allow_platform_verified: bool = True


class SyndicationRequirement(ValueObject):
    """What a denied profile would need, any one of."""

    any_of: list[Requirement]
    paid_plans: list[str]


class SyndicationDecision(ValueObject):
    """Outcome of the gate."""

    allowed: bool
    reason: str | None = None
    require: SyndicationRequirement | None = None


def has_active_paid_plan(profile: Profile) -> bool:
    """Whether the profile is on a paid plan with billing in good standing."""
    plan = normalize_plan(profile.plan)
    return plan in PAID_PLANS and profile.plan_status in ACTIVE_PLAN_STATUSES


def is_syndication_allowed(
    profile: Profile, options: SyndicationOptions | None = None
) -> SyndicationDecision:
    """Decide whether a profile may be exported.

    Allowed when the profile is DOMAIN_VERIFIED, or PLATFORM_VERIFIED with
    `allow_platform_verified`, or on an active paid plan with `enforce_plan`.

    Args:
        profile: Profile to export
        options: Gate switches (defaults enable both)

    Returns:
        Decision; denials carry a reason and the requirement list
    """
    options = options or SyndicationOptions()
    status = profile.verification_status

    allowed = (
        status == VerificationStatus.DOMAIN_VERIFIED
        or (
            options.allow_platform_verified
            and status == VerificationStatus.PLATFORM_VERIFIED
        )
        or (options.enforce_plan and has_active_paid_plan(profile))
    )
    if allowed:
        return SyndicationDecision(allowed=True)

    return SyndicationDecision(
        allowed=False,
        reason=DENIED_REASON,
        require=SyndicationRequirement(
            any_of=["DOMAIN_VERIFIED", "PLATFORM_VERIFIED", "PAID_PLAN"],
            paid_plans=[
                PLANS[p].label for p in sorted(PAID_PLANS, key=lambda p: PLANS[p].rank)
            ],
        ),
    )
