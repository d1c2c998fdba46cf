"""Unit tests for the syndication gate."""

import pytest

from aeobro.domain.service import SyndicationOptions, is_syndication_allowed
from aeobro.domain.service.syndication_service import DENIED_REASON
from aeobro.domain.value import Plan, PlanStatus, VerificationStatus
from tests.factories import make_profile


class TestIsSyndicationAllowed:
    """Tests for is_syndication_allowed."""

    def test_domain_verified_always_allowed(self):
        profile = make_profile(verification_status=VerificationStatus.DOMAIN_VERIFIED)
        options = SyndicationOptions(enforce_plan=False, allow_platform_verified=False)

        assert is_syndication_allowed(profile, options).allowed is True

    def test_platform_verified_allowed_by_default(self):
        profile = make_profile(
            verification_status=VerificationStatus.PLATFORM_VERIFIED
        )

        decision = is_syndication_allowed(profile)

        assert decision.allowed is True
        assert decision.reason is None
        assert decision.require is None

    def test_platform_verified_can_be_switched_off(self):
        profile = make_profile(
            verification_status=VerificationStatus.PLATFORM_VERIFIED
        )
        options = SyndicationOptions(allow_platform_verified=False)

        assert is_syndication_allowed(profile, options).allowed is False

    @pytest.mark.parametrize("plan_status", [PlanStatus.ACTIVE, PlanStatus.TRIALING])
    def test_active_paid_plan_allowed(self, plan_status):
        profile = make_profile(plan=Plan.PRO, plan_status=plan_status)

        assert is_syndication_allowed(profile).allowed is True

    @pytest.mark.parametrize(
        "plan_status", [PlanStatus.PAST_DUE, PlanStatus.CANCELED, None]
    )
    def test_paid_plan_without_good_billing_denied(self, plan_status):
        profile = make_profile(plan=Plan.BUSINESS, plan_status=plan_status)

        assert is_syndication_allowed(profile).allowed is False

    def test_paid_plan_ignored_when_not_enforced(self):
        profile = make_profile(plan=Plan.PLUS, plan_status=PlanStatus.ACTIVE)
        options = SyndicationOptions(enforce_plan=False)

        assert is_syndication_allowed(profile, options).allowed is False

    def test_lite_plan_is_not_paid(self):
        profile = make_profile(plan=Plan.LITE, plan_status=PlanStatus.ACTIVE)

        assert is_syndication_allowed(profile).allowed is False

    def test_denial_lists_requirements(self):
        decision = is_syndication_allowed(make_profile())

        assert decision.allowed is False
        assert decision.reason == DENIED_REASON
        assert decision.require.any_of == [
            "DOMAIN_VERIFIED",
            "PLATFORM_VERIFIED",
            "PAID_PLAN",
        ]
        assert decision.require.paid_plans == ["Plus", "Pro", "Business", "Enterprise"]
