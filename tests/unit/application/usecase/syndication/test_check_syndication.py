"""Unit tests for CheckSyndicationUseCase."""

import pytest

from aeobro.application.usecase.syndication import (
    CheckSyndicationRequest,
    CheckSyndicationUseCase,
)
from aeobro.domain.error import NotFoundError
from aeobro.domain.repository import ProfileRepository
from aeobro.domain.value import (
    UnpublishReason,
    VerificationStatus,
    VerifiedPlatformEntry,
    VerificationMethod,
    Visibility,
)
from tests.factories import T0, make_profile
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCheckSyndicationUseCase:
    """Tests for CheckSyndicationUseCase."""

    @pytest.mark.asyncio
    async def test_allowed_profile_is_returned(self, unit_env):
        profiles = await unit_env.get(ProfileRepository)
        entry = VerifiedPlatformEntry(
            external_id="1", method=VerificationMethod.OAUTH, verified_at=T0
        )
        profile = await profiles.save(
            make_profile(
                verification_status=VerificationStatus.DOMAIN_VERIFIED,
                verify_domain="acme.io",
                website="https://acme.io",
                verified_platforms={"tiktok": entry, "github": entry},
            )
        )
        use_case = await unit_env.get(CheckSyndicationUseCase)

        response = await use_case.execute(CheckSyndicationRequest(slug=profile.slug))

        assert response.allowed is True
        assert response.reason is None
        assert response.profile.verify_domain == "acme.io"
        assert response.profile.verification_status == "DOMAIN_VERIFIED"
        assert response.profile.verified_platforms == ["github", "tiktok"]

    @pytest.mark.asyncio
    async def test_denied_profile(self, unit_env):
        profile = await (await unit_env.get(ProfileRepository)).save(make_profile())
        use_case = await unit_env.get(CheckSyndicationUseCase)

        response = await use_case.execute(CheckSyndicationRequest(slug=profile.slug))

        assert response.allowed is False
        assert response.profile is None
        assert "PAID_PLAN" in response.require.any_of

    @pytest.mark.asyncio
    async def test_unpublished_profile_is_not_found(self, unit_env):
        profile = await (await unit_env.get(ProfileRepository)).save(
            make_profile(
                verification_status=VerificationStatus.DOMAIN_VERIFIED,
                visibility=Visibility.UNPUBLISHED,
                unpublish_reason=UnpublishReason.SUBSCRIPTION_LAPSED,
            )
        )
        use_case = await unit_env.get(CheckSyndicationUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(CheckSyndicationRequest(slug=profile.slug))

    @pytest.mark.asyncio
    async def test_unknown_slug(self, unit_env):
        use_case = await unit_env.get(CheckSyndicationUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(CheckSyndicationRequest(slug="nobody"))
