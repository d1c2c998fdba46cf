"""Unit tests for the domain verification use cases."""

from uuid import uuid4

import pytest

from aeobro.application.usecase.domain import (
    CheckDomainVerificationRequest,
    CheckDomainVerificationUseCase,
    RecheckDomainsRequest,
    RecheckDomainsUseCase,
    StartDomainVerificationRequest,
    StartDomainVerificationUseCase,
)
from aeobro.domain.repository import ProfileRepository
from aeobro.domain.service import TxtResolver
from aeobro.domain.value import UserId
from tests.factories import make_profile
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestDomainVerificationUseCases:
    """Start, check and recheck through the use case layer."""

    @pytest.mark.asyncio
    async def test_start_then_check(self, unit_env):
        """Publishing the returned record should verify the domain."""
        # Arrange
        user_id = UserId(uuid4())
        profiles = await unit_env.get(ProfileRepository)
        await profiles.save(make_profile(user_id))
        resolver = await unit_env.get(TxtResolver)
        start = await unit_env.get(StartDomainVerificationUseCase)
        check = await unit_env.get(CheckDomainVerificationUseCase)

        started = await start.execute(
            StartDomainVerificationRequest(
                user_id=str(user_id), domain="https://www.Example.com/"
            )
        )

        # Act
        before = await check.execute(
            CheckDomainVerificationRequest(user_id=str(user_id), claim_id=started.claim_id)
        )
        resolver.set_records(started.record_host, [started.record_value])
        after = await check.execute(
            CheckDomainVerificationRequest(user_id=str(user_id), claim_id=started.claim_id)
        )

        # Assert
        assert started.domain == "example.com"
        assert started.record_type == "TXT"
        assert before.ok is False
        assert before.status == "PENDING"
        assert after.ok is True
        assert after.status == "VERIFIED"
        assert after.dns_verified is True
        assert after.email_queued is False

    @pytest.mark.asyncio
    async def test_recheck_verifies_pending_claims(self, unit_env):
        user_id = UserId(uuid4())
        await (await unit_env.get(ProfileRepository)).save(make_profile(user_id))
        resolver = await unit_env.get(TxtResolver)
        start = await unit_env.get(StartDomainVerificationUseCase)
        recheck = await unit_env.get(RecheckDomainsUseCase)

        started = await start.execute(
            StartDomainVerificationRequest(user_id=str(user_id), domain="acme.io")
        )
        resolver.set_records(started.record_host, [started.record_value])

        response = await recheck.execute(RecheckDomainsRequest(limit=10))

        assert response.ok is True
        assert response.checked == 1
        assert response.verified == 1
