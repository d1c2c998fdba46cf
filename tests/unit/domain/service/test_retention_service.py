"""Unit tests for RetentionService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from aeobro.domain.error import NotFoundError
from aeobro.domain.service import ChangeLogService, RetentionService
from aeobro.domain.value import (
    ChangeEntity,
    Plan,
    PlanStatus,
    UnpublishReason,
    UserId,
    Visibility,
)
from aeobro.persistence.repository.inmemory import (
    InMemoryChangeLogRepository,
    InMemoryProfileRepository,
)
from tests.factories import make_profile


@pytest.fixture
def profiles():
    return InMemoryProfileRepository()


@pytest.fixture
def change_log():
    return InMemoryChangeLogRepository()


@pytest.fixture
def service(profiles, change_log, clock):
    return RetentionService(
        profile_repository=profiles,
        change_log_service=ChangeLogService(change_log),
        clock=clock,
        batch_size=10,
        lock_stale_minutes=30,
        grace_period_days=90,
    )


def lapsed_profile(clock, days_ago: int = 1, **overrides):
    """A profile whose retention window ended `days_ago` days ago."""
    fields = {
        "plan": Plan.LITE,
        "plan_status": PlanStatus.CANCELED,
        "visibility": Visibility.UNPUBLISHED,
        "unpublish_reason": UnpublishReason.SUBSCRIPTION_LAPSED,
        "unpublished_at": clock.now() - timedelta(days=90 + days_ago),
        "retention_until": clock.now() - timedelta(days=days_ago),
    }
    fields.update(overrides)
    return make_profile(**fields)


class TestApplyPlanStatus:
    """Tests for RetentionService.apply_plan_status."""

    @pytest.mark.asyncio
    async def test_cancel_unpublishes_and_starts_retention(
        self, service, profiles, change_log, clock
    ):
        profile = await profiles.save(
            make_profile(plan=Plan.PRO, plan_status=PlanStatus.ACTIVE)
        )

        updated = await service.apply_plan_status(
            profile.user_id, "pro", PlanStatus.CANCELED
        )

        assert updated.plan == Plan.LITE
        assert updated.plan_status == PlanStatus.CANCELED
        assert updated.visibility == Visibility.UNPUBLISHED
        assert updated.unpublish_reason == UnpublishReason.SUBSCRIPTION_LAPSED
        assert updated.unpublished_at == clock.now()
        assert updated.retention_until == clock.now() + timedelta(days=90)

        entry = change_log.entries[-1]
        assert entry.entity == ChangeEntity.PROFILE
        assert entry.field == "visibility"
        assert entry.before == "PUBLISHED"
        assert entry.after == "UNPUBLISHED"

    @pytest.mark.asyncio
    async def test_reactivation_republishes_lapsed_profile(self, service, profiles, clock):
        profile = await profiles.save(lapsed_profile(clock, days_ago=-10))

        updated = await service.apply_plan_status(
            profile.user_id, "business", PlanStatus.ACTIVE
        )

        assert updated.plan == Plan.BUSINESS
        assert updated.visibility == Visibility.PUBLISHED
        assert updated.unpublish_reason == UnpublishReason.NONE
        assert updated.retention_until is None
        assert updated.unpublished_at is None

    @pytest.mark.asyncio
    async def test_reactivation_keeps_user_unpublished_profile(self, service, profiles):
        profile = await profiles.save(
            make_profile(
                visibility=Visibility.UNPUBLISHED,
                unpublish_reason=UnpublishReason.USER_REQUEST,
            )
        )

        updated = await service.apply_plan_status(
            profile.user_id, "plus", PlanStatus.TRIALING
        )

        assert updated.plan == Plan.PLUS
        assert updated.visibility == Visibility.UNPUBLISHED
        assert updated.unpublish_reason == UnpublishReason.USER_REQUEST

    @pytest.mark.asyncio
    async def test_past_due_only_records_status(self, service, profiles, change_log):
        profile = await profiles.save(
            make_profile(plan=Plan.PRO, plan_status=PlanStatus.ACTIVE)
        )

        updated = await service.apply_plan_status(
            profile.user_id, "pro", PlanStatus.PAST_DUE
        )

        assert updated.plan == Plan.PRO
        assert updated.plan_status == PlanStatus.PAST_DUE
        assert updated.visibility == Visibility.PUBLISHED
        assert change_log.entries == []

    @pytest.mark.asyncio
    async def test_cancel_leaves_deleted_profile_deleted(self, service, profiles, clock):
        profile = await profiles.save(
            lapsed_profile(clock, visibility=Visibility.DELETED, deleted_at=clock.now())
        )

        updated = await service.apply_plan_status(
            profile.user_id, None, PlanStatus.CANCELED
        )

        assert updated.visibility == Visibility.DELETED

    @pytest.mark.asyncio
    async def test_unknown_plan_falls_back_to_lite(self, service, profiles):
        profile = await profiles.save(make_profile())

        updated = await service.apply_plan_status(
            profile.user_id, "gold", PlanStatus.ACTIVE
        )

        assert updated.plan == Plan.LITE

    @pytest.mark.asyncio
    async def test_missing_profile(self, service):
        with pytest.raises(NotFoundError):
            await service.apply_plan_status(UserId(uuid4()), "pro", PlanStatus.ACTIVE)


class TestSweep:
    """Tests for RetentionService.sweep."""

    @pytest.mark.asyncio
    async def test_sweep_deletes_due_profiles(self, service, profiles, clock):
        due = await profiles.save(lapsed_profile(clock, days_ago=1))
        not_yet = await profiles.save(lapsed_profile(clock, days_ago=-1))
        published = await profiles.save(make_profile())

        result = await service.sweep()

        assert result.ok is True
        assert result.processed == 1
        assert result.batch == 1

        deleted = await profiles.find_by_id(due.id)
        assert deleted.visibility == Visibility.DELETED
        assert deleted.deleted_at == clock.now()
        assert deleted.deletion_job_lock_holder.startswith("retention-")
        assert (await profiles.find_by_id(not_yet.id)).visibility == Visibility.UNPUBLISHED
        assert (await profiles.find_by_id(published.id)).visibility == Visibility.PUBLISHED

    @pytest.mark.asyncio
    async def test_second_sweep_is_a_no_op(self, service, profiles, clock):
        await profiles.save(lapsed_profile(clock))

        first = await service.sweep()
        second = await service.sweep()

        assert first.processed == 1
        assert second.processed == 0
        assert second.batch == 0

    @pytest.mark.asyncio
    async def test_batch_size_limits_run(self, service, profiles, clock):
        for days_ago in (1, 2, 3):
            await profiles.save(lapsed_profile(clock, days_ago=days_ago))

        result = await service.sweep(batch_size=2)

        assert result.batch == 2
        assert result.processed == 2
        assert (await service.sweep()).processed == 1

    @pytest.mark.asyncio
    async def test_live_lease_is_skipped(self, service, profiles, clock):
        """Rows leased by a run that is still inside its TTL are left alone."""
        profile = await profiles.save(
            lapsed_profile(
                clock,
                deletion_job_locked_at=clock.now() - timedelta(minutes=5),
                deletion_job_lock_holder="retention-other",
            )
        )

        result = await service.sweep()

        assert result.processed == 0
        stored = await profiles.find_by_id(profile.id)
        assert stored.visibility == Visibility.UNPUBLISHED
        assert stored.deletion_job_lock_holder == "retention-other"

    @pytest.mark.asyncio
    async def test_stale_lease_is_taken_over(self, service, profiles, clock):
        profile = await profiles.save(
            lapsed_profile(
                clock,
                deletion_job_locked_at=clock.now() - timedelta(minutes=31),
                deletion_job_lock_holder="retention-crashed",
            )
        )

        result = await service.sweep()

        assert result.processed == 1
        stored = await profiles.find_by_id(profile.id)
        assert stored.visibility == Visibility.DELETED
        assert stored.deletion_job_lock_holder != "retention-crashed"

    @pytest.mark.asyncio
    async def test_reactivated_profile_is_not_deleted(self, service, profiles, clock):
        profile = await profiles.save(lapsed_profile(clock))
        await service.apply_plan_status(profile.user_id, "pro", PlanStatus.ACTIVE)

        result = await service.sweep()

        assert result.processed == 0
        assert (await profiles.find_by_id(profile.id)).visibility == Visibility.PUBLISHED

    def test_new_lease(self, service, clock):
        lease = service.new_lease()

        assert lease.holder.startswith("retention-")
        assert lease.acquired_at == clock.now()
        assert lease.ttl == timedelta(minutes=30)
