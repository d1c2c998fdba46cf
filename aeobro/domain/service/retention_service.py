"""Profile lifecycle after a subscription lapses.

Billing transitions unpublish or republish a profile; a scheduled sweep
soft-deletes profiles whose retention window has passed.
"""

from datetime import timedelta
from uuid import uuid4

import logfire

from aeobro.domain.error import NotFoundError
from aeobro.domain.model.profile import Profile
from aeobro.domain.repository import ProfileRepository
from aeobro.domain.value import (
    ChangeAction,
    ChangeEntity,
    Lease,
    Plan,
    PlanStatus,
    UnpublishReason,
    UserId,
    Visibility,
    normalize_plan,
)
from aeobro.domain.value.common import ValueObject
from aeobro.util.clock import Clock

from .base import Service
from .change_log_service import ChangeLogService

ENTITLED_STATUSES = frozenset({PlanStatus.ACTIVE, PlanStatus.TRIALING})


class SweepResult(ValueObject):
    """Counters from one retention sweep."""

    ok: bool = True
    processed: int = 0
    batch: int = 0


class RetentionService(Service):
    """Domain service for subscription lapse, reactivation and retention."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        change_log_service: ChangeLogService,
        clock: Clock,
        batch_size: int = 200,
        lock_stale_minutes: int = 30,
        grace_period_days: int = 90,
    ) -> None:
        """Initialize retention service.

        Args:
            profile_repository: Profile repository
            change_log_service: Audit log service
            clock: Time source
            batch_size: Default number of profiles per sweep
            lock_stale_minutes: Lifetime of a sweep's deletion lease
            grace_period_days: Days a lapsed profile is retained
        """
        self.profile_repository = profile_repository
        self.change_log_service = change_log_service
        self.clock = clock
        self.batch_size = batch_size
        self.lease_ttl = timedelta(minutes=lock_stale_minutes)
        self.grace_period = timedelta(days=grace_period_days)

    def new_lease(self) -> Lease:
        """Create the lease for a new sweep run."""
        return Lease(
            holder=f"retention-{uuid4().hex[:12]}",
            acquired_at=self.clock.now(),
            ttl=self.lease_ttl,
        )

    async def sweep(self, batch_size: int | None = None) -> SweepResult:
        """Soft-delete one batch of lapsed profiles past their retention date.

        Safe to run concurrently or twice in a row: rows leased by a live run
        are skipped and already-deleted rows are not counted again.

        Args:
            batch_size: Override for the configured batch size

        Returns:
            Sweep counters; `processed` counts rows moved to DELETED
        """
        limit = batch_size or self.batch_size
        lease = self.new_lease()

        with logfire.span(
            "retention_service.sweep", holder=lease.holder, batch_size=limit
        ):
            candidates = await self.profile_repository.find_retention_candidates(
                now=lease.acquired_at, stale_before=lease.stale_before, limit=limit
            )
            if not candidates:
                return SweepResult(processed=0, batch=0)

            ids = [p.id for p in candidates]
            leased = await self.profile_repository.acquire_deletion_lease(ids, lease)
            if len(leased) < len(ids):
                logfire.info(
                    "Some retention candidates were taken by another run",
                    holder=lease.holder,
                    skipped=len(ids) - len(leased),
                )

            processed = 0
            if leased:
                processed = await self.profile_repository.soft_delete_leased(
                    leased, lease.holder, self.clock.now()
                )

            logfire.info(
                "Retention sweep completed",
                holder=lease.holder,
                batch=len(ids),
                processed=processed,
            )
            return SweepResult(processed=processed, batch=len(ids))

    async def apply_plan_status(
        self, user_id: UserId, plan: str | Plan | None, plan_status: PlanStatus
    ) -> Profile:
        """Apply a billing transition to the user's profile.

        - canceled: drop to LITE, unpublish as SUBSCRIPTION_LAPSED and start the
          retention window
        - past_due: record the status only
        - active/trialing: take the plan, republish a lapsed profile and clear
          its retention window

        Deleted profiles keep their visibility.

        Args:
            user_id: Profile owner
            plan: Plan name from billing
            plan_status: Billing status

        Returns:
            The updated profile

        Raises:
            NotFoundError: If the user has no profile
        """
        profile = await self.profile_repository.find_by_user_id(user_id)
        if profile is None:
            raise NotFoundError("Profile", str(user_id))

        now = self.clock.now()
        updates: dict = {"plan_status": plan_status, "updated_at": now}
        deleted = profile.visibility == Visibility.DELETED

        if plan_status == PlanStatus.CANCELED:
            updates["plan"] = Plan.LITE
            if not deleted:
                updates.update(
                    visibility=Visibility.UNPUBLISHED,
                    unpublish_reason=UnpublishReason.SUBSCRIPTION_LAPSED,
                    unpublished_at=now,
                    retention_until=now + self.grace_period,
                    deletion_job_locked_at=None,
                    deletion_job_lock_holder=None,
                )
        elif plan_status in ENTITLED_STATUSES:
            updates["plan"] = normalize_plan(plan)
            lapsed = (
                profile.visibility == Visibility.UNPUBLISHED
                and profile.unpublish_reason == UnpublishReason.SUBSCRIPTION_LAPSED
            )
            if lapsed:
                updates.update(
                    visibility=Visibility.PUBLISHED,
                    unpublish_reason=UnpublishReason.NONE,
                    unpublished_at=None,
                    retention_until=None,
                    deletion_job_locked_at=None,
                    deletion_job_lock_holder=None,
                )

        with logfire.span(
            "retention_service.apply_plan_status",
            user_id=str(user_id),
            plan_status=plan_status.value,
        ):
            updated = await self.profile_repository.save(
                profile.model_copy(update=updates)
            )
            if updated.visibility != profile.visibility:
                logfire.info(
                    "Profile visibility changed",
                    user_id=str(user_id),
                    before=profile.visibility.value,
                    after=updated.visibility.value,
                )
                await self.change_log_service.record(
                    user_id=user_id,
                    profile_id=profile.id,
                    entity=ChangeEntity.PROFILE,
                    entity_id=str(profile.id),
                    action=ChangeAction.UPDATE,
                    field="visibility",
                    before=profile.visibility.value,
                    after=updated.visibility.value,
                )
            return updated
