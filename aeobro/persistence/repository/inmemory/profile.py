"""In-memory profile repository for testing."""

from datetime import datetime
from typing import Optional

from aeobro.domain.model.profile import Profile
from aeobro.domain.repository.profile import ProfileRepository
from aeobro.domain.value import (
    Lease,
    ProfileId,
    UnpublishReason,
    UserId,
    Visibility,
)


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[ProfileId, Profile] = {}

    async def find_by_id(self, profile_id: ProfileId) -> Optional[Profile]:
        """Find profile by ID."""
        return self._profiles.get(profile_id)

    async def find_by_user_id(self, user_id: UserId) -> Optional[Profile]:
        """Find the profile owned by a user."""
        for profile in self._profiles.values():
            if profile.user_id == user_id:
                return profile
        return None

    async def find_by_slug(self, slug: str) -> Optional[Profile]:
        """Find profile by slug."""
        for profile in self._profiles.values():
            if profile.slug == slug:
                return profile
        return None

    async def save(self, profile: Profile) -> Profile:
        """Save profile (create or update)."""
        existing = self._profiles.get(profile.id)
        if existing is not None:
            profile = profile.model_copy(update={"created_at": existing.created_at})
        self._profiles[profile.id] = profile
        return profile

    async def find_retention_candidates(
        self, now: datetime, stale_before: datetime, limit: int
    ) -> list[Profile]:
        """Find lapsed profiles whose retention window has passed."""
        due = [p for p in self._profiles.values() if self._is_due(p, now, stale_before)]
        due.sort(key=lambda p: p.retention_until)
        return due[:limit]

    async def acquire_deletion_lease(
        self, profile_ids: list[ProfileId], lease: Lease
    ) -> list[ProfileId]:
        """Stamp the lease on rows still due and not leased by a live run."""
        leased = []
        for profile_id in profile_ids:
            profile = self._profiles.get(profile_id)
            if profile is None:
                continue
            if not self._is_due(profile, lease.acquired_at, lease.stale_before):
                continue
            self._profiles[profile_id] = profile.model_copy(
                update={
                    "deletion_job_locked_at": lease.acquired_at,
                    "deletion_job_lock_holder": lease.holder,
                }
            )
            leased.append(profile_id)
        return leased

    async def soft_delete_leased(
        self, profile_ids: list[ProfileId], holder: str, now: datetime
    ) -> int:
        """Soft-delete rows leased by `holder` that are not deleted yet."""
        count = 0
        for profile_id in profile_ids:
            profile = self._profiles.get(profile_id)
            if (
                profile is None
                or profile.deletion_job_lock_holder != holder
                or profile.deleted_at is not None
            ):
                continue
            self._profiles[profile_id] = profile.model_copy(
                update={
                    "visibility": Visibility.DELETED,
                    "deleted_at": now,
                    "updated_at": now,
                }
            )
            count += 1
        return count

    @staticmethod
    def _is_due(profile: Profile, now: datetime, stale_before: datetime) -> bool:
        locked_at = profile.deletion_job_locked_at
        return (
            profile.visibility == Visibility.UNPUBLISHED
            and profile.unpublish_reason == UnpublishReason.SUBSCRIPTION_LAPSED
            and profile.deleted_at is None
            and profile.retention_until is not None
            and profile.retention_until <= now
            and (locked_at is None or locked_at < stale_before)
        )
