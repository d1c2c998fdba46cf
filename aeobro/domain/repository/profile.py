"""Profile repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from aeobro.domain.model.profile import Profile
from aeobro.domain.value import Lease, ProfileId, UserId


class ProfileRepository(ABC):
    """Repository for Profile entity.

    Defines the contract for profile persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, profile_id: ProfileId) -> Profile | None:
        """Find a profile by ID.

        Args:
            profile_id: The profile's unique identifier

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: UserId) -> Profile | None:
        """Find the profile owned by a user.

        Args:
            user_id: Owning user

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Profile | None:
        """Find a profile by its public slug.

        Args:
            slug: Public routing key

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update).

        Args:
            profile: The profile to save

        Returns:
            The saved profile
        """
        pass

    @abstractmethod
    async def find_retention_candidates(
        self, now: datetime, stale_before: datetime, limit: int
    ) -> list[Profile]:
        """Find lapsed profiles whose retention window has passed.

        Selects UNPUBLISHED profiles unpublished for SUBSCRIPTION_LAPSED, not
        deleted, with retention_until <= now and no live deletion lease.

        Args:
            now: Current time
            stale_before: Leases acquired before this are considered abandoned
            limit: Maximum number of profiles

        Returns:
            Candidate profiles (may be empty)
        """
        pass

    @abstractmethod
    async def acquire_deletion_lease(
        self, profile_ids: list[ProfileId], lease: Lease
    ) -> list[ProfileId]:
        """Stamp a deletion lease on profiles that are not leased by a live run.

        The write is conditional: rows that stopped being retention candidates
        or hold an unexpired lease of another run are left untouched.

        Args:
            profile_ids: Profiles to lease
            lease: Lease of this run

        Returns:
            IDs actually leased by this holder
        """
        pass

    @abstractmethod
    async def soft_delete_leased(
        self, profile_ids: list[ProfileId], holder: str, now: datetime
    ) -> int:
        """Soft-delete profiles leased by `holder` that are not deleted yet.

        Args:
            profile_ids: Leased profiles
            holder: Lease holder id
            now: Deletion time

        Returns:
            Number of profiles transitioned to DELETED
        """
        pass
