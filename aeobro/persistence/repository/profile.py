"""Profile repository implementation using PostgreSQL."""

from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy import or_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from aeobro.domain.model.profile import Profile
from aeobro.domain.repository.profile import ProfileRepository
from aeobro.domain.value import (
    Lease,
    ProfileId,
    UnpublishReason,
    UserId,
    Visibility,
)
from aeobro.persistence.mappers import profile_to_dict, row_to_profile
from aeobro.persistence.tables import profiles_table


def _retention_due(now: datetime, stale_before: datetime):
    """Conditions selecting lapsed profiles free to be deleted."""
    c = profiles_table.c
    return (
        c.visibility == Visibility.UNPUBLISHED.value,
        c.unpublish_reason == UnpublishReason.SUBSCRIPTION_LAPSED.value,
        c.deleted_at.is_(None),
        c.retention_until <= now,
        or_(
            c.deletion_job_locked_at.is_(None),
            c.deletion_job_locked_at < stale_before,
        ),
    )


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, profile_id: ProfileId) -> Optional[Profile]:
        """Find profile by ID."""
        stmt = select(profiles_table).where(profiles_table.c.id == profile_id)
        return await self._one(stmt)

    async def find_by_user_id(self, user_id: UserId) -> Optional[Profile]:
        """Find the profile owned by a user."""
        stmt = select(profiles_table).where(profiles_table.c.user_id == user_id)
        return await self._one(stmt)

    async def find_by_slug(self, slug: str) -> Optional[Profile]:
        """Find profile by slug."""
        stmt = select(profiles_table).where(profiles_table.c.slug == slug)
        return await self._one(stmt)

    async def save(self, profile: Profile) -> Profile:
        """Insert or update a profile by ID.

        Args:
            profile: Profile to save

        Returns:
            Saved profile
        """
        data = profile_to_dict(profile)
        stmt = insert(profiles_table).values(**data)
        stmt = stmt.on_conflict_do_update(
            index_elements=[profiles_table.c.id],
            set_={k: stmt.excluded[k] for k in data if k not in ("id", "created_at")},
        ).returning(profiles_table)

        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_profile(dict(row))

    async def find_retention_candidates(
        self, now: datetime, stale_before: datetime, limit: int
    ) -> list[Profile]:
        """Find lapsed profiles whose retention window has passed."""
        stmt = (
            select(profiles_table)
            .where(*_retention_due(now, stale_before))
            .order_by(profiles_table.c.retention_until)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_profile(dict(row)) for row in result.mappings().all()]

    async def acquire_deletion_lease(
        self, profile_ids: list[ProfileId], lease: Lease
    ) -> list[ProfileId]:
        """Stamp the lease on rows that are still due and not leased by a live run.

        The conditional UPDATE makes concurrent runs split the batch instead
        of both processing it.
        """
        if not profile_ids:
            return []

        with logfire.span(
            "profile_repository.acquire_deletion_lease",
            holder=lease.holder,
            count=len(profile_ids),
        ):
            stmt = (
                update(profiles_table)
                .where(profiles_table.c.id.in_(profile_ids))
                .where(*_retention_due(lease.acquired_at, lease.stale_before))
                .values(
                    deletion_job_locked_at=lease.acquired_at,
                    deletion_job_lock_holder=lease.holder,
                )
                .returning(profiles_table.c.id)
            )
            result = await self.session.execute(stmt)
            leased = [ProfileId(row.id) for row in result.fetchall()]
            await self.session.flush()
            return leased

    async def soft_delete_leased(
        self, profile_ids: list[ProfileId], holder: str, now: datetime
    ) -> int:
        """Soft-delete rows leased by `holder` that are not deleted yet."""
        if not profile_ids:
            return 0

        stmt = (
            update(profiles_table)
            .where(profiles_table.c.id.in_(profile_ids))
            .where(profiles_table.c.deletion_job_lock_holder == holder)
            .where(profiles_table.c.deleted_at.is_(None))
            .values(
                visibility=Visibility.DELETED.value,
                deleted_at=now,
                updated_at=now,
            )
            .returning(profiles_table.c.id)
        )
        result = await self.session.execute(stmt)
        count = len(result.fetchall())
        await self.session.flush()
        return count

    async def _one(self, stmt) -> Optional[Profile]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return row_to_profile(dict(row))
