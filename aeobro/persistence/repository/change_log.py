"""ChangeLog repository implementation using PostgreSQL."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aeobro.domain.model.change_log import ChangeLogEntry
from aeobro.domain.repository.change_log import ChangeLogRepository
from aeobro.domain.value import ProfileId
from aeobro.persistence.mappers import (
    change_log_entry_to_dict,
    row_to_change_log_entry,
)
from aeobro.persistence.tables import change_log_table


class PostgresChangeLogRepository(ChangeLogRepository):
    """PostgreSQL implementation of ChangeLogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def append(self, entry: ChangeLogEntry) -> ChangeLogEntry:
        """Insert an entry.

        Runs in a savepoint so a failed audit write leaves the surrounding
        transaction usable.
        """
        async with self.session.begin_nested():
            await self.session.execute(
                change_log_table.insert().values(**change_log_entry_to_dict(entry))
            )
        return entry

    async def list_by_profile(self, profile_id: ProfileId) -> list[ChangeLogEntry]:
        """List a profile's entries, oldest first."""
        stmt = (
            select(change_log_table)
            .where(change_log_table.c.profile_id == profile_id)
            .order_by(change_log_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_change_log_entry(dict(row)) for row in result.mappings().all()]
