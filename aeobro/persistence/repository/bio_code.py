"""BioCode repository implementation using PostgreSQL."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from aeobro.domain.model.bio_code import BioCode
from aeobro.domain.repository.bio_code import BioCodeRepository
from aeobro.domain.value import BioCodeId, UserId
from aeobro.persistence.mappers import bio_code_to_dict, row_to_bio_code
from aeobro.persistence.tables import bio_codes_table


class PostgresBioCodeRepository(BioCodeRepository):
    """PostgreSQL implementation of BioCodeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_active(
        self, user_id: UserId, platform: str, now: datetime
    ) -> Optional[BioCode]:
        """Find the newest unexpired code for (user, platform)."""
        stmt = (
            select(bio_codes_table)
            .where(
                bio_codes_table.c.user_id == user_id,
                bio_codes_table.c.platform == platform,
                bio_codes_table.c.expires_at > now,
            )
            .order_by(bio_codes_table.c.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_bio_code(dict(row)) if row else None

    async def save(self, bio_code: BioCode) -> BioCode:
        """Insert or update a code."""
        data = bio_code_to_dict(bio_code)
        stmt = insert(bio_codes_table).values(**data)
        stmt = stmt.on_conflict_do_update(
            index_elements=[bio_codes_table.c.id],
            set_={k: stmt.excluded[k] for k in data if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return bio_code

    async def delete(self, bio_code_id: BioCodeId) -> None:
        """Delete a code."""
        stmt = delete(bio_codes_table).where(bio_codes_table.c.id == bio_code_id)
        await self.session.execute(stmt)
        await self.session.flush()
