"""PlatformAccount repository implementation using PostgreSQL."""

from typing import Optional

import logfire
from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from aeobro.domain.error import ConflictError
from aeobro.domain.model.platform_account import PlatformAccount
from aeobro.domain.repository.platform_account import PlatformAccountRepository
from aeobro.domain.value import (
    PlatformAccountId,
    PlatformAccountStatus,
    ProfileId,
    UserId,
)
from aeobro.persistence.mappers import (
    platform_account_to_dict,
    row_to_platform_account,
)
from aeobro.persistence.tables import platform_accounts_table

# Columns an upsert never overwrites
_IMMUTABLE = ("id", "created_at", "provider", "external_id", "user_id")


class PostgresPlatformAccountRepository(PlatformAccountRepository):
    """PostgreSQL implementation of PlatformAccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, account_id: PlatformAccountId
    ) -> Optional[PlatformAccount]:
        """Find an account by ID."""
        stmt = select(platform_accounts_table).where(
            platform_accounts_table.c.id == account_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_platform_account(dict(row)) if row else None

    async def find_by_provider_identity(
        self, provider: str, external_id: str
    ) -> Optional[PlatformAccount]:
        """Find an account by (provider, external_id)."""
        stmt = select(platform_accounts_table).where(
            platform_accounts_table.c.provider == provider,
            platform_accounts_table.c.external_id == external_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_platform_account(dict(row)) if row else None

    async def list_by_user(
        self, user_id: UserId, profile_id: ProfileId | None = None
    ) -> list[PlatformAccount]:
        """List a user's accounts, newest first."""
        stmt = select(platform_accounts_table).where(
            platform_accounts_table.c.user_id == user_id
        )
        if profile_id is not None:
            stmt = stmt.where(platform_accounts_table.c.profile_id == profile_id)
        stmt = stmt.order_by(platform_accounts_table.c.created_at.desc())

        result = await self.session.execute(stmt)
        return [row_to_platform_account(dict(row)) for row in result.mappings().all()]

    async def count_verified_by_user(self, user_id: UserId) -> int:
        """Count the user's VERIFIED accounts."""
        stmt = (
            select(func.count())
            .select_from(platform_accounts_table)
            .where(
                platform_accounts_table.c.user_id == user_id,
                platform_accounts_table.c.status
                == PlatformAccountStatus.VERIFIED.value,
            )
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def upsert(self, account: PlatformAccount) -> PlatformAccount:
        """Insert or update an account keyed by (provider, external_id).

        Rows owned by another user are never updated.

        Raises:
            ConflictError: If the identity is bound to another user
        """
        with logfire.span(
            "platform_account_repository.upsert",
            provider=account.provider,
            user_id=str(account.user_id),
        ):
            data = platform_account_to_dict(account)
            stmt = insert(platform_accounts_table).values(**data)
            stmt = stmt.on_conflict_do_update(
                index_elements=[
                    platform_accounts_table.c.provider,
                    platform_accounts_table.c.external_id,
                ],
                set_={k: stmt.excluded[k] for k in data if k not in _IMMUTABLE},
                where=platform_accounts_table.c.user_id == stmt.excluded.user_id,
            ).returning(platform_accounts_table)

            result = await self.session.execute(stmt)
            row = result.mappings().first()
            if row is None:
                logfire.warn(
                    "Platform account bound to another user", provider=account.provider
                )
                raise ConflictError(
                    "Platform account", f"{account.provider}:{account.external_id}"
                )

            await self.session.flush()
            return row_to_platform_account(dict(row))

    async def delete(self, account_id: PlatformAccountId) -> bool:
        """Delete an account."""
        stmt = (
            delete(platform_accounts_table)
            .where(platform_accounts_table.c.id == account_id)
            .returning(platform_accounts_table.c.id)
        )
        result = await self.session.execute(stmt)
        deleted = result.first() is not None
        await self.session.flush()
        return deleted
