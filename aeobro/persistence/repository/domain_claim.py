"""DomainClaim repository implementation using PostgreSQL."""

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

import logfire
from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from aeobro.domain.error import ConflictError
from aeobro.domain.model.domain_claim import DomainClaim
from aeobro.domain.repository.domain_claim import DomainClaimRepository
from aeobro.domain.value import ClaimStatus, DomainClaimId, DomainName, UserId
from aeobro.persistence.mappers import row_to_domain_claim
from aeobro.persistence.tables import domain_claims_table


class PostgresDomainClaimRepository(DomainClaimRepository):
    """PostgreSQL implementation of DomainClaimRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, claim_id: DomainClaimId) -> Optional[DomainClaim]:
        """Find a claim by ID."""
        stmt = select(domain_claims_table).where(domain_claims_table.c.id == claim_id)
        return await self._one(stmt)

    async def find_by_domain(self, domain: DomainName) -> Optional[DomainClaim]:
        """Find the claim for a domain."""
        stmt = select(domain_claims_table).where(
            domain_claims_table.c.domain == domain.root
        )
        return await self._one(stmt)

    async def find_latest_by_user(self, user_id: UserId) -> Optional[DomainClaim]:
        """Find the user's most recently updated claim."""
        stmt = (
            select(domain_claims_table)
            .where(domain_claims_table.c.user_id == user_id)
            .order_by(domain_claims_table.c.updated_at.desc())
            .limit(1)
        )
        return await self._one(stmt)

    async def find_by_email_token(self, token: str) -> Optional[DomainClaim]:
        """Find the claim that issued an email token."""
        stmt = select(domain_claims_table).where(
            domain_claims_table.c.email_token == token
        )
        return await self._one(stmt)

    async def list_by_user(self, user_id: UserId) -> list[DomainClaim]:
        """List a user's claims."""
        stmt = (
            select(domain_claims_table)
            .where(domain_claims_table.c.user_id == user_id)
            .order_by(domain_claims_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_domain_claim(dict(row)) for row in result.mappings().all()]

    async def claim(
        self,
        domain: DomainName,
        user_id: UserId,
        txt_token: str,
        email_issued: str | None,
        now: datetime,
    ) -> DomainClaim:
        """Create or refresh the caller's claim in a single statement.

        The upsert only updates rows owned by the caller; when another user
        owns the domain nothing is returned.

        Raises:
            ConflictError: If another user owns the domain
        """
        with logfire.span(
            "domain_claim_repository.claim", domain=domain.root, user_id=str(user_id)
        ):
            reset = {
                "txt_token": txt_token,
                "email_issued": email_issued,
                "email_token": None,
                "email_verified": False,
                "dns_verified": False,
                "status": ClaimStatus.PENDING.value,
                "verified_at": None,
                "last_checked_at": None,
                "updated_at": now,
            }
            stmt = insert(domain_claims_table).values(
                id=uuid4(),
                domain=domain.root,
                user_id=user_id,
                created_at=now,
                **reset,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[domain_claims_table.c.domain],
                set_={k: stmt.excluded[k] for k in reset},
                where=domain_claims_table.c.user_id == stmt.excluded.user_id,
            ).returning(domain_claims_table)

            result = await self.session.execute(stmt)
            row = result.mappings().first()
            if row is None:
                logfire.warn("Domain already claimed by another user", domain=domain.root)
                raise ConflictError("Domain", domain.root)

            await self.session.flush()
            return row_to_domain_claim(dict(row))

    async def update_if_token(
        self, claim_id: DomainClaimId, txt_token: str, values: dict[str, Any]
    ) -> Optional[DomainClaim]:
        """Update fields of a claim still carrying `txt_token`."""
        data = dict(values)
        if "status" in data:
            data["status"] = ClaimStatus(data["status"]).value
        stmt = (
            update(domain_claims_table)
            .where(
                domain_claims_table.c.id == claim_id,
                domain_claims_table.c.txt_token == txt_token,
            )
            .values(**data)
            .returning(domain_claims_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row is None:
            logfire.info(
                "Domain claim token rotated, write dropped", claim_id=str(claim_id)
            )
            return None

        await self.session.flush()
        return row_to_domain_claim(dict(row))

    async def find_recheck_candidates(self, limit: int) -> list[DomainClaim]:
        """Find claims with an outstanding DNS proof, least recently checked first."""
        stmt = (
            select(domain_claims_table)
            .where(domain_claims_table.c.dns_verified.is_(False))
            .order_by(
                domain_claims_table.c.last_checked_at.asc().nulls_first(),
                domain_claims_table.c.created_at,
            )
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_domain_claim(dict(row)) for row in result.mappings().all()]

    async def _one(self, stmt) -> Optional[DomainClaim]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return row_to_domain_claim(dict(row))
