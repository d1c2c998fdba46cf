"""In-memory domain claim repository for testing."""

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from aeobro.domain.error import ConflictError
from aeobro.domain.model.domain_claim import DomainClaim
from aeobro.domain.repository.domain_claim import DomainClaimRepository
from aeobro.domain.value import ClaimStatus, DomainClaimId, DomainName, UserId


class InMemoryDomainClaimRepository(DomainClaimRepository):
    """In-memory implementation of DomainClaimRepository for testing.

    Keyed by domain, like the unique index in PostgreSQL.
    """

    def __init__(self) -> None:
        self._claims: dict[str, DomainClaim] = {}

    async def find_by_id(self, claim_id: DomainClaimId) -> Optional[DomainClaim]:
        """Find a claim by ID."""
        for claim in self._claims.values():
            if claim.id == claim_id:
                return claim
        return None

    async def find_by_domain(self, domain: DomainName) -> Optional[DomainClaim]:
        """Find the claim for a domain."""
        return self._claims.get(domain.root)

    async def find_latest_by_user(self, user_id: UserId) -> Optional[DomainClaim]:
        """Find the user's most recently updated claim."""
        claims = await self.list_by_user(user_id)
        if not claims:
            return None
        return max(claims, key=lambda c: c.updated_at)

    async def find_by_email_token(self, token: str) -> Optional[DomainClaim]:
        """Find the claim that issued an email token."""
        for claim in self._claims.values():
            if claim.email_token is not None and claim.email_token == token:
                return claim
        return None

    async def list_by_user(self, user_id: UserId) -> list[DomainClaim]:
        """List a user's claims."""
        claims = [c for c in self._claims.values() if c.user_id == user_id]
        claims.sort(key=lambda c: c.created_at)
        return claims

    async def claim(
        self,
        domain: DomainName,
        user_id: UserId,
        txt_token: str,
        email_issued: str | None,
        now: datetime,
    ) -> DomainClaim:
        """Create or refresh the caller's claim."""
        existing = self._claims.get(domain.root)
        if existing is not None and existing.user_id != user_id:
            raise ConflictError("Domain", domain.root)

        claim = DomainClaim(
            id=existing.id if existing else DomainClaimId(uuid4()),
            domain=domain,
            user_id=user_id,
            txt_token=txt_token,
            dns_verified=False,
            status=ClaimStatus.PENDING,
            email_issued=email_issued,
            email_token=None,
            email_verified=False,
            verified_at=None,
            last_checked_at=None,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self._claims[domain.root] = claim
        return claim

    async def update_if_token(
        self, claim_id: DomainClaimId, txt_token: str, values: dict[str, Any]
    ) -> Optional[DomainClaim]:
        """Update fields of a claim still carrying `txt_token`."""
        current = await self.find_by_id(claim_id)
        if current is None or current.txt_token != txt_token:
            return None
        updated = current.model_copy(update=values)
        self._claims[updated.domain.root] = updated
        return updated

    async def find_recheck_candidates(self, limit: int) -> list[DomainClaim]:
        """Find claims with an outstanding DNS proof, least recently checked first."""
        pending = [c for c in self._claims.values() if not c.dns_verified]
        pending.sort(
            key=lambda c: (
                c.last_checked_at is not None,
                c.last_checked_at or c.created_at,
                c.created_at,
            )
        )
        return pending[:limit]
