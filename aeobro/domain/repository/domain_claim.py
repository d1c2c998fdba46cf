"""DomainClaim repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from aeobro.domain.model.domain_claim import DomainClaim
from aeobro.domain.value import DomainClaimId, DomainName, UserId


class DomainClaimRepository(ABC):
    """Repository for DomainClaim entity."""

    @abstractmethod
    async def find_by_id(self, claim_id: DomainClaimId) -> DomainClaim | None:
        """Find a claim by ID."""
        pass

    @abstractmethod
    async def find_by_domain(self, domain: DomainName) -> DomainClaim | None:
        """Find the claim for a domain.

        Args:
            domain: Normalized domain

        Returns:
            The claim if any user has claimed the domain, None otherwise
        """
        pass

    @abstractmethod
    async def find_latest_by_user(self, user_id: UserId) -> DomainClaim | None:
        """Find the most recently updated claim of a user."""
        pass

    @abstractmethod
    async def find_by_email_token(self, token: str) -> DomainClaim | None:
        """Find the claim that issued an email-proof token."""
        pass

    @abstractmethod
    async def list_by_user(self, user_id: UserId) -> list[DomainClaim]:
        """List all claims owned by a user."""
        pass

    @abstractmethod
    async def claim(
        self,
        domain: DomainName,
        user_id: UserId,
        txt_token: str,
        email_issued: str | None,
        now: datetime,
    ) -> DomainClaim:
        """Create or refresh a claim owned by `user_id` with a fresh token.

        Resets the claim to PENDING. The ownership check and the write are a
        single statement so that concurrent claims resolve to one owner.

        Args:
            domain: Normalized domain
            user_id: Claiming user
            txt_token: Newly minted token
            email_issued: Optional address for the email step
            now: Write time

        Returns:
            The refreshed claim

        Raises:
            ConflictError: If another user owns the domain
        """
        pass

    @abstractmethod
    async def update_if_token(
        self, claim_id: DomainClaimId, txt_token: str, values: dict[str, Any]
    ) -> DomainClaim | None:
        """Update some fields of a claim while it still carries `txt_token`.

        A restart rotates the token, so writes computed from a claim read
        before the restart match no row and are dropped.

        Args:
            claim_id: Claim to update
            txt_token: Token the caller read the claim with
            values: Field values to set

        Returns:
            The updated claim, or None if the token was rotated meanwhile
        """
        pass

    @abstractmethod
    async def find_recheck_candidates(self, limit: int) -> list[DomainClaim]:
        """Find claims whose DNS proof is still outstanding, oldest check first."""
        pass
