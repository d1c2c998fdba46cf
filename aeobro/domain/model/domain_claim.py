"""DomainClaim entity.

A user's assertion of control over a domain. The domain string is the
natural key: one claim per domain, owned by one user at a time.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from aeobro.domain.model.common import DomainModel, utcnow
from aeobro.domain.value import ClaimStatus, DomainClaimId, DomainName, UserId


class DomainClaim(DomainModel):
    """Domain claim entity.

    Business rules:
    - txt_token rotates on every start, invalidating earlier proofs
    - Another user's start attempt is a conflict, never a takeover
    - Claims are updated in place, never hard-deleted
    """

    id: DomainClaimId
    domain: DomainName
    user_id: UserId
    txt_token: str
    dns_verified: bool = False
    status: ClaimStatus = ClaimStatus.PENDING
    email_issued: Optional[str] = None  # Address at the domain for the email step
    email_token: Optional[str] = None
    email_verified: bool = False
    verified_at: Optional[datetime] = None
    last_checked_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_proven(self) -> bool:
        """Whether this claim counts as a domain proof for its owner."""
        return self.dns_verified and self.status in (
            ClaimStatus.PARTIAL,
            ClaimStatus.VERIFIED,
        )
