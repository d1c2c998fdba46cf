"""BioCode entity - transient code-in-bio proof artifact."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from aeobro.domain.model.common import DomainModel, utcnow
from aeobro.domain.value import BioCodeId, UserId


class BioCode(DomainModel):
    """Code a user pastes into a public bio.

    Business rules:
    - TTL bounded (default 24h, max 72h)
    - An unexpired code for the same (user, platform) is reused
    - Deleted on successful check (one-time use)
    """

    id: BioCodeId
    user_id: UserId
    platform: str
    code: str
    profile_url: Optional[str] = None
    expires_at: datetime
    status: str = "PENDING"
    created_at: datetime = Field(default_factory=utcnow)

    def is_active(self, now: datetime) -> bool:
        """Whether the code is still usable at `now`."""
        return self.expires_at > now
