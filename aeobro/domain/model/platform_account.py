"""PlatformAccount entity.

An external account proven to belong to a user. (provider, external_id) is
unique across all users.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from aeobro.domain.model.common import DomainModel, utcnow
from aeobro.domain.value import (
    PlatformAccountId,
    PlatformAccountStatus,
    ProfileId,
    UserId,
    VerificationMethod,
)


class PlatformAccount(DomainModel):
    """Platform account entity."""

    id: PlatformAccountId
    user_id: UserId
    profile_id: Optional[ProfileId] = None
    provider: str
    external_id: str  # Provider-scoped canonical id
    handle: Optional[str] = None
    url: Optional[str] = None
    status: PlatformAccountStatus = PlatformAccountStatus.PENDING
    method: VerificationMethod
    platform_context: Optional[str] = None  # e.g. "google-youtube"
    scopes: list[str] = Field(default_factory=list)
    verified_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
