"""ChangeLogEntry entity - append-only audit record."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from aeobro.domain.model.common import DomainModel, utcnow
from aeobro.domain.value import (
    ChangeAction,
    ChangeEntity,
    ChangeLogId,
    ProfileId,
    UserId,
)


class ChangeLogEntry(DomainModel):
    """Audit record. Never mutated or deleted."""

    id: ChangeLogId
    user_id: UserId
    profile_id: Optional[ProfileId] = None
    entity: ChangeEntity
    entity_id: str
    action: ChangeAction
    field: Optional[str] = None
    before: Optional[Any] = None
    after: Optional[Any] = None
    created_at: datetime = Field(default_factory=utcnow)
