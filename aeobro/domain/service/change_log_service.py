"""Audit log domain service."""

from typing import Any
from uuid import uuid4

import logfire

from aeobro.domain.model.change_log import ChangeLogEntry
from aeobro.domain.repository import ChangeLogRepository
from aeobro.domain.value import (
    ChangeAction,
    ChangeEntity,
    ChangeLogId,
    ProfileId,
    UserId,
)

from .base import Service


class ChangeLogService(Service):
    """Domain service appending audit entries.

    Writes are best-effort: a failing audit write is logged and never fails
    the mutation that triggered it.
    """

    def __init__(self, change_log_repository: ChangeLogRepository) -> None:
        """Initialize change log service.

        Args:
            change_log_repository: Change log repository
        """
        self.change_log_repository = change_log_repository

    async def record(
        self,
        user_id: UserId,
        profile_id: ProfileId | None,
        entity: ChangeEntity,
        entity_id: str,
        action: ChangeAction,
        field: str | None = None,
        before: Any = None,
        after: Any = None,
    ) -> ChangeLogEntry | None:
        """Append an audit entry.

        Args:
            user_id: Acting user
            profile_id: Affected profile, if any
            entity: Kind of entity changed
            entity_id: ID of the entity changed
            action: CREATE, UPDATE or DELETE
            field: Changed field name
            before: Value before the change
            after: Value after the change

        Returns:
            The stored entry, or None if the write failed
        """
        entry = ChangeLogEntry(
            id=ChangeLogId(uuid4()),
            user_id=user_id,
            profile_id=profile_id,
            entity=entity,
            entity_id=entity_id,
            action=action,
            field=field,
            before=before,
            after=after,
        )
        try:
            return await self.change_log_repository.append(entry)
        except Exception as e:
            logfire.error(
                "Change log write failed",
                entity=entity.value,
                entity_id=entity_id,
                action=action.value,
                error=str(e),
            )
            return None
