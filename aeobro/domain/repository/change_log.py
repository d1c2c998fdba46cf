"""ChangeLog repository interface."""

from abc import ABC, abstractmethod

from aeobro.domain.model.change_log import ChangeLogEntry
from aeobro.domain.value import ProfileId


class ChangeLogRepository(ABC):
    """Append-only repository for audit entries."""

    @abstractmethod
    async def append(self, entry: ChangeLogEntry) -> ChangeLogEntry:
        """Append an entry."""
        pass

    @abstractmethod
    async def list_by_profile(self, profile_id: ProfileId) -> list[ChangeLogEntry]:
        """List entries for a profile, oldest first."""
        pass
