"""In-memory change log repository for testing."""

from aeobro.domain.model.change_log import ChangeLogEntry
from aeobro.domain.repository.change_log import ChangeLogRepository
from aeobro.domain.value import ProfileId


class InMemoryChangeLogRepository(ChangeLogRepository):
    """In-memory implementation of ChangeLogRepository for testing."""

    def __init__(self) -> None:
        self.entries: list[ChangeLogEntry] = []

    async def append(self, entry: ChangeLogEntry) -> ChangeLogEntry:
        """Append an entry."""
        self.entries.append(entry)
        return entry

    async def list_by_profile(self, profile_id: ProfileId) -> list[ChangeLogEntry]:
        """List a profile's entries, oldest first."""
        return [e for e in self.entries if e.profile_id == profile_id]
