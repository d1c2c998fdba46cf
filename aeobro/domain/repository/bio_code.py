"""BioCode repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from aeobro.domain.model.bio_code import BioCode
from aeobro.domain.value import BioCodeId, UserId


class BioCodeRepository(ABC):
    """Repository for BioCode entity."""

    @abstractmethod
    async def find_active(
        self, user_id: UserId, platform: str, now: datetime
    ) -> BioCode | None:
        """Find the newest unexpired code for (user, platform)."""
        pass

    @abstractmethod
    async def save(self, bio_code: BioCode) -> BioCode:
        """Save a code."""
        pass

    @abstractmethod
    async def delete(self, bio_code_id: BioCodeId) -> None:
        """Delete a code."""
        pass
