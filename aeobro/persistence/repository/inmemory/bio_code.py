"""In-memory bio code repository for testing."""

from datetime import datetime
from typing import Optional

from aeobro.domain.model.bio_code import BioCode
from aeobro.domain.repository.bio_code import BioCodeRepository
from aeobro.domain.value import BioCodeId, UserId


class InMemoryBioCodeRepository(BioCodeRepository):
    """In-memory implementation of BioCodeRepository for testing."""

    def __init__(self) -> None:
        self._codes: dict[BioCodeId, BioCode] = {}

    async def find_active(
        self, user_id: UserId, platform: str, now: datetime
    ) -> Optional[BioCode]:
        """Find the newest unexpired code for (user, platform)."""
        active = [
            c
            for c in self._codes.values()
            if c.user_id == user_id and c.platform == platform and c.is_active(now)
        ]
        if not active:
            return None
        return max(active, key=lambda c: c.created_at)

    async def save(self, bio_code: BioCode) -> BioCode:
        """Save a code."""
        self._codes[bio_code.id] = bio_code
        return bio_code

    async def delete(self, bio_code_id: BioCodeId) -> None:
        """Delete a code."""
        self._codes.pop(bio_code_id, None)
