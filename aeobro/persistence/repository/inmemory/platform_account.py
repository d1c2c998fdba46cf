"""In-memory platform account repository for testing."""

from typing import Optional

from aeobro.domain.error import ConflictError
from aeobro.domain.model.platform_account import PlatformAccount
from aeobro.domain.repository.platform_account import PlatformAccountRepository
from aeobro.domain.value import (
    PlatformAccountId,
    PlatformAccountStatus,
    ProfileId,
    UserId,
)


class InMemoryPlatformAccountRepository(PlatformAccountRepository):
    """In-memory implementation of PlatformAccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[PlatformAccountId, PlatformAccount] = {}

    async def find_by_id(
        self, account_id: PlatformAccountId
    ) -> Optional[PlatformAccount]:
        """Find an account by ID."""
        return self._accounts.get(account_id)

    async def find_by_provider_identity(
        self, provider: str, external_id: str
    ) -> Optional[PlatformAccount]:
        """Find an account by (provider, external_id)."""
        for account in self._accounts.values():
            if account.provider == provider and account.external_id == external_id:
                return account
        return None

    async def list_by_user(
        self, user_id: UserId, profile_id: ProfileId | None = None
    ) -> list[PlatformAccount]:
        """List a user's accounts, newest first."""
        accounts = [
            a
            for a in self._accounts.values()
            if a.user_id == user_id
            and (profile_id is None or a.profile_id == profile_id)
        ]
        accounts.sort(key=lambda a: a.created_at, reverse=True)
        return accounts

    async def count_verified_by_user(self, user_id: UserId) -> int:
        """Count the user's VERIFIED accounts."""
        return sum(
            1
            for a in self._accounts.values()
            if a.user_id == user_id and a.status == PlatformAccountStatus.VERIFIED
        )

    async def upsert(self, account: PlatformAccount) -> PlatformAccount:
        """Insert or update an account keyed by (provider, external_id)."""
        existing = await self.find_by_provider_identity(
            account.provider, account.external_id
        )
        if existing is not None:
            if existing.user_id != account.user_id:
                raise ConflictError(
                    "Platform account", f"{account.provider}:{account.external_id}"
                )
            account = account.model_copy(
                update={"id": existing.id, "created_at": existing.created_at}
            )
        self._accounts[account.id] = account
        return account

    async def delete(self, account_id: PlatformAccountId) -> bool:
        """Delete an account."""
        return self._accounts.pop(account_id, None) is not None
