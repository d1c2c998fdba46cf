"""PlatformAccount repository interface."""

from abc import ABC, abstractmethod

from aeobro.domain.model.platform_account import PlatformAccount
from aeobro.domain.value import PlatformAccountId, ProfileId, UserId


class PlatformAccountRepository(ABC):
    """Repository for PlatformAccount entity."""

    @abstractmethod
    async def find_by_id(self, account_id: PlatformAccountId) -> PlatformAccount | None:
        """Find an account by ID."""
        pass

    @abstractmethod
    async def find_by_provider_identity(
        self, provider: str, external_id: str
    ) -> PlatformAccount | None:
        """Find an account by its natural key.

        Args:
            provider: Platform name
            external_id: Provider-scoped canonical id

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_user(
        self, user_id: UserId, profile_id: ProfileId | None = None
    ) -> list[PlatformAccount]:
        """List a user's accounts, newest first.

        Args:
            user_id: Owning user
            profile_id: Optional profile filter

        Returns:
            Accounts ordered by created_at descending
        """
        pass

    @abstractmethod
    async def count_verified_by_user(self, user_id: UserId) -> int:
        """Count the user's accounts in VERIFIED status."""
        pass

    @abstractmethod
    async def upsert(self, account: PlatformAccount) -> PlatformAccount:
        """Create or update an account keyed by (provider, external_id).

        An existing row keeps its id and created_at; every other field is
        replaced.

        Args:
            account: Desired account state

        Returns:
            The stored account

        Raises:
            ConflictError: If the identity is bound to another user
        """
        pass

    @abstractmethod
    async def delete(self, account_id: PlatformAccountId) -> bool:
        """Delete an account.

        Returns:
            True if a row was deleted
        """
        pass
