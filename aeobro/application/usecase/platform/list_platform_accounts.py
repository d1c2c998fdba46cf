"""List platform accounts use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.model.platform_account import PlatformAccount
from aeobro.domain.service import PlatformVerificationService
from aeobro.domain.value import ProfileId, UserId


class PlatformAccountResponse(BaseModel):
    """Linked platform account."""

    id: str
    provider: str
    external_id: str
    handle: str | None
    url: str | None
    status: str
    method: str
    platform_context: str | None
    verified_at: datetime | None
    created_at: datetime

    @classmethod
    def from_account(cls, account: PlatformAccount) -> "PlatformAccountResponse":
        """Build the response from a domain model."""
        return cls(
            id=str(account.id),
            provider=account.provider,
            external_id=account.external_id,
            handle=account.handle,
            url=account.url,
            status=account.status.value,
            method=account.method.value,
            platform_context=account.platform_context,
            verified_at=account.verified_at,
            created_at=account.created_at,
        )


class ListPlatformAccountsRequest(BaseModel):
    """List platform accounts request."""

    user_id: str
    profile_id: str | None = None


class ListPlatformAccountsResponse(BaseModel):
    """Accounts, newest first."""

    accounts: list[PlatformAccountResponse]


class ListPlatformAccountsUseCase(BaseUseCase):
    """Use case for listing the caller's linked accounts."""

    def __init__(
        self, platform_verification_service: PlatformVerificationService
    ) -> None:
        self.platform_verification_service = platform_verification_service

    async def execute(
        self, request: ListPlatformAccountsRequest
    ) -> ListPlatformAccountsResponse:
        """List the caller's accounts, optionally for one profile."""
        profile_id = ProfileId(UUID(request.profile_id)) if request.profile_id else None
        accounts = await self.platform_verification_service.list_accounts(
            UserId(UUID(request.user_id)), profile_id
        )
        return ListPlatformAccountsResponse(
            accounts=[PlatformAccountResponse.from_account(a) for a in accounts]
        )
