"""Disconnect platform account use case."""

from uuid import UUID

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.service import PlatformVerificationService
from aeobro.domain.value import PlatformAccountId, UserId


class DisconnectPlatformAccountRequest(BaseModel):
    """Disconnect request."""

    user_id: str
    account_id: str


class DisconnectPlatformAccountResponse(BaseModel):
    """Profile status after the account is removed."""

    ok: bool = True
    verification_status: str | None


class DisconnectPlatformAccountUseCase(BaseUseCase):
    """Use case removing a linked account."""

    def __init__(
        self, platform_verification_service: PlatformVerificationService
    ) -> None:
        self.platform_verification_service = platform_verification_service

    async def execute(
        self, request: DisconnectPlatformAccountRequest
    ) -> DisconnectPlatformAccountResponse:
        """Delete the account and re-derive the profile status.

        Raises:
            NotFoundError: If the account is missing or not the caller's
        """
        profile = await self.platform_verification_service.disconnect(
            UserId(UUID(request.user_id)),
            PlatformAccountId(UUID(request.account_id)),
        )
        return DisconnectPlatformAccountResponse(
            verification_status=profile.verification_status.value if profile else None
        )
