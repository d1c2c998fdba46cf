"""Check bio code use case."""

from uuid import UUID

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.application.usecase.platform.list_platform_accounts import (
    PlatformAccountResponse,
)
from aeobro.domain.service import PlatformVerificationService
from aeobro.domain.value import UserId


class CheckBioCodeRequest(BaseModel):
    """Check bio code request. The handle is derived from the URL if omitted."""

    user_id: str
    platform: str
    handle: str | None = None
    profile_url: str | None = None


class CheckBioCodeResponse(BaseModel):
    """Check result. `ok=False` means "not found yet", not an error."""

    ok: bool
    account: PlatformAccountResponse | None = None
    message: str | None = None


class CheckBioCodeUseCase(BaseUseCase):
    """Use case looking for the caller's code on a public profile."""

    def __init__(
        self, platform_verification_service: PlatformVerificationService
    ) -> None:
        self.platform_verification_service = platform_verification_service

    async def execute(self, request: CheckBioCodeRequest) -> CheckBioCodeResponse:
        """Fetch the public bio and look for the active code or marker.

        Raises:
            ProviderContextError: If the platform has no code-in-bio proof
            ValidationError: If no handle can be determined or nothing is pending
            ConflictError: If the account is bound to another user
        """
        outcome = await self.platform_verification_service.check_bio_code(
            UserId(UUID(request.user_id)),
            request.platform,
            handle=request.handle,
            profile_url=request.profile_url,
        )
        return CheckBioCodeResponse(
            ok=outcome.ok,
            account=(
                PlatformAccountResponse.from_account(outcome.account)
                if outcome.account
                else None
            ),
            message=outcome.message,
        )
