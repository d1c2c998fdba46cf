"""OAuth platform verification use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.application.usecase.platform.list_platform_accounts import (
    PlatformAccountResponse,
)
from aeobro.domain.service import PlatformVerificationService
from aeobro.domain.service.provider_guard import parse_platform
from aeobro.domain.value import UserId, VerificationContext


class CheckPlatformOAuthRequest(BaseModel):
    """Token granted by the platform's OAuth consent."""

    user_id: str
    provider: str
    access_token: str
    scopes: list[str] = []


class CheckPlatformOAuthResponse(BaseModel):
    """Verified account."""

    ok: bool = True
    account: PlatformAccountResponse


class CheckPlatformOAuthUseCase(BaseUseCase):
    """Use case proving a platform account through its API."""

    def __init__(
        self, platform_verification_service: PlatformVerificationService
    ) -> None:
        self.platform_verification_service = platform_verification_service

    async def execute(
        self, request: CheckPlatformOAuthRequest
    ) -> CheckPlatformOAuthResponse:
        """Resolve the token's identity and store the account as VERIFIED.

        Raises:
            ProviderContextError: If the provider has no OAuth proof
            ProviderError: If the platform rejects the token
            ConflictError: If the account is bound to another user
        """
        platform = parse_platform(request.provider, VerificationContext.OAUTH)
        with logfire.span("check_platform_oauth.execute", provider=platform.value):
            account = await self.platform_verification_service.confirm_oauth(
                UserId(UUID(request.user_id)),
                platform,
                request.access_token,
                request.scopes,
            )
            return CheckPlatformOAuthResponse(
                account=PlatformAccountResponse.from_account(account)
            )
