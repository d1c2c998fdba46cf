"""Generate bio code use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.service import PlatformVerificationService
from aeobro.domain.value import UserId


class GenerateBioCodeRequest(BaseModel):
    """Generate bio code request."""

    user_id: str
    platform: str
    ttl_hours: int | None = None
    profile_url: str | None = None


class GenerateBioCodeResponse(BaseModel):
    """Code to paste into the platform bio."""

    code: str
    platform: str
    expires_at: datetime


class GenerateBioCodeUseCase(BaseUseCase):
    """Use case returning the caller's active code for a platform."""

    def __init__(
        self, platform_verification_service: PlatformVerificationService
    ) -> None:
        self.platform_verification_service = platform_verification_service

    async def execute(self, request: GenerateBioCodeRequest) -> GenerateBioCodeResponse:
        """Reuse the active code or mint a new one.

        Raises:
            ProviderContextError: If the platform has no code-in-bio proof
        """
        bio_code = await self.platform_verification_service.generate_bio_code(
            UserId(UUID(request.user_id)),
            request.platform,
            ttl_hours=request.ttl_hours,
            profile_url=request.profile_url,
        )
        return GenerateBioCodeResponse(
            code=bio_code.code,
            platform=bio_code.platform,
            expires_at=bio_code.expires_at,
        )
