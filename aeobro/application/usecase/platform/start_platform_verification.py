"""Start platform verification use case."""

from uuid import UUID

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.service import PlatformVerificationService
from aeobro.domain.value import UserId


class StartPlatformVerificationRequest(BaseModel):
    """Start platform verification request."""

    user_id: str


class StartPlatformVerificationResponse(BaseModel):
    """Marker to paste into a public bio."""

    marker: str
    instructions: str


class StartPlatformVerificationUseCase(BaseUseCase):
    """Use case minting a fresh bio marker for the caller's profile."""

    def __init__(
        self, platform_verification_service: PlatformVerificationService
    ) -> None:
        self.platform_verification_service = platform_verification_service

    async def execute(
        self, request: StartPlatformVerificationRequest
    ) -> StartPlatformVerificationResponse:
        """Mint a marker; any earlier marker stops being accepted.

        Raises:
            NotFoundError: If the caller has no profile
        """
        challenge = await self.platform_verification_service.start(
            UserId(UUID(request.user_id))
        )
        return StartPlatformVerificationResponse(
            marker=challenge.marker, instructions=challenge.instructions
        )
