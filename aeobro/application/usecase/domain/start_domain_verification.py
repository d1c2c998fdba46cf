"""Start domain verification use case."""

from uuid import UUID

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.service import DomainVerificationService
from aeobro.domain.value import UserId


class StartDomainVerificationRequest(BaseModel):
    """Start domain verification request."""

    user_id: str  # From authenticated user
    domain: str
    domain_email: str | None = None


class StartDomainVerificationResponse(BaseModel):
    """TXT record the user must publish."""

    claim_id: str
    domain: str
    record_host: str
    record_type: str
    record_value: str
    legacy_alternatives: list[str]
    instructions: str


class StartDomainVerificationUseCase(BaseUseCase):
    """Use case for starting (or restarting) domain verification."""

    def __init__(self, domain_verification_service: DomainVerificationService) -> None:
        """Initialize start domain verification use case.

        Args:
            domain_verification_service: Domain verification service
        """
        self.domain_verification_service = domain_verification_service

    async def execute(
        self, request: StartDomainVerificationRequest
    ) -> StartDomainVerificationResponse:
        """Mint a fresh token for the domain and return the record to publish.

        Raises:
            ValidationError: If the domain or email is malformed
            ConflictError: If another user owns the domain
        """
        challenge = await self.domain_verification_service.start(
            UserId(UUID(request.user_id)), request.domain, request.domain_email
        )
        return StartDomainVerificationResponse(
            claim_id=str(challenge.claim.id),
            domain=challenge.claim.domain.root,
            record_host=challenge.record_host,
            record_type=challenge.record_type,
            record_value=challenge.record_value,
            legacy_alternatives=challenge.legacy_alternatives,
            instructions=challenge.instructions,
        )
