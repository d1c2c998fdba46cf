"""Check domain verification use case."""

from uuid import UUID

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.service import DomainVerificationService
from aeobro.domain.value import DomainClaimId, UserId


class CheckDomainVerificationRequest(BaseModel):
    """Check request. Without claim_id or domain the latest claim is used."""

    user_id: str
    claim_id: str | None = None
    domain: str | None = None


class CheckDomainVerificationResponse(BaseModel):
    """Check result. `ok=False` means "not found yet", not an error."""

    ok: bool
    claim_id: str
    domain: str
    status: str
    dns_verified: bool
    email_queued: bool
    message: str | None = None


class CheckDomainVerificationUseCase(BaseUseCase):
    """Use case for checking a domain claim against DNS."""

    def __init__(self, domain_verification_service: DomainVerificationService) -> None:
        """Initialize check domain verification use case.

        Args:
            domain_verification_service: Domain verification service
        """
        self.domain_verification_service = domain_verification_service

    async def execute(
        self, request: CheckDomainVerificationRequest
    ) -> CheckDomainVerificationResponse:
        """Run the DNS check for the caller's claim."""
        claim_id = DomainClaimId(UUID(request.claim_id)) if request.claim_id else None
        outcome = await self.domain_verification_service.check(
            UserId(UUID(request.user_id)), claim_id=claim_id, raw_domain=request.domain
        )
        return CheckDomainVerificationResponse(
            ok=outcome.ok,
            claim_id=str(outcome.claim.id),
            domain=outcome.claim.domain.root,
            status=outcome.claim.status.value,
            dns_verified=outcome.claim.dns_verified,
            email_queued=outcome.email_queued,
            message=outcome.message,
        )
