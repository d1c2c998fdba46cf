"""Confirm domain email use case."""

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.service import DomainVerificationService


class ConfirmDomainEmailRequest(BaseModel):
    """Token from the emailed link."""

    token: str


class ConfirmDomainEmailResponse(BaseModel):
    """Confirm domain email response."""

    domain: str
    status: str


class ConfirmDomainEmailUseCase(BaseUseCase):
    """Use case completing the email step of a domain claim."""

    def __init__(self, domain_verification_service: DomainVerificationService) -> None:
        self.domain_verification_service = domain_verification_service

    async def execute(
        self, request: ConfirmDomainEmailRequest
    ) -> ConfirmDomainEmailResponse:
        """Mark the claim's email as verified.

        Raises:
            NotFoundError: If the token is unknown or already used
        """
        claim = await self.domain_verification_service.confirm_email(request.token)
        return ConfirmDomainEmailResponse(
            domain=claim.domain.root, status=claim.status.value
        )
