"""Scheduled domain re-check use case."""

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.service import DomainVerificationService


class RecheckDomainsRequest(BaseModel):
    """Recheck request."""

    limit: int = 200


class RecheckDomainsResponse(BaseModel):
    """Run counters."""

    ok: bool = True
    scanned: int
    checked: int
    verified: int
    skipped: int


class RecheckDomainsUseCase(BaseUseCase):
    """Use case re-running DNS checks for pending claims."""

    def __init__(self, domain_verification_service: DomainVerificationService) -> None:
        self.domain_verification_service = domain_verification_service

    async def execute(self, request: RecheckDomainsRequest) -> RecheckDomainsResponse:
        """Re-check up to `limit` pending claims."""
        summary = await self.domain_verification_service.recheck(request.limit)
        return RecheckDomainsResponse(**summary.model_dump())
