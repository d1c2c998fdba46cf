"""Retention sweep use case."""

from pydantic import BaseModel, Field

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.service import RetentionService


class SweepRetentionRequest(BaseModel):
    """Sweep request; the configured batch size applies when omitted."""

    batch_size: int | None = Field(default=None, ge=1, le=1000)


class SweepRetentionResponse(BaseModel):
    """Sweep counters."""

    ok: bool = True
    processed: int
    batch: int


class SweepRetentionUseCase(BaseUseCase):
    """Use case soft-deleting lapsed profiles past their retention window."""

    def __init__(self, retention_service: RetentionService) -> None:
        self.retention_service = retention_service

    async def execute(self, request: SweepRetentionRequest) -> SweepRetentionResponse:
        """Run one bounded sweep."""
        result = await self.retention_service.sweep(request.batch_size)
        return SweepRetentionResponse(
            ok=result.ok, processed=result.processed, batch=result.batch
        )
