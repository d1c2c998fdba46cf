"""Apply plan status use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.service import RetentionService
from aeobro.domain.value import PlanStatus, UserId


class ApplyPlanStatusRequest(BaseModel):
    """Billing transition for one user."""

    user_id: str
    plan: str | None = None
    plan_status: PlanStatus


class ApplyPlanStatusResponse(BaseModel):
    """Profile state after the transition."""

    ok: bool = True
    plan: str
    plan_status: str | None
    visibility: str
    retention_until: datetime | None


class ApplyPlanStatusUseCase(BaseUseCase):
    """Use case applying a billing status change to a profile."""

    def __init__(self, retention_service: RetentionService) -> None:
        self.retention_service = retention_service

    async def execute(self, request: ApplyPlanStatusRequest) -> ApplyPlanStatusResponse:
        """Apply the transition.

        Raises:
            NotFoundError: If the user has no profile
        """
        profile = await self.retention_service.apply_plan_status(
            UserId(UUID(request.user_id)), request.plan, request.plan_status
        )
        return ApplyPlanStatusResponse(
            plan=profile.plan.value,
            plan_status=profile.plan_status.value if profile.plan_status else None,
            visibility=profile.visibility.value,
            retention_until=profile.retention_until,
        )
