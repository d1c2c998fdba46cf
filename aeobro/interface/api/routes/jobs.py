"""Scheduled job routes.

Called by the scheduler with `Authorization: Bearer <cron secret>` or
`?secret=`. With no secret configured every call is rejected.
"""

import hmac
import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Query, status
from pydantic import BaseModel, Field

from aeobro.application.usecase.domain import (
    RecheckDomainsRequest,
    RecheckDomainsResponse,
    RecheckDomainsUseCase,
)
from aeobro.application.usecase.retention import (
    ApplyPlanStatusRequest,
    ApplyPlanStatusResponse,
    ApplyPlanStatusUseCase,
    SweepRetentionRequest,
    SweepRetentionResponse,
    SweepRetentionUseCase,
)
from aeobro.config import Settings
from aeobro.domain.value import PlanStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"], route_class=DishkaRoute)


class PlanStatusAPIRequest(BaseModel):
    """Billing transition forwarded by the billing webhook."""

    user_id: str
    plan: str | None = None
    plan_status: PlanStatus


class DomainRecheckAPIRequest(BaseModel):
    """Optional batch override."""

    limit: int | None = Field(default=None, ge=1, le=1000)


def authorize_job(
    settings: Settings, authorization: str | None, secret: str | None
) -> None:
    """Check the cron secret from the bearer header or query string.

    Raises:
        HTTPException: 401 if no secret is configured or it does not match
    """
    expected = settings.retention.cron_secret
    if not expected:
        logger.warning("Job call rejected: no cron secret configured")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )

    provided = secret
    if authorization and authorization.lower().startswith("bearer "):
        provided = authorization[7:].strip()

    if not provided or not hmac.compare_digest(provided, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )


@router.api_route(
    "/profile-retention",
    methods=["GET", "POST"],
    response_model=SweepRetentionResponse,
)
async def profile_retention(
    use_case: FromDishka[SweepRetentionUseCase],
    settings: FromDishka[Settings],
    authorization: str | None = Header(default=None),
    secret: str | None = Query(default=None),
    batch_size: int | None = Query(default=None, ge=1, le=1000),
) -> SweepRetentionResponse:
    """Soft-delete lapsed profiles whose retention window has passed."""
    authorize_job(settings, authorization, secret)
    return await use_case.execute(SweepRetentionRequest(batch_size=batch_size))


@router.post("/plan-status", response_model=ApplyPlanStatusResponse)
async def plan_status(
    request: PlanStatusAPIRequest,
    use_case: FromDishka[ApplyPlanStatusUseCase],
    settings: FromDishka[Settings],
    authorization: str | None = Header(default=None),
    secret: str | None = Query(default=None),
) -> ApplyPlanStatusResponse:
    """Apply a billing status change to the user's profile."""
    authorize_job(settings, authorization, secret)
    return await use_case.execute(
        ApplyPlanStatusRequest(
            user_id=request.user_id,
            plan=request.plan,
            plan_status=request.plan_status,
        )
    )


@router.post("/domain-recheck", response_model=RecheckDomainsResponse)
async def domain_recheck(
    use_case: FromDishka[RecheckDomainsUseCase],
    settings: FromDishka[Settings],
    request: DomainRecheckAPIRequest | None = None,
    authorization: str | None = Header(default=None),
    secret: str | None = Query(default=None),
) -> RecheckDomainsResponse:
    """Re-run DNS checks for claims still waiting on their TXT record."""
    authorize_job(settings, authorization, secret)
    limit = request.limit if request and request.limit else None
    return await use_case.execute(
        RecheckDomainsRequest(limit=limit or settings.verification.recheck_batch_size)
    )
