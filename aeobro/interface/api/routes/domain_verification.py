"""Domain (DNS TXT) verification routes."""

import logging
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from aeobro.application.usecase.domain import (
    CheckDomainVerificationRequest,
    CheckDomainVerificationResponse,
    CheckDomainVerificationUseCase,
    ConfirmDomainEmailRequest,
    ConfirmDomainEmailUseCase,
    StartDomainVerificationRequest,
    StartDomainVerificationResponse,
    StartDomainVerificationUseCase,
)
from aeobro.config import Settings
from aeobro.domain.error import NotFoundError
from aeobro.domain.service import JWTService
from aeobro.interface.api.auth import require_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/verify/domain", tags=["verification"], route_class=DishkaRoute
)


class StartDomainAPIRequest(BaseModel):
    """API request for starting domain verification."""

    domain: str = Field(min_length=1, max_length=253)
    domain_email: str | None = Field(default=None, max_length=320)


class CheckDomainAPIRequest(BaseModel):
    """API request for checking a domain claim."""

    claim_id: UUID | None = None
    domain: str | None = Field(default=None, max_length=253)


@router.post("/start", response_model=StartDomainVerificationResponse)
async def start_domain_verification(
    request: StartDomainAPIRequest,
    use_case: FromDishka[StartDomainVerificationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> StartDomainVerificationResponse:
    """Claim a domain and return the TXT record to publish.

    Requires authentication. Restarting mints a new token.
    """
    user = require_user(auth_token, jwt_service)
    return await use_case.execute(
        StartDomainVerificationRequest(
            user_id=user.user_id,
            domain=request.domain,
            domain_email=request.domain_email,
        )
    )


@router.post("/check", response_model=CheckDomainVerificationResponse)
async def check_domain_verification(
    request: CheckDomainAPIRequest,
    use_case: FromDishka[CheckDomainVerificationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CheckDomainVerificationResponse:
    """Look up the TXT record for the caller's claim.

    A record that is not published yet returns 200 with `ok: false`.
    """
    user = require_user(auth_token, jwt_service)
    return await use_case.execute(
        CheckDomainVerificationRequest(
            user_id=user.user_id,
            claim_id=str(request.claim_id) if request.claim_id else None,
            domain=request.domain,
        )
    )


@router.get("/email-click")
async def confirm_domain_email(
    use_case: FromDishka[ConfirmDomainEmailUseCase],
    settings: FromDishka[Settings],
    token: str | None = Query(default=None),
) -> RedirectResponse:
    """Complete the email step from the emailed link.

    Always redirects to the dashboard with `email=ok|invalid|missing`.
    """
    target = f"{settings.api.frontend_url}/dashboard/verification"
    if not token:
        return RedirectResponse(url=f"{target}?email=missing", status_code=302)

    try:
        await use_case.execute(ConfirmDomainEmailRequest(token=token))
    except NotFoundError:
        logger.info("Domain email link rejected")
        return RedirectResponse(url=f"{target}?email=invalid", status_code=302)

    return RedirectResponse(url=f"{target}?email=ok", status_code=302)
