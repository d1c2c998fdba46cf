"""Syndication gate routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from aeobro.application.usecase.syndication import (
    CheckSyndicationRequest,
    CheckSyndicationResponse,
    CheckSyndicationUseCase,
)

router = APIRouter(prefix="/syndication", tags=["syndication"], route_class=DishkaRoute)


@router.get("/{slug}", response_model=CheckSyndicationResponse)
async def check_syndication(
    slug: str, use_case: FromDishka[CheckSyndicationUseCase]
) -> CheckSyndicationResponse:
    """Whether a published profile may be exported outside AEOBRO.

    Public; denials are a 200 with `allowed: false` and the requirements.
    """
    return await use_case.execute(CheckSyndicationRequest(slug=slug))
