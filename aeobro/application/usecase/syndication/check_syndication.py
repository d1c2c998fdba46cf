"""Check syndication use case."""

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.error import NotFoundError
from aeobro.domain.repository import ProfileRepository
from aeobro.domain.service import SyndicationOptions, is_syndication_allowed
from aeobro.domain.value import Visibility


class CheckSyndicationRequest(BaseModel):
    """Check syndication request."""

    slug: str


class SyndicationRequireResponse(BaseModel):
    """Conditions a denied profile could satisfy."""

    any_of: list[str]
    paid_plans: list[str]


class SyndicatedProfileResponse(BaseModel):
    """Public profile fields exposed to export surfaces."""

    slug: str
    display_name: str
    website: str | None
    verification_status: str
    verify_domain: str | None
    verified_platforms: list[str]


class CheckSyndicationResponse(BaseModel):
    """Gate decision, with the profile when allowed."""

    allowed: bool
    reason: str | None = None
    require: SyndicationRequireResponse | None = None
    profile: SyndicatedProfileResponse | None = None


class CheckSyndicationUseCase(BaseUseCase):
    """Use case asking the syndication gate about a public profile."""

    def __init__(
        self, profile_repository: ProfileRepository, options: SyndicationOptions
    ) -> None:
        self.profile_repository = profile_repository
        self.options = options

    async def execute(self, request: CheckSyndicationRequest) -> CheckSyndicationResponse:
        """Decide whether the profile may be exported.

        Raises:
            NotFoundError: If no published profile has this slug
        """
        profile = await self.profile_repository.find_by_slug(request.slug)
        if profile is None or profile.visibility != Visibility.PUBLISHED:
            raise NotFoundError("Profile", request.slug)

        decision = is_syndication_allowed(profile, self.options)
        if not decision.allowed:
            return CheckSyndicationResponse(
                allowed=False,
                reason=decision.reason,
                require=(
                    SyndicationRequireResponse(**decision.require.model_dump())
                    if decision.require
                    else None
                ),
            )

        return CheckSyndicationResponse(
            allowed=True,
            profile=SyndicatedProfileResponse(
                slug=profile.slug,
                display_name=profile.display_name,
                website=profile.website,
                verification_status=profile.verification_status.value,
                verify_domain=profile.verify_domain,
                verified_platforms=sorted(profile.verified_platforms),
            ),
        )
