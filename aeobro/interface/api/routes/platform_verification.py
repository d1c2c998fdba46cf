"""Platform verification routes (OAuth and code-in-bio)."""

from typing import Annotated
from urllib.parse import urlsplit
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import AfterValidator, BaseModel, Field

from aeobro.application.usecase.platform import (
    CheckBioCodeRequest,
    CheckBioCodeResponse,
    CheckBioCodeUseCase,
    CheckPlatformOAuthRequest,
    CheckPlatformOAuthResponse,
    CheckPlatformOAuthUseCase,
    DisconnectPlatformAccountRequest,
    DisconnectPlatformAccountResponse,
    DisconnectPlatformAccountUseCase,
    GenerateBioCodeRequest,
    GenerateBioCodeResponse,
    GenerateBioCodeUseCase,
    ListPlatformAccountsRequest,
    ListPlatformAccountsResponse,
    ListPlatformAccountsUseCase,
    RefreshPlatformAccountsRequest,
    RefreshPlatformAccountsResponse,
    RefreshPlatformAccountsUseCase,
    StartPlatformVerificationRequest,
    StartPlatformVerificationResponse,
    StartPlatformVerificationUseCase,
)
from aeobro.domain.service import JWTService
from aeobro.interface.api.auth import require_user

router = APIRouter(prefix="/verify", tags=["verification"], route_class=DishkaRoute)


class CheckOAuthAPIRequest(BaseModel):
    """Token granted by the platform's OAuth consent."""

    provider: str = Field(min_length=1, max_length=32)
    access_token: str = Field(min_length=1)
    scopes: list[str] = Field(default_factory=list)


def validate_profile_url(value: str) -> str:
    """Require an absolute http(s) URL with a host."""
    try:
        parts = urlsplit(value.strip())
        host = parts.hostname
    except ValueError as e:
        raise ValueError("profile_url is not a valid URL") from e
    if parts.scheme not in ("http", "https") or not host:
        raise ValueError("profile_url must be an http(s) URL")
    return value.strip()


ProfileUrl = Annotated[
    str, Field(max_length=2048), AfterValidator(validate_profile_url)
]


class GenerateBioCodeAPIRequest(BaseModel):
    """API request for a code-in-bio code."""

    platform: str = Field(min_length=1, max_length=32)
    ttl_hours: int | None = None
    profile_url: ProfileUrl | None = None


class CheckBioCodeAPIRequest(BaseModel):
    """API request for a code-in-bio check."""

    platform: str = Field(min_length=1, max_length=32)
    handle: str | None = Field(default=None, max_length=200)
    profile_url: ProfileUrl | None = None


class RefreshAPIRequest(BaseModel):
    """Access token per provider."""

    tokens: dict[str, str] = Field(min_length=1)


@router.post("/platform/start", response_model=StartPlatformVerificationResponse)
async def start_platform_verification(
    use_case: FromDishka[StartPlatformVerificationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> StartPlatformVerificationResponse:
    """Mint a bio marker for the caller's profile."""
    user = require_user(auth_token, jwt_service)
    return await use_case.execute(
        StartPlatformVerificationRequest(user_id=user.user_id)
    )


@router.post("/platform/check", response_model=CheckPlatformOAuthResponse)
async def check_platform_oauth(
    request: CheckOAuthAPIRequest,
    use_case: FromDishka[CheckPlatformOAuthUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CheckPlatformOAuthResponse:
    """Verify a platform account from an OAuth access token.

    Upstream failures return 400 with `{code, message}`.
    """
    user = require_user(auth_token, jwt_service)
    return await use_case.execute(
        CheckPlatformOAuthRequest(
            user_id=user.user_id,
            provider=request.provider,
            access_token=request.access_token,
            scopes=request.scopes,
        )
    )


@router.post("/bio-code/generate", response_model=GenerateBioCodeResponse)
async def generate_bio_code(
    request: GenerateBioCodeAPIRequest,
    use_case: FromDishka[GenerateBioCodeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GenerateBioCodeResponse:
    """Return the caller's active code-in-bio code, minting one if needed."""
    user = require_user(auth_token, jwt_service)
    return await use_case.execute(
        GenerateBioCodeRequest(
            user_id=user.user_id,
            platform=request.platform,
            ttl_hours=request.ttl_hours,
            profile_url=request.profile_url,
        )
    )


@router.post("/bio-code/check", response_model=CheckBioCodeResponse)
async def check_bio_code(
    request: CheckBioCodeAPIRequest,
    use_case: FromDishka[CheckBioCodeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CheckBioCodeResponse:
    """Look for the caller's code on the public profile.

    A code that is not visible yet returns 200 with `ok: false`.
    """
    user = require_user(auth_token, jwt_service)
    return await use_case.execute(
        CheckBioCodeRequest(
            user_id=user.user_id,
            platform=request.platform,
            handle=request.handle,
            profile_url=request.profile_url,
        )
    )


@router.get("/platform/accounts", response_model=ListPlatformAccountsResponse)
async def list_platform_accounts(
    use_case: FromDishka[ListPlatformAccountsUseCase],
    jwt_service: FromDishka[JWTService],
    profile_id: UUID | None = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListPlatformAccountsResponse:
    """List the caller's linked platform accounts."""
    user = require_user(auth_token, jwt_service)
    return await use_case.execute(
        ListPlatformAccountsRequest(
            user_id=user.user_id,
            profile_id=str(profile_id) if profile_id else None,
        )
    )


@router.delete(
    "/platform/accounts/{account_id}",
    response_model=DisconnectPlatformAccountResponse,
)
async def disconnect_platform_account(
    account_id: UUID,
    use_case: FromDishka[DisconnectPlatformAccountUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DisconnectPlatformAccountResponse:
    """Disconnect a linked account and re-derive the profile status."""
    user = require_user(auth_token, jwt_service)
    return await use_case.execute(
        DisconnectPlatformAccountRequest(
            user_id=user.user_id, account_id=str(account_id)
        )
    )


@router.post("/platform/refresh", response_model=RefreshPlatformAccountsResponse)
async def refresh_platform_accounts(
    request: RefreshAPIRequest,
    use_case: FromDishka[RefreshPlatformAccountsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RefreshPlatformAccountsResponse:
    """Re-run OAuth proofs; each provider reports its own outcome."""
    user = require_user(auth_token, jwt_service)
    return await use_case.execute(
        RefreshPlatformAccountsRequest(user_id=user.user_id, tokens=request.tokens)
    )
