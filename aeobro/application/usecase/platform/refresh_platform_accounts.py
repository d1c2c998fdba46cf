"""Refresh platform accounts use case."""

from uuid import UUID

from pydantic import BaseModel

from aeobro.application.usecase.base import BaseUseCase
from aeobro.domain.service import PlatformVerificationService
from aeobro.domain.service.provider_guard import is_provider_allowed
from aeobro.domain.value import Platform, UserId, VerificationContext


class RefreshPlatformAccountsRequest(BaseModel):
    """Access token per provider."""

    user_id: str
    tokens: dict[str, str]


class RefreshResult(BaseModel):
    """Outcome for one provider."""

    provider: str
    ok: bool
    account_id: str | None = None
    error: str | None = None
    message: str | None = None


class RefreshPlatformAccountsResponse(BaseModel):
    """Refresh platform accounts response."""

    results: list[RefreshResult]


class RefreshPlatformAccountsUseCase(BaseUseCase):
    """Use case re-running OAuth proofs for several providers."""

    def __init__(
        self, platform_verification_service: PlatformVerificationService
    ) -> None:
        self.platform_verification_service = platform_verification_service

    async def execute(
        self, request: RefreshPlatformAccountsRequest
    ) -> RefreshPlatformAccountsResponse:
        """Refresh each provider independently; unsupported ones are reported."""
        tokens: dict[Platform, str] = {}
        results: list[RefreshResult] = []
        for provider, token in request.tokens.items():
            if is_provider_allowed(provider, VerificationContext.OAUTH):
                tokens[Platform(provider.strip().lower())] = token
            else:
                results.append(
                    RefreshResult(
                        provider=provider,
                        ok=False,
                        error="UNSUPPORTED_PROVIDER",
                        message=f"Provider '{provider}' cannot be verified via OAuth",
                    )
                )

        outcomes = await self.platform_verification_service.refresh(
            UserId(UUID(request.user_id)), tokens
        )
        results.extend(
            RefreshResult(provider=provider, **outcome.model_dump())
            for provider, outcome in outcomes.items()
        )
        return RefreshPlatformAccountsResponse(results=results)
