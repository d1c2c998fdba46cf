"""Mock identity providers for testing."""

from aeobro.adapter.error import ProviderError
from aeobro.domain.service.platform_identity_service import PlatformProvider
from aeobro.domain.value import PlatformIdentity


class MockPlatformProvider(PlatformProvider):
    """Deterministic provider keyed by access token.

    The external id is derived from the token, so two users presenting the
    same token resolve to the same account. Tokens starting with `bad` are
    rejected like an upstream 401.
    """

    def __init__(self, platform: str, platform_context: str | None = None) -> None:
        """Initialize mock provider.

        Args:
            platform: Platform name used in handles and URLs
            platform_context: Context reported on identities
        """
        self.platform = platform
        self.platform_context = platform_context or f"{platform}-user"

    async def resolve_identity(self, access_token: str) -> PlatformIdentity:
        """Return an identity derived from the token."""
        if not access_token:
            raise ProviderError("MISSING_TOKEN", f"Missing {self.platform} access token")
        if access_token.startswith("bad"):
            raise ProviderError(
                "UPSTREAM_ERROR",
                f"{self.platform}: request failed (401). Check granted scopes/permissions.",
                status=401,
            )

        external_id = f"{self.platform}-{access_token}"
        return PlatformIdentity(
            external_id=external_id,
            handle=f"@mock_{access_token}",
            url=f"https://{self.platform}.example.com/{external_id}",
            platform_context=self.platform_context,
            raw={"mock": True},
        )
