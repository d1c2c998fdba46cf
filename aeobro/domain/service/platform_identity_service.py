"""Platform identity resolution.

Each platform implements `PlatformProvider`; the service dispatches through a
registry keyed by platform name so adding a platform never touches callers.
"""

from abc import ABC, abstractmethod

import logfire

from aeobro.adapter.error import ProviderError
from aeobro.domain.value import Platform, PlatformIdentity

from .base import Service


class PlatformProvider(ABC):
    """Resolves the account behind an OAuth access token."""

    @abstractmethod
    async def resolve_identity(self, access_token: str) -> PlatformIdentity:
        """Resolve the canonical identity for a token.

        Args:
            access_token: OAuth bearer token granted by the user

        Returns:
            Canonical platform identity

        Raises:
            ProviderError: If the upstream API rejects the token or the
                account lacks the needed resource
        """
        pass


class PlatformIdentityService(Service):
    """Domain service resolving identities across platforms."""

    def __init__(self, providers: dict[Platform, PlatformProvider]) -> None:
        """Initialize platform identity service.

        Args:
            providers: Registry of providers by platform
        """
        self.providers = providers

    def supports(self, platform: Platform) -> bool:
        """Whether a provider is registered for the platform."""
        return platform in self.providers

    async def resolve_identity(
        self, platform: Platform, access_token: str
    ) -> PlatformIdentity:
        """Resolve the identity behind a token on a platform.

        Errors are not retried; a rejection usually means the wrong account
        or a missing scope.

        Args:
            platform: Platform to query
            access_token: OAuth bearer token

        Returns:
            Canonical platform identity

        Raises:
            ProviderError: If no provider is registered or resolution fails
        """
        provider = self.providers.get(platform)
        if provider is None:
            raise ProviderError(
                "UNSUPPORTED_PROVIDER",
                f"Platform '{platform.value}' cannot be verified via OAuth",
            )

        with logfire.span(
            "platform_identity_service.resolve_identity", platform=platform.value
        ):
            try:
                identity = await provider.resolve_identity(access_token)
            except ProviderError as e:
                logfire.warn(
                    "Platform identity resolution failed",
                    platform=platform.value,
                    code=e.code,
                    status=e.status,
                )
                raise

            logfire.info(
                "Platform identity resolved",
                platform=platform.value,
                external_id=identity.external_id,
                platform_context=identity.platform_context,
            )
            return identity
