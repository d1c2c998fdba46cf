"""Platform identity infrastructure providers."""

from dishka import Scope, provide

from aeobro.adapter.platform import (
    FacebookProvider,
    GoogleYouTubeProvider,
    InstagramBusinessProvider,
    TikTokProvider,
    TwitterProvider,
)
from aeobro.config import Settings
from aeobro.domain.service import PlatformProvider
from aeobro.domain.value import Platform
from aeobro.util.di.base import ProviderBase


class PlatformIdentityProvider(ProviderBase):
    """Platform component base."""

    __mock_component__ = "platform"


class ProdPlatformIdentityProvider(PlatformIdentityProvider):
    """Production provider registry backed by the platforms' HTTP APIs."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_platform_providers(
        self, settings: Settings
    ) -> dict[Platform, PlatformProvider]:
        """Provide the provider registry keyed by platform.

        YouTube channels are resolved through the Google API, and x is the same
        API as twitter.
        """
        timeout = settings.verification.http_timeout
        user_agent = settings.verification.user_agent
        google = GoogleYouTubeProvider(timeout=timeout, user_agent=user_agent)
        twitter = TwitterProvider(timeout=timeout, user_agent=user_agent)
        return {
            Platform.GOOGLE: google,
            Platform.YOUTUBE: google,
            Platform.FACEBOOK: FacebookProvider(timeout=timeout, user_agent=user_agent),
            Platform.INSTAGRAM: InstagramBusinessProvider(
                timeout=timeout, user_agent=user_agent
            ),
            Platform.TWITTER: twitter,
            Platform.X: twitter,
            Platform.TIKTOK: TikTokProvider(timeout=timeout, user_agent=user_agent),
        }
