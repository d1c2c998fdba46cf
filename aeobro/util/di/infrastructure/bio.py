"""Bio page infrastructure providers."""

from dishka import Scope, provide

from aeobro.adapter.bio import HttpBioPageFetcher
from aeobro.config import Settings
from aeobro.domain.service import BioPageFetcher
from aeobro.util.di.base import ProviderBase


class BioProvider(ProviderBase):
    """Bio page component base."""

    __mock_component__ = "bio"


class ProdBioProvider(BioProvider):
    """Production bio page fetcher."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_bio_page_fetcher(self, settings: Settings) -> BioPageFetcher:
        """Provide public profile fetcher."""
        return HttpBioPageFetcher(
            timeout=settings.verification.http_timeout,
            user_agent=settings.verification.user_agent,
        )
