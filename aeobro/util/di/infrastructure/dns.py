"""DNS infrastructure providers."""

from dishka import Scope, provide

from aeobro.adapter.dns import RealTxtResolver
from aeobro.config import Settings
from aeobro.domain.service import TxtResolver
from aeobro.util.di.base import ProviderBase


class DnsProvider(ProviderBase):
    """DNS component base."""

    __mock_component__ = "dns"


class ProdDnsProvider(DnsProvider):
    """Production DNS provider (system resolver with DoH fallback)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_txt_resolver(self, settings: Settings) -> TxtResolver:
        """Provide TXT resolver."""
        return RealTxtResolver(
            timeout=settings.verification.dns_timeout,
            doh_url=settings.verification.doh_url,
            doh_fallback=settings.verification.doh_fallback,
        )
