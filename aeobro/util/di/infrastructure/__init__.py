"""Infrastructure providers."""

# Import bases
from .bio import BioProvider
from .dns import DnsProvider
from .email import EmailProvider
from .persistence import PersistenceProvider
from .platform import PlatformIdentityProvider

# Import implementations (needed for __subclasses__())
from .bio import ProdBioProvider  # noqa: F401
from .dns import ProdDnsProvider  # noqa: F401
from .email import ProdEmailProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .platform import ProdPlatformIdentityProvider  # noqa: F401

__all__ = [
    "BioProvider",
    "DnsProvider",
    "EmailProvider",
    "PersistenceProvider",
    "PlatformIdentityProvider",
    "ProdBioProvider",
    "ProdDnsProvider",
    "ProdEmailProvider",
    "ProdPersistenceProvider",
    "ProdPlatformIdentityProvider",
]
