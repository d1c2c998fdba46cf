"""Mock providers for testing."""

from .bio import MockBioProvider
from .dns import MockDnsProvider
from .email import MockEmailProvider
from .persistence import MockPersistenceProvider
from .platform import MockPlatformIdentityProvider
from .container import build_test_container

__all__ = [
    "MockBioProvider",
    "MockDnsProvider",
    "MockEmailProvider",
    "MockPersistenceProvider",
    "MockPlatformIdentityProvider",
    "build_test_container",
]
