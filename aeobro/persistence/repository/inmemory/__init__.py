"""In-memory repository implementations for testing."""

from .bio_code import InMemoryBioCodeRepository
from .change_log import InMemoryChangeLogRepository
from .domain_claim import InMemoryDomainClaimRepository
from .platform_account import InMemoryPlatformAccountRepository
from .profile import InMemoryProfileRepository

__all__ = [
    "InMemoryBioCodeRepository",
    "InMemoryChangeLogRepository",
    "InMemoryDomainClaimRepository",
    "InMemoryPlatformAccountRepository",
    "InMemoryProfileRepository",
]
