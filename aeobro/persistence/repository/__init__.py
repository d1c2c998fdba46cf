"""PostgreSQL repository implementations."""

from aeobro.persistence.repository.bio_code import PostgresBioCodeRepository
from aeobro.persistence.repository.change_log import PostgresChangeLogRepository
from aeobro.persistence.repository.domain_claim import PostgresDomainClaimRepository
from aeobro.persistence.repository.platform_account import (
    PostgresPlatformAccountRepository,
)
from aeobro.persistence.repository.profile import PostgresProfileRepository

__all__ = [
    "PostgresBioCodeRepository",
    "PostgresChangeLogRepository",
    "PostgresDomainClaimRepository",
    "PostgresPlatformAccountRepository",
    "PostgresProfileRepository",
]
