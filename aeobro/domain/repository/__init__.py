"""Repository interfaces for AEOBRO domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from aeobro.domain.repository.bio_code import BioCodeRepository
from aeobro.domain.repository.change_log import ChangeLogRepository
from aeobro.domain.repository.domain_claim import DomainClaimRepository
from aeobro.domain.repository.platform_account import PlatformAccountRepository
from aeobro.domain.repository.profile import ProfileRepository

__all__ = [
    "BioCodeRepository",
    "ChangeLogRepository",
    "DomainClaimRepository",
    "PlatformAccountRepository",
    "ProfileRepository",
]
