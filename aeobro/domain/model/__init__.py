"""Domain model entities for AEOBRO."""

from aeobro.domain.model.bio_code import BioCode
from aeobro.domain.model.change_log import ChangeLogEntry
from aeobro.domain.model.domain_claim import DomainClaim
from aeobro.domain.model.platform_account import PlatformAccount
from aeobro.domain.model.profile import Profile

__all__ = [
    "BioCode",
    "ChangeLogEntry",
    "DomainClaim",
    "PlatformAccount",
    "Profile",
]
