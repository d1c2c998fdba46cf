"""Domain services."""

from .base import Service
from .change_log_service import ChangeLogService
from .dns_check_service import DnsCheckResult, DnsCheckService, TxtResolver
from .domain_verification_service import (
    DomainChallenge,
    DomainCheckOutcome,
    DomainVerificationService,
    EmailSender,
    RecheckSummary,
)
from .jwt_service import JWTService
from .platform_identity_service import PlatformIdentityService, PlatformProvider
from .platform_verification_service import (
    BioCheckOutcome,
    BioPageFetcher,
    PlatformChallenge,
    PlatformVerificationService,
    RefreshOutcome,
)
from .retention_service import RetentionService, SweepResult
from .syndication_service import (
    SyndicationDecision,
    SyndicationOptions,
    is_syndication_allowed,
)
from .token_service import TokenService
from .verification_status_service import VerificationStatusService

__all__ = [
    "BioCheckOutcome",
    "BioPageFetcher",
    "ChangeLogService",
    "DnsCheckResult",
    "DnsCheckService",
    "DomainChallenge",
    "DomainCheckOutcome",
    "DomainVerificationService",
    "EmailSender",
    "JWTService",
    "PlatformChallenge",
    "PlatformIdentityService",
    "PlatformProvider",
    "PlatformVerificationService",
    "RecheckSummary",
    "RefreshOutcome",
    "RetentionService",
    "Service",
    "SweepResult",
    "SyndicationDecision",
    "SyndicationOptions",
    "TokenService",
    "TxtResolver",
    "VerificationStatusService",
    "is_syndication_allowed",
]
