"""Domain verification use cases."""

from .check_domain_verification import (
    CheckDomainVerificationRequest,
    CheckDomainVerificationResponse,
    CheckDomainVerificationUseCase,
)
from .confirm_domain_email import (
    ConfirmDomainEmailRequest,
    ConfirmDomainEmailResponse,
    ConfirmDomainEmailUseCase,
)
from .recheck_domains import (
    RecheckDomainsRequest,
    RecheckDomainsResponse,
    RecheckDomainsUseCase,
)
from .start_domain_verification import (
    StartDomainVerificationRequest,
    StartDomainVerificationResponse,
    StartDomainVerificationUseCase,
)

__all__ = [
    "CheckDomainVerificationRequest",
    "CheckDomainVerificationResponse",
    "CheckDomainVerificationUseCase",
    "ConfirmDomainEmailRequest",
    "ConfirmDomainEmailResponse",
    "ConfirmDomainEmailUseCase",
    "RecheckDomainsRequest",
    "RecheckDomainsResponse",
    "RecheckDomainsUseCase",
    "StartDomainVerificationRequest",
    "StartDomainVerificationResponse",
    "StartDomainVerificationUseCase",
]
