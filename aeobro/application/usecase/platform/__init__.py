"""Platform verification use cases."""

from .check_bio_code import CheckBioCodeRequest, CheckBioCodeResponse, CheckBioCodeUseCase
from .check_platform_oauth import (
    CheckPlatformOAuthRequest,
    CheckPlatformOAuthResponse,
    CheckPlatformOAuthUseCase,
)
from .disconnect_platform_account import (
    DisconnectPlatformAccountRequest,
    DisconnectPlatformAccountResponse,
    DisconnectPlatformAccountUseCase,
)
from .generate_bio_code import (
    GenerateBioCodeRequest,
    GenerateBioCodeResponse,
    GenerateBioCodeUseCase,
)
from .list_platform_accounts import (
    ListPlatformAccountsRequest,
    ListPlatformAccountsResponse,
    ListPlatformAccountsUseCase,
    PlatformAccountResponse,
)
from .refresh_platform_accounts import (
    RefreshPlatformAccountsRequest,
    RefreshPlatformAccountsResponse,
    RefreshPlatformAccountsUseCase,
    RefreshResult,
)
from .start_platform_verification import (
    StartPlatformVerificationRequest,
    StartPlatformVerificationResponse,
    StartPlatformVerificationUseCase,
)

__all__ = [
    "CheckBioCodeRequest",
    "CheckBioCodeResponse",
    "CheckBioCodeUseCase",
    "CheckPlatformOAuthRequest",
    "CheckPlatformOAuthResponse",
    "CheckPlatformOAuthUseCase",
    "DisconnectPlatformAccountRequest",
    "DisconnectPlatformAccountResponse",
    "DisconnectPlatformAccountUseCase",
    "GenerateBioCodeRequest",
    "GenerateBioCodeResponse",
    "GenerateBioCodeUseCase",
    "ListPlatformAccountsRequest",
    "ListPlatformAccountsResponse",
    "ListPlatformAccountsUseCase",
    "PlatformAccountResponse",
    "RefreshPlatformAccountsRequest",
    "RefreshPlatformAccountsResponse",
    "RefreshPlatformAccountsUseCase",
    "RefreshResult",
    "StartPlatformVerificationRequest",
    "StartPlatformVerificationResponse",
    "StartPlatformVerificationUseCase",
]
