"""Application layer DI providers."""

from dishka import Scope, provide

from aeobro.application.usecase.domain import (
    CheckDomainVerificationUseCase,
    ConfirmDomainEmailUseCase,
    RecheckDomainsUseCase,
    StartDomainVerificationUseCase,
)
from aeobro.application.usecase.platform import (
    CheckBioCodeUseCase,
    CheckPlatformOAuthUseCase,
    DisconnectPlatformAccountUseCase,
    GenerateBioCodeUseCase,
    ListPlatformAccountsUseCase,
    RefreshPlatformAccountsUseCase,
    StartPlatformVerificationUseCase,
)
from aeobro.application.usecase.retention import (
    ApplyPlanStatusUseCase,
    SweepRetentionUseCase,
)
from aeobro.application.usecase.syndication import CheckSyndicationUseCase
from aeobro.domain.repository import ProfileRepository
from aeobro.domain.service import (
    DomainVerificationService,
    PlatformVerificationService,
    RetentionService,
    SyndicationOptions,
)
from aeobro.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Domain verification use cases
    @provide(scope=Scope.REQUEST)
    def get_start_domain_verification_use_case(
        self, domain_verification_service: DomainVerificationService
    ) -> StartDomainVerificationUseCase:
        """Provide start domain verification use case."""
        return StartDomainVerificationUseCase(
            domain_verification_service=domain_verification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_check_domain_verification_use_case(
        self, domain_verification_service: DomainVerificationService
    ) -> CheckDomainVerificationUseCase:
        """Provide check domain verification use case."""
        return CheckDomainVerificationUseCase(
            domain_verification_service=domain_verification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_confirm_domain_email_use_case(
        self, domain_verification_service: DomainVerificationService
    ) -> ConfirmDomainEmailUseCase:
        """Provide confirm domain email use case."""
        return ConfirmDomainEmailUseCase(
            domain_verification_service=domain_verification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_recheck_domains_use_case(
        self, domain_verification_service: DomainVerificationService
    ) -> RecheckDomainsUseCase:
        """Provide scheduled domain re-check use case."""
        return RecheckDomainsUseCase(
            domain_verification_service=domain_verification_service
        )

    # Platform verification use cases
    @provide(scope=Scope.REQUEST)
    def get_start_platform_verification_use_case(
        self, platform_verification_service: PlatformVerificationService
    ) -> StartPlatformVerificationUseCase:
        """Provide start platform verification use case."""
        return StartPlatformVerificationUseCase(
            platform_verification_service=platform_verification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_check_platform_oauth_use_case(
        self, platform_verification_service: PlatformVerificationService
    ) -> CheckPlatformOAuthUseCase:
        """Provide OAuth platform verification use case."""
        return CheckPlatformOAuthUseCase(
            platform_verification_service=platform_verification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_generate_bio_code_use_case(
        self, platform_verification_service: PlatformVerificationService
    ) -> GenerateBioCodeUseCase:
        """Provide generate bio code use case."""
        return GenerateBioCodeUseCase(
            platform_verification_service=platform_verification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_check_bio_code_use_case(
        self, platform_verification_service: PlatformVerificationService
    ) -> CheckBioCodeUseCase:
        """Provide check bio code use case."""
        return CheckBioCodeUseCase(
            platform_verification_service=platform_verification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_platform_accounts_use_case(
        self, platform_verification_service: PlatformVerificationService
    ) -> ListPlatformAccountsUseCase:
        """Provide list platform accounts use case."""
        return ListPlatformAccountsUseCase(
            platform_verification_service=platform_verification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_disconnect_platform_account_use_case(
        self, platform_verification_service: PlatformVerificationService
    ) -> DisconnectPlatformAccountUseCase:
        """Provide disconnect platform account use case."""
        return DisconnectPlatformAccountUseCase(
            platform_verification_service=platform_verification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_refresh_platform_accounts_use_case(
        self, platform_verification_service: PlatformVerificationService
    ) -> RefreshPlatformAccountsUseCase:
        """Provide refresh platform accounts use case."""
        return RefreshPlatformAccountsUseCase(
            platform_verification_service=platform_verification_service
        )

    # Syndication use cases
    @provide(scope=Scope.REQUEST)
    def get_check_syndication_use_case(
        self, profile_repository: ProfileRepository, options: SyndicationOptions
    ) -> CheckSyndicationUseCase:
        """Provide check syndication use case."""
        return CheckSyndicationUseCase(
            profile_repository=profile_repository, options=options
        )

    # Retention use cases
    @provide(scope=Scope.REQUEST)
    def get_sweep_retention_use_case(
        self, retention_service: RetentionService
    ) -> SweepRetentionUseCase:
        """Provide retention sweep use case."""
        return SweepRetentionUseCase(retention_service=retention_service)

    @provide(scope=Scope.REQUEST)
    def get_apply_plan_status_use_case(
        self, retention_service: RetentionService
    ) -> ApplyPlanStatusUseCase:
        """Provide billing transition use case."""
        return ApplyPlanStatusUseCase(retention_service=retention_service)
