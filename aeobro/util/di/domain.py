"""Domain layer DI providers."""

from dishka import Scope, provide

from aeobro.config import AuthSettings, Settings
from aeobro.domain.repository import (
    BioCodeRepository,
    ChangeLogRepository,
    DomainClaimRepository,
    PlatformAccountRepository,
    ProfileRepository,
)
from aeobro.domain.service import (
    BioPageFetcher,
    ChangeLogService,
    DnsCheckService,
    DomainVerificationService,
    EmailSender,
    JWTService,
    PlatformIdentityService,
    PlatformProvider,
    PlatformVerificationService,
    RetentionService,
    SyndicationOptions,
    TokenService,
    TxtResolver,
    VerificationStatusService,
)
from aeobro.domain.value import Platform
from aeobro.util.clock import Clock
from aeobro.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_token_service(self, settings: Settings) -> TokenService:
        """Provide token minting service."""
        return TokenService(token_bits=settings.verification.token_bits)

    @provide
    def get_dns_check_service(self, resolver: TxtResolver) -> DnsCheckService:
        """Provide TXT proof checker."""
        return DnsCheckService(resolver=resolver)

    @provide
    def get_platform_identity_service(
        self, providers: dict[Platform, PlatformProvider]
    ) -> PlatformIdentityService:
        """Provide platform identity resolver."""
        return PlatformIdentityService(providers=providers)

    @provide
    def get_change_log_service(
        self, change_log_repository: ChangeLogRepository
    ) -> ChangeLogService:
        """Provide audit log service."""
        return ChangeLogService(change_log_repository=change_log_repository)

    @provide
    def get_verification_status_service(
        self,
        profile_repository: ProfileRepository,
        domain_claim_repository: DomainClaimRepository,
        platform_account_repository: PlatformAccountRepository,
        change_log_service: ChangeLogService,
        clock: Clock,
    ) -> VerificationStatusService:
        """Provide profile status reconciliation service."""
        return VerificationStatusService(
            profile_repository=profile_repository,
            domain_claim_repository=domain_claim_repository,
            platform_account_repository=platform_account_repository,
            change_log_service=change_log_service,
            clock=clock,
        )

    @provide
    def get_domain_verification_service(
        self,
        domain_claim_repository: DomainClaimRepository,
        profile_repository: ProfileRepository,
        dns_check_service: DnsCheckService,
        token_service: TokenService,
        status_service: VerificationStatusService,
        change_log_service: ChangeLogService,
        email_sender: EmailSender,
        clock: Clock,
        settings: Settings,
    ) -> DomainVerificationService:
        """Provide domain verification service."""
        return DomainVerificationService(
            domain_claim_repository=domain_claim_repository,
            profile_repository=profile_repository,
            dns_check_service=dns_check_service,
            token_service=token_service,
            status_service=status_service,
            change_log_service=change_log_service,
            email_sender=email_sender,
            clock=clock,
            email_link_base=settings.api.base_url,
        )

    @provide
    def get_platform_verification_service(
        self,
        profile_repository: ProfileRepository,
        platform_account_repository: PlatformAccountRepository,
        bio_code_repository: BioCodeRepository,
        identity_service: PlatformIdentityService,
        bio_page_fetcher: BioPageFetcher,
        token_service: TokenService,
        status_service: VerificationStatusService,
        change_log_service: ChangeLogService,
        clock: Clock,
        settings: Settings,
    ) -> PlatformVerificationService:
        """Provide platform verification service."""
        return PlatformVerificationService(
            profile_repository=profile_repository,
            platform_account_repository=platform_account_repository,
            bio_code_repository=bio_code_repository,
            identity_service=identity_service,
            bio_page_fetcher=bio_page_fetcher,
            token_service=token_service,
            status_service=status_service,
            change_log_service=change_log_service,
            clock=clock,
            bio_code_ttl_hours=settings.verification.bio_code_ttl_hours,
            bio_code_max_ttl_hours=settings.verification.bio_code_max_ttl_hours,
        )

    @provide
    def get_retention_service(
        self,
        profile_repository: ProfileRepository,
        change_log_service: ChangeLogService,
        clock: Clock,
        settings: Settings,
    ) -> RetentionService:
        """Provide retention job service."""
        return RetentionService(
            profile_repository=profile_repository,
            change_log_service=change_log_service,
            clock=clock,
            batch_size=settings.retention.batch_size,
            lock_stale_minutes=settings.retention.lock_stale_minutes,
            grace_period_days=settings.retention.grace_period_days,
        )

    @provide(scope=Scope.APP)
    def get_syndication_options(self, settings: Settings) -> SyndicationOptions:
        """Provide syndication gate switches."""
        return SyndicationOptions(
            enforce_plan=settings.syndication.enforce_plan,
            allow_platform_verified=settings.syndication.allow_platform_verified,
        )
