"""Platform account verification (OAuth and code-in-bio)."""

from abc import ABC, abstractmethod
from datetime import timedelta
from uuid import uuid4

import logfire

from aeobro.adapter.error import AdapterError, ProviderError
from aeobro.domain.error import (
    ConflictError,
    NotFoundError,
    ProviderContextError,
    ValidationError,
)
from aeobro.domain.model.bio_code import BioCode
from aeobro.domain.model.platform_account import PlatformAccount
from aeobro.domain.model.profile import Profile
from aeobro.domain.repository import (
    BioCodeRepository,
    PlatformAccountRepository,
    ProfileRepository,
)
from aeobro.domain.value import (
    BioCodeId,
    ChangeAction,
    ChangeEntity,
    Platform,
    PlatformAccountId,
    PlatformAccountStatus,
    PlatformIdentity,
    ProfileId,
    UserId,
    VerificationContext,
    VerificationMethod,
    VerifiedPlatformEntry,
    VerifyMethod,
)
from aeobro.domain.value.common import ValueObject
from aeobro.util.clock import Clock

from .base import Service
from .change_log_service import ChangeLogService
from .platform_identity_service import PlatformIdentityService
from .platform_urls import (
    HANDLE_RE,
    build_default_url,
    clean_handle,
    parse_handle_from_url,
)
from .provider_guard import assert_provider_allowed
from .token_service import TokenService
from .verification_status_service import VerificationStatusService

BIO_NOT_FOUND_MESSAGE = (
    "Code not found in public bio/about yet. Give it a minute and try again."
)

# X and Twitter are one account namespace
_CANONICAL_PROVIDERS = {Platform.X.value: Platform.TWITTER.value}


def canonical_provider(platform: str) -> str:
    """Provider name accounts are stored under."""
    key = platform.strip().lower()
    return _CANONICAL_PROVIDERS.get(key, key)


class BioPageFetcher(ABC):
    """Fetches the public text of a profile page."""

    @abstractmethod
    async def fetch_text(self, platform: str, handle: str, url: str | None) -> str:
        """Fetch bio/about text for a public profile.

        Args:
            platform: Platform name
            handle: Account handle
            url: Public profile URL, when known

        Returns:
            Page or bio text (empty when nothing could be fetched)
        """
        pass


class PlatformChallenge(ValueObject):
    """Marker instructions for code-in-bio verification."""

    marker: str
    instructions: str


class BioCheckOutcome(ValueObject):
    """Result of a code-in-bio check. `ok=False` is a soft, retryable outcome."""

    ok: bool
    account: PlatformAccount | None = None
    message: str | None = None


class RefreshOutcome(ValueObject):
    """Per-provider result of a bulk OAuth refresh."""

    ok: bool
    account_id: str | None = None
    error: str | None = None
    message: str | None = None


class PlatformVerificationService(Service):
    """Domain service managing platform account proofs."""

    def __init__(
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
        bio_code_ttl_hours: int = 24,
        bio_code_max_ttl_hours: int = 72,
    ) -> None:
        """Initialize platform verification service.

        Args:
            profile_repository: Profile repository
            platform_account_repository: Platform account repository
            bio_code_repository: Bio code repository
            identity_service: OAuth identity resolution
            bio_page_fetcher: Public bio page fetcher
            token_service: Token minting
            status_service: Profile status reconciliation
            change_log_service: Audit log service
            clock: Time source
            bio_code_ttl_hours: Default bio code lifetime
            bio_code_max_ttl_hours: Upper bound for a requested lifetime
        """
        self.profile_repository = profile_repository
        self.platform_account_repository = platform_account_repository
        self.bio_code_repository = bio_code_repository
        self.identity_service = identity_service
        self.bio_page_fetcher = bio_page_fetcher
        self.token_service = token_service
        self.status_service = status_service
        self.change_log_service = change_log_service
        self.clock = clock
        self.bio_code_ttl_hours = bio_code_ttl_hours
        self.bio_code_max_ttl_hours = bio_code_max_ttl_hours

    async def start(self, user_id: UserId) -> PlatformChallenge:
        """Mint a fresh bio marker for the user's profile.

        The new marker replaces any earlier one.

        Raises:
            NotFoundError: If the user has no profile
        """
        profile = await self._require_profile(user_id)

        with logfire.span(
            "platform_verification_service.start", user_id=str(user_id)
        ):
            marker = self.token_service.new_bio_marker()
            await self.status_service.reconcile(
                user_id,
                updates={
                    "verify_marker": marker,
                    "verify_method": VerifyMethod.PLATFORM,
                },
            )
            logfire.info(
                "Platform verification started",
                user_id=str(user_id),
                profile_id=str(profile.id),
            )
            return PlatformChallenge(
                marker=marker,
                instructions=(
                    f"Add “{marker}” to your public bio or about section, "
                    "save it, then click “Check now” in AEOBRO."
                ),
            )

    async def confirm_oauth(
        self,
        user_id: UserId,
        platform: Platform,
        access_token: str,
        scopes: list[str] | None = None,
    ) -> PlatformAccount:
        """Prove an account through the platform's API.

        Args:
            user_id: Calling user
            platform: Platform the token was granted by
            access_token: OAuth bearer token
            scopes: Scopes granted with the token

        Returns:
            The stored VERIFIED account

        Raises:
            ProviderContextError: If the platform has no OAuth proof
            ProviderError: If the platform rejects the token
            ConflictError: If the account is bound to another user
        """
        assert_provider_allowed(platform.value, VerificationContext.OAUTH)
        if not access_token:
            raise ProviderError("MISSING_TOKEN", "Missing access token")

        with logfire.span(
            "platform_verification_service.confirm_oauth",
            user_id=str(user_id),
            platform=platform.value,
        ):
            identity = await self.identity_service.resolve_identity(
                platform, access_token
            )
            return await self._bind_account(
                user_id=user_id,
                provider=canonical_provider(platform.value),
                identity=identity,
                method=VerificationMethod.OAUTH,
                scopes=scopes or [],
            )

    async def generate_bio_code(
        self,
        user_id: UserId,
        platform: str,
        ttl_hours: int | None = None,
        profile_url: str | None = None,
    ) -> BioCode:
        """Return the user's active code for a platform, minting one if needed.

        Reusing the active code keeps a code the user already pasted valid.

        Args:
            user_id: Calling user
            platform: Platform name
            ttl_hours: Requested lifetime; out-of-range values use the default
            profile_url: Optional public profile URL

        Returns:
            Active bio code

        Raises:
            ProviderContextError: If the platform has no code-in-bio proof
        """
        assert_provider_allowed(platform, VerificationContext.BIO_CODE)
        platform = platform.lower()
        now = self.clock.now()

        existing = await self.bio_code_repository.find_active(user_id, platform, now)
        if existing is not None:
            logfire.info(
                "Reusing active bio code", user_id=str(user_id), platform=platform
            )
            return existing

        ttl = self.bio_code_ttl_hours
        if ttl_hours is not None and 0 < ttl_hours <= self.bio_code_max_ttl_hours:
            ttl = ttl_hours

        bio_code = BioCode(
            id=BioCodeId(uuid4()),
            user_id=user_id,
            platform=platform,
            code=self.token_service.new_bio_code(platform),
            profile_url=profile_url,
            expires_at=now + timedelta(hours=ttl),
            created_at=now,
        )
        saved = await self.bio_code_repository.save(bio_code)
        logfire.info(
            "Bio code generated",
            user_id=str(user_id),
            platform=platform,
            ttl_hours=ttl,
        )
        return saved

    async def check_bio_code(
        self,
        user_id: UserId,
        platform: str,
        handle: str | None = None,
        profile_url: str | None = None,
    ) -> BioCheckOutcome:
        """Look for the user's active code or marker on a public profile.

        Fetch failures are soft: they read as "not found yet".

        Args:
            user_id: Calling user
            platform: Platform name
            handle: Account handle
            profile_url: Public profile URL

        Returns:
            Check outcome

        Raises:
            ProviderContextError: If the platform has no code-in-bio proof
            ValidationError: If no handle can be determined or nothing is pending
            ConflictError: If the account is bound to another user
        """
        assert_provider_allowed(platform, VerificationContext.BIO_CODE)
        platform = platform.lower()
        resolved_handle, url = await self._resolve_handle_and_url(
            user_id, platform, handle, profile_url
        )

        now = self.clock.now()
        bio_code = await self.bio_code_repository.find_active(user_id, platform, now)
        profile = await self.profile_repository.find_by_user_id(user_id)

        needles: list[str] = []
        if bio_code is not None:
            needles.append(bio_code.code)
        if profile is not None and profile.verify_marker:
            needles.append(profile.verify_marker)
        if not needles:
            raise ValidationError("No active code found. Generate one first.")

        with logfire.span(
            "platform_verification_service.check_bio_code",
            user_id=str(user_id),
            platform=platform,
            handle=resolved_handle,
        ):
            try:
                text = await self.bio_page_fetcher.fetch_text(
                    platform, resolved_handle, url
                )
            except AdapterError as e:
                logfire.warn(
                    "Bio page fetch failed, treating as not found",
                    platform=platform,
                    handle=resolved_handle,
                    error=str(e),
                )
                text = ""

            haystack = text.lower()
            matched = next((n for n in needles if n.lower() in haystack), None)
            if matched is None:
                logfire.info(
                    "Bio code not found", platform=platform, handle=resolved_handle
                )
                return BioCheckOutcome(ok=False, message=BIO_NOT_FOUND_MESSAGE)

            if bio_code is not None and matched == bio_code.code:
                await self.bio_code_repository.delete(bio_code.id)

            identity = PlatformIdentity(
                external_id=resolved_handle.lower(),
                handle=resolved_handle,
                url=url,
                platform_context=f"{platform}-bio",
            )
            account = await self._bind_account(
                user_id=user_id,
                provider=canonical_provider(platform),
                identity=identity,
                method=VerificationMethod.BIO_CODE,
                scopes=[],
            )
            return BioCheckOutcome(ok=True, account=account)

    async def list_accounts(
        self, user_id: UserId, profile_id: ProfileId | None = None
    ) -> list[PlatformAccount]:
        """List the user's linked accounts, newest first."""
        return await self.platform_account_repository.list_by_user(user_id, profile_id)

    async def disconnect(
        self, user_id: UserId, account_id: PlatformAccountId
    ) -> Profile | None:
        """Remove a linked account and re-derive the profile status.

        Args:
            user_id: Calling user
            account_id: Account to remove

        Returns:
            The reconciled profile, or None if the user has no profile

        Raises:
            NotFoundError: If the account does not exist or is not the caller's
        """
        account = await self.platform_account_repository.find_by_id(account_id)
        if account is None or account.user_id != user_id:
            raise NotFoundError("Platform account", str(account_id))

        with logfire.span(
            "platform_verification_service.disconnect",
            user_id=str(user_id),
            provider=account.provider,
        ):
            await self.platform_account_repository.delete(account_id)

            profile = await self.profile_repository.find_by_user_id(user_id)
            updates = {}
            if profile is not None and account.provider in profile.verified_platforms:
                remaining = [
                    a
                    for a in await self.platform_account_repository.list_by_user(
                        user_id
                    )
                    if a.provider == account.provider
                    and a.status == PlatformAccountStatus.VERIFIED
                ]
                platforms = dict(profile.verified_platforms)
                if remaining:
                    platforms[account.provider] = self._entry_for(remaining[0])
                else:
                    del platforms[account.provider]
                updates["verified_platforms"] = platforms

            await self.change_log_service.record(
                user_id=user_id,
                profile_id=account.profile_id,
                entity=ChangeEntity.PLATFORM_ACCOUNT,
                entity_id=str(account.id),
                action=ChangeAction.DELETE,
                before={
                    "provider": account.provider,
                    "external_id": account.external_id,
                },
            )
            logfire.info(
                "Platform account disconnected",
                user_id=str(user_id),
                provider=account.provider,
            )
            return await self.status_service.reconcile(user_id, updates=updates)

    async def refresh(
        self, user_id: UserId, tokens: dict[Platform, str]
    ) -> dict[str, RefreshOutcome]:
        """Re-run OAuth proofs for several platforms.

        A failure on one platform does not stop the others.

        Args:
            user_id: Calling user
            tokens: Access token per platform

        Returns:
            Outcome per platform name
        """
        results: dict[str, RefreshOutcome] = {}
        for platform, access_token in tokens.items():
            try:
                account = await self.confirm_oauth(user_id, platform, access_token)
                results[platform.value] = RefreshOutcome(
                    ok=True, account_id=str(account.id)
                )
            except ProviderError as e:
                results[platform.value] = RefreshOutcome(
                    ok=False, error=e.code, message=e.message
                )
            except (ConflictError, ProviderContextError) as e:
                results[platform.value] = RefreshOutcome(
                    ok=False, error=type(e).__name__, message=str(e)
                )
        return results

    async def _bind_account(
        self,
        user_id: UserId,
        provider: str,
        identity: PlatformIdentity,
        method: VerificationMethod,
        scopes: list[str],
    ) -> PlatformAccount:
        """Upsert a VERIFIED account and reconcile the owner's profile."""
        now = self.clock.now()
        profile = await self.profile_repository.find_by_user_id(user_id)
        previous = await self.platform_account_repository.find_by_provider_identity(
            provider, identity.external_id
        )
        if previous is not None and previous.user_id != user_id:
            raise ConflictError("Platform account", f"{provider}:{identity.external_id}")

        account = await self.platform_account_repository.upsert(
            PlatformAccount(
                id=PlatformAccountId(uuid4()),
                user_id=user_id,
                profile_id=profile.id if profile else None,
                provider=provider,
                external_id=identity.external_id,
                handle=identity.handle,
                url=identity.url,
                status=PlatformAccountStatus.VERIFIED,
                method=method,
                platform_context=identity.platform_context,
                scopes=scopes,
                verified_at=now,
                created_at=now,
                updated_at=now,
            )
        )

        if previous is None:
            await self.change_log_service.record(
                user_id=user_id,
                profile_id=account.profile_id,
                entity=ChangeEntity.PLATFORM_ACCOUNT,
                entity_id=str(account.id),
                action=ChangeAction.CREATE,
                after={"provider": provider, "external_id": identity.external_id},
            )

        updates: dict = {"verify_method": VerifyMethod.PLATFORM}
        if profile is not None:
            platforms = dict(profile.verified_platforms)
            platforms[provider] = self._entry_for(account)
            updates["verified_platforms"] = platforms

        await self.status_service.reconcile(
            user_id, asserted=VerifyMethod.PLATFORM, updates=updates
        )
        logfire.info(
            "Platform account verified",
            user_id=str(user_id),
            provider=provider,
            method=method.value,
        )
        return account

    async def _resolve_handle_and_url(
        self,
        user_id: UserId,
        platform: str,
        handle: str | None,
        profile_url: str | None,
    ) -> tuple[str, str | None]:
        resolved: str | None
        if profile_url:
            resolved = parse_handle_from_url(platform, profile_url)
            if resolved is None:
                raise ValidationError(
                    f"Profile URL is not a {platform} profile: {profile_url}"
                )
            if handle and clean_handle(handle).lower() != resolved.lower():
                raise ValidationError("Handle does not match the profile URL.")
        elif handle:
            resolved = clean_handle(handle)
        else:
            provider = canonical_provider(platform)
            existing = next(
                (
                    a
                    for a in await self.platform_account_repository.list_by_user(
                        user_id
                    )
                    if a.provider == provider and a.handle
                ),
                None,
            )
            resolved = (
                clean_handle(existing.handle) if existing and existing.handle else None
            )

        if not resolved:
            raise ValidationError("Provide a handle or profile URL to check.")
        if not HANDLE_RE.fullmatch(resolved):
            raise ValidationError(f"Invalid {platform} handle: {resolved}")
        # The page is always read from the platform itself, never a caller URL
        return resolved, build_default_url(platform, resolved)

    async def _require_profile(self, user_id: UserId) -> Profile:
        profile = await self.profile_repository.find_by_user_id(user_id)
        if profile is None:
            raise NotFoundError("Profile", str(user_id))
        return profile

    @staticmethod
    def _entry_for(account: PlatformAccount) -> VerifiedPlatformEntry:
        return VerifiedPlatformEntry(
            external_id=account.external_id,
            handle=account.handle,
            url=account.url,
            platform_context=account.platform_context,
            method=account.method,
            verified_at=account.verified_at or account.updated_at,
        )
