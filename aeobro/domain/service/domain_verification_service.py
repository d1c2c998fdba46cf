"""Domain (DNS TXT) verification."""

from abc import ABC, abstractmethod

import logfire

from aeobro.domain.error import NotFoundError, ValidationError
from aeobro.domain.model.domain_claim import DomainClaim
from aeobro.domain.repository import DomainClaimRepository, ProfileRepository
from aeobro.domain.value import (
    ChangeAction,
    ChangeEntity,
    ClaimStatus,
    DomainClaimId,
    DomainName,
    UserId,
    VerifyMethod,
)
from aeobro.domain.value.common import ValueObject
from aeobro.util.clock import Clock

from .base import Service
from .change_log_service import ChangeLogService
from .dns_check_service import DnsCheckService, record_host
from .token_service import TokenService, dns_record_value, legacy_record_values
from .verification_status_service import VerificationStatusService

NOT_FOUND_YET_MESSAGE = (
    "TXT not found yet. It can take time to propagate. Try again shortly."
)


class EmailSender(ABC):
    """Outbound email port."""

    @abstractmethod
    async def send(self, to: str, subject: str, html: str, text: str) -> bool:
        """Send a single email.

        Returns:
            True if the delivery service accepted the message
        """
        pass


class DomainChallenge(ValueObject):
    """Instructions returned when verification starts."""

    claim: DomainClaim
    record_host: str
    record_type: str = "TXT"
    record_value: str
    legacy_alternatives: list[str]
    instructions: str


class DomainCheckOutcome(ValueObject):
    """Result of a domain check. `ok=False` is a soft, retryable outcome."""

    ok: bool
    claim: DomainClaim
    email_queued: bool = False
    message: str | None = None


class RecheckSummary(ValueObject):
    """Counters from a scheduled re-check run."""

    scanned: int = 0
    checked: int = 0
    verified: int = 0
    skipped: int = 0


class DomainVerificationService(Service):
    """Domain service driving the DNS verification lifecycle."""

    def __init__(
        self,
        domain_claim_repository: DomainClaimRepository,
        profile_repository: ProfileRepository,
        dns_check_service: DnsCheckService,
        token_service: TokenService,
        status_service: VerificationStatusService,
        change_log_service: ChangeLogService,
        email_sender: EmailSender,
        clock: Clock,
        email_link_base: str,
    ) -> None:
        """Initialize domain verification service.

        Args:
            domain_claim_repository: Domain claim repository
            profile_repository: Profile repository
            dns_check_service: TXT proof checker
            token_service: Token minting
            status_service: Profile status reconciliation
            change_log_service: Audit log service
            email_sender: Outbound email port
            clock: Time source
            email_link_base: Public API base URL for email-click links
        """
        self.domain_claim_repository = domain_claim_repository
        self.profile_repository = profile_repository
        self.dns_check_service = dns_check_service
        self.token_service = token_service
        self.status_service = status_service
        self.change_log_service = change_log_service
        self.email_sender = email_sender
        self.clock = clock
        self.email_link_base = email_link_base.rstrip("/")

    async def start(
        self, user_id: UserId, raw_domain: str, domain_email: str | None = None
    ) -> DomainChallenge:
        """Start (or restart) verification of a domain.

        Always mints a new token; any earlier token for the claim stops being
        accepted.

        Args:
            user_id: Claiming user
            raw_domain: Domain or URL entered by the user
            domain_email: Optional address at the domain for the email step

        Returns:
            Challenge with the TXT record to publish

        Raises:
            ValidationError: If the domain or email is malformed
            ConflictError: If another user owns the domain
        """
        domain = self._parse_domain(raw_domain)
        email = self._validate_domain_email(domain, domain_email)

        with logfire.span(
            "domain_verification_service.start",
            user_id=str(user_id),
            domain=domain.root,
        ):
            token = self.token_service.new_dns_token()
            claim = await self.domain_claim_repository.claim(
                domain=domain,
                user_id=user_id,
                txt_token=token,
                email_issued=email,
                now=self.clock.now(),
            )

            # A restart drops any earlier DNS proof for this claim
            await self.status_service.reconcile(
                user_id,
                updates={
                    "verify_method": VerifyMethod.DNS,
                    "verify_domain": domain.root,
                },
            )

            logfire.info(
                "Domain verification started",
                user_id=str(user_id),
                domain=domain.root,
                claim_id=str(claim.id),
            )

            value = dns_record_value(token)
            host = record_host(domain)
            return DomainChallenge(
                claim=claim,
                record_host=host,
                record_value=value,
                legacy_alternatives=legacy_record_values(token),
                instructions=(
                    f"Add a TXT record at {host} with the value {value}, "
                    "then click Check. DNS changes can take a few minutes to propagate."
                ),
            )

    async def check(
        self,
        user_id: UserId,
        claim_id: DomainClaimId | None = None,
        raw_domain: str | None = None,
    ) -> DomainCheckOutcome:
        """Check the caller's claim against DNS.

        The claim is selected by id, then by domain, then the caller's latest
        claim. A missing record is a soft failure with no state change.

        Args:
            user_id: Calling user
            claim_id: Optional claim id
            raw_domain: Optional domain

        Returns:
            Check outcome

        Raises:
            NotFoundError: If the caller has no matching claim
            ValidationError: If the domain is malformed
        """
        claim = await self._find_owned_claim(user_id, claim_id, raw_domain)

        with logfire.span(
            "domain_verification_service.check",
            user_id=str(user_id),
            domain=claim.domain.root,
        ):
            result = await self.dns_check_service.inspect_domain(
                claim.domain, claim.txt_token
            )
            if not result.verified:
                return DomainCheckOutcome(
                    ok=False, claim=claim, message=NOT_FOUND_YET_MESSAGE
                )

            applied = await self._apply_dns_proof(claim)
            if applied is None:
                # Restarted while the lookup ran; the old token no longer counts
                current = await self.domain_claim_repository.find_by_id(claim.id)
                return DomainCheckOutcome(
                    ok=False, claim=current or claim, message=NOT_FOUND_YET_MESSAGE
                )

            claim, email_queued = applied
            return DomainCheckOutcome(ok=True, claim=claim, email_queued=email_queued)

    async def confirm_email(self, token: str) -> DomainClaim:
        """Complete the email step from a clicked link.

        Args:
            token: Token from the emailed link

        Returns:
            The updated claim

        Raises:
            NotFoundError: If no claim issued this token
        """
        claim = await self.domain_claim_repository.find_by_email_token(token)
        if claim is None:
            raise NotFoundError("Email verification token", "<redacted>")

        with logfire.span(
            "domain_verification_service.confirm_email", domain=claim.domain.root
        ):
            now = self.clock.now()
            status = ClaimStatus.VERIFIED if claim.dns_verified else ClaimStatus.PARTIAL
            updated = await self.domain_claim_repository.update_if_token(
                claim.id,
                claim.txt_token,
                {
                    "email_verified": True,
                    "email_token": None,
                    "status": status,
                    "verified_at": now if status == ClaimStatus.VERIFIED else None,
                    "updated_at": now,
                },
            )
            if updated is None:
                raise NotFoundError("Email verification token", "<redacted>")
            await self._log_claim_status(claim, updated)
            await self.status_service.reconcile(
                claim.user_id,
                asserted=VerifyMethod.DNS if updated.is_proven else None,
            )
            logfire.info("Domain email confirmed", domain=claim.domain.root)
            return updated

    async def recheck(self, limit: int) -> RecheckSummary:
        """Re-run DNS checks for claims still waiting on their TXT record.

        Args:
            limit: Maximum number of claims to examine

        Returns:
            Run counters
        """
        with logfire.span("domain_verification_service.recheck", limit=limit):
            candidates = await self.domain_claim_repository.find_recheck_candidates(
                limit
            )
            summary = {"scanned": len(candidates), "checked": 0, "verified": 0, "skipped": 0}

            for claim in candidates:
                if claim.dns_verified or not claim.txt_token:
                    summary["skipped"] += 1
                    continue

                summary["checked"] += 1
                result = await self.dns_check_service.inspect_domain(
                    claim.domain, claim.txt_token
                )
                if result.verified:
                    if await self._apply_dns_proof(claim) is not None:
                        summary["verified"] += 1
                else:
                    # Rotates the batch: least recently checked claims go first
                    await self.domain_claim_repository.update_if_token(
                        claim.id, claim.txt_token, {"last_checked_at": self.clock.now()}
                    )

            logfire.info("Domain recheck completed", **summary)
            return RecheckSummary(**summary)

    async def _apply_dns_proof(
        self, claim: DomainClaim
    ) -> tuple[DomainClaim, bool] | None:
        """Persist a successful DNS proof on the claim and the owner's profile.

        Returns None when the claim was restarted after `claim` was read.
        """
        now = self.clock.now()
        email_address = None if claim.email_verified else claim.email_issued
        status = ClaimStatus.PARTIAL if email_address else ClaimStatus.VERIFIED

        email_token = claim.email_token
        email_queued = False
        if email_address and not email_token:
            email_token = await self._send_email_link(claim.domain, email_address)
            email_queued = email_token is not None

        verified_at = claim.verified_at
        if status == ClaimStatus.VERIFIED and verified_at is None:
            verified_at = now

        updated = await self.domain_claim_repository.update_if_token(
            claim.id,
            claim.txt_token,
            {
                "dns_verified": True,
                "status": status,
                "email_token": email_token,
                "verified_at": verified_at,
                "last_checked_at": now,
                "updated_at": now,
            },
        )
        if updated is None:
            logfire.info(
                "Domain DNS proof superseded by restart", domain=claim.domain.root
            )
            return None
        await self._log_claim_status(claim, updated)

        profile = await self.profile_repository.find_by_user_id(claim.user_id)
        updates = {
            "verify_method": VerifyMethod.DNS,
            "verify_domain": claim.domain.root,
            "verify_checked_at": now,
        }
        if profile is not None and not profile.website:
            updates["website"] = f"https://{claim.domain.root}"

        await self.status_service.reconcile(
            claim.user_id, asserted=VerifyMethod.DNS, updates=updates
        )
        logfire.info(
            "Domain DNS proof applied",
            domain=claim.domain.root,
            status=status.value,
            email_queued=email_queued,
        )
        return updated, email_queued

    async def _send_email_link(self, domain_name: DomainName, to: str) -> str | None:
        """Email the click-to-verify link; returns the token only if sent."""
        token = self.token_service.new_email_token()
        url = f"{self.email_link_base}/verify/domain/email-click?token={token}"
        domain = domain_name.root
        sent = await self.email_sender.send(
            to=to,
            subject=f"Verify {domain} email for AEOBRO",
            html=(
                f"<p>Click to verify your domain email for <b>{domain}</b>:</p>"
                f'<p><a href="{url}">{url}</a></p>'
            ),
            text=f"Verify your domain email for {domain}\n{url}\n",
        )
        if not sent:
            logfire.warn("Domain email link not sent", domain=domain)
            return None
        return token

    async def _log_claim_status(self, before: DomainClaim, after: DomainClaim) -> None:
        if before.status == after.status:
            return
        profile = await self.profile_repository.find_by_user_id(after.user_id)
        await self.change_log_service.record(
            user_id=after.user_id,
            profile_id=profile.id if profile else None,
            entity=ChangeEntity.DOMAIN_CLAIM,
            entity_id=str(after.id),
            action=ChangeAction.UPDATE,
            field="status",
            before=before.status.value,
            after=after.status.value,
        )

    async def _find_owned_claim(
        self,
        user_id: UserId,
        claim_id: DomainClaimId | None,
        raw_domain: str | None,
    ) -> DomainClaim:
        if claim_id is not None:
            claim = await self.domain_claim_repository.find_by_id(claim_id)
            lookup = str(claim_id)
        elif raw_domain:
            domain = self._parse_domain(raw_domain)
            claim = await self.domain_claim_repository.find_by_domain(domain)
            lookup = domain.root
        else:
            claim = await self.domain_claim_repository.find_latest_by_user(user_id)
            lookup = "latest"

        # Claims owned by someone else are reported as missing
        if claim is None or claim.user_id != user_id:
            raise NotFoundError("Domain claim", lookup)
        return claim

    @staticmethod
    def _parse_domain(raw_domain: str) -> DomainName:
        try:
            return DomainName.parse(raw_domain)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    @staticmethod
    def _validate_domain_email(
        domain: DomainName, domain_email: str | None
    ) -> str | None:
        if not domain_email:
            return None
        email = domain_email.strip().lower()
        local, _, host = email.partition("@")
        if not local or not (host == domain.root or host.endswith(f".{domain.root}")):
            raise ValidationError(
                f"Verification email must be an address at {domain.root}"
            )
        return email
