"""Profile verification status reconciliation.

`verification_status` on a profile is a cache. The proofs are domain claims
and platform accounts; every mutating verification step ends by calling
`VerificationStatusService.reconcile`, the only writer of the status.
"""

from typing import Any

import logfire

from aeobro.domain.model.profile import Profile
from aeobro.domain.repository import (
    DomainClaimRepository,
    PlatformAccountRepository,
    ProfileRepository,
)
from aeobro.domain.value import (
    ChangeAction,
    ChangeEntity,
    UserId,
    VerificationStatus,
    VerifyMethod,
)
from aeobro.util.clock import Clock

from .base import Service
from .change_log_service import ChangeLogService


def recompute_status(
    has_verified_domain: bool, verified_platform_count: int
) -> VerificationStatus:
    """Derive the profile status from the proofs currently held.

    A proven domain takes precedence over platform accounts.

    Args:
        has_verified_domain: Whether the owner holds a proven domain claim
        verified_platform_count: Number of the owner's VERIFIED accounts

    Returns:
        Derived verification status
    """
    if has_verified_domain:
        return VerificationStatus.DOMAIN_VERIFIED
    if verified_platform_count > 0:
        return VerificationStatus.PLATFORM_VERIFIED
    return VerificationStatus.UNVERIFIED


class VerificationStatusService(Service):
    """Domain service owning the profile verification status."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        domain_claim_repository: DomainClaimRepository,
        platform_account_repository: PlatformAccountRepository,
        change_log_service: ChangeLogService,
        clock: Clock,
    ) -> None:
        """Initialize verification status service.

        Args:
            profile_repository: Profile repository
            domain_claim_repository: Domain claim repository
            platform_account_repository: Platform account repository
            change_log_service: Audit log service
            clock: Time source
        """
        self.profile_repository = profile_repository
        self.domain_claim_repository = domain_claim_repository
        self.platform_account_repository = platform_account_repository
        self.change_log_service = change_log_service
        self.clock = clock

    async def derive_status(self, user_id: UserId) -> VerificationStatus:
        """Compute the status a user's profile should have from stored proofs."""
        claims = await self.domain_claim_repository.list_by_user(user_id)
        has_domain = any(claim.is_proven for claim in claims)
        platform_count = await self.platform_account_repository.count_verified_by_user(
            user_id
        )
        return recompute_status(has_domain, platform_count)

    async def reconcile(
        self,
        user_id: UserId,
        asserted: VerifyMethod | None = None,
        updates: dict[str, Any] | None = None,
    ) -> Profile | None:
        """Recompute and persist the profile status in one write.

        Args:
            user_id: Profile owner
            asserted: Modality just proven, used to stamp its timestamp
            updates: Extra profile fields to write alongside the status

        Returns:
            The updated profile, or None if the user has no profile
        """
        with logfire.span(
            "verification_status_service.reconcile",
            user_id=str(user_id),
            asserted=asserted.value if asserted else None,
        ):
            profile = await self.profile_repository.find_by_user_id(user_id)
            if profile is None:
                logfire.warn("No profile to reconcile", user_id=str(user_id))
                return None

            new_status = await self.derive_status(user_id)
            now = self.clock.now()
            changes: dict[str, Any] = dict(updates or {})
            status_changed = new_status != profile.verification_status

            if status_changed:
                changes["verification_status"] = new_status
            if asserted == VerifyMethod.DNS and (
                status_changed or profile.domain_verified_at is None
            ):
                if new_status == VerificationStatus.DOMAIN_VERIFIED:
                    changes["domain_verified_at"] = now
            if asserted == VerifyMethod.PLATFORM and (
                status_changed or profile.platform_verified_at is None
            ):
                changes["platform_verified_at"] = now

            if not changes:
                return profile

            changes["updated_at"] = now
            updated = await self.profile_repository.save(
                profile.model_copy(update=changes)
            )

            if status_changed:
                logfire.info(
                    "Verification status changed",
                    user_id=str(user_id),
                    before=profile.verification_status.value,
                    after=new_status.value,
                )
                await self.change_log_service.record(
                    user_id=user_id,
                    profile_id=profile.id,
                    entity=ChangeEntity.PROFILE,
                    entity_id=str(profile.id),
                    action=ChangeAction.UPDATE,
                    field="verificationStatus",
                    before=profile.verification_status.value,
                    after=new_status.value,
                )

            return updated
