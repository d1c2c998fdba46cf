"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from aeobro.domain.model import (
    BioCode,
    ChangeLogEntry,
    DomainClaim,
    PlatformAccount,
    Profile,
)
from aeobro.domain.value import (
    BioCodeId,
    ChangeAction,
    ChangeEntity,
    ChangeLogId,
    ClaimStatus,
    DomainClaimId,
    DomainName,
    PlanStatus,
    PlatformAccountId,
    PlatformAccountStatus,
    ProfileId,
    UnpublishReason,
    UserId,
    VerificationMethod,
    VerificationStatus,
    VerifiedPlatformEntry,
    VerifyMethod,
    Visibility,
    normalize_plan,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return None if value is None else _uuid(value)


def _value(member: Any) -> Any:
    """Enum member to its stored value (None passes through)."""
    return None if member is None else member.value


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model.

    Args:
        row: Database row as dict

    Returns:
        Profile domain model
    """
    platforms = row.get("verified_platforms") or {}
    plan_status = row.get("plan_status")
    verify_method = row.get("verify_method")
    return Profile(
        id=ProfileId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        slug=row["slug"],
        display_name=row["display_name"],
        legal_name=row.get("legal_name"),
        website=row.get("website"),
        verification_status=VerificationStatus(row["verification_status"]),
        verify_method=VerifyMethod(verify_method) if verify_method else None,
        verify_marker=row.get("verify_marker"),
        verify_domain=row.get("verify_domain"),
        domain_verified_at=row.get("domain_verified_at"),
        platform_verified_at=row.get("platform_verified_at"),
        verify_checked_at=row.get("verify_checked_at"),
        verified_platforms={
            provider: VerifiedPlatformEntry.model_validate(entry)
            for provider, entry in platforms.items()
        },
        plan=normalize_plan(row.get("plan")),
        plan_status=PlanStatus(plan_status) if plan_status else None,
        visibility=Visibility(row["visibility"]),
        unpublish_reason=UnpublishReason(row["unpublish_reason"]),
        unpublished_at=row.get("unpublished_at"),
        retention_until=row.get("retention_until"),
        deletion_job_locked_at=row.get("deletion_job_locked_at"),
        deletion_job_lock_holder=row.get("deletion_job_lock_holder"),
        deleted_at=row.get("deleted_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to database dict.

    Args:
        profile: Profile domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = profile.model_dump(exclude={"verified_platforms"})
    data.update(
        verification_status=_value(profile.verification_status),
        verify_method=_value(profile.verify_method),
        plan=_value(profile.plan),
        plan_status=_value(profile.plan_status),
        visibility=_value(profile.visibility),
        unpublish_reason=_value(profile.unpublish_reason),
        verified_platforms={
            provider: entry.model_dump(mode="json")
            for provider, entry in profile.verified_platforms.items()
        },
    )
    return data


def row_to_domain_claim(row: Dict[str, Any]) -> DomainClaim:
    """Convert database row to DomainClaim domain model."""
    return DomainClaim(
        id=DomainClaimId(_uuid(row["id"])),
        domain=DomainName(row["domain"]),
        user_id=UserId(_uuid(row["user_id"])),
        txt_token=row["txt_token"],
        dns_verified=row["dns_verified"],
        status=ClaimStatus(row["status"]),
        email_issued=row.get("email_issued"),
        email_token=row.get("email_token"),
        email_verified=row["email_verified"],
        verified_at=row.get("verified_at"),
        last_checked_at=row.get("last_checked_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_platform_account(row: Dict[str, Any]) -> PlatformAccount:
    """Convert database row to PlatformAccount domain model."""
    return PlatformAccount(
        id=PlatformAccountId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        profile_id=(
            ProfileId(_uuid(row["profile_id"])) if row.get("profile_id") else None
        ),
        provider=row["provider"],
        external_id=row["external_id"],
        handle=row.get("handle"),
        url=row.get("url"),
        status=PlatformAccountStatus(row["status"]),
        method=VerificationMethod(row["method"]),
        platform_context=row.get("platform_context"),
        scopes=list(row.get("scopes") or []),
        verified_at=row.get("verified_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def platform_account_to_dict(account: PlatformAccount) -> Dict[str, Any]:
    """Convert PlatformAccount domain model to database dict."""
    data = account.model_dump()
    data.update(status=_value(account.status), method=_value(account.method))
    return data


def row_to_bio_code(row: Dict[str, Any]) -> BioCode:
    """Convert database row to BioCode domain model."""
    return BioCode(
        id=BioCodeId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        platform=row["platform"],
        code=row["code"],
        profile_url=row.get("profile_url"),
        expires_at=row["expires_at"],
        status=row["status"],
        created_at=row["created_at"],
    )


def bio_code_to_dict(bio_code: BioCode) -> Dict[str, Any]:
    """Convert BioCode domain model to database dict."""
    return bio_code.model_dump()


def row_to_change_log_entry(row: Dict[str, Any]) -> ChangeLogEntry:
    """Convert database row to ChangeLogEntry domain model."""
    return ChangeLogEntry(
        id=ChangeLogId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        profile_id=(
            ProfileId(_optional_uuid(row["profile_id"]))
            if row.get("profile_id")
            else None
        ),
        entity=ChangeEntity(row["entity"]),
        entity_id=row["entity_id"],
        action=ChangeAction(row["action"]),
        field=row.get("field"),
        before=row.get("before"),
        after=row.get("after"),
        created_at=row["created_at"],
    )


def change_log_entry_to_dict(entry: ChangeLogEntry) -> Dict[str, Any]:
    """Convert ChangeLogEntry domain model to database dict.

    Snapshots are stored as JSON.
    """
    data = entry.model_dump(mode="json", include={"before", "after"})
    data.update(
        id=entry.id,
        user_id=entry.user_id,
        profile_id=entry.profile_id,
        entity=_value(entry.entity),
        entity_id=entry.entity_id,
        action=_value(entry.action),
        field=entry.field,
        created_at=entry.created_at,
    )
    return data
