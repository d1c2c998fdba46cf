"""Domain value objects for AEOBRO verification.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from datetime import datetime, timedelta
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from pydantic import Field, field_validator

from aeobro.domain.value.common import RootValueObject, ValueObject


class VerificationStatus(str, Enum):
    """Profile-level verification status (derived from proofs)."""

    UNVERIFIED = "UNVERIFIED"
    PLATFORM_VERIFIED = "PLATFORM_VERIFIED"
    DOMAIN_VERIFIED = "DOMAIN_VERIFIED"


class VerifyMethod(str, Enum):
    """Modality of the most recent verification attempt on a profile."""

    DNS = "DNS"
    PLATFORM = "PLATFORM"


class ClaimStatus(str, Enum):
    """Status of a domain claim."""

    PENDING = "PENDING"
    PARTIAL = "PARTIAL"  # DNS proven, email step outstanding
    VERIFIED = "VERIFIED"


class PlatformAccountStatus(str, Enum):
    """Status of a linked platform account."""

    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    FAILED = "FAILED"


class VerificationMethod(str, Enum):
    """How a platform account was proven."""

    OAUTH = "OAUTH"
    BIO_CODE = "BIO_CODE"


class VerificationContext(str, Enum):
    """Proof channel a provider is being used with."""

    BIO_CODE = "BIO_CODE"
    OAUTH = "OAUTH"
    DNS_TXT = "DNS_TXT"


class Platform(str, Enum):
    """Supported external platforms."""

    GOOGLE = "google"
    YOUTUBE = "youtube"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    X = "x"
    TIKTOK = "tiktok"
    GITHUB = "github"
    SUBSTACK = "substack"
    ETSY = "etsy"
    LINKEDIN = "linkedin"


class Visibility(str, Enum):
    """Publication state of a profile."""

    PUBLISHED = "PUBLISHED"
    UNPUBLISHED = "UNPUBLISHED"
    DELETED = "DELETED"


class UnpublishReason(str, Enum):
    """Why a profile was unpublished."""

    NONE = "NONE"
    USER_REQUEST = "USER_REQUEST"
    SUBSCRIPTION_LAPSED = "SUBSCRIPTION_LAPSED"


class PlanStatus(str, Enum):
    """Billing lifecycle status (mirrors the payment provider)."""

    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    INCOMPLETE = "incomplete"


class ChangeEntity(str, Enum):
    """Kind of entity recorded in the change log."""

    PROFILE = "PROFILE"
    DOMAIN_CLAIM = "DOMAIN_CLAIM"
    PLATFORM_ACCOUNT = "PLATFORM_ACCOUNT"


class ChangeAction(str, Enum):
    """Change log action."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


_HOSTNAME_RE = re.compile(
    r"^(?=.{4,253}$)([a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z][a-z0-9-]{0,61}[a-z0-9]$"
)


class DomainName(RootValueObject[str]):
    """Apex domain under verification.

    Always lowercase, without scheme, path, port or leading `www.`.
    Examples: 'example.com', 'shop.example.co.uk'
    """

    @field_validator("root")
    @classmethod
    def validate_domain(cls, v: str) -> str:
        """Validate hostname format."""
        if not _HOSTNAME_RE.match(v):
            raise ValueError(f"Invalid domain: {v!r}")
        return v

    @classmethod
    def parse(cls, raw: str) -> "DomainName":
        """Normalize user input into a domain name.

        Accepts bare hosts or URLs ('https://www.Example.com/about').

        Raises:
            ValueError: If the input has no usable hostname
        """
        value = (raw or "").strip().lower()
        if not value:
            raise ValueError("Domain is required")
        if "://" not in value:
            value = f"http://{value}"
        host = urlsplit(value).hostname or ""
        host = host.rstrip(".")
        if host.startswith("www."):
            host = host[len("www.") :]
        return cls(host)


class VerificationToken(RootValueObject[str]):
    """Opaque hex proof token."""

    @field_validator("root")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Validate token is lowercase hex."""
        if not re.fullmatch(r"[0-9a-f]{8,128}", v):
            raise ValueError("Token must be 8-128 lowercase hex characters")
        return v


class PlatformIdentity(ValueObject):
    """Canonical identity resolved from a platform API."""

    external_id: str
    handle: str | None = None
    url: str | None = None
    platform_context: str
    raw: dict[str, Any] = Field(default_factory=dict)


class VerifiedPlatformEntry(ValueObject):
    """Per-provider entry of a profile's verified platforms map."""

    external_id: str
    handle: str | None = None
    url: str | None = None
    platform_context: str | None = None
    method: VerificationMethod
    verified_at: datetime


class Lease(ValueObject):
    """Cooperative lease stamped on rows claimed by a background run.

    A lease is not a lock: once `ttl` has elapsed any other run may take the
    rows over.
    """

    holder: str
    acquired_at: datetime
    ttl: timedelta

    @property
    def expires_at(self) -> datetime:
        """When the lease stops protecting its rows."""
        return self.acquired_at + self.ttl

    @property
    def stale_before(self) -> datetime:
        """Leases acquired before this instant have expired as of `acquired_at`."""
        return self.acquired_at - self.ttl

    def is_expired(self, now: datetime) -> bool:
        """Whether the lease no longer protects its rows at `now`."""
        return now >= self.expires_at
