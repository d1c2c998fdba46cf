"""DNS TXT proof checking."""

from abc import ABC, abstractmethod

import logfire

from aeobro.domain.value import DomainName
from aeobro.domain.value.common import ValueObject

from .base import Service
from .token_service import accepted_record_values

PREFERRED_SUBDOMAIN = "_aeobro-verify"
LEGACY_SUBDOMAIN = "_aeobro"


class TxtResolver(ABC):
    """Abstract TXT record resolver.

    Implementations must return an empty list for NXDOMAIN and empty answers
    and may raise on transport failures (timeouts, SERVFAIL).
    """

    @abstractmethod
    async def resolve_txt(self, hostname: str) -> list[str]:
        """Resolve TXT strings for a hostname.

        Args:
            hostname: Fully qualified hostname

        Returns:
            Raw TXT strings, possibly quoted or chunked
        """
        pass


class DnsCheckResult(ValueObject):
    """Outcome of a DNS proof check."""

    verified: bool
    host: str | None = None
    record: str | None = None


def candidate_hosts(domain: DomainName) -> list[str]:
    """Hostnames probed for a domain, in priority order."""
    d = domain.root
    return [f"{PREFERRED_SUBDOMAIN}.{d}", f"{LEGACY_SUBDOMAIN}.{d}", d]


def record_host(domain: DomainName) -> str:
    """Hostname users are told to publish the TXT record at."""
    return candidate_hosts(domain)[0]


def normalize_txt(value: str) -> str:
    """Normalize a TXT string for comparison.

    Joins quoted chunks ('"abc" "def"' -> 'abcdef'), un-escapes quotes,
    trims and lowercases.
    """
    v = value.strip()
    if v.startswith('"') and v.endswith('"') and len(v) >= 2:
        v = v[1:-1]
        v = v.replace('" "', "")
    v = v.replace('\\"', '"')
    return v.strip().lower()


def match_record(records: list[str], token: str) -> str | None:
    """Return the first record matching an accepted pattern for `token`.

    Patterns are tried in order; each is tested by exact match first, then
    by substring match across all records.
    """
    normalized = [normalize_txt(r) for r in records]
    for pattern in accepted_record_values(token.lower()):
        for record in normalized:
            if record == pattern:
                return record
        for record in normalized:
            if pattern in record:
                return record
    return None


class DnsCheckService(Service):
    """Domain service checking TXT proofs for domain claims."""

    def __init__(self, resolver: TxtResolver) -> None:
        """Initialize DNS check service.

        Args:
            resolver: TXT resolver
        """
        self.resolver = resolver

    async def inspect_domain(
        self, domain: DomainName, expected_token: str
    ) -> DnsCheckResult:
        """Probe candidate hosts until one carries the expected token.

        Never raises for DNS-layer faults: a failing host counts as having no
        records.

        Args:
            domain: Claimed domain
            expected_token: Current claim token

        Returns:
            Check result with the matching host and record when verified
        """
        with logfire.span("dns_check_service.inspect_domain", domain=domain.root):
            for host in candidate_hosts(domain):
                try:
                    records = await self.resolver.resolve_txt(host)
                except Exception as e:
                    logfire.warn(
                        "TXT lookup failed, treating as no records",
                        host=host,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    continue

                matched = match_record(records, expected_token)
                if matched is not None:
                    logfire.info("TXT proof found", domain=domain.root, host=host)
                    return DnsCheckResult(verified=True, host=host, record=matched)

            logfire.info("TXT proof not found", domain=domain.root)
            return DnsCheckResult(verified=False)

    async def check_domain(self, domain: DomainName, expected_token: str) -> bool:
        """Whether the domain currently publishes the expected token."""
        result = await self.inspect_domain(domain, expected_token)
        return result.verified
