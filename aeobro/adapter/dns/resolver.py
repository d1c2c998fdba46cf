"""TXT record resolution.

Uses the system resolver through dnspython and falls back to a
DNS-over-HTTPS JSON endpoint when the resolver itself fails.
"""

import dns.asyncresolver
import dns.exception
import dns.resolver
import httpx
import logfire

from aeobro.adapter.error import DnsLookupError
from aeobro.domain.service.dns_check_service import TxtResolver

# RR type number for TXT in DoH JSON answers
TXT_RR_TYPE = 16

# DoH JSON status for NXDOMAIN
DOH_NXDOMAIN = 3


class RealTxtResolver(TxtResolver):
    """dnspython resolver with a DNS-over-HTTPS fallback."""

    def __init__(
        self,
        timeout: float = 5.0,
        doh_url: str = "https://dns.google/resolve",
        doh_fallback: bool = True,
    ) -> None:
        """Initialize resolver.

        Args:
            timeout: Total lifetime of one lookup, seconds
            doh_url: DNS-over-HTTPS JSON endpoint
            doh_fallback: Whether to try DoH when the system resolver fails
        """
        self.timeout = timeout
        self.doh_url = doh_url
        self.doh_fallback = doh_fallback

    async def resolve_txt(self, hostname: str) -> list[str]:
        """Resolve TXT strings for a hostname.

        Args:
            hostname: Fully qualified hostname

        Returns:
            TXT strings with multi-string records joined

        Raises:
            DnsLookupError: If neither the resolver nor DoH produced an answer
        """
        try:
            return await self._resolve_system(hostname)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            return []
        except dns.exception.DNSException as e:
            if not self.doh_fallback:
                raise DnsLookupError(f"TXT lookup failed for {hostname}: {e}") from e
            logfire.debug(
                "System resolver failed, trying DoH", host=hostname, error=str(e)
            )
            return await self._resolve_doh(hostname)

    async def _resolve_system(self, hostname: str) -> list[str]:
        resolver = dns.asyncresolver.Resolver()
        resolver.lifetime = self.timeout
        answers = await resolver.resolve(hostname, "TXT")

        records = []
        for rdata in answers:
            # One TXT record may be split into several character-strings
            records.append(
                "".join(
                    s.decode("utf-8", errors="replace") if isinstance(s, bytes) else s
                    for s in rdata.strings
                )
            )
        return records

    async def _resolve_doh(self, hostname: str) -> list[str]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    self.doh_url,
                    params={"name": hostname, "type": "TXT"},
                    headers={"Accept": "application/dns-json"},
                )
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise DnsLookupError(f"DoH lookup failed for {hostname}: {e}") from e

        status = payload.get("Status", 0)
        if status == DOH_NXDOMAIN:
            return []
        if status != 0:
            raise DnsLookupError(f"DoH lookup for {hostname} returned status {status}")

        return [
            str(answer.get("data", ""))
            for answer in payload.get("Answer") or []
            if answer.get("type") == TXT_RR_TYPE
        ]


class MockTxtResolver(TxtResolver):
    """In-memory resolver for testing.

    Records are set per hostname; hosts in `failing_hosts` raise like a
    timed-out lookup.
    """

    def __init__(self) -> None:
        """Initialize with no records."""
        self.records: dict[str, list[str]] = {}
        self.failing_hosts: set[str] = set()
        self.queries: list[str] = []

    def set_records(self, hostname: str, records: list[str]) -> None:
        """Publish TXT records at a hostname."""
        self.records[hostname.lower()] = list(records)

    async def resolve_txt(self, hostname: str) -> list[str]:
        """Return the records published at `hostname`."""
        host = hostname.lower()
        self.queries.append(host)
        if host in self.failing_hosts:
            raise DnsLookupError(f"Simulated lookup failure for {host}")
        return list(self.records.get(host, []))
