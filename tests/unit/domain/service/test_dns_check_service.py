"""Unit tests for DNS TXT proof checking."""

import pytest

from aeobro.adapter.dns import MockTxtResolver
from aeobro.domain.service import DnsCheckService
from aeobro.domain.service.dns_check_service import (
    candidate_hosts,
    match_record,
    normalize_txt,
    record_host,
)
from aeobro.domain.value import DomainName

TOKEN = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def resolver() -> MockTxtResolver:
    return MockTxtResolver()


@pytest.fixture
def service(resolver) -> DnsCheckService:
    return DnsCheckService(resolver=resolver)


class TestHosts:
    """Tests for host selection."""

    def test_candidate_hosts_in_priority_order(self):
        """Preferred subdomain, then legacy subdomain, then apex."""
        hosts = candidate_hosts(DomainName("example.com"))

        assert hosts == [
            "_aeobro-verify.example.com",
            "_aeobro.example.com",
            "example.com",
        ]

    def test_record_host_is_preferred_subdomain(self):
        assert record_host(DomainName("example.com")) == "_aeobro-verify.example.com"


class TestNormalizeTxt:
    """Tests for normalize_txt."""

    def test_joins_quoted_chunks(self):
        """Chunked TXT strings should be joined."""
        assert normalize_txt('"aeobro-site-" "verify=ABC"') == "aeobro-site-verify=abc"

    def test_unescapes_quotes_and_trims(self):
        assert normalize_txt('  say \\"hi\\"  ') == 'say "hi"'


class TestMatchRecord:
    """Tests for match_record."""

    def test_exact_preferred_match(self):
        records = [f"aeobro-site-verify={TOKEN}"]

        assert match_record(records, TOKEN) == f"aeobro-site-verify={TOKEN}"

    def test_legacy_and_bare_forms_accepted(self):
        assert match_record([f"aeobro-verification={TOKEN}"], TOKEN) is not None
        assert match_record([TOKEN], TOKEN) == TOKEN

    def test_case_insensitive(self):
        """Resolvers may return uppercase records."""
        records = [f"AEOBRO-SITE-VERIFY={TOKEN.upper()}"]

        assert match_record(records, TOKEN) is not None

    def test_substring_match_inside_longer_record(self):
        records = [f"v=spf1 include:x aeobro-site-verify={TOKEN} ~all"]

        assert match_record(records, TOKEN) is not None

    def test_other_token_does_not_match(self):
        records = ["aeobro-site-verify=ffffffffffffffffffffffffffffffff"]

        assert match_record(records, TOKEN) is None


class TestInspectDomain:
    """Tests for DnsCheckService.inspect_domain."""

    @pytest.mark.asyncio
    async def test_verified_on_preferred_host(self, service, resolver):
        resolver.set_records(
            "_aeobro-verify.example.com", [f"aeobro-site-verify={TOKEN}"]
        )

        result = await service.inspect_domain(DomainName("example.com"), TOKEN)

        assert result.verified is True
        assert result.host == "_aeobro-verify.example.com"

    @pytest.mark.asyncio
    async def test_falls_through_to_apex(self, service, resolver):
        """A token on the apex should still verify."""
        resolver.set_records("example.com", ["google-site-verification=x", TOKEN])

        result = await service.inspect_domain(DomainName("example.com"), TOKEN)

        assert result.verified is True
        assert result.host == "example.com"
        assert resolver.queries == [
            "_aeobro-verify.example.com",
            "_aeobro.example.com",
            "example.com",
        ]

    @pytest.mark.asyncio
    async def test_lookup_failure_is_treated_as_no_records(self, service, resolver):
        """A failing host must not abort the check."""
        resolver.failing_hosts.add("_aeobro-verify.example.com")
        resolver.set_records("_aeobro.example.com", [f"aeobro-verification={TOKEN}"])

        result = await service.inspect_domain(DomainName("example.com"), TOKEN)

        assert result.verified is True
        assert result.host == "_aeobro.example.com"

    @pytest.mark.asyncio
    async def test_not_found(self, service, resolver):
        resolver.failing_hosts.update(
            {"_aeobro-verify.example.com", "_aeobro.example.com", "example.com"}
        )

        assert await service.check_domain(DomainName("example.com"), TOKEN) is False
