"""Unit tests for domain value objects."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from aeobro.domain.value import DomainName, Lease, VerificationToken


class TestDomainName:
    """Tests for DomainName.parse."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("example.com", "example.com"),
            ("  Example.COM ", "example.com"),
            ("https://www.example.com/about?x=1", "example.com"),
            ("http://shop.example.co.uk:8080", "shop.example.co.uk"),
            ("www.example.com.", "example.com"),
        ],
    )
    def test_normalizes_input(self, raw, expected):
        assert DomainName.parse(raw).root == expected

    @pytest.mark.parametrize("raw", ["", "   ", "localhost", "not a domain", "http://"])
    def test_rejects_unusable_input(self, raw):
        with pytest.raises(ValueError):
            DomainName.parse(raw)

    def test_is_immutable_and_compared_by_value(self):
        assert DomainName.parse("example.com") == DomainName.parse("EXAMPLE.com")
        assert str(DomainName.parse("example.com")) == "example.com"


class TestVerificationToken:
    def test_accepts_lowercase_hex(self):
        assert VerificationToken("0123abcd").root == "0123abcd"

    def test_rejects_uppercase(self):
        with pytest.raises(ValidationError):
            VerificationToken("0123ABCD")


class TestLease:
    """Tests for Lease timing."""

    def test_expiry_window(self):
        acquired = datetime(2026, 1, 1, tzinfo=timezone.utc)
        lease = Lease(holder="run-1", acquired_at=acquired, ttl=timedelta(minutes=30))

        assert lease.expires_at == acquired + timedelta(minutes=30)
        assert lease.stale_before == acquired - timedelta(minutes=30)
        assert not lease.is_expired(acquired + timedelta(minutes=29))
        assert lease.is_expired(acquired + timedelta(minutes=30))
