"""Unit tests for TXT resolution."""

from unittest.mock import AsyncMock, MagicMock, patch

import dns.exception
import dns.resolver
import httpx
import pytest

from aeobro.adapter.dns import RealTxtResolver
from aeobro.adapter.error import DnsLookupError


def txt_rdata(*strings: bytes) -> MagicMock:
    rdata = MagicMock()
    rdata.strings = strings
    return rdata


def doh_response(payload: dict) -> MagicMock:
    response = MagicMock()
    response.raise_for_status = MagicMock()
    response.json = MagicMock(return_value=payload)
    return response


class TestSystemResolver:
    """Tests for lookups through dnspython."""

    @pytest.mark.asyncio
    async def test_joins_multi_string_records(self):
        """Should join the character-strings of one record."""
        with patch("dns.asyncresolver.Resolver") as mock_resolver:
            mock_resolver.return_value.resolve = AsyncMock(
                return_value=[
                    txt_rdata(b"aeobro-site-verification=", b"abc123"),
                    txt_rdata(b"v=spf1 -all"),
                ]
            )

            records = await RealTxtResolver(timeout=2.0).resolve_txt(
                "_aeobro.example.com"
            )

            assert records == ["aeobro-site-verification=abc123", "v=spf1 -all"]
            mock_resolver.return_value.resolve.assert_called_once_with(
                "_aeobro.example.com", "TXT"
            )
            assert mock_resolver.return_value.lifetime == 2.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [dns.resolver.NXDOMAIN, dns.resolver.NoAnswer])
    async def test_missing_host_has_no_records(self, error):
        with patch("dns.asyncresolver.Resolver") as mock_resolver:
            mock_resolver.return_value.resolve = AsyncMock(side_effect=error())

            assert await RealTxtResolver().resolve_txt("example.com") == []

    @pytest.mark.asyncio
    async def test_failure_without_fallback_raises(self):
        with patch("dns.asyncresolver.Resolver") as mock_resolver:
            mock_resolver.return_value.resolve = AsyncMock(
                side_effect=dns.exception.Timeout()
            )

            with pytest.raises(DnsLookupError):
                await RealTxtResolver(doh_fallback=False).resolve_txt("example.com")


class TestDohFallback:
    """Tests for the DNS-over-HTTPS fallback."""

    @pytest.mark.asyncio
    async def test_falls_back_to_doh(self):
        """Should query DoH and keep only TXT answers."""
        payload = {
            "Status": 0,
            "Answer": [
                {"type": 5, "data": "alias.example.com."},
                {"type": 16, "data": "aeobro-site-verification=abc123"},
            ],
        }
        with (
            patch("dns.asyncresolver.Resolver") as mock_resolver,
            patch("httpx.AsyncClient") as mock_client,
        ):
            mock_resolver.return_value.resolve = AsyncMock(
                side_effect=dns.exception.Timeout()
            )
            get = AsyncMock(return_value=doh_response(payload))
            mock_client.return_value.__aenter__.return_value.get = get

            records = await RealTxtResolver(doh_url="https://doh.test/resolve").resolve_txt(
                "example.com"
            )

            assert records == ["aeobro-site-verification=abc123"]
            get.assert_called_once_with(
                "https://doh.test/resolve",
                params={"name": "example.com", "type": "TXT"},
                headers={"Accept": "application/dns-json"},
            )

    @pytest.mark.asyncio
    async def test_doh_nxdomain_has_no_records(self):
        with (
            patch("dns.asyncresolver.Resolver") as mock_resolver,
            patch("httpx.AsyncClient") as mock_client,
        ):
            mock_resolver.return_value.resolve = AsyncMock(
                side_effect=dns.exception.Timeout()
            )
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=doh_response({"Status": 3})
            )

            assert await RealTxtResolver().resolve_txt("example.com") == []

    @pytest.mark.asyncio
    async def test_doh_server_failure_raises(self):
        with (
            patch("dns.asyncresolver.Resolver") as mock_resolver,
            patch("httpx.AsyncClient") as mock_client,
        ):
            mock_resolver.return_value.resolve = AsyncMock(
                side_effect=dns.exception.Timeout()
            )
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=doh_response({"Status": 2})
            )

            with pytest.raises(DnsLookupError, match="status 2"):
                await RealTxtResolver().resolve_txt("example.com")

    @pytest.mark.asyncio
    async def test_doh_transport_failure_raises(self):
        with (
            patch("dns.asyncresolver.Resolver") as mock_resolver,
            patch("httpx.AsyncClient") as mock_client,
        ):
            mock_resolver.return_value.resolve = AsyncMock(
                side_effect=dns.exception.Timeout()
            )
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectError("unreachable")
            )

            with pytest.raises(DnsLookupError):
                await RealTxtResolver().resolve_txt("example.com")
