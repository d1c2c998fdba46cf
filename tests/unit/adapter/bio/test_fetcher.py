"""Unit tests for public bio page fetching."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from aeobro.adapter.bio import HttpBioPageFetcher, collapse_whitespace


def test_collapse_whitespace():
    assert collapse_whitespace("a\n\n  b\tc") == "a b c"


class TestHttpBioPageFetcher:
    """Tests for HttpBioPageFetcher."""

    @pytest.mark.asyncio
    async def test_github_reads_users_api(self):
        """Should join name, bio and blog from the GitHub API."""
        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(
                return_value=httpx.Response(
                    200,
                    json={"name": "Octo", "bio": "AEOBRO-GITHUB-ABC123", "blog": None},
                )
            )
            mock_client.return_value.__aenter__.return_value.get = get

            text = await HttpBioPageFetcher().fetch_text(
                "github", "octocat", "https://github.com/octocat"
            )

            assert text == "Octo\nAEOBRO-GITHUB-ABC123"
            assert get.call_args.args[0] == "https://api.github.com/users/octocat"

    @pytest.mark.asyncio
    async def test_github_falls_back_to_profile_page(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=[
                    httpx.Response(404, text="Not Found"),
                    httpx.Response(200, text="<p>Hello\n   world</p>"),
                ]
            )

            text = await HttpBioPageFetcher().fetch_text(
                "github", "octocat", "https://github.com/octocat"
            )

            assert text == "<p>Hello world</p>"

    @pytest.mark.asyncio
    async def test_substack_prefers_about_page(self):
        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=httpx.Response(200, text="About jane"))
            mock_client.return_value.__aenter__.return_value.get = get

            text = await HttpBioPageFetcher().fetch_text(
                "substack", "jane", "https://jane.substack.com/"
            )

            assert text == "About jane"
            get.assert_called_once_with("https://jane.substack.com/about")

    @pytest.mark.asyncio
    async def test_substack_falls_back_to_home_page(self):
        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(
                side_effect=[
                    httpx.Response(404, text=""),
                    httpx.Response(200, text="Home"),
                ]
            )
            mock_client.return_value.__aenter__.return_value.get = get

            text = await HttpBioPageFetcher().fetch_text(
                "substack", "jane", "https://jane.substack.com"
            )

            assert text == "Home"

    @pytest.mark.asyncio
    async def test_no_url_reads_as_empty(self):
        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock()
            mock_client.return_value.__aenter__.return_value.get = get

            assert await HttpBioPageFetcher().fetch_text("linkedin", "jane", None) == ""
            get.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_failure_reads_as_empty(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectError("unreachable")
            )

            text = await HttpBioPageFetcher().fetch_text(
                "etsy", "MyShop", "https://www.etsy.com/shop/MyShop"
            )

            assert text == ""

    @pytest.mark.asyncio
    async def test_invalid_url_reads_as_empty(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.InvalidURL("Invalid IPv6 URL")
            )

            text = await HttpBioPageFetcher().fetch_text(
                "instagram", "x", "http://[::1"
            )

            assert text == ""

    @pytest.mark.asyncio
    async def test_github_non_json_body_reads_as_empty(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=httpx.Response(200, text="<html>rate limited</html>")
            )

            text = await HttpBioPageFetcher().fetch_text(
                "github", "octocat", "https://github.com/octocat"
            )

            assert text == ""
