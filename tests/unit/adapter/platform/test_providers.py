"""Unit tests for OAuth identity providers."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from aeobro.adapter.error import ProviderError
from aeobro.adapter.platform import (
    FacebookProvider,
    GoogleYouTubeProvider,
    InstagramBusinessProvider,
    TikTokProvider,
    TwitterProvider,
    assert_ok,
)


def mock_requests(mock_client, *responses) -> AsyncMock:
    """Queue upstream responses on the patched client."""
    request = AsyncMock(side_effect=list(responses))
    mock_client.return_value.__aenter__.return_value.request = request
    return request


class TestAssertOk:
    """Tests for assert_ok."""

    def test_success_passes(self):
        assert_ok(httpx.Response(200, json={}), "tiktok", "/v2/user/info/")

    def test_failure_carries_status(self):
        with pytest.raises(ProviderError) as exc_info:
            assert_ok(httpx.Response(500, text="boom"), "tiktok", "/v2/user/info/")

        assert exc_info.value.code == "UPSTREAM_ERROR"
        assert exc_info.value.status == 500
        assert "(500)" in exc_info.value.message
        assert "scopes" not in exc_info.value.message

    def test_permission_failures_get_a_hint(self):
        with pytest.raises(ProviderError) as exc_info:
            assert_ok(
                httpx.Response(403, text="Insufficient permission"), "facebook", "/me"
            )

        assert "Check granted scopes/permissions." in exc_info.value.message

    def test_body_is_truncated(self):
        with pytest.raises(ProviderError) as exc_info:
            assert_ok(httpx.Response(400, text="x" * 1000), "twitter", "/2/users/me")

        assert exc_info.value.message.count("x") <= 300


class TestGoogleYouTubeProvider:
    """Tests for GoogleYouTubeProvider."""

    @pytest.mark.asyncio
    async def test_resolves_channel(self):
        """Should use the channel id as the external id."""
        with patch("httpx.AsyncClient") as mock_client:
            request = mock_requests(
                mock_client,
                httpx.Response(
                    200,
                    json={"items": [{"id": "UC123", "snippet": {"title": "Acme"}}]},
                ),
            )

            identity = await GoogleYouTubeProvider().resolve_identity("tok")

            assert identity.external_id == "UC123"
            assert identity.handle == "Acme"
            assert identity.url == "https://www.youtube.com/channel/UC123"
            assert identity.platform_context == "google-youtube"

            args, kwargs = request.call_args
            assert args == ("GET", "https://www.googleapis.com/youtube/v3/channels")
            assert kwargs["headers"]["Authorization"] == "Bearer tok"
            assert kwargs["params"] == {"part": "id,snippet", "mine": "true"}

    @pytest.mark.asyncio
    async def test_account_without_channel(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_requests(mock_client, httpx.Response(200, json={"items": []}))

            with pytest.raises(ProviderError) as exc_info:
                await GoogleYouTubeProvider().resolve_identity("tok")

            assert exc_info.value.code == "NO_CHANNEL"

    @pytest.mark.asyncio
    async def test_missing_token(self):
        with pytest.raises(ProviderError) as exc_info:
            await GoogleYouTubeProvider().resolve_identity("")

        assert exc_info.value.code == "MISSING_TOKEN"


class TestFacebookProvider:
    @pytest.mark.asyncio
    async def test_resolves_user(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_requests(
                mock_client, httpx.Response(200, json={"id": "42", "name": "Jane"})
            )

            identity = await FacebookProvider().resolve_identity("tok")

            assert identity.external_id == "42"
            assert identity.handle == "Jane"
            assert identity.url == "https://www.facebook.com/42"

    @pytest.mark.asyncio
    async def test_upstream_rejection(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_requests(mock_client, httpx.Response(401, text="Invalid OAuth token"))

            with pytest.raises(ProviderError) as exc_info:
                await FacebookProvider().resolve_identity("tok")

            assert exc_info.value.code == "UPSTREAM_ERROR"
            assert exc_info.value.status == 401

    @pytest.mark.asyncio
    async def test_unreachable_upstream(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_requests(mock_client, httpx.ConnectTimeout("timed out"))

            with pytest.raises(ProviderError) as exc_info:
                await FacebookProvider().resolve_identity("tok")

            assert exc_info.value.code == "UPSTREAM_ERROR"


class TestInstagramBusinessProvider:
    """Tests for InstagramBusinessProvider."""

    @pytest.mark.asyncio
    async def test_resolves_first_linked_account(self):
        """Pages without a linked IG account are skipped."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_requests(
                mock_client,
                httpx.Response(200, json={"data": [{"id": "p1"}, {"id": "p2"}]}),
                httpx.Response(200, json={}),
                httpx.Response(
                    200, json={"connected_instagram_account": {"id": "ig9"}}
                ),
                httpx.Response(200, json={"id": "ig9", "username": "acme"}),
            )

            identity = await InstagramBusinessProvider().resolve_identity("tok")

            assert identity.external_id == "ig9"
            assert identity.handle == "acme"
            assert identity.url == "https://www.instagram.com/acme"
            assert identity.platform_context == "instagram-business"

    @pytest.mark.asyncio
    async def test_no_pages(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_requests(mock_client, httpx.Response(200, json={"data": []}))

            with pytest.raises(ProviderError) as exc_info:
                await InstagramBusinessProvider().resolve_identity("tok")

            assert exc_info.value.code == "NO_PAGES"

    @pytest.mark.asyncio
    async def test_no_linked_account(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_requests(
                mock_client,
                httpx.Response(200, json={"data": [{"id": "p1"}]}),
                httpx.Response(200, json={"connected_instagram_account": None}),
            )

            with pytest.raises(ProviderError) as exc_info:
                await InstagramBusinessProvider().resolve_identity("tok")

            assert exc_info.value.code == "NO_IG_LINKED"


class TestTwitterProvider:
    @pytest.mark.asyncio
    async def test_resolves_user(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_requests(
                mock_client,
                httpx.Response(200, json={"data": {"id": "7", "username": "acme"}}),
            )

            identity = await TwitterProvider().resolve_identity("tok")

            assert identity.external_id == "7"
            assert identity.handle == "@acme"
            assert identity.url == "https://twitter.com/acme"

    @pytest.mark.asyncio
    async def test_missing_id(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_requests(mock_client, httpx.Response(200, json={"data": {}}))

            with pytest.raises(ProviderError) as exc_info:
                await TwitterProvider().resolve_identity("tok")

            assert exc_info.value.code == "NO_ID"


class TestTikTokProvider:
    @pytest.mark.asyncio
    async def test_resolves_user(self):
        with patch("httpx.AsyncClient") as mock_client:
            request = mock_requests(
                mock_client,
                httpx.Response(
                    200,
                    json={"data": {"user": {"open_id": "o1", "username": "acme"}}},
                ),
            )

            identity = await TikTokProvider().resolve_identity("tok")

            assert identity.external_id == "o1"
            assert identity.handle == "@acme"
            assert identity.url == "https://www.tiktok.com/@acme"
            assert request.call_args.args[0] == "POST"

    @pytest.mark.asyncio
    async def test_missing_open_id(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_requests(mock_client, httpx.Response(200, json={"data": {}}))

            with pytest.raises(ProviderError) as exc_info:
                await TikTokProvider().resolve_identity("tok")

            assert exc_info.value.code == "NO_OPEN_ID"
