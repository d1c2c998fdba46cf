"""OAuth identity providers.

Each provider makes one "who am I" call with the user's bearer token. Calls
are bounded by a timeout and never retried.
"""

from typing import Any

import httpx
import logfire

from aeobro.adapter.error import ProviderError
from aeobro.domain.service.platform_identity_service import PlatformProvider
from aeobro.domain.value import PlatformIdentity

GRAPH_API = "https://graph.facebook.com/v19.0"

_PERMISSION_WORDS = ("permission", "scope", "forbidden", "unauthorized")

# Upstream bodies are echoed into error messages, truncated
_MAX_BODY = 300


def assert_ok(response: httpx.Response, provider: str, endpoint: str) -> None:
    """Raise a ProviderError for a non-2xx upstream response.

    Args:
        response: Upstream response
        provider: Provider label used in the message
        endpoint: Endpoint label used in the message

    Raises:
        ProviderError: UPSTREAM_ERROR carrying the upstream status
    """
    if response.is_success:
        return
    body = response.text[:_MAX_BODY]
    hint = ""
    if any(word in body.lower() for word in _PERMISSION_WORDS):
        hint = " Check granted scopes/permissions."
    raise ProviderError(
        "UPSTREAM_ERROR",
        f"{provider}: {endpoint} failed ({response.status_code}).{hint} {body}".strip(),
        status=response.status_code,
    )


class HttpPlatformProvider(PlatformProvider):
    """Base for providers calling a JSON API with a bearer token."""

    name = "provider"

    def __init__(self, timeout: float = 10.0, user_agent: str | None = None) -> None:
        """Initialize provider.

        Args:
            timeout: Per-request timeout in seconds
            user_agent: User-Agent header sent upstream
        """
        self.timeout = timeout
        self.user_agent = user_agent

    def _headers(self, access_token: str) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {access_token}"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers

    def _require_token(self, access_token: str | None) -> str:
        if not access_token:
            raise ProviderError(
                "MISSING_TOKEN",
                f"Missing {self.name} access token. Please reconnect {self.name}.",
            )
        return access_token

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        access_token: str,
        endpoint: str,
        **kwargs: Any,
    ) -> dict:
        try:
            response = await client.request(
                method, url, headers=self._headers(access_token), **kwargs
            )
        except httpx.HTTPError as e:
            logfire.error(
                "Platform API request failed", provider=self.name, endpoint=endpoint
            )
            raise ProviderError(
                "UPSTREAM_ERROR", f"{self.name}: {endpoint} unreachable ({e})"
            ) from e

        assert_ok(response, self.name, endpoint)
        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                "UPSTREAM_ERROR", f"{self.name}: {endpoint} returned invalid JSON"
            ) from e

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout)


class GoogleYouTubeProvider(HttpPlatformProvider):
    """Google account proven through its YouTube channel.

    Requires scope https://www.googleapis.com/auth/youtube.readonly.
    """

    name = "google/youtube"
    channels_url = "https://www.googleapis.com/youtube/v3/channels"

    async def resolve_identity(self, access_token: str) -> PlatformIdentity:
        """Resolve the channel owned by the token's account."""
        token = self._require_token(access_token)
        async with self._client() as client:
            data = await self._request(
                client,
                "GET",
                self.channels_url,
                token,
                "/youtube/v3/channels?mine=true",
                params={"part": "id,snippet", "mine": "true"},
            )

        items = data.get("items") or []
        channel = items[0] if items else {}
        channel_id = channel.get("id")
        if not channel_id:
            raise ProviderError(
                "NO_CHANNEL",
                "No YouTube channel found on this Google account. "
                "Create or select a channel, then try again.",
            )

        return PlatformIdentity(
            external_id=str(channel_id),
            handle=(channel.get("snippet") or {}).get("title"),
            url=f"https://www.youtube.com/channel/{channel_id}",
            platform_context="google-youtube",
            raw=data,
        )


class FacebookProvider(HttpPlatformProvider):
    """Facebook user identity. Requires scope public_profile."""

    name = "facebook"

    async def resolve_identity(self, access_token: str) -> PlatformIdentity:
        """Resolve the Facebook user behind the token."""
        token = self._require_token(access_token)
        async with self._client() as client:
            me = await self._request(
                client,
                "GET",
                f"{GRAPH_API}/me",
                token,
                "/me?fields=id,name,link",
                params={"fields": "id,name,link"},
            )

        user_id = me.get("id")
        if not user_id:
            raise ProviderError(
                "NO_ID",
                "Facebook: no user id returned. Check permissions and try again.",
            )

        return PlatformIdentity(
            external_id=str(user_id),
            handle=me.get("name"),
            url=me.get("link") or f"https://www.facebook.com/{user_id}",
            platform_context="facebook-user",
            raw=me,
        )


class InstagramBusinessProvider(HttpPlatformProvider):
    """Instagram Business account reached through a managed Facebook Page.

    Requires scopes instagram_basic and pages_show_list.
    """

    name = "instagram"

    async def resolve_identity(self, access_token: str) -> PlatformIdentity:
        """Resolve the first Instagram Business account linked to a Page."""
        token = self._require_token(access_token)
        async with self._client() as client:
            pages_data = await self._request(
                client,
                "GET",
                f"{GRAPH_API}/me/accounts",
                token,
                "/me/accounts",
                params={"fields": "id,name"},
            )
            pages = pages_data.get("data") or []
            if not pages:
                raise ProviderError(
                    "NO_PAGES",
                    "No Facebook Pages accessible. To verify Instagram Business, "
                    "manage a Facebook Page linked to your IG Business account and "
                    "grant 'pages_show_list' + 'instagram_basic'.",
                )

            for page in pages:
                page_data = await self._request(
                    client,
                    "GET",
                    f"{GRAPH_API}/{page['id']}",
                    token,
                    "/{pageId}?fields=connected_instagram_account",
                    params={"fields": "connected_instagram_account"},
                )
                ig = page_data.get("connected_instagram_account") or {}
                if not ig.get("id"):
                    continue

                account = await self._request(
                    client,
                    "GET",
                    f"{GRAPH_API}/{ig['id']}",
                    token,
                    "/{igId}?fields=id,username,name",
                    params={"fields": "id,username,name"},
                )
                username = account.get("username")
                return PlatformIdentity(
                    external_id=str(account.get("id") or ig["id"]),
                    handle=username or account.get("name"),
                    url=f"https://www.instagram.com/{username}" if username else None,
                    platform_context="instagram-business",
                    raw={"page": page, "ig": account},
                )

        raise ProviderError(
            "NO_IG_LINKED",
            "No Instagram Business account connected to your Facebook Pages. "
            "Link your IG Business to a Page and grant 'instagram_basic'.",
        )


class TwitterProvider(HttpPlatformProvider):
    """Twitter/X user identity. Requires scopes tweet.read and users.read."""

    name = "twitter"
    me_url = "https://api.twitter.com/2/users/me"

    async def resolve_identity(self, access_token: str) -> PlatformIdentity:
        """Resolve the Twitter/X user behind the token."""
        token = self._require_token(access_token)
        async with self._client() as client:
            data = await self._request(client, "GET", self.me_url, token, "/2/users/me")

        user = data.get("data") or {}
        if not user.get("id"):
            raise ProviderError(
                "NO_ID", "Twitter: no user id returned. Check granted scopes."
            )

        username = user.get("username")
        return PlatformIdentity(
            external_id=str(user["id"]),
            handle=f"@{username}" if username else None,
            url=f"https://twitter.com/{username}" if username else None,
            platform_context="twitter-user",
            raw=data,
        )


class TikTokProvider(HttpPlatformProvider):
    """TikTok user identity (Open API v2). Requires scope user.info.basic."""

    name = "tiktok"
    user_info_url = "https://open.tiktokapis.com/v2/user/info/"

    async def resolve_identity(self, access_token: str) -> PlatformIdentity:
        """Resolve the TikTok user behind the token."""
        token = self._require_token(access_token)
        async with self._client() as client:
            data = await self._request(
                client,
                "POST",
                self.user_info_url,
                token,
                "/v2/user/info/",
                json={"fields": ["open_id", "display_name", "username", "avatar_url"]},
            )

        user = (data.get("data") or {}).get("user") or {}
        open_id = user.get("open_id")
        if not open_id:
            raise ProviderError(
                "NO_OPEN_ID",
                "TikTok: no open_id returned. Ensure 'user.info.basic' scope is granted.",
            )

        username = user.get("username")
        return PlatformIdentity(
            external_id=str(open_id),
            handle=user.get("display_name") or (f"@{username}" if username else None),
            url=f"https://www.tiktok.com/@{username}" if username else None,
            platform_context="tiktok-user",
            raw=data,
        )
