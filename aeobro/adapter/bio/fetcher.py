"""Public bio/about page fetching for code-in-bio checks."""

import re

import httpx
import logfire

from aeobro.adapter.error import FetchError
from aeobro.domain.service.platform_verification_service import BioPageFetcher

GITHUB_USERS_API = "https://api.github.com/users/{handle}"

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return _WHITESPACE_RE.sub(" ", text)


class HttpBioPageFetcher(BioPageFetcher):
    """Fetches public profile text over HTTP.

    GitHub is read through its users API; Substack tries the about page before
    the home page; every other platform is read as raw HTML. Any failure reads
    as empty text.
    """

    def __init__(self, timeout: float = 10.0, user_agent: str | None = None) -> None:
        """Initialize fetcher.

        Args:
            timeout: Per-request timeout in seconds
            user_agent: User-Agent header sent with every request
        """
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch_text(self, platform: str, handle: str, url: str | None) -> str:
        """Fetch bio/about text for a public profile.

        Args:
            platform: Platform name
            handle: Account handle
            url: Public profile URL, when known

        Returns:
            Text to search for the code (empty when nothing could be fetched)
        """
        headers = {"User-Agent": self.user_agent} if self.user_agent else {}
        async with httpx.AsyncClient(
            timeout=self.timeout, headers=headers, follow_redirects=True
        ) as client:
            try:
                if platform == "github":
                    text = await self._fetch_github(client, handle)
                    if text:
                        return text

                if not url:
                    return ""

                if platform == "substack":
                    base = url.rstrip("/")
                    about = await self._fetch_page(client, f"{base}/about")
                    return about or await self._fetch_page(client, url)

                return await self._fetch_page(client, url)
            except FetchError as e:
                logfire.warn(
                    "Bio page fetch failed", platform=platform, error=str(e)
                )
                return ""

    async def _fetch_github(self, client: httpx.AsyncClient, handle: str) -> str:
        try:
            response = await client.get(
                GITHUB_USERS_API.format(handle=handle),
                headers={"Accept": "application/vnd.github+json"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"GitHub API request failed: {e}") from e

        if not response.is_success:
            return ""
        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(f"GitHub API returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            return ""
        parts = [data.get(key) for key in ("name", "bio", "blog")]
        return "\n".join(p for p in parts if isinstance(p, str) and p)

    async def _fetch_page(self, client: httpx.AsyncClient, url: str) -> str:
        try:
            response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            return ""
        return collapse_whitespace(response.text)


class MockBioPageFetcher(BioPageFetcher):
    """In-memory fetcher for testing.

    Pages are set per (platform, handle); unknown profiles read as empty.
    """

    def __init__(self) -> None:
        """Initialize with no pages."""
        self.pages: dict[tuple[str, str], str] = {}
        self.requests: list[tuple[str, str, str | None]] = []

    def set_page(self, platform: str, handle: str, text: str) -> None:
        """Publish bio text for a profile."""
        self.pages[(platform, handle.lower())] = text

    async def fetch_text(self, platform: str, handle: str, url: str | None) -> str:
        """Return the text published for the profile."""
        self.requests.append((platform, handle, url))
        return self.pages.get((platform, handle.lower()), "")
