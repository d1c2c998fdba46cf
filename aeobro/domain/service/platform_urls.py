"""Public profile URL templates per platform."""

import re
from urllib.parse import urlsplit

# Handle characters allowed in profile URLs
HANDLE_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]{0,99}")

_URL_TEMPLATES: dict[str, str] = {
    "github": "https://github.com/{handle}",
    "x": "https://x.com/{handle}",
    "twitter": "https://x.com/{handle}",
    "instagram": "https://www.instagram.com/{handle}/",
    "tiktok": "https://www.tiktok.com/@{handle}",
    "youtube": "https://www.youtube.com/@{handle}",
    "substack": "https://{handle}.substack.com",
    "etsy": "https://www.etsy.com/shop/{handle}",
    "linkedin": "https://www.linkedin.com/in/{handle}",
    "facebook": "https://www.facebook.com/{handle}",
}

# Hosts a profile URL may use, subdomains included
_PLATFORM_HOSTS: dict[str, tuple[str, ...]] = {
    "github": ("github.com",),
    "x": ("x.com", "twitter.com"),
    "twitter": ("x.com", "twitter.com"),
    "instagram": ("instagram.com",),
    "tiktok": ("tiktok.com",),
    "youtube": ("youtube.com",),
    "substack": ("substack.com",),
    "etsy": ("etsy.com",),
    "linkedin": ("linkedin.com",),
    "facebook": ("facebook.com", "fb.com"),
}


def clean_handle(handle: str) -> str:
    """Strip whitespace and a leading '@'."""
    return handle.strip().lstrip("@").strip()


def build_default_url(platform: str, handle: str) -> str | None:
    """Build the public profile URL for a handle.

    Returns:
        The URL, or None for platforms without a template
    """
    template = _URL_TEMPLATES.get(platform)
    if template is None:
        return None
    return template.format(handle=clean_handle(handle))


def is_platform_host(platform: str, host: str) -> bool:
    """Whether `host` belongs to the platform."""
    host = host.lower().rstrip(".")
    return any(
        host == allowed or host.endswith(f".{allowed}")
        for allowed in _PLATFORM_HOSTS.get(platform, ())
    )


def parse_handle_from_url(platform: str, url: str) -> str | None:
    """Extract a handle from a public profile URL.

    URLs on hosts other than the platform's yield None.

    Examples:
        github, https://github.com/octocat -> octocat
        substack, https://jane.substack.com/about -> jane
        etsy, https://www.etsy.com/shop/MyShop -> MyShop
    """
    try:
        parts = urlsplit(url if "://" in url else f"https://{url}")
    except ValueError:
        return None

    host = (parts.hostname or "").lower()
    if not is_platform_host(platform, host):
        return None
    segments = [s for s in parts.path.split("/") if s]

    if platform == "substack":
        if host.endswith(".substack.com"):
            return host[: -len(".substack.com")] or None
        return None

    if platform == "etsy":
        if len(segments) >= 2 and segments[0].lower() == "shop":
            return segments[1]
        return None

    if platform == "linkedin":
        if len(segments) >= 2 and segments[0].lower() in ("in", "company"):
            return segments[1]
        return None

    if not segments:
        return None
    return clean_handle(segments[0]) or None
