"""Platform identity adapters."""

from .mock import MockPlatformProvider
from .providers import (
    FacebookProvider,
    GoogleYouTubeProvider,
    HttpPlatformProvider,
    InstagramBusinessProvider,
    TikTokProvider,
    TwitterProvider,
    assert_ok,
)

__all__ = [
    "FacebookProvider",
    "GoogleYouTubeProvider",
    "HttpPlatformProvider",
    "InstagramBusinessProvider",
    "MockPlatformProvider",
    "TikTokProvider",
    "TwitterProvider",
    "assert_ok",
]
