"""Bio page adapter."""

from .fetcher import HttpBioPageFetcher, MockBioPageFetcher, collapse_whitespace

__all__ = ["HttpBioPageFetcher", "MockBioPageFetcher", "collapse_whitespace"]
