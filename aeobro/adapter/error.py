"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """Platform identity API rejected a token or lacks a required resource.

    Attributes:
        code: Stable machine-readable error code (e.g. NO_CHANNEL)
        status: Upstream HTTP status when one was received
    """

    def __init__(self, code: str, message: str, status: int | None = None) -> None:
        self.code = code
        self.message = message
        self.status = status
        super().__init__(f"{code}: {message}")


class DnsLookupError(AdapterError):
    """TXT lookup failed at the resolver layer (timeout, SERVFAIL, bad DoH reply)."""

    pass


class FetchError(AdapterError):
    """Public bio page could not be fetched."""

    pass
