"""Provider/verification-context compatibility rules."""

from types import MappingProxyType

from aeobro.domain.error import ProviderContextError
from aeobro.domain.value import Platform, VerificationContext

# Providers that name a proof channel rather than an account
_NEVER_ACCOUNTS = frozenset({"domain", "dns", "txt"})

ALLOWED_PROVIDERS: MappingProxyType[VerificationContext, frozenset[str]] = (
    MappingProxyType(
        {
            VerificationContext.BIO_CODE: frozenset(
                p.value
                for p in (
                    Platform.GITHUB,
                    Platform.X,
                    Platform.INSTAGRAM,
                    Platform.TIKTOK,
                    Platform.YOUTUBE,
                    Platform.SUBSTACK,
                    Platform.ETSY,
                    Platform.LINKEDIN,
                    Platform.FACEBOOK,
                )
            ),
            VerificationContext.OAUTH: frozenset(
                p.value
                for p in (
                    Platform.GOOGLE,
                    Platform.YOUTUBE,
                    Platform.FACEBOOK,
                    Platform.INSTAGRAM,
                    Platform.TWITTER,
                    Platform.X,
                    Platform.TIKTOK,
                )
            ),
            # DNS proofs never create platform accounts
            VerificationContext.DNS_TXT: frozenset(),
        }
    )
)


def is_provider_allowed(provider: str, context: VerificationContext) -> bool:
    """Whether a provider may produce a platform account in a context."""
    key = (provider or "").strip().lower()
    if key in _NEVER_ACCOUNTS:
        return False
    return key in ALLOWED_PROVIDERS[context]


def assert_provider_allowed(provider: str, context: VerificationContext) -> None:
    """Reject incompatible provider/context pairs.

    Raises:
        ProviderContextError: If the pair is not allowed
    """
    if not is_provider_allowed(provider, context):
        raise ProviderContextError(provider, context.value)


def parse_platform(provider: str, context: VerificationContext) -> Platform:
    """Resolve a provider name allowed in a context to its Platform.

    Raises:
        ProviderContextError: If the pair is not allowed
    """
    assert_provider_allowed(provider, context)
    return Platform(provider.strip().lower())
