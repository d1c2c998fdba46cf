"""Token and marker generation.

One random token backs every proof format:

    DNS TXT value      aeobro-site-verify=<token>
    legacy TXT values  aeobro-verification=<token>, <token>
    bio marker         aeobro-verify-<token>
"""

import secrets
import string

from .base import Service

DNS_RECORD_PREFIX = "aeobro-site-verify="
LEGACY_RECORD_PREFIX = "aeobro-verification="
BIO_MARKER_PREFIX = "aeobro-verify-"

_BIO_CODE_ALPHABET = string.ascii_uppercase + string.digits


def mint_token(bits: int = 128) -> str:
    """Mint a cryptographically random hex token.

    Args:
        bits: Token entropy; must be a positive multiple of 8

    Returns:
        Lowercase hex string of bits/4 characters

    Raises:
        ValueError: If bits is not a positive multiple of 8
    """
    if bits <= 0 or bits % 8:
        raise ValueError("Token length must be a positive multiple of 8 bits")
    return secrets.token_hex(bits // 8)


def dns_record_value(token: str) -> str:
    """Preferred TXT value for a token."""
    return f"{DNS_RECORD_PREFIX}{token}"


def legacy_record_values(token: str) -> list[str]:
    """TXT values still accepted for older instructions."""
    return [f"{LEGACY_RECORD_PREFIX}{token}", token]


def accepted_record_values(token: str) -> list[str]:
    """All accepted TXT values in match order."""
    return [dns_record_value(token), *legacy_record_values(token)]


def bio_marker(token: str) -> str:
    """Bio marker for a token."""
    return f"{BIO_MARKER_PREFIX}{token}"


class TokenService(Service):
    """Domain service minting proof material."""

    def __init__(self, token_bits: int = 128) -> None:
        """Initialize token service.

        Args:
            token_bits: Entropy of DNS tokens and bio markers
        """
        self.token_bits = token_bits

    def new_dns_token(self) -> str:
        """Mint a token for a domain claim."""
        return mint_token(self.token_bits)

    def new_bio_marker(self) -> str:
        """Mint a profile-level bio marker."""
        return bio_marker(mint_token(self.token_bits))

    def new_bio_code(self, platform: str) -> str:
        """Mint a per-platform code, e.g. AEOBRO-GITHUB-7QK2M9XA."""
        suffix = "".join(secrets.choice(_BIO_CODE_ALPHABET) for _ in range(8))
        return f"AEOBRO-{platform.upper()}-{suffix}"

    def new_email_token(self) -> str:
        """Mint a token for the domain email-click link."""
        return mint_token(96)
