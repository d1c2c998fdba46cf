"""Unit tests for provider/context compatibility."""

import pytest

from aeobro.domain.error import ProviderContextError, ValidationError
from aeobro.domain.service.provider_guard import (
    assert_provider_allowed,
    is_provider_allowed,
    parse_platform,
)
from aeobro.domain.value import Platform, VerificationContext


class TestIsProviderAllowed:
    """Tests for is_provider_allowed."""

    @pytest.mark.parametrize(
        "provider", ["github", "x", "instagram", "substack", "etsy", "linkedin"]
    )
    def test_bio_code_providers(self, provider):
        assert is_provider_allowed(provider, VerificationContext.BIO_CODE)

    @pytest.mark.parametrize(
        "provider", ["google", "youtube", "facebook", "instagram", "twitter", "tiktok"]
    )
    def test_oauth_providers(self, provider):
        assert is_provider_allowed(provider, VerificationContext.OAUTH)

    def test_github_has_no_oauth_proof(self):
        assert not is_provider_allowed("github", VerificationContext.OAUTH)

    @pytest.mark.parametrize("provider", ["domain", "dns", "txt"])
    def test_proof_channels_are_never_accounts(self, provider):
        """Channel names must be rejected in every context."""
        for context in VerificationContext:
            assert not is_provider_allowed(provider, context)

    def test_dns_context_allows_nothing(self):
        assert not is_provider_allowed("google", VerificationContext.DNS_TXT)

    def test_input_is_normalized(self):
        assert is_provider_allowed("  GitHub ", VerificationContext.BIO_CODE)

    def test_empty_provider(self):
        assert not is_provider_allowed("", VerificationContext.OAUTH)


class TestAssertProviderAllowed:
    """Tests for assert_provider_allowed and parse_platform."""

    def test_raises_validation_error(self):
        with pytest.raises(ProviderContextError) as exc_info:
            assert_provider_allowed("domain", VerificationContext.OAUTH)

        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.provider == "domain"

    def test_parse_platform(self):
        assert parse_platform(" YouTube", VerificationContext.OAUTH) == Platform.YOUTUBE

    def test_parse_platform_rejects_unknown(self):
        with pytest.raises(ProviderContextError):
            parse_platform("myspace", VerificationContext.OAUTH)
