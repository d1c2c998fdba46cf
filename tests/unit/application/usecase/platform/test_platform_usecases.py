"""Unit tests for the platform verification use cases."""

from uuid import uuid4

import pytest
import pytest_asyncio

from aeobro.application.usecase.platform import (
    CheckBioCodeRequest,
    CheckBioCodeUseCase,
    CheckPlatformOAuthRequest,
    CheckPlatformOAuthUseCase,
    DisconnectPlatformAccountRequest,
    DisconnectPlatformAccountUseCase,
    GenerateBioCodeRequest,
    GenerateBioCodeUseCase,
    ListPlatformAccountsRequest,
    ListPlatformAccountsUseCase,
    RefreshPlatformAccountsRequest,
    RefreshPlatformAccountsUseCase,
)
from aeobro.domain.error import ProviderContextError
from aeobro.domain.repository import ProfileRepository
from aeobro.domain.service import BioPageFetcher
from aeobro.domain.value import UserId
from tests.factories import make_profile
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


@pytest_asyncio.fixture
async def user_id(unit_env) -> str:
    owner = UserId(uuid4())
    await (await unit_env.get(ProfileRepository)).save(make_profile(owner))
    return str(owner)


class TestCheckPlatformOAuthUseCase:
    """Tests for CheckPlatformOAuthUseCase."""

    @pytest.mark.asyncio
    async def test_links_account(self, unit_env, user_id):
        use_case = await unit_env.get(CheckPlatformOAuthUseCase)

        response = await use_case.execute(
            CheckPlatformOAuthRequest(
                user_id=user_id, provider="YouTube", access_token="tok1"
            )
        )

        assert response.ok is True
        assert response.account.provider == "youtube"
        assert response.account.status == "VERIFIED"
        assert response.account.method == "OAUTH"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("provider", ["domain", "github", "myspace"])
    async def test_rejects_providers_without_oauth(self, unit_env, user_id, provider):
        use_case = await unit_env.get(CheckPlatformOAuthUseCase)

        with pytest.raises(ProviderContextError):
            await use_case.execute(
                CheckPlatformOAuthRequest(
                    user_id=user_id, provider=provider, access_token="tok1"
                )
            )


class TestBioCodeUseCases:
    """Tests for GenerateBioCodeUseCase and CheckBioCodeUseCase."""

    @pytest.mark.asyncio
    async def test_generate_then_check(self, unit_env, user_id):
        generate = await unit_env.get(GenerateBioCodeUseCase)
        check = await unit_env.get(CheckBioCodeUseCase)
        fetcher = await unit_env.get(BioPageFetcher)

        generated = await generate.execute(
            GenerateBioCodeRequest(user_id=user_id, platform="etsy")
        )
        fetcher.set_page("etsy", "MyShop", f"Handmade goods {generated.code}")

        response = await check.execute(
            CheckBioCodeRequest(
                user_id=user_id,
                platform="etsy",
                profile_url="https://www.etsy.com/shop/MyShop",
            )
        )

        assert generated.platform == "etsy"
        assert response.ok is True
        assert response.account.provider == "etsy"
        assert response.account.method == "BIO_CODE"
        assert response.account.handle == "MyShop"

    @pytest.mark.asyncio
    async def test_check_not_found(self, unit_env, user_id):
        generate = await unit_env.get(GenerateBioCodeUseCase)
        check = await unit_env.get(CheckBioCodeUseCase)
        await generate.execute(GenerateBioCodeRequest(user_id=user_id, platform="x"))

        response = await check.execute(
            CheckBioCodeRequest(user_id=user_id, platform="x", handle="@acme")
        )

        assert response.ok is False
        assert response.account is None
        assert response.message


class TestAccountManagementUseCases:
    """Tests for listing, disconnecting and refreshing accounts."""

    @pytest.mark.asyncio
    async def test_list_and_disconnect(self, unit_env, user_id):
        link = await unit_env.get(CheckPlatformOAuthUseCase)
        list_accounts = await unit_env.get(ListPlatformAccountsUseCase)
        disconnect = await unit_env.get(DisconnectPlatformAccountUseCase)

        linked = await link.execute(
            CheckPlatformOAuthRequest(user_id=user_id, provider="tiktok", access_token="t")
        )
        listed = await list_accounts.execute(ListPlatformAccountsRequest(user_id=user_id))

        response = await disconnect.execute(
            DisconnectPlatformAccountRequest(
                user_id=user_id, account_id=linked.account.id
            )
        )

        assert [a.id for a in listed.accounts] == [linked.account.id]
        assert response.ok is True
        assert response.verification_status == "UNVERIFIED"
        remaining = await list_accounts.execute(
            ListPlatformAccountsRequest(user_id=user_id)
        )
        assert remaining.accounts == []

    @pytest.mark.asyncio
    async def test_refresh_reports_each_provider(self, unit_env, user_id):
        use_case = await unit_env.get(RefreshPlatformAccountsUseCase)

        response = await use_case.execute(
            RefreshPlatformAccountsRequest(
                user_id=user_id,
                tokens={"google": "tok1", "facebook": "bad-token", "github": "tok2"},
            )
        )

        results = {r.provider: r for r in response.results}
        assert results["google"].ok is True
        assert results["google"].account_id is not None
        assert results["facebook"].ok is False
        assert results["facebook"].error == "UPSTREAM_ERROR"
        assert results["github"].ok is False
        assert results["github"].error == "UNSUPPORTED_PROVIDER"
