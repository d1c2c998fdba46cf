"""End-to-end tests for platform verification endpoints."""

import pytest

from aeobro.domain.service import BioPageFetcher


class TestPlatformVerificationEndpoints:
    """OAuth and code-in-bio verification through the HTTP API."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("post", "/verify/platform/start"),
            ("get", "/verify/platform/accounts"),
        ],
    )
    def test_requires_auth(self, client, method, path):
        response = getattr(client, method)(path)

        assert response.status_code == 401

    def test_start_returns_marker(self, client, login):
        login()

        response = client.post("/verify/platform/start")

        assert response.status_code == 200
        assert response.json()["marker"].startswith("aeobro-verify-")

    def test_oauth_link_list_and_disconnect(self, client, login):
        login()

        linked = client.post(
            "/verify/platform/check",
            json={"provider": "x", "access_token": "tok1"},
        )
        listed = client.get("/verify/platform/accounts")
        account_id = linked.json()["account"]["id"]
        removed = client.delete(f"/verify/platform/accounts/{account_id}")

        assert linked.status_code == 200
        assert linked.json()["account"]["provider"] == "twitter"
        assert [a["id"] for a in listed.json()["accounts"]] == [account_id]
        assert removed.status_code == 200
        assert removed.json()["verification_status"] == "UNVERIFIED"

    def test_disconnect_unknown_account(self, client, login):
        login()

        response = client.delete(
            "/verify/platform/accounts/00000000-0000-0000-0000-000000000000"
        )

        assert response.status_code == 404

    def test_upstream_failure_is_reported(self, client, login):
        login()

        response = client.post(
            "/verify/platform/check",
            json={"provider": "facebook", "access_token": "bad-token"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "UPSTREAM_ERROR"

    def test_domain_is_not_a_platform(self, client, login):
        login()

        response = client.post(
            "/verify/platform/check",
            json={"provider": "domain", "access_token": "tok1"},
        )

        assert response.status_code == 400

    def test_bio_code_flow(self, client, login, resolve):
        login()
        fetcher = resolve(BioPageFetcher)

        generated = client.post(
            "/verify/bio-code/generate", json={"platform": "github"}
        ).json()
        not_yet = client.post(
            "/verify/bio-code/check", json={"platform": "github", "handle": "octocat"}
        )
        fetcher.set_page("github", "octocat", f"hello {generated['code']}")
        found = client.post(
            "/verify/bio-code/check", json={"platform": "github", "handle": "octocat"}
        )

        assert not_yet.status_code == 200
        assert not_yet.json()["ok"] is False
        assert found.json()["ok"] is True
        assert found.json()["account"]["method"] == "BIO_CODE"

    @pytest.mark.parametrize(
        "profile_url,status_code",
        [
            ("http://[::1", 422),
            ("javascript:alert(1)", 422),
            ("https://attacker.example/octocat", 400),
        ],
    )
    def test_bio_check_rejects_bad_profile_url(
        self, client, login, resolve, profile_url, status_code
    ):
        login()
        fetcher = resolve(BioPageFetcher)
        client.post("/verify/bio-code/generate", json={"platform": "github"})

        response = client.post(
            "/verify/bio-code/check",
            json={"platform": "github", "profile_url": profile_url},
        )

        assert response.status_code == status_code
        assert fetcher.requests == []

    def test_refresh(self, client, login):
        login()

        response = client.post(
            "/verify/platform/refresh",
            json={"tokens": {"tiktok": "tok1", "substack": "tok2"}},
        )

        assert response.status_code == 200
        results = {r["provider"]: r for r in response.json()["results"]}
        assert results["tiktok"]["ok"] is True
        assert results["substack"]["error"] == "UNSUPPORTED_PROVIDER"
