"""End-to-end tests for scheduled job endpoints."""

from datetime import datetime, timedelta, timezone

import pytest

from aeobro.domain.value import PlanStatus, UnpublishReason, Visibility
from tests.e2e.conftest import CRON_SECRET

AUTH = {"Authorization": f"Bearer {CRON_SECRET}"}


class TestJobAuthorization:
    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/jobs/profile-retention"),
            ("post", "/jobs/profile-retention"),
            ("post", "/jobs/domain-recheck"),
        ],
    )
    def test_missing_secret(self, client, method, path):
        response = getattr(client, method)(path)

        assert response.status_code == 401

    def test_wrong_secret(self, client):
        response = client.post(
            "/jobs/profile-retention", headers={"Authorization": "Bearer nope"}
        )

        assert response.status_code == 401

    def test_query_secret(self, client):
        response = client.get("/jobs/profile-retention", params={"secret": CRON_SECRET})

        assert response.status_code == 200

    def test_unconfigured_secret(self, client, monkeypatch):
        monkeypatch.delenv("RETENTION__CRON_SECRET")

        response = client.post("/jobs/domain-recheck", headers=AUTH)

        assert response.status_code == 401


class TestRetentionJobs:
    def test_plan_status_then_sweep(self, client, seed_profile):
        """A profile lapsed past its window is soft-deleted by the sweep."""
        now = datetime.now(timezone.utc)
        due = seed_profile(
            visibility=Visibility.UNPUBLISHED,
            unpublish_reason=UnpublishReason.SUBSCRIPTION_LAPSED,
            plan_status=PlanStatus.CANCELED,
            retention_until=now - timedelta(days=1),
        )
        active = seed_profile()

        lapsed = client.post(
            "/jobs/plan-status",
            headers=AUTH,
            json={"user_id": str(active.user_id), "plan_status": "canceled"},
        )
        swept = client.post("/jobs/profile-retention", headers=AUTH)
        again = client.post("/jobs/profile-retention", headers=AUTH)

        assert lapsed.status_code == 200
        assert lapsed.json()["visibility"] == "UNPUBLISHED"
        assert swept.json() == {"ok": True, "processed": 1, "batch": 1}
        assert again.json()["processed"] == 0
        assert client.get(f"/syndication/{due.slug}").status_code == 404

    def test_plan_status_unknown_user(self, client):
        response = client.post(
            "/jobs/plan-status",
            headers=AUTH,
            json={
                "user_id": "00000000-0000-0000-0000-000000000000",
                "plan_status": "active",
            },
        )

        assert response.status_code == 404

    def test_batch_size_bounds(self, client):
        response = client.get(
            "/jobs/profile-retention", headers=AUTH, params={"batch_size": 0}
        )

        assert response.status_code == 422

    def test_domain_recheck(self, client):
        response = client.post("/jobs/domain-recheck", headers=AUTH, json={"limit": 5})

        assert response.status_code == 200
        assert response.json()["scanned"] == 0
