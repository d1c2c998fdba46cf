"""Fixtures for end-to-end API tests."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from aeobro.config import Settings
from aeobro.domain.repository import ProfileRepository
from aeobro.interface.api.app import create_app
from aeobro.util.jwt import create_token
from tests.di import build_test_container
from tests.factories import make_profile

CRON_SECRET = "e2e-cron-secret"


@pytest.fixture
def container(monkeypatch):
    """Test container with a cron secret configured."""
    monkeypatch.setenv("RETENTION__CRON_SECRET", CRON_SECRET)
    return build_test_container()


@pytest.fixture
def client(container):
    """Test client sharing the container's in-memory state."""
    with TestClient(create_app(container=container)) as test_client:
        yield test_client


@pytest.fixture
def resolve(client, container):
    """Resolve an APP-scoped dependency on the client's event loop."""

    def _resolve(dependency):
        return client.portal.call(container.get, dependency)

    return _resolve


@pytest.fixture
def seed_profile(client, resolve):
    """Save a profile and return it."""

    def _seed(**overrides):
        repository = resolve(ProfileRepository)
        return client.portal.call(repository.save, make_profile(**overrides))

    return _seed


@pytest.fixture
def login(client, seed_profile):
    """Seed a profile and sign the client in as its owner."""

    def _login(**overrides):
        profile = seed_profile(**overrides)
        token = create_token(str(profile.user_id), None, Settings().auth)
        client.cookies.set("auth_token", token)
        return profile

    return _login


@pytest.fixture
def anonymous_token():
    """Session for a user without a profile."""
    return create_token(str(uuid4()), None, Settings().auth)
