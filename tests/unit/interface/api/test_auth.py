"""Unit tests for session cookie handling."""

from uuid import uuid4

import pytest
from fastapi import HTTPException

from aeobro.config import AuthSettings
from aeobro.domain.service import JWTService
from aeobro.interface.api.auth import require_user


@pytest.fixture
def jwt_service():
    return JWTService(AuthSettings(jwt_secret="test-secret"))


class TestRequireUser:
    """Tests for require_user."""

    def test_valid_cookie(self, jwt_service):
        user_id = str(uuid4())
        token = jwt_service.create_token(user_id, "owner@example.com")

        payload = require_user(token, jwt_service)

        assert payload.user_id == user_id

    def test_missing_cookie(self, jwt_service):
        with pytest.raises(HTTPException) as exc_info:
            require_user(None, jwt_service)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Authentication required"

    def test_invalid_cookie(self, jwt_service):
        with pytest.raises(HTTPException) as exc_info:
            require_user("garbage", jwt_service)

        assert exc_info.value.status_code == 401

    def test_non_uuid_subject(self, jwt_service):
        token = jwt_service.create_token("did:plc:abc")

        with pytest.raises(HTTPException) as exc_info:
            require_user(token, jwt_service)

        assert exc_info.value.status_code == 401
