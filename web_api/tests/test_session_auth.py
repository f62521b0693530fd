"""Tests for JWT session authentication."""

import sys
from pathlib import Path

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from web_api.auth import create_jwt, get_current_user, verify_jwt


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "test-secret-for-session-tests-0123456789")


@pytest.fixture
def app_with_user_route():
    """Create test app with an authenticated route."""
    app = FastAPI()

    @app.get("/whoami")
    async def whoami(user=Depends(get_current_user)):
        return {"user_id": user["user_id"], "username": user["username"]}

    return app


class TestJwt:
    def test_round_trip(self):
        payload = verify_jwt(create_jwt(42, "teacher1"))
        assert payload["sub"] == "42"
        assert payload["username"] == "teacher1"

    def test_garbage_token_is_invalid(self):
        assert verify_jwt("not-a-token") is None

    def test_missing_secret_raises(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET")
        with pytest.raises(ValueError):
            create_jwt(42, "teacher1")


class TestGetCurrentUser:
    def test_rejects_missing_cookie(self, app_with_user_route):
        client = TestClient(app_with_user_route)
        assert client.get("/whoami").status_code == 401

    def test_rejects_invalid_token(self, app_with_user_route):
        client = TestClient(app_with_user_route)
        client.cookies.set("session", "fake-token")
        assert client.get("/whoami").status_code == 401

    def test_accepts_valid_session(self, app_with_user_route):
        client = TestClient(app_with_user_route)
        client.cookies.set("session", create_jwt(42, "teacher1"))
        response = client.get("/whoami")
        assert response.status_code == 200
        assert response.json() == {"user_id": 42, "username": "teacher1"}
