"""Tests for the auth endpoints through the real router."""

import base64

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from learnhub.core.modules.user.models import UserView
from learnhub.errors import AuthenticationError, UserError
from learnhub.web.auth import create_auth_middleware
from learnhub.web.error_handlers import user_error_handler
from learnhub.web.routers import auth_router


def basic(credentials: str) -> str:
    return "Basic " + base64.b64encode(credentials.encode("utf-8")).decode("ascii")


class FakeApp:
    """Stands in for App: one known user, sessions from a real TokenManager."""

    def __init__(self, token_manager, user):
        self._tokens = token_manager
        self._user = user

    def resolve_token(self, auth_token):
        return self._tokens.resolve_token(auth_token)

    async def login(self, email, password):
        if email != self._user.email or password != "secret":
            raise AuthenticationError("Invalid credentials", scheme="Basic")
        return self._tokens.issue_token(self._user.id), UserView.from_domain(self._user)

    async def logout(self, auth_token):
        if not self._tokens.revoke_token(auth_token):
            raise AuthenticationError("Invalid or expired session")


@pytest.fixture
def client(token_manager, mock_user):
    fake_app = FakeApp(token_manager, mock_user)
    app = FastAPI()
    app.state.app = fake_app
    app.middleware("http")(create_auth_middleware(fake_app.resolve_token))
    app.include_router(auth_router, prefix="/api/v1")
    app.add_exception_handler(UserError, user_error_handler)
    return TestClient(app)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestAuthFlow:
    def test_login_validate_logout(self, client, mock_user):
        response = client.post("/api/v1/auth/login", headers={"Authorization": basic("alice@example.com:secret")})
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "Bearer"
        assert body["user"]["email"] == "alice@example.com"
        token = body["access_token"]

        response = client.get("/api/v1/auth/validate-token", headers=bearer(token))
        assert response.status_code == 200
        assert response.json() == {"message": "Valid token", "user_id": str(mock_user.id)}

        assert client.post("/api/v1/auth/logout", headers=bearer(token)).status_code == 204

        response = client.get("/api/v1/auth/validate-token", headers=bearer(token))
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

        assert client.post("/api/v1/auth/logout", headers=bearer(token)).status_code == 401

    def test_login_wrong_password(self, client):
        response = client.post("/api/v1/auth/login", headers={"Authorization": basic("alice@example.com:wrong")})
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == 'Basic realm="user"'

    def test_login_without_credentials(self, client):
        response = client.post("/api/v1/auth/login")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == 'Basic realm="user"'

    def test_logout_without_token(self, client):
        assert client.post("/api/v1/auth/logout").status_code == 401

    def test_validate_garbage_token(self, client):
        assert client.get("/api/v1/auth/validate-token", headers=bearer("garbage")).status_code == 401
