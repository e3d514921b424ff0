from unittest.mock import patch

import jwt
from fastapi.testclient import TestClient
from rolodex.core.exceptions import errors
from rolodex.main import create_app

from tests.helpers import TEST_SECRET_KEY, account_count, make_settings


class TestRegister:
    def test_register_success(self, client):
        response = client.post(
            "/auth/register",
            json={"username": "alice01", "email": "alice@example.com", "password": "password123"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"
        assert body["userId"]

    def test_register_lists_every_violation(self, client):
        response = client.post("/auth/register", json={"username": "al", "email": "not-an-email", "password": "short"})

        assert response.status_code == 400
        assert response.headers["content-type"] == "application/problem+json"
        messages = {error["field"]: error["message"] for error in response.json()["errors"]}
        assert messages == {
            "username": "Username must be at least 5 characters",
            "email": "Invalid Email",
            "password": "Password must be at least 8 characters",
        }
        assert account_count(client) == 0

    def test_register_missing_fields(self, client):
        response = client.post("/auth/register", json={})

        assert response.status_code == 400
        assert len(response.json()["errors"]) == 3
        assert account_count(client) == 0

    def test_register_duplicate_username(self, client):
        payload = {"username": "alice01", "email": "alice@example.com", "password": "password123"}
        client.post("/auth/register", json=payload)

        response = client.post("/auth/register", json={**payload, "email": "other@example.com"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Username already exists"
        assert account_count(client) == 1

    def test_register_duplicate_email(self, client):
        payload = {"username": "alice01", "email": "alice@example.com", "password": "password123"}
        client.post("/auth/register", json=payload)

        response = client.post("/auth/register", json={**payload, "username": "bobby01"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Email already exists"
        assert account_count(client) == 1

    def test_register_store_failure(self, client, app):
        with patch.object(
            app.state.store.accounts,
            "get_by_username",
            side_effect=errors.DatabaseError(detail="connection lost"),
        ):
            response = client.post(
                "/auth/register",
                json={"username": "alice01", "email": "alice@example.com", "password": "password123"},
            )

        assert response.status_code == 500
        assert response.json()["detail"] == "Registration failed"
        assert response.json()["error"] == "connection lost"


class TestLogin:
    def setup_method(self):
        self.credentials = {"username": "alice01", "password": "password123"}

    def _register(self, client):
        return client.post("/auth/register", json={**self.credentials, "email": "alice@example.com"}).json()

    def test_login_success(self, client):
        registered = self._register(client)

        response = client.post("/auth/login", json=self.credentials)

        assert response.status_code == 200
        claims = jwt.decode(response.json()["accessToken"], TEST_SECRET_KEY, algorithms=["HS256"])
        assert claims["userId"] == registered["userId"]
        assert claims["username"] == "alice01"
        assert claims["exp"] - claims["iat"] == 3600

    def test_login_unknown_username(self, client):
        response = client.post("/auth/login", json=self.credentials)

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid credentials"
        assert account_count(client) == 0

    def test_login_wrong_password(self, client):
        self._register(client)

        response = client.post("/auth/login", json={**self.credentials, "password": "wrong-password"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"
        assert account_count(client) == 1

    def test_login_store_failure(self, client, app):
        with patch.object(
            app.state.store.accounts,
            "get_by_username",
            side_effect=errors.DatabaseError(detail="connection lost"),
        ):
            response = client.post("/auth/login", json=self.credentials)

        assert response.status_code == 500
        assert response.json()["detail"] == "Login failed"


class TestAuthRateLimit:
    def test_auth_routes_have_their_own_limit(self):
        app = create_app(make_settings(RATE_LIMIT_ENABLED=True, RATE_LIMIT_PER_MINUTE=1000, AUTH_RATE_LIMIT="2/minute"))

        with TestClient(app) as client:
            statuses = [client.post("/auth/login", json={"username": "x", "password": "y"}).status_code for _ in range(3)]
            health = client.get("/health")

        assert statuses == [400, 400, 429]
        assert health.status_code == 200
