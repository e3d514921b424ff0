from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from rolodex.core.exceptions import errors
from rolodex.main import create_app

from tests.helpers import make_settings


class TestSecurityHeaders:
    def test_headers_are_set(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert response.headers["Cross-Origin-Opener-Policy"] == "same-origin"
        assert "Strict-Transport-Security" not in response.headers

    def test_hsts_outside_local(self):
        app = create_app(make_settings(ENVIRONMENT="staging"))

        with TestClient(app) as client:
            response = client.get("/health")

        assert response.headers["Strict-Transport-Security"].startswith("max-age=")


class TestRequestIds:
    def test_request_id_is_generated(self, client):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]
        assert "X-Process-Time" in response.headers

    def test_caller_request_id_is_ignored_by_default(self, client):
        response = client.get("/health", headers={"X-Request-ID": "caller-chosen-id"})

        assert response.headers["X-Request-ID"] != "caller-chosen-id"

    def test_caller_request_id_is_echoed_when_trusted(self):
        app = create_app(make_settings(TRUST_REQUEST_ID=True))

        with TestClient(app) as client:
            response = client.get("/health", headers={"X-Request-ID": "caller-chosen-id"})

        assert response.headers["X-Request-ID"] == "caller-chosen-id"


class TestGlobalRateLimit:
    def test_requests_over_the_limit_are_rejected(self):
        app = create_app(make_settings(RATE_LIMIT_ENABLED=True, RATE_LIMIT_PER_MINUTE=2))

        with TestClient(app) as client:
            responses = [client.get("/health") for _ in range(3)]

        assert [response.status_code for response in responses] == [200, 200, 429]
        assert responses[0].headers["X-RateLimit-Limit"] == "2"
        assert responses[2].headers["content-type"] == "application/problem+json"
        assert int(responses[2].headers["Retry-After"]) >= 1


class TestErrorRendering:
    def test_unknown_route(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/problem+json"

    def test_problem_document_shape(self, client):
        response = client.get("/users")

        body = response.json()
        assert body["status"] == 401
        assert body["title"]
        assert body["type"].endswith("/errors/missing_token")
        assert body["detail"] == "Unauthorized: Missing token"

    def test_body_validation_is_a_400_problem(self, client, auth_headers):
        response = client.post("/users", json=[], headers=auth_headers)

        body = response.json()
        assert response.status_code == 400
        assert response.headers["content-type"] == "application/problem+json"
        assert body["type"].endswith("/errors/validation_error")
        assert body["errors"]


class TestHealth:
    def test_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["store"] == {"status": "ok"}

    def test_degraded_cache(self, client, app):
        with patch.object(app.state.cache, "health_check", return_value=False):
            response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"


class TestStartup:
    def test_store_failure_aborts_startup(self):
        app = create_app(make_settings())

        with patch(
            "rolodex.domain.repositories.providers.memory.MemoryStore.connect",
            side_effect=errors.DatabaseError(detail="unreachable"),
        ):
            with pytest.raises(errors.DatabaseError):
                with TestClient(app):
                    pass

    def test_database_store_on_sqlite(self, tmp_path):
        app = create_app(
            make_settings(STORE_BACKEND="database", DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'app.db'}")
        )

        with TestClient(app) as client:
            response = client.post(
                "/auth/register",
                json={"username": "alice01", "email": "alice@example.com", "password": "password123"},
            )

        assert response.status_code == 201
