from fastapi.testclient import TestClient
from rolodex.core.settings.base import Settings

TEST_SECRET_KEY = "rolodex-test-secret-key-0123456789abcdef0123456789abcdef"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_settings(**overrides) -> Settings:
    values = {
        "ENVIRONMENT": "local",
        "AUTH_SECRET_KEY": TEST_SECRET_KEY,
        "STORE_BACKEND": "memory",
        "CACHE_BACKEND": "memory",
        "RATE_LIMIT_ENABLED": False,
        "PASSWORD_HASH_ROUNDS": 4,
        "BACKEND_CORS_ORIGINS": [],
    }
    values.update(overrides)
    return Settings(**values)


def register_and_login(client: TestClient, username: str = "alice01", password: str = "password123") -> str:
    response = client.post(
        "/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    assert response.status_code == 201, response.text

    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["accessToken"]


def account_count(client: TestClient) -> int:
    """Number of stored accounts, read through the client's event loop."""
    return client.portal.call(client.app.state.store.accounts.count)
