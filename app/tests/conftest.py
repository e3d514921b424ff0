import pytest
from fastapi.testclient import TestClient
from rolodex.main import create_app

from tests.helpers import FakeClock, make_settings, register_and_login


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    return {"Authorization": f"Bearer {register_and_login(client)}"}
