import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient
from rolodex.libs.cache import CacheService, cache_invalidate, cached_response
from rolodex.libs.cache.providers.memory import MemoryCacheProvider
from rolodex.libs.cache.schemas import MemoryCacheConfiguration

from tests.helpers import FakeClock


def build_app(clock: FakeClock) -> tuple[FastAPI, dict[str, int]]:
    app = FastAPI()
    app.state.cache = CacheService(MemoryCacheProvider(MemoryCacheConfiguration(default_ttl=10), clock=clock))
    calls = {"items": 0, "missing": 0}

    @app.get("/items")
    @cached_response("items")
    async def list_items(request: Request):
        calls["items"] += 1
        return [{"callNumber": calls["items"]}]

    @app.get("/missing")
    @cached_response("items")
    async def missing(request: Request):
        calls["missing"] += 1
        return JSONResponse(status_code=404, content={"detail": "nope"})

    @app.post("/items")
    @cache_invalidate("items")
    async def create_item(request: Request):
        return {"created": True}

    return app, calls


class TestCachedResponse:
    def setup_method(self):
        self.clock = FakeClock()
        self.app, self.calls = build_app(self.clock)
        self.client = TestClient(self.app)

    def test_second_request_is_served_from_cache(self):
        first = self.client.get("/items")
        second = self.client.get("/items")

        assert first.headers["X-Cache"] == "MISS"
        assert second.headers["X-Cache"] == "HIT"
        assert second.content == first.content
        assert second.headers["content-type"] == "application/json"
        assert self.calls["items"] == 1

    def test_query_string_is_part_of_the_key(self):
        self.client.get("/items?page=1")
        response = self.client.get("/items?page=2")

        assert response.headers["X-Cache"] == "MISS"
        assert self.calls["items"] == 2

    def test_entry_refreshes_after_ttl(self):
        self.client.get("/items")
        self.clock.advance(10)

        response = self.client.get("/items")

        assert response.headers["X-Cache"] == "MISS"
        assert response.json() == [{"callNumber": 2}]

    def test_errors_are_not_cached(self):
        self.client.get("/missing")
        response = self.client.get("/missing")

        assert response.status_code == 404
        assert self.calls["missing"] == 2

    def test_invalidation_clears_namespace(self):
        self.client.get("/items")
        self.client.post("/items")

        response = self.client.get("/items")

        assert response.headers["X-Cache"] == "MISS"
        assert self.calls["items"] == 2


class TestCacheServiceKeys:
    def test_generate_key_is_stable_and_namespaced(self):
        service = CacheService(MemoryCacheProvider(MemoryCacheConfiguration()))

        key = service.generate_key("users", "/users?page=1")

        assert key.startswith("users:")
        assert key == service.generate_key("users", "/users?page=1")
        assert key != service.generate_key("users", "/users?page=2")


class TestNamespaceGeneration:
    def setup_method(self):
        self.service = CacheService(MemoryCacheProvider(MemoryCacheConfiguration()))

    @pytest.mark.asyncio
    async def test_generation_is_stable_until_invalidated(self):
        first = await self.service.namespace_generation("users")

        assert await self.service.namespace_generation("users") == first

        await self.service.invalidate_namespace("users")

        assert await self.service.namespace_generation("users") != first

    @pytest.mark.asyncio
    async def test_namespaces_have_their_own_generation(self):
        users = await self.service.namespace_generation("users")
        await self.service.invalidate_namespace("items")

        assert await self.service.namespace_generation("users") == users
