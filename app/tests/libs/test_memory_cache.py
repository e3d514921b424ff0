from types import SimpleNamespace

import pytest
from rolodex.libs.cache.exceptions import CacheConfigurationError
from rolodex.libs.cache.factory import CacheFactory
from rolodex.libs.cache.providers.memory import MemoryCacheProvider
from rolodex.libs.cache.schemas import MemoryCacheConfiguration

from tests.helpers import FakeClock


class TestMemoryCacheProvider:
    """Test cases for MemoryCacheProvider"""

    def setup_method(self):
        self.clock = FakeClock()
        self.provider = MemoryCacheProvider(MemoryCacheConfiguration(default_ttl=10, max_size=2), clock=self.clock)

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        await self.provider.set("users:a", {"status_code": 200})

        response = await self.provider.get("users:a")

        assert response.from_cache is True
        assert response.value == {"status_code": 200}
        assert response.ttl_remaining == 10

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self):
        await self.provider.set("users:a", "value")

        self.clock.advance(9.9)
        assert (await self.provider.get("users:a")).value == "value"

        self.clock.advance(0.2)
        response = await self.provider.get("users:a")

        assert response.from_cache is False
        assert response.value is None
        assert (await self.provider.get_stats())["total_keys"] == 0

    @pytest.mark.asyncio
    async def test_least_recently_used_is_evicted(self):
        await self.provider.set("a", 1)
        await self.provider.set("b", 2)
        await self.provider.get("a")

        await self.provider.set("c", 3)

        assert await self.provider.exists("a")
        assert not await self.provider.exists("b")
        assert await self.provider.exists("c")
        assert (await self.provider.get_stats())["evictions"] == 1

    @pytest.mark.asyncio
    async def test_expired_entries_are_dropped_before_evicting(self):
        await self.provider.set("a", 1, ttl=1)
        await self.provider.set("b", 2)
        self.clock.advance(2)

        await self.provider.set("c", 3)

        assert await self.provider.exists("b")
        assert (await self.provider.get_stats())["evictions"] == 0

    @pytest.mark.asyncio
    async def test_clear_by_pattern(self):
        await self.provider.set("users:a", 1)
        await self.provider.set("other", 2)

        response = await self.provider.clear("users:*")

        assert response.value == 1
        assert not await self.provider.exists("users:a")
        assert await self.provider.exists("other")

    @pytest.mark.asyncio
    async def test_values_are_isolated(self):
        value = {"items": [1]}
        await self.provider.set("a", value)
        value["items"].append(2)

        assert (await self.provider.get("a")).value == {"items": [1]}

    def test_rejects_empty_capacity(self):
        with pytest.raises(ValueError):
            MemoryCacheProvider(MemoryCacheConfiguration(max_size=0))

    @pytest.mark.asyncio
    async def test_key_with_whitespace_is_refused(self):
        response = await self.provider.set("users: a", 1)

        assert response.success is False
        assert "without whitespace" in response.error

    @pytest.mark.asyncio
    async def test_unserializable_value_is_refused(self):
        response = await self.provider.set("users:a", object())

        assert response.success is False
        assert response.error.startswith("Failed to serialize value")
        assert not await self.provider.exists("users:a")


class TestCacheFactory:
    """Test cases for CacheFactory"""

    def test_unknown_backend_is_a_configuration_error(self):
        with pytest.raises(CacheConfigurationError, match="Unsupported cache backend: memcached"):
            CacheFactory.get_configured_provider(SimpleNamespace(CACHE_BACKEND="memcached"))
