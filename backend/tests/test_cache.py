"""
Tests for the Redis taxonomy cache

Tests cover:
- TAXONOMY layer (5min TTL) and POPULAR layer (15min TTL)
- Key generation from hashed parameters
- Invalidation by kind across layers
- Hit/miss statistics
- Connection handling (with Redis unavailable)
"""

import json
from typing import List
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from jobboard.services.cache import (
    CacheLayer,
    TaxonomyCache,
    get_cache,
    hash_content,
)


class TestHashContent:
    """Test content hashing for cache keys."""

    def test_hash_content_returns_16_char_hex(self):
        result = hash_content({"page": 1})
        assert len(result) == 16
        assert all(c in "0123456789abcdef" for c in result)

    def test_hash_content_dict_order_irrelevant(self):
        """Same params in any order produce the same key."""
        assert hash_content({"a": 1, "b": 2}) == hash_content({"b": 2, "a": 1})

    def test_hash_content_different_params(self):
        assert hash_content({"page": 1}) != hash_content({"page": 2})


class TestCacheLayer:
    def test_taxonomy_ttl(self):
        assert CacheLayer.TAXONOMY.ttl == 300

    def test_popular_ttl(self):
        assert CacheLayer.POPULAR.ttl == 900


class AsyncIteratorMock:
    """Mock async iterator for scan_iter."""

    def __init__(self, items: List):
        self.items = items
        self.index = 0

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self.index >= len(self.items):
            raise StopAsyncIteration
        item = self.items[self.index]
        self.index += 1
        return item


@pytest.fixture
def mock_redis():
    """Create a mock Redis client."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.setex = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.scan_iter = MagicMock(return_value=AsyncIteratorMock([]))
    redis.ping = AsyncMock(return_value=True)
    redis.close = AsyncMock()
    return redis


@pytest.fixture
def cache_service(mock_redis):
    """TaxonomyCache wired to the mock Redis client."""
    cache = TaxonomyCache(redis_url="redis://localhost:6379")
    cache.redis = mock_redis
    return cache


class TestGetSet:
    @pytest.mark.asyncio
    async def test_miss_returns_none(self, cache_service, mock_redis):
        result = await cache_service.get(CacheLayer.TAXONOMY, "domains", {})

        assert result is None
        assert cache_service.stats["misses"]["tax"] == 1

    @pytest.mark.asyncio
    async def test_hit_returns_decoded_value(self, cache_service, mock_redis):
        mock_redis.get.return_value = json.dumps([{"name": "Engineering"}])

        result = await cache_service.get(CacheLayer.TAXONOMY, "domains", {})

        assert result == [{"name": "Engineering"}]
        assert cache_service.stats["hits"]["tax"] == 1

    @pytest.mark.asyncio
    async def test_key_format(self, cache_service, mock_redis):
        params = {"page": 2, "category": "technical"}
        await cache_service.get(CacheLayer.TAXONOMY, "skills", params)

        mock_redis.get.assert_awaited_once_with(f"tax:skills:{hash_content(params)}")

    @pytest.mark.asyncio
    async def test_set_uses_layer_ttl(self, cache_service, mock_redis):
        assert await cache_service.set(CacheLayer.POPULAR, "popular_skills", {"limit": 10}, [1, 2])

        key, ttl, payload = mock_redis.setex.await_args.args
        assert key.startswith("pop:popular_skills:")
        assert ttl == 900
        assert json.loads(payload) == [1, 2]

    @pytest.mark.asyncio
    async def test_configured_taxonomy_ttl(self, mock_redis):
        cache = TaxonomyCache(redis_url="redis://localhost:6379", taxonomy_ttl=60)
        cache.redis = mock_redis

        await cache.set(CacheLayer.TAXONOMY, "domains", {}, [])
        await cache.set(CacheLayer.POPULAR, "popular_domains", {}, [])

        ttls = [call.args[1] for call in mock_redis.setex.await_args_list]
        assert ttls == [60, 900]


class TestInvalidation:
    @pytest.mark.asyncio
    async def test_invalidate_scans_every_layer(self, cache_service, mock_redis):
        mock_redis.scan_iter = MagicMock(side_effect=[
            AsyncIteratorMock(["tax:domains:abc", "tax:domains:def"]),
            AsyncIteratorMock([]),
        ])
        mock_redis.delete.return_value = 2

        deleted = await cache_service.invalidate("domains")

        assert deleted == 2
        mock_redis.delete.assert_awaited_once_with("tax:domains:abc", "tax:domains:def")
        patterns = [call.kwargs["match"] for call in mock_redis.scan_iter.call_args_list]
        assert patterns == ["tax:domains:*", "pop:domains:*"]

    @pytest.mark.asyncio
    async def test_invalidate_nothing_cached(self, cache_service, mock_redis):
        assert await cache_service.invalidate("skills") == 0
        mock_redis.delete.assert_not_awaited()


class TestStats:
    def test_get_stats_returns_hit_rates(self, cache_service):
        cache_service.stats["hits"]["tax"] = 80
        cache_service.stats["misses"]["tax"] = 20

        stats = cache_service.get_stats()

        assert stats["tax"]["hit_rate"] == 0.8
        assert stats["pop"]["hit_rate"] == 0.0


class TestConnectionHandling:
    @pytest.mark.asyncio
    async def test_graceful_degradation_on_redis_unavailable(self, cache_service, mock_redis):
        mock_redis.get.side_effect = ConnectionError("Redis unavailable")

        result = await cache_service.get(CacheLayer.TAXONOMY, "domains", {})

        assert result is None
        assert cache_service.stats["misses"]["tax"] == 1

    @pytest.mark.asyncio
    async def test_set_failure_returns_false(self, cache_service, mock_redis):
        mock_redis.setex.side_effect = ConnectionError("Redis unavailable")
        assert await cache_service.set(CacheLayer.TAXONOMY, "domains", {}, []) is False

    @pytest.mark.asyncio
    async def test_logs_warning_on_connection_error(self, cache_service, mock_redis):
        mock_redis.get.side_effect = ConnectionError("Redis unavailable")

        with patch("jobboard.services.cache.logger") as mock_logger:
            await cache_service.get(CacheLayer.TAXONOMY, "domains", {})
            mock_logger.warning.assert_called()

    @pytest.mark.asyncio
    async def test_health_check(self, cache_service, mock_redis):
        assert await cache_service.health_check() is True

    @pytest.mark.asyncio
    async def test_health_check_returns_false_on_error(self, cache_service, mock_redis):
        mock_redis.ping.side_effect = ConnectionError("Connection refused")
        assert await cache_service.health_check() is False

    @pytest.mark.asyncio
    async def test_close(self, cache_service, mock_redis):
        await cache_service.close()
        mock_redis.close.assert_awaited_once()
        assert cache_service.redis is None


class TestGetCacheFactory:
    @pytest.fixture(autouse=True)
    def reset_singleton(self):
        """Reset the global cache instance before each test."""
        import jobboard.services.cache as cache_module
        cache_module._cache_instance = None
        yield
        cache_module._cache_instance = None

    @pytest.mark.asyncio
    async def test_get_cache_returns_singleton(self):
        with patch("jobboard.services.cache.TaxonomyCache") as mock_class:
            mock_class.return_value = MagicMock()

            cache1 = await get_cache("redis://localhost:6379")
            cache2 = await get_cache("redis://localhost:6379")

            assert cache1 is cache2
            mock_class.assert_called_once()

    @pytest.mark.asyncio
    async def test_get_cache_uses_settings(self):
        with patch("jobboard.services.cache.get_settings") as mock_settings:
            mock_settings.return_value.redis_url = "redis://custom:6379"
            mock_settings.return_value.taxonomy_cache_ttl = 120
            with patch("jobboard.services.cache.TaxonomyCache") as mock_class:
                mock_class.return_value = MagicMock()

                await get_cache()

                mock_class.assert_called_with(redis_url="redis://custom:6379", taxonomy_ttl=120)
