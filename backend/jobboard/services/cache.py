"""
Redis Cache for Filter Options

The job listing page renders its filter widgets from the domain and skill
taxonomies on every request. Those lists change only through admin
actions, so they are cached in Redis and invalidated on admin writes.

Cache Layers:
    - TAXONOMY (5min TTL): domain list, skill list/page, company list
    - POPULAR (15min TTL): popular domains/skills for the landing page

Cache Key Patterns:
    - tax:{kind}:{params_hash}
    - pop:{kind}:{params_hash}

Redis being unavailable is never an error: reads miss and writes are
dropped, so callers fall through to the database.

Usage:
    cache = await get_cache()

    cached = await cache.get(CacheLayer.TAXONOMY, "domains", {})
    if cached is None:
        domains = [...]
        await cache.set(CacheLayer.TAXONOMY, "domains", {}, domains)

    await cache.invalidate("domains")
"""

import json
import hashlib
import logging
from enum import Enum
from typing import Any, Dict, Optional

import redis.asyncio as redis

from jobboard.config import get_settings
from jobboard.middleware.metrics import record_cache_hit, record_cache_miss

logger = logging.getLogger(__name__)


class CacheLayer(Enum):
    """Cache layers with key prefix and TTL in seconds."""

    TAXONOMY = ("tax", 300)     # 5 minutes
    POPULAR = ("pop", 900)      # 15 minutes

    def __init__(self, prefix: str, ttl: int):
        self.prefix = prefix
        self._ttl = ttl

    @property
    def ttl(self) -> int:
        return self._ttl


def hash_content(*args: Any) -> str:
    """
    Generate a 16-character hex hash from content.

    Dict keys are sorted for consistent hashing.
    """
    content = json.dumps(args, sort_keys=True, default=str)
    return hashlib.sha256(content.encode()).hexdigest()[:16]


class TaxonomyCache:
    """
    Redis cache for taxonomy listings with graceful degradation.

    Attributes:
        redis: Async Redis client
        stats: Dict tracking hits/misses per layer
    """

    def __init__(self, redis_url: str, taxonomy_ttl: Optional[int] = None):
        self.redis_url = redis_url
        self.redis: Optional[redis.Redis] = None
        self.taxonomy_ttl = taxonomy_ttl
        self.stats: Dict[str, Dict[str, int]] = {
            "hits": {layer.prefix: 0 for layer in CacheLayer},
            "misses": {layer.prefix: 0 for layer in CacheLayer},
        }

    async def _ensure_connected(self) -> Optional[redis.Redis]:
        """Ensure Redis connection is established."""
        if self.redis is None:
            try:
                self.redis = redis.from_url(
                    self.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                )
            except Exception as e:
                logger.warning(f"Failed to connect to Redis: {e}")
                return None
        return self.redis

    def _key(self, layer: CacheLayer, kind: str, params: Dict[str, Any]) -> str:
        return f"{layer.prefix}:{kind}:{hash_content(params)}"

    def _ttl_for(self, layer: CacheLayer) -> int:
        if layer is CacheLayer.TAXONOMY and self.taxonomy_ttl:
            return self.taxonomy_ttl
        return layer.ttl

    def _miss(self, layer: CacheLayer) -> None:
        self.stats["misses"][layer.prefix] += 1
        record_cache_miss(layer.prefix)

    async def get(self, layer: CacheLayer, kind: str, params: Dict[str, Any]) -> Optional[Any]:
        """
        Get a cached JSON value.

        Returns:
            Decoded value or None on miss/error
        """
        try:
            client = await self._ensure_connected()
            if not client:
                self._miss(layer)
                return None

            cached = await client.get(self._key(layer, kind, params))
            if cached:
                self.stats["hits"][layer.prefix] += 1
                record_cache_hit(layer.prefix)
                return json.loads(cached)

            self._miss(layer)
            return None

        except Exception as e:
            logger.warning(f"Redis get error ({kind}): {e}")
            self._miss(layer)
            return None

    async def set(self, layer: CacheLayer, kind: str, params: Dict[str, Any], value: Any) -> bool:
        """
        Cache a JSON-serializable value.

        Returns:
            True if cached successfully, False otherwise
        """
        try:
            client = await self._ensure_connected()
            if not client:
                return False

            await client.setex(
                self._key(layer, kind, params),
                self._ttl_for(layer),
                json.dumps(value, default=str),
            )
            return True

        except Exception as e:
            logger.warning(f"Redis set error ({kind}): {e}")
            return False

    async def invalidate(self, kind: str) -> int:
        """
        Drop every cached entry of ``kind`` across all layers.

        Returns:
            Number of keys deleted
        """
        try:
            client = await self._ensure_connected()
            if not client:
                return 0

            keys = []
            for layer in CacheLayer:
                async for key in client.scan_iter(match=f"{layer.prefix}:{kind}:*"):
                    keys.append(key)

            if keys:
                return await client.delete(*keys)
            return 0

        except Exception as e:
            logger.warning(f"Redis delete error ({kind}): {e}")
            return 0

    async def health_check(self) -> bool:
        try:
            client = await self._ensure_connected()
            if not client:
                return False

            await client.ping()
            return True

        except Exception as e:
            logger.warning(f"Redis health check failed: {e}")
            return False

    def get_stats(self) -> Dict[str, Dict[str, Any]]:
        """Cache statistics including hit rates per layer."""
        stats = {}

        for layer in CacheLayer:
            hits = self.stats["hits"][layer.prefix]
            misses = self.stats["misses"][layer.prefix]
            total = hits + misses

            stats[layer.prefix] = {
                "hits": hits,
                "misses": misses,
                "total": total,
                "hit_rate": hits / total if total > 0 else 0.0,
            }

        return stats

    async def close(self) -> None:
        """Close Redis connection."""
        if self.redis:
            await self.redis.close()
            self.redis = None


# ==================== Factory Function ====================

_cache_instance: Optional[TaxonomyCache] = None


async def get_cache(redis_url: Optional[str] = None) -> TaxonomyCache:
    """
    Get or create cache singleton.

    Args:
        redis_url: Optional Redis URL (uses settings if not provided)
    """
    global _cache_instance

    if _cache_instance is None:
        settings = get_settings()
        url = redis_url or settings.redis_url
        _cache_instance = TaxonomyCache(redis_url=url, taxonomy_ttl=settings.taxonomy_cache_ttl)

    return _cache_instance


async def close_cache() -> None:
    global _cache_instance

    if _cache_instance is not None:
        await _cache_instance.close()
        _cache_instance = None
