"""
Factory for the process-wide alias cache.
"""

import logging
from enum import Enum

from shortify.config import Settings, settings as default_settings
from .strategies import AliasCache, InMemoryAliasCache, NullAliasCache, RedisAliasCache

logger = logging.getLogger(__name__)


class CacheBackend(Enum):
    """Available cache backends"""
    REDIS = "redis"
    MEMORY = "memory"
    NULL = "null"


class AliasCacheFactory:
    """
    Builds one alias cache per process from settings.

    Every cache it builds gets the configured TTL, and the in-memory one
    also gets the configured size bound. An unreachable Redis degrades to
    the in-memory cache rather than failing startup.
    """

    _instance: AliasCache = None

    @classmethod
    def create(cls, backend: CacheBackend, config: Settings = default_settings) -> AliasCache:
        """
        Create or return the cached alias cache.

        Args:
            backend: Type of cache backend (from enum)
            config: Settings supplying TTL, size bound and Redis URL

        Returns:
            Singleton AliasCache instance
        """
        if cls._instance is None:
            cls._instance = cls._build(backend, config)
        return cls._instance

    @classmethod
    def _build(cls, backend: CacheBackend, config: Settings) -> AliasCache:
        if backend == CacheBackend.NULL:
            logger.info("Alias cache disabled")
            return NullAliasCache()

        if backend == CacheBackend.REDIS:
            import redis

            try:
                client = redis.from_url(
                    config.redis_url,
                    decode_responses=False,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )
                client.ping()
                logger.info("Redis alias cache initialized (ttl=%ds)", config.cache_ttl)
                return RedisAliasCache(client, ttl=config.cache_ttl)
            except redis.RedisError as e:
                logger.warning("Redis connection failed, using in-memory alias cache: %s", e)

        elif backend != CacheBackend.MEMORY:
            raise ValueError(f"Unknown cache backend: {backend}")

        logger.info(
            "In-memory alias cache initialized (ttl=%ds, max_entries=%d)",
            config.cache_ttl,
            config.cache_max_entries,
        )
        return InMemoryAliasCache(ttl=config.cache_ttl, max_entries=config.cache_max_entries)

    @classmethod
    def clear_instance(cls):
        """Forget the cached instance (for testing)"""
        cls._instance = None
