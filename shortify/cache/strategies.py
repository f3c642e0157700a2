"""
Alias cache strategies using Strategy Pattern.
Allows switching between different cache backends (Redis, In-Memory, Null).

The cache only ever maps an alias to its original URL. Aliases never change
once created, so entries are never invalidated; the TTL and size bound exist
only to keep the cache from growing with the store.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Callable, Optional, Tuple

import redis

from shortify.models.record import URLRecord

logger = logging.getLogger(__name__)

KEY_PREFIX = "alias:"


def cache_key(alias: str) -> str:
    return f"{KEY_PREFIX}{alias}"


class AliasCache(ABC):
    """
    Abstract base class for alias caches.

    All methods are async because cache operations involve I/O (network for Redis).
    A cache never raises: a failed read is a miss and a failed write is ignored.
    """

    @abstractmethod
    async def get_original(self, alias: str) -> Optional[str]:
        """
        Return the cached original URL for `alias`, or None on a miss.
        """
        pass

    @abstractmethod
    async def remember(self, record: URLRecord) -> bool:
        """
        Cache the alias -> original mapping of a stored record.

        Returns:
            True if the entry was written, False otherwise
        """
        pass


class RedisAliasCache(AliasCache):
    """
    Redis-backed alias cache.

    Shared between all app instances, so a lookup warmed by one worker
    is a hit for every other worker. Redis expires entries after `ttl`.
    Used in production environments.
    """

    def __init__(self, redis_client, ttl: int):
        """
        Args:
            redis_client: Redis client instance (redis.Redis)
            ttl: Seconds an entry lives in Redis
        """
        self.redis = redis_client
        self.ttl = ttl

    async def get_original(self, alias: str) -> Optional[str]:
        try:
            value = self.redis.get(cache_key(alias))
            return value.decode('utf-8') if value else None
        except redis.RedisError as e:
            logger.warning("Redis get error for alias %s: %s", alias, e)
            return None

    async def remember(self, record: URLRecord) -> bool:
        if self.ttl <= 0:
            return False
        try:
            return bool(self.redis.setex(cache_key(record.alias), self.ttl, record.original))
        except redis.RedisError as e:
            logger.warning("Redis set error for alias %s: %s", record.alias, e)
            return False


class InMemoryAliasCache(AliasCache):
    """
    Bounded in-process alias cache.

    Entries expire `ttl` seconds after they were written and the oldest
    entry is evicted once `max_entries` is reached, so memory use stays
    flat however many aliases the store holds.

    Used in development and single-process deployments.
    """

    def __init__(
        self,
        ttl: int,
        max_entries: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[str, float]]" = OrderedDict()
        self._lock = threading.Lock()

    async def get_original(self, alias: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(alias)
            if entry is None:
                return None
            original, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[alias]
                return None
            return original

    async def remember(self, record: URLRecord) -> bool:
        if self.ttl <= 0:
            return False
        with self._lock:
            self._entries.pop(record.alias, None)
            self._entries[record.alias] = (record.original, self._clock() + self.ttl)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class NullAliasCache(AliasCache):
    """
    Null Object Pattern - cache that does nothing.

    Used when caching is disabled; every lookup goes to the store.
    """

    async def get_original(self, alias: str) -> Optional[str]:
        """Always a miss"""
        return None

    async def remember(self, record: URLRecord) -> bool:
        return False
