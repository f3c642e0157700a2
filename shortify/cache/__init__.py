"""
Alias lookup cache: maps an alias to its original URL in front of the store.
"""

from .factory import AliasCacheFactory, CacheBackend
from .strategies import (
    AliasCache,
    InMemoryAliasCache,
    NullAliasCache,
    RedisAliasCache,
    cache_key,
)

__all__ = [
    "AliasCache",
    "AliasCacheFactory",
    "CacheBackend",
    "InMemoryAliasCache",
    "NullAliasCache",
    "RedisAliasCache",
    "cache_key",
]
