"""
FastAPI dependencies for dependency injection.

This module wires the store, alias strategy and cache into a URLService
for each request.

Pattern: Dependency Injection
- Loose coupling between components
- Easy to test (override a dependency with a fake)
- Flexible (swap implementations via config)
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from shortify.cache.factory import AliasCacheFactory, CacheBackend
from shortify.cache.strategies import AliasCache
from shortify.config import settings
from shortify.database.connection import get_db
from shortify.services.alias_factory import AliasStrategyFactory
from shortify.services.alias_strategies import AliasStrategy
from shortify.services.url_service import URLService
from shortify.store.factory import StoreBackend, StoreFactory
from shortify.store.strategies import URLStore


@lru_cache()
def get_cache() -> AliasCache:
    """
    Get cache instance (singleton).

    Returns:
        AliasCache instance based on settings
    """
    backend = CacheBackend(settings.cache_backend)
    return AliasCacheFactory.create(backend)


def get_alias_strategy() -> AliasStrategy:
    """Get the configured alias strategy (cached by the factory)"""
    return AliasStrategyFactory.create_strategy()


def get_url_store(db: Session = Depends(get_db)) -> URLStore:
    """
    Get the configured URL store.

    The database backend wraps this request's session; the memory
    backend is shared by every request.
    """
    backend = StoreBackend(settings.store_backend)
    return StoreFactory.create(backend, db=db)


def get_url_service(
    store: URLStore = Depends(get_url_store),
    alias_strategy: AliasStrategy = Depends(get_alias_strategy),
    cache: AliasCache = Depends(get_cache),
) -> URLService:
    """
    Get URLService with all dependencies injected.

    Controllers depend on the service only; the service depends on the
    store, alias strategy and cache.
    """
    return URLService(
        store=store,
        alias_strategy=alias_strategy,
        cache=cache,
        max_alias_attempts=settings.max_alias_attempts,
    )
