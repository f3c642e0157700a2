"""
Test configuration and fixtures for Shortify.
This centralizes all test setup, making individual tests clean.
"""

import os

# Point the app at a throwaway database before any shortify module reads settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest
from fastapi.testclient import TestClient

from main import app
from shortify.cache.strategies import InMemoryAliasCache
from shortify.database.connection import Base, SessionLocal, engine, get_db
from shortify.dependencies import get_cache
from shortify.services.alias_factory import AliasStrategyFactory
from shortify.store.factory import StoreFactory
from shortify.store.strategies import InMemoryURLStore, SQLAlchemyURLStore


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    This ensures tests are isolated and don't affect each other.
    """
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(params=["memory", "database"])
def url_store(request, db_session):
    """Run a test once against each store backend"""
    if request.param == "memory":
        return InMemoryURLStore()
    return SQLAlchemyURLStore(db_session)


@pytest.fixture(scope="function")
def cache():
    return InMemoryAliasCache(ttl=3600, max_entries=1000)


@pytest.fixture(scope="function")
def client(db_session, cache):
    """
    Create a test client with database and cache dependencies overridden.
    This is the main fixture that tests will use.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_singletons():
    """Factories cache instances at class level; start every test clean"""
    yield
    StoreFactory.clear_instance()
    AliasStrategyFactory.clear_instances()
