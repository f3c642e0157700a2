"""
Tests for URLService: the alias allocation and collision-retry protocol,
plus error translation from store to domain errors.
"""
import asyncio
import itertools

import pytest

from shortify.cache.strategies import InMemoryAliasCache
from shortify.models.record import URLRecord
from shortify.services.alias_strategies import (
    AliasGenerationError,
    AliasStrategy,
    RandomAliasStrategy,
)
from shortify.services.exceptions import (
    AliasGenerationFailedError,
    AliasSpaceExhaustedError,
    URLAlreadyExistsError,
    URLNotFoundError,
    UnknownError,
)
from shortify.services.url_service import URLService
from shortify.store.exceptions import (
    DataStoreError,
    DuplicateAliasError,
    OriginalAlreadyStoredError,
    RecordNotFoundError,
)
from shortify.store.strategies import InMemoryURLStore, URLStore


class SequenceAliasStrategy(AliasStrategy):
    """Hands out alias0, alias1, ... and counts calls"""

    def __init__(self):
        self.calls = 0

    async def generate(self) -> str:
        alias = f"alias{self.calls}"
        self.calls += 1
        return alias


class FailingAliasStrategy(AliasStrategy):

    async def generate(self) -> str:
        raise AliasGenerationError("no entropy")


class ScriptedStore(URLStore):
    """Raises the scripted errors in order, then succeeds"""

    def __init__(self, add_errors=(), find_error=None):
        self.add_errors = list(add_errors)
        self.find_error = find_error
        self.added = []
        self.lookups = 0
        self._ids = itertools.count(1)

    async def add(self, record: URLRecord) -> int:
        self.added.append(record)
        if self.add_errors:
            raise self.add_errors.pop(0)
        return next(self._ids)

    async def find_by_alias(self, alias: str) -> URLRecord:
        self.lookups += 1
        if self.find_error:
            raise self.find_error
        return URLRecord(original="https://example.com/stored", alias=alias, id=42)


ORIGINAL = "https://example.com/longlonglonglonglonglonglonglong"


class TestCreate:
    """Test alias allocation and retry behaviour"""

    def test_success_returns_persisted_record(self):
        service = URLService(ScriptedStore(), SequenceAliasStrategy())

        record = asyncio.run(service.create(ORIGINAL))

        assert record == URLRecord(original=ORIGINAL, alias="alias0", id=1)

    @pytest.mark.parametrize("collisions", [1, 3, 10])
    def test_retries_once_per_alias_collision(self, collisions):
        """N duplicate-alias errors mean exactly N+1 generate+insert attempts"""
        store = ScriptedStore(add_errors=[DuplicateAliasError()] * collisions)
        strategy = SequenceAliasStrategy()
        service = URLService(store, strategy)

        record = asyncio.run(service.create(ORIGINAL))

        assert strategy.calls == collisions + 1
        assert len(store.added) == collisions + 1
        assert record.alias == f"alias{collisions}"

    def test_each_retry_uses_fresh_alias(self):
        store = ScriptedStore(add_errors=[DuplicateAliasError()] * 2)
        service = URLService(store, SequenceAliasStrategy())

        asyncio.run(service.create(ORIGINAL))

        assert [r.alias for r in store.added] == ["alias0", "alias1", "alias2"]
        assert all(r.original == ORIGINAL and r.id is None for r in store.added)

    def test_original_already_stored_is_not_retried(self):
        store = ScriptedStore(add_errors=[OriginalAlreadyStoredError()])
        strategy = SequenceAliasStrategy()
        service = URLService(store, strategy)

        with pytest.raises(URLAlreadyExistsError):
            asyncio.run(service.create(ORIGINAL))

        assert strategy.calls == 1

    def test_generation_failure_is_not_retried(self):
        store = ScriptedStore()
        service = URLService(store, FailingAliasStrategy())

        with pytest.raises(AliasGenerationFailedError) as exc_info:
            asyncio.run(service.create(ORIGINAL))

        assert isinstance(exc_info.value.__cause__, AliasGenerationError)
        assert store.added == []

    def test_storage_failure_is_wrapped(self):
        cause = DataStoreError("connection refused")
        service = URLService(ScriptedStore(add_errors=[cause]), SequenceAliasStrategy())

        with pytest.raises(UnknownError) as exc_info:
            asyncio.run(service.create(ORIGINAL))

        assert exc_info.value.__cause__ is cause

    def test_attempt_cap_raises_alias_space_exhausted(self):
        store = ScriptedStore(add_errors=[DuplicateAliasError()] * 5)
        strategy = SequenceAliasStrategy()
        service = URLService(store, strategy, max_alias_attempts=3)

        with pytest.raises(AliasSpaceExhaustedError):
            asyncio.run(service.create(ORIGINAL))

        assert strategy.calls == 3

    def test_exhausted_alias_space_is_a_generation_failure(self):
        assert issubclass(AliasSpaceExhaustedError, AliasGenerationFailedError)

    def test_attempt_cap_not_reached(self):
        store = ScriptedStore(add_errors=[DuplicateAliasError()] * 2)
        service = URLService(store, SequenceAliasStrategy(), max_alias_attempts=3)

        record = asyncio.run(service.create(ORIGINAL))

        assert record.alias == "alias2"

    @pytest.mark.parametrize("attempts", [0, -1])
    def test_rejects_non_positive_attempt_cap(self, attempts):
        with pytest.raises(ValueError):
            URLService(ScriptedStore(), SequenceAliasStrategy(), max_alias_attempts=attempts)

    def test_create_warms_cache(self):
        cache = InMemoryAliasCache(ttl=60, max_entries=100)
        service = URLService(ScriptedStore(), SequenceAliasStrategy(), cache=cache)

        asyncio.run(service.create(ORIGINAL))

        assert asyncio.run(cache.get_original("alias0")) == ORIGINAL

    def test_cancelled_create_does_not_complete(self):
        """Cancelling the request task stops creation before anything is stored"""
        store = InMemoryURLStore()
        service = URLService(store, RandomAliasStrategy("abc", 3))

        async def cancel_before_running():
            task = asyncio.ensure_future(service.create(ORIGINAL))
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(cancel_before_running())

        assert len(store) == 0

    def test_cancelled_create_leaves_original_free(self, url_store):
        """Cancellation before a store call leaves nothing behind on either backend"""
        service = URLService(url_store, RandomAliasStrategy("abc", 3))

        async def cancel_before_running():
            task = asyncio.ensure_future(service.create(ORIGINAL))
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(cancel_before_running())

        record = asyncio.run(service.create(ORIGINAL))
        assert record.original == ORIGINAL


class TestGetByAlias:
    """Test alias lookup and error translation"""

    def test_returns_original_and_alias(self):
        service = URLService(ScriptedStore(), SequenceAliasStrategy())

        record = asyncio.run(service.get_by_alias("fjda89fadb"))

        assert record.original == "https://example.com/stored"
        assert record.alias == "fjda89fadb"

    def test_not_found_is_translated(self):
        store = ScriptedStore(find_error=RecordNotFoundError("fjda89fadb"))
        service = URLService(store, SequenceAliasStrategy())

        with pytest.raises(URLNotFoundError):
            asyncio.run(service.get_by_alias("fjda89fadb"))

    def test_storage_failure_is_wrapped(self):
        cause = DataStoreError("some retrieval error")
        service = URLService(ScriptedStore(find_error=cause), SequenceAliasStrategy())

        with pytest.raises(UnknownError) as exc_info:
            asyncio.run(service.get_by_alias("fjda89fadb"))

        assert exc_info.value.__cause__ is cause

    def test_cached_lookup_skips_store(self):
        store = ScriptedStore()
        service = URLService(store, SequenceAliasStrategy(), cache=InMemoryAliasCache(ttl=60, max_entries=100))

        first = asyncio.run(service.get_by_alias("fjda89fadb"))
        second = asyncio.run(service.get_by_alias("fjda89fadb"))

        assert store.lookups == 1
        assert second == first

    def test_lookup_never_carries_id(self):
        """Store hits and cache hits return the same shape"""
        store = ScriptedStore()
        service = URLService(store, SequenceAliasStrategy(), cache=InMemoryAliasCache(ttl=60, max_entries=100))

        from_store = asyncio.run(service.get_by_alias("fjda89fadb"))
        from_cache = asyncio.run(service.get_by_alias("fjda89fadb"))

        assert from_store.id is None
        assert from_cache.id is None
        assert from_store == URLRecord(original="https://example.com/stored", alias="fjda89fadb")

    def test_expired_cache_entry_goes_back_to_store(self):
        store = ScriptedStore()
        cache = InMemoryAliasCache(ttl=0, max_entries=100)
        service = URLService(store, SequenceAliasStrategy(), cache=cache)

        asyncio.run(service.get_by_alias("fjda89fadb"))
        asyncio.run(service.get_by_alias("fjda89fadb"))

        assert store.lookups == 2


class TestCreateThenLookup:
    """End-to-end through the real strategy and in-memory store"""

    def test_small_alias_space_scenario(self):
        service = URLService(InMemoryURLStore(), RandomAliasStrategy(charset="abc", length=3))

        created = asyncio.run(service.create("http://x"))

        assert len(created.alias) == 3
        assert set(created.alias) <= set("abc")

        with pytest.raises(URLAlreadyExistsError):
            asyncio.run(service.create("http://x"))

        found = asyncio.run(service.get_by_alias(created.alias))
        assert found.original == "http://x"
        assert found.alias == created.alias

    def test_lookup_of_unknown_alias(self):
        service = URLService(InMemoryURLStore(), RandomAliasStrategy(charset="abc", length=3))

        with pytest.raises(URLNotFoundError):
            asyncio.run(service.get_by_alias("zzz"))

    def test_fills_entire_alias_space(self):
        """With 2^3 possible aliases, 8 creates still all succeed via retries"""
        store = InMemoryURLStore()
        service = URLService(store, RandomAliasStrategy(charset="ab", length=3))

        aliases = {
            asyncio.run(service.create(f"https://example.com/{i}")).alias
            for i in range(8)
        }

        assert len(aliases) == 8
        assert len(store) == 8

    def test_full_alias_space_with_cap_fails(self):
        store = InMemoryURLStore()
        service = URLService(store, RandomAliasStrategy(charset="a", length=2), max_alias_attempts=5)
        asyncio.run(service.create("https://example.com/0"))

        with pytest.raises(AliasSpaceExhaustedError):
            asyncio.run(service.create("https://example.com/1"))
