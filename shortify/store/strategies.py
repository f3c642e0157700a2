"""
URL store strategies using Strategy Pattern.
Allows switching between an in-process store and a SQLAlchemy-backed one.
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shortify.models.record import URLRecord
from shortify.models.url import URL
from shortify.store.exceptions import (
    DataStoreError,
    DuplicateAliasError,
    OriginalAlreadyStoredError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)


class URLStore(ABC):
    """
    Abstract base class for URL stores.

    A store owns the persisted records and enforces both uniqueness rules
    (original URL and alias) atomically: two concurrent `add` calls can
    never both succeed with the same original or the same alias.
    """

    @abstractmethod
    async def add(self, record: URLRecord) -> int:
        """
        Insert a record whose id is not set yet.

        Args:
            record: The record to insert

        Returns:
            The id assigned to the new record

        Raises:
            OriginalAlreadyStoredError: If the original URL is already stored
            DuplicateAliasError: If the alias is already taken
            DataStoreError: If the backing store fails
        """
        pass

    @abstractmethod
    async def find_by_alias(self, alias: str) -> URLRecord:
        """
        Look up a record by exact alias.

        Raises:
            RecordNotFoundError: If no record has this alias
            DataStoreError: If the backing store fails
        """
        pass


class InMemoryURLStore(URLStore):
    """
    In-process store using two Python dicts.

    One lock covers both uniqueness checks and the insert, so the
    check-then-write sequence is atomic across threads and tasks.
    Ids come from a counter and are never handed out twice.

    Used in development/testing environments.
    """

    def __init__(self):
        self._by_original: Dict[str, URLRecord] = {}
        self._by_alias: Dict[str, URLRecord] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    async def add(self, record: URLRecord) -> int:
        with self._lock:
            if record.original in self._by_original:
                raise OriginalAlreadyStoredError(record.original)
            if record.alias in self._by_alias:
                raise DuplicateAliasError(record.alias)

            stored = record.with_id(next(self._ids))
            self._by_original[stored.original] = stored
            self._by_alias[stored.alias] = stored

        return stored.id

    async def find_by_alias(self, alias: str) -> URLRecord:
        with self._lock:
            record = self._by_alias.get(alias)

        if record is None:
            raise RecordNotFoundError(alias)
        return record

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_alias)


class SQLAlchemyURLStore(URLStore):
    """
    Relational store backed by the `urls` table.

    Uniqueness is enforced by the table's unique constraints. When an
    insert violates one, the store re-queries to find out which key
    collided, so the mapping does not depend on driver error messages.

    Note: Async for interface consistency, DB calls are sync (fast).
    Because nothing inside `add` or `find_by_alias` awaits, cancellation
    is only observed before or after a call: an insert that has started
    runs to commit or rollback, and the caller sees CancelledError at
    its next await.
    """

    def __init__(self, db: Session):
        self.db = db

    async def add(self, record: URLRecord) -> int:
        url = URL(original=record.original, alias=record.alias)
        try:
            self.db.add(url)
            self.db.flush()  # Constraint violations surface here
            new_id = url.id
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise self._classify_violation(record) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DataStoreError("Failed to add URL") from e

        return new_id

    async def find_by_alias(self, alias: str) -> URLRecord:
        try:
            url = self.db.scalars(select(URL).where(URL.alias == alias)).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DataStoreError("Failed to find URL by alias") from e

        if url is None:
            raise RecordNotFoundError(alias)
        return URLRecord(original=url.original, alias=url.alias, id=url.id)

    def _classify_violation(self, record: URLRecord) -> Exception:
        """Map a unique-constraint violation to the key that collided"""
        try:
            if self._exists(URL.original == record.original):
                return OriginalAlreadyStoredError(record.original)
            if self._exists(URL.alias == record.alias):
                return DuplicateAliasError(record.alias)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning("Could not classify integrity error: %s", e)

        return DataStoreError("Integrity error on an unknown constraint")

    def _exists(self, clause) -> bool:
        return self.db.scalars(select(URL.id).where(clause)).first() is not None
