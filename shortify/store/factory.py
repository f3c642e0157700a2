"""
Factory for creating URL store instances.
"""

import logging
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from .strategies import InMemoryURLStore, SQLAlchemyURLStore, URLStore

logger = logging.getLogger(__name__)


class StoreBackend(Enum):
    """Available URL store backends"""
    MEMORY = "memory"
    DATABASE = "database"


class StoreFactory:
    """
    Simple factory for creating URL stores.

    The in-memory store is a process-wide singleton because it *is* the
    data. The database store is cheap and bound to one request session,
    so a new one is built per call.
    """

    _memory_instance: Optional[InMemoryURLStore] = None

    @classmethod
    def create(cls, backend: StoreBackend, db: Optional[Session] = None) -> URLStore:
        """
        Create a URL store for the given backend.

        Args:
            backend: Type of store backend (from enum)
            db: Database session, required for the database backend

        Returns:
            URLStore instance
        """
        if backend == StoreBackend.MEMORY:
            if cls._memory_instance is None:
                cls._memory_instance = InMemoryURLStore()
                logger.info("In-memory URL store initialized")
            return cls._memory_instance

        if backend == StoreBackend.DATABASE:
            if db is None:
                raise ValueError("Database store requires a session")
            return SQLAlchemyURLStore(db)

        raise ValueError(f"Unknown store backend: {backend}")

    @classmethod
    def clear_instance(cls):
        """Clear cached in-memory store (for testing)"""
        cls._memory_instance = None
