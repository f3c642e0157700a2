"""
URL store module for Shortify.
Implements Strategy Pattern for swappable storage backends.
"""

from .exceptions import (
    DataStoreError,
    DuplicateAliasError,
    OriginalAlreadyStoredError,
    RecordNotFoundError,
    StoreError,
)
from .factory import StoreBackend, StoreFactory
from .strategies import InMemoryURLStore, SQLAlchemyURLStore, URLStore

__all__ = [
    "URLStore",
    "InMemoryURLStore",
    "SQLAlchemyURLStore",
    "StoreFactory",
    "StoreBackend",
    "StoreError",
    "OriginalAlreadyStoredError",
    "DuplicateAliasError",
    "RecordNotFoundError",
    "DataStoreError",
]
