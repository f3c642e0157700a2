"""Exceptions raised by URL store implementations.

Classes:
    StoreError:
        Base class for every store failure.

    OriginalAlreadyStoredError:
        The original URL is already stored (business-key collision).

    DuplicateAliasError:
        The alias is already taken by another record (generated-key collision).

    RecordNotFoundError:
        No record exists for the requested alias.

    DataStoreError:
        Any other failure of the backing store (connection, timeout, etc.).
"""


class StoreError(Exception):
    """Base class for URL store exceptions."""

    pass


class OriginalAlreadyStoredError(StoreError):
    """Raised when inserting a record whose original URL is already stored."""

    pass


class DuplicateAliasError(StoreError):
    """Raised when inserting a record whose alias is already taken."""

    pass


class RecordNotFoundError(StoreError):
    """Raised when no record matches the requested alias."""

    pass


class DataStoreError(StoreError):
    """Raised when the backing store fails.

    e.g. connection issues, timeouts, broken transactions, etc.
    """

    pass
