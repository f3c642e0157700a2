import logging
from typing import Optional

from shortify.cache.strategies import AliasCache
from shortify.models.record import URLRecord
from shortify.services.alias_strategies import AliasGenerationError, AliasStrategy
from shortify.services.exceptions import (
    AliasGenerationFailedError,
    AliasSpaceExhaustedError,
    URLAlreadyExistsError,
    URLNotFoundError,
    UnknownError,
)
from shortify.store.exceptions import (
    DuplicateAliasError,
    OriginalAlreadyStoredError,
    RecordNotFoundError,
    StoreError,
)
from shortify.store.strategies import URLStore

logger = logging.getLogger(__name__)


class URLService:
    """
    URL Service with dependency injection for store, alias strategy and cache.

    - Store and alias strategy are injected (not created internally)
    - Easy to test (inject fakes that count calls or raise on demand)
    - Store-level errors are translated into domain errors here and only here
    """

    def __init__(
        self,
        store: URLStore,
        alias_strategy: AliasStrategy,
        cache: Optional[AliasCache] = None,
        max_alias_attempts: Optional[int] = None,
    ):
        """
        Initialize URL service with dependencies.

        Args:
            store: URL store that owns the records
            alias_strategy: Produces candidate aliases
            cache: Alias cache in front of the store (optional)
            max_alias_attempts: Give up after this many alias collisions.
                None retries until an insert succeeds.
        """
        if max_alias_attempts is not None and max_alias_attempts <= 0:
            raise ValueError("max_alias_attempts must be positive or None")
        self.store = store
        self.alias_strategy = alias_strategy
        self.cache = cache
        self.max_alias_attempts = max_alias_attempts

    async def create(self, original: str) -> URLRecord:
        """Shorten `original` and return the persisted record.

        Process:
        1. Generate a candidate alias (generation failure is not retried)
        2. Try to insert it
        3. Alias taken -> discard candidate, back to 1
        4. Original already stored -> URLAlreadyExistsError, never retried

        Raises:
            URLAlreadyExistsError: The original URL is already shortened
            AliasGenerationFailedError: No alias could be produced, or
                `max_alias_attempts` collisions happened in a row
            UnknownError: The store failed for any other reason
        """
        attempts = 0

        while True:
            try:
                alias = await self.alias_strategy.generate()
            except AliasGenerationError as e:
                logger.error("Alias generation failed: %s", e)
                raise AliasGenerationFailedError("Alias generation failed") from e

            attempts += 1
            try:
                url_id = await self.store.add(URLRecord(original=original, alias=alias))
            except DuplicateAliasError:
                logger.debug("Alias collision on attempt %d, regenerating", attempts)
                if self.max_alias_attempts is not None and attempts >= self.max_alias_attempts:
                    raise AliasSpaceExhaustedError(
                        f"No free alias after {attempts} attempts"
                    )
                continue
            except OriginalAlreadyStoredError as e:
                raise URLAlreadyExistsError("URL already exists") from e
            except StoreError as e:
                raise UnknownError("Failed to create URL") from e

            break

        record = URLRecord(original=original, alias=alias, id=url_id)
        logger.info("Created alias %s (id=%d, attempts=%d)", alias, url_id, attempts)

        if self.cache is not None:
            await self.cache.remember(record)

        return record

    async def get_by_alias(self, alias: str) -> URLRecord:
        """Resolve an alias using the Cache-Aside pattern.

        The returned record never carries an id (`id is None`), whether it
        came from the cache or the store; ids stay internal to creation.

        Raises:
            URLNotFoundError: Nothing is stored under `alias`
            UnknownError: The store failed for any other reason
        """
        if self.cache is not None:
            cached = await self.cache.get_original(alias)
            if cached:
                return URLRecord(original=cached, alias=alias)

        try:
            stored = await self.store.find_by_alias(alias)
        except RecordNotFoundError as e:
            raise URLNotFoundError(alias) from e
        except StoreError as e:
            raise UnknownError("Failed to get URL by alias") from e

        record = URLRecord(original=stored.original, alias=stored.alias)
        if self.cache is not None:
            await self.cache.remember(record)

        return record
