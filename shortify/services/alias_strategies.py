"""
Alias generation strategies for Shortify.
Uses Strategy Pattern so the service only depends on `AliasStrategy`.
"""

import secrets
from abc import ABC, abstractmethod


class AliasGenerationError(Exception):
    """Raised when no alias can be produced (e.g. the entropy source failed)."""


class AliasStrategy(ABC):
    """Abstract base class for alias generation strategies"""

    @abstractmethod
    async def generate(self) -> str:
        """
        Generate a candidate alias.

        The candidate is not checked for uniqueness; the store rejects
        duplicates on insert.

        Returns:
            A candidate alias string

        Raises:
            AliasGenerationError: If no alias could be produced
        """
        pass


class RandomAliasStrategy(AliasStrategy):
    """
    Fixed-length random aliases drawn from a configured charset.

    Every character is an independent uniform draw from the OS CSPRNG
    (`secrets`), so aliases carry no state between calls and reveal
    nothing about the URL or the order of creation.
    """

    def __init__(self, charset: str, length: int):
        if not charset:
            raise ValueError("Alias charset must be a non-empty string")
        if length <= 0:
            raise ValueError(f"Alias length must be positive (given value: {length})")
        self.charset = charset
        self.length = length

    async def generate(self) -> str:
        """Generate a random alias of exactly `length` characters from `charset`"""
        try:
            return ''.join(
                self.charset[secrets.randbelow(len(self.charset))]
                for _ in range(self.length)
            )
        except (OSError, NotImplementedError) as e:
            raise AliasGenerationError("Secure random source is unavailable") from e
