"""
Factory for creating alias generation strategies.
Uses caching to avoid creating multiple instances.
"""

from enum import Enum
from shortify.services.alias_strategies import AliasStrategy, RandomAliasStrategy
from shortify.config import settings


class AliasStrategyType(Enum):
    """Available alias generation strategies"""
    RANDOM = "random"


class AliasStrategyFactory:
    """Factory for creating alias generation strategies with caching"""

    _instances = {}  # Cache for strategy instances

    @classmethod
    def create_strategy(
        cls,
        strategy_type: AliasStrategyType = AliasStrategyType.RANDOM
    ) -> AliasStrategy:
        """
        Create or return cached alias generation strategy.

        Charset and length come from settings, which are fixed for the
        lifetime of the process.

        Args:
            strategy_type: Type of strategy to create.

        Returns:
            A cached instance of an AliasStrategy

        Raises:
            ValueError: If strategy_type is unknown
        """
        if strategy_type in cls._instances:
            return cls._instances[strategy_type]

        if strategy_type == AliasStrategyType.RANDOM:
            instance = RandomAliasStrategy(
                charset=settings.alias_charset,
                length=settings.alias_length
            )
        else:
            raise ValueError(f"Unknown strategy type: {strategy_type}")

        cls._instances[strategy_type] = instance
        return instance

    @classmethod
    def clear_instances(cls):
        """Clear cached instances (for testing)"""
        cls._instances.clear()
