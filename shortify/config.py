import string
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below

    Settings are read once at startup and never reloaded.
    """

    # Environment
    environment: str = "development"
    debug: bool = True

    # Application
    app_name: str = "Shortify"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # URL store
    store_backend: str = "database"  # Options: "database", "memory"
    database_url: str = "sqlite:///./shortify.db"

    # Alias generation
    alias_charset: str = Field(
        default=string.ascii_letters + string.digits,
        min_length=1,
    )
    alias_length: int = Field(default=10, gt=0)
    # None keeps retrying on alias collisions until an insert succeeds
    max_alias_attempts: Optional[int] = Field(default=None, gt=0)

    # Lookup cache
    cache_backend: str = "memory"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = 3600  # Seconds an entry stays cached, 0 disables writes
    cache_max_entries: int = Field(default=10000, gt=0)  # In-memory backend only

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
