"""Configuration module using Pydantic Settings."""

import logging
from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheTTL(BaseModel):
    """Cache TTL in seconds per data type."""

    token_price: int = 60
    token_metadata: int = 600
    wallet_profile: int = 300
    transaction: int = 3600
    defi_protocol: int = 600
    jupiter_price: int = 60
    holder_data: int = 300


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote cache (Upstash REST endpoint or a redis:// URL)
    upstash_redis_rest_url: str = ""
    upstash_redis_rest_token: str = ""
    cache_prefix: str = "solenrich:"  # Namespace inside the shared store
    cache_socket_timeout: float = 5.0
    cache_ttl: CacheTTL = CacheTTL()

    # Fan-out
    parallel_timeout_seconds: float = 10.0

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for entry points."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
