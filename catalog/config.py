"""Application configuration and environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./library.db"

    # Application
    app_name: str = "Library Catalog"
    debug: bool = False
    log_level: str = "INFO"
    seed_on_start: bool = True

    # Catalog behaviour
    cache_ttl_seconds: float = 300.0  # Staleness window of the full-catalog read
    default_page_size: int = 10

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
