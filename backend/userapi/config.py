"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - DATABASE_URL has no default: startup fails fast when it is missing
    - get_settings() is cached (lru_cache) - single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Plain driver URLs are rewritten to their async drivers (asyncpg, aiosqlite)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_to_async_driver(cls, v: str) -> str:
        """Hosting platforms hand out sync URLs; the engine needs async drivers."""
        if isinstance(v, str):
            for prefix, replacement in _ASYNC_DRIVERS.items():
                if v.startswith(prefix):
                    return v.replace(prefix, replacement, 1)
        return v

    database_pool_size: int = 10
    database_pool_timeout: float = 3.0
    database_create_schema: bool = True

    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
