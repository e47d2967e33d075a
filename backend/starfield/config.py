"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden by an environment variable of the same name
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults run out-of-the-box: JSON file under ./data, permissive CORS, port 4001
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from starfield.core.domain_types import DEFAULT_POSITION_BOUND, StoreBackend


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    store_backend: StoreBackend = StoreBackend.FILE
    data_file: str = "data/stars.json"
    database_url: str = "sqlite+aiosqlite:///data/stars.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs come as postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Star rules
    position_bound: float = DEFAULT_POSITION_BOUND
    strict_signs: bool = False
    legacy_timestamp_ids: bool = True
    serialize_writes: bool = True

    # API
    cors_origins: list[str] = ["*"]
    static_dir: str = "dist"
    host: str = "0.0.0.0"
    port: int = 4001

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
