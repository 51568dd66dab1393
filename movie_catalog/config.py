"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables or .env (never hardcoded in prod)
    - get_settings() is cached (lru_cache) — single instance per process
    - Token secrets for access and refresh tokens are distinct settings

Design Decisions:
    - Development defaults for every non-secret setting: works with docker-compose
    - env="prod" with placeholder secrets is rejected at startup
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PLACEHOLDER_SECRET = "change-me"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    env: Literal["dev", "prod"] = "dev"

    # Database
    database_url: str = (
        "postgresql+asyncpg://movie:movie@db:5432/movie"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs use postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Auth
    hash_rounds: int = 10
    access_token_secret: str = _PLACEHOLDER_SECRET
    refresh_token_secret: str = _PLACEHOLDER_SECRET + "-refresh"
    access_token_ttl_seconds: int = 300
    refresh_token_ttl_seconds: int = 60 * 60 * 24

    # Files
    public_dir: str = "public"
    max_upload_bytes: int = 20_000_000

    # Caching / throttling
    movie_recent_ttl_ms: int = 3000
    slow_request_ms: int = 1000

    # Scheduled jobs
    scheduler_enabled: bool = True
    orphan_file_max_age_hours: int = 24
    orphan_cleanup_interval_minutes: int = 60
    like_count_interval_minutes: int = 10

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @model_validator(mode="after")
    def require_real_secrets_in_prod(self) -> "Settings":
        if self.env == "prod" and (
            self.access_token_secret.startswith(_PLACEHOLDER_SECRET)
            or self.refresh_token_secret.startswith(_PLACEHOLDER_SECRET)
        ):
            raise ValueError(
                "ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must be set in prod",
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
