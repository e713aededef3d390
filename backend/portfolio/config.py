"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default: the app runs with no environment at all
    - get_settings() is cached (lru_cache) — single instance per process
    - create_app() takes a Settings explicitly; only the module-level app uses get_settings()

Design Decisions:
    - NODE_ENV accepted as an alias of ENVIRONMENT for existing .env files
    - Database and JWT blocks are placeholders: read and validated, consumed by nothing yet
"""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 3001
    environment: str = Field(
        "development",
        validation_alias=AliasChoices("environment", "node_env"),
    )

    # Storage
    data_dir: Path = Path("data")
    logs_dir: Path = Path("logs")
    public_dir: Path = Path("public")

    # API
    cors_origins: list[str] = ["*"]
    recent_posts_limit: int = 5

    # Rate limiting
    rate_limit_enabled: bool = True
    api_rate_limit: int = 100
    api_rate_window_seconds: int = 15 * 60
    create_rate_limit: int = 5
    create_rate_window_seconds: int = 60

    # Observability
    log_level: str = "info"
    log_format: str = "json"

    # Future database (unused)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "study_portfolio"
    db_user: str = "root"
    db_password: str = ""

    # Future JWT auth (unused)
    jwt_secret: str = "fallback-secret-change-this"
    jwt_expires_in: str = "24h"

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
