"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - database_url always carries an async driver (postgresql+asyncpg://)

Design Decisions:
    - DATABASE_URL wins; otherwise the discrete DB_HOST/DB_USER/... variables
      build it when DB_HOST is set; parts are URL-escaped, so credentials
      may contain any character
    - Defaults provided for all non-secret settings: works with docker-compose
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://postgres:postgres@db:5432/people"
    )
    db_host: str | None = None
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "people"
    db_ssl_mode: str | None = None

    database_pool_size: int = 20
    database_max_overflow: int = 10
    auto_create_schema: bool = False

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Plain postgresql:// URLs are rewritten for the asyncpg driver."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @model_validator(mode="after")
    def build_url_from_parts(self) -> "Settings":
        if self.db_host and "database_url" not in self.model_fields_set:
            url = URL.create(
                drivername="postgresql+asyncpg",
                username=self.db_user,
                password=self.db_password or None,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
                query={"ssl": self.db_ssl_mode} if self.db_ssl_mode else {},
            )
            self.database_url = url.render_as_string(hide_password=False)
        return self

    # Enrichment classifiers
    agify_url: str = "https://api.agify.io/"
    genderize_url: str = "https://api.genderize.io/"
    nationalize_url: str = "https://api.nationalize.io/"
    enrichment_timeout_seconds: float = 5.0
    enrichment_concurrent: bool = True

    # Retrieval — 0 disables the bound on limit
    query_max_limit: int = 100

    # API
    app_address: str = "0.0.0.0"
    app_port: int = 3000
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def max_limit(self) -> int | None:
        return self.query_max_limit or None


@lru_cache
def get_settings() -> Settings:
    return Settings()
