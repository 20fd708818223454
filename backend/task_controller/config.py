"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - DATABASE_URL, when set, wins over the POSTGRES_* parts

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box against a local Postgres
    - Pool defaults: 25 connections, no overflow, 5 minute lifetime; callers wait
      up to pool_timeout for a free connection instead of failing fast
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Managed hosts hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_db: str = "task"
    postgres_ssl_mode: str = "disable"

    database_pool_size: int = 25
    database_max_overflow: int = 0
    database_pool_recycle_seconds: int = 300
    database_pool_timeout_seconds: float = 30.0
    database_create_schema: bool = False

    # Task/Tag behaviour
    batch_tag_lookup: bool = False
    default_task_limit: int = 10
    default_tag_limit: int = 100

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def sqlalchemy_url(self) -> str:
        """Async connection URL for SQLAlchemy."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        ).render_as_string(hide_password=False)

    @property
    def connect_args(self) -> dict:
        """Driver connect arguments (asyncpg takes ssl as a mode string)."""
        if self.database_url or self.postgres_ssl_mode == "disable":
            return {}
        return {"ssl": self.postgres_ssl_mode}


@lru_cache
def get_settings() -> Settings:
    return Settings()
