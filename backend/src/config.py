"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development. Production
    deployments point DATABASE_URL at PostgreSQL (asyncpg driver).

    Environment Variables:
        DATABASE_URL: Async SQLAlchemy connection string
        STORAGE_BACKEND: "sql" (default) or "memory"
        DB_POOL_SIZE / DB_MAX_OVERFLOW / DB_POOL_TIMEOUT: Pool sizing (non-SQLite only)
        DB_ECHO: Echo SQL statements
        DB_AUTO_CREATE: Create missing tables at startup
        NUMBER_ALLOCATION_ATTEMPTS: Retries for document number allocation
        NUMBER_ALLOCATION_BACKOFF: Base backoff in seconds between allocation attempts
        INVOICE_DUE_DAYS: Due date offset for invoices converted from quotes
        SESSION_TTL_SECONDS: Session lifetime
        DEBUG: Enable debug mode (default False)
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
    """

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./bizops.db"
    STORAGE_BACKEND: str = "sql"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_ECHO: bool = False
    DB_AUTO_CREATE: bool = True

    # Document numbering
    NUMBER_ALLOCATION_ATTEMPTS: int = 10
    NUMBER_ALLOCATION_BACKOFF: float = 0.01

    # Quote conversion
    INVOICE_DUE_DAYS: int = 30

    # Sessions
    SESSION_TTL_SECONDS: int = 86_400  # 24 hours

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    ENVIRONMENT: str = "development"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
