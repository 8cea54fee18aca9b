"""Database engine and session factory configuration.

Provides async database connectivity for the SQL record store. Engines are
built explicitly from settings by the storage factory; nothing here connects
at import time.
"""

from typing import Optional

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from config import Settings
from models import Base


def is_sqlite_url(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


def build_engine(database_url: str, settings: Optional[Settings] = None) -> AsyncEngine:
    """Create an async engine for ``database_url``.

    Pool settings only apply to PostgreSQL (not SQLite). SQLite connections
    get foreign key enforcement switched on, which SQLite leaves off by default.

    Args:
        database_url: Async SQLAlchemy URL (postgresql+asyncpg://, sqlite+aiosqlite://)
        settings: Pool sizing and echo options; defaults apply when omitted

    Returns:
        AsyncEngine: Configured engine
    """
    settings = settings or Settings()

    engine_kwargs = {
        "echo": settings.DB_ECHO,
    }

    if is_sqlite_url(database_url):
        # Wait on competing writers instead of failing fast with "database is locked"
        engine_kwargs["connect_args"] = {"timeout": settings.DB_POOL_TIMEOUT}
    else:
        engine_kwargs["pool_pre_ping"] = True  # Verify connections before using
        engine_kwargs["pool_size"] = settings.DB_POOL_SIZE
        engine_kwargs["max_overflow"] = settings.DB_MAX_OVERFLOW
        engine_kwargs["pool_timeout"] = settings.DB_POOL_TIMEOUT

    engine = create_async_engine(database_url, **engine_kwargs)

    if is_sqlite_url(database_url):
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory for the SQL record store.

    ``expire_on_commit=False`` keeps returned rows readable after their
    transaction has committed and the session is gone.
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
