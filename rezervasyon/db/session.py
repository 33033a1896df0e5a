"""
Async engine and session factory.

The engine is a process-wide handle created at import time, initialised by
init_db() on startup and disposed by close_db() on shutdown. Request
handlers receive sessions through the get_db dependency.
"""

from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from rezervasyon.core.config import get_settings
from rezervasyon.core.logging import get_logger
from rezervasyon.db.base import Base

logger = get_logger(__name__)
settings = get_settings()


def build_engine(url: str, echo: bool = False, **engine_kwargs) -> AsyncEngine:
    if make_url(url).get_backend_name() == "sqlite":
        engine = create_async_engine(url, echo=echo, **engine_kwargs)

        # SQLite leaves foreign keys off unless asked per connection
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_async_engine(
        url,
        echo=echo,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
        **engine_kwargs,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session per request; commit on success, roll back on error."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(bind: AsyncEngine = engine) -> None:
    """Create tables that do not exist yet. Migrations remain the source of truth."""
    import rezervasyon.models  # noqa: F401 - register models on Base.metadata

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_ready", url=bind.url.render_as_string(hide_password=True))


async def close_db(bind: AsyncEngine = engine) -> None:
    await bind.dispose()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for long-lived consumers (streams) that outlive a request."""
    return AsyncSessionLocal
