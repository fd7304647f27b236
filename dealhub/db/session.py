"""
db/session.py
-------------
Async SQLAlchemy engine and session factory.

Design decisions:
  - AsyncEngine with asyncpg driver for non-blocking I/O; aiosqlite is
    accepted for local runs and tests.
  - PostgreSQL sessions run with timezone=UTC so date(viewed_at) buckets
    analytics by UTC calendar day.
  - SQLite connections switch foreign keys on, otherwise ON DELETE CASCADE
    is silently ignored.
  - expire_on_commit=False: avoids lazy-load errors after commit in async
    context (attributes are already loaded, no implicit SELECT needed).
"""

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dealhub.core.config import settings


def _engine_options(url: str) -> dict[str, Any]:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,
        "pool_recycle": 3600,             # Recycle connections every hour
        "connect_args": {"server_settings": {"timezone": "UTC"}},
    }


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Register a connect hook that turns on FK enforcement for SQLite."""
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ── Engine ────────────────────────────────────────────────────────────────────
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,          # Log SQL in development
    **_engine_options(settings.DATABASE_URL),
)
enable_sqlite_foreign_keys(engine)

# ── Session Factory ───────────────────────────────────────────────────────────
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncSession:  # type: ignore[return]
    """
    FastAPI dependency that yields a database session.
    The session is committed when the request finishes,
    and rolled back on exceptions.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
