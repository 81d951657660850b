"""
StackIt Backend: Database Session Management
=============================================

What:  Async SQLAlchemy engine, session factory, declarative base and
       session helpers.
Why:   The SQL repositories and the health check share one connection pool.
How:   `session_scope()` commits on success and rolls back on error. The
       request dependency in dependencies.py opens one scope per request.

Connection Pooling:
    pool_size=5, max_overflow=5 by default. The Q&A workload is small reads
    plus occasional single-row writes; the pool stays well under PostgreSQL's
    default max_connections so migrations and psql sessions still fit.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from stackit.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    """Pool options apply to server databases; SQLite picks its own pool."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=3600,
        )
    return options


engine = create_async_engine(settings.database_url, **_engine_options())

# expire_on_commit=False: entities are converted to pydantic after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Transactional scope around a series of operations.

    Commits when the block exits normally, rolls back and re-raises on any
    exception, and always returns the connection to the pool.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def check_connection() -> bool:
    """
    Run `SELECT 1` against the configured database.

    Returns True when the database answered. Failures are logged and reported
    as False; callers decide whether that is fatal.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning("Database connection check failed: %s", str(e))
        return False


async def dispose_engine() -> None:
    """Close all pooled connections (application shutdown)."""
    await engine.dispose()
