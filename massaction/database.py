"""
Database access for the mass-action service.

The section select endpoints only read course structure, so the module hands
out plain pooled connections. Alembic gets a psycopg2 URL built from the
same DATABASE_URL.
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

ASYNC_DRIVER = "postgresql+asyncpg"
SYNC_DRIVER = "postgresql"

_engine: AsyncEngine | None = None


def _with_driver(database_url: str, driver: str) -> str:
    """Swap the scheme of a postgres URL, e.g. postgresql:// -> postgresql+asyncpg://"""
    scheme, sep, rest = database_url.partition("://")
    if not sep or not scheme.startswith("postgresql"):
        raise ValueError(f"DATABASE_URL is not a PostgreSQL URL: {scheme}://...")
    return f"{driver}://{rest}"


def _require_database_url() -> str:
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        raise ValueError("DATABASE_URL environment variable must be set.")
    return database_url


def get_async_database_url() -> str:
    """DATABASE_URL using the asyncpg driver."""
    return _with_driver(_require_database_url(), ASYNC_DRIVER)


def get_sync_database_url() -> str:
    """DATABASE_URL using psycopg2, for Alembic migrations."""
    return _with_driver(_require_database_url(), SYNC_DRIVER)


def get_engine() -> AsyncEngine:
    """Get or create the async engine singleton."""
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            get_async_database_url(),
            echo=os.environ.get("SQL_ECHO", "").lower() == "true",
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=1800,  # seconds
        )
    return _engine


@asynccontextmanager
async def get_connection() -> AsyncGenerator[AsyncConnection, None]:
    """
    Borrow a connection from the pool.

    Usage:
        async with get_connection() as conn:
            course = await get_course(conn, course_id)
    """
    async with get_engine().connect() as conn:
        yield conn


async def close_engine() -> None:
    """Dispose of the pool. Called on shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


def is_configured() -> bool:
    return bool(os.environ.get("DATABASE_URL"))
