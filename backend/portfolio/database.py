"""
Portfolio API — Database Engine & Session Management
=====================================================

What:  Async SQLAlchemy engine construction, ORM base class and the
       per-request session dependency.
How:   The application lifespan calls `create_engine()` once and stores the
       engine and its session factory on `app.state`. `get_db_session`
       reads the factory from there, so tests (or other entry points) can
       install their own engine without touching module globals.
Why:   The engine belongs to the application lifecycle, not to import
       time; importing a model module never opens a pool.
Who:   Used by route handlers via FastAPI's dependency injection system.
"""

from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from portfolio.config import Settings, settings as default_settings


class Base(DeclarativeBase):
    """Base class for all ORM models; its metadata drives Alembic."""
    pass


def create_engine(config: Optional[Settings] = None) -> AsyncEngine:
    """
    Build the async engine from settings.

    Pool sizing only applies to server databases; SQLite URLs (used by the
    test suite) get the driver's default pool.
    """
    config = config or default_settings
    kwargs = {
        "echo": config.log_level == "DEBUG",
    }
    if not config.database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(config.database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows stay readable after the request commits
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def db_error_message(exc: SQLAlchemyError) -> str:
    """The driver's own message when there is one, else SQLAlchemy's."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the factory on app.state (no connection yet;
           one is checked out on the first query)
        2. Yields it to the route handler
        3. On error: rolls back whatever the handler left uncommitted
        4. Always: closes the session (returns the connection to the pool)

    Why no commit here:
        The exit half of a yield dependency runs after the response has
        been sent. A commit failing there would reach the client as a 200
        for a row that was never stored. Writes therefore commit inside the
        service call (see ProjectService/BookingService), and a commit
        fault becomes the request's 500.

    Example usage in a route:
        @router.get("/projects")
        async def list_projects(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            # Any failure, DB or not, discards the partial transaction
            await session.rollback()
            raise
        finally:
            # Closing also rolls back anything left uncommitted
            await session.close()
