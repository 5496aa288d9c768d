"""
Shopfront Backend: Database Session Management
==============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   build_engine() creates the engine with connection pooling; the
       application factory stores the engine and its session factory on
       `app.state`; get_db_session() hands each request its own session,
       committing on success and rolling back on error.
Who:   Engine/factory built by shopfront.main.create_app() and the seed loader;
       sessions injected into route handlers via Depends().
When:  Engine is created once per application; sessions are created per request.

Connection Pooling Strategy (server databases only):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

SQLite (used by the test-suite and for local runs) keeps SQLAlchemy's default
pool and gets `PRAGMA foreign_keys=ON` on every connection so the join
table's ON DELETE rules behave as they do on PostgreSQL.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from shopfront.config import Settings
from shopfront.exceptions import DatabaseError, ShopfrontError

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this metadata, which Alembic and the seed
    loader use to create the schema.
    """
    pass


# ── Engine & Session Factory ──────────────────────────────────────────────
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    Args:
        settings: Application settings (URL, pool sizing, echo flag)

    Returns:
        AsyncEngine managing the connection pool
    """
    engine = create_async_engine(settings.database_url, **settings.engine_options())
    if settings.is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the AsyncSession factory bound to `engine`.

    expire_on_commit=False keeps the objects a handler has serialized usable
    after get_db_session() commits.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory on `app.state`
        2. Yields it to the route handler (the handler performs queries)
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Rollback on error makes a multi-statement request (e.g. "delete old
    tags, insert new tags") all-or-nothing at the store.

    Routes must depend on it with scope="function" so the commit finishes
    before the response is sent; a failed commit is raised as DatabaseError
    and rendered as a 500 instead of reaching the client as a success.

    Example usage in a route:
        @router.get("/products")
        async def list_products(db: AsyncSession = Depends(get_db_session, scope="function")):
            ...
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except ShopfrontError:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Database error committing transaction: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="An error occurred while saving changes.",
                context={"error_type": type(e).__name__},
            )
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(engine: AsyncEngine) -> None:
    """Create every table registered on Base.metadata that does not exist yet."""
    # Imported for its side effect: registers all models on Base.metadata
    import shopfront.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
