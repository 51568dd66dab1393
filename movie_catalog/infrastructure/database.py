"""Database Session Manager — one AsyncSession per unit of work, errors translated.

Invariants:
    - Any exception inside session() rolls the transaction back before propagating
    - IntegrityError surfaces as ConflictError (unique/foreign-key violation)
    - Other SQLAlchemy exceptions surface as DatabaseError; CatalogErrors pass through unchanged
    - Pool sizing applies to server databases only (sqlite uses SQLAlchemy's default pool)

Design Decisions:
    - db_manager is a module singleton set by init_db() from the FastAPI lifespan;
      scheduled jobs and the readiness probe read it through the module attribute
    - expire_on_commit=False: attributes stay readable after commit under AsyncSession
    - A request's unit of work is its session: services flush freely and commit once
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from movie_catalog.core.errors import CatalogError, ConflictError, DatabaseError

logger = logging.getLogger(__name__)


def _pool_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if database_url.startswith("sqlite"):
        return {}
    return dict(
        pool_size=pool_size, max_overflow=max_overflow,
        pool_pre_ping=True, pool_recycle=3600,
    )


def _translate(exc: SQLAlchemyError) -> CatalogError:
    """Map a SQLAlchemy failure onto the catalog error it means for clients."""
    if isinstance(exc, IntegrityError):
        logger.warning(f"Integrity violation: {exc.orig}")
        return ConflictError("Resource conflicts with existing data")
    if isinstance(exc, OperationalError):
        operation, message = "execute", "Connection or operational error"
    elif isinstance(exc, DBAPIError):
        operation, message = "query", "Database driver error"
    else:
        operation, message = "unknown", "Database operation failed"
    logger.error(f"{type(exc).__name__} during {operation}: {exc}")
    return DatabaseError(message, operation)


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that roll back on failure."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **_pool_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise _translate(e) from e
        except BaseException:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """SELECT 1 round trip; False on any failure (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
