"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on SQLAlchemy errors (no partial commits leak)
    - Connection pool is bounded (pool_size + max_overflow) with a bounded connection lifetime
    - Callers block up to pool_timeout waiting for a free connection
    - All SQLAlchemy exceptions mapped to DatabaseError / ConstraintViolationError (core/errors.py)

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (no global import side effects)
    - expire_on_commit=False: stores copy rows into dataclasses after commit
    - translate_errors() is shared by the session manager, the stores and the
      transaction runner so the mapping lives in one place
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

import task_controller.models  # noqa: F401  (populates Base.metadata)
from task_controller.core.errors import ConstraintViolationError, DatabaseError
from task_controller.db.base import Base

logger = logging.getLogger(__name__)


def map_db_error(exc: SQLAlchemyError, operation: str) -> DatabaseError:
    """Translate a SQLAlchemy exception into the store failure taxonomy."""
    if isinstance(exc, IntegrityError):
        logger.error(f"DB integrity error: {exc}", extra={"operation": operation})
        return ConstraintViolationError(operation)
    if isinstance(exc, OperationalError):
        logger.error(f"DB operational error: {exc}", extra={"operation": operation})
        return DatabaseError("Connection or operational error", operation)
    if isinstance(exc, DBAPIError):
        logger.error(f"DB driver error: {exc}", extra={"operation": operation})
        return DatabaseError("Database driver error", operation)
    logger.error(f"SQLAlchemy error: {exc}", extra={"operation": operation})
    return DatabaseError("Database operation failed", operation)


@asynccontextmanager
async def translate_errors(operation: str) -> AsyncGenerator[None, None]:
    """Re-raise SQLAlchemy errors raised in the block as DatabaseError."""
    try:
        yield
    except SQLAlchemyError as e:
        raise map_db_error(e, operation) from e


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 25,
        max_overflow: int = 0,
        pool_recycle: int = 300,
        pool_timeout: float = 30.0,
        connect_args: dict | None = None,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_recycle=pool_recycle,
            pool_timeout=pool_timeout,
            pool_pre_ping=True,
            connect_args=connect_args or {},
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        """Wrap an already-built engine (tests, scripts)."""
        manager = cls.__new__(cls)
        manager.engine = engine
        manager._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )
        return manager

    def new_session(self) -> AsyncSession:
        """Bare session; the caller owns commit/rollback/close."""
        return self._session_factory()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise map_db_error(e, "session") from e
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create all tables that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    def pool_status(self) -> dict:
        """Connection pool occupancy, for the readiness probe."""
        pool = self.engine.sync_engine.pool
        status = {"class": type(pool).__name__}
        for counter in ("size", "checkedin", "checkedout", "overflow"):
            read = getattr(pool, counter, None)
            if callable(read):
                status[counter] = read()
        return status

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency for the process-wide session manager."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager
