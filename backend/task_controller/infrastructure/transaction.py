"""Transaction Runner — scoped, all-or-nothing units of work over one AsyncSession.

Invariants:
    - Exactly one of commit / rollback runs per scope, on every exit path
    - Cancellation (asyncio.CancelledError) rolls back like any other failure
    - Rollback success → the original error propagates unchanged
    - Rollback failure → TransactionError carrying both errors, except for
      cancellation and other BaseExceptions, which propagate unchanged
    - The handle is closed when the scope ends; later use raises TransactionClosedError

Design Decisions:
    - Async context manager as the primary form, run(callback) as a thin wrapper:
      call sites read top-to-bottom and the scope is visible in the indentation
    - Fresh session per scope: a transaction never shares its connection with reads
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from task_controller.core.errors import TransactionClosedError, TransactionError
from task_controller.infrastructure.database import (
    DatabaseSessionManager, translate_errors,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransactionHandle:
    """Transaction-scoped access to the session. Dead once its scope ends."""

    def __init__(self, session: AsyncSession):
        self._session: AsyncSession | None = session

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise TransactionClosedError()
        return self._session

    @property
    def closed(self) -> bool:
        return self._session is None

    def close(self) -> None:
        self._session = None


class SqlTransactionRunner:
    """Runs units of work inside one database transaction."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[TransactionHandle, None]:
        session = self._db.new_session()
        handle = TransactionHandle(session)
        try:
            try:
                yield handle
            except BaseException as exc:
                await _rollback(session, exc)
                raise
            async with translate_errors("commit"):
                await session.commit()
        finally:
            handle.close()
            await session.close()

    async def run(self, unit_of_work: Callable[[TransactionHandle], Awaitable[T]]) -> T:
        """Callback form of transaction()."""
        async with self.transaction() as tx:
            return await unit_of_work(tx)


async def _rollback(session: AsyncSession, exc: BaseException) -> None:
    try:
        await session.rollback()
    except Exception as rollback_exc:
        logger.error(
            f"Rollback failed after {type(exc).__name__}: {rollback_exc}",
            extra={"operation": "rollback"},
        )
        if not isinstance(exc, Exception):
            # CancelledError, KeyboardInterrupt: the caller must still see them
            return
        raise TransactionError(exc, rollback_exc) from exc
    logger.debug(f"Transaction rolled back after {type(exc).__name__}")
