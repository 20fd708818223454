"""Root conftest — shared test configuration and SQLite-backed fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - db_manager is swapped for the test manager while the HTTP client is open

Design Decisions:
    - SQLite in-memory through aiosqlite: fast, no external dependency
    - StaticPool: every session shares the one in-memory connection, so data
      written by one session is visible to the next
"""

import os

# Never point tests at a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

import task_controller.infrastructure.database as db_module
from task_controller.db.base import Base
from task_controller.infrastructure.database import DatabaseSessionManager
from task_controller.infrastructure.tag_store import SqlTagStore
from task_controller.infrastructure.task_store import SqlTaskStore
from task_controller.infrastructure.task_tag_store import SqlTaskTagStore
from task_controller.infrastructure.transaction import SqlTransactionRunner
from task_controller.main import app
from task_controller.services.tag_service import TagService
from task_controller.services.task_orchestrator import TaskOrchestrator


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def sql_orchestrator(test_db_manager):
    return TaskOrchestrator(
        tasks=SqlTaskStore(test_db_manager),
        tags=SqlTagStore(test_db_manager),
        task_tags=SqlTaskTagStore(test_db_manager),
        transactions=SqlTransactionRunner(test_db_manager),
    )


@pytest.fixture
def sql_tag_service(test_db_manager):
    return TagService(SqlTagStore(test_db_manager))


@pytest.fixture
async def client(test_db_manager):
    """FastAPI test client bound to the test database."""
    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager
