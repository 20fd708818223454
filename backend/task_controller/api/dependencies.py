"""Dependencies — builds services per request from the process-wide session manager.

Invariants:
    - Stores and runners are cheap wrappers; a fresh set per request shares the pool
    - db_manager is read at call time so tests can swap it after import
"""

from fastapi import Depends

from task_controller.config import Settings, get_settings
from task_controller.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from task_controller.infrastructure.tag_store import SqlTagStore
from task_controller.infrastructure.task_store import SqlTaskStore
from task_controller.infrastructure.task_tag_store import SqlTaskTagStore
from task_controller.infrastructure.transaction import SqlTransactionRunner
from task_controller.services.tag_service import TagService
from task_controller.services.task_orchestrator import TaskOrchestrator


def get_task_orchestrator(
    db: DatabaseSessionManager = Depends(get_db_manager),
    settings: Settings = Depends(get_settings),
) -> TaskOrchestrator:
    return TaskOrchestrator(
        tasks=SqlTaskStore(db),
        tags=SqlTagStore(db),
        task_tags=SqlTaskTagStore(db),
        transactions=SqlTransactionRunner(db),
        batch_tag_lookup=settings.batch_tag_lookup,
        default_limit=settings.default_task_limit,
    )


def get_tag_service(
    db: DatabaseSessionManager = Depends(get_db_manager),
    settings: Settings = Depends(get_settings),
) -> TagService:
    return TagService(SqlTagStore(db), default_limit=settings.default_tag_limit)
