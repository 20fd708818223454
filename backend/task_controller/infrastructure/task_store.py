"""Task Store — SQL persistence for task rows.

Invariants:
    - create/update/delete run on the caller's transaction handle; get/list use their own session
    - delete() raises ResourceNotFoundError when no row was removed
    - update() does not check rows affected: an unknown id is a silent no-op
    - list() orders by id, i.e. creation order for UUIDv7 ids

Design Decisions:
    - Core insert/update/delete statements instead of ORM unit-of-work:
      one statement per call, errors surface at the call site, rowcount is available
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, insert, select, update

from task_controller.core.domain_types import NewTask, Task, TaskChanges, TaskId
from task_controller.core.errors import ResourceNotFoundError
from task_controller.infrastructure.database import (
    DatabaseSessionManager, translate_errors,
)
from task_controller.models.task import TaskModel


def _to_task(row: TaskModel) -> Task:
    return Task(
        id=TaskId(row.id),
        title=row.title,
        description=row.description,
        is_end=row.is_end,
        deadline=row.deadline,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlTaskStore:
    """TaskStore backed by the `task` table."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def create(self, tx: Any, task: NewTask) -> None:
        async with translate_errors("insert task"):
            await tx.session.execute(
                insert(TaskModel).values(
                    id=task.id,
                    title=task.title,
                    description=task.description,
                    deadline=task.deadline,
                    is_end=task.is_end,
                ),
            )

    async def get(self, task_id: TaskId) -> Task:
        async with self._db.session() as db:
            async with translate_errors("select task"):
                result = await db.execute(
                    select(TaskModel).where(TaskModel.id == task_id),
                )
                row = result.scalar_one_or_none()
            if row is None:
                raise ResourceNotFoundError("Task", task_id)
            return _to_task(row)

    async def list(self, limit: int, offset: int) -> list[Task]:
        async with self._db.session() as db:
            async with translate_errors("list tasks"):
                result = await db.execute(
                    select(TaskModel)
                    .order_by(TaskModel.id)
                    .limit(limit)
                    .offset(offset),
                )
                return [_to_task(row) for row in result.scalars().all()]

    async def update(self, tx: Any, changes: TaskChanges) -> None:
        async with translate_errors("update task"):
            await tx.session.execute(
                update(TaskModel)
                .where(TaskModel.id == changes.id)
                .values(
                    title=changes.title,
                    description=changes.description,
                    deadline=changes.deadline,
                    is_end=changes.is_end,
                    updated_at=datetime.now(timezone.utc),
                )
                .execution_options(synchronize_session=False),
            )

    async def delete(self, tx: Any, task_id: TaskId) -> None:
        async with translate_errors("delete task"):
            result = await tx.session.execute(
                delete(TaskModel)
                .where(TaskModel.id == task_id)
                .execution_options(synchronize_session=False),
            )
        if result.rowcount == 0:
            raise ResourceNotFoundError("Task", task_id)
