"""Task-Tag Store — SQL persistence for association rows.

Invariants:
    - create/delete_by_task run on the caller's transaction handle
    - list_by_task() returns rows in the store's natural order (no ORDER BY)
    - Referential integrity is left to the foreign keys on task_tag
"""

from typing import Any

from sqlalchemy import delete, insert, select

from task_controller.core.domain_types import TagId, TaskId, TaskTag
from task_controller.infrastructure.database import (
    DatabaseSessionManager, translate_errors,
)
from task_controller.models.task_tag import TaskTagModel


class SqlTaskTagStore:
    """TaskTagStore backed by the `task_tag` table."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def create(self, tx: Any, task_id: TaskId, tag_id: TagId) -> None:
        async with translate_errors("insert task_tag"):
            await tx.session.execute(
                insert(TaskTagModel).values(task_id=task_id, tag_id=tag_id),
            )

    async def list_by_task(self, task_id: TaskId) -> list[TaskTag]:
        async with self._db.session() as db:
            async with translate_errors("select task_tag"):
                result = await db.execute(
                    select(TaskTagModel).where(TaskTagModel.task_id == task_id),
                )
                return [
                    TaskTag(task_id=TaskId(row.task_id), tag_id=TagId(row.tag_id))
                    for row in result.scalars().all()
                ]

    async def delete_by_task(self, tx: Any, task_id: TaskId) -> None:
        async with translate_errors("delete task_tag"):
            await tx.session.execute(
                delete(TaskTagModel)
                .where(TaskTagModel.task_id == task_id)
                .execution_options(synchronize_session=False),
            )
