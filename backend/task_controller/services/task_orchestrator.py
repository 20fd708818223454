"""Task Orchestrator — keeps task rows and their tag associations consistent.

Invariants:
    - create/update/delete each run in ONE transaction scope; any failure rolls back
      every write of that call (no task without its links, no orphan links)
    - Association writes happen in input order and stop at the first failure
    - tags_to_link() decides which links are written: [] or [""]-first writes none
    - update replaces the whole association set (delete all, re-insert), not a diff
    - update never raises ResourceNotFoundError for an unknown id; delete does
    - get/list resolve tags in association-row order; one failed lookup fails the call
    - Store errors propagate verbatim; no retries

Design Decisions:
    - No in-process lock: concurrent updates of one task are last-writer-wins
      under the database's isolation level
    - Sequential per-tag lookups by default; batch_tag_lookup=True swaps in one
      IN (...) query with identical ordering and NotFound behaviour
    - Title is not validated here; the HTTP boundary owns that check
"""

import logging
from datetime import datetime
from typing import Any, Sequence

from task_controller.core.domain_types import (
    NewTask, ResolvedTask, Tag, TagId, Task, TaskChanges, TaskId,
)
from task_controller.core.enforce_params import (
    DEFAULT_TASK_LIMIT, resolve_limit, tags_to_link,
)
from task_controller.core.errors import ResourceNotFoundError
from task_controller.core.identifiers import new_time_ordered_id
from task_controller.core.repository_protocols import (
    TagStore, TaskStore, TaskTagStore, TransactionRunner,
)

logger = logging.getLogger(__name__)


class TaskOrchestrator:
    """Task use cases over the task, tag and task_tag stores."""

    def __init__(
        self,
        tasks: TaskStore,
        tags: TagStore,
        task_tags: TaskTagStore,
        transactions: TransactionRunner,
        batch_tag_lookup: bool = False,
        default_limit: int = DEFAULT_TASK_LIMIT,
    ):
        self._tasks = tasks
        self._tags = tags
        self._task_tags = task_tags
        self._transactions = transactions
        self._batch_tag_lookup = batch_tag_lookup
        self._default_limit = default_limit

    # ─── Mutations ──────────────────────────────────────────────

    async def create_task(
        self,
        title: str,
        description: str | None,
        deadline: datetime | None,
        tag_ids: Sequence[str] | None,
    ) -> TaskId:
        """Insert a task and its tag links atomically. Returns the new id."""
        task_id = TaskId(new_time_ordered_id())
        async with self._transactions.transaction() as tx:
            await self._tasks.create(tx, NewTask(
                id=task_id,
                title=title,
                description=description,
                deadline=deadline,
                is_end=False,
            ))
            await self._link_tags(tx, task_id, tag_ids)
        logger.info("Task created", extra={"task_id": task_id})
        return task_id

    async def update_task(
        self,
        task_id: str,
        title: str,
        description: str | None,
        deadline: datetime | None,
        is_end: bool,
        tag_ids: Sequence[str] | None,
    ) -> bool:
        """Overwrite task fields and replace its tag set atomically."""
        async with self._transactions.transaction() as tx:
            await self._tasks.update(tx, TaskChanges(
                id=TaskId(task_id),
                title=title,
                description=description,
                deadline=deadline,
                is_end=is_end,
            ))
            await self._task_tags.delete_by_task(tx, TaskId(task_id))
            await self._link_tags(tx, TaskId(task_id), tag_ids)
        logger.info("Task updated", extra={"task_id": task_id})
        return True

    async def delete_task(self, task_id: str) -> bool:
        """Remove the task's links, then the task. NotFound if the task is absent."""
        async with self._transactions.transaction() as tx:
            await self._task_tags.delete_by_task(tx, TaskId(task_id))
            await self._tasks.delete(tx, TaskId(task_id))
        logger.info("Task deleted", extra={"task_id": task_id})
        return True

    async def _link_tags(
        self, tx: Any, task_id: TaskId, tag_ids: Sequence[str] | None,
    ) -> None:
        for tag_id in tags_to_link(tag_ids):
            await self._task_tags.create(tx, task_id, tag_id)

    # ─── Reads ──────────────────────────────────────────────────

    async def get_task(self, task_id: str) -> ResolvedTask:
        task = await self._tasks.get(TaskId(task_id))
        return await self._resolve(task)

    async def list_tasks(self, limit: int = 0, offset: int = 0) -> list[ResolvedTask]:
        """Page through tasks; limit 0 means the default page size."""
        tasks = await self._tasks.list(
            resolve_limit(limit, self._default_limit), offset,
        )
        resolved = []
        for task in tasks:
            resolved.append(await self._resolve(task))
        return resolved

    async def _resolve(self, task: Task) -> ResolvedTask:
        links = await self._task_tags.list_by_task(task.id)
        tag_ids = [link.tag_id for link in links]
        if self._batch_tag_lookup:
            tags = await self._fetch_tags_batched(tag_ids)
        else:
            tags = []
            for tag_id in tag_ids:
                tags.append(await self._tags.get(tag_id))
        return ResolvedTask(task=task, tags=tags)

    async def _fetch_tags_batched(self, tag_ids: list[TagId]) -> list[Tag]:
        found = {tag.id: tag for tag in await self._tags.get_many(tag_ids)}
        for tag_id in tag_ids:
            if tag_id not in found:
                raise ResourceNotFoundError("Tag", tag_id)
        return [found[tag_id] for tag_id in tag_ids]
